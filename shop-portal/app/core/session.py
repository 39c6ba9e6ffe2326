"""Session resolution and access decisions for portal users"""

import logging
from datetime import datetime, timedelta, timezone
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import jwt

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Permission tier carried on the session"""
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    OPERATOR = "OPERATOR"
    CUSTOMER = "CUSTOMER"


class UserType(str, Enum):
    """Which side of the application the user belongs to"""
    CUSTOMER = "customer"
    ADMIN = "admin"


STAFF_ROLES = frozenset({Role.OWNER, Role.ADMIN, Role.OPERATOR})


@dataclass(frozen=True)
class Session:
    """Identity resolved from a session token"""
    user_id: str
    email: str
    display_name: str
    role: Role
    user_type: UserType

    @property
    def is_customer(self) -> bool:
        return self.user_type == UserType.CUSTOMER

    @property
    def is_staff(self) -> bool:
        return self.user_type == UserType.ADMIN

    def has_role(self, roles: frozenset) -> bool:
        return self.role in roles


class SessionStatus(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class SessionState:
    """Tagged session state: loading, anonymous or authenticated"""
    status: SessionStatus
    session: Optional[Session] = None

    @classmethod
    def loading(cls) -> "SessionState":
        return cls(status=SessionStatus.LOADING)

    @classmethod
    def anonymous(cls) -> "SessionState":
        return cls(status=SessionStatus.ANONYMOUS)

    @classmethod
    def authenticated(cls, session: Session) -> "SessionState":
        return cls(status=SessionStatus.AUTHENTICATED, session=session)

    @property
    def is_loading(self) -> bool:
        return self.status == SessionStatus.LOADING

    @property
    def is_authenticated(self) -> bool:
        return self.status == SessionStatus.AUTHENTICATED

    @property
    def customer(self) -> Optional[Session]:
        """The session if it belongs to a customer"""
        if self.is_authenticated and self.session.is_customer:
            return self.session
        return None


class PageAccess(str, Enum):
    """Routing decision for a customer page"""
    WAIT = "wait"
    ALLOW = "allow"
    LOGIN = "login"
    STAFF_DASHBOARD = "staff_dashboard"


def customer_page_access(state: SessionState) -> PageAccess:
    """
    Decide what a customer page should do for a session.

    Loading never redirects; only an explicitly anonymous state goes to login.
    """
    if state.is_loading:
        return PageAccess.WAIT
    if not state.is_authenticated:
        return PageAccess.LOGIN
    if state.session.is_staff:
        return PageAccess.STAFF_DASHBOARD
    if state.session.is_customer:
        return PageAccess.ALLOW
    return PageAccess.LOGIN


class SessionResolver:
    """Resolves signed session tokens issued by the auth provider"""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def resolve(self, token: Optional[str]) -> SessionState:
        """Resolve a token into a session state; anything invalid is anonymous"""
        if not token:
            return SessionState.anonymous()

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            logger.info("Session token expired")
            return SessionState.anonymous()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected session token: {e}")
            return SessionState.anonymous()

        try:
            session = Session(
                user_id=str(payload["sub"]),
                email=payload.get("email", ""),
                display_name=payload.get("name", ""),
                role=Role(payload["role"]),
                user_type=UserType(payload["user_type"]),
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Session token has invalid claims: {e}")
            return SessionState.anonymous()

        return SessionState.authenticated(session)

    def issue(self, session: Session, expires_in: timedelta = timedelta(hours=24)) -> str:
        """Sign a token for a session, as the auth provider does"""
        payload = {
            "sub": session.user_id,
            "email": session.email,
            "name": session.display_name,
            "role": session.role.value,
            "user_type": session.user_type.value,
            "exp": datetime.now(timezone.utc) + expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)
