"""
Session Guard

Resolves the session token on each request into an explicit SessionState.
Routes receive the state as a dependency; nothing reads it from globals.
"""

import logging
from typing import Optional

from fastapi import Request

from ..core.config import settings
from ..core.errors import Unauthorized
from ..core.session import SessionResolver, SessionState

logger = logging.getLogger(__name__)


def get_session_resolver() -> SessionResolver:
    """Resolver configured with the auth provider's shared secret"""
    return SessionResolver(
        secret=settings.session_secret,
        algorithm=settings.session_algorithm,
    )


def extract_token(request: Request) -> Optional[str]:
    """Session token from the Authorization header or the session cookie"""
    authorization = request.headers.get("Authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return request.cookies.get(settings.session_cookie_name)


class SessionDependency:
    """
    FastAPI dependency resolving the request's session.

    Use require_customer for endpoints that only make sense for a
    logged-in customer.
    """

    def __init__(self, require_customer: bool = False):
        """
        Args:
            require_customer: If True, reject requests without a customer session
        """
        self.require_customer = require_customer

    async def __call__(self, request: Request) -> SessionState:
        state = get_session_resolver().resolve(extract_token(request))

        if self.require_customer and state.customer is None:
            raise Unauthorized("Customer login required")

        return state


# Dependency instances
current_session = SessionDependency()
require_customer = SessionDependency(require_customer=True)
