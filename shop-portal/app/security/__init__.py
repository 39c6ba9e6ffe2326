# Request security

from .session_guard import current_session, require_customer, SessionDependency

__all__ = ["current_session", "require_customer", "SessionDependency"]
