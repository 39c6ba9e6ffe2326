# Core modules

from .config import settings
from .session import Session, SessionState, SessionResolver
from .query_cache import QueryCache

__all__ = ["settings", "Session", "SessionState", "SessionResolver", "QueryCache"]
