"""Error taxonomy shared by routes, services and controllers"""

from typing import Any, Optional


class PortalError(Exception):
    """Base exception for user-facing portal errors"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Response body for this error"""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body

    @classmethod
    def from_response(cls, status_code: int, body: Any) -> "PortalError":
        """Rebuild an error from a portal JSON error response"""
        message = None
        details = None
        if isinstance(body, dict):
            message = body.get("error") or body.get("detail")
            details = body.get("details")

        error_class = next(
            (c for c in _ERRORS_BY_STATUS if c.status_code == status_code),
            InternalError,
        )
        error = error_class(message, details)
        error.status_code = status_code
        return error


class BadRequest(PortalError):
    status_code = 400
    default_message = "Bad request"


class Unauthorized(PortalError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(PortalError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(PortalError):
    status_code = 404
    default_message = "Not found"


class ServiceUnavailable(PortalError):
    """Required external configuration is missing"""
    status_code = 500
    default_message = "Service not configured"


class UploadFailed(PortalError):
    """The media store rejected or errored on an upload"""
    status_code = 500
    default_message = "Image upload failed"


class InternalError(PortalError):
    status_code = 500
    default_message = "Internal server error"


_ERRORS_BY_STATUS = (BadRequest, Unauthorized, Forbidden, NotFound)
