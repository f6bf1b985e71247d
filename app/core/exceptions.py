"""
Domain errors raised by services and converted to HTTP responses in app.main.
"""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        self.detail = detail or self.default_detail
        self.errors = errors
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"detail": self.detail}
        if self.errors:
            body["errors"] = self.errors
        return body


class UnauthorizedError(AppError):
    status_code = 401
    default_detail = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    default_detail = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_detail = "Not found"


class BadRequestError(AppError):
    status_code = 400
    default_detail = "Bad request"


class RequestValidationFailed(BadRequestError):
    default_detail = "Validation failed"


class IntegrationError(AppError):
    """A third-party provider call failed."""
    status_code = 502
    default_detail = "Integration request failed"

    def __init__(self, detail: Optional[str] = None, fallback: Optional[str] = None):
        super().__init__(detail)
        self.fallback = fallback

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.fallback:
            body["fallback"] = self.fallback
        return body


class IntegrationUnavailableError(IntegrationError):
    """The integration is required but not configured."""
    status_code = 503
    default_detail = "Integration is not configured"


class InternalError(AppError):
    status_code = 500
