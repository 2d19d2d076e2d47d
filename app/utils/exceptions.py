"""
Application exception hierarchy

Every failure the API reports maps onto one of these classes so callers can
tell the kinds apart (and decide whether a retry is safe).

    AppException (base, 500)
    ├── InvalidArgument (400)
    ├── Unauthorized (401)
    ├── Forbidden (403)
    ├── NotFound (404)
    ├── Conflict (409)
    └── Unavailable (500, retryable)
"""
from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors

    Attributes:
        status_code: HTTP status code for the error
        error_type: String identifier for the error kind
        retryable: Whether repeating the same call may succeed
        message: Human-readable error message
        details: Additional context merged into the response body
    """
    status_code = 500
    error_type = 'ApplicationError'
    retryable = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a JSON-serializable dictionary"""
        result = {
            'error': self.error_type,
            'message': self.message,
            'status_code': self.status_code,
            'retryable': self.retryable,
        }
        if self.details:
            result.update(self.details)
        return result

    def __str__(self) -> str:
        return f"{self.error_type}: {self.message}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}('{self.message}', status_code={self.status_code})>"


class InvalidArgument(AppException):
    """Malformed input: bad date, empty reason, empty bulk list (HTTP 400)"""
    status_code = 400
    error_type = 'InvalidArgument'


class Unauthorized(AppException):
    status_code = 401
    error_type = 'Unauthorized'


class Forbidden(AppException):
    status_code = 403
    error_type = 'Forbidden'


class NotFound(AppException):
    """Unknown id or date on read, update or delete (HTTP 404)"""
    status_code = 404
    error_type = 'NotFound'


class Conflict(AppException):
    """Duplicate blocked date, or booking onto a blocked date (HTTP 409)"""
    status_code = 409
    error_type = 'Conflict'


class Unavailable(AppException):
    """
    The database could not be reached or rejected the operation (HTTP 500)

    The only kind a caller may retry without deduplicating on its side.
    """
    status_code = 500
    error_type = 'Unavailable'
    retryable = True
