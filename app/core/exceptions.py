"""
Domain exceptions translated to HTTP responses by the handler in app.main.
"""


class LibraryError(Exception):
    """Base class for errors raised by the service layer."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(LibraryError):
    """Missing or malformed input."""
    status_code = 400


class ConstraintViolation(LibraryError):
    """A uniqueness rule was violated."""
    status_code = 400

    def __init__(self, message: str, constraint: str):
        super().__init__(message)
        self.constraint = constraint


class NotFound(LibraryError):
    status_code = 404


class AuthenticationRequired(LibraryError):
    status_code = 401


class PermissionDenied(LibraryError):
    status_code = 403


class ExternalServiceError(LibraryError):
    """An image host or email provider call failed."""
    status_code = 500
