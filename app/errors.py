"""
Service-level errors. Each carries the HTTP status and a stable code; main
registers one exception handler that renders {"detail", "code"}.
"""


class ServiceError(Exception):
    """Base for errors that terminate a request with a client-facing status."""

    status_code = 400
    code = "SERVICE_ERROR"
    default_message = "Request failed"

    def __init__(self, msg: str | None = None):
        self.msg = msg or self.default_message
        super().__init__(self.msg)


class DuplicateEmail(ServiceError):
    code = "DUPLICATE_EMAIL"
    default_message = "Email already registered"


class UserNotFound(ServiceError):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class InvalidPassword(ServiceError):
    code = "INVALID_PASSWORD"
    default_message = "Invalid password"


class MissingToken(ServiceError):
    status_code = 401
    code = "MISSING_TOKEN"
    default_message = "Missing token"


class InvalidToken(ServiceError):
    status_code = 401
    code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"


class BookNotFound(ServiceError):
    status_code = 404
    code = "BOOK_NOT_FOUND"
    default_message = "Book not found"


class AssetNotFound(ServiceError):
    status_code = 404
    code = "ASSET_NOT_FOUND"
    default_message = "File not found"
