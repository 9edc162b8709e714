"""Error taxonomy shared by every app.

Each app defines its own `DomainError` subclasses; handlers never build HTTP
error bodies themselves, `common.exception_handler` does it from the code.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_ID = "INVALID_ID"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    PURCHASE_NOT_FOUND = "PURCHASE_NOT_FOUND"
    ARTWORK_NOT_FOUND = "ARTWORK_NOT_FOUND"
    CODE_NOT_FOUND = "CODE_NOT_FOUND"
    UNKNOWN_TICKET = "UNKNOWN_TICKET"
    TICKET_UNAVAILABLE = "TICKET_UNAVAILABLE"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_STATE = "INVALID_STATE"
    ARTWORK_UNAVAILABLE = "ARTWORK_UNAVAILABLE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    DUPLICATE_KEY = "DUPLICATE_KEY"
    DUPLICATE_CODE = "DUPLICATE_CODE"
    TICKET_IN_USE = "TICKET_IN_USE"
    ENCODING_FAILED = "ENCODING_FAILED"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationFailedError(DomainError):
    """Raised when a value violates a field constraint."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_FAILED, message=message)


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.INVALID_ID, message="Invalid ID format")


class DuplicateKeyError(DomainError):
    """Raised when a unique field collides in the store."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_KEY,
            message=f"A record with this {field} already exists",
        )
        self.field = field


class DuplicateCodeError(DomainError):
    """Raised when a freshly generated scan code is already taken.

    Retryable: callers generate a new code and try again.
    """

    def __init__(self, code_value: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_CODE,
            message="Could not allocate a unique code",
        )
        self.code_value = code_value


class EncodingFailedError(DomainError):
    """Raised when the QR encoder cannot produce an image."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ENCODING_FAILED,
            message="QR code generation failed",
        )
