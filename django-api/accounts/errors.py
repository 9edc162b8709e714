"""Domain errors for the accounts module."""

from common.errors import DomainError, ErrorCode


class InvalidCredentialsError(DomainError):
    def __init__(self, message: str = "Incorrect email or password") -> None:
        super().__init__(code=ErrorCode.INVALID_CREDENTIALS, message=message)


class AccountDisabledError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ACCOUNT_DISABLED,
            message="Account disabled. Contact an administrator.",
        )
