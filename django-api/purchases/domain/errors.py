"""Domain errors for the purchases module."""

from common.errors import DomainError, ErrorCode


class PurchaseNotFoundError(DomainError):
    """Raised when a purchase does not exist or belongs to someone else."""

    def __init__(self, purchase_id: str) -> None:
        super().__init__(
            code=ErrorCode.PURCHASE_NOT_FOUND,
            message="Purchase not found",
        )
        self.purchase_id = purchase_id


class CodeNotFoundError(DomainError):
    def __init__(self, code_value: str) -> None:
        super().__init__(
            code=ErrorCode.CODE_NOT_FOUND,
            message="Unknown redemption code",
        )
        self.code_value = code_value


class UnknownTicketError(DomainError):
    """Raised when a purchase line names a ticket that does not exist."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_TICKET,
            message=f"Ticket {ticket_id} not found",
        )
        self.ticket_id = ticket_id


class TicketUnavailableError(DomainError):
    """Raised when a ticket is off sale or short of stock for a line."""

    def __init__(self, label: str, quantity: int) -> None:
        super().__init__(
            code=ErrorCode.TICKET_UNAVAILABLE,
            message=f'Ticket "{label}" is not available in quantity {quantity}',
        )
        self.quantity = quantity


class InvalidStateError(DomainError):
    """Raised when a status transition is not allowed from the current status."""

    def __init__(self, action: str, status: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATE,
            message=f"Cannot {action} a purchase that is {status}",
        )
        self.status = status
