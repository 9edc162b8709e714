"""Domain errors for the tickets module."""

from common.errors import DomainError, ErrorCode


class TicketNotFoundError(DomainError):
    """Raised when a ticket is not found."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        self.ticket_id = ticket_id


class InsufficientStockError(DomainError):
    """Raised when a reservation asks for more units than remain."""

    def __init__(self, label: str, requested: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_STOCK,
            message=f'Not enough stock for "{label}" (requested {requested})',
        )
        self.requested = requested


class TicketInUseError(DomainError):
    """Raised when deleting a ticket that purchases still reference."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_IN_USE,
            message="Ticket is referenced by purchases; deactivate it instead",
        )
        self.ticket_id = ticket_id
