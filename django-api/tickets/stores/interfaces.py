"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from common.value_objects import Money
from tickets.domain import TicketCategory, TicketDefinition, TicketId, TicketStats


class TicketStore(ABC):
    """Interface for ticket persistence operations."""

    @abstractmethod
    def list_tickets(
        self,
        category: TicketCategory | None = None,
        available_only: bool = True,
    ) -> list[TicketDefinition]:
        """Return tickets ordered by price ascending."""
        ...

    @abstractmethod
    def get_ticket(self, ticket_id: TicketId) -> TicketDefinition | None:
        """Return a ticket by ID, or None if not found."""
        ...

    @abstractmethod
    def save_ticket(self, ticket: TicketDefinition) -> TicketDefinition:
        """Insert a new ticket, or fully overwrite an existing one."""
        ...

    @abstractmethod
    def update_fields(self, ticket: TicketDefinition, fields: Iterable[str]) -> TicketDefinition:
        """Write only the named editable fields of `ticket` and return the stored state.

        Columns not named (stock in particular) keep whatever concurrent
        updates left there.
        """
        ...

    @abstractmethod
    def delete_ticket(self, ticket_id: TicketId) -> None:
        """Hard-delete a ticket.

        Raises:
            TicketInUseError: If purchase lines still reference it.
        """
        ...

    @abstractmethod
    def set_availability(self, ticket_id: TicketId, is_available: bool) -> TicketDefinition:
        """Flip the sale flag without touching stock or counters."""
        ...

    @abstractmethod
    def decrement_stock(self, ticket_id: TicketId, quantity: int) -> bool:
        """Atomically take `quantity` units if at least that many remain.

        Unlimited tickets always succeed without change. Returns False when
        the bounded stock is below `quantity` at the time of the update.
        """
        ...

    @abstractmethod
    def increment_stock(self, ticket_id: TicketId, quantity: int) -> None:
        """Atomically return `quantity` units; unlimited tickets are untouched."""
        ...

    @abstractmethod
    def add_sale(self, ticket_id: TicketId, quantity: int, amount: Money) -> None:
        """Atomically bump the purchase counter and revenue."""
        ...

    @abstractmethod
    def popular_tickets(self, limit: int) -> list[TicketDefinition]:
        """Return available tickets ordered by purchase count descending."""
        ...

    @abstractmethod
    def ticket_stats(self) -> TicketStats:
        ...
