"""Ticket catalogue service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
import uuid
from dataclasses import replace
from typing import Any, Mapping

from common.errors import InvalidIdError, ValidationFailedError
from common.value_objects import Money
from tickets.domain import TicketCategory, TicketDefinition, TicketId, TicketStats
from tickets.domain.errors import TicketNotFoundError
from tickets.domain.value_objects import stock_from_count
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "label",
    "description",
    "category",
    "price",
    "stock",
    "is_available",
    "validity_days",
    "benefits",
    "restrictions",
    "min_age",
    "max_age",
)


def parse_category(value: str | None) -> TicketCategory | None:
    if value in (None, ""):
        return None
    try:
        return TicketCategory(value)
    except ValueError as exc:
        raise ValidationFailedError(f"Unknown ticket category: {value}") from exc


def _domain_values(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Convert validated request values into domain field values."""
    values = {}
    for name in EDITABLE_FIELDS:
        if name not in fields:
            continue
        value = fields[name]
        if name == "category":
            value = TicketCategory(value)
        elif name == "price":
            value = Money(value)
        elif name == "stock":
            value = stock_from_count(value)
        elif name in ("benefits", "restrictions"):
            value = tuple(item.strip() for item in value if item and item.strip())
        values[name] = value
    return values


class TicketService:
    """Service for ticket catalogue operations."""

    def __init__(self, store: TicketStore) -> None:
        self._store = store

    def list_tickets(self, category: str | None = None) -> list[TicketDefinition]:
        """Return tickets currently on sale, cheapest first."""
        return self._store.list_tickets(category=parse_category(category), available_only=True)

    def get_ticket(self, ticket_id: str) -> TicketDefinition:
        """Return a ticket by ID.

        Raises:
            InvalidIdError: If the ticket_id is not a valid UUID.
            TicketNotFoundError: If the ticket does not exist.
        """
        try:
            parsed = TicketId.from_string(ticket_id)
        except ValueError as exc:
            raise InvalidIdError() from exc
        ticket = self._store.get_ticket(parsed)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def create_ticket(self, fields: Mapping[str, Any], created_by: int | None) -> TicketDefinition:
        try:
            ticket = TicketDefinition(
                id=TicketId(uuid.uuid4()),
                created_by=created_by,
                **_domain_values(fields),
            )
        except (TypeError, ValueError) as exc:
            raise ValidationFailedError(str(exc)) from exc
        saved = self._store.save_ticket(ticket)
        logger.info("Ticket %s (%s) created by user %s", saved.id, saved.label, created_by)
        return saved

    def update_ticket(self, ticket_id: str, fields: Mapping[str, Any]) -> TicketDefinition:
        current = self.get_ticket(ticket_id)
        try:
            changes = _domain_values(fields)
            ticket = replace(current, **changes)
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc
        # Stock moves under concurrent sales; only write it when asked to
        return self._store.update_fields(ticket, changes.keys())

    def delete_ticket(self, ticket_id: str) -> None:
        """Hard-delete a ticket nobody has bought.

        Raises:
            TicketInUseError: If purchases reference the ticket.
        """
        ticket = self.get_ticket(ticket_id)
        self._store.delete_ticket(ticket.id)
        logger.info("Ticket %s deleted", ticket.id)

    def toggle_availability(self, ticket_id: str) -> TicketDefinition:
        ticket = self.get_ticket(ticket_id)
        return self._store.set_availability(ticket.id, not ticket.is_available)

    def popular_tickets(self, limit: int = 10) -> list[TicketDefinition]:
        return self._store.popular_tickets(limit)

    def stats(self) -> TicketStats:
        return self._store.ticket_stats()
