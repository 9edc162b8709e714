"""Stock transitions for ticket definitions.

Pure functions: each returns a new TicketDefinition and never touches a
store.  `tickets.services.inventory_service` pairs them with the store's
atomic updates.
"""

from dataclasses import replace

from common.value_objects import Money
from tickets.domain.errors import InsufficientStockError
from tickets.domain.models import TicketDefinition
from tickets.domain.value_objects import BoundedStock, UnlimitedStock


def _check_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise ValueError("Quantity must be positive")


def is_available_for_purchase(ticket: TicketDefinition, quantity: int = 1) -> bool:
    if not ticket.is_available:
        return False
    return ticket.stock.covers(quantity)


def reserve_stock(ticket: TicketDefinition, quantity: int = 1) -> TicketDefinition:
    """Take `quantity` units out of stock.

    Raises:
        InsufficientStockError: If bounded stock is below `quantity`.
    """
    _check_quantity(quantity)
    if isinstance(ticket.stock, UnlimitedStock):
        return ticket
    if not ticket.stock.covers(quantity):
        raise InsufficientStockError(ticket.label, quantity)
    return replace(ticket, stock=BoundedStock(ticket.stock.count - quantity))


def release_stock(ticket: TicketDefinition, quantity: int = 1) -> TicketDefinition:
    """Put `quantity` units back. There is no ceiling on the result."""
    _check_quantity(quantity)
    if isinstance(ticket.stock, UnlimitedStock):
        return ticket
    return replace(ticket, stock=BoundedStock(ticket.stock.count + quantity))


def record_sale(ticket: TicketDefinition, quantity: int, amount: Money) -> TicketDefinition:
    _check_quantity(quantity)
    return replace(
        ticket,
        purchase_count=ticket.purchase_count + quantity,
        revenue=ticket.revenue + amount,
    )
