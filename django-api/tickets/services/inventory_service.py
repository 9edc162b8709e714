"""Inventory service - stock bookkeeping for purchases.

Each operation runs the pure transition from tickets.domain.inventory to
decide the outcome, then applies it through the store's atomic update so
concurrent reservations cannot push stock below zero.
"""

import logging

from common.value_objects import Money
from tickets.domain import TicketDefinition
from tickets.domain import inventory
from tickets.domain.errors import InsufficientStockError
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, store: TicketStore) -> None:
        self._store = store

    def is_available_for_purchase(self, ticket: TicketDefinition, quantity: int) -> bool:
        return inventory.is_available_for_purchase(ticket, quantity)

    def reserve(self, ticket: TicketDefinition, quantity: int) -> TicketDefinition:
        """Take stock for a sale.

        Raises:
            InsufficientStockError: If the stock (as read, or as found by the
                conditional update) is below `quantity`.
        """
        reserved = inventory.reserve_stock(ticket, quantity)
        if not self._store.decrement_stock(ticket.id, quantity):
            logger.warning("Stock for ticket %s drained before reservation of %s", ticket.id, quantity)
            raise InsufficientStockError(ticket.label, quantity)
        return reserved

    def release(self, ticket: TicketDefinition, quantity: int) -> TicketDefinition:
        released = inventory.release_stock(ticket, quantity)
        self._store.increment_stock(ticket.id, quantity)
        return released

    def record_sale(self, ticket: TicketDefinition, quantity: int, amount: Money) -> TicketDefinition:
        updated = inventory.record_sale(ticket, quantity, amount)
        self._store.add_sale(ticket.id, quantity, amount)
        return updated
