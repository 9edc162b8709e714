"""Assemble ticket services over the ORM store."""

from tickets.services import InventoryService, TicketService
from tickets.stores.django_store import DjangoTicketStore


def ticket_service() -> TicketService:
    return TicketService(DjangoTicketStore())


def inventory_service() -> InventoryService:
    return InventoryService(DjangoTicketStore())
