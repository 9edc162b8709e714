from tickets.services.inventory_service import InventoryService
from tickets.services.ticket_service import TicketService

__all__ = ["InventoryService", "TicketService"]
