from tickets.stores.interfaces import TicketStore

__all__ = ["TicketStore"]
