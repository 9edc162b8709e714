from tickets.domain.models import TicketDefinition, TicketStats
from tickets.domain.value_objects import (
    BoundedStock,
    Stock,
    TicketCategory,
    TicketId,
    UnlimitedStock,
)

__all__ = [
    "TicketDefinition",
    "TicketStats",
    "TicketId",
    "TicketCategory",
    "Stock",
    "BoundedStock",
    "UnlimitedStock",
]
