"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in tickets/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime

from common.value_objects import Money
from tickets.domain.value_objects import Stock, TicketCategory, TicketId, UnlimitedStock

MAX_TICKET_PRICE = Money(50000)


@dataclass(frozen=True)
class TicketDefinition:
    """Domain representation of a ticket type on sale."""

    id: TicketId
    label: str
    description: str
    category: TicketCategory
    price: Money
    stock: Stock = field(default_factory=UnlimitedStock)
    is_available: bool = True
    validity_days: int = 30
    purchase_count: int = 0
    revenue: Money = field(default_factory=Money.zero)
    benefits: tuple[str, ...] = ()
    restrictions: tuple[str, ...] = ()
    min_age: int | None = None
    max_age: int | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 2 <= len(self.label.strip()) <= 100:
            raise ValueError("Ticket label must be between 2 and 100 characters")
        if not 10 <= len(self.description.strip()) <= 500:
            raise ValueError("Ticket description must be between 10 and 500 characters")
        if self.price.amount > MAX_TICKET_PRICE.amount:
            raise ValueError(f"Ticket price cannot exceed {MAX_TICKET_PRICE}")
        if not 1 <= self.validity_days <= 365:
            raise ValueError("Validity must be between 1 and 365 days")
        if self.purchase_count < 0:
            raise ValueError("Purchase count cannot be negative")
        if self.min_age is not None and not 0 <= self.min_age <= 18:
            raise ValueError("Minimum age must be between 0 and 18")
        if self.max_age is not None and not 0 <= self.max_age <= 100:
            raise ValueError("Maximum age must be between 0 and 100")
        if self.min_age is not None and self.max_age is not None and self.min_age > self.max_age:
            raise ValueError("Minimum age cannot exceed maximum age")

    @property
    def in_stock(self) -> bool:
        return self.stock.covers(1)


@dataclass(frozen=True)
class TicketStats:
    """Catalogue-wide ticket figures for administrators."""

    total_tickets: int
    available_tickets: int
    total_revenue: Money
    category_counts: tuple[tuple[str, int], ...]
