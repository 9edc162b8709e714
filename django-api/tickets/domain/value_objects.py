"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID

from common.value_objects import parse_uuid

UNLIMITED_STOCK_SENTINEL = -1


@dataclass(frozen=True)
class TicketId:
    """Unique identifier for a TicketDefinition."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


class TicketCategory(Enum):
    ENTRY = "entry"
    GUIDED_TOUR = "guided_tour"
    EVENT = "event"
    SUBSCRIPTION = "subscription"
    GROUP = "group"
    DISCOUNT = "discount"


@dataclass(frozen=True)
class UnlimitedStock:
    """Stock that is never exhausted."""

    def covers(self, quantity: int) -> bool:
        return True


@dataclass(frozen=True)
class BoundedStock:
    """Non-negative count of remaining units."""

    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("Stock cannot be negative")

    def covers(self, quantity: int) -> bool:
        return self.count >= quantity


Stock = UnlimitedStock | BoundedStock


def stock_from_count(value: int | None) -> Stock:
    """Map a stored or submitted count to a Stock.

    `None` and the legacy `-1` sentinel both mean unlimited.
    """
    if value is None or value == UNLIMITED_STOCK_SENTINEL:
        return UnlimitedStock()
    return BoundedStock(value)


def stock_to_count(stock: Stock) -> int | None:
    """Storage form: NULL for unlimited."""
    if isinstance(stock, UnlimitedStock):
        return None
    return stock.count
