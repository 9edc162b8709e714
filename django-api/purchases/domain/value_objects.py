"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Self
from uuid import UUID

from common.value_objects import Money, parse_uuid
from tickets.domain import TicketId

MAX_LINE_QUANTITY = 20

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{10,15}$")


@dataclass(frozen=True)
class PurchaseId:
    """Unique identifier for a PurchaseRecord."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


class PurchaseStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    EXPIRED = "expired"


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"


@dataclass(frozen=True)
class CustomerSnapshot:
    """Buyer details as given at checkout, independent of the live profile."""

    first_name: str
    last_name: str
    email: str
    phone: str = ""

    def __post_init__(self) -> None:
        for label, name in (("First name", self.first_name), ("Last name", self.last_name)):
            if not 2 <= len(name.strip()) <= 50:
                raise ValueError(f"{label} must be between 2 and 50 characters")
        if not EMAIL_PATTERN.match(self.email.strip()):
            raise ValueError("Customer email is not valid")
        if self.phone and not PHONE_PATTERN.match(self.phone.strip()):
            raise ValueError("Customer phone number is not valid")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class LineItem:
    """One (ticket, quantity) entry, priced when the purchase was made."""

    ticket_id: TicketId
    ticket_label: str
    quantity: int
    unit_price: Money
    line_total: Money

    def __post_init__(self) -> None:
        if not 1 <= self.quantity <= MAX_LINE_QUANTITY:
            raise ValueError(f"Quantity must be between 1 and {MAX_LINE_QUANTITY}")
        if self.line_total != self.unit_price.times(self.quantity):
            raise ValueError("Line total must equal unit price times quantity")

    @classmethod
    def priced(cls, ticket_id: TicketId, ticket_label: str, quantity: int, unit_price: Money) -> Self:
        return cls(
            ticket_id=ticket_id,
            ticket_label=ticket_label,
            quantity=quantity,
            unit_price=unit_price,
            line_total=unit_price.times(quantity),
        )


@dataclass(frozen=True)
class ValidityWindow:
    """Closed interval during which a purchase can be redeemed."""

    valid_from: datetime
    valid_until: datetime

    def __post_init__(self) -> None:
        if self.valid_from > self.valid_until:
            raise ValueError("Validity window must start before it ends")

    def has_lapsed(self, now: datetime) -> bool:
        return now > self.valid_until

    def contains(self, now: datetime) -> bool:
        return self.valid_from <= now <= self.valid_until


@dataclass(frozen=True)
class RequestMetadata:
    ip_address: str | None = None
    user_agent: str = ""
