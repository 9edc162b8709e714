"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in purchases/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from common.value_objects import Money
from purchases.domain.value_objects import (
    CustomerSnapshot,
    LineItem,
    PaymentMethod,
    PurchaseId,
    PurchaseStatus,
    RequestMetadata,
    ValidityWindow,
)


@dataclass(frozen=True)
class Totals:
    subtotal: Money
    tax: Money
    discount: Money
    total: Money


@dataclass(frozen=True)
class PurchaseRecord:
    """A confirmed order with its redemption code.

    Amounts are captured once at creation and never recomputed, so later
    ticket edits do not alter historical orders.
    """

    id: PurchaseId
    owner_id: int
    customer: CustomerSnapshot
    lines: tuple[LineItem, ...]
    subtotal: Money
    tax: Money
    discount: Money
    total: Money
    status: PurchaseStatus
    redemption_code: str
    qr_image: str
    purchased_at: datetime
    validity: ValidityWindow
    payment_method: PaymentMethod
    payment_reference: str = ""
    notes: str = ""
    metadata: RequestMetadata = RequestMetadata()

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("A purchase needs at least one line")
        if not self.redemption_code:
            raise ValueError("A purchase needs a redemption code")
        line_sum = sum((line.line_total for line in self.lines), Money.zero())
        if line_sum != self.subtotal:
            raise ValueError("Subtotal must equal the sum of line totals")
        if self.subtotal.amount + self.tax.amount - self.discount.amount != self.total.amount:
            raise ValueError("Total must equal subtotal + tax - discount")

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    def is_expired(self, now: datetime) -> bool:
        return self.validity.has_lapsed(now)

    def is_valid(self, now: datetime) -> bool:
        return self.status is PurchaseStatus.CONFIRMED and self.validity.contains(now)

    def effective_status(self, now: datetime) -> PurchaseStatus:
        """Stored status, except that a lapsed confirmed purchase reads as expired."""
        if self.status is PurchaseStatus.CONFIRMED and self.is_expired(now):
            return PurchaseStatus.EXPIRED
        return self.status


@dataclass(frozen=True)
class RevenueStats:
    total_sales: Money
    purchase_count: int
    average_purchase: Money


@dataclass(frozen=True)
class SalesOverview:
    """Aggregated sales figures for administrators."""

    total_purchases: int
    confirmed_purchases: int
    cancelled_purchases: int
    revenue: RevenueStats
    status_counts: tuple[tuple[str, int], ...]
    payment_counts: tuple[tuple[str, int], ...]
