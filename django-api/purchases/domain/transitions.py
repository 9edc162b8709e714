"""Pure purchase transitions.

Nothing here talks to a store; `purchases.services.purchase_workflow`
persists the records these functions return.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

from common.value_objects import Money
from purchases.domain.errors import InvalidStateError
from purchases.domain.models import PurchaseRecord, Totals
from purchases.domain.value_objects import LineItem, PurchaseStatus

REASON_NOT_CONFIRMED = "not_confirmed"
REASON_EXPIRED = "expired"

REFUNDABLE = frozenset({PurchaseStatus.CONFIRMED, PurchaseStatus.CANCELLED})


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str | None = None


def compute_totals(lines: tuple[LineItem, ...], tax_rate: Decimal, discount: Money | None = None) -> Totals:
    """Sum the lines, apply tax to the subtotal, then take off the discount."""
    discount = discount or Money.zero()
    subtotal = sum((line.line_total for line in lines), Money.zero())
    tax = subtotal.scaled(tax_rate)
    if discount.amount > subtotal.amount + tax.amount:
        raise ValueError("Discount cannot exceed the amount due")
    return Totals(subtotal=subtotal, tax=tax, discount=discount, total=subtotal + tax - discount)


def validate_purchase(record: PurchaseRecord, now: datetime) -> ValidationResult:
    if record.status is not PurchaseStatus.CONFIRMED:
        return ValidationResult(valid=False, reason=REASON_NOT_CONFIRMED)
    if record.is_expired(now):
        return ValidationResult(valid=False, reason=REASON_EXPIRED)
    return ValidationResult(valid=True)


def _append_note(notes: str, entry: str) -> str:
    return f"{notes}\n{entry}" if notes else entry


def cancel_purchase(record: PurchaseRecord, reason: str = "") -> PurchaseRecord:
    """Confirmed -> Cancelled.

    Raises:
        InvalidStateError: If the purchase is not confirmed.
    """
    if record.status is not PurchaseStatus.CONFIRMED:
        raise InvalidStateError("cancel", record.status.value)
    return replace(
        record,
        status=PurchaseStatus.CANCELLED,
        notes=_append_note(record.notes, f"Cancelled: {reason}"),
    )


def refund_purchase(record: PurchaseRecord, reason: str = "") -> PurchaseRecord:
    """Confirmed or Cancelled -> Refunded. Stock is left alone."""
    if record.status not in REFUNDABLE:
        raise InvalidStateError("refund", record.status.value)
    return replace(
        record,
        status=PurchaseStatus.REFUNDED,
        notes=_append_note(record.notes, f"Refunded: {reason}"),
    )
