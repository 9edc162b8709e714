from purchases.domain.models import PurchaseRecord, RevenueStats, SalesOverview, Totals
from purchases.domain.transitions import ValidationResult
from purchases.domain.value_objects import (
    CustomerSnapshot,
    LineItem,
    PaymentMethod,
    PurchaseId,
    PurchaseStatus,
    RequestMetadata,
    ValidityWindow,
)

__all__ = [
    "PurchaseRecord",
    "RevenueStats",
    "SalesOverview",
    "Totals",
    "ValidationResult",
    "CustomerSnapshot",
    "LineItem",
    "PaymentMethod",
    "PurchaseId",
    "PurchaseStatus",
    "RequestMetadata",
    "ValidityWindow",
]
