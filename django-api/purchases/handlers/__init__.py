from purchases.handlers.views import (
    PurchaseCancelView,
    PurchaseDetailView,
    PurchaseListView,
    PurchaseRefundView,
    RedemptionView,
    SalesOverviewView,
)

__all__ = [
    "PurchaseListView",
    "PurchaseDetailView",
    "PurchaseCancelView",
    "PurchaseRefundView",
    "RedemptionView",
    "SalesOverviewView",
]
