from django.urls import path

from purchases.handlers import (
    PurchaseCancelView,
    PurchaseDetailView,
    PurchaseListView,
    PurchaseRefundView,
    RedemptionView,
    SalesOverviewView,
)

urlpatterns = [
    path("purchases", PurchaseListView.as_view(), name="purchase-list"),
    path("purchases/validate", RedemptionView.as_view(), name="purchase-validate"),
    path("purchases/stats/overview", SalesOverviewView.as_view(), name="purchase-stats"),
    path("purchases/<str:purchase_id>", PurchaseDetailView.as_view(), name="purchase-detail"),
    path("purchases/<str:purchase_id>/cancel", PurchaseCancelView.as_view(), name="purchase-cancel"),
    path("purchases/<str:purchase_id>/refund", PurchaseRefundView.as_view(), name="purchase-refund"),
]
