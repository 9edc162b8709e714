"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to common.exception_handler
- Never contain business logic
"""

from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdmin, IsShopper
from common.pagination import DefaultPagination
from common.value_objects import Money
from purchases.domain import RequestMetadata
from purchases.handlers.serializers import (
    PurchaseInputSerializer,
    PurchaseSerializer,
    ReasonSerializer,
    RedemptionInputSerializer,
    SalesOverviewQuerySerializer,
    SalesOverviewSerializer,
)
from purchases.services import LineRequest
from purchases.wiring import purchase_workflow, redemption_verifier


def _request_metadata(request: Request) -> RequestMetadata:
    return RequestMetadata(
        ip_address=request.META.get("REMOTE_ADDR") or None,
        user_agent=request.META.get("HTTP_USER_AGENT", ""),
    )


class PurchaseListView(APIView):
    """Handler for GET/POST /api/purchases"""

    permission_classes = [IsShopper]

    def get(self, request: Request) -> Response:
        purchases = purchase_workflow().list_purchases(
            request.user.id,
            status=request.query_params.get("status"),
        )
        paginator = DefaultPagination()
        page = paginator.paginate_queryset(purchases, request, view=self)
        return paginator.get_paginated_response(PurchaseSerializer(page, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = PurchaseInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        discount = data.get("discount")
        if discount is not None and not IsAdmin().has_permission(request, self):
            raise PermissionDenied("Only administrators can apply a discount.")
        record = purchase_workflow().purchase(
            owner_id=request.user.id,
            customer=data["customer"],
            lines=[LineRequest(str(item["ticket_id"]), item["quantity"]) for item in data["items"]],
            payment_method=data["payment_method"],
            notes=data.get("notes", ""),
            payment_reference=data.get("payment_reference", ""),
            metadata=_request_metadata(request),
            discount=Money(discount) if discount is not None else None,
        )
        return Response(PurchaseSerializer(record).data, status=status.HTTP_201_CREATED)


class PurchaseDetailView(APIView):
    """Handler for GET /api/purchases/{purchase_id}"""

    permission_classes = [IsShopper]

    def get(self, request: Request, purchase_id: str) -> Response:
        record = purchase_workflow().get_purchase(purchase_id, request.user.id)
        return Response(PurchaseSerializer(record).data)


class PurchaseCancelView(APIView):
    """Handler for PATCH /api/purchases/{purchase_id}/cancel"""

    permission_classes = [IsShopper]

    def patch(self, request: Request, purchase_id: str) -> Response:
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = purchase_workflow().cancel(purchase_id, request.user.id, serializer.validated_data["reason"])
        return Response(PurchaseSerializer(record).data)


class PurchaseRefundView(APIView):
    """Handler for PATCH /api/purchases/{purchase_id}/refund"""

    permission_classes = [IsAdmin]

    def patch(self, request: Request, purchase_id: str) -> Response:
        serializer = ReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = purchase_workflow().refund(purchase_id, serializer.validated_data["reason"])
        return Response(PurchaseSerializer(record).data)


class RedemptionView(APIView):
    """Handler for POST /api/purchases/validate"""

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request: Request) -> Response:
        serializer = RedemptionInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        redemption = redemption_verifier().verify(serializer.validated_data["qr_code"])
        if not redemption.result.valid:
            # Public endpoint: a rejected code reveals nothing about the buyer
            return Response(
                {"valid": False, "reason": redemption.result.reason},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response({"valid": True, "purchase": PurchaseSerializer(redemption.record).data})


class SalesOverviewView(APIView):
    """Handler for GET /api/purchases/stats/overview"""

    permission_classes = [IsAdmin]

    def get(self, request: Request) -> Response:
        query = SalesOverviewQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        overview = purchase_workflow().sales_overview(
            start_date=query.validated_data.get("start_date"),
            end_date=query.validated_data.get("end_date"),
        )
        return Response(SalesOverviewSerializer(overview).data)
