"""Serializers for purchase requests and responses."""

from django.core.validators import RegexValidator
from django.utils import timezone
from rest_framework import serializers

from purchases.domain import PaymentMethod, PurchaseRecord
from purchases.domain.value_objects import MAX_LINE_QUANTITY

CUSTOMER_PHONE_VALIDATOR = RegexValidator(
    r"^\+?[0-9\s\-()]{10,15}$",
    "Provide a valid phone number.",
)


class CustomerSerializer(serializers.Serializer):
    first_name = serializers.CharField(min_length=2, max_length=50)
    last_name = serializers.CharField(min_length=2, max_length=50)
    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, validators=[CUSTOMER_PHONE_VALIDATOR])


class LineInputSerializer(serializers.Serializer):
    ticket_id = serializers.UUIDField(format="hex_verbose")
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY)


class PurchaseInputSerializer(serializers.Serializer):
    customer = CustomerSerializer()
    items = LineInputSerializer(many=True, allow_empty=False)
    payment_method = serializers.ChoiceField(choices=[m.value for m in PaymentMethod])
    # Only administrators may set it
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    payment_reference = serializers.CharField(max_length=100, required=False, allow_blank=True)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True)


class ReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")


class RedemptionInputSerializer(serializers.Serializer):
    qr_code = serializers.CharField(max_length=40)


class SalesOverviewQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)


class LineItemSerializer(serializers.Serializer):
    ticket_id = serializers.UUIDField(source="ticket_id.value")
    ticket_label = serializers.CharField()
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, source="unit_price.amount")
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, source="line_total.amount")


class PurchaseSerializer(serializers.Serializer):
    """Serializer for PurchaseRecord domain model."""

    id = serializers.UUIDField(source="id.value")
    owner_id = serializers.IntegerField()
    customer = CustomerSerializer()
    items = LineItemSerializer(source="lines", many=True)
    total_items = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, source="subtotal.amount")
    tax = serializers.DecimalField(max_digits=12, decimal_places=2, source="tax.amount")
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, source="discount.amount")
    total = serializers.DecimalField(max_digits=12, decimal_places=2, source="total.amount")
    status = serializers.CharField(source="status.value")
    effective_status = serializers.SerializerMethodField()
    is_expired = serializers.SerializerMethodField()
    is_valid = serializers.SerializerMethodField()
    redemption_code = serializers.CharField()
    qr_image = serializers.CharField()
    purchased_at = serializers.DateTimeField()
    valid_from = serializers.DateTimeField(source="validity.valid_from")
    valid_until = serializers.DateTimeField(source="validity.valid_until")
    payment_method = serializers.CharField(source="payment_method.value")
    payment_reference = serializers.CharField()
    notes = serializers.CharField()

    def get_effective_status(self, record: PurchaseRecord) -> str:
        return record.effective_status(timezone.now()).value

    def get_is_expired(self, record: PurchaseRecord) -> bool:
        return record.is_expired(timezone.now())

    def get_is_valid(self, record: PurchaseRecord) -> bool:
        return record.is_valid(timezone.now())


def _count_list(pairs, key: str) -> list[dict]:
    return [{key: value, "count": count} for value, count in pairs]


class SalesOverviewSerializer(serializers.Serializer):
    total_purchases = serializers.IntegerField()
    confirmed_purchases = serializers.IntegerField()
    cancelled_purchases = serializers.IntegerField()
    revenue_stats = serializers.SerializerMethodField()
    status_stats = serializers.SerializerMethodField()
    payment_stats = serializers.SerializerMethodField()

    def get_revenue_stats(self, overview) -> dict:
        revenue = overview.revenue
        return {
            "total_sales": str(revenue.total_sales),
            "total_purchases": revenue.purchase_count,
            "average_purchase": str(revenue.average_purchase),
        }

    def get_status_stats(self, overview) -> list[dict]:
        return _count_list(overview.status_counts, "status")

    def get_payment_stats(self, overview) -> list[dict]:
        return _count_list(overview.payment_counts, "payment_method")
