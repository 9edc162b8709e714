"""Serializers for transforming ticket domain models to API responses,
and for checking the shape of admin input before it reaches the service."""

from rest_framework import serializers

from tickets.domain import TicketCategory, TicketDefinition, UnlimitedStock


class TicketSerializer(serializers.Serializer):
    """Serializer for TicketDefinition domain model."""

    id = serializers.UUIDField(source="id.value")
    label = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField(source="category.value")
    price = serializers.DecimalField(max_digits=10, decimal_places=2, source="price.amount")
    stock = serializers.SerializerMethodField()
    unlimited_stock = serializers.SerializerMethodField()
    in_stock = serializers.BooleanField()
    is_available = serializers.BooleanField()
    validity_days = serializers.IntegerField()
    benefits = serializers.ListField(child=serializers.CharField())
    restrictions = serializers.ListField(child=serializers.CharField())
    min_age = serializers.IntegerField(allow_null=True)
    max_age = serializers.IntegerField(allow_null=True)
    purchase_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2, source="revenue.amount")
    created_by = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)

    def get_stock(self, ticket: TicketDefinition) -> int | None:
        if isinstance(ticket.stock, UnlimitedStock):
            return None
        return ticket.stock.count

    def get_unlimited_stock(self, ticket: TicketDefinition) -> bool:
        return isinstance(ticket.stock, UnlimitedStock)


class TicketInputSerializer(serializers.Serializer):
    """Admin create/update payload. `stock` of -1 or null means unlimited."""

    label = serializers.CharField(min_length=2, max_length=100)
    description = serializers.CharField(min_length=10, max_length=500)
    category = serializers.ChoiceField(choices=[c.value for c in TicketCategory])
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, max_value=50000)
    stock = serializers.IntegerField(min_value=-1, allow_null=True, required=False)
    is_available = serializers.BooleanField(required=False)
    validity_days = serializers.IntegerField(min_value=1, max_value=365, required=False)
    benefits = serializers.ListField(child=serializers.CharField(max_length=200, allow_blank=True), required=False)
    restrictions = serializers.ListField(child=serializers.CharField(max_length=200, allow_blank=True), required=False)
    min_age = serializers.IntegerField(min_value=0, max_value=18, allow_null=True, required=False)
    max_age = serializers.IntegerField(min_value=0, max_value=100, allow_null=True, required=False)


class TicketStatsSerializer(serializers.Serializer):
    total_tickets = serializers.IntegerField()
    available_tickets = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2, source="total_revenue.amount")
    category_stats = serializers.SerializerMethodField()

    def get_category_stats(self, stats) -> list[dict]:
        return [{"category": category, "count": count} for category, count in stats.category_counts]
