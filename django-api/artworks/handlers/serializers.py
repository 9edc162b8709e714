"""Serializers for artwork requests and responses."""

from datetime import date

from rest_framework import serializers

from artworks.domain import Artwork, ArtworkCategory, DimensionUnit
from artworks.domain.models import MIN_YEAR


class DimensionsSerializer(serializers.Serializer):
    width = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, allow_null=True, required=False)
    height = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, allow_null=True, required=False)
    depth = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, allow_null=True, required=False)
    unit = serializers.ChoiceField(choices=[u.value for u in DimensionUnit], required=False)


class DimensionsOutputSerializer(serializers.Serializer):
    width = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    height = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    depth = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    unit = serializers.CharField(source="unit.value")


class ArtworkSerializer(serializers.Serializer):
    """Serializer for the Artwork domain model.

    Needs `media_base_url` in the context to resolve `image_url`.
    """

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    artist = serializers.CharField()
    year = serializers.IntegerField()
    age = serializers.SerializerMethodField()
    description = serializers.CharField()
    image = serializers.CharField()
    image_url = serializers.SerializerMethodField()
    audio_guide = serializers.CharField()
    category = serializers.CharField(source="category.value")
    room = serializers.CharField()
    scan_code = serializers.CharField()
    qr_image = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, source="price.amount")
    is_available = serializers.BooleanField()
    dimensions = DimensionsOutputSerializer()
    materials = serializers.ListField(child=serializers.CharField())
    techniques = serializers.ListField(child=serializers.CharField())
    view_count = serializers.IntegerField()
    scan_count = serializers.IntegerField()
    added_by = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)

    def get_age(self, artwork: Artwork) -> int:
        return artwork.age(date.today().year)

    def get_image_url(self, artwork: Artwork) -> str:
        return artwork.image_url(self.context.get("media_base_url", ""))


class ArtworkInputSerializer(serializers.Serializer):
    """Admin create/update payload."""

    title = serializers.CharField(min_length=2, max_length=200)
    artist = serializers.CharField(min_length=2, max_length=100)
    year = serializers.IntegerField(min_value=MIN_YEAR)
    description = serializers.CharField(min_length=10, max_length=2000)
    image = serializers.CharField(max_length=500)
    audio_guide = serializers.URLField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=[c.value for c in ArtworkCategory])
    room = serializers.CharField(min_length=2, max_length=100)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, max_value=10000)
    is_available = serializers.BooleanField(required=False)
    dimensions = DimensionsSerializer(required=False, allow_null=True)
    materials = serializers.ListField(child=serializers.CharField(max_length=100, allow_blank=True), required=False)
    techniques = serializers.ListField(child=serializers.CharField(max_length=100, allow_blank=True), required=False)

    def validate_year(self, value: int) -> int:
        if value > date.today().year + 1:
            raise serializers.ValidationError("Year cannot be in the future.")
        return value


class ArtworkStatsSerializer(serializers.Serializer):
    total_artworks = serializers.IntegerField()
    available_artworks = serializers.IntegerField()
    total_views = serializers.IntegerField()
    total_scans = serializers.IntegerField()
    category_stats = serializers.SerializerMethodField()
    room_stats = serializers.SerializerMethodField()

    def get_category_stats(self, stats) -> list[dict]:
        return [{"category": category, "count": count} for category, count in stats.category_counts]

    def get_room_stats(self, stats) -> list[dict]:
        return [{"room": room, "count": count} for room, count in stats.room_counts]
