"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.conf import settings
from django.db import models


class Artwork(models.Model):
    """Persistence model for catalogued artworks."""

    class Category(models.TextChoices):
        PAINTING = "painting", "Painting"
        SCULPTURE = "sculpture", "Sculpture"
        PHOTOGRAPHY = "photography", "Photography"
        DIGITAL_ART = "digital_art", "Digital art"
        INSTALLATION = "installation", "Installation"
        OTHER = "other", "Other"

    class Unit(models.TextChoices):
        CM = "cm", "Centimetres"
        M = "m", "Metres"
        MM = "mm", "Millimetres"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    artist = models.CharField(max_length=100)
    year = models.IntegerField()
    description = models.TextField(max_length=2000)
    image = models.CharField(max_length=500)
    audio_guide = models.URLField(blank=True, default="")
    category = models.CharField(max_length=20, choices=Category.choices)
    room = models.CharField(max_length=100)
    scan_code = models.CharField(max_length=40, unique=True)
    qr_image = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    is_available = models.BooleanField(default=True)
    width = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    height = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    depth = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    dimension_unit = models.CharField(max_length=2, choices=Unit.choices, default=Unit.CM)
    materials = models.JSONField(default=list, blank=True)
    techniques = models.JSONField(default=list, blank=True)
    view_count = models.PositiveIntegerField(default=0)
    scan_count = models.PositiveIntegerField(default=0)
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="artworks",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category"], name="artworks_ar_categor_e3a9d1_idx"),
            models.Index(fields=["room"], name="artworks_ar_room_5c72b0_idx"),
            models.Index(fields=["-view_count", "-scan_count"], name="artworks_ar_view_co_8f14aa_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.title} - {self.artist}"
