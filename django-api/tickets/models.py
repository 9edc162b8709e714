"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.conf import settings
from django.db import models


class Ticket(models.Model):
    """Persistence model for ticket definitions."""

    class Category(models.TextChoices):
        ENTRY = "entry", "Entry"
        GUIDED_TOUR = "guided_tour", "Guided tour"
        EVENT = "event", "Event"
        SUBSCRIPTION = "subscription", "Subscription"
        GROUP = "group", "Group"
        DISCOUNT = "discount", "Discount"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    label = models.CharField(max_length=100)
    description = models.CharField(max_length=500)
    category = models.CharField(max_length=20, choices=Category.choices)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    # NULL means unlimited stock
    stock = models.PositiveIntegerField(null=True, blank=True)
    is_available = models.BooleanField(default=True)
    validity_days = models.PositiveSmallIntegerField(default=30)
    purchase_count = models.PositiveIntegerField(default=0)
    revenue = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    benefits = models.JSONField(default=list, blank=True)
    restrictions = models.JSONField(default=list, blank=True)
    min_age = models.PositiveSmallIntegerField(null=True, blank=True)
    max_age = models.PositiveSmallIntegerField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_tickets",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["price"]
        indexes = [
            models.Index(fields=["category"], name="tickets_tic_categor_7d1f3a_idx"),
            models.Index(fields=["is_available", "price"], name="tickets_tic_is_avai_2c9e41_idx"),
            models.Index(fields=["-purchase_count"], name="tickets_tic_purchas_5b8d02_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.label} - {self.price}"
