import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Ticket",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("label", models.CharField(max_length=100)),
                ("description", models.CharField(max_length=500)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("entry", "Entry"),
                            ("guided_tour", "Guided tour"),
                            ("event", "Event"),
                            ("subscription", "Subscription"),
                            ("group", "Group"),
                            ("discount", "Discount"),
                        ],
                        max_length=20,
                    ),
                ),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("stock", models.PositiveIntegerField(blank=True, null=True)),
                ("is_available", models.BooleanField(default=True)),
                ("validity_days", models.PositiveSmallIntegerField(default=30)),
                ("purchase_count", models.PositiveIntegerField(default=0)),
                ("revenue", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("benefits", models.JSONField(blank=True, default=list)),
                ("restrictions", models.JSONField(blank=True, default=list)),
                ("min_age", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("max_age", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_tickets",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["price"],
                "indexes": [
                    models.Index(fields=["category"], name="tickets_tic_categor_7d1f3a_idx"),
                    models.Index(fields=["is_available", "price"], name="tickets_tic_is_avai_2c9e41_idx"),
                    models.Index(fields=["-purchase_count"], name="tickets_tic_purchas_5b8d02_idx"),
                ],
            },
        ),
    ]
