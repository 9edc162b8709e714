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
            name="Artwork",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("artist", models.CharField(max_length=100)),
                ("year", models.IntegerField()),
                ("description", models.TextField(max_length=2000)),
                ("image", models.CharField(max_length=500)),
                ("audio_guide", models.URLField(blank=True, default="")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("painting", "Painting"),
                            ("sculpture", "Sculpture"),
                            ("photography", "Photography"),
                            ("digital_art", "Digital art"),
                            ("installation", "Installation"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("room", models.CharField(max_length=100)),
                ("scan_code", models.CharField(max_length=40, unique=True)),
                ("qr_image", models.TextField()),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("is_available", models.BooleanField(default=True)),
                ("width", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("height", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("depth", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "dimension_unit",
                    models.CharField(
                        choices=[("cm", "Centimetres"), ("m", "Metres"), ("mm", "Millimetres")],
                        default="cm",
                        max_length=2,
                    ),
                ),
                ("materials", models.JSONField(blank=True, default=list)),
                ("techniques", models.JSONField(blank=True, default=list)),
                ("view_count", models.PositiveIntegerField(default=0)),
                ("scan_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "added_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="artworks",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["category"], name="artworks_ar_categor_e3a9d1_idx"),
                    models.Index(fields=["room"], name="artworks_ar_room_5c72b0_idx"),
                    models.Index(fields=["-view_count", "-scan_count"], name="artworks_ar_view_co_8f14aa_idx"),
                ],
            },
        ),
    ]
