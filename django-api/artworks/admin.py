from django.contrib import admin

from artworks.models import Artwork


@admin.register(Artwork)
class ArtworkAdmin(admin.ModelAdmin):
    list_display = ["title", "artist", "year", "category", "room", "is_available", "view_count", "scan_count"]
    list_filter = ["category", "room", "is_available"]
    search_fields = ["title", "artist", "description"]
    readonly_fields = ["scan_code", "qr_image", "view_count", "scan_count", "created_at", "updated_at"]
