from django.contrib import admin

from tickets.models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["label", "category", "price", "stock", "is_available", "purchase_count"]
    list_filter = ["category", "is_available"]
    search_fields = ["label", "description"]
    readonly_fields = ["purchase_count", "revenue", "created_at", "updated_at"]
