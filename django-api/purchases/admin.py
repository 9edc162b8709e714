from django.contrib import admin

from purchases.models import Purchase, PurchaseLine


class PurchaseLineInline(admin.TabularInline):
    model = PurchaseLine
    extra = 0
    readonly_fields = ["ticket", "ticket_label", "quantity", "unit_price", "line_total"]


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    list_display = ["redemption_code", "customer_email", "total", "status", "payment_method", "purchased_at"]
    list_filter = ["status", "payment_method"]
    search_fields = ["redemption_code", "customer_email", "customer_last_name"]
    readonly_fields = ["redemption_code", "qr_image", "subtotal", "tax", "total", "purchased_at"]
    inlines = [PurchaseLineInline]
