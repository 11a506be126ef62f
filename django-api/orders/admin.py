from django.contrib import admin

from orders.models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["stripe_id", "event", "buyer", "quantity", "total_amount", "created_at"]
    search_fields = ["stripe_id"]
    list_filter = ["event"]
    readonly_fields = ["stripe_id", "event", "buyer", "quantity", "total_amount", "created_at"]
