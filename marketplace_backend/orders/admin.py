from django.contrib import admin

from orders.models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "quantity", "price_at_purchase")
    readonly_fields = ("product", "quantity", "price_at_purchase")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "guest_email", "status", "total_price", "created_at")
    list_filter = ("status",)
    search_fields = ("guest_email", "customer__email", "shipping_name")
    list_select_related = ("customer",)
    readonly_fields = ("customer", "guest_email", "total_price", "created_at", "updated_at")
    inlines = [OrderItemInline]
