from django.contrib import admin

from cart.models import CartItem


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("user", "product", "quantity", "price_at_time", "updated_at")
    search_fields = ("user__email", "product__name")
    list_select_related = ("user", "product")
    readonly_fields = ("price_at_time", "created_at", "updated_at")
