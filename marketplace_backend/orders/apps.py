# orders/apps.py

"""
ORDERS APP CONFIG

Order fulfillment core:
- order creation (registered customer or guest)
- status lifecycle (guarded cancel, direct admin/artisan set)
- artisan-scoped order views
- best-effort stock decrement on delivery
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders"
