"""
PATH: cart/models/cart_item.py

CART ITEM MODEL

Rules:
- One row per (user, product) pair; re-adding merges quantity
- quantity >= 1
- price_at_time is a snapshot taken at add-time; it only changes on an
  explicit resync, never on read
"""

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class CartItem(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cart_items",
    )

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.CASCADE,
        related_name="cart_items",
    )

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    price_at_time = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Product price snapshot at add-time",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product"],
                name="one_cart_row_per_user_product",
            )
        ]

    def clean(self):
        if self.quantity is None or int(self.quantity) < 1:
            raise ValidationError("quantity must be >= 1")

    @property
    def line_total(self) -> Decimal:
        return (Decimal(self.price_at_time) * int(self.quantity)).quantize(Decimal("0.01"))

    def __str__(self):
        return f"{self.product_id} x{self.quantity}"
