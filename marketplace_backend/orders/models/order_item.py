# orders/models/order_item.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class OrderItem(models.Model):
    """
    Line item of an Order.

    price_at_purchase is a snapshot of the product price when the order was
    placed; later catalog price changes never touch it.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )

    product = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price_at_purchase = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["order"], name="order_item_order_idx"),
            models.Index(fields=["product"], name="order_item_product_idx"),
        ]

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError("quantity must be >= 1")

        if self.price_at_purchase is None or Decimal(self.price_at_purchase) <= Decimal("0.00"):
            raise ValidationError("price_at_purchase must be > 0")

    @property
    def line_total(self) -> Decimal:
        return (Decimal(self.price_at_purchase) * int(self.quantity)).quantize(Decimal("0.01"))

    def __str__(self):
        return f"{self.product_id} x{self.quantity}"
