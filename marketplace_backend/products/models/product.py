# products/models/product.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .category import Category


class Product(models.Model):
    """
    A sellable handmade item.

    STOCK MODEL:
    - stock_quantity is a plain counter (>= 0), set directly
    - stock is NOT reserved at order time; it is decremented after
      delivery (orders/services/stock_effects.py)

    PRICE MODEL:
    - price is the live catalog price
    - carts and orders keep their own snapshots and never follow it
    """

    artisan = models.ForeignKey(
        "artisans.ArtisanProfile",
        on_delete=models.CASCADE,
        related_name="products",
    )

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )

    name = models.CharField(max_length=200)
    description = models.TextField(max_length=2000, blank=True, default="")

    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock_quantity = models.PositiveIntegerField(default=0)

    is_featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["is_featured"], name="product_featured_idx"),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        if self.price is None or Decimal(self.price) <= Decimal("0.00"):
            raise ValidationError("Price must be greater than zero")

        if self.stock_quantity is None or int(self.stock_quantity) < 0:
            raise ValidationError("Stock quantity cannot be negative")

    @property
    def is_in_stock(self) -> bool:
        return int(self.stock_quantity or 0) > 0
