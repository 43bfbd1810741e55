# orders/models/order.py

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class Order(models.Model):
    """
    Customer order.

    Key rules:
    - Belongs to exactly one of {registered customer, guest_email}
      (never both, never neither; DB check constraint + service validation)
    - Owns its items (cascade delete)
    - status lifecycle rules live in orders/services/order_lifecycle.py
    """

    STATUS_PENDING = "pending"
    STATUS_PROCESSING = "processing"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )
    guest_email = models.EmailField(blank=True, default="")

    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    # Shipping (line2 + phone optional)
    shipping_name = models.CharField(max_length=200)
    shipping_address_line1 = models.CharField(max_length=255)
    shipping_address_line2 = models.CharField(max_length=255, blank=True, default="")
    shipping_city = models.CharField(max_length=120)
    shipping_postal_code = models.CharField(max_length=20)
    shipping_country = models.CharField(max_length=120)
    shipping_phone = models.CharField(max_length=40, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status"], name="order_status_idx"),
            models.Index(fields=["created_at"], name="order_created_at_idx"),
            models.Index(fields=["guest_email"], name="order_guest_email_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    (Q(customer__isnull=False) & Q(guest_email=""))
                    | (Q(customer__isnull=True) & ~Q(guest_email=""))
                ),
                name="order_customer_xor_guest_email",
            ),
        ]

    @property
    def is_guest_order(self) -> bool:
        return self.customer_id is None and bool(self.guest_email)

    def __str__(self):
        owner = self.guest_email or str(self.customer_id)
        return f"Order #{self.pk} | {owner} | {self.total_price} | {self.status}"
