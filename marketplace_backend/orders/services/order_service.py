# orders/services/order_service.py

"""
ORDER SERVICE (ORDER LIFECYCLE MANAGER)

Owns:
- order creation (registered customer OR guest email, never both)
- status transitions (unguarded direct set + guarded cancel)
- item-level status update (sets the parent order's status; delivery
  triggers the best-effort stock decrement)
- artisan-scoped read models
- admin listings + revenue stats

Does NOT:
- decide authorization (views consult permissions/policy.py first)
- reserve stock at order time
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone

from backend.exceptions import DomainValidationError, NotFoundError
from orders.models import Order, OrderItem
from orders.services.order_lifecycle import (
    is_delivery_transition,
    normalize_status,
    validate_cancel,
)
from orders.services.stock_effects import StockDecrementReport, decrement_stock_for_order
from permissions.roles import is_active_principal

logger = logging.getLogger(__name__)

User = get_user_model()

TWOPLACES = Decimal("0.01")

REQUIRED_SHIPPING_FIELDS = (
    "shipping_name",
    "shipping_address_line1",
    "shipping_city",
    "shipping_postal_code",
    "shipping_country",
)

UPDATABLE_ORDER_FIELDS = (
    "status",
    "shipping_name",
    "shipping_address_line1",
    "shipping_address_line2",
    "shipping_city",
    "shipping_postal_code",
    "shipping_country",
    "shipping_phone",
)


# ============================================================
# INPUT / READ MODELS
# ============================================================


@dataclass
class OrderItemDraft:
    product_id: int
    quantity: int


@dataclass
class OrderDraft:
    total_price: Optional[Decimal]
    shipping_name: str = ""
    shipping_address_line1: str = ""
    shipping_address_line2: str = ""
    shipping_city: str = ""
    shipping_postal_code: str = ""
    shipping_country: str = ""
    shipping_phone: str = ""
    customer_id: Optional[str] = None
    guest_email: str = ""
    status: Optional[str] = None
    items: List[OrderItemDraft] = field(default_factory=list)


@dataclass
class ArtisanOrderView:
    """An order as seen by one artisan: only that artisan's items."""

    order: Order
    items: List[OrderItem]

    @property
    def artisan_subtotal(self) -> Decimal:
        return sum((i.line_total for i in self.items), Decimal("0.00"))


# ============================================================
# Helpers
# ============================================================


def _money(value) -> Decimal:
    try:
        return Decimal(str(value)).quantize(TWOPLACES)
    except (InvalidOperation, TypeError, ValueError):
        raise DomainValidationError("total_price must be a valid decimal")


def get_order(order_id) -> Order:
    try:
        return Order.objects.select_related("customer").get(pk=order_id)
    except Order.DoesNotExist:
        raise NotFoundError(f"Order {order_id} not found")


def get_order_item(item_id) -> OrderItem:
    try:
        return OrderItem.objects.select_related("order", "product").get(pk=item_id)
    except OrderItem.DoesNotExist:
        raise NotFoundError(f"Order item {item_id} not found")


def _validate_draft(draft: OrderDraft) -> Decimal:
    if draft.total_price is None:
        raise DomainValidationError("total_price is required")

    total = _money(draft.total_price)
    if total <= Decimal("0.00"):
        raise DomainValidationError("total_price must be greater than zero")

    missing = [f for f in REQUIRED_SHIPPING_FIELDS if not str(getattr(draft, f) or "").strip()]
    if missing:
        raise DomainValidationError(f"Missing shipping fields: {', '.join(missing)}")

    if not draft.items:
        raise DomainValidationError("An order needs at least one item")

    for item in draft.items:
        if item.quantity is None or int(item.quantity) <= 0:
            raise DomainValidationError("Item quantity must be greater than zero")

    return total


def _resolve_owner(draft: OrderDraft, principal):
    """
    Returns (customer, guest_email).

    Authenticated principal -> order bound to them, guest email discarded.
    Otherwise exactly one of draft.customer_id / draft.guest_email.
    """
    if is_active_principal(principal):
        return principal, ""

    guest_email = (draft.guest_email or "").strip().lower()
    has_customer = draft.customer_id is not None and str(draft.customer_id).strip() != ""

    if has_customer and guest_email:
        raise DomainValidationError("An order cannot have both a customer and a guest email")
    if not has_customer and not guest_email:
        raise DomainValidationError("An order needs either a customer or a guest email")

    if guest_email:
        return None, guest_email

    try:
        return User.objects.get(pk=draft.customer_id), ""
    except (User.DoesNotExist, ValueError, DjangoValidationError):
        raise NotFoundError(f"Customer {draft.customer_id} not found")


# ============================================================
# CREATE
# ============================================================


@transaction.atomic
def create_order(*, draft: OrderDraft, principal=None) -> Order:
    """
    FLOW:
    1) Validate total, shipping fields, items
    2) Resolve owner (customer XOR guest email)
    3) Persist order, then items bound to it
       (price_at_purchase snapshotted from the live product price)
    """
    from products.models import Product

    total = _validate_draft(draft)
    customer, guest_email = _resolve_owner(draft, principal)
    status = normalize_status(draft.status) if draft.status else Order.STATUS_PENDING

    product_ids = {int(i.product_id) for i in draft.items}
    products = Product.objects.in_bulk(product_ids)
    missing = sorted(product_ids - set(products))
    if missing:
        raise NotFoundError(f"Product(s) not found: {', '.join(str(m) for m in missing)}")

    order = Order(
        customer=customer,
        guest_email=guest_email,
        total_price=total,
        status=status,
        shipping_name=draft.shipping_name.strip(),
        shipping_address_line1=draft.shipping_address_line1.strip(),
        shipping_address_line2=(draft.shipping_address_line2 or "").strip(),
        shipping_city=draft.shipping_city.strip(),
        shipping_postal_code=draft.shipping_postal_code.strip(),
        shipping_country=draft.shipping_country.strip(),
        shipping_phone=(draft.shipping_phone or "").strip(),
    )
    order.save()

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product=products[int(i.product_id)],
                quantity=int(i.quantity),
                price_at_purchase=products[int(i.product_id)].price,
            )
            for i in draft.items
        ]
    )

    logger.info(
        "Order created",
        extra={
            "order_id": order.id,
            "customer_id": str(customer.pk) if customer else None,
            "guest": bool(guest_email),
            "items": len(draft.items),
        },
    )
    return order


# ============================================================
# STATUS TRANSITIONS
# ============================================================


@transaction.atomic
def update_order_status(*, order_id, new_status) -> Order:
    """Unguarded direct set. Any status may be reached from any status."""
    status = normalize_status(new_status)
    order = get_order(order_id)
    previous = order.status

    order.status = status
    order.save(update_fields=["status", "updated_at"])

    logger.info(
        "Order status updated",
        extra={"order_id": order.id, "from_status": previous, "to_status": status},
    )
    return order


def mark_processing(*, order_id) -> Order:
    return update_order_status(order_id=order_id, new_status=Order.STATUS_PROCESSING)


def mark_shipped(*, order_id) -> Order:
    return update_order_status(order_id=order_id, new_status=Order.STATUS_SHIPPED)


def mark_delivered(*, order_id) -> Order:
    return update_order_status(order_id=order_id, new_status=Order.STATUS_DELIVERED)


@transaction.atomic
def cancel_order(*, order_id) -> Order:
    """Guarded: only pending / processing orders may be cancelled."""
    order = Order.objects.select_for_update().filter(pk=order_id).first()
    if order is None:
        raise NotFoundError(f"Order {order_id} not found")

    validate_cancel(order=order)

    previous = order.status
    order.status = Order.STATUS_CANCELLED
    order.save(update_fields=["status", "updated_at"])

    logger.info(
        "Order cancelled",
        extra={"order_id": order.id, "from_status": previous},
    )
    return order


@dataclass
class ItemStatusResult:
    order: Order
    stock_report: Optional[StockDecrementReport] = None


@transaction.atomic
def update_order_item_status(*, item_id, new_status) -> ItemStatusResult:
    """
    Status is tracked per order: updating an item's status sets its parent
    order's status. Entering delivered runs the stock decrement batch.
    """
    status = normalize_status(new_status)
    item = get_order_item(item_id)

    order = Order.objects.select_for_update().get(pk=item.order_id)
    previous = order.status

    order.status = status
    order.save(update_fields=["status", "updated_at"])

    logger.info(
        "Order status updated via item",
        extra={
            "order_id": order.id,
            "order_item_id": item.id,
            "from_status": previous,
            "to_status": status,
        },
    )

    report = None
    if is_delivery_transition(from_status=previous, to_status=status):
        report = decrement_stock_for_order(order=order)
        if not report.ok:
            logger.warning(
                "Delivery stock decrement finished with failures",
                extra={"order_id": order.id, "failures": len(report.failures)},
            )

    return ItemStatusResult(order=order, stock_report=report)


# ============================================================
# ADMIN UPDATE / DELETE
# ============================================================


@transaction.atomic
def update_order(*, order_id, **changes) -> Order:
    """Partial admin update of status and shipping fields."""
    order = get_order(order_id)

    unknown = set(changes) - set(UPDATABLE_ORDER_FIELDS)
    if unknown:
        raise DomainValidationError(f"Fields not updatable: {', '.join(sorted(unknown))}")

    if "status" in changes:
        changes["status"] = normalize_status(changes["status"])

    for name, value in changes.items():
        if name in REQUIRED_SHIPPING_FIELDS and not str(value or "").strip():
            raise DomainValidationError(f"{name} cannot be blank")
        setattr(order, name, value.strip() if isinstance(value, str) else value)

    order.save()
    logger.info("Order updated", extra={"order_id": order.id, "fields": sorted(changes)})
    return order


@transaction.atomic
def delete_order(*, order_id) -> None:
    order = get_order(order_id)
    order.delete()
    logger.info("Order deleted", extra={"order_id": order_id})


# ============================================================
# ARTISAN READ MODELS
# ============================================================


def get_order_with_artisan_items(*, order_id, artisan) -> ArtisanOrderView:
    order = get_order(order_id)

    items = list(
        order.items.select_related("product")
        .filter(product__artisan__user_id=artisan.pk)
        .order_by("id")
    )
    if not items:
        raise NotFoundError(f"Order {order_id} has no items for this artisan")

    return ArtisanOrderView(order=order, items=items)


def get_orders_for_artisan(*, artisan):
    return (
        Order.objects.filter(items__product__artisan__user_id=artisan.pk)
        .distinct()
        .order_by("-created_at", "-id")
    )


# ============================================================
# LISTINGS
# ============================================================


def list_orders():
    return Order.objects.select_related("customer").all()


def list_orders_by_status(status):
    return list_orders().filter(status=normalize_status(status))


def list_recent_orders(*, days: int = 30):
    if int(days) < 0:
        raise DomainValidationError("days cannot be negative")
    since = timezone.now() - timedelta(days=int(days))
    return list_orders().filter(created_at__gte=since)


def list_orders_containing_product(product_id):
    return list_orders().filter(items__product_id=product_id).distinct()


def list_orders_for_customer(customer_id):
    return list_orders().filter(customer_id=customer_id)


def list_guest_orders(email: str):
    email = (email or "").strip().lower()
    if not email:
        raise DomainValidationError("email is required")
    return list_orders().filter(customer__isnull=True, guest_email__iexact=email)


# ============================================================
# STATS
# ============================================================


def _revenue(qs) -> Decimal:
    total = qs.exclude(status=Order.STATUS_CANCELLED).aggregate(total=Sum("total_price"))["total"]
    return (total or Decimal("0.00")).quantize(TWOPLACES)


def revenue_between(*, start, end) -> Decimal:
    if start and end and start > end:
        raise DomainValidationError("start must be before end")
    return _revenue(Order.objects.filter(created_at__gte=start, created_at__lte=end))


def order_stats() -> Dict:
    counts = {value: 0 for value, _label in Order.STATUS_CHOICES}
    for row in Order.objects.values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]

    return {
        "total_orders": sum(counts.values()),
        "by_status": counts,
        "total_revenue": _revenue(Order.objects.all()),
    }
