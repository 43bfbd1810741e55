# cart/services/cart_service.py

"""
CART SERVICE

Rules:
- one CartItem per (user, product); add merges quantity
- a new line snapshots the product's live price into price_at_time
- prices are never synced on read; only resync_* overwrite the snapshot
- quantity >= 1
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction

from backend.exceptions import DomainValidationError, NotFoundError
from cart.models import CartItem

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _to_qty(value) -> int:
    if isinstance(value, bool):
        raise DomainValidationError("quantity must be a whole number")
    try:
        qty = int(value)
    except (TypeError, ValueError):
        raise DomainValidationError("quantity must be a whole number")
    if qty < 1:
        raise DomainValidationError("quantity must be at least 1")
    return qty


def _get_product(product_id):
    from products.models import Product

    try:
        return Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Product {product_id} not found")


def get_cart_items(user):
    return CartItem.objects.filter(user=user).select_related("product").order_by("created_at", "id")


def get_cart_item(*, user, item_id) -> CartItem:
    try:
        return CartItem.objects.select_related("product").get(pk=item_id, user=user)
    except CartItem.DoesNotExist:
        raise NotFoundError(f"Cart item {item_id} not found")


def _get_item_by_product(*, user, product_id) -> CartItem:
    item = CartItem.objects.select_related("product").filter(user=user, product_id=product_id).first()
    if item is None:
        raise NotFoundError(f"Product {product_id} is not in the cart")
    return item


@transaction.atomic
def add_to_cart(*, user, product_id, quantity) -> CartItem:
    qty = _to_qty(quantity)
    product = _get_product(product_id)

    item, created = CartItem.objects.select_for_update().get_or_create(
        user=user,
        product=product,
        defaults={"quantity": qty, "price_at_time": product.price},
    )

    if not created:
        item.quantity = int(item.quantity) + qty
        item.save(update_fields=["quantity", "updated_at"])

    logger.info(
        "Cart add",
        extra={
            "user_id": str(user.pk),
            "product_id": product.id,
            "quantity": item.quantity,
            "merged": not created,
        },
    )
    return item


@transaction.atomic
def update_item_quantity(*, user, item_id, quantity) -> CartItem:
    item = get_cart_item(user=user, item_id=item_id)
    item.quantity = _to_qty(quantity)
    item.save(update_fields=["quantity", "updated_at"])
    return item


@transaction.atomic
def update_product_quantity(*, user, product_id, quantity) -> CartItem:
    item = _get_item_by_product(user=user, product_id=product_id)
    item.quantity = _to_qty(quantity)
    item.save(update_fields=["quantity", "updated_at"])
    return item


@transaction.atomic
def remove_item(*, user, item_id) -> None:
    get_cart_item(user=user, item_id=item_id).delete()


@transaction.atomic
def remove_product(*, user, product_id) -> None:
    _get_item_by_product(user=user, product_id=product_id).delete()


@transaction.atomic
def clear_cart(*, user) -> int:
    deleted, _ = CartItem.objects.filter(user=user).delete()
    return deleted


def count_items(user) -> int:
    return CartItem.objects.filter(user=user).count()


def contains_product(*, user, product_id) -> bool:
    return CartItem.objects.filter(user=user, product_id=product_id).exists()


def cart_total(user) -> Decimal:
    total = Decimal("0.00")
    for item in CartItem.objects.filter(user=user).only("quantity", "price_at_time"):
        total += Decimal(item.price_at_time) * int(item.quantity)
    return total.quantize(TWOPLACES)


@transaction.atomic
def resync_item_price(*, user, item_id) -> CartItem:
    item = get_cart_item(user=user, item_id=item_id)
    item.price_at_time = item.product.price
    item.save(update_fields=["price_at_time", "updated_at"])
    return item


@transaction.atomic
def resync_cart_prices(*, user) -> int:
    updated = 0
    for item in get_cart_items(user).select_for_update():
        if item.price_at_time != item.product.price:
            item.price_at_time = item.product.price
            item.save(update_fields=["price_at_time", "updated_at"])
            updated += 1
    return updated
