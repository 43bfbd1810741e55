# products/services/catalog.py

"""
======================================================
PATH: products/services/catalog.py
======================================================
PRODUCT CATALOG SERVICES

Purpose:
- Product CRUD bound to the owning artisan profile
- Featured toggle (admin)
- Direct stock set (`update_product_stock`), also used by the
  delivery stock effect in orders/services/stock_effects.py

Rules:
- price > 0, stock_quantity >= 0
- authorization is decided by the caller (permissions/policy.py)
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from backend.exceptions import DomainValidationError, NotFoundError
from products.models import Category, Product

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "price", "stock_quantity", "category")


def _to_int(value, *, field_name="value") -> int:
    if value is None or value == "":
        raise DomainValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise DomainValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DomainValidationError(f"{field_name} must be an integer")


def _to_price(value) -> Decimal:
    if value is None or value == "":
        raise DomainValidationError("price is required")
    try:
        price = Decimal(str(value)).quantize(Decimal("0.01"))
    except (InvalidOperation, TypeError, ValueError):
        raise DomainValidationError("price must be a valid decimal")
    if price <= Decimal("0.00"):
        raise DomainValidationError("price must be greater than zero")
    return price


def _to_stock(value) -> int:
    stock = _to_int(value, field_name="stock_quantity")
    if stock < 0:
        raise DomainValidationError("stock_quantity cannot be negative")
    return stock


def _resolve_category(value) -> Category:
    if isinstance(value, Category):
        return value
    if value in (None, ""):
        raise DomainValidationError("category is required")
    try:
        return Category.objects.get(pk=value)
    except (Category.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Category {value} not found")


# =========================================================
# READS
# =========================================================
def get_product(product_id) -> Product:
    try:
        return Product.objects.select_related("artisan", "artisan__user", "category").get(pk=product_id)
    except Product.DoesNotExist:
        raise NotFoundError(f"Product {product_id} not found")


# =========================================================
# WRITES
# =========================================================
@transaction.atomic
def create_product(
    *,
    artisan_profile,
    category,
    name: str,
    price,
    description: str = "",
    stock_quantity=0,
) -> Product:
    name = (name or "").strip()
    if not name:
        raise DomainValidationError("name is required")

    product = Product.objects.create(
        artisan=artisan_profile,
        category=_resolve_category(category),
        name=name,
        description=(description or "").strip(),
        price=_to_price(price),
        stock_quantity=_to_stock(stock_quantity),
    )

    logger.info(
        "Product created",
        extra={"product_id": product.id, "artisan_profile_id": artisan_profile.id},
    )
    return product


@transaction.atomic
def update_product(*, product_id, **changes) -> Product:
    product = get_product(product_id)

    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise DomainValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise DomainValidationError("name cannot be blank")
        product.name = name
    if "description" in changes:
        product.description = (changes["description"] or "").strip()
    if "price" in changes:
        product.price = _to_price(changes["price"])
    if "stock_quantity" in changes:
        product.stock_quantity = _to_stock(changes["stock_quantity"])
    if "category" in changes:
        product.category = _resolve_category(changes["category"])

    product.save()
    return product


@transaction.atomic
def delete_product(*, product_id) -> None:
    product = get_product(product_id)
    product.delete()
    logger.info("Product deleted", extra={"product_id": product_id})


@transaction.atomic
def toggle_featured(*, product_id) -> Product:
    product = get_product(product_id)
    product.is_featured = not product.is_featured
    product.save(update_fields=["is_featured", "updated_at"])
    return product


@transaction.atomic
def update_product_stock(*, product_id, new_stock) -> Product:
    """Direct stock set. No delta semantics; the caller computes the value."""
    stock = _to_stock(new_stock)

    product = Product.objects.select_for_update().filter(pk=product_id).first()
    if product is None:
        raise NotFoundError(f"Product {product_id} not found")

    product.stock_quantity = stock
    product.save(update_fields=["stock_quantity", "updated_at"])
    return product
