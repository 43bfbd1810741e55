# permissions/policy.py

"""
AUTHORIZATION POLICY ENGINE

Answers "may this principal perform this operation on this resource".

Every decision:
- takes the acting principal explicitly (never read from request globals)
- performs reads only
- fails closed: anonymous / inactive principal, missing resource or role
  mismatch all return False, never raise

Every rule is one of two shapes:
1) ADMIN bypass
2) ownership walk from the resource to the user linked to the owning
   ArtisanProfile (resolved by one helper per resource type below)

Views call these imperatively at the top of each protected mutation and
use `require()` to turn a False into a ForbiddenError.
"""

from __future__ import annotations

from typing import Optional, Set

from django.core.exceptions import ValidationError as DjangoValidationError

from backend.exceptions import ForbiddenError
from permissions.roles import (
    ROLE_ADMIN,
    ROLE_ARTISAN,
    get_user_role,
    is_active_principal,
)


# =========================================================
# OWNER RESOLVERS (resource -> owning artisan user id)
# =========================================================
# A malformed id (e.g. "abc" for an integer pk) is an unknown resource.
MALFORMED_ID_ERRORS = (ValueError, TypeError, DjangoValidationError)


def _first_user_id(model, field: str, **lookup) -> Optional[str]:
    try:
        user_id = model.objects.filter(**lookup).values_list(field, flat=True).first()
    except MALFORMED_ID_ERRORS:
        return None
    return str(user_id) if user_id else None


def resolve_product_owner(product_id) -> Optional[str]:
    from products.models import Product

    return _first_user_id(Product, "artisan__user_id", pk=product_id)


def resolve_product_image_owner(image_id) -> Optional[str]:
    from products.models import ProductImage

    return _first_user_id(ProductImage, "product__artisan__user_id", pk=image_id)


def resolve_artisan_profile_user(profile_id) -> Optional[str]:
    from artisans.models import ArtisanProfile

    return _first_user_id(ArtisanProfile, "user_id", pk=profile_id)


def resolve_order_item_owner(item_id) -> Optional[str]:
    from orders.models import OrderItem

    return _first_user_id(OrderItem, "product__artisan__user_id", pk=item_id)


def resolve_order_artisan_users(order_id) -> Set[str]:
    """All artisan user ids owning at least one item of the order."""
    from orders.models import OrderItem

    try:
        owners = list(
            OrderItem.objects.filter(order_id=order_id)
            .values_list("product__artisan__user_id", flat=True)
            .distinct()
        )
    except MALFORMED_ID_ERRORS:
        return set()
    return {str(o) for o in owners if o}


def resolve_order_customer(order_id) -> Optional[str]:
    from orders.models import Order

    return _first_user_id(Order, "customer_id", pk=order_id)


# =========================================================
# Helpers
# =========================================================
def _principal_id(principal) -> Optional[str]:
    if not is_active_principal(principal):
        return None
    pk = getattr(principal, "pk", None)
    return str(pk) if pk is not None else None


def _is_admin(principal) -> bool:
    return get_user_role(principal) == ROLE_ADMIN


def _is_artisan(principal) -> bool:
    return get_user_role(principal) == ROLE_ARTISAN


def _artisan_owns(principal, owner_id: Optional[str]) -> bool:
    if not _is_artisan(principal) or owner_id is None:
        return False
    return _principal_id(principal) == owner_id


def require(decision: bool, message: str | None = None) -> None:
    if not decision:
        raise ForbiddenError(message)


# =========================================================
# CATALOG DECISIONS
# =========================================================
def can_edit_product(principal, product_id) -> bool:
    if _is_admin(principal):
        return True
    return _artisan_owns(principal, resolve_product_owner(product_id))


def can_edit_artisan_profile(principal, profile_id) -> bool:
    # Linked user may edit regardless of role; admins always may.
    if _is_admin(principal):
        return True

    principal_id = _principal_id(principal)
    if principal_id is None:
        return False
    return resolve_artisan_profile_user(profile_id) == principal_id


def can_create_product_image(principal, product_id) -> bool:
    return can_edit_product(principal, product_id)


def can_edit_product_image(principal, image_id) -> bool:
    if _is_admin(principal):
        return True
    return _artisan_owns(principal, resolve_product_image_owner(image_id))


# =========================================================
# ORDER DECISIONS
# =========================================================
def artisan_has_products_in_order(principal, order_id) -> bool:
    if not _is_artisan(principal):
        return False
    return _principal_id(principal) in resolve_order_artisan_users(order_id)


def artisan_owns_order_item(principal, item_id) -> bool:
    return _artisan_owns(principal, resolve_order_item_owner(item_id))


def can_view_order(principal, order_id) -> bool:
    if _is_admin(principal):
        return True

    principal_id = _principal_id(principal)
    if principal_id is None:
        return False

    if resolve_order_customer(order_id) == principal_id:
        return True

    return artisan_has_products_in_order(principal, order_id)


def can_view_customer_orders(principal, customer_id) -> bool:
    if _is_admin(principal):
        return True

    principal_id = _principal_id(principal)
    if principal_id is None or customer_id is None:
        return False
    return principal_id == str(customer_id)


def can_update_order_status(principal, order_id) -> bool:
    if _is_admin(principal):
        return True
    return artisan_has_products_in_order(principal, order_id)
