# backend/testing.py

"""
Test seeding helpers shared by every app's tests.

Each helper creates the minimum valid rows for one entity and
returns the model instance.
"""

from __future__ import annotations

import itertools
from decimal import Decimal

from django.contrib.auth import get_user_model

from artisans.models import ArtisanProfile
from orders.models import Order, OrderItem
from permissions.roles import ROLE_ADMIN, ROLE_ARTISAN, ROLE_CUSTOMER
from products.models import Category, Product

User = get_user_model()

PASSWORD = "Str0ng-pass!"

_seq = itertools.count(1)


def _email(prefix: str) -> str:
    return f"{prefix}{next(_seq)}@example.com"


def make_customer(*, email=None, is_active=True):
    return User.objects.create_user(
        email=email or _email("customer"),
        password=PASSWORD,
        role=ROLE_CUSTOMER,
        is_active=is_active,
    )


def make_admin(*, email=None):
    return User.objects.create_user(
        email=email or _email("admin"),
        password=PASSWORD,
        role=ROLE_ADMIN,
        is_staff=True,
    )


def make_artisan(*, email=None, display_name=None, with_profile=True, is_active=True):
    user = User.objects.create_user(
        email=email or _email("artisan"),
        password=PASSWORD,
        role=ROLE_ARTISAN,
        is_active=is_active,
    )
    if with_profile:
        ArtisanProfile.objects.create(user=user, display_name=display_name or f"Studio {user.email}")
    return user


def make_category(*, name=None):
    name = name or f"Category {next(_seq)}"
    return Category.objects.create(name=name, slug=name.lower().replace(" ", "-"))


def make_product(*, artisan, category=None, name="Clay Mug", price="25.00", stock=10):
    return Product.objects.create(
        artisan=artisan.artisan_profile,
        category=category or make_category(),
        name=name,
        price=Decimal(price),
        stock_quantity=stock,
    )


SHIPPING = {
    "shipping_name": "Ada Lovelace",
    "shipping_address_line1": "12 Kiln Street",
    "shipping_city": "Leeds",
    "shipping_postal_code": "LS1 4AB",
    "shipping_country": "UK",
}


def make_order(*, customer=None, guest_email="", items=(), status=Order.STATUS_PENDING, total="50.00"):
    """items: iterable of (product, quantity)."""
    order = Order.objects.create(
        customer=customer,
        guest_email=guest_email,
        status=status,
        total_price=Decimal(total),
        **SHIPPING,
    )
    for product, quantity in items:
        OrderItem.objects.create(
            order=order,
            product=product,
            quantity=quantity,
            price_at_purchase=product.price,
        )
    return order
