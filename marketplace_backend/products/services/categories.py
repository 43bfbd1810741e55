# products/services/categories.py

"""
CATEGORY SERVICE

- slug derived from name: lowercase, drop anything outside [a-z0-9 -],
  whitespace -> '-', collapse repeated '-', trim '-' at both ends
- slug collisions resolved with a numeric suffix (-1, -2, ...)
- duplicate name -> DuplicateError
- delete blocked while the category still owns products
"""

from __future__ import annotations

import logging
import re

from django.db import transaction

from backend.exceptions import ConflictError, DomainValidationError, DuplicateError, NotFoundError
from products.models import Category

logger = logging.getLogger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-+")


def slugify_name(name: str) -> str:
    slug = (name or "").lower()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _DASHES.sub("-", slug)
    return slug.strip("-")


def generate_unique_slug(name: str, *, exclude_id=None) -> str:
    base = slugify_name(name)
    if not base:
        raise DomainValidationError("Category name must contain letters or digits")

    qs = Category.objects.all()
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)

    slug = base
    counter = 1
    while qs.filter(slug=slug).exists():
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def get_category(category_id) -> Category:
    try:
        return Category.objects.get(pk=category_id)
    except Category.DoesNotExist:
        raise NotFoundError(f"Category {category_id} not found")


def get_category_by_slug(slug: str) -> Category:
    try:
        return Category.objects.get(slug=slug)
    except Category.DoesNotExist:
        raise NotFoundError(f"Category '{slug}' not found")


def _clean_name(name) -> str:
    name = (name or "").strip()
    if not name:
        raise DomainValidationError("Category name is required")
    return name


@transaction.atomic
def create_category(*, name: str) -> Category:
    name = _clean_name(name)
    if Category.objects.filter(name__iexact=name).exists():
        raise DuplicateError(f"Category '{name}' already exists")

    category = Category.objects.create(name=name, slug=generate_unique_slug(name))
    logger.info("Category created", extra={"category_id": category.id, "slug": category.slug})
    return category


@transaction.atomic
def update_category(*, category_id, name: str) -> Category:
    category = get_category(category_id)
    name = _clean_name(name)

    if name == category.name:
        return category

    if Category.objects.filter(name__iexact=name).exclude(pk=category.pk).exists():
        raise DuplicateError(f"Category '{name}' already exists")

    category.name = name
    category.slug = generate_unique_slug(name, exclude_id=category.pk)
    category.save(update_fields=["name", "slug", "updated_at"])
    return category


@transaction.atomic
def delete_category(*, category_id) -> None:
    category = get_category(category_id)
    if category.products.exists():
        raise ConflictError("Cannot delete a category that still has products")

    category.delete()
    logger.info("Category deleted", extra={"category_id": category_id})
