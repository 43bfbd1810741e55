# products/services/images.py

"""
PRODUCT IMAGE SERVICE

Primary-image invariant (at most one primary per product):
- setting a primary clears the flag on every sibling first
- deleting the primary promotes the oldest remaining image
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from django.db import transaction

from backend.exceptions import DomainValidationError, DuplicateError, NotFoundError
from products.models import Product, ProductImage

logger = logging.getLogger(__name__)


def _clean_url(image_url) -> str:
    url = (image_url or "").strip()
    if not url:
        raise DomainValidationError("image_url is required")
    if len(url) > 500:
        raise DomainValidationError("image_url is too long (max 500)")
    return url


def _get_product(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        raise NotFoundError(f"Product {product_id} not found")


def get_image(image_id) -> ProductImage:
    try:
        return ProductImage.objects.select_related("product").get(pk=image_id)
    except ProductImage.DoesNotExist:
        raise NotFoundError(f"Image {image_id} not found")


def list_images(product_id):
    _get_product(product_id)
    return ProductImage.objects.filter(product_id=product_id)


def get_primary_image(product_id) -> ProductImage:
    _get_product(product_id)
    image = ProductImage.objects.filter(product_id=product_id, is_primary=True).first()
    if image is None:
        raise NotFoundError(f"Product {product_id} has no primary image")
    return image


def count_images(product_id) -> int:
    return ProductImage.objects.filter(product_id=product_id).count()


def _clear_primary(product_id, *, exclude_id=None) -> None:
    qs = ProductImage.objects.filter(product_id=product_id, is_primary=True)
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)
    qs.update(is_primary=False)


@transaction.atomic
def add_image(*, product_id, image_url, is_primary: bool = False) -> ProductImage:
    product = _get_product(product_id)
    url = _clean_url(image_url)

    if ProductImage.objects.filter(product=product, image_url=url).exists():
        raise DuplicateError("This image URL is already attached to the product")

    if is_primary:
        _clear_primary(product.id)

    image = ProductImage.objects.create(product=product, image_url=url, is_primary=bool(is_primary))
    logger.info("Product image added", extra={"product_id": product.id, "image_id": image.id})
    return image


@transaction.atomic
def add_images_bulk(
    *,
    product_id,
    image_urls: Iterable[str],
    primary_index: Optional[int] = None,
) -> List[ProductImage]:
    """
    Adds several images at once. URLs already on the product are skipped.
    primary_index points into image_urls; it is ignored when that URL was skipped.
    """
    product = _get_product(product_id)
    urls = [_clean_url(u) for u in image_urls]

    if primary_index is not None and not (0 <= int(primary_index) < len(urls)):
        raise DomainValidationError("primary_index is out of range")

    existing = set(
        ProductImage.objects.filter(product=product, image_url__in=urls).values_list("image_url", flat=True)
    )

    created: List[ProductImage] = []
    primary_image = None
    for index, url in enumerate(urls):
        if url in existing:
            continue
        existing.add(url)

        image = ProductImage.objects.create(product=product, image_url=url, is_primary=False)
        created.append(image)
        if primary_index is not None and index == int(primary_index):
            primary_image = image

    if primary_image is not None:
        _clear_primary(product.id, exclude_id=primary_image.id)
        primary_image.is_primary = True
        primary_image.save(update_fields=["is_primary"])

    return created


@transaction.atomic
def update_image(*, image_id, image_url=None, is_primary: Optional[bool] = None) -> ProductImage:
    image = get_image(image_id)

    if image_url is not None:
        url = _clean_url(image_url)
        if url != image.image_url:
            if ProductImage.objects.filter(product_id=image.product_id, image_url=url).exists():
                raise DuplicateError("This image URL is already attached to the product")
            image.image_url = url

    if is_primary is True and not image.is_primary:
        _clear_primary(image.product_id, exclude_id=image.id)
        image.is_primary = True
    elif is_primary is False:
        image.is_primary = False

    image.save()
    return image


@transaction.atomic
def set_primary_image(*, image_id) -> ProductImage:
    image = get_image(image_id)
    _clear_primary(image.product_id, exclude_id=image.id)

    if not image.is_primary:
        image.is_primary = True
        image.save(update_fields=["is_primary"])
    return image


@transaction.atomic
def delete_image(*, image_id) -> None:
    image = get_image(image_id)
    product_id = image.product_id
    was_primary = image.is_primary

    image.delete()

    if was_primary:
        survivor = ProductImage.objects.filter(product_id=product_id).order_by("created_at", "id").first()
        if survivor is not None:
            survivor.is_primary = True
            survivor.save(update_fields=["is_primary"])

    logger.info("Product image deleted", extra={"product_id": product_id, "image_id": image_id})


@transaction.atomic
def delete_all_images(*, product_id) -> int:
    _get_product(product_id)
    deleted, _ = ProductImage.objects.filter(product_id=product_id).delete()
    return deleted
