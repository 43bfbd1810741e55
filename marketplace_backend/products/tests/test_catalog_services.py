# products/tests/test_catalog_services.py

from decimal import Decimal

from django.db import IntegrityError
from django.test import TestCase

from backend.exceptions import ConflictError, DomainValidationError, DuplicateError, NotFoundError
from backend.testing import make_artisan, make_category, make_product
from products.models import ProductImage
from products.services import catalog, categories, images


class CategoryServiceTests(TestCase):
    """
    GUARANTEES:
    - slugs are derived from the name and stay unique
    - names are unique case-insensitively
    - a category that still owns products cannot be deleted
    """

    def test_slugify_name(self):
        self.assertEqual(categories.slugify_name("  Hand-made   Pottery!! "), "hand-made-pottery")
        self.assertEqual(categories.slugify_name("--Glass & Wood--"), "glass-wood")

    def test_slug_collision_gets_numeric_suffix(self):
        first = categories.create_category(name="Wood Craft")
        second = categories.create_category(name="Wood  Craft!")
        third = categories.create_category(name="wood-craft?")

        self.assertEqual(first.slug, "wood-craft")
        self.assertEqual(second.slug, "wood-craft-1")
        self.assertEqual(third.slug, "wood-craft-2")

    def test_duplicate_name_rejected(self):
        categories.create_category(name="Ceramics")
        with self.assertRaises(DuplicateError):
            categories.create_category(name="ceramics")

    def test_name_without_slug_characters_rejected(self):
        with self.assertRaises(DomainValidationError):
            categories.create_category(name="!!!")

    def test_rename_regenerates_slug(self):
        category = categories.create_category(name="Textiles")
        renamed = categories.update_category(category_id=category.id, name="Woven Textiles")
        self.assertEqual(renamed.slug, "woven-textiles")
        self.assertEqual(categories.get_category_by_slug("woven-textiles").id, category.id)

    def test_delete_blocked_while_products_exist(self):
        category = make_category()
        make_product(artisan=make_artisan(), category=category)

        with self.assertRaises(ConflictError):
            categories.delete_category(category_id=category.id)

    def test_delete_empty_category(self):
        category = make_category()
        categories.delete_category(category_id=category.id)
        with self.assertRaises(NotFoundError):
            categories.get_category(category.id)


class ProductServiceTests(TestCase):
    def setUp(self):
        self.artisan = make_artisan()
        self.category = make_category()

    def test_create_product(self):
        product = catalog.create_product(
            artisan_profile=self.artisan.artisan_profile,
            category=self.category.id,
            name="  Oak Bowl ",
            price="40",
            stock_quantity=3,
        )

        self.assertEqual(product.name, "Oak Bowl")
        self.assertEqual(product.price, Decimal("40.00"))
        self.assertFalse(product.is_featured)

    def test_invalid_price_and_stock_rejected(self):
        for price, stock in (("0", 1), ("-2.00", 1), ("abc", 1), ("10.00", -1)):
            with self.subTest(price=price, stock=stock), self.assertRaises(DomainValidationError):
                catalog.create_product(
                    artisan_profile=self.artisan.artisan_profile,
                    category=self.category,
                    name="Bowl",
                    price=price,
                    stock_quantity=stock,
                )

    def test_unknown_category_is_not_found(self):
        with self.assertRaises(NotFoundError):
            catalog.create_product(
                artisan_profile=self.artisan.artisan_profile,
                category=999999,
                name="Bowl",
                price="10.00",
            )

    def test_update_rejects_non_editable_fields(self):
        product = make_product(artisan=self.artisan, category=self.category)
        with self.assertRaises(DomainValidationError):
            catalog.update_product(product_id=product.id, is_featured=True)

    def test_toggle_featured_and_stock_set(self):
        product = make_product(artisan=self.artisan, category=self.category, stock=5)

        self.assertTrue(catalog.toggle_featured(product_id=product.id).is_featured)
        self.assertFalse(catalog.toggle_featured(product_id=product.id).is_featured)

        self.assertEqual(catalog.update_product_stock(product_id=product.id, new_stock=12).stock_quantity, 12)
        with self.assertRaises(DomainValidationError):
            catalog.update_product_stock(product_id=product.id, new_stock=-1)


class ProductImageServiceTests(TestCase):
    """
    GUARANTEES:
    - at most one primary image per product
    - deleting the primary promotes the oldest survivor
    - an image URL appears once per product
    """

    def setUp(self):
        self.product = make_product(artisan=make_artisan())

    def _primary_ids(self):
        return list(
            ProductImage.objects.filter(product=self.product, is_primary=True).values_list("id", flat=True)
        )

    def test_new_primary_clears_previous(self):
        first = images.add_image(product_id=self.product.id, image_url="https://cdn/a.jpg", is_primary=True)
        second = images.add_image(product_id=self.product.id, image_url="https://cdn/b.jpg", is_primary=True)

        self.assertEqual(self._primary_ids(), [second.id])
        first.refresh_from_db()
        self.assertFalse(first.is_primary)

    def test_set_primary_and_update(self):
        first = images.add_image(product_id=self.product.id, image_url="https://cdn/a.jpg", is_primary=True)
        second = images.add_image(product_id=self.product.id, image_url="https://cdn/b.jpg")

        images.set_primary_image(image_id=second.id)
        self.assertEqual(self._primary_ids(), [second.id])

        images.update_image(image_id=first.id, is_primary=True)
        self.assertEqual(self._primary_ids(), [first.id])
        self.assertEqual(images.get_primary_image(self.product.id).id, first.id)

    def test_duplicate_url_rejected(self):
        images.add_image(product_id=self.product.id, image_url="https://cdn/a.jpg")
        with self.assertRaises(DuplicateError):
            images.add_image(product_id=self.product.id, image_url=" https://cdn/a.jpg ")

    def test_database_rejects_two_primaries(self):
        ProductImage.objects.create(product=self.product, image_url="https://cdn/a.jpg", is_primary=True)
        with self.assertRaises(IntegrityError):
            ProductImage.objects.create(product=self.product, image_url="https://cdn/b.jpg", is_primary=True)

    def test_bulk_add_skips_existing_and_sets_primary(self):
        images.add_image(product_id=self.product.id, image_url="https://cdn/a.jpg", is_primary=True)

        created = images.add_images_bulk(
            product_id=self.product.id,
            image_urls=["https://cdn/a.jpg", "https://cdn/b.jpg", "https://cdn/c.jpg"],
            primary_index=2,
        )

        self.assertEqual([i.image_url for i in created], ["https://cdn/b.jpg", "https://cdn/c.jpg"])
        self.assertEqual(images.count_images(self.product.id), 3)
        self.assertEqual(images.get_primary_image(self.product.id).image_url, "https://cdn/c.jpg")

    def test_bulk_primary_index_out_of_range(self):
        with self.assertRaises(DomainValidationError):
            images.add_images_bulk(product_id=self.product.id, image_urls=["https://cdn/a.jpg"], primary_index=3)

    def test_deleting_primary_promotes_oldest(self):
        primary = images.add_image(product_id=self.product.id, image_url="https://cdn/a.jpg", is_primary=True)
        older = images.add_image(product_id=self.product.id, image_url="https://cdn/b.jpg")
        images.add_image(product_id=self.product.id, image_url="https://cdn/c.jpg")

        images.delete_image(image_id=primary.id)

        self.assertEqual(self._primary_ids(), [older.id])

    def test_no_primary_is_not_found(self):
        images.add_image(product_id=self.product.id, image_url="https://cdn/a.jpg")
        with self.assertRaises(NotFoundError):
            images.get_primary_image(self.product.id)

    def test_delete_all(self):
        images.add_images_bulk(product_id=self.product.id, image_urls=["https://cdn/a.jpg", "https://cdn/b.jpg"])
        self.assertEqual(images.delete_all_images(product_id=self.product.id), 2)
        self.assertEqual(images.count_images(self.product.id), 0)
