# products/tests/test_catalog_api.py

from django.test import TestCase
from rest_framework.test import APIClient

from backend.testing import make_admin, make_artisan, make_category, make_customer, make_order, make_product
from products.models import Product, ProductImage


class CategoryApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_admin()

    def test_public_read(self):
        category = make_category(name="Jewelry")
        make_product(artisan=make_artisan(), category=category)

        res = self.client.get("/api/catalog/categories/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data[0]["product_count"], 1)

        res = self.client.get("/api/catalog/categories/slug/jewelry/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["id"], category.id)

    def test_only_admin_writes(self):
        self.client.force_authenticate(make_artisan())
        res = self.client.post("/api/catalog/categories/", {"name": "Glass"}, format="json")
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(self.admin)
        res = self.client.post("/api/catalog/categories/", {"name": "Stained Glass"}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["slug"], "stained-glass")

        res = self.client.post("/api/catalog/categories/", {"name": "stained glass"}, format="json")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["error"]["code"], "DUPLICATE")

    def test_delete_with_products_is_conflict(self):
        category = make_category()
        make_product(artisan=make_artisan(), category=category)
        self.client.force_authenticate(self.admin)

        res = self.client.delete(f"/api/catalog/categories/{category.id}/")

        self.assertEqual(res.status_code, 409)


class ProductApiTests(TestCase):
    """
    GUARANTEES:
    - catalog reads are public and filterable
    - only the owning artisan (or an admin) mutates a product
    - new products are bound to the caller's own profile
    """

    def setUp(self):
        self.client = APIClient()
        self.owner = make_artisan()
        self.other = make_artisan()
        self.admin = make_admin()
        self.category = make_category()
        self.product = make_product(artisan=self.owner, category=self.category, name="Walnut Spoon", stock=4)

    def test_public_list_and_filters(self):
        make_product(artisan=self.other, category=self.category, name="Sold Out Vase", stock=0)

        res = self.client.get("/api/catalog/products/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 2)

        res = self.client.get("/api/catalog/products/", {"in_stock": "true"})
        self.assertEqual([p["id"] for p in res.data], [self.product.id])

        res = self.client.get("/api/catalog/products/", {"q": "vase"})
        self.assertEqual([p["name"] for p in res.data], ["Sold Out Vase"])

        res = self.client.get("/api/catalog/products/", {"artisan": self.owner.artisan_profile.id})
        self.assertEqual([p["id"] for p in res.data], [self.product.id])

    def test_artisan_creates_product_for_own_profile(self):
        self.client.force_authenticate(self.other)

        res = self.client.post(
            "/api/catalog/products/",
            {"name": "Linen Scarf", "price": "30.00", "stock_quantity": 2, "category": self.category.id},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["artisan_id"], self.other.artisan_profile.id)

    def test_customer_cannot_create(self):
        self.client.force_authenticate(make_customer())
        res = self.client.post(
            "/api/catalog/products/",
            {"name": "Scarf", "price": "30.00", "category": self.category.id},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_owner_updates_other_artisan_forbidden(self):
        self.client.force_authenticate(self.other)
        res = self.client.patch(f"/api/catalog/products/{self.product.id}/", {"price": "1.00"}, format="json")
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(self.owner)
        res = self.client.patch(f"/api/catalog/products/{self.product.id}/", {"price": "12.50"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["price"], "12.50")

    def test_stock_set(self):
        self.client.force_authenticate(self.owner)

        res = self.client.patch(f"/api/catalog/products/{self.product.id}/stock/", {"stock_quantity": 9}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["stock_quantity"], 9)

        res = self.client.patch(f"/api/catalog/products/{self.product.id}/stock/", {"stock_quantity": -1}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_toggle_featured_is_admin_only(self):
        url = f"/api/catalog/products/{self.product.id}/toggle-featured/"

        self.client.force_authenticate(self.owner)
        self.assertEqual(self.client.post(url).status_code, 403)

        self.client.force_authenticate(self.admin)
        res = self.client.post(url)
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["is_featured"])

    def test_delete_sold_product_is_conflict(self):
        make_order(customer=make_customer(), items=[(self.product, 1)])
        self.client.force_authenticate(self.owner)

        res = self.client.delete(f"/api/catalog/products/{self.product.id}/")

        self.assertEqual(res.status_code, 409)
        self.assertTrue(Product.objects.filter(pk=self.product.id).exists())

    def test_admin_deletes_any_product(self):
        self.client.force_authenticate(self.admin)
        res = self.client.delete(f"/api/catalog/products/{self.product.id}/")
        self.assertEqual(res.status_code, 204)


class ProductImageApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.owner = make_artisan()
        self.product = make_product(artisan=self.owner)

    def test_owner_adds_image_and_public_reads(self):
        self.client.force_authenticate(self.owner)
        res = self.client.post(
            f"/api/catalog/products/{self.product.id}/images/",
            {"image_url": "https://cdn/a.jpg", "is_primary": True},
            format="json",
        )
        self.assertEqual(res.status_code, 201)

        self.client.force_authenticate(None)
        res = self.client.get(f"/api/catalog/products/{self.product.id}/images/primary/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["image_url"], "https://cdn/a.jpg")

        res = self.client.get(f"/api/catalog/products/{self.product.id}/images/count/")
        self.assertEqual(res.data["count"], 1)

    def test_other_artisan_cannot_touch_images(self):
        image = ProductImage.objects.create(product=self.product, image_url="https://cdn/a.jpg")
        self.client.force_authenticate(make_artisan())

        res = self.client.post(
            f"/api/catalog/products/{self.product.id}/images/",
            {"image_url": "https://cdn/b.jpg"},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

        res = self.client.delete(f"/api/catalog/images/{image.id}/")
        self.assertEqual(res.status_code, 403)

    def test_bulk_and_set_primary(self):
        self.client.force_authenticate(self.owner)

        res = self.client.post(
            f"/api/catalog/products/{self.product.id}/images/bulk/",
            {"image_urls": ["https://cdn/a.jpg", "https://cdn/b.jpg"], "primary_index": 0},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        second_id = res.data[1]["id"]

        res = self.client.post(f"/api/catalog/images/{second_id}/set-primary/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            list(ProductImage.objects.filter(product=self.product, is_primary=True).values_list("id", flat=True)),
            [second_id],
        )
