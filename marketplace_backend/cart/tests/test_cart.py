# cart/tests/test_cart.py

from decimal import Decimal

from django.db import IntegrityError
from django.test import TestCase
from rest_framework.test import APIClient

from backend.exceptions import DomainValidationError, NotFoundError
from backend.testing import make_admin, make_artisan, make_customer, make_product
from cart.models import CartItem
from cart.services import cart_service


class CartServiceTests(TestCase):
    """
    Cart rules.

    GUARANTEES:
    - one row per (user, product); re-adding merges quantity
    - price_at_time is captured on add and never refreshed on read
    - only resync overwrites the snapshot
    """

    def setUp(self):
        self.customer = make_customer()
        self.product = make_product(artisan=make_artisan(), price="10.00")

    def test_add_twice_merges(self):
        cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=2)
        item = cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=3)

        self.assertEqual(item.quantity, 5)
        self.assertEqual(CartItem.objects.filter(user=self.customer).count(), 1)

    def test_database_rejects_second_row(self):
        CartItem.objects.create(user=self.customer, product=self.product, quantity=1, price_at_time=Decimal("10.00"))
        with self.assertRaises(IntegrityError):
            CartItem.objects.create(user=self.customer, product=self.product, quantity=1, price_at_time=Decimal("10.00"))

    def test_snapshot_survives_price_change_until_resync(self):
        item = cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=2)

        self.product.price = Decimal("12.00")
        self.product.save()

        self.assertEqual(cart_service.cart_total(self.customer), Decimal("20.00"))

        cart_service.resync_item_price(user=self.customer, item_id=item.id)
        self.assertEqual(cart_service.cart_total(self.customer), Decimal("24.00"))

    def test_resync_cart_counts_changed_lines(self):
        other = make_product(artisan=make_artisan(), name="Basket", price="5.00")
        cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=1)
        cart_service.add_to_cart(user=self.customer, product_id=other.id, quantity=1)

        self.product.price = Decimal("11.00")
        self.product.save()

        self.assertEqual(cart_service.resync_cart_prices(user=self.customer), 1)
        self.assertEqual(cart_service.cart_total(self.customer), Decimal("16.00"))

    def test_quantity_must_be_positive(self):
        for qty in (0, -1, "x", True):
            with self.subTest(qty=qty), self.assertRaises(DomainValidationError):
                cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=qty)

    def test_unknown_product(self):
        with self.assertRaises(NotFoundError):
            cart_service.add_to_cart(user=self.customer, product_id=999999, quantity=1)

    def test_update_remove_and_clear(self):
        item = cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=1)

        self.assertEqual(
            cart_service.update_product_quantity(user=self.customer, product_id=self.product.id, quantity=4).quantity,
            4,
        )
        self.assertTrue(cart_service.contains_product(user=self.customer, product_id=self.product.id))

        cart_service.remove_item(user=self.customer, item_id=item.id)
        self.assertEqual(cart_service.count_items(self.customer), 0)
        self.assertEqual(cart_service.cart_total(self.customer), Decimal("0.00"))

        cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=1)
        self.assertEqual(cart_service.clear_cart(user=self.customer), 1)

    def test_other_users_item_is_not_found(self):
        item = cart_service.add_to_cart(user=self.customer, product_id=self.product.id, quantity=1)
        with self.assertRaises(NotFoundError):
            cart_service.update_item_quantity(user=make_customer(), item_id=item.id, quantity=2)


class CartApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.customer = make_customer()
        self.product = make_product(artisan=make_artisan(), price="7.50")
        self.client.force_authenticate(self.customer)

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        self.assertIn(self.client.get("/api/cart/").status_code, (401, 403))

    def test_add_and_read_cart(self):
        res = self.client.post("/api/cart/items/", {"product_id": self.product.id, "quantity": 2}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["price_at_time"], "7.50")

        self.client.post("/api/cart/items/", {"product_id": self.product.id, "quantity": 1}, format="json")

        res = self.client.get("/api/cart/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["items"][0]["quantity"], 3)
        self.assertEqual(res.data["total"], "22.50")

    def test_zero_quantity_rejected(self):
        res = self.client.post("/api/cart/items/", {"product_id": self.product.id, "quantity": 0}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_other_cart_needs_admin(self):
        other = make_customer()
        cart_service.add_to_cart(user=other, product_id=self.product.id, quantity=1)

        res = self.client.get("/api/cart/count/", {"user_id": str(other.pk)})
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(make_admin())
        res = self.client.get("/api/cart/count/", {"user_id": str(other.pk)})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

    def test_resync_endpoint(self):
        self.client.post("/api/cart/items/", {"product_id": self.product.id, "quantity": 2}, format="json")
        self.product.price = Decimal("8.00")
        self.product.save()

        res = self.client.post("/api/cart/resync/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["updated"], 1)
        self.assertEqual(res.data["total"], "16.00")
