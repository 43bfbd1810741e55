# orders/tests/test_order_api.py

from decimal import Decimal

from django.test import TestCase
from rest_framework.test import APIClient

from backend.testing import SHIPPING, make_admin, make_artisan, make_customer, make_order, make_product
from orders.models import Order


def _checkout_payload(product, quantity=1, **extra):
    payload = {
        "total_price": "25.00",
        "items": [{"product_id": product.id, "quantity": quantity}],
        **SHIPPING,
    }
    payload.update(extra)
    return payload


class CheckoutApiTests(TestCase):
    """
    GUARANTEES:
    - guests check out with an email and no account
    - signed-in callers are bound to their own account
    - malformed checkout never writes an order
    """

    def setUp(self):
        self.client = APIClient()
        self.product = make_product(artisan=make_artisan(), price="25.00")
        self.customer = make_customer()

    def test_guest_checkout(self):
        res = self.client.post(
            "/api/orders/",
            _checkout_payload(self.product, guest_email="guest@example.com"),
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertIsNone(res.data["customer_id"])
        self.assertEqual(res.data["guest_email"], "guest@example.com")
        self.assertEqual(res.data["status"], "pending")
        self.assertEqual(len(res.data["items"]), 1)
        self.assertEqual(Decimal(res.data["items"][0]["price_at_purchase"]), Decimal("25.00"))

    def test_guest_checkout_without_email_rejected(self):
        res = self.client.post("/api/orders/", _checkout_payload(self.product), format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(Order.objects.count(), 0)

    def test_customer_checkout_drops_guest_email(self):
        self.client.force_authenticate(self.customer)

        res = self.client.post(
            "/api/orders/",
            _checkout_payload(self.product, guest_email="other@example.com"),
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["customer_id"], str(self.customer.pk))
        self.assertEqual(res.data["guest_email"], "")

    def test_zero_total_rejected(self):
        res = self.client.post(
            "/api/orders/",
            _checkout_payload(self.product, guest_email="g@example.com", total_price="0.00"),
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_unknown_product_is_404(self):
        payload = _checkout_payload(self.product, guest_email="g@example.com")
        payload["items"][0]["product_id"] = 999999

        res = self.client.post("/api/orders/", payload, format="json")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "NOT_FOUND")


class OrderAccessApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_admin()
        self.customer = make_customer()
        self.stranger = make_customer()
        self.seller = make_artisan()
        self.product = make_product(artisan=self.seller, stock=10)
        self.order = make_order(customer=self.customer, items=[(self.product, 3)])

    def test_owner_and_admin_can_read(self):
        for user in (self.customer, self.admin, self.seller):
            with self.subTest(user=user.email):
                self.client.force_authenticate(user)
                res = self.client.get(f"/api/orders/{self.order.id}/")
                self.assertEqual(res.status_code, 200)
                self.assertEqual(res.data["id"], self.order.id)

    def test_stranger_is_forbidden(self):
        self.client.force_authenticate(self.stranger)

        res = self.client.get(f"/api/orders/{self.order.id}/")

        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["error"]["code"], "FORBIDDEN")

    def test_admin_listing_requires_admin(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get("/api/orders/").status_code, 403)

        self.client.force_authenticate(self.admin)
        res = self.client.get("/api/orders/", {"status": "pending"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual([o["id"] for o in res.data], [self.order.id])

    def test_my_orders(self):
        make_order(customer=self.stranger, items=[(self.product, 1)])
        self.client.force_authenticate(self.customer)

        res = self.client.get("/api/orders/me/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([o["id"] for o in res.data], [self.order.id])

    def test_customer_orders_guarded(self):
        self.client.force_authenticate(self.stranger)
        res = self.client.get(f"/api/orders/customer/{self.customer.pk}/")
        self.assertEqual(res.status_code, 403)

    def test_admin_edit_and_delete(self):
        self.client.force_authenticate(self.customer)
        res = self.client.patch(f"/api/orders/{self.order.id}/", {"shipping_city": "York"}, format="json")
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(self.admin)
        res = self.client.patch(f"/api/orders/{self.order.id}/", {"shipping_city": "York"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["shipping_city"], "York")

        res = self.client.delete(f"/api/orders/{self.order.id}/")
        self.assertEqual(res.status_code, 204)
        self.assertFalse(Order.objects.filter(pk=self.order.id).exists())


class OrderLifecycleApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_admin()
        self.customer = make_customer()
        self.seller = make_artisan()
        self.other_seller = make_artisan()
        self.product = make_product(artisan=self.seller, stock=10)
        self.order = make_order(customer=self.customer, items=[(self.product, 3)])

    def test_owner_cancels_pending_order(self):
        self.client.force_authenticate(self.customer)

        res = self.client.put(f"/api/orders/{self.order.id}/cancel/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "cancelled")

    def test_cancel_shipped_order_is_conflict(self):
        Order.objects.filter(pk=self.order.pk).update(status=Order.STATUS_SHIPPED)
        self.client.force_authenticate(self.customer)

        res = self.client.put(f"/api/orders/{self.order.id}/cancel/")

        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["error"]["code"], "INVALID_STATE")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_SHIPPED)

    def test_customer_cannot_set_status(self):
        self.client.force_authenticate(self.customer)
        res = self.client.put(f"/api/orders/{self.order.id}/status/", {"status": "shipped"}, format="json")
        self.assertEqual(res.status_code, 403)

    def test_involved_artisan_sets_status(self):
        self.client.force_authenticate(self.seller)

        res = self.client.put(f"/api/orders/{self.order.id}/shipped/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "shipped")

    def test_mark_delivered_on_order_leaves_stock(self):
        self.client.force_authenticate(self.admin)

        res = self.client.put(f"/api/orders/{self.order.id}/delivered/")

        self.assertEqual(res.status_code, 200)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 10)

    def test_item_delivery_decrements_stock(self):
        item = self.order.items.get()
        self.client.force_authenticate(self.seller)

        res = self.client.put(
            f"/api/orders/{self.order.id}/items/{item.id}/status/",
            {"status": "delivered"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "delivered")
        self.assertEqual(res.data["stock_updated"], [self.product.id])
        self.assertEqual(res.data["stock_failures"], [])
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 7)

    def test_item_status_by_other_artisan_forbidden(self):
        item = self.order.items.get()
        self.client.force_authenticate(self.other_seller)

        res = self.client.put(
            f"/api/orders/{self.order.id}/items/{item.id}/status/",
            {"status": "delivered"},
            format="json",
        )

        self.assertEqual(res.status_code, 403)
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock_quantity, 10)

    def test_item_must_belong_to_order(self):
        other = make_order(customer=self.customer, items=[(self.product, 1)])
        item = self.order.items.get()
        self.client.force_authenticate(self.seller)

        res = self.client.put(
            f"/api/orders/{other.id}/items/{item.id}/status/",
            {"status": "shipped"},
            format="json",
        )

        self.assertEqual(res.status_code, 404)

    def test_artisan_order_view_is_scoped(self):
        theirs = make_product(artisan=self.other_seller, name="Theirs")
        mixed = make_order(customer=self.customer, items=[(self.product, 1), (theirs, 2)])
        self.client.force_authenticate(self.seller)

        res = self.client.get(f"/api/orders/{mixed.id}/artisan/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([i["product_id"] for i in res.data["items"]], [self.product.id])

        res = self.client.get("/api/orders/artisan/")
        self.assertEqual({o["id"] for o in res.data}, {self.order.id, mixed.id})


class OrderStatsApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(make_admin())
        product = make_product(artisan=make_artisan())
        make_order(guest_email="g@example.com", items=[(product, 1)], total="20.00")
        make_order(guest_email="g@example.com", items=[(product, 1)], total="80.00", status=Order.STATUS_CANCELLED)

    def test_stats(self):
        res = self.client.get("/api/orders/stats/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["total_orders"], 2)
        self.assertEqual(res.data["by_status"]["cancelled"], 1)
        self.assertEqual(res.data["total_revenue"], "20.00")

    def test_revenue_requires_window(self):
        self.assertEqual(self.client.get("/api/orders/revenue/").status_code, 400)

    def test_guest_listing_is_public(self):
        self.client.force_authenticate(None)

        res = self.client.get("/api/orders/guest/g@example.com/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 2)
