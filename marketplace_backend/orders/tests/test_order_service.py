# orders/tests/test_order_service.py

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.db import transaction
from django.test import TestCase
from django.utils import timezone

from backend.exceptions import DomainValidationError, InvalidStateError, NotFoundError
from backend.testing import SHIPPING, make_artisan, make_customer, make_order, make_product
from orders.models import Order
from orders.services import order_service
from orders.services.order_service import OrderDraft, OrderItemDraft


def _draft(product, **overrides):
    data = {
        "total_price": Decimal("50.00"),
        "items": [OrderItemDraft(product_id=product.id, quantity=1)],
        **SHIPPING,
    }
    data.update(overrides)
    return OrderDraft(**data)


class CreateOrderTests(TestCase):
    """
    GUARANTEES:
    - exactly one of {customer, guest_email} on every order
    - authenticated orders never keep a guest email
    - price_at_purchase is a server-side snapshot
    """

    def setUp(self):
        self.artisan = make_artisan()
        self.customer = make_customer()
        self.product = make_product(artisan=self.artisan, price="20.00")

    def test_guest_order(self):
        order = order_service.create_order(draft=_draft(self.product, guest_email="Guest@Example.com"))

        self.assertIsNone(order.customer_id)
        self.assertEqual(order.guest_email, "guest@example.com")
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.items.count(), 1)

    def test_authenticated_order_discards_guest_email(self):
        order = order_service.create_order(
            draft=_draft(self.product, guest_email="someone@example.com"),
            principal=self.customer,
        )

        self.assertEqual(order.customer_id, self.customer.pk)
        self.assertEqual(order.guest_email, "")

    def test_customer_and_guest_email_together_rejected(self):
        draft = _draft(self.product, customer_id=str(self.customer.pk), guest_email="guest@example.com")

        with self.assertRaises(DomainValidationError):
            order_service.create_order(draft=draft, principal=None)

        self.assertEqual(Order.objects.count(), 0)

    def test_neither_customer_nor_guest_rejected(self):
        with self.assertRaises(DomainValidationError):
            order_service.create_order(draft=_draft(self.product), principal=AnonymousUser())

    def test_missing_shipping_field_rejected(self):
        with self.assertRaises(DomainValidationError):
            order_service.create_order(
                draft=_draft(self.product, guest_email="g@example.com", shipping_city="  "),
            )

    def test_non_positive_total_rejected(self):
        for total in (None, Decimal("0.00"), Decimal("-1.00")):
            with self.subTest(total=total), self.assertRaises(DomainValidationError):
                order_service.create_order(
                    draft=_draft(self.product, guest_email="g@example.com", total_price=total),
                )

    def test_unknown_product_rolls_back(self):
        draft = _draft(self.product, guest_email="g@example.com")
        draft.items.append(OrderItemDraft(product_id=999999, quantity=1))

        with self.assertRaises(NotFoundError):
            order_service.create_order(draft=draft)

        self.assertEqual(Order.objects.count(), 0)

    def test_price_snapshot_ignores_later_price_change(self):
        order = order_service.create_order(draft=_draft(self.product, guest_email="g@example.com"))

        self.product.price = Decimal("99.00")
        self.product.save()

        item = order.items.get()
        item.refresh_from_db()
        self.assertEqual(item.price_at_purchase, Decimal("20.00"))
        self.assertEqual(item.line_total, Decimal("20.00"))


class CancelOrderTests(TestCase):
    def setUp(self):
        self.artisan = make_artisan()
        self.customer = make_customer()
        self.product = make_product(artisan=self.artisan)

    def test_cancel_allowed_before_shipment(self):
        for status in (Order.STATUS_PENDING, Order.STATUS_PROCESSING):
            with self.subTest(status=status):
                order = make_order(customer=self.customer, items=[(self.product, 1)], status=status)
                cancelled = order_service.cancel_order(order_id=order.id)
                self.assertEqual(cancelled.status, Order.STATUS_CANCELLED)

    def test_cancel_after_shipment_is_conflict_and_keeps_status(self):
        for status in (Order.STATUS_SHIPPED, Order.STATUS_DELIVERED):
            with self.subTest(status=status):
                order = make_order(customer=self.customer, items=[(self.product, 1)], status=status)

                with self.assertRaises(InvalidStateError):
                    order_service.cancel_order(order_id=order.id)

                order.refresh_from_db()
                self.assertEqual(order.status, status)

    def test_cancel_missing_order(self):
        with self.assertRaises(NotFoundError):
            order_service.cancel_order(order_id=999999)


class DirectStatusUpdateTests(TestCase):
    def setUp(self):
        self.product = make_product(artisan=make_artisan())
        self.order = make_order(customer=make_customer(), items=[(self.product, 1)])

    def test_direct_set_is_unguarded(self):
        order_service.update_order_status(order_id=self.order.id, new_status="cancelled")
        order = order_service.update_order_status(order_id=self.order.id, new_status="PROCESSING")
        self.assertEqual(order.status, Order.STATUS_PROCESSING)

    def test_invalid_status_rejected(self):
        with self.assertRaises(DomainValidationError):
            order_service.update_order_status(order_id=self.order.id, new_status="lost")

    def test_mark_helpers(self):
        self.assertEqual(order_service.mark_processing(order_id=self.order.id).status, "processing")
        self.assertEqual(order_service.mark_shipped(order_id=self.order.id).status, "shipped")
        self.assertEqual(order_service.mark_delivered(order_id=self.order.id).status, "delivered")


class ItemStatusAndStockTests(TestCase):
    """
    GUARANTEES:
    - item status update sets the parent order status
    - entering delivered decrements stock once, floored at zero
    - a failing product does not block siblings or the status write
    """

    def setUp(self):
        self.artisan = make_artisan()
        self.customer = make_customer()

    def test_delivery_decrements_stock(self):
        product = make_product(artisan=self.artisan, stock=10)
        order = order_service.create_order(
            draft=_draft(product, items=[OrderItemDraft(product_id=product.id, quantity=3)]),
            principal=self.customer,
        )
        item = order.items.get()

        result = order_service.update_order_item_status(item_id=item.id, new_status="delivered")

        product.refresh_from_db()
        self.assertEqual(result.order.status, Order.STATUS_DELIVERED)
        self.assertEqual(product.stock_quantity, 7)
        self.assertTrue(result.stock_report.ok)

    def test_second_delivery_does_not_decrement_again(self):
        product = make_product(artisan=self.artisan, stock=10)
        order = make_order(customer=self.customer, items=[(product, 3)])
        item = order.items.get()

        order_service.update_order_item_status(item_id=item.id, new_status="delivered")
        result = order_service.update_order_item_status(item_id=item.id, new_status="delivered")

        product.refresh_from_db()
        self.assertEqual(product.stock_quantity, 7)
        self.assertIsNone(result.stock_report)

    def test_stock_floors_at_zero(self):
        product = make_product(artisan=self.artisan, stock=2)
        order = make_order(customer=self.customer, items=[(product, 5)])

        order_service.update_order_item_status(item_id=order.items.get().id, new_status="delivered")

        product.refresh_from_db()
        self.assertEqual(product.stock_quantity, 0)

    def test_non_delivery_status_leaves_stock(self):
        product = make_product(artisan=self.artisan, stock=10)
        order = make_order(customer=self.customer, items=[(product, 3)])

        result = order_service.update_order_item_status(item_id=order.items.get().id, new_status="shipped")

        product.refresh_from_db()
        self.assertEqual(product.stock_quantity, 10)
        self.assertEqual(result.order.status, Order.STATUS_SHIPPED)

    def test_failed_decrement_is_isolated(self):
        first = make_product(artisan=self.artisan, name="Bowl", stock=10)
        second = make_product(artisan=self.artisan, name="Vase", stock=10)
        order = make_order(customer=self.customer, items=[(first, 1), (second, 4)])
        first_item = order.items.get(product=first)

        from products.services import catalog

        real_update = catalog.update_product_stock

        def flaky_update(*, product_id, new_stock):
            if product_id == first.id:
                raise RuntimeError("storage hiccup")
            return real_update(product_id=product_id, new_stock=new_stock)

        with mock.patch.object(catalog, "update_product_stock", side_effect=flaky_update):
            result = order_service.update_order_item_status(item_id=first_item.id, new_status="delivered")

        first.refresh_from_db()
        second.refresh_from_db()
        order.refresh_from_db()

        self.assertEqual(order.status, Order.STATUS_DELIVERED)
        self.assertEqual(first.stock_quantity, 10)
        self.assertEqual(second.stock_quantity, 6)
        self.assertEqual([f.product_id for f in result.stock_report.failures], [first.id])

    def test_decrement_shares_the_status_write_transaction(self):
        product = make_product(artisan=self.artisan, stock=10)
        order = make_order(customer=self.customer, items=[(product, 3)])

        with self.assertRaises(RuntimeError):
            with transaction.atomic():
                order_service.update_order_item_status(item_id=order.items.get().id, new_status="delivered")
                raise RuntimeError("outer failure")

        product.refresh_from_db()
        order.refresh_from_db()
        self.assertEqual(product.stock_quantity, 10)
        self.assertEqual(order.status, Order.STATUS_PENDING)

    def test_unknown_item(self):
        with self.assertRaises(NotFoundError):
            order_service.update_order_item_status(item_id=999999, new_status="delivered")


class ArtisanReadModelTests(TestCase):
    def setUp(self):
        self.seller = make_artisan()
        self.other_seller = make_artisan()
        self.mine = make_product(artisan=self.seller, name="Mine")
        self.theirs = make_product(artisan=self.other_seller, name="Theirs")
        self.customer = make_customer()

        self.mixed = make_order(customer=self.customer, items=[(self.mine, 1), (self.mine, 2), (self.theirs, 1)])
        self.foreign = make_order(customer=self.customer, items=[(self.theirs, 1)])

    def test_only_own_items_returned(self):
        view = order_service.get_order_with_artisan_items(order_id=self.mixed.id, artisan=self.seller)

        self.assertEqual(view.order.id, self.mixed.id)
        self.assertEqual(len(view.items), 2)
        self.assertTrue(all(i.product.artisan.user_id == self.seller.pk for i in view.items))
        self.assertEqual(view.artisan_subtotal, Decimal("75.00"))

    def test_empty_intersection_is_not_found(self):
        with self.assertRaises(NotFoundError):
            order_service.get_order_with_artisan_items(order_id=self.foreign.id, artisan=self.seller)

    def test_orders_for_artisan_are_distinct(self):
        ids = list(order_service.get_orders_for_artisan(artisan=self.seller).values_list("id", flat=True))
        self.assertEqual(ids, [self.mixed.id])

        other_ids = set(order_service.get_orders_for_artisan(artisan=self.other_seller).values_list("id", flat=True))
        self.assertEqual(other_ids, {self.mixed.id, self.foreign.id})


class ListingAndStatsTests(TestCase):
    def setUp(self):
        self.product = make_product(artisan=make_artisan())
        self.customer = make_customer()

        self.pending = make_order(customer=self.customer, items=[(self.product, 1)], total="10.00")
        self.delivered = make_order(
            customer=self.customer, items=[(self.product, 1)], total="30.00", status=Order.STATUS_DELIVERED
        )
        self.cancelled = make_order(
            guest_email="g@example.com", items=[(self.product, 1)], total="99.00", status=Order.STATUS_CANCELLED
        )

    def test_stats_exclude_cancelled_revenue(self):
        stats = order_service.order_stats()

        self.assertEqual(stats["total_orders"], 3)
        self.assertEqual(stats["by_status"]["pending"], 1)
        self.assertEqual(stats["by_status"]["shipped"], 0)
        self.assertEqual(stats["total_revenue"], Decimal("40.00"))

    def test_revenue_between(self):
        now = timezone.now()
        revenue = order_service.revenue_between(start=now - timedelta(days=1), end=now + timedelta(days=1))
        self.assertEqual(revenue, Decimal("40.00"))

        empty = order_service.revenue_between(start=now + timedelta(days=1), end=now + timedelta(days=2))
        self.assertEqual(empty, Decimal("0.00"))

    def test_recent_orders_window(self):
        Order.objects.filter(pk=self.pending.pk).update(created_at=timezone.now() - timedelta(days=45))

        recent = set(order_service.list_recent_orders().values_list("id", flat=True))
        self.assertEqual(recent, {self.delivered.id, self.cancelled.id})

    def test_guest_listing_matches_email_case_insensitively(self):
        ids = list(order_service.list_guest_orders("G@Example.com").values_list("id", flat=True))
        self.assertEqual(ids, [self.cancelled.id])

    def test_orders_by_status_and_product(self):
        self.assertEqual(
            list(order_service.list_orders_by_status("delivered").values_list("id", flat=True)),
            [self.delivered.id],
        )
        self.assertEqual(order_service.list_orders_containing_product(self.product.id).count(), 3)

    def test_admin_update_and_delete(self):
        order = order_service.update_order(order_id=self.pending.id, shipping_city="York", status="shipped")
        self.assertEqual(order.shipping_city, "York")
        self.assertEqual(order.status, Order.STATUS_SHIPPED)

        with self.assertRaises(DomainValidationError):
            order_service.update_order(order_id=self.pending.id, shipping_name="")

        order_service.delete_order(order_id=self.pending.id)
        self.assertFalse(Order.objects.filter(pk=self.pending.id).exists())
