# orders/serializers/order.py

"""
ORDER SERIALIZERS

Output shapes are acyclic: items carry product + order ids, never the
order object itself. The artisan view is its own read model
(ArtisanOrderSerializer over ArtisanOrderView), not a trimmed Order.
"""

from decimal import Decimal

from rest_framework import serializers

from orders.models import Order, OrderItem
from orders.services.order_service import OrderDraft, OrderItemDraft


class OrderItemSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True)
    product_id = serializers.IntegerField(read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "order_id",
            "product_id",
            "product_name",
            "quantity",
            "price_at_purchase",
            "line_total",
        ]
        read_only_fields = fields


SHIPPING_FIELDS = [
    "shipping_name",
    "shipping_address_line1",
    "shipping_address_line2",
    "shipping_city",
    "shipping_postal_code",
    "shipping_country",
    "shipping_phone",
]


class OrderSerializer(serializers.ModelSerializer):
    customer_id = serializers.UUIDField(read_only=True, allow_null=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_id",
            "guest_email",
            "status",
            "total_price",
            *SHIPPING_FIELDS,
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ArtisanOrderSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="order.id")
    status = serializers.CharField(source="order.status")
    created_at = serializers.DateTimeField(source="order.created_at")
    shipping_name = serializers.CharField(source="order.shipping_name")
    shipping_city = serializers.CharField(source="order.shipping_city")
    shipping_country = serializers.CharField(source="order.shipping_country")
    items = OrderItemSerializer(many=True)
    artisan_subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


# ---------------- INPUT ----------------
class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(serializers.Serializer):
    """
    Checkout input. Authenticated callers never send guest_email (it is
    discarded); anonymous callers must send it.
    """

    total_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    guest_email = serializers.EmailField(required=False, allow_blank=True, default="")
    shipping_name = serializers.CharField(max_length=200)
    shipping_address_line1 = serializers.CharField(max_length=255)
    shipping_address_line2 = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    shipping_city = serializers.CharField(max_length=120)
    shipping_postal_code = serializers.CharField(max_length=20)
    shipping_country = serializers.CharField(max_length=120)
    shipping_phone = serializers.CharField(max_length=40, required=False, allow_blank=True, default="")
    items = OrderItemInputSerializer(many=True)

    def validate_total_price(self, value):
        if value is None or value <= Decimal("0.00"):
            raise serializers.ValidationError("total_price must be greater than zero")
        return value

    def to_draft(self) -> OrderDraft:
        data = dict(self.validated_data)
        items = [OrderItemDraft(**i) for i in data.pop("items")]
        return OrderDraft(items=items, **data)


class OrderUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES, required=False)
    shipping_name = serializers.CharField(max_length=200, required=False)
    shipping_address_line1 = serializers.CharField(max_length=255, required=False)
    shipping_address_line2 = serializers.CharField(max_length=255, required=False, allow_blank=True)
    shipping_city = serializers.CharField(max_length=120, required=False)
    shipping_postal_code = serializers.CharField(max_length=20, required=False)
    shipping_country = serializers.CharField(max_length=120, required=False)
    shipping_phone = serializers.CharField(max_length=40, required=False, allow_blank=True)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)
