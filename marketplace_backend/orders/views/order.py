# orders/views/order.py

"""
ORDER API VIEWS

Security model:
- checkout (POST /orders/) is AllowAny: guests order with an email,
  authenticated callers are bound to their own account
- every other endpoint consults permissions/policy.py (or a role gate)
  before calling the order service

Status semantics:
- PUT /orders/<id>/status/ and mark-* endpoints are direct sets
- PUT /orders/<id>/cancel/ is the only guarded transition
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from orders.models import Order
from orders.serializers import (
    OrderCreateSerializer,
    OrderItemSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    OrderUpdateSerializer,
)
from orders.services.order_service import (
    cancel_order,
    create_order,
    delete_order,
    get_order,
    list_guest_orders,
    list_orders,
    list_orders_by_status,
    list_orders_containing_product,
    list_orders_for_customer,
    list_recent_orders,
    mark_delivered,
    mark_processing,
    mark_shipped,
    order_stats,
    revenue_between,
    update_order,
    update_order_status,
)
from permissions.policy import (
    can_update_order_status,
    can_view_customer_orders,
    can_view_order,
    require,
)
from permissions.roles import ROLE_ADMIN, IsAdmin, IsCustomer, has_role


class GuestOrderThrottle(AnonRateThrottle):
    scope = "guest_order"


def _orders_response(qs):
    qs = qs.prefetch_related("items", "items__product")
    return Response(OrderSerializer(qs, many=True).data)


def _order_response(order, http_status=status.HTTP_200_OK):
    order = get_order(order.pk)
    return Response(OrderSerializer(order).data, status=http_status)


# =====================================================
# COLLECTION
# =====================================================

class OrderListCreateView(APIView):
    serializer_class = OrderSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAdmin()]

    def get_throttles(self):
        if self.request.method == "POST":
            return [GuestOrderThrottle()]
        return super().get_throttles()

    @extend_schema(
        parameters=[OpenApiParameter("status", str, OpenApiParameter.QUERY, required=False)],
        responses={200: OrderSerializer(many=True)},
        description="Admin: all orders, optionally filtered by status.",
        tags=["Orders"],
    )
    def get(self, request):
        raw_status = (request.query_params.get("status") or "").strip()
        qs = list_orders_by_status(raw_status) if raw_status else list_orders()
        return _orders_response(qs)

    @extend_schema(
        request=OrderCreateSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Validation error (shipping, total, customer/guest)"),
            404: OpenApiResponse(description="Unknown product"),
            429: OpenApiResponse(description="Rate limited"),
        },
        description="Checkout. Guests must supply guest_email; signed-in customers never carry one.",
        tags=["Orders"],
    )
    def post(self, request):
        s = OrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = create_order(draft=s.to_draft(), principal=request.user)
        return _order_response(order, status.HTTP_201_CREATED)


# =====================================================
# SINGLE ORDER
# =====================================================

class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    @extend_schema(responses={200: OrderSerializer}, tags=["Orders"])
    def get(self, request, order_id: int):
        require(can_view_order(request.user, order_id))
        return _order_response(get_order(order_id))

    @extend_schema(request=OrderUpdateSerializer, responses={200: OrderSerializer}, tags=["Orders"])
    def put(self, request, order_id: int):
        require(has_role(request.user, ROLE_ADMIN), "Only admins can edit orders")

        s = OrderUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        return _order_response(update_order(order_id=order_id, **s.validated_data))

    @extend_schema(request=OrderUpdateSerializer, responses={200: OrderSerializer}, tags=["Orders"])
    def patch(self, request, order_id: int):
        return self.put(request, order_id)

    @extend_schema(responses={204: None}, tags=["Orders"])
    def delete(self, request, order_id: int):
        require(has_role(request.user, ROLE_ADMIN), "Only admins can delete orders")

        delete_order(order_id=order_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OrderItemsView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderItemSerializer

    @extend_schema(responses={200: OrderItemSerializer(many=True)}, tags=["Orders"])
    def get(self, request, order_id: int):
        require(can_view_order(request.user, order_id))

        order = get_order(order_id)
        items = order.items.select_related("product").order_by("id")
        return Response(OrderItemSerializer(items, many=True).data)


class OrderStatusView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderStatusSerializer

    @extend_schema(
        request=OrderStatusSerializer,
        responses={200: OrderSerializer},
        description="Direct status set (no transition guard).",
        tags=["Orders"],
    )
    def put(self, request, order_id: int):
        require(can_update_order_status(request.user, order_id))

        s = OrderStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = update_order_status(order_id=order_id, new_status=s.validated_data["status"])
        return _order_response(order)


class OrderMarkStatusView(APIView):
    """PUT /orders/<id>/processing|shipped|delivered/"""

    permission_classes = [IsAuthenticated]
    serializer_class = None
    transition = None

    @extend_schema(request=None, responses={200: OrderSerializer}, tags=["Orders"])
    def put(self, request, order_id: int):
        require(can_update_order_status(request.user, order_id))

        return _order_response(self.transition(order_id=order_id))


class OrderMarkProcessingView(OrderMarkStatusView):
    transition = staticmethod(mark_processing)


class OrderMarkShippedView(OrderMarkStatusView):
    transition = staticmethod(mark_shipped)


class OrderMarkDeliveredView(OrderMarkStatusView):
    transition = staticmethod(mark_delivered)


class OrderCancelView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = None

    @extend_schema(
        request=None,
        responses={
            200: OrderSerializer,
            409: OpenApiResponse(description="Order already shipped or delivered"),
        },
        tags=["Orders"],
    )
    def put(self, request, order_id: int):
        require(can_view_order(request.user, order_id))
        return _order_response(cancel_order(order_id=order_id))


# =====================================================
# LISTINGS
# =====================================================

class MyOrdersView(APIView):
    permission_classes = [IsCustomer]
    serializer_class = OrderSerializer

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request):
        return _orders_response(list_orders_for_customer(request.user.pk))


class CustomerOrdersView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request, customer_id):
        require(can_view_customer_orders(request.user, customer_id))
        return _orders_response(list_orders_for_customer(customer_id))


class GuestOrdersView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [GuestOrderThrottle]
    serializer_class = OrderSerializer

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request, email: str):
        return _orders_response(list_guest_orders(email))


class OrdersByStatusView(APIView):
    permission_classes = [IsAdmin]
    serializer_class = OrderSerializer

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request, order_status: str):
        return _orders_response(list_orders_by_status(order_status))


class RecentOrdersView(APIView):
    permission_classes = [IsAdmin]
    serializer_class = OrderSerializer

    @extend_schema(
        parameters=[OpenApiParameter("days", int, OpenApiParameter.QUERY, required=False)],
        responses={200: OrderSerializer(many=True)},
        tags=["Orders"],
    )
    def get(self, request):
        raw_days = (request.query_params.get("days") or "30").strip()
        try:
            days = int(raw_days)
        except ValueError:
            raise serializers.ValidationError({"days": "days must be a non-negative integer"})
        return _orders_response(list_recent_orders(days=days))


class OrdersContainingProductView(APIView):
    permission_classes = [IsAdmin]
    serializer_class = OrderSerializer

    @extend_schema(responses={200: OrderSerializer(many=True)}, tags=["Orders"])
    def get(self, request, product_id: int):
        return _orders_response(list_orders_containing_product(product_id))


# =====================================================
# STATS (ADMIN)
# =====================================================

class RevenueQuerySerializer(serializers.Serializer):
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()


class OrderStatsView(APIView):
    permission_classes = [IsAdmin]
    serializer_class = None

    @extend_schema(responses={200: OpenApiResponse(description="Counts per status + revenue")}, tags=["Orders"])
    def get(self, request):
        stats = order_stats()
        stats["total_revenue"] = str(stats["total_revenue"])
        return Response(stats)


class OrderRevenueView(APIView):
    permission_classes = [IsAdmin]
    serializer_class = RevenueQuerySerializer

    @extend_schema(
        parameters=[
            OpenApiParameter("start", str, OpenApiParameter.QUERY, required=True),
            OpenApiParameter("end", str, OpenApiParameter.QUERY, required=True),
        ],
        responses={200: OpenApiResponse(description='{"revenue": "0.00"}')},
        description="Revenue (cancelled orders excluded) for orders created in [start, end].",
        tags=["Orders"],
    )
    def get(self, request):
        s = RevenueQuerySerializer(data=request.query_params)
        s.is_valid(raise_exception=True)

        revenue = revenue_between(start=s.validated_data["start"], end=s.validated_data["end"])
        return Response(
            {
                "start": s.validated_data["start"],
                "end": s.validated_data["end"],
                "revenue": str(revenue),
                "excluded_status": Order.STATUS_CANCELLED,
            }
        )
