# orders/views/artisan.py

"""
ARTISAN ORDER VIEWS

An artisan only ever sees the slice of an order that contains their own
products. Status is still tracked per order: updating "an item's status"
sets the parent order's status (delivery decrements stock).
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exceptions import NotFoundError
from orders.serializers import ArtisanOrderSerializer, OrderSerializer, OrderStatusSerializer
from orders.services.order_service import (
    get_order_item,
    get_order_with_artisan_items,
    get_orders_for_artisan,
    update_order_item_status,
)
from permissions.policy import artisan_has_products_in_order, artisan_owns_order_item, require
from permissions.roles import IsArtisan


class ArtisanOrdersView(APIView):
    permission_classes = [IsArtisan]
    serializer_class = OrderSerializer

    @extend_schema(
        responses={200: OrderSerializer(many=True)},
        description="Distinct orders containing at least one of the caller's products.",
        tags=["Orders"],
    )
    def get(self, request):
        qs = get_orders_for_artisan(artisan=request.user).prefetch_related("items", "items__product")
        return Response(OrderSerializer(qs, many=True).data)


class ArtisanOrderDetailView(APIView):
    permission_classes = [IsArtisan]
    serializer_class = ArtisanOrderSerializer

    @extend_schema(responses={200: ArtisanOrderSerializer}, tags=["Orders"])
    def get(self, request, order_id: int):
        require(artisan_has_products_in_order(request.user, order_id))

        view = get_order_with_artisan_items(order_id=order_id, artisan=request.user)
        return Response(ArtisanOrderSerializer(view).data)


class ArtisanOrderItemStatusView(APIView):
    permission_classes = [IsArtisan]
    serializer_class = OrderStatusSerializer

    @extend_schema(
        request=OrderStatusSerializer,
        responses={
            200: OpenApiResponse(description="Updated order + stock decrement report (on delivery)"),
        },
        tags=["Orders"],
    )
    def put(self, request, order_id: int, item_id: int):
        require(artisan_owns_order_item(request.user, item_id))

        if get_order_item(item_id).order_id != order_id:
            raise NotFoundError(f"Order item {item_id} not found in order {order_id}")

        s = OrderStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = update_order_item_status(item_id=item_id, new_status=s.validated_data["status"])

        report = result.stock_report
        return Response(
            {
                "order_id": result.order.id,
                "item_id": item_id,
                "status": result.order.status,
                "stock_updated": report.decremented if report else [],
                "stock_failures": [
                    {"item_id": f.item_id, "product_id": f.product_id, "error": f.error}
                    for f in (report.failures if report else [])
                ],
            }
        )
