from .order import (
    ArtisanOrderSerializer,
    OrderCreateSerializer,
    OrderItemSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    OrderUpdateSerializer,
)

__all__ = [
    "OrderSerializer",
    "OrderItemSerializer",
    "OrderCreateSerializer",
    "OrderUpdateSerializer",
    "OrderStatusSerializer",
    "ArtisanOrderSerializer",
]
