from .artisan import ArtisanOrderDetailView, ArtisanOrderItemStatusView, ArtisanOrdersView
from .order import (
    CustomerOrdersView,
    GuestOrdersView,
    MyOrdersView,
    OrderCancelView,
    OrderDetailView,
    OrderItemsView,
    OrderListCreateView,
    OrderMarkDeliveredView,
    OrderMarkProcessingView,
    OrderMarkShippedView,
    OrderRevenueView,
    OrdersByStatusView,
    OrdersContainingProductView,
    OrderStatsView,
    OrderStatusView,
    RecentOrdersView,
)

__all__ = [
    "OrderListCreateView",
    "OrderDetailView",
    "OrderItemsView",
    "OrderStatusView",
    "OrderMarkProcessingView",
    "OrderMarkShippedView",
    "OrderMarkDeliveredView",
    "OrderCancelView",
    "MyOrdersView",
    "CustomerOrdersView",
    "GuestOrdersView",
    "OrdersByStatusView",
    "RecentOrdersView",
    "OrdersContainingProductView",
    "OrderStatsView",
    "OrderRevenueView",
    "ArtisanOrdersView",
    "ArtisanOrderDetailView",
    "ArtisanOrderItemStatusView",
]
