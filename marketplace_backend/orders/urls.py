# orders/urls.py

"""
ORDER URLS (/api/orders/)
"""

from django.urls import path

from orders.views import (
    ArtisanOrderDetailView,
    ArtisanOrderItemStatusView,
    ArtisanOrdersView,
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

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="orders"),
    # ---------------- LISTINGS ----------------
    path("me/", MyOrdersView.as_view(), name="orders-me"),
    path("customer/<uuid:customer_id>/", CustomerOrdersView.as_view(), name="orders-customer"),
    path("guest/<str:email>/", GuestOrdersView.as_view(), name="orders-guest"),
    path("status/<str:order_status>/", OrdersByStatusView.as_view(), name="orders-by-status"),
    path("recent/", RecentOrdersView.as_view(), name="orders-recent"),
    path("product/<int:product_id>/", OrdersContainingProductView.as_view(), name="orders-containing-product"),
    path("stats/", OrderStatsView.as_view(), name="orders-stats"),
    path("revenue/", OrderRevenueView.as_view(), name="orders-revenue"),
    # ---------------- ARTISAN ----------------
    path("artisan/", ArtisanOrdersView.as_view(), name="orders-artisan"),
    path("<int:order_id>/artisan/", ArtisanOrderDetailView.as_view(), name="order-artisan-detail"),
    path(
        "<int:order_id>/items/<int:item_id>/status/",
        ArtisanOrderItemStatusView.as_view(),
        name="order-item-status",
    ),
    # ---------------- SINGLE ORDER ----------------
    path("<int:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<int:order_id>/items/", OrderItemsView.as_view(), name="order-items"),
    path("<int:order_id>/status/", OrderStatusView.as_view(), name="order-status"),
    path("<int:order_id>/processing/", OrderMarkProcessingView.as_view(), name="order-mark-processing"),
    path("<int:order_id>/shipped/", OrderMarkShippedView.as_view(), name="order-mark-shipped"),
    path("<int:order_id>/delivered/", OrderMarkDeliveredView.as_view(), name="order-mark-delivered"),
    path("<int:order_id>/cancel/", OrderCancelView.as_view(), name="order-cancel"),
]
