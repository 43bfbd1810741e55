# cart/urls.py

from django.urls import path

from cart.views import (
    CartContainsProductView,
    CartCountView,
    CartItemDetailView,
    CartItemResyncView,
    CartItemsView,
    CartProductView,
    CartResyncView,
    CartTotalView,
    CartView,
)

urlpatterns = [
    path("", CartView.as_view(), name="cart"),
    path("items/", CartItemsView.as_view(), name="cart-items"),
    path("items/<int:item_id>/", CartItemDetailView.as_view(), name="cart-item-detail"),
    path("items/<int:item_id>/resync/", CartItemResyncView.as_view(), name="cart-item-resync"),
    path("products/<int:product_id>/", CartProductView.as_view(), name="cart-product"),
    path("products/<int:product_id>/contains/", CartContainsProductView.as_view(), name="cart-contains-product"),
    path("count/", CartCountView.as_view(), name="cart-count"),
    path("total/", CartTotalView.as_view(), name="cart-total"),
    path("resync/", CartResyncView.as_view(), name="cart-resync"),
]
