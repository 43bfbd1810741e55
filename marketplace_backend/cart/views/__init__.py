from .cart import (
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

__all__ = [
    "CartView",
    "CartItemsView",
    "CartItemDetailView",
    "CartItemResyncView",
    "CartProductView",
    "CartContainsProductView",
    "CartCountView",
    "CartTotalView",
    "CartResyncView",
]
