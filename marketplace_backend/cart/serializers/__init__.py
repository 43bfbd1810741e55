from .cart import AddToCartSerializer, CartItemSerializer, UpdateQuantitySerializer

__all__ = ["CartItemSerializer", "AddToCartSerializer", "UpdateQuantitySerializer"]
