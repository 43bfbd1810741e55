from .cart_item import CartItem

__all__ = ["CartItem"]
