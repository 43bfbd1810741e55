# backend/exceptions.py

"""
MARKETPLACE DOMAIN ERRORS

Centralized error taxonomy shared by every service layer.

Each error carries:
- code: stable machine-readable string for the frontend
- http_status: the status the API layer renders it with

Services raise these; views never build error responses by hand.
The DRF exception handler (backend/exception_handler.py) renders them.
"""

from __future__ import annotations


class MarketplaceError(Exception):
    """Base exception for all marketplace service failures."""

    code = "ERROR"
    http_status = 500
    default_message = "Request failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(MarketplaceError):
    """Referenced user/product/order/item/profile/category does not exist."""

    code = "NOT_FOUND"
    http_status = 404
    default_message = "Resource not found."


class ForbiddenError(MarketplaceError):
    """An authorization decision returned False."""

    code = "FORBIDDEN"
    http_status = 403
    default_message = "You do not have permission to perform this action."


class DomainValidationError(MarketplaceError):
    """Malformed or missing required input."""

    code = "VALIDATION_ERROR"
    http_status = 400
    default_message = "Invalid input."


class ConflictError(MarketplaceError):
    """Request conflicts with current state."""

    code = "CONFLICT"
    http_status = 409
    default_message = "Request conflicts with current state."


class InvalidStateError(ConflictError):
    """Illegal lifecycle transition (e.g. cancel after shipment)."""

    code = "INVALID_STATE"


class DuplicateError(ConflictError):
    """Unique key already taken (email, category name/slug, image URL)."""

    code = "DUPLICATE"
