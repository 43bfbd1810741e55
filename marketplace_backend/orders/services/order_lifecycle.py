"""
ORDER LIFECYCLE DOMAIN RULES

Happy path (forward only):
    pending -> processing -> shipped -> delivered

Cancellation (guarded):
    pending | processing -> cancelled

DESIGN PRINCIPLES:
- No database writes
- No stock mutation
- Only the dedicated cancel operation consults CANCELLABLE_STATES;
  the direct status-set operations are unguarded admin overrides
"""

from backend.exceptions import DomainValidationError, InvalidStateError
from orders.models import Order

# ============================================================
# STATE DEFINITIONS
# ============================================================

VALID_STATUSES = {value for value, _label in Order.STATUS_CHOICES}

CANCELLABLE_STATES = {
    Order.STATUS_PENDING,
    Order.STATUS_PROCESSING,
}


# ============================================================
# DOMAIN RULES
# ============================================================


def normalize_status(value) -> str:
    status = (str(value or "")).strip().lower()
    if status not in VALID_STATUSES:
        raise DomainValidationError(
            f"Invalid order status '{value}'. Allowed: {', '.join(sorted(VALID_STATUSES))}"
        )
    return status


def can_cancel(*, from_status: str) -> bool:
    return from_status in CANCELLABLE_STATES


def validate_cancel(*, order: Order):
    if not can_cancel(from_status=order.status):
        raise InvalidStateError(
            f"Order {order.id} cannot be cancelled from '{order.status}'"
        )


def is_delivery_transition(*, from_status: str, to_status: str) -> bool:
    return to_status == Order.STATUS_DELIVERED and from_status != Order.STATUS_DELIVERED
