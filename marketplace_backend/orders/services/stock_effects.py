# orders/services/stock_effects.py

"""
DELIVERY STOCK EFFECT (BEST-EFFORT BATCH)

When an order becomes delivered, every item's product stock is decremented
by the item quantity, floored at zero.

Rules:
- each item runs in its own savepoint; one failure never blocks siblings
- failures are logged and collected, never raised
- runs inside the caller's transaction, after the status write; a failed
  item only rolls back its own savepoint, so the status write and the
  other items still commit with the enclosing transaction
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from django.db import transaction

from orders.models import Order

logger = logging.getLogger(__name__)


@dataclass
class StockDecrementFailure:
    item_id: int
    product_id: int
    error: str


@dataclass
class StockDecrementReport:
    order_id: int
    decremented: List[int] = field(default_factory=list)
    failures: List[StockDecrementFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def decrement_stock_for_order(*, order: Order) -> StockDecrementReport:
    from products.models import Product
    from products.services.catalog import update_product_stock

    report = StockDecrementReport(order_id=order.id)

    for item in order.items.all().order_by("id"):
        try:
            with transaction.atomic():
                product = Product.objects.select_for_update().get(pk=item.product_id)
                new_stock = max(0, int(product.stock_quantity) - int(item.quantity))
                update_product_stock(product_id=product.id, new_stock=new_stock)
        except Exception as exc:
            logger.warning(
                "Stock decrement failed",
                extra={
                    "order_id": order.id,
                    "order_item_id": item.id,
                    "product_id": item.product_id,
                    "error": str(exc),
                },
            )
            report.failures.append(
                StockDecrementFailure(
                    item_id=item.id,
                    product_id=item.product_id,
                    error=str(exc),
                )
            )
            continue

        report.decremented.append(item.product_id)
        logger.info(
            "Stock decremented",
            extra={
                "order_id": order.id,
                "product_id": item.product_id,
                "quantity": item.quantity,
                "new_stock": new_stock,
            },
        )

    return report
