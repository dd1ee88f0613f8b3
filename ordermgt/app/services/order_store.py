# ordermgt/app/services/order_store.py
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from ordermgt.app.models.order import Order, OrderChanges

log = logging.getLogger(__name__)


class OrderStore:
    """
    Process-local map of order id -> Order.

    One lock guards the dict; every operation holds it for a single map
    access, so Update's read-modify-write cannot interleave with another
    writer. Stored orders are frozen, readers get a consistent document.
    """

    def __init__(self) -> None:
        self._orders: Dict[str, Order] = {}
        self._lock = threading.RLock()

    def get(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def put(self, order_id: str, order: Order) -> None:
        """Insert or overwrite."""
        with self._lock:
            replaced = order_id in self._orders
            self._orders[order_id] = order
        log.debug("order %s %s", order_id, "replaced" if replaced else "stored")

    def update(self, order_id: str, changes: OrderChanges) -> Optional[Order]:
        """
        Merge Name/Description into the stored order and write it back.
        Returns the merged order, or None (and writes nothing) if absent.
        """
        with self._lock:
            current = self._orders.get(order_id)
            if current is None:
                return None
            merged = current.merged(changes)
            self._orders[order_id] = merged
        log.debug("order %s updated", order_id)
        return merged

    def delete(self, order_id: str) -> None:
        """Remove if present; absent ids are ignored."""
        with self._lock:
            removed = self._orders.pop(order_id, None)
        if removed is not None:
            log.debug("order %s removed", order_id)

    def clear(self) -> None:
        with self._lock:
            self._orders.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)

    def __contains__(self, order_id: object) -> bool:
        with self._lock:
            return order_id in self._orders
