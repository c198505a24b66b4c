"""
Storefront Backend - Order Store
=================================

What:  In-memory order collection with list / create / hide / delete operations.
How:   One ordered list plus a monotonic id counter, both guarded by a single
       `threading.Lock`. Every public method does all of its reading and
       writing inside that lock and never awaits or performs I/O while
       holding it.
Who:   Created once per application by `create_app()` and injected into
       route handlers through `get_order_store`.

Invariants:
    - Ids are assigned 1, 2, 3, ... in creation order and never reused,
      even after the order holding one is deleted.
    - Storage order is creation order; nothing reorders the list.
    - Callers only ever receive copies, never the stored records.

Visibility:
    requester == admin name → every order, hidden ones included
    any other requester     → own orders with hidden == False
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from fastapi import Request

from storefront.config import settings
from storefront.exceptions import NotFoundError, ValidationError
from storefront.models.order import Order, Product

logger = logging.getLogger(__name__)


class OrderStore:
    """
    Process-local order collection.

    State is lost when the process exits. A fresh instance starts empty with
    the next id at 1, which is what tests rely on for isolation.
    """

    def __init__(self, admin_username: Optional[str] = None):
        self.admin_username = admin_username or settings.admin_username
        self._orders: List[Order] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def list_orders(self, requester: str) -> List[Order]:
        """
        Orders visible to `requester`, in creation order.

        Returns an empty list (never None) when nothing matches.
        """
        with self._lock:
            if requester == self.admin_username:
                return [o.snapshot() for o in self._orders]
            return [
                o.snapshot() for o in self._orders
                if o.username == requester and not o.hidden
            ]

    def create(self, username: str, items: Optional[Iterable[Product]] = None) -> Order:
        """
        Store a new order and return it with its server-assigned fields.

        Raises:
            ValidationError: `username` is empty or whitespace-only. The store
                is left untouched.
        """
        if not username or not username.strip():
            raise ValidationError(message="username required", field="username")

        item_list = list(items) if items is not None else []

        with self._lock:
            order = Order(
                id=self._next_id,
                username=username,
                items=item_list,
                created_at=datetime.now(timezone.utc),
                hidden=False,
            )
            self._next_id += 1
            self._orders.append(order)
            created = order.snapshot()

        logger.info("Order %d created for %s (%d items)", created.id, username, len(item_list))
        return created

    def hide(self, order_id: int) -> bool:
        """
        Mark an order hidden from its owner.

        Idempotent. An unknown id is a no-op, not an error; the return value
        tells whether an order matched.
        """
        matched = False
        with self._lock:
            for order in self._orders:
                if order.id == order_id:
                    order.hidden = True
                    matched = True
                    break

        if not matched:
            logger.warning("Hide requested for unknown order %s; ignoring", order_id)
            return False
        logger.info("Order %d hidden", order_id)
        return True

    def delete(self, order_id: int) -> None:
        """
        Remove the order with `order_id`.

        Raises:
            NotFoundError: No stored order has that id.
        """
        with self._lock:
            index = next(
                (i for i, o in enumerate(self._orders) if o.id == order_id),
                None,
            )
            if index is not None:
                del self._orders[index]

        if index is None:
            raise NotFoundError(resource="order", resource_id=order_id)
        logger.info("Order %d deleted", order_id)

    def delete_by_username(self, username: str) -> int:
        """
        Remove every order placed by exactly `username`.

        Zero matches is a success. Returns the number of orders removed.

        Raises:
            ValidationError: `username` is empty or whitespace-only.
        """
        if not username or not username.strip():
            raise ValidationError(message="username required", field="username")

        with self._lock:
            before = len(self._orders)
            self._orders = [o for o in self._orders if o.username != username]
            removed = before - len(self._orders)

        logger.info("Deleted %d orders for %s", removed, username)
        return removed

    def count(self) -> int:
        with self._lock:
            return len(self._orders)


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_order_store(request: Request) -> OrderStore:
    """
    Resolve the application's OrderStore for a request.

    Example usage in a route:
        @router.get("/orders")
        async def list_orders(store: OrderStore = Depends(get_order_store)):
            return store.list_orders("admin")
    """
    return request.app.state.order_store
