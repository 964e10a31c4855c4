"""Order storage in memory and the client side of the stock service."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from gorder.common.entities import Item, ItemWithQuantity
from gorder.order.domain import NotFoundError, Order, Repository, UpdateFn

log = logging.getLogger(__name__)


class MemoryOrderRepository(Repository):
    """Thread-safe in-memory order store, seeded with one placeholder order."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._lock = threading.RLock()
        self._clock = clock
        self._store: list[Order] = [
            Order(
                id="fake-ID",
                customer_id="fake-customer-id",
                status="fake-order-status",
                payment_link="fake-payment-link",
                items=None,
            )
        ]

    def create(self, order: Order) -> Order:
        with self._lock:
            created = Order(
                id=str(int(self._clock())),
                customer_id=order.customer_id,
                status=order.status,
                payment_link=order.payment_link,
                items=order.items,
            )
            self._store.append(created)
            log.debug("memory_order_repository Create",
                      extra={"fields": {"input_order": order,
                                        "store_after_create": list(self._store)}})
            return created

    def get(self, order_id: str, customer_id: str) -> Order:
        with self._lock:
            for stored in self._store:
                log.debug("store entry=%r", stored)
            for stored in self._store:
                if stored.id == order_id and stored.customer_id == customer_id:
                    log.debug("memory_order_repo_get||found||id=%s||customerID=%s||res=%r",
                              order_id, customer_id, stored)
                    return stored
        raise NotFoundError(order_id)

    def update(self, order: Order, update_fn: UpdateFn) -> None:
        with self._lock:
            found = False
            for index, stored in enumerate(self._store):
                if stored.id == order.id and stored.customer_id == order.customer_id:
                    found = True
                    self._store[index] = update_fn(order)
            if not found:
                raise NotFoundError(order.id)


class StockServiceAdapter:
    """Stock service access for the order application."""

    def __init__(self, client):
        self._client = client

    def check_if_items_in_stock(self, items: list[ItemWithQuantity] | None) -> dict[str, Any]:
        if items is None:
            raise ValueError("grpc items cannot be nil")
        resp = self._client.check_if_items_in_stock(items)
        log.info("stock_grpc response %s", resp)
        return resp

    def get_items(self, item_ids: list[str]) -> list[Item]:
        return self._client.get_items(item_ids)