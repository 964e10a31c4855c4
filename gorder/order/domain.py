"""Order aggregate and the repository contract it is stored through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from gorder.common.entities import Item, OrderPayload


@dataclass
class Order:
    """A customer order."""

    id: str = ""
    customer_id: str = ""
    status: str = ""
    payment_link: str = ""
    items: list[Item] | None = None

    def to_proto(self) -> OrderPayload:
        """The wire form of this order."""
        return OrderPayload(
            id=self.id,
            customer_id=self.customer_id,
            status=self.status,
            payment_link=self.payment_link,
            items=self.items,
        )


def new_order(order_id: str, customer_id: str, status: str, payment_link: str,
              items: list[Item] | None) -> Order:
    """Build an order, rejecting missing identity, status or items."""
    if not order_id:
        raise ValueError("empty id")
    if not customer_id:
        raise ValueError("empty customerID")
    if not status:
        raise ValueError("empty status")
    if items is None:
        raise ValueError("empty items")
    return Order(id=order_id, customer_id=customer_id, status=status,
                 payment_link=payment_link, items=items)


class NotFoundError(LookupError):
    """No order with the requested id exists for the customer."""

    def __init__(self, order_id: str):
        super().__init__(f"order not found: {order_id}")
        self.order_id = order_id


UpdateFn = Callable[[Order], Order]


class Repository(ABC):
    """Storage of orders."""

    @abstractmethod
    def create(self, order: Order) -> Order: ...

    @abstractmethod
    def get(self, order_id: str, customer_id: str) -> Order: ...

    @abstractmethod
    def update(self, order: Order, update_fn: UpdateFn) -> None: ...