"""Payment processors that turn orders into payment links."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gorder.common.entities import OrderPayload

_INMEM_LINK = "inmem-payment-link"


class Processor(ABC):
    """Creates a payment link for an order."""

    @abstractmethod
    def create_payment_link(self, order: OrderPayload) -> str: ...


class InmemProcessor(Processor):
    """A processor that hands out a fixed link and remembers which orders got one."""

    def __init__(self) -> None:
        self.issued: dict[str, str] = {}

    def create_payment_link(self, order: OrderPayload) -> str:
        order_id = getattr(order, "id", "")
        self.issued[order_id] = _INMEM_LINK
        return self.issued[order_id]