"""Order service access for the payment application."""

from __future__ import annotations

import logging

from gorder.common.entities import OrderPayload

log = logging.getLogger(__name__)


class OrderServiceAdapter:
    """Forwards order updates to the order service client."""

    def __init__(self, client):
        self._client = client

    def update_order(self, order: OrderPayload) -> None:
        try:
            self._client.update_order(order)
        except Exception as err:
            log.info("payment_adapter||update_order,err=%s", err)
            raise