"""HTTP entry points of the payment service."""

from __future__ import annotations

import logging

from flask import Flask

log = logging.getLogger(__name__)


class PaymentHandler:
    """Receives payment provider webhooks."""

    def register_routes(self, app: Flask) -> None:
        app.add_url_rule("/api/webhook", endpoint="payment_webhook",
                         view_func=self._handle_webhook, methods=["POST"])

    def _handle_webhook(self):
        log.info("Got webhook from stripe")
        return "", 200