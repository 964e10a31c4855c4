"""Wiring of the payment application and its outside dependencies."""

from __future__ import annotations

import contextlib
import logging
from typing import Callable

from gorder.common.metrics import TodoMetrics
from gorder.common.rpc import new_order_client
from gorder.payment.adapters import OrderServiceAdapter
from gorder.payment.app import Application, Commands, new_create_payment_handler
from gorder.payment.processor import InmemProcessor

_LOGGER_NAME = "gorder.payment"


def build_application(order_service, processor) -> Application:
    """Assemble the payment application from its collaborators."""
    logger = logging.getLogger(_LOGGER_NAME)
    metrics_client = TodoMetrics()
    return Application(commands=Commands(
        create_payment=new_create_payment_handler(processor, order_service, logger,
                                                  metrics_client),
    ))


def new_application(config) -> tuple[Application, Callable[[], None]]:
    """Connect to the order service; return the app and a cleanup."""
    order_client = new_order_client(config)
    application = build_application(OrderServiceAdapter(order_client), InmemProcessor())

    def cleanup() -> None:
        with contextlib.suppress(Exception):
            order_client.close()

    return application, cleanup