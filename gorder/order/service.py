"""Wiring of the order application and its outside dependencies."""

from __future__ import annotations

import contextlib
import logging
from typing import Callable

from gorder.common.broker import connect
from gorder.common.metrics import TodoMetrics
from gorder.common.rpc import new_stock_client
from gorder.order.adapters import MemoryOrderRepository, StockServiceAdapter
from gorder.order.app import (
    Application,
    Commands,
    Queries,
    new_create_order_handler,
    new_get_customer_order_handler,
    new_update_order_handler,
)

_LOGGER_NAME = "gorder.order"


def build_application(stock_service, channel) -> Application:
    """Assemble the order application around an in-memory repository."""
    order_repo = MemoryOrderRepository()
    logger = logging.getLogger(_LOGGER_NAME)
    metrics_client = TodoMetrics()
    return Application(
        commands=Commands(
            create_order=new_create_order_handler(
                order_repo, stock_service, logger, channel, metrics_client
            ),
            update_order=new_update_order_handler(order_repo, logger, metrics_client),
        ),
        queries=Queries(
            get_customer_order=new_get_customer_order_handler(
                order_repo, logger, metrics_client
            ),
        ),
    )


def new_application(config) -> tuple[Application, Callable[[], None]]:
    """Connect to the stock service and the broker; return the app and a cleanup."""
    stock_client = new_stock_client(config)
    channel, close_connection = connect(
        config.get_string("rabbitmq.user"),
        config.get_string("rabbitmq.password"),
        config.get_string("rabbitmq.host"),
        config.get_string("rabbitmq.port"),
    )
    application = build_application(StockServiceAdapter(stock_client), channel)

    def cleanup() -> None:
        with contextlib.suppress(Exception):
            stock_client.close()
        with contextlib.suppress(Exception):
            if channel.is_open:
                channel.close()
        with contextlib.suppress(Exception):
            close_connection()

    return application, cleanup