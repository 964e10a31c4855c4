"""Wiring of the stock application."""

from __future__ import annotations

import logging

from gorder.common.metrics import TodoMetrics
from gorder.stock.adapters import MemoryStockRepository
from gorder.stock.app import (
    Application,
    Queries,
    new_check_if_items_in_stock_handler,
    new_get_items_handler,
)


def new_application() -> Application:
    """Assemble the stock application around an in-memory repository."""
    stock_repo = MemoryStockRepository()
    logger = logging.getLogger("gorder.stock")
    metrics_client = TodoMetrics()
    return Application(queries=Queries(
        check_if_items_in_stock=new_check_if_items_in_stock_handler(
            stock_repo, logger, metrics_client),
        get_items=new_get_items_handler(stock_repo, logger, metrics_client),
    ))