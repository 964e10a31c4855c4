import logging

import pytest

from gorder.common.entities import ItemWithQuantity
from gorder.stock.adapters import MemoryStockRepository
from gorder.stock.app import (
    CheckIfItemsInStock,
    CheckIfItemsInStockHandler,
    GetItems,
    GetItemsHandler,
    new_check_if_items_in_stock_handler,
    new_get_items_handler,
)
from gorder.stock.domain import NotFoundError


class RecordingMetrics:
    def __init__(self):
        self.keys = []

    def inc(self, key, value):
        self.keys.append(key)


def test_check_returns_requested_quantities():
    handler = CheckIfItemsInStockHandler(MemoryStockRepository())
    items = handler.handle(CheckIfItemsInStock(items=[
        ItemWithQuantity(id="item1", quantity=3), ItemWithQuantity(id="x", quantity=1),
    ]))
    assert [(i.id, i.quantity) for i in items] == [("item1", 3), ("x", 1)]


def test_check_empty_returns_empty():
    assert CheckIfItemsInStockHandler(MemoryStockRepository()).handle(CheckIfItemsInStock()) == []


def test_get_items_reads_repository():
    items = GetItemsHandler(MemoryStockRepository()).handle(GetItems(item_ids=["item3"]))
    assert [i.name for i in items] == ["stub item 3"]


def test_get_items_propagates_not_found():
    with pytest.raises(NotFoundError):
        GetItemsHandler(MemoryStockRepository()).handle(GetItems(item_ids=["nope"]))


def test_decorated_handler_records_success():
    metrics = RecordingMetrics()
    handler = new_get_items_handler(MemoryStockRepository(), logging.getLogger("t"), metrics)
    assert [i.id for i in handler.handle(GetItems(item_ids=["item1"]))] == ["item1"]
    assert "querys.getitems.success" in metrics.keys


def test_decorated_handler_records_failure():
    metrics = RecordingMetrics()
    handler = new_get_items_handler(MemoryStockRepository(), logging.getLogger("t"), metrics)
    with pytest.raises(NotFoundError):
        handler.handle(GetItems(item_ids=["nope"]))
    assert "querys.getitems.failure" in metrics.keys


def test_factories_reject_missing_repository():
    with pytest.raises(ValueError, match="nil stockRepo"):
        new_get_items_handler(None, logging.getLogger("t"), RecordingMetrics())
    with pytest.raises(ValueError, match="nil stockRepo"):
        new_check_if_items_in_stock_handler(None, logging.getLogger("t"), RecordingMetrics())