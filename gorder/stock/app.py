"""Stock queries and the application that bundles them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from gorder.common.decorator import apply_query_decorators
from gorder.common.entities import Item, ItemWithQuantity
from gorder.stock.domain import Repository


@dataclass
class CheckIfItemsInStock:
    items: list[ItemWithQuantity] = field(default_factory=list)


@dataclass
class GetItems:
    item_ids: list[str] = field(default_factory=list)


class CheckIfItemsInStockHandler:
    """Report the requested items and quantities as available."""

    def __init__(self, stock_repo: Repository):
        self.stock_repo = stock_repo

    def handle(self, query: CheckIfItemsInStock) -> list[Item]:
        return [Item(id=item.id, quantity=item.quantity) for item in query.items]


class GetItemsHandler:
    """Fetch items by id from the stock repository."""

    def __init__(self, stock_repo: Repository):
        self.stock_repo = stock_repo

    def handle(self, query: GetItems) -> list[Item]:
        return self.stock_repo.get_items(query.item_ids)


def new_check_if_items_in_stock_handler(stock_repo, logger, metrics_client):
    if stock_repo is None:
        raise ValueError("nil stockRepo")
    return apply_query_decorators(CheckIfItemsInStockHandler(stock_repo), logger, metrics_client)


def new_get_items_handler(stock_repo, logger, metrics_client):
    if stock_repo is None:
        raise ValueError("nil stockRepo")
    return apply_query_decorators(GetItemsHandler(stock_repo), logger, metrics_client)


@dataclass
class Queries:
    check_if_items_in_stock: Any
    get_items: Any


@dataclass
class Application:
    queries: Queries