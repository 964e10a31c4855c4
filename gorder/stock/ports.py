"""RPC entry points of the stock service."""

from __future__ import annotations

from typing import Any, Mapping

from gorder.common.entities import ItemWithQuantity
from gorder.stock.app import Application, CheckIfItemsInStock, GetItems

_SERVICE = "StockService"


class StockRPCServer:
    """Serves the stock RPC methods."""

    def __init__(self, app: Application):
        self.app = app

    def get_items(self, request: Mapping[str, Any]) -> dict:
        ids = [str(i) for i in request.get("item_ids") or []]
        items = self.app.queries.get_items.handle(GetItems(item_ids=ids))
        return {"items": [i.to_dict() for i in items]}

    def check_if_items_in_stock(self, request: Mapping[str, Any]) -> dict:
        wanted = [ItemWithQuantity.from_dict(i) for i in request.get("items") or []]
        items = self.app.queries.check_if_items_in_stock.handle(
            CheckIfItemsInStock(items=wanted)
        )
        return {"in_stock": 1, "items": [i.to_dict() for i in items]}

    def register(self, server) -> None:
        server.register(_SERVICE, "GetItems", self.get_items)
        server.register(_SERVICE, "CheckIfItemsInStock", self.check_if_items_in_stock)