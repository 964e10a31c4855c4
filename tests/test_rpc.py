from types import SimpleNamespace

import pytest

from gorder.common.entities import Item, ItemWithQuantity, OrderPayload
from gorder.common.rpc import (
    OrderServiceClient, RpcError, RpcServer, StatusCode, StockServiceClient,
)


class _FlaskSession:
    def __init__(self, app, addr):
        self.client = app.test_client()
        self.prefix = f"http://{addr}"
        self.closed = False

    def post(self, url, json=None, timeout=None):
        r = self.client.post(url[len(self.prefix):], json=json)
        return SimpleNamespace(status_code=r.status_code, json=r.get_json)

    def close(self):
        self.closed = True


def _stock_server():
    server = RpcServer()
    server.register("StockService", "GetItems",
                    lambda p: {"items": [{"id": i, "quantity": 1} for i in p["item_ids"]]})
    server.register("StockService", "CheckIfItemsInStock",
                    lambda p: {"in_stock": 1, "items": p["items"]})
    return server


def test_stock_client_round_trip():
    session = _FlaskSession(_stock_server().create_app(), "h:1")
    client = StockServiceClient("h:1", session=session)
    assert client.get_items(["a", "b"]) == [Item(id="a", quantity=1), Item(id="b", quantity=1)]
    resp = client.check_if_items_in_stock([ItemWithQuantity("a", 3)])
    assert resp["in_stock"] == 1
    assert resp["items"][0].quantity == 3
    client.close()
    assert session.closed


def test_error_is_propagated():
    server = RpcServer()

    def fail(_):
        raise RpcError(StatusCode.NOT_FOUND, "order not found: x")

    server.register("OrderService", "GetOrder", fail)
    client = OrderServiceClient("h:1", session=_FlaskSession(server.create_app(), "h:1"))
    with pytest.raises(RpcError) as info:
        client.get_order("c", "x")
    assert info.value.code is StatusCode.NOT_FOUND
    assert str(info.value) == "order not found: x"


def test_unknown_method():
    client = OrderServiceClient("h:1", session=_FlaskSession(RpcServer().create_app(), "h:1"))
    with pytest.raises(RpcError) as info:
        client.update_order(OrderPayload(id="o"))
    assert info.value.code is StatusCode.UNIMPLEMENTED


def test_plain_exception_is_unknown():
    server = RpcServer()
    server.register("OrderService", "CreateOrder", lambda p: 1 / 0)
    client = OrderServiceClient("h:1", session=_FlaskSession(server.create_app(), "h:1"))
    with pytest.raises(RpcError) as info:
        client.create_order("c", [])
    assert info.value.code is StatusCode.UNKNOWN


def test_get_order_returns_payload():
    server = RpcServer()
    server.register("OrderService", "GetOrder",
                    lambda p: OrderPayload(id=p["order_id"], customer_id=p["customer_id"]).to_dict())
    client = OrderServiceClient("h:1", session=_FlaskSession(server.create_app(), "h:1"))
    assert client.get_order("c", "o") == OrderPayload(id="o", customer_id="c")