import json
from types import SimpleNamespace

import pytest

from gorder.common.entities import Item, ItemWithQuantity
from gorder.order.app import CreateOrder, GetCustomerOrder, UpdateOrder
from gorder.order.domain import NotFoundError, Order
from gorder.order.service import build_application


class FakeStock:
    def __init__(self):
        self.requests = []

    def check_if_items_in_stock(self, items):
        self.requests.append(items)
        return {"in_stock": 1,
                "items": [Item(id=i.id, quantity=i.quantity) for i in items]}

    def get_items(self, item_ids):
        return [Item(id=i) for i in item_ids]


class FakeChannel:
    def __init__(self):
        self.published = []

    def queue_declare(self, queue, **kwargs):
        return SimpleNamespace(method=SimpleNamespace(queue=queue))

    def basic_publish(self, **kwargs):
        self.published.append(kwargs)


def test_create_then_get_round_trip():
    channel = FakeChannel()
    app = build_application(FakeStock(), channel)
    result = app.commands.create_order.handle(
        CreateOrder(customer_id="c1", items=[ItemWithQuantity(id="a", quantity=2)])
    )
    found = app.queries.get_customer_order.handle(
        GetCustomerOrder(customer_id="c1", order_id=result.order_id)
    )
    assert found.id == result.order_id
    assert found.customer_id == "c1"
    assert [i.id for i in found.items] == ["a"]


def test_create_publishes_order_created_event():
    channel = FakeChannel()
    app = build_application(FakeStock(), channel)
    result = app.commands.create_order.handle(
        CreateOrder(customer_id="c1", items=[ItemWithQuantity(id="a", quantity=1)])
    )
    assert len(channel.published) == 1
    message = channel.published[0]
    assert message["routing_key"] == "order.created"
    body = json.loads(message["body"])
    assert body["id"] == result.order_id
    assert body["customer_id"] == "c1"


def test_items_with_same_id_are_merged_before_stock_check():
    stock = FakeStock()
    app = build_application(stock, FakeChannel())
    app.commands.create_order.handle(CreateOrder(
        customer_id="c1",
        items=[ItemWithQuantity(id="a", quantity=1), ItemWithQuantity(id="a", quantity=2)],
    ))
    assert stock.requests == [[ItemWithQuantity(id="a", quantity=3)]]


def test_create_without_items_fails():
    app = build_application(FakeStock(), FakeChannel())
    with pytest.raises(ValueError, match="must have at least 1 item"):
        app.commands.create_order.handle(CreateOrder(customer_id="c1", items=[]))


def test_update_seeded_order_without_update_fn():
    app = build_application(FakeStock(), FakeChannel())
    changed = Order(id="fake-ID", customer_id="fake-customer-id",
                    status="paid", items=[])
    app.commands.update_order.handle(UpdateOrder(order=changed))
    found = app.queries.get_customer_order.handle(
        GetCustomerOrder(customer_id="fake-customer-id", order_id="fake-ID")
    )
    assert found.status == "paid"


def test_get_unknown_order_raises():
    app = build_application(FakeStock(), FakeChannel())
    with pytest.raises(NotFoundError):
        app.queries.get_customer_order.handle(GetCustomerOrder(customer_id="c", order_id="x"))


def test_missing_dependencies_are_rejected():
    with pytest.raises(ValueError, match="stockGRPC is nil"):
        build_application(None, FakeChannel())
    with pytest.raises(ValueError, match="channel is nil"):
        build_application(FakeStock(), None)