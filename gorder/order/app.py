"""Order commands and queries, and the application that bundles them."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

import pika

from gorder.common.broker import EVENT_ORDER_CREATED
from gorder.common.decorator import apply_command_decorators, apply_query_decorators
from gorder.common.entities import Item, ItemWithQuantity
from gorder.order.domain import Order, Repository

log = logging.getLogger(__name__)

_PERSISTENT_DELIVERY = 2


class StockService(Protocol):
    def check_if_items_in_stock(self, items: list[ItemWithQuantity]) -> dict[str, Any]: ...

    def get_items(self, item_ids: list[str]) -> list[Item]: ...


@dataclass
class CreateOrder:
    customer_id: str = ""
    items: list[ItemWithQuantity] = field(default_factory=list)


@dataclass
class CreateOrderResult:
    order_id: str


@dataclass
class UpdateOrder:
    order: Order
    update_fn: Callable[[Order], Order] | None = None


@dataclass
class GetCustomerOrder:
    customer_id: str = ""
    order_id: str = ""


def pack_items(items: list[ItemWithQuantity]) -> list[ItemWithQuantity]:
    """Merge entries with the same id, summing their quantities."""
    merged: dict[str, int] = {}
    for item in items:
        merged[item.id] = merged.get(item.id, 0) + item.quantity
    return [ItemWithQuantity(id=item_id, quantity=qty) for item_id, qty in merged.items()]


class CreateOrderHandler:
    """Validate items against stock, store the order and announce it."""

    def __init__(self, order_repo: Repository, stock_service: StockService, channel):
        self.order_repo = order_repo
        self.stock_service = stock_service
        self.channel = channel

    def handle(self, cmd: CreateOrder) -> CreateOrderResult:
        valid_items = self._validate(cmd.items)
        created = self.order_repo.create(Order(customer_id=cmd.customer_id, items=valid_items))
        declared = self.channel.queue_declare(queue=EVENT_ORDER_CREATED, durable=True,
                                              exclusive=False, auto_delete=False)
        body = json.dumps(created.to_proto().to_dict()).encode("utf-8")
        self.channel.basic_publish(
            exchange="",
            routing_key=declared.method.queue,
            body=body,
            properties=pika.BasicProperties(content_type="application/json",
                                            delivery_mode=_PERSISTENT_DELIVERY),
        )
        return CreateOrderResult(order_id=created.id)

    def _validate(self, items: list[ItemWithQuantity]) -> list[Item]:
        if not items:
            raise ValueError("must have at least 1 item")
        resp = self.stock_service.check_if_items_in_stock(pack_items(items))
        return resp["items"]


class UpdateOrderHandler:
    """Apply an update function to a stored order."""

    def __init__(self, order_repo: Repository):
        self.order_repo = order_repo

    def handle(self, cmd: UpdateOrder) -> None:
        update_fn = cmd.update_fn
        if update_fn is None:
            log.warning("updateOrderHandler got nil UpdateFn, order=%r", cmd.order)
            update_fn = copy.copy
        self.order_repo.update(cmd.order, update_fn)
        return None


class GetCustomerOrderHandler:
    """Look up one order of a customer."""

    def __init__(self, order_repo: Repository):
        self.order_repo = order_repo

    def handle(self, query: GetCustomerOrder) -> Order:
        return self.order_repo.get(query.order_id, query.customer_id)


def new_create_order_handler(order_repo, stock_service, logger, channel, metrics_client):
    if order_repo is None:
        raise ValueError("orderRepo is nil")
    if stock_service is None:
        raise ValueError("stockGRPC is nil")
    if channel is None:
        raise ValueError("channel is nil")
    return apply_query_decorators(CreateOrderHandler(order_repo, stock_service, channel),
                                  logger, metrics_client)


def new_update_order_handler(order_repo, logger, metrics_client):
    if order_repo is None:
        raise ValueError("nil orderRepo")
    return apply_command_decorators(UpdateOrderHandler(order_repo), logger, metrics_client)


def new_get_customer_order_handler(order_repo, logger, metrics_client):
    if order_repo is None:
        raise ValueError("orderRepo is nil")
    return apply_query_decorators(GetCustomerOrderHandler(order_repo), logger, metrics_client)


@dataclass
class Commands:
    create_order: Any
    update_order: Any


@dataclass
class Queries:
    get_customer_order: Any


@dataclass
class Application:
    commands: Commands
    queries: Queries