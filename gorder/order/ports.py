"""RPC and HTTP entry points of the order service."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request

from gorder.common.entities import ItemWithQuantity, OrderPayload
from gorder.common.rpc import RpcError, StatusCode
from gorder.order.app import Application, CreateOrder, GetCustomerOrder, UpdateOrder
from gorder.order.domain import new_order

log = logging.getLogger(__name__)

_SERVICE = "OrderService"


def _items(raw) -> list[ItemWithQuantity]:
    return [ItemWithQuantity.from_dict(i) for i in raw or []]


class OrderRPCServer:
    """Serves the order RPC methods."""

    def __init__(self, app: Application):
        self.app = app

    def create_order(self, request: Mapping[str, Any]) -> dict:
        try:
            self.app.commands.create_order.handle(CreateOrder(
                customer_id=str(request.get("customer_id", "")),
                items=_items(request.get("items")),
            ))
        except Exception as err:
            raise RpcError(StatusCode.INTERNAL, str(err)) from err
        return {}

    def get_order(self, request: Mapping[str, Any]) -> dict:
        try:
            order = self.app.queries.get_customer_order.handle(GetCustomerOrder(
                customer_id=str(request.get("customer_id", "")),
                order_id=str(request.get("order_id", "")),
            ))
        except Exception as err:
            raise RpcError(StatusCode.NOT_FOUND, str(err)) from err
        return order.to_proto().to_dict()

    def update_order(self, request: Mapping[str, Any]) -> None:
        log.info("order_grpc||request_in||request=%r", request)
        try:
            payload = OrderPayload.from_dict(request)
            order = new_order(payload.id, payload.customer_id, payload.status,
                              payload.payment_link, payload.items)
            self.app.commands.update_order.handle(
                UpdateOrder(order=order, update_fn=lambda o: o)
            )
        except Exception as err:
            raise RpcError(StatusCode.INTERNAL, str(err)) from err
        return None

    def register(self, server) -> None:
        server.register(_SERVICE, "CreateOrder", self.create_order)
        server.register(_SERVICE, "GetOrder", self.get_order)
        server.register(_SERVICE, "UpdateOrder", self.update_order)


class HTTPServer:
    """Serves the customer-facing order HTTP API."""

    def __init__(self, app: Application):
        self.app = app

    def post_customer_orders(self, customer_id: str, body) -> tuple[dict, int]:
        if not isinstance(body, Mapping):
            return {"error": "invalid request body"}, 400
        try:
            req_customer = str(body.get("customer_id", ""))
            items = _items(body.get("items"))
        except (TypeError, ValueError, AttributeError) as err:
            return {"error": str(err)}, 400
        try:
            result = self.app.commands.create_order.handle(
                CreateOrder(customer_id=req_customer, items=items)
            )
        except Exception as err:
            return {"error": str(err)}, 200
        return {"message": "success", "customer_id": req_customer,
                "order_id": result.order_id}, 200

    def get_customer_order(self, customer_id: str, order_id: str) -> tuple[dict, int]:
        try:
            order = self.app.queries.get_customer_order.handle(
                GetCustomerOrder(customer_id=customer_id, order_id=order_id)
            )
        except Exception as err:
            return {"error": str(err)}, 200
        return {"message": "success", "data": order.to_proto().to_dict()}, 200

    def register_routes(self, app: Flask, base_url: str = "") -> None:
        prefix = base_url.rstrip("/")

        def post_orders(customer_id):
            body, status = self.post_customer_orders(customer_id, request.get_json(silent=True))
            return jsonify(body), status

        def get_order(customer_id, order_id):
            body, status = self.get_customer_order(customer_id, order_id)
            return jsonify(body), status

        app.add_url_rule(f"{prefix}/customer/<customer_id>/orders",
                         endpoint="post_customer_orders", view_func=post_orders,
                         methods=["POST"])
        app.add_url_rule(f"{prefix}/customer/<customer_id>/orders/<order_id>",
                         endpoint="get_customer_order", view_func=get_order,
                         methods=["GET"])