"""A small JSON-over-HTTP RPC layer between services."""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable

import requests
from flask import Flask, jsonify, request

from gorder.common.discovery import get_service_addr
from gorder.common.entities import Item, ItemWithQuantity, OrderPayload
from gorder.common.server import _parse_addr

log = logging.getLogger(__name__)


class StatusCode(enum.Enum):
    OK = 200
    INVALID_ARGUMENT = 400
    NOT_FOUND = 404
    INTERNAL = 500
    UNKNOWN = 520
    UNIMPLEMENTED = 501


class RpcError(Exception):
    """An error carrying an RPC status code."""

    def __init__(self, code: StatusCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class RpcServer:
    """Dispatches RPC calls to registered functions."""

    def __init__(self):
        self._methods: dict[tuple[str, str], Callable[[dict], Any]] = {}

    def register(self, service_name: str, method_name: str, func) -> None:
        self._methods[(service_name, method_name)] = func

    def create_app(self) -> Flask:
        app = Flask(__name__)

        @app.post("/rpc/<service>/<method>")
        def dispatch(service, method):
            func = self._methods.get((service, method))
            try:
                if func is None:
                    raise RpcError(StatusCode.UNIMPLEMENTED, f"unknown method {service}/{method}")
                result = func(request.get_json(silent=True) or {})
            except RpcError as err:
                return _error(err.code, err.message)
            except Exception as err:
                return _error(StatusCode.UNKNOWN, str(err))
            return jsonify({"result": result})

        return app


def _error(code: StatusCode, message: str):
    status = code.value if code.value < 600 else 500
    return jsonify({"error": {"code": code.name, "message": message}}), status


class RpcClient:
    """Calls methods of one remote service."""

    service_name = ""

    def __init__(self, addr: str, session=None, timeout: float = 10.0):
        self.addr = addr
        self._session = session or requests.Session()
        self._timeout = timeout

    def call(self, method: str, payload: dict | None = None) -> Any:
        url = f"http://{self.addr}/rpc/{self.service_name}/{method}"
        resp = self._session.post(url, json=payload or {}, timeout=self._timeout)
        try:
            data = resp.json() or {}
        except ValueError:
            data = {}
        if "error" in data:
            err = data["error"]
            code = StatusCode.__members__.get(err.get("code", ""), StatusCode.UNKNOWN)
            raise RpcError(code, err.get("message", ""))
        if resp.status_code != 200:
            raise RpcError(StatusCode.UNKNOWN, f"unexpected status {resp.status_code}")
        return data.get("result")

    def close(self) -> None:
        self._session.close()


class StockServiceClient(RpcClient):
    service_name = "StockService"

    def check_if_items_in_stock(self, items: list[ItemWithQuantity]) -> dict:
        result = self.call("CheckIfItemsInStock", {"items": [i.to_dict() for i in items]}) or {}
        return {
            "in_stock": int(result.get("in_stock", 0)),
            "items": [Item.from_dict(i) for i in result.get("items") or []],
        }

    def get_items(self, item_ids: list[str]) -> list[Item]:
        result = self.call("GetItems", {"item_ids": list(item_ids)}) or {}
        return [Item.from_dict(i) for i in result.get("items") or []]


class OrderServiceClient(RpcClient):
    service_name = "OrderService"

    def create_order(self, customer_id: str, items: list[ItemWithQuantity]) -> None:
        self.call("CreateOrder", {"customer_id": customer_id,
                                  "items": [i.to_dict() for i in items]})

    def get_order(self, customer_id: str, order_id: str) -> OrderPayload:
        result = self.call("GetOrder", {"customer_id": customer_id, "order_id": order_id})
        return OrderPayload.from_dict(result or {})

    def update_order(self, order: OrderPayload) -> None:
        self.call("UpdateOrder", order.to_dict())


def run_rpc_server(config, service_name: str, register_server) -> None:
    addr = config.sub(service_name).get_string("grpc-addr")
    if not addr:
        log.warning("no grpc-addr for %s, using fallback", service_name)
        addr = config.get_string("fallback-grpc-addr")
    run_rpc_server_on_addr(addr, register_server)


def run_rpc_server_on_addr(addr: str, register_server) -> None:
    server = RpcServer()
    register_server(server)
    host, port = _parse_addr(addr)
    log.info("Starting RPC Server, Listening: %s", addr)
    server.create_app().run(host=host, port=port)


def _new_client(config, key: str, cls):
    addr = get_service_addr(config, config.get_string(key))
    if not addr:
        log.warning("empty rpc addr for %s", key)
    return cls(addr)


def new_order_client(config) -> OrderServiceClient:
    return _new_client(config, "order.service-name", OrderServiceClient)


def new_stock_client(config) -> StockServiceClient:
    return _new_client(config, "stock.service-name", StockServiceClient)