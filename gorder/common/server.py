"""HTTP server bootstrap."""

from __future__ import annotations

from typing import Callable

from flask import Flask, jsonify

_DEFAULT_PORT = 8080


def _parse_addr(addr: str) -> tuple[str, int]:
    if not addr:
        return "0.0.0.0", _DEFAULT_PORT
    host, _, port = addr.rpartition(":")
    return host or "0.0.0.0", int(port) if port else _DEFAULT_PORT


def create_http_app(wrapper: Callable[[Flask], None]) -> Flask:
    """Build the app, let the wrapper add routes, and add /ping."""
    app = Flask(__name__)
    wrapper(app)

    @app.get("/ping")
    def ping():
        return jsonify("pong!!!")

    return app


def run_http_server(config, service_name: str, wrapper) -> None:
    addr = config.sub(service_name).get_string("http-addr")
    run_http_server_on_addr(addr, wrapper)


def run_http_server_on_addr(addr: str, wrapper) -> None:
    host, port = _parse_addr(addr)
    create_http_app(wrapper).run(host=host, port=port)