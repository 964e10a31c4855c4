"""Message broker connection and event names."""

from __future__ import annotations

from typing import Callable

import pika

EVENT_ORDER_CREATED = "order.created"
EVENT_ORDER_PAID = "order.paid"


def amqp_url(user: str, password: str, host: str, port: str) -> str:
    return f"amqp://{user}:{password}@{host}:{port}"


def connect(user: str, password: str, host: str, port: str):
    """Open a channel and declare the event exchanges; returns (channel, close)."""
    connection = pika.BlockingConnection(pika.URLParameters(amqp_url(user, password, host, port)))
    channel = connection.channel()
    channel.exchange_declare(exchange=EVENT_ORDER_CREATED, exchange_type="direct",
                             durable=True, auto_delete=False, internal=False)
    channel.exchange_declare(exchange=EVENT_ORDER_PAID, exchange_type="fanout",
                             durable=True, auto_delete=False, internal=False)
    close: Callable[[], None] = connection.close
    return channel, close