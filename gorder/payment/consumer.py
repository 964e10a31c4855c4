"""Consumer of order-created events that starts payments."""

from __future__ import annotations

import json
import logging

from gorder.common.broker import EVENT_ORDER_CREATED
from gorder.common.entities import OrderPayload
from gorder.payment.app import Application, CreatePayment

log = logging.getLogger(__name__)


def _decode_order(body: bytes) -> OrderPayload:
    data = json.loads(body)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("order message is not a JSON object")
    return OrderPayload.from_dict(data)


class Consumer:
    """Turns order-created messages into payment commands."""

    def __init__(self, app: Application):
        self.app = app
        self._queue_name = EVENT_ORDER_CREATED

    def listen(self, channel) -> None:
        """Declare the queue and consume from it until the channel stops."""
        declared = channel.queue_declare(queue=EVENT_ORDER_CREATED, durable=True,
                                         exclusive=False, auto_delete=False)
        self._queue_name = declared.method.queue
        try:
            channel.basic_consume(queue=self._queue_name,
                                  on_message_callback=self.handle_message,
                                  auto_ack=False)
        except Exception as err:
            log.warning("fail to consume: queue=%s,err=%s", self._queue_name, err)
            return
        channel.start_consuming()

    def handle_message(self, channel, method, properties, body) -> None:
        text = body.decode("utf-8", "replace") if isinstance(body, bytes) else str(body)
        log.info("Payment receive a message from %s, msg=%s", self._queue_name, text)
        tag = method.delivery_tag
        try:
            order = _decode_order(body)
        except (ValueError, TypeError, AttributeError) as err:
            log.info("failed to unmarshall msg to order, err=%s", err)
            channel.basic_nack(delivery_tag=tag, multiple=False, requeue=False)
            return
        try:
            self.app.commands.create_payment.handle(CreatePayment(order=order))
        except Exception as err:
            log.info("failed to create payment, err=%s", err)
            channel.basic_nack(delivery_tag=tag, multiple=False, requeue=False)
            return
        channel.basic_ack(delivery_tag=tag, multiple=False)
        log.info("consume success")