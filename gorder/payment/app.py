"""Payment commands and the application that bundles them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from gorder.common.decorator import apply_command_decorators
from gorder.common.entities import OrderPayload
from gorder.payment.processor import Processor

log = logging.getLogger(__name__)

_WAITING_FOR_PAYMENT = "waiting_for_payment"


class OrderService(Protocol):
    def update_order(self, order: OrderPayload) -> None: ...


@dataclass
class CreatePayment:
    order: OrderPayload


class CreatePaymentHandler:
    """Create a payment link and mark the order as waiting for payment."""

    def __init__(self, processor: Processor, order_service: OrderService):
        self.processor = processor
        self.order_service = order_service

    def handle(self, cmd: CreatePayment) -> str:
        link = self.processor.create_payment_link(cmd.order)
        log.info("create payment link for order: %s success, payment link: %s",
                 cmd.order.id, link)
        updated = OrderPayload(
            id=cmd.order.id,
            customer_id=cmd.order.customer_id,
            status=_WAITING_FOR_PAYMENT,
            items=cmd.order.items,
            payment_link=link,
        )
        self.order_service.update_order(updated)
        return link


def new_create_payment_handler(processor, order_service, logger, metrics_client):
    return apply_command_decorators(CreatePaymentHandler(processor, order_service),
                                    logger, metrics_client)


@dataclass
class Commands:
    create_payment: Any


@dataclass
class Application:
    commands: Commands