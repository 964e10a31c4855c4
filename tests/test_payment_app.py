import logging

import pytest

from gorder.common.entities import Item, OrderPayload
from gorder.payment.app import CreatePayment, new_create_payment_handler
from gorder.payment.processor import InmemProcessor

LOGGER = logging.getLogger("tests.payment_app")


class RecordingOrderService:
    def __init__(self, error=None):
        self.updates = []
        self.error = error

    def update_order(self, order):
        self.updates.append(order)
        if self.error is not None:
            raise self.error


class FailingProcessor:
    def create_payment_link(self, order):
        raise RuntimeError("processor down")


class RecordingMetrics:
    def __init__(self):
        self.keys = []

    def inc(self, key, value):
        self.keys.append(key)


def _order():
    return OrderPayload(id="o1", customer_id="c1", status="created",
                        items=[Item(id="item1", quantity=3)])


def test_handle_returns_link_and_updates_order():
    service = RecordingOrderService()
    handler = new_create_payment_handler(InmemProcessor(), service, LOGGER, RecordingMetrics())
    order = _order()
    link = handler.handle(CreatePayment(order=order))
    assert link == "inmem-payment-link"
    assert len(service.updates) == 1
    updated = service.updates[0]
    assert updated.status == "waiting_for_payment"
    assert updated.payment_link == link
    assert (updated.id, updated.customer_id, updated.items) == (order.id, order.customer_id,
                                                                 order.items)


def test_processor_failure_skips_update():
    service = RecordingOrderService()
    handler = new_create_payment_handler(FailingProcessor(), service, LOGGER, RecordingMetrics())
    with pytest.raises(RuntimeError, match="processor down"):
        handler.handle(CreatePayment(order=_order()))
    assert service.updates == []


def test_update_failure_propagates_and_counts_failure():
    metrics = RecordingMetrics()
    service = RecordingOrderService(error=LookupError("order not found: o1"))
    handler = new_create_payment_handler(InmemProcessor(), service, LOGGER, metrics)
    with pytest.raises(LookupError):
        handler.handle(CreatePayment(order=_order()))
    assert "querys.createpayment.failure" in metrics.keys
    assert "querys.createpayment.success" not in metrics.keys


def test_success_counts_success():
    metrics = RecordingMetrics()
    handler = new_create_payment_handler(InmemProcessor(), RecordingOrderService(), LOGGER,
                                         metrics)
    handler.handle(CreatePayment(order=_order()))
    assert "querys.createpayment.success" in metrics.keys