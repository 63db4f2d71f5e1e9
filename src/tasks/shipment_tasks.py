import logging as log
from typing import Any, Dict, Optional

from config.worker import cel_app
from publishers import publish_shipment_event
from serializers import Order, SenderInfo
from utils.shipping import shipping_gateway


def _publish(action: str, carrier: str, order: Order, result: Optional[Dict[str, Any]]):
    payload = {
        "action": action,
        "carrier": carrier,
        "order_number": order.order_number,
        "invoice_number": order.invoice_number,
        "result": result,
    }
    if not publish_shipment_event(payload):
        log.warning(f"Shipment {action} result for order {order.order_number} was not published")
    return payload


@cel_app.task(
    name="tasks.shipment.create",
    queue="shipment-queue",
    acks_late=True,
)
def create_shipment(carrier: str, order: Dict[str, Any], sender: Dict[str, Any]):
    order_data = Order(**order)
    result = shipping_gateway.create_shipment(carrier, order_data, SenderInfo(**sender))
    log.info(
        f"Create on {carrier} for order {order_data.order_number}: "
        f"{result.response_code} {result.message}"
    )
    return _publish("create", carrier, order_data, result.model_dump(mode="json"))


@cel_app.task(
    name="tasks.shipment.cancel",
    queue="shipment-queue",
    acks_late=True,
)
def cancel_shipment(carrier: str, order: Dict[str, Any]):
    order_data = Order(**order)
    result = shipping_gateway.cancel_shipment(carrier, order_data)
    log.info(
        f"Cancel on {carrier} for order {order_data.order_number}: "
        f"{result.response_code} {result.message}"
    )
    return _publish("cancel", carrier, order_data, result.model_dump(mode="json"))


@cel_app.task(
    name="tasks.shipment.track",
    queue="shipment-queue",
    acks_late=True,
)
def track_shipment(carrier: str, order: Dict[str, Any]):
    order_data = Order(**order)
    result = shipping_gateway.track_shipment(carrier, order_data)
    log.info(f"Track on {carrier} for order {order_data.order_number}: {result.status.value}")
    return _publish("track", carrier, order_data, result.model_dump(mode="json"))
