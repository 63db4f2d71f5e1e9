import logging as log
from typing import Any, Dict

from kombu import Connection, Exchange, Producer, Queue

from config.app_vars import RABBIT_URL, SHIPMENT_EXCHANGE_NAME, SHIPMENT_QUEUE_NAME

SHIPMENT_ROUTING_KEY = "shipment.result"
SHIPMENT_DL_ROUTING_KEY = "shipment.result.deadletter"

shipment_exchange = Exchange(SHIPMENT_EXCHANGE_NAME, type="direct", durable=True)

# results the order domain rejects go back to the same exchange as dead letters
shipment_queue = Queue(
    SHIPMENT_QUEUE_NAME,
    exchange=shipment_exchange,
    routing_key=SHIPMENT_ROUTING_KEY,
    durable=True,
    queue_arguments={
        "x-dead-letter-exchange": SHIPMENT_EXCHANGE_NAME,
        "x-dead-letter-routing-key": SHIPMENT_DL_ROUTING_KEY,
    },
)


def _headers(payload: Dict[str, Any]) -> Dict[str, str]:
    return {
        "action": str(payload.get("action") or ""),
        "carrier": str(payload.get("carrier") or ""),
    }


def publish_shipment_event(payload: Dict[str, Any]) -> bool:
    """Hand a carrier result to the order domain; False when RabbitMQ is unreachable."""
    try:
        with Connection(RABBIT_URL) as conn:
            producer = Producer(
                conn, exchange=shipment_exchange, routing_key=SHIPMENT_ROUTING_KEY
            )
            producer.publish(
                payload,
                serializer="json",
                headers=_headers(payload),
                delivery_mode=2,
                declare=[shipment_exchange, shipment_queue],
                retry=True,
            )
    except Exception as e:
        log.error(
            f"Could not publish shipment {payload.get('action')} result for order "
            f"{payload.get('order_number')}: {str(e)}",
            exc_info=True,
        )
        return False

    log.info(
        f"Shipment {payload.get('action')} result for order "
        f"{payload.get('order_number')} published"
    )
    return True
