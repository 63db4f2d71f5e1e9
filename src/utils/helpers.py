import math
from typing import Any, Iterable, Optional

from config.app_vars import SHIPPING_FLAT_RATE, SHIPPING_FREE_THRESHOLD
from serializers import (
    MIN_PARCEL_DESI,
    MIN_PARCEL_WEIGHT_KG,
    Order,
    OrderLine,
    Parcel,
    SenderInfo,
    ShipmentRequest,
)


def to_int(value: Any, default: int = 0) -> int:
    return int(round(to_float(value, default)))


def to_float(value: Any, default: float = 0.0) -> float:
    """Parse carrier numbers, which may use a decimal comma."""
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip().replace(",", ".")
    if not text:
        return default
    try:
        return float(text)
    except ValueError:
        return default


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """3.0 -> "3", 2.5 -> "2.5"; carriers reject trailing ".0" in string fields."""
    return str(int(value)) if float(value).is_integer() else str(value)


def calculate_total_desi(items: Iterable[OrderLine]) -> float:
    total = sum(item.desi * item.quantity for item in items)
    return max(total, MIN_PARCEL_DESI)


def calculate_total_weight(items: Iterable[OrderLine]) -> float:
    """Total weight in kilograms."""
    total = sum(item.weight * item.quantity for item in items) / 1000
    return max(total, MIN_PARCEL_WEIGHT_KG)


def desi_from_dimensions(width: float, height: float, length: float) -> float:
    """Volumetric weight of a box measured in centimetres."""
    return round(width * height * length / 3000, 2)


def aggregate_parcel(items: Iterable[OrderLine]) -> Parcel:
    items = list(items)
    return Parcel(
        weight_kg=calculate_total_weight(items),
        desi=calculate_total_desi(items),
        pieces=max(sum(item.quantity for item in items), 1),
    )


def validate_order(order: Order) -> Optional[str]:
    """Name of the first missing field a shipment cannot be created without."""
    address = order.shipping_address
    if address is None or not address.address.strip():
        return "shipping_address"
    if not order.items:
        return "items"
    return None


def build_shipment_request(order: Order, sender_info: SenderInfo) -> ShipmentRequest:
    return ShipmentRequest(
        invoice_number=order.invoice_number,
        order_code=order.order_number,
        barcode=order.barcode or order.invoice_number,
        sender=sender_info,
        receiver=order.shipping_address,
        items=order.items,
        parcel=aggregate_parcel(order.items),
        payment_type=order.payment_type,
        parcel_type=order.parcel_type,
        description=order.description,
        cancellation_reason=order.cancellation_reason,
        is_return=order.is_return,
    )


def calculate_shipping_cost(
    subtotal: float,
    flat_rate: float = SHIPPING_FLAT_RATE,
    free_threshold: float = SHIPPING_FREE_THRESHOLD,
) -> float:
    if free_threshold > 0 and subtotal >= free_threshold:
        return 0.0
    return round(flat_rate, 2)


def remaining_for_free_shipping(
    subtotal: float, free_threshold: float = SHIPPING_FREE_THRESHOLD
) -> float:
    if free_threshold <= 0:
        return 0.0
    return round(max(free_threshold - subtotal, 0.0), 2)
