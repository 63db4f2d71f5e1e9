"""
Carrier status tables.

Every carrier reports progress in its own vocabulary. Each function below
maps one carrier's native codes to a `ShipmentStatus`; the tables are kept
separate because the same number means different things per carrier.
"""
from typing import Any, Dict

from serializers import ShipmentStatus

# Shared numeric scheme of the order domain; Aras passes its codes through it.
NUMERIC_STATUS: Dict[int, ShipmentStatus] = {
    0: ShipmentStatus.UNKNOWN,
    1: ShipmentStatus.PENDING,
    2: ShipmentStatus.PENDING,
    3: ShipmentStatus.SHIPPED,
    4: ShipmentStatus.IN_TRANSIT,
    5: ShipmentStatus.OUT_FOR_DELIVERY,
    6: ShipmentStatus.DELIVERED,
    7: ShipmentStatus.RETURNED,
    8: ShipmentStatus.FAILED,
}

MNG_STATUS: Dict[int, ShipmentStatus] = {
    0: ShipmentStatus.PENDING,
    1: ShipmentStatus.PENDING,
    2: ShipmentStatus.PENDING,
    3: ShipmentStatus.SHIPPED,
    4: ShipmentStatus.IN_TRANSIT,
    5: ShipmentStatus.IN_TRANSIT,
    6: ShipmentStatus.OUT_FOR_DELIVERY,
    7: ShipmentStatus.DELIVERED,
}

YURTICI_STATUS: Dict[str, ShipmentStatus] = {
    "NOP": ShipmentStatus.PENDING,
    "IND": ShipmentStatus.IN_TRANSIT,
    "ISR": ShipmentStatus.IN_TRANSIT,
    "DLV": ShipmentStatus.DELIVERED,
    "CNL": ShipmentStatus.FAILED,
    "ISC": ShipmentStatus.FAILED,
    "BI": ShipmentStatus.UNKNOWN,
}

NAVLUNGO_STATUS: Dict[str, ShipmentStatus] = {
    "created": ShipmentStatus.PENDING,
    "pending": ShipmentStatus.PENDING,
    "accepted": ShipmentStatus.SHIPPED,
    "picked_up": ShipmentStatus.SHIPPED,
    "shipped": ShipmentStatus.SHIPPED,
    "in_transit": ShipmentStatus.IN_TRANSIT,
    "transfer": ShipmentStatus.IN_TRANSIT,
    "out_for_delivery": ShipmentStatus.OUT_FOR_DELIVERY,
    "delivered": ShipmentStatus.DELIVERED,
    "returned": ShipmentStatus.RETURNED,
    "return": ShipmentStatus.RETURNED,
    "cancelled": ShipmentStatus.FAILED,
    "canceled": ShipmentStatus.FAILED,
    "failed": ShipmentStatus.FAILED,
}

STATUS_LABELS: Dict[ShipmentStatus, str] = {
    ShipmentStatus.PENDING: "Kargo bekleniyor",
    ShipmentStatus.SHIPPED: "Kargoya verildi",
    ShipmentStatus.IN_TRANSIT: "Yolda",
    ShipmentStatus.OUT_FOR_DELIVERY: "Dağıtımda",
    ShipmentStatus.DELIVERED: "Teslim edildi",
    ShipmentStatus.RETURNED: "İade edildi",
    ShipmentStatus.FAILED: "Başarısız",
    ShipmentStatus.UNKNOWN: "Bilinmiyor",
}

PROVIDER_LABELS: Dict[str, str] = {
    "aras": "Aras Kargo",
    "mng": "MNG Kargo",
    "ptt": "PTT Kargo",
    "yurtici": "Yurtiçi Kargo",
    "navlungo": "Navlungo",
    "test": "Test Kargo",
}


def _as_int(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def aras_status(status_code: Any, type_code: Any) -> ShipmentStatus:
    """Aras reports a status code that only means something with its type.

    Types 1 and 2 are outbound shipments, where 6 is "out for delivery" and
    7 "in transit"; type 3 is a return, whatever the status says.
    """
    status_code = _as_int(status_code)
    type_code = _as_int(type_code)

    if type_code in (1, 2):
        if status_code == 6:
            return ShipmentStatus.OUT_FOR_DELIVERY
        if status_code == 7:
            return ShipmentStatus.IN_TRANSIT
        return NUMERIC_STATUS.get(status_code, ShipmentStatus.UNKNOWN)
    if type_code == 3:
        return ShipmentStatus.RETURNED
    return ShipmentStatus.UNKNOWN


def mng_status(code: Any) -> ShipmentStatus:
    return MNG_STATUS.get(_as_int(code), ShipmentStatus.UNKNOWN)


def ptt_status(delivered: bool) -> ShipmentStatus:
    return ShipmentStatus.DELIVERED if delivered else ShipmentStatus.IN_TRANSIT


def yurtici_status(operation_status: Any) -> ShipmentStatus:
    if not operation_status:
        return ShipmentStatus.IN_TRANSIT
    return YURTICI_STATUS.get(
        str(operation_status).strip().upper(), ShipmentStatus.IN_TRANSIT
    )


def navlungo_status(text: Any) -> ShipmentStatus:
    if not text:
        return ShipmentStatus.UNKNOWN
    key = str(text).strip().lower().replace(" ", "_").replace("-", "_")
    return NAVLUNGO_STATUS.get(key, ShipmentStatus.UNKNOWN)


def status_label(status: ShipmentStatus) -> str:
    return STATUS_LABELS.get(status, STATUS_LABELS[ShipmentStatus.UNKNOWN])


def provider_label(name: str) -> str:
    return PROVIDER_LABELS.get(name, name)
