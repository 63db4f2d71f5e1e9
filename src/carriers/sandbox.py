import random
import string
import threading
from typing import Optional, Set

from carriers.base import ALREADY_CANCELLED, ShippingProvider
from config.carriers import SandboxConfig
from serializers import Order, ShipmentRequest, ShipmentResult, TrackingResult

TRACKING_PREFIX = "TEST-"


def generate_tracking_number() -> str:
    alphabet = string.ascii_uppercase + string.digits
    return TRACKING_PREFIX + "".join(random.choices(alphabet, k=10))


class SandboxProvider(ShippingProvider):
    """In-process carrier for development; never leaves the process."""

    name = "test"
    config_class = SandboxConfig

    def __init__(self, config: Optional[SandboxConfig] = None):
        super().__init__(config)
        self._cancelled: Set[str] = set()
        self._lock = threading.Lock()

    def _create(self, request: ShipmentRequest) -> ShipmentResult:
        return ShipmentResult.ok(generate_tracking_number(), "Test gönderisi oluşturuldu.")

    def _cancel(self, order: Order) -> ShipmentResult:
        reference = order.reference
        with self._lock:
            if reference in self._cancelled:
                return ShipmentResult.failure(ALREADY_CANCELLED, 422)
            self._cancelled.add(reference)
        return ShipmentResult.ok(reference, "Test gönderisi iptal edildi.")

    def _track(self, order: Order) -> TrackingResult:
        return TrackingResult.preparing(order.tracking_number)
