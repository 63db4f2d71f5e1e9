"""
Contract every carrier driver implements.

The public methods never raise: configuration problems, transport failures
and anything unexpected inside a driver come back as a typed result with a
503 code. Drivers only implement the `_create`, `_cancel`, `_track` and
`_label` hooks and may raise `CarrierError` subclasses from them.
"""
import logging as log
from abc import ABC, abstractmethod
from typing import Callable, Optional, Type, TypeVar, Union

from config.carriers import CarrierConfig, load_carrier_config
from serializers import (
    LabelResult,
    Order,
    SenderInfo,
    ShipmentRequest,
    ShipmentResult,
    TrackingResult,
)
from utils.exceptions import CarrierConfigError, CarrierTransportError
from utils.helpers import build_shipment_request, validate_order
from utils.maps import provider_label

ALREADY_CANCELLED = "İptal işlemi yapılamadı. Daha önce iptal edilmiş olabilir"

R = TypeVar("R")
Result = Union[ShipmentResult, TrackingResult, LabelResult, None]


class ShippingProvider(ABC):
    name: str = ""
    config_class: Type[CarrierConfig] = CarrierConfig

    def __init__(self, config: Optional[CarrierConfig] = None):
        if config is None:
            config = load_carrier_config(self.name) or self.config_class()
        self.config = config
        self.label = provider_label(self.name)

    def get_name(self) -> str:
        return self.name

    def config_error(self) -> Optional[str]:
        """Why this carrier cannot be called right now, or None."""
        missing = self.config.missing_fields()
        if missing:
            return f"{self.label}: {missing[0]} tanımlı değil."
        if not self.config.enabled:
            return f"{self.label}: enabled ayarı kapalı."
        return None

    def is_available(self) -> bool:
        return self.config_error() is None

    def tracking_url(self, tracking_number: Optional[str]) -> Optional[str]:
        if not tracking_number or not self.config.tracking_url:
            return None
        return f"{self.config.tracking_url}{tracking_number}"

    def create_shipment(self, order: Order, sender_info: SenderInfo) -> ShipmentResult:
        missing = validate_order(order)
        if missing:
            result = ShipmentResult.failure(f"Eksik alan: {missing}", 404)
            self._log_call("create", order, result)
            return result

        return self._run(
            "create",
            order,
            lambda: self._create(build_shipment_request(order, sender_info)),
            ShipmentResult.failure,
        )

    def cancel_shipment(self, order: Order) -> ShipmentResult:
        return self._run("cancel", order, lambda: self._cancel(order), ShipmentResult.failure)

    def track_shipment(self, order: Order) -> TrackingResult:
        return self._run("track", order, lambda: self._track(order), TrackingResult.failure)

    def get_label(self, order: Order) -> Optional[LabelResult]:
        return self._run("label", order, lambda: self._label(order), lambda error, code: None)

    @abstractmethod
    def _create(self, request: ShipmentRequest) -> ShipmentResult: ...

    @abstractmethod
    def _cancel(self, order: Order) -> ShipmentResult: ...

    @abstractmethod
    def _track(self, order: Order) -> TrackingResult: ...

    def _label(self, order: Order) -> Optional[LabelResult]:
        return None

    def _run(
        self,
        action: str,
        order: Order,
        operation: Callable[[], R],
        on_error: Callable[[str, int], R],
    ) -> R:
        error = self.config_error()
        if error:
            result = on_error(error, 503)
        else:
            try:
                result = operation()
            except CarrierConfigError as e:
                result = on_error(f"{self.label}: {str(e)}", 503)
            except CarrierTransportError as e:
                log.warning(
                    f"{self.label} {action} failed for order {order.order_number}: {str(e)}"
                )
                result = on_error(f"{self.label}: {str(e)}", 503)
            except Exception as e:
                log.error(
                    f"Unexpected {self.label} {action} error for order {order.order_number}: {str(e)}",
                    exc_info=True,
                )
                result = on_error(f"{self.label}: {str(e)}", 503)

        self._log_call(action, order, result)
        return result

    def _log_call(self, action: str, order: Order, result: Result) -> None:
        if result is None:
            log.info(f"[{self.name}] {action} order={order.order_number} -> no label")
            return
        if isinstance(result, LabelResult):
            log.info(f"[{self.name}] {action} order={order.order_number} -> label ready")
            return

        level = log.INFO if result.success else log.WARNING
        log.log(
            level,
            f"[{self.name}] {action} order={order.order_number} "
            f"code={result.response_code} message={result.message}",
        )
