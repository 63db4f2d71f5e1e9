"""
Shipment gateway: the single entry point the order domain talks to.

The gateway picks the carrier driver by name and guarantees a typed result
for every call, whatever happens inside the driver.
"""
import logging as log
import threading
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from carriers import PROVIDERS, ShippingProvider
from config.app_vars import SHIPPING_DEFAULT_PROVIDER
from config.carriers import CarrierConfig
from serializers import (
    LabelResult,
    Order,
    SenderInfo,
    ShipmentResult,
    TrackingResult,
)
from utils.helpers import validate_order
from utils.maps import provider_label


class ShippingGateway:
    def __init__(
        self,
        providers: Optional[Dict[str, Type[ShippingProvider]]] = None,
        default_provider: str = SHIPPING_DEFAULT_PROVIDER,
    ):
        self.providers = dict(PROVIDERS if providers is None else providers)
        self.default_provider = (default_provider or "none").lower()
        self._instances: Dict[str, ShippingProvider] = {}
        self._lock = threading.Lock()

    def get_provider(
        self, name: str, config: Optional[CarrierConfig] = None
    ) -> Optional[ShippingProvider]:
        """Driver for `name`, built from `config` or from the environment."""
        key = (name or "").strip().lower()
        provider_class = self.providers.get(key)
        if provider_class is None:
            return None
        if config is not None:
            return provider_class(config)

        with self._lock:
            provider = self._instances.get(key)
            if provider is None:
                provider = provider_class()
                self._instances[key] = provider
            return provider

    def _resolve(
        self, carrier: str, config: Optional[CarrierConfig]
    ) -> Tuple[Optional[ShippingProvider], Optional[str], int]:
        try:
            provider = self.get_provider(carrier, config)
        except ValidationError as e:
            log.error(f"Invalid configuration for carrier {carrier}: {str(e)}")
            return None, f"{carrier}: kargo ayarları geçersiz.", 503
        if provider is None:
            return None, f"Bilinmeyen kargo firması: {carrier}", 404
        return provider, None, 200

    def get_active_provider(self) -> Optional[ShippingProvider]:
        if self.default_provider == "none":
            return None
        provider, _, _ = self._resolve(self.default_provider, None)
        if provider is None or not provider.is_available():
            return None
        return provider

    def available_providers(self) -> List[Dict[str, Any]]:
        providers = []
        for name in self.providers:
            provider, _, _ = self._resolve(name, None)
            providers.append(
                {
                    "name": name,
                    "label": provider_label(name),
                    "available": provider is not None and provider.is_available(),
                }
            )
        return providers

    def create_shipment(
        self,
        carrier: str,
        order: Order,
        sender_info: SenderInfo,
        config: Optional[CarrierConfig] = None,
    ) -> ShipmentResult:
        provider, error, code = self._resolve(carrier, config)
        if provider is None:
            return ShipmentResult.failure(error, code)

        missing = validate_order(order)
        if missing:
            return ShipmentResult.failure(f"Eksik alan: {missing}", 404)

        try:
            return provider.create_shipment(order, sender_info)
        except Exception as e:
            log.error(
                f"{provider.label} create escaped the driver for order {order.order_number}: {str(e)}",
                exc_info=True,
            )
            return ShipmentResult.failure(f"{provider.label}: {str(e)}", 503)

    def cancel_shipment(
        self, carrier: str, order: Order, config: Optional[CarrierConfig] = None
    ) -> ShipmentResult:
        provider, error, code = self._resolve(carrier, config)
        if provider is None:
            return ShipmentResult.failure(error, code)

        try:
            return provider.cancel_shipment(order)
        except Exception as e:
            log.error(
                f"{provider.label} cancel escaped the driver for order {order.order_number}: {str(e)}",
                exc_info=True,
            )
            return ShipmentResult.failure(f"{provider.label}: {str(e)}", 503)

    def track_shipment(
        self, carrier: str, order: Order, config: Optional[CarrierConfig] = None
    ) -> TrackingResult:
        provider, error, code = self._resolve(carrier, config)
        if provider is None:
            return TrackingResult.failure(error, code)

        try:
            return provider.track_shipment(order)
        except Exception as e:
            log.error(
                f"{provider.label} track escaped the driver for order {order.order_number}: {str(e)}",
                exc_info=True,
            )
            return TrackingResult.failure(f"{provider.label}: {str(e)}", 503)

    def get_label(
        self, carrier: str, order: Order, config: Optional[CarrierConfig] = None
    ) -> Optional[LabelResult]:
        provider, _, _ = self._resolve(carrier, config)
        if provider is None:
            return None

        try:
            return provider.get_label(order)
        except Exception as e:
            log.error(
                f"{provider.label} label escaped the driver for order {order.order_number}: {str(e)}",
                exc_info=True,
            )
            return None

    def reset(self) -> None:
        """Drop cached drivers so the next call rebuilds them from the environment."""
        with self._lock:
            self._instances.clear()


shipping_gateway = ShippingGateway()
