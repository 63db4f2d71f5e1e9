"""
Navlungo REST API.

Every call but the login carries `Authorization: Bearer <token>`; the token
comes from a process-wide cache keyed by API URL and key, so concurrent
requests share one login.
"""
import base64
import logging as log
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Optional

import requests

from carriers.base import ALREADY_CANCELLED, ShippingProvider
from config.carriers import NavlungoConfig
from serializers import (
    LabelResult,
    NavlungoCancelRequest,
    NavlungoLoginRequest,
    NavlungoParcel,
    NavlungoPostRequest,
    NavlungoReceiver,
    NavlungoSender,
    Order,
    OrderLine,
    ShipmentRequest,
    ShipmentResult,
    TrackingEvent,
    TrackingResult,
)
from utils.exceptions import CarrierTransportError
from utils.helpers import to_int
from utils.maps import navlungo_status, status_label
from utils.token_cache import LoginResult, get_token_cache

DEFAULT_TOKEN_LIFETIME = 3600
TOKEN_UNAVAILABLE = "Navlungo API token alınamadı. Lütfen kargo ayarlarınızı kontrol edin."
AUTH_STATUSES = (401, 403)


def build_parcels(items: Iterable[OrderLine]) -> List[NavlungoParcel]:
    """One parcel per unit; a single default parcel when there are no lines."""
    parcels = [
        NavlungoParcel(
            weight=max(item.weight, 1000),
            deci=max(item.desi, 1),
            description=item.name or "Ürün",
        )
        for item in items
        for _ in range(item.quantity)
    ]
    if not parcels:
        parcels.append(NavlungoParcel())
    return parcels


def build_post(request: ShipmentRequest, config: NavlungoConfig) -> NavlungoPostRequest:
    return NavlungoPostRequest(
        carrier_id=config.carrier_id,
        sender=NavlungoSender(
            name=request.sender.name,
            address=request.sender.address,
            city=request.sender.city,
            district=request.sender.district,
            phone=request.sender.phone,
            email=request.sender.email,
        ),
        receiver=NavlungoReceiver(
            name=request.receiver.name,
            address=request.receiver.address,
            city=request.receiver.city,
            district=request.receiver.district,
            phone=request.receiver.phone,
        ),
        parcels=build_parcels(request.items),
        payment_type=request.payment_type.value,
        invoice_number=request.invoice_number,
        order_code=request.order_code,
    )


def _text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _message(data: Dict[str, Any], default: str = "Bilinmeyen hata") -> str:
    return str(data.get("message") or data.get("error") or default)


def interpret_post(status_code: int, data: Dict[str, Any], fallback: str) -> ShipmentResult:
    if status_code >= 500 or status_code in AUTH_STATUSES:
        return ShipmentResult.failure(f"Navlungo: API hatası: {status_code}", 503)
    if status_code >= 300 or not data.get("success"):
        return ShipmentResult.failure(f"Gönderi oluşturulamadı: {_message(data)}", 400)

    # Navlungo sends numeric tracking numbers for some carriers
    tracking_number = _text(data.get("tracking_number")) or fallback
    return ShipmentResult.ok(
        tracking_number, "Kargo başarıyla kaydedildi.", label_url=_text(data.get("label_url"))
    )


def interpret_cancel(status_code: int, data: Dict[str, Any], tracking_number: str) -> ShipmentResult:
    if status_code >= 500 or status_code in AUTH_STATUSES:
        return ShipmentResult.failure(f"Navlungo: API hatası: {status_code}", 503)
    if status_code >= 300 or not data.get("success"):
        return ShipmentResult.failure(_message(data, ALREADY_CANCELLED), 422)
    return ShipmentResult.ok(tracking_number, "Kargo başarıyla iptal edildi.")


def _event(raw: Dict[str, Any]) -> TrackingEvent:
    return TrackingEvent(
        status=navlungo_status(raw.get("status")),
        description=str(raw.get("description") or raw.get("status") or ""),
        location=_text(raw.get("location")),
        timestamp=_text(raw.get("date") or raw.get("timestamp")),
    )


def interpret_track(status_code: int, data: Dict[str, Any], tracking_number: str) -> TrackingResult:
    if status_code == 404:
        return TrackingResult.preparing(tracking_number)
    if status_code >= 500 or status_code in AUTH_STATUSES:
        return TrackingResult.failure(f"Navlungo: API hatası: {status_code}", 503)
    if status_code >= 300 or not data.get("success"):
        return TrackingResult.failure(f"Takip yapılamadı: {_message(data)}", 400)

    status = navlungo_status(data.get("status"))
    history = [_event(raw) for raw in data.get("events") or [] if isinstance(raw, dict)]
    last = history[-1] if history else None
    return TrackingResult.from_status(
        status,
        status_label=str(data.get("status_description") or data.get("status") or status_label(status)),
        tracking_number=tracking_number,
        tracking_url=_text(data.get("tracking_url")),
        current_location=last.location if last else None,
        last_update=last.timestamp if last else None,
        history=history,
    )


def interpret_label(
    status_code: int, content_type: str, content: bytes, data: Dict[str, Any], tracking_number: str
) -> Optional[LabelResult]:
    if status_code >= 300:
        return None
    if "application/pdf" in content_type or "image" in content_type:
        return LabelResult(
            tracking_number=tracking_number,
            label=base64.b64encode(content).decode("ascii"),
            content_type=content_type,
        )
    label_url = _text(data.get("label_url"))
    if label_url:
        return LabelResult(tracking_number=tracking_number, label_url=label_url)
    return None


def _json(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class NavlungoProvider(ShippingProvider):
    name = "navlungo"
    config_class = NavlungoConfig

    def __init__(self, config: Optional[NavlungoConfig] = None):
        super().__init__(config)
        self.base_url = self.config.api_url.rstrip("/")
        self.token_cache = get_token_cache(
            f"navlungo:{self.base_url}:{self.config.api_key}",
            self._login,
            self.config.token_refresh_margin,
        )

    def _login(self) -> LoginResult:
        if not self.config.api_key or not self.config.api_secret:
            log.error("Navlungo: API credentials are missing, cannot request a token")
            return None

        payload = NavlungoLoginRequest(
            api_key=self.config.api_key, api_secret=self.config.api_secret
        )
        try:
            response = requests.post(
                url=f"{self.base_url}/v2/auth/login",
                json=asdict(payload),
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            log.warning(f"Navlungo: token request failed, will retry on next call: {str(e)}")
            return None

        if response.status_code in AUTH_STATUSES:
            log.error(f"Navlungo: credentials rejected (HTTP {response.status_code})")
            return None
        if not response.ok:
            log.warning(f"Navlungo: token request returned HTTP {response.status_code}")
            return None

        data = _json(response)
        token = data.get("token")
        if not token:
            log.error(f"Navlungo: login response has no token: {response.text[:200]}")
            return None
        return token, to_int(data.get("expires_in"), DEFAULT_TOKEN_LIFETIME) or DEFAULT_TOKEN_LIFETIME

    def _send(self, method: str, path: str, token: str, payload: Optional[Dict] = None):
        headers = {"Authorization": f"Bearer {token}"}
        try:
            if method == "GET":
                response = requests.get(
                    url=f"{self.base_url}{path}", headers=headers, timeout=self.config.timeout
                )
            else:
                response = requests.post(
                    url=f"{self.base_url}{path}",
                    headers=headers,
                    json=payload,
                    timeout=self.config.timeout,
                )
        except requests.Timeout as e:
            raise CarrierTransportError(f"{path} timed out after {self.config.timeout}s") from e
        except requests.RequestException as e:
            raise CarrierTransportError(f"{path} failed: {str(e)}") from e

        if response.status_code in AUTH_STATUSES:
            self.token_cache.invalidate()
        if response.status_code >= 300 and response.status_code != 404:
            log.error(f"Navlungo: {path} returned HTTP {response.status_code}: {response.text[:200]}")
        return response

    def _create(self, request: ShipmentRequest) -> ShipmentResult:
        token = self.token_cache.get_token()
        if not token:
            return ShipmentResult.failure(TOKEN_UNAVAILABLE, 503)

        response = self._send(
            "POST", "/v2/create-a-post", token, asdict(build_post(request, self.config))
        )
        return interpret_post(response.status_code, _json(response), request.invoice_number)

    def _cancel(self, order: Order) -> ShipmentResult:
        reference = order.reference
        if not reference:
            return ShipmentResult.failure("Takip numarası gereklidir.", 400)

        token = self.token_cache.get_token()
        if not token:
            return ShipmentResult.failure(TOKEN_UNAVAILABLE, 503)

        payload = NavlungoCancelRequest()
        if order.cancellation_reason:
            payload.reason = order.cancellation_reason
        response = self._send("POST", f"/v2/cancel/{reference}", token, asdict(payload))
        return interpret_cancel(response.status_code, _json(response), reference)

    def _track(self, order: Order) -> TrackingResult:
        reference = order.reference
        if not reference:
            return TrackingResult.failure("Takip numarası gereklidir.", 400)

        token = self.token_cache.get_token()
        if not token:
            return TrackingResult.failure(TOKEN_UNAVAILABLE, 503)

        response = self._send("GET", f"/v2/track/{reference}", token)
        return interpret_track(response.status_code, _json(response), reference)

    def _label(self, order: Order) -> Optional[LabelResult]:
        reference = order.reference
        token = self.token_cache.get_token() if reference else None
        if not token:
            return None

        response = self._send("GET", f"/v2/label/{reference}", token)
        content_type = response.headers.get("Content-Type", "")
        data = {} if "application/json" not in content_type else _json(response)
        return interpret_label(
            response.status_code, content_type, response.content, data, reference
        )
