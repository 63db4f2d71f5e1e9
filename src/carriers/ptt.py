"""
PTT Kargo over its JAX-WS SOAP services.

Replies carry a `hataKodu`; an absent or zero code means success. Tracking
has its own service and reports delivery through a non-empty `TESALAN`.
"""
import logging as log
from datetime import datetime
from typing import Optional
from xml.etree import ElementTree as ET

from carriers.base import ShippingProvider
from config.carriers import PttConfig
from serializers import (
    Order,
    PttAcceptInput,
    PttDeleteInput,
    PttQueryInput,
    PttSenderInfo,
    PttShipmentLine,
    ShipmentRequest,
    ShipmentResult,
    TrackingResult,
)
from utils import soap
from utils.exceptions import CarrierConfigError
from utils.helpers import to_float, to_int
from utils.maps import ptt_status, status_label

PTT_ORDER_NAMESPACE = "http://kabul.ptt.gov.tr/"
PTT_TRACK_NAMESPACE = "http://ws.gonderitakip.ptt.gov.tr/"


def _file_name(prefix: str, now: Optional[datetime] = None) -> str:
    return prefix + (now or datetime.now()).strftime("%Y%m%d%H%M%S")


def _is_success_code(code: str) -> bool:
    return code in ("", "0")


def build_accept(
    request: ShipmentRequest, config: PttConfig, now: Optional[datetime] = None
) -> PttAcceptInput:
    sender = request.sender
    receiver = request.receiver
    line = PttShipmentLine(
        aAdres=receiver.address,
        aliciAdi=receiver.name,
        aliciIlAdi=receiver.city,
        aliciIlceAdi=receiver.district,
        aliciSms=receiver.phone,
        aliciTel=receiver.phone,
        barkodNo=request.barcode,
        desi=request.parcel.desi,
        gondericibilgi=PttSenderInfo(
            gonderici_adi=sender.name,
            gonderici_adresi=sender.address,
            gonderici_email=sender.email,
            gonderici_il_ad=sender.city,
            gonderici_ilce_ad=sender.district,
            gonderici_sms=sender.phone,
            gonderici_telefonu=sender.phone,
        ),
        musteriReferansNo=request.order_code or request.barcode,
    )
    return PttAcceptInput(
        dongu=[line],
        dosyaAdi=_file_name("LB_", now),
        kullanici=config.username,
        musteriId=to_int(config.customer_id),
        sifre=config.password,
    )


def build_delete(order: Order, config: PttConfig, now: Optional[datetime] = None) -> PttDeleteInput:
    return PttDeleteInput(
        barcode=order.barcode or order.invoice_number,
        dosyaAdi=_file_name("LB_CANCEL_", now),
        musteriId=to_int(config.customer_id),
        sifre=config.password,
    )


def build_query(order: Order, config: PttConfig) -> PttQueryInput:
    return PttQueryInput(
        barkod=order.barcode or order.invoice_number,
        kullanici=str(to_int(config.customer_id)),
        sifre=config.password,
    )


def _reply(body: ET.Element) -> ET.Element:
    reply = soap.find(body, "return")
    return reply if reply is not None else body


def interpret_accept(body: ET.Element, barcode: str) -> ShipmentResult:
    reply = _reply(body)
    code = soap.find_text(reply, "hataKodu")
    description = soap.find_text(reply, "aciklama")
    if _is_success_code(code):
        return ShipmentResult.ok(
            barcode, description or "PTT gönderi kaydı başarıyla oluşturuldu."
        )
    return ShipmentResult.failure(description or f"PTT hata kodu: {code}", 400)


def interpret_delete(body: ET.Element, barcode: str) -> ShipmentResult:
    reply = _reply(body)
    code = soap.find_text(reply, "hataKodu")
    description = soap.find_text(reply, "aciklama")
    if _is_success_code(code):
        return ShipmentResult.ok(
            barcode, description or "PTT gönderi kaydı başarıyla iptal edildi."
        )
    return ShipmentResult.failure(description or "PTT gönderi iptal işlemi başarısız.", 422)


def interpret_query(body: ET.Element, barcode: str, tracking_url: str = "") -> TrackingResult:
    reply = soap.find(body, "return")
    if reply is None:
        return TrackingResult.preparing(barcode)

    delivered = bool(soap.find_text(reply, "TESALAN"))
    tracking_number = soap.find_text(reply, "BARNO")
    if not tracking_number and not delivered:
        return TrackingResult.preparing(barcode)

    status = ptt_status(delivered)
    return TrackingResult.from_status(
        status,
        status_label=soap.find_text(reply, "sonucAciklama") or status_label(status),
        tracking_number=tracking_number or barcode,
        tracking_url=f"{tracking_url}{tracking_number or barcode}" if tracking_url else None,
        desi=to_float(soap.find_text(reply, "GR")),
        price=to_float(soap.find_text(reply, "GONUCR")),
    )


class PttProvider(ShippingProvider):
    name = "ptt"
    config_class = PttConfig

    def _call(self, wsdl: str, namespace: str, operation: str, params) -> ET.Element:
        if not self.config.verify_tls:
            log.warning(f"PTT Kargo {operation} call runs without TLS certificate verification")
        return soap.call(
            soap.service_endpoint(wsdl),
            operation,
            namespace,
            params,
            timeout=self.config.timeout,
            verify=self.config.verify_tls,
            qualified=False,
        )

    def _create(self, request: ShipmentRequest) -> ShipmentResult:
        body = self._call(
            self.config.order_wsdl,
            PTT_ORDER_NAMESPACE,
            "kabulEkle2",
            {"input": build_accept(request, self.config)},
        )
        return interpret_accept(body, request.barcode)

    def _cancel(self, order: Order) -> ShipmentResult:
        body = self._call(
            self.config.order_wsdl,
            PTT_ORDER_NAMESPACE,
            "barkodVeriSil",
            {"inpDelete": build_delete(order, self.config)},
        )
        return interpret_delete(body, order.barcode or order.invoice_number)

    def _track(self, order: Order) -> TrackingResult:
        if not self.config.track_wsdl:
            raise CarrierConfigError("track_wsdl tanımlı değil.")

        body = self._call(
            self.config.track_wsdl,
            PTT_TRACK_NAMESPACE,
            "gonderiSorgu2",
            {"input": build_query(order, self.config)},
        )
        return interpret_query(
            body, order.barcode or order.invoice_number, self.config.tracking_url
        )
