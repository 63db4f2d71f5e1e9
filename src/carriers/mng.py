"""
MNG Kargo over its ASMX SOAP service.

Results are plain strings: "1" means success, and a create for an order MNG
already holds answers with a message containing "ZATEN VAR", which counts as
a soft success.
"""
from typing import Iterable, List, Optional
from xml.etree import ElementTree as ET

from carriers.base import ALREADY_CANCELLED, ShippingProvider
from config.carriers import MngConfig
from serializers import (
    MngCancelRequest,
    MngOrderRequest,
    MngParcel,
    MngReceiver,
    MngSender,
    MngTrackRequest,
    Order,
    OrderLine,
    PaymentType,
    ShipmentRequest,
    ShipmentResult,
    TrackingResult,
)
from utils import soap
from utils.helpers import round_half_up, to_float, to_int
from utils.maps import mng_status, status_label

MNG_NAMESPACE = "http://tempuri.org/"
MNG_SOAP_ACTION = "http://tempuri.org/{operation}"
DUPLICATE_MARKER = "ZATEN VAR"

PAYMENT_CODES = {
    PaymentType.SENDER_PAYS: "Gonderici_Odeyecek",
    PaymentType.PLATFORM_PAYS: "Platform_Odeyecek",
    PaymentType.RECEIVER_PAYS: "Alici_Odeyecek",
}


def build_parcels(items: Iterable[OrderLine]) -> List[MngParcel]:
    return [
        MngParcel(
            Kg=max(1, round_half_up(item.weight / 1000)),
            Desi=max(1, round_half_up(item.desi)),
            Adet=item.quantity,
            Icerik=item.name.replace(":", " ") or "Ürün",
        )
        for item in items
    ]


def build_order(request: ShipmentRequest, config: MngConfig) -> MngOrderRequest:
    return MngOrderRequest(
        pKullaniciAdi=config.username,
        pSifre=config.password,
        pSiparisNo=request.invoice_number,
        pBarkodText=request.invoice_number,
        pIrsaliyeNo=request.invoice_number,
        pOdemeSekli=PAYMENT_CODES.get(request.payment_type, "Gonderici_Odeyecek"),
        pKargoCinsi=request.parcel_type,
        pAciklama=request.description,
        pGonderiParcaList={"GonderiParca": build_parcels(request.items)},
        pGonderenMusteri=MngSender(
            pGonMusteriAdi=request.sender.name,
            pGonIlAdi=request.sender.city,
            pGonilceAdi=request.sender.district,
            pGonAdresText=request.sender.address,
            pGonTelCep=request.sender.phone,
        ),
        pAliciMusteri=MngReceiver(
            pAliciMusteriAdi=request.receiver.name,
            pAliciIlAdi=request.receiver.city,
            pAliciilceAdi=request.receiver.district,
            pAliciAdresText=request.receiver.address,
            pAliciTelCep=request.receiver.phone,
        ),
    )


def interpret_order(body: ET.Element, tracking_number: str) -> ShipmentResult:
    text = soap.find_text(body, "SiparisKayit_C2CResult")
    if text == "1":
        return ShipmentResult.ok(tracking_number, "Kargo başarıyla kaydedildi.")
    if DUPLICATE_MARKER in text:
        return ShipmentResult.ok(tracking_number, "Kargo zaten kaydedilmiş.", code=201)
    return ShipmentResult.failure(text or "MNG Kargo boş yanıt döndü.", 400)


def interpret_cancel(body: ET.Element, tracking_number: str) -> ShipmentResult:
    text = soap.find_text(body, "SiparisIptali_C2CResult")
    if text == "1":
        return ShipmentResult.ok(tracking_number, "Kargo başarılı bir şekilde iptal edildi.")
    return ShipmentResult.failure(text or ALREADY_CANCELLED, 422)


def _find_table(body: ET.Element) -> Optional[ET.Element]:
    result = soap.find(body, "GelecekIadeSiparisKontrolResult")
    if result is None:
        return None

    table = soap.find(result, "Table1")
    if table is None:
        # some gateways return the dataset escaped inside the result
        document = soap.parse_embedded_xml(result.text)
        table = soap.find(document, "Table1")
    return table


def interpret_track(body: ET.Element, reference: str) -> TrackingResult:
    table = _find_table(body)
    code = to_int(soap.find_text(table, "SIPARIS_STATU"), 0)
    if table is None or code == 0:
        return TrackingResult.preparing(reference)

    status = mng_status(code)
    return TrackingResult.from_status(
        status,
        status_label=soap.find_text(table, "SIPARIS_STATU_ACIKLAMA") or status_label(status),
        tracking_number=soap.find_text(table, "GONDERI_NO") or reference,
        tracking_url=soap.find_text(table, "KARGO_TAKIP_URL") or None,
        desi=to_float(soap.find_text(table, "KGDESI")),
        price=to_float(soap.find_text(table, "TUTAR")),
    )


class MngProvider(ShippingProvider):
    name = "mng"
    config_class = MngConfig

    def _call(self, operation: str, params) -> ET.Element:
        return soap.call(
            soap.service_endpoint(self.config.wsdl),
            operation,
            MNG_NAMESPACE,
            params,
            soap_action=MNG_SOAP_ACTION.format(operation=operation),
            timeout=self.config.timeout,
            verify=self.config.verify_tls,
        )

    def _create(self, request: ShipmentRequest) -> ShipmentResult:
        body = self._call("SiparisKayit_C2C", build_order(request, self.config))
        return interpret_order(body, request.invoice_number)

    def _cancel(self, order: Order) -> ShipmentResult:
        params = MngCancelRequest(
            pKullaniciAdi=self.config.username,
            pSifre=self.config.password,
            pSiparisNo=order.invoice_number,
        )
        return interpret_cancel(self._call("SiparisIptali_C2C", params), order.reference)

    def _track(self, order: Order) -> TrackingResult:
        params = MngTrackRequest(
            pRfSipGnMusteriNo=self.config.username,
            pRfSipGnMusteriSifre=self.config.password,
            pChSiparisNo=order.invoice_number,
        )
        body = self._call("GelecekIadeSiparisKontrol", params)
        return interpret_track(body, order.reference)
