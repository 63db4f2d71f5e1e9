"""
Yurtiçi Kargo over its JAX-WS SOAP services.

Every reply carries an `outFlag` string where "0" means success and any
other value a failure described by `outResult`.
"""
from xml.etree import ElementTree as ET

from carriers.base import ALREADY_CANCELLED, ShippingProvider
from config.carriers import YurtIciConfig
from serializers import (
    Order,
    ShipmentRequest,
    ShipmentResult,
    TrackingResult,
    YurtIciCancelRequest,
    YurtIciCargoData,
    YurtIciConsigneeAddress,
    YurtIciCreateRequest,
    YurtIciCustParams,
    YurtIciPayerData,
    YurtIciSenderAddress,
    YurtIciShipmentData,
    YurtIciTrackRequest,
)
from utils import soap
from utils.exceptions import CarrierConfigError
from utils.helpers import (
    calculate_total_desi,
    calculate_total_weight,
    format_number,
    to_float,
)
from utils.maps import yurtici_status

YURTICI_ORDER_NAMESPACE = "http://yurticikargo.com.tr/ShippingOrderDispatcherServices"
YURTICI_TRACK_NAMESPACE = "http://yurticikargo.com.tr/WsReportWithReferenceServices"
SUCCESS_FLAG = "0"
GENERIC_ERROR = "Bir hata oluştu, lütfen daha sonra tekrar deneyin!"


def build_create(request: ShipmentRequest, config: YurtIciConfig) -> YurtIciCreateRequest:
    desi = format_number(calculate_total_desi(request.items))
    weight = format_number(calculate_total_weight(request.items))
    return YurtIciCreateRequest(
        wsUserName=config.username,
        wsPassword=config.password,
        shipmentData=YurtIciShipmentData(
            ngiDocumentKey=request.invoice_number,
            totalDesi=desi,
            totalWeight=weight,
            personGiver=request.sender.name,
            docCargoDataArray=YurtIciCargoData(
                ngiCargoKey=request.invoice_number,
                cargoDesi=desi,
                cargoWeight=weight,
            ),
        ),
        XSenderCustAddress=YurtIciSenderAddress(
            senderCustName=request.sender.name,
            senderAddress=request.sender.address,
            cityId=request.sender.city_id or "",
            townName=request.sender.district,
            senderPhone=request.sender.phone,
        ),
        XConsigneeCustAddress=YurtIciConsigneeAddress(
            consigneeCustName=request.receiver.name,
            consigneeAddress=request.receiver.address,
            cityId=request.receiver.city_id or "",
            townName=request.receiver.district,
            consigneeMobilePhone=request.receiver.phone,
        ),
        payerCustData=YurtIciPayerData(invCustId=config.customer_id),
    )


def build_cancel(order: Order, config: YurtIciConfig) -> YurtIciCancelRequest:
    key = order.invoice_number or order.barcode or ""
    request = YurtIciCancelRequest(
        wsUserName=config.username,
        wsPassword=config.password,
        ngiCargoKey=key,
        ngiDocumentKey=key,
    )
    if order.cancellation_reason:
        request.cancellationDescription = order.cancellation_reason
    return request


def build_track(order: Order, config: YurtIciConfig) -> YurtIciTrackRequest:
    return YurtIciTrackRequest(
        userName=config.username,
        password=config.password,
        custParamsVO=YurtIciCustParams(invCustIdArray=config.customer_id),
        fieldValueArray=order.barcode or order.invoice_number,
    )


def interpret_create(body: ET.Element, tracking_number: str) -> ShipmentResult:
    response = soap.find(body, "XShipmentDataResponse")
    if response is None:
        return ShipmentResult.failure(GENERIC_ERROR, 400)

    if soap.child_text(response, "outFlag") == SUCCESS_FLAG:
        return ShipmentResult.ok(tracking_number, "Kargo başarıyla kaydedildi.")
    return ShipmentResult.failure(
        soap.child_text(response, "outResult") or "Bilinmeyen hata", 400
    )


def interpret_cancel(body: ET.Element, tracking_number: str) -> ShipmentResult:
    response = soap.find(body, "XCancelShipmentResponse")
    if response is None:
        return ShipmentResult.failure(GENERIC_ERROR, 400)

    if soap.child_text(response, "outFlag") == SUCCESS_FLAG:
        return ShipmentResult.ok(
            tracking_number, "İşlem başarılı bir şekilde gerçekleştirildi."
        )
    return ShipmentResult.failure(
        soap.child_text(response, "outResult") or ALREADY_CANCELLED, 422
    )


def interpret_track(body: ET.Element, reference: str, tracking_url: str = "") -> TrackingResult:
    response = soap.find(body, "ShippingDataResponseVO")
    if response is None or soap.child_text(response, "outFlag") != SUCCESS_FLAG:
        return TrackingResult.preparing(reference)

    detail = soap.find(response, "shippingDataDetailVOArray")
    if detail is None:
        return TrackingResult.preparing(reference)

    tracking_number = soap.find_text(detail, "docId") or reference
    return TrackingResult.from_status(
        yurtici_status(soap.find_text(detail, "operationStatus")),
        status_label=soap.find_text(detail, "operationMessage") or "Kargo yolda.",
        tracking_number=tracking_number,
        tracking_url=f"{tracking_url}{tracking_number}" if tracking_url else None,
        desi=to_float(soap.find_text(detail, "totalDesiKg")),
        price=to_float(soap.find_text(detail, "totalAmount")),
    )


class YurtIciProvider(ShippingProvider):
    name = "yurtici"
    config_class = YurtIciConfig

    def _call(self, wsdl: str, namespace: str, operation: str, params) -> ET.Element:
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
            YURTICI_ORDER_NAMESPACE,
            "createNgiShipmentWithAddress",
            build_create(request, self.config),
        )
        return interpret_create(body, request.invoice_number)

    def _cancel(self, order: Order) -> ShipmentResult:
        body = self._call(
            self.config.order_wsdl,
            YURTICI_ORDER_NAMESPACE,
            "cancelNgiShipment",
            build_cancel(order, self.config),
        )
        return interpret_cancel(body, order.reference)

    def _track(self, order: Order) -> TrackingResult:
        if not self.config.track_wsdl:
            raise CarrierConfigError("track_wsdl tanımlı değil.")

        body = self._call(
            self.config.track_wsdl,
            YURTICI_TRACK_NAMESPACE,
            "listInvDocumentInterfaceByReference",
            build_track(order, self.config),
        )
        return interpret_track(body, order.reference, self.config.tracking_url)
