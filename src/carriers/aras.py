"""
Aras Kargo over its WCF SOAP services.

SaveOrder and DeleteOrder return a `Result` of 1 on success. Tracking goes
through GetQueryXML, whose result is an XML document carried as a string.
"""
from typing import Optional
from xml.etree import ElementTree as ET

from carriers.base import ALREADY_CANCELLED, ShippingProvider
from config.carriers import ArasConfig
from serializers import (
    Address,
    ArasAddressInfo,
    ArasCustomerInfo,
    ArasDeleteOrderRequest,
    ArasOrderModel,
    ArasQueryRequest,
    ArasSaveOrderRequest,
    Order,
    PaymentType,
    ShipmentRequest,
    ShipmentResult,
    TrackingResult,
)
from utils import soap
from utils.exceptions import CarrierConfigError
from utils.helpers import to_float
from utils.maps import aras_status, status_label

ARAS_NAMESPACE = "http://tempuri.org/"
ARAS_SOAP_ACTION = "http://tempuri.org/IArasCargoIntegrationService/{operation}"
# query type that looks a shipment up by its integration code
ARAS_QUERY_BY_INTEGRATION_CODE = 39


def payment_code(payment_type: PaymentType) -> str:
    if payment_type in (PaymentType.SENDER_PAYS, PaymentType.PLATFORM_PAYS):
        return "1"
    return "2"


def _address_info(address: Address) -> ArasAddressInfo:
    return ArasAddressInfo(
        Address=address.address,
        AddressId=address.address_id or "",
        CityName=address.city,
        MobilePhone=address.phone,
        Name=address.name,
        TaxNumber=address.tax_number,
        TaxOffice=address.tax_office,
        TownName=address.district,
    )


def _customer_info(config: ArasConfig) -> ArasCustomerInfo:
    return ArasCustomerInfo(
        CustomerCode=config.customer_code,
        UserName=config.username,
        Password=config.password,
    )


def build_save_order(request: ShipmentRequest, config: ArasConfig) -> ArasSaveOrderRequest:
    return ArasSaveOrderRequest(
        customerInfo=_customer_info(config),
        model=ArasOrderModel(
            ConfigurationId=config.configuration_id,
            IntegrationCode=request.invoice_number,
            InvoiceNumber=request.invoice_number,
            TradingWaybillNumber=request.invoice_number,
            LovPayOrType=payment_code(request.payment_type),
            ReceiverAddressInfo=_address_info(request.receiver),
            SenderAddressInfo=_address_info(request.sender),
        ),
    )


def build_delete_order(order: Order, config: ArasConfig) -> ArasDeleteOrderRequest:
    return ArasDeleteOrderRequest(
        orderCode=order.invoice_number, customerInfo=_customer_info(config)
    )


def build_query(order: Order, config: ArasConfig) -> ArasQueryRequest:
    login = ET.Element("LoginInfo")
    ET.SubElement(login, "UserName").text = config.username
    ET.SubElement(login, "Password").text = config.password
    ET.SubElement(login, "CustomerCode").text = config.customer_code

    query = ET.Element("QueryInfo")
    ET.SubElement(query, "QueryType").text = str(ARAS_QUERY_BY_INTEGRATION_CODE)
    ET.SubElement(query, "IntegrationCode").text = order.invoice_number

    return ArasQueryRequest(
        loginInfo=ET.tostring(login, encoding="unicode"),
        queryInfo=ET.tostring(query, encoding="unicode"),
    )


def interpret_save_order(body: ET.Element, tracking_number: str) -> ShipmentResult:
    result = soap.find(body, "SaveOrderResult")
    if result is None:
        return ShipmentResult.failure("Aras Kargo: beklenmeyen yanıt, SaveOrderResult yok.", 503)

    description = soap.find_text(result, "Description")
    if soap.find_text(result, "Result") == "1":
        return ShipmentResult.ok(
            tracking_number, description or "Kargo başarıyla kaydedildi."
        )
    return ShipmentResult.failure(description or "Aras Kargo gönderiyi kabul etmedi.", 400)


def interpret_delete_order(body: ET.Element, tracking_number: str) -> ShipmentResult:
    result = soap.find(body, "DeleteOrderResult")
    if result is None:
        return ShipmentResult.failure("Aras Kargo: beklenmeyen yanıt, DeleteOrderResult yok.", 503)

    if soap.find_text(result, "Result") == "1":
        return ShipmentResult.ok(
            tracking_number, "Kargo başarılı bir şekilde iptal edildi."
        )
    return ShipmentResult.failure(
        soap.find_text(result, "Description") or ALREADY_CANCELLED, 422
    )


def interpret_query(
    body: ET.Element, reference: str, tracking_url: str = ""
) -> TrackingResult:
    document = soap.parse_embedded_xml(soap.find_text(body, "GetQueryXMLResult"))
    collection: Optional[ET.Element] = None
    if document is not None:
        if soap.local_name(document.tag) == "Collection":
            collection = document
        else:
            collection = soap.find(document, "Collection")

    if collection is None:
        return TrackingResult.preparing(reference)

    status = aras_status(
        soap.find_text(collection, "DURUM_KODU"), soap.find_text(collection, "TIP_KODU")
    )
    tracking_number = soap.find_text(collection, "KARGO_TAKIP_NO") or reference
    return TrackingResult.from_status(
        status,
        status_label=soap.find_text(collection, "DURUMU") or status_label(status),
        tracking_number=tracking_number,
        tracking_url=f"{tracking_url}{tracking_number}" if tracking_url else None,
        desi=to_float(soap.find_text(collection, "KG_DESI")),
        price=to_float(soap.find_text(collection, "TUTAR")),
    )


class ArasProvider(ShippingProvider):
    name = "aras"
    config_class = ArasConfig

    def _call(self, wsdl: str, operation: str, params):
        return soap.call(
            soap.service_endpoint(wsdl),
            operation,
            ARAS_NAMESPACE,
            params,
            soap_action=ARAS_SOAP_ACTION.format(operation=operation),
            timeout=self.config.timeout,
            verify=self.config.verify_tls,
        )

    def _create(self, request: ShipmentRequest) -> ShipmentResult:
        if (
            self.config.require_sender_address_id
            and not request.is_return
            and not request.sender.address_id
        ):
            return ShipmentResult.failure("Gönderici adres anahtarı bulunamadı!", 404)

        body = self._call(
            self.config.order_wsdl, "SaveOrder", build_save_order(request, self.config)
        )
        return interpret_save_order(body, request.invoice_number)

    def _cancel(self, order: Order) -> ShipmentResult:
        body = self._call(
            self.config.order_wsdl, "DeleteOrder", build_delete_order(order, self.config)
        )
        return interpret_delete_order(body, order.reference)

    def _track(self, order: Order) -> TrackingResult:
        if not self.config.track_wsdl:
            raise CarrierConfigError("track_wsdl tanımlı değil.")

        body = self._call(
            self.config.track_wsdl, "GetQueryXML", build_query(order, self.config)
        )
        return interpret_query(body, order.reference, self.config.tracking_url)
