"""
Shared fixtures for the shipment gateway tests

Carrier replies are recorded under tests/fixtures; HTTP is always mocked.
"""
import json
from pathlib import Path
from unittest.mock import MagicMock
from xml.etree import ElementTree as ET

import pytest

from config.carriers import (
    ArasConfig,
    MngConfig,
    NavlungoConfig,
    PttConfig,
    SandboxConfig,
    YurtIciConfig,
)
from serializers import Address, Order, OrderLine, SenderInfo
from utils.token_cache import clear_token_caches

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


def load_json_fixture(name: str) -> dict:
    return json.loads(load_fixture(name).decode("utf-8"))


def soap_body(name: str) -> ET.Element:
    """Body element of a recorded SOAP reply, as `soap.call` returns it"""
    return ET.fromstring(load_fixture(name)).find("{*}Body")


def posted_operation(post) -> ET.Element:
    """Operation element of the envelope handed to a mocked `requests.post`"""
    envelope = ET.fromstring(post.call_args.kwargs["data"])
    return list(envelope.find("{*}Body"))[0]


def mock_response(status_code=200, content=b"", json_data=None, headers=None):
    """Stand-in for a `requests.Response`"""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.headers = headers or {}
    if json_data is not None:
        content = json.dumps(json_data).encode("utf-8")
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    response.content = content
    response.text = content.decode("utf-8", errors="replace")
    return response


@pytest.fixture(autouse=True)
def reset_token_caches():
    clear_token_caches()
    yield
    clear_token_caches()


@pytest.fixture
def sender():
    return SenderInfo(
        name="Merkez Eczanesi",
        address="Atatürk Cad. No:12",
        city="İstanbul",
        district="Kadıköy",
        phone="05321234567",
        email="eczane@example.com",
        city_id="34",
        address_id="ADR-1",
    )


@pytest.fixture
def order():
    return Order(
        order_number="ORD-1001",
        invoice_number="INV-1001",
        shipping_address=Address(
            name="Ayşe Yılmaz",
            address="Cumhuriyet Mah. 5. Sok. No:3",
            city="Ankara",
            district="Çankaya",
            phone="05551112233",
            city_id="6",
        ),
        items=[
            OrderLine(name="Vitamin C", weight=400, desi=1, quantity=2),
            OrderLine(name="Termometre", weight=250, desi=2, quantity=1),
        ],
    )


@pytest.fixture
def aras_config():
    return ArasConfig(
        enabled=True,
        customer_code="1234567",
        username="aras-user",
        password="aras-pass",
        order_wsdl="https://customerws.araskargo.com.tr/arascargoservice.asmx?wsdl",
        track_wsdl="https://customerservices.araskargo.com.tr/ArasCargoCustomerIntegrationService/ArasCargoIntegrationService.svc?wsdl",
        tracking_url="https://kargotakip.araskargo.com.tr/mainpage.aspx?code=",
    )


@pytest.fixture
def mng_config():
    return MngConfig(
        enabled=True,
        username="mng-user",
        password="mng-pass",
        wsdl="https://service.mngkargo.com.tr/musterikargosiparis/musterikargosiparis.asmx?WSDL",
    )


@pytest.fixture
def ptt_config():
    return PttConfig(
        enabled=True,
        username="ptt-user",
        password="ptt-pass",
        customer_id="904123",
        order_wsdl="https://pttws.ptt.gov.tr/PttVeriYukleme/services/Sorgu?wsdl",
        track_wsdl="https://pttws.ptt.gov.tr/GonderiTakipV2/services/Sorgu?wsdl",
    )


@pytest.fixture
def yurtici_config():
    return YurtIciConfig(
        enabled=True,
        username="yk-user",
        password="yk-pass",
        customer_id="909091",
        order_wsdl="https://ws.yurticikargo.com/KOPSWebServices/NgiShipmentInterfaceServices?wsdl",
        track_wsdl="https://ws.yurticikargo.com/KOPSWebServices/WsReportWithReferenceServices?wsdl",
    )


@pytest.fixture
def navlungo_config():
    return NavlungoConfig(
        enabled=True,
        api_url="https://api.navlungo.test/",
        api_key="key-1",
        api_secret="secret-1",
        carrier_id="7",
    )


@pytest.fixture
def sandbox_config():
    return SandboxConfig(enabled=True)
