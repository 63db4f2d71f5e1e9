"""
Unit tests for the SOAP envelope builder and transport
"""
from unittest.mock import patch
from xml.etree import ElementTree as ET

import pytest
import requests

from conftest import load_fixture, mock_response
from serializers import MngCancelRequest
from utils import soap
from utils.exceptions import CarrierTransportError, SoapFault

NS = "http://tempuri.org/"


def _operation(payload: bytes, name: str, namespace: str = NS) -> ET.Element:
    root = ET.fromstring(payload)
    return root.find(f"{{{soap.SOAP_ENV}}}Body/{{{namespace}}}{name}")


class TestBuildEnvelope:
    def test_scalars_lists_and_none(self):
        payload = soap.build_envelope(
            "SaveOrder",
            NS,
            {"code": 12, "skip": None, "line": ["a", "b"], "flag": True, "desi": 2.0},
        )
        op = _operation(payload, "SaveOrder")

        assert op.find(f"{{{NS}}}code").text == "12"
        assert op.find(f"{{{NS}}}skip") is None
        assert [e.text for e in op.findall(f"{{{NS}}}line")] == ["a", "b"]
        assert op.find(f"{{{NS}}}flag").text == "true"
        assert op.find(f"{{{NS}}}desi").text == "2"

    def test_dataclass_params(self):
        payload = soap.build_envelope(
            "SiparisIptali_C2C",
            NS,
            MngCancelRequest(pKullaniciAdi="u", pSifre="p", pSiparisNo="INV-1"),
        )
        op = _operation(payload, "SiparisIptali_C2C")

        assert op.find(f"{{{NS}}}pSiparisNo").text == "INV-1"

    def test_unqualified_children(self):
        payload = soap.build_envelope(
            "kabulEkle2", "http://kabul.ptt.gov.tr/", {"input": {"kullanici": "ptt"}}, qualified=False
        )
        op = _operation(payload, "kabulEkle2", "http://kabul.ptt.gov.tr/")

        assert op.find("input/kullanici").text == "ptt"

    def test_nested_text_is_escaped(self):
        payload = soap.build_envelope("GetQueryXML", NS, {"loginInfo": "<LoginInfo/>"})

        assert b"&lt;LoginInfo/&gt;" in payload


class TestCall:
    def test_returns_body(self):
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(200, load_fixture("mng_order_success.xml"))
            body = soap.call(
                "https://mng.example/service.asmx",
                "SiparisKayit_C2C",
                NS,
                {"pSiparisNo": "INV-1"},
                soap_action="http://tempuri.org/SiparisKayit_C2C",
                timeout=7,
                verify=False,
            )

        assert soap.find_text(body, "SiparisKayit_C2CResult") == "1"
        kwargs = post.call_args.kwargs
        assert kwargs["url"] == "https://mng.example/service.asmx"
        assert kwargs["headers"]["SOAPAction"] == '"http://tempuri.org/SiparisKayit_C2C"'
        assert kwargs["headers"]["Content-Type"].startswith("text/xml")
        assert kwargs["timeout"] == 7
        assert kwargs["verify"] is False

    def test_timeout(self):
        with patch("utils.soap.requests.post", side_effect=requests.Timeout("slow")):
            with pytest.raises(CarrierTransportError, match="timed out"):
                soap.call("https://x", "SaveOrder", NS, {}, timeout=3)

    def test_connection_error(self):
        with patch("utils.soap.requests.post", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(CarrierTransportError, match="refused"):
                soap.call("https://x", "SaveOrder", NS, {})

    def test_fault(self):
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(500, load_fixture("soap_fault.xml"))
            with pytest.raises(SoapFault) as exc_info:
                soap.call("https://x", "SaveOrder", NS, {})

        assert exc_info.value.fault_code == "soap:Server"
        assert "Kullanici adi" in exc_info.value.fault_string

    def test_fault_is_a_transport_error(self):
        assert issubclass(SoapFault, CarrierTransportError)

    def test_malformed_body(self):
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(502, b"Bad Gateway")
            with pytest.raises(CarrierTransportError, match="malformed"):
                soap.call("https://x", "SaveOrder", NS, {})

    def test_missing_body(self):
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(200, b"<html><p>maintenance</p></html>")
            with pytest.raises(CarrierTransportError, match="no SOAP body"):
                soap.call("https://x", "SaveOrder", NS, {})

    def test_http_error_without_fault(self):
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(500, load_fixture("mng_order_success.xml"))
            with pytest.raises(CarrierTransportError, match="HTTP 500"):
                soap.call("https://x", "SaveOrder", NS, {})


class TestParsingHelpers:
    def test_find_text_ignores_namespaces(self):
        element = ET.fromstring('<a xmlns:x="urn:x"><x:b> val </x:b></a>')

        assert soap.find_text(element, "b") == "val"
        assert soap.find_text(element, "c", "none") == "none"
        assert soap.find_text(None, "b") == ""

    def test_child_text_only_reads_direct_children(self):
        element = ET.fromstring("<r><inner><flag>0</flag></inner><flag>1</flag></r>")

        assert soap.child_text(element, "flag") == "1"
        assert soap.child_text(element.find("inner"), "missing") == ""

    def test_parse_embedded_xml(self):
        assert soap.parse_embedded_xml("<Collection><X>1</X></Collection>").tag == "Collection"
        assert soap.parse_embedded_xml("   ") is None
        assert soap.parse_embedded_xml(None) is None
        assert soap.parse_embedded_xml("<broken") is None

    def test_service_endpoint(self):
        assert soap.service_endpoint("https://x/Service.svc?wsdl") == "https://x/Service.svc"
        assert soap.service_endpoint("https://x/s.asmx?WSDL") == "https://x/s.asmx"
        assert soap.service_endpoint("https://x/s.asmx") == "https://x/s.asmx"
        assert soap.service_endpoint("https://x/s?op=1") == "https://x/s?op=1"
