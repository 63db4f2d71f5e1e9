"""
Unit tests for the PTT Kargo driver
"""
import logging
from datetime import datetime
from unittest.mock import patch

from carriers.ptt import (
    PttProvider,
    build_accept,
    build_delete,
    build_query,
    interpret_accept,
    interpret_delete,
    interpret_query,
)
from conftest import load_fixture, mock_response, posted_operation, soap_body
from serializers import ShipmentStatus
from utils.helpers import build_shipment_request

NOW = datetime(2024, 3, 1, 9, 5, 7)


class TestRequestBuilding:
    def test_accept_input(self, order, sender, ptt_config):
        order = order.model_copy(update={"barcode": "KP01234567890"})
        request = build_accept(build_shipment_request(order, sender), ptt_config, NOW)

        assert request.dosyaAdi == "LB_20240301090507"
        assert request.musteriId == 904123
        assert request.gonderiTip == "NORMAL"
        line = request.dongu[0]
        assert line.barkodNo == "KP01234567890"
        assert line.musteriReferansNo == "ORD-1001"
        assert line.aliciIlceAdi == "Çankaya"
        assert line.gondericibilgi.gonderici_il_ad == "İstanbul"
        assert line.desi == 4

    def test_delete_input(self, order, ptt_config):
        request = build_delete(order, ptt_config, NOW)

        assert request.barcode == "INV-1001"
        assert request.dosyaAdi == "LB_CANCEL_20240301090507"
        assert request.musteriId == 904123

    def test_query_uses_customer_id_as_user(self, order, ptt_config):
        request = build_query(order.model_copy(update={"barcode": "KP9"}), ptt_config)

        assert request.barkod == "KP9"
        assert request.kullanici == "904123"
        assert request.sifre == "ptt-pass"


class TestInterpretReplies:
    def test_accept_success_returns_barcode(self):
        result = interpret_accept(soap_body("ptt_accept_success.xml"), "KP01234567890")

        assert result.success is True
        assert result.tracking_number == "KP01234567890"
        assert result.message == "BASARILI"

    def test_accept_rejected(self):
        result = interpret_accept(soap_body("ptt_accept_rejected.xml"), "KP01234567890")

        assert result.response_code == 400
        assert result.error == "BARKOD DAHA ONCE KULLANILMIS"

    def test_delete_success(self):
        result = interpret_delete(soap_body("ptt_delete_success.xml"), "KP01234567890")

        assert result.success is True
        assert result.message == "BARKOD SILINDI"

    def test_delete_without_error_code_is_success(self):
        result = interpret_delete(soap_body("ptt_delete_null_code.xml"), "KP01234567890")

        assert result.success is True
        assert result.message == "ISLEM TAMAMLANDI"

    def test_delete_failed(self):
        result = interpret_delete(soap_body("ptt_delete_failed.xml"), "KP01234567890")

        assert result.success is False
        assert result.response_code == 422
        assert result.error == "SILINECEK BARKOD BULUNAMADI"

    def test_query_delivered(self):
        result = interpret_query(
            soap_body("ptt_query_delivered.xml"), "KP01234567890", "https://gonderitakip.ptt.gov.tr/Track/Verify?q="
        )

        assert result.status == ShipmentStatus.DELIVERED
        assert result.status_label == "TESLIM EDILDI"
        assert result.tracking_number == "KP01234567890"
        assert result.tracking_url == "https://gonderitakip.ptt.gov.tr/Track/Verify?q=KP01234567890"
        assert result.desi == 2.0
        assert result.price == 48.5

    def test_query_in_transit(self):
        result = interpret_query(soap_body("ptt_query_in_transit.xml"), "KP01234567890")

        assert result.status == ShipmentStatus.IN_TRANSIT
        assert result.status_label == "TRANSFER MERKEZINDE"
        assert result.tracking_url is None

    def test_query_without_record_is_preparing(self):
        result = interpret_query(soap_body("ptt_query_empty.xml"), "KP01234567890")

        assert result.success is True
        assert result.message == "preparing"
        assert result.tracking_number == "KP01234567890"


class TestPttProvider:
    def test_create_posts_unqualified_envelope(self, order, sender, ptt_config):
        order = order.model_copy(update={"barcode": "KP01234567890"})
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(200, load_fixture("ptt_accept_success.xml"))
            result = PttProvider(ptt_config).create_shipment(order, sender)

        assert result.success is True
        assert result.tracking_number == "KP01234567890"
        kwargs = post.call_args.kwargs
        assert kwargs["url"] == "https://pttws.ptt.gov.tr/PttVeriYukleme/services/Sorgu"
        assert kwargs["headers"]["SOAPAction"] == '""'
        assert b"<input>" in kwargs["data"]
        assert b"<musteriId>904123</musteriId>" in kwargs["data"]
        assert posted_operation(post).tag == "{http://kabul.ptt.gov.tr/}kabulEkle2"

    def test_cancel_wraps_delete_input(self, order, ptt_config):
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(200, load_fixture("ptt_delete_failed.xml"))
            result = PttProvider(ptt_config).cancel_shipment(order)

        assert result.response_code == 422
        assert b"<inpDelete>" in post.call_args.kwargs["data"]
        assert posted_operation(post).tag == "{http://kabul.ptt.gov.tr/}barkodVeriSil"

    def test_track_uses_tracking_service(self, order, ptt_config):
        with patch("utils.soap.requests.post") as post:
            post.return_value = mock_response(200, load_fixture("ptt_query_delivered.xml"))
            result = PttProvider(ptt_config).track_shipment(order)

        assert result.status == ShipmentStatus.DELIVERED
        assert post.call_args.kwargs["url"] == "https://pttws.ptt.gov.tr/GonderiTakipV2/services/Sorgu"
        assert posted_operation(post).tag == "{http://ws.gonderitakip.ptt.gov.tr/}gonderiSorgu2"

    def test_unverified_tls_is_logged_on_every_call(self, order, ptt_config, caplog):
        provider = PttProvider(ptt_config.model_copy(update={"verify_tls": False}))
        with patch("utils.soap.requests.post") as post, caplog.at_level(logging.WARNING):
            post.side_effect = [
                mock_response(200, load_fixture("ptt_query_empty.xml")),
                mock_response(200, load_fixture("ptt_delete_success.xml")),
            ]
            provider.track_shipment(order)
            provider.cancel_shipment(order)

        assert post.call_args.kwargs["verify"] is False
        assert "gonderiSorgu2 call runs without TLS certificate verification" in caplog.text
        assert "barkodVeriSil call runs without TLS certificate verification" in caplog.text

    def test_verified_tls_is_not_logged(self, order, ptt_config, caplog):
        with patch("utils.soap.requests.post") as post, caplog.at_level(logging.WARNING):
            post.return_value = mock_response(200, load_fixture("ptt_query_empty.xml"))
            PttProvider(ptt_config).track_shipment(order)

        assert post.call_args.kwargs["verify"] is True
        assert "TLS" not in caplog.text

    def test_missing_customer_id(self, order, ptt_config):
        provider = PttProvider(ptt_config.model_copy(update={"customer_id": ""}))
        with patch("utils.soap.requests.post") as post:
            result = provider.cancel_shipment(order)

        post.assert_not_called()
        assert result.error == "PTT Kargo: customer_id tanımlı değil."
