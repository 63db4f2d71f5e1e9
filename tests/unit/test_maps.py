"""
Unit tests for the carrier status tables
"""
import pytest

from serializers import ShipmentStatus
from utils.maps import (
    aras_status,
    mng_status,
    navlungo_status,
    provider_label,
    ptt_status,
    status_label,
    yurtici_status,
)


class TestArasStatus:
    """Aras codes only mean something together with the shipment type"""

    def test_outbound_six_is_out_for_delivery(self):
        assert aras_status(6, 1) == ShipmentStatus.OUT_FOR_DELIVERY

    def test_outbound_seven_is_in_transit(self):
        assert aras_status(7, 2) == ShipmentStatus.IN_TRANSIT

    def test_return_type_overrides_status(self):
        assert aras_status(6, 3) == ShipmentStatus.RETURNED
        assert aras_status(1, 3) == ShipmentStatus.RETURNED

    def test_outbound_other_codes_use_numeric_table(self):
        assert aras_status(3, 1) == ShipmentStatus.SHIPPED
        assert aras_status(4, 2) == ShipmentStatus.IN_TRANSIT
        assert aras_status(8, 1) == ShipmentStatus.FAILED

    def test_unknown_type_is_unknown(self):
        assert aras_status(6, 9) == ShipmentStatus.UNKNOWN

    def test_codes_arrive_as_strings(self):
        assert aras_status("6", " 1 ") == ShipmentStatus.OUT_FOR_DELIVERY

    def test_blank_codes_are_unknown(self):
        assert aras_status("", "") == ShipmentStatus.UNKNOWN


class TestOtherCarriers:
    @pytest.mark.parametrize(
        "code,expected",
        [
            (1, ShipmentStatus.PENDING),
            (3, ShipmentStatus.SHIPPED),
            (5, ShipmentStatus.IN_TRANSIT),
            (6, ShipmentStatus.OUT_FOR_DELIVERY),
            (7, ShipmentStatus.DELIVERED),
            (42, ShipmentStatus.UNKNOWN),
        ],
    )
    def test_mng_status(self, code, expected):
        assert mng_status(code) == expected

    def test_ptt_status_follows_delivery_flag(self):
        assert ptt_status(True) == ShipmentStatus.DELIVERED
        assert ptt_status(False) == ShipmentStatus.IN_TRANSIT

    def test_yurtici_known_codes(self):
        assert yurtici_status("DLV") == ShipmentStatus.DELIVERED
        assert yurtici_status("dlv") == ShipmentStatus.DELIVERED
        assert yurtici_status("NOP") == ShipmentStatus.PENDING
        assert yurtici_status("CNL") == ShipmentStatus.FAILED
        assert yurtici_status("BI") == ShipmentStatus.UNKNOWN

    def test_yurtici_missing_or_new_code_reads_as_in_transit(self):
        assert yurtici_status(None) == ShipmentStatus.IN_TRANSIT
        assert yurtici_status("") == ShipmentStatus.IN_TRANSIT
        assert yurtici_status("XYZ") == ShipmentStatus.IN_TRANSIT

    def test_navlungo_normalizes_spelling(self):
        assert navlungo_status("Out for delivery") == ShipmentStatus.OUT_FOR_DELIVERY
        assert navlungo_status("in-transit") == ShipmentStatus.IN_TRANSIT
        assert navlungo_status("DELIVERED") == ShipmentStatus.DELIVERED

    def test_navlungo_unknown_text(self):
        assert navlungo_status("") == ShipmentStatus.UNKNOWN
        assert navlungo_status("lost_in_space") == ShipmentStatus.UNKNOWN


class TestLabels:
    def test_status_label_is_turkish(self):
        assert status_label(ShipmentStatus.DELIVERED) == "Teslim edildi"
        assert status_label(ShipmentStatus.OUT_FOR_DELIVERY) == "Dağıtımda"

    def test_provider_label(self):
        assert provider_label("yurtici") == "Yurtiçi Kargo"
        assert provider_label("test") == "Test Kargo"
        assert provider_label("hepsijet") == "hepsijet"
