"""
Per-carrier configuration objects.

Drivers receive one of these in their constructor. `load_carrier_config`
builds them from the environment for the single-tenant case; callers with
per-seller credentials construct them directly.
"""
from typing import Callable, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from config import app_vars


class CarrierConfig(BaseModel):
    enabled: bool = False
    timeout: float = Field(default=app_vars.CARRIER_TIMEOUT, gt=0)
    verify_tls: bool = True
    tracking_url: str = ""

    required_fields: ClassVar[Tuple[str, ...]] = ()

    def missing_fields(self) -> List[str]:
        return [name for name in self.required_fields if not getattr(self, name)]


class ArasConfig(CarrierConfig):
    customer_code: str = ""
    username: str = ""
    password: str = ""
    configuration_id: str = ""
    order_wsdl: str = ""
    track_wsdl: str = ""
    require_sender_address_id: bool = False

    required_fields: ClassVar[Tuple[str, ...]] = (
        "customer_code",
        "username",
        "password",
        "order_wsdl",
    )


class MngConfig(CarrierConfig):
    username: str = ""
    password: str = ""
    wsdl: str = ""

    required_fields: ClassVar[Tuple[str, ...]] = ("username", "password", "wsdl")


class PttConfig(CarrierConfig):
    username: str = ""
    password: str = ""
    customer_id: str = ""
    order_wsdl: str = ""
    track_wsdl: str = ""

    required_fields: ClassVar[Tuple[str, ...]] = (
        "order_wsdl",
        "username",
        "customer_id",
        "password",
    )


class YurtIciConfig(CarrierConfig):
    username: str = ""
    password: str = ""
    customer_id: str = ""
    order_wsdl: str = ""
    track_wsdl: str = ""

    required_fields: ClassVar[Tuple[str, ...]] = (
        "order_wsdl",
        "username",
        "password",
        "customer_id",
    )


class NavlungoConfig(CarrierConfig):
    api_url: str = "https://api.navlungo.com"
    api_key: str = ""
    api_secret: str = ""
    carrier_id: str = ""
    # refresh this many seconds before the server-declared expiry
    token_refresh_margin: int = Field(default=300, ge=60, le=300)

    required_fields: ClassVar[Tuple[str, ...]] = ("api_url", "api_key", "api_secret")


class SandboxConfig(CarrierConfig):
    pass


def load_carrier_config(name: str) -> Optional[CarrierConfig]:
    """Build the environment-backed config for a carrier, or None if unknown."""
    factory = _ENV_CONFIGS.get(name)
    return factory() if factory else None


def _aras_from_env() -> ArasConfig:
    return ArasConfig(
        enabled=app_vars.ARAS_ENABLED,
        customer_code=app_vars.ARAS_CUSTOMER_CODE,
        username=app_vars.ARAS_USERNAME,
        password=app_vars.ARAS_PASSWORD,
        configuration_id=app_vars.ARAS_CONFIGURATION_ID,
        order_wsdl=app_vars.ARAS_ORDER_WSDL,
        track_wsdl=app_vars.ARAS_TRACK_WSDL,
        tracking_url=app_vars.ARAS_TRACKING_URL,
        require_sender_address_id=app_vars.ARAS_REQUIRE_SENDER_ADDRESS_ID,
    )


def _mng_from_env() -> MngConfig:
    return MngConfig(
        enabled=app_vars.MNG_ENABLED,
        username=app_vars.MNG_USERNAME,
        password=app_vars.MNG_PASSWORD,
        wsdl=app_vars.MNG_WSDL,
    )


def _ptt_from_env() -> PttConfig:
    return PttConfig(
        enabled=app_vars.PTT_ENABLED,
        username=app_vars.PTT_USERNAME,
        password=app_vars.PTT_PASSWORD,
        customer_id=app_vars.PTT_CUSTOMER_ID,
        order_wsdl=app_vars.PTT_ORDER_WSDL,
        track_wsdl=app_vars.PTT_TRACK_WSDL,
        tracking_url=app_vars.PTT_TRACKING_URL,
        verify_tls=app_vars.PTT_VERIFY_TLS,
    )


def _yurtici_from_env() -> YurtIciConfig:
    return YurtIciConfig(
        enabled=app_vars.YURTICI_ENABLED,
        username=app_vars.YURTICI_USERNAME,
        password=app_vars.YURTICI_PASSWORD,
        customer_id=app_vars.YURTICI_CUSTOMER_ID,
        order_wsdl=app_vars.YURTICI_ORDER_WSDL,
        track_wsdl=app_vars.YURTICI_TRACK_WSDL,
        tracking_url=app_vars.YURTICI_TRACKING_URL,
    )


def _navlungo_from_env() -> NavlungoConfig:
    return NavlungoConfig(
        enabled=app_vars.NAVLUNGO_ENABLED,
        api_url=app_vars.NAVLUNGO_API_URL,
        api_key=app_vars.NAVLUNGO_API_KEY,
        api_secret=app_vars.NAVLUNGO_API_SECRET,
        carrier_id=app_vars.NAVLUNGO_CARRIER_ID,
        token_refresh_margin=app_vars.NAVLUNGO_TOKEN_REFRESH_MARGIN,
    )


def _sandbox_from_env() -> SandboxConfig:
    return SandboxConfig(enabled=app_vars.SHIPPING_SANDBOX_ENABLED)


_ENV_CONFIGS: Dict[str, Callable[[], CarrierConfig]] = {
    "aras": _aras_from_env,
    "mng": _mng_from_env,
    "ptt": _ptt_from_env,
    "yurtici": _yurtici_from_env,
    "navlungo": _navlungo_from_env,
    "test": _sandbox_from_env,
}
