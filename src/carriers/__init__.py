from typing import Dict, Type

from carriers.base import ShippingProvider
from carriers.aras import ArasProvider
from carriers.mng import MngProvider
from carriers.navlungo import NavlungoProvider
from carriers.ptt import PttProvider
from carriers.sandbox import SandboxProvider
from carriers.yurtici import YurtIciProvider

PROVIDERS: Dict[str, Type[ShippingProvider]] = {
    ArasProvider.name: ArasProvider,
    MngProvider.name: MngProvider,
    PttProvider.name: PttProvider,
    YurtIciProvider.name: YurtIciProvider,
    NavlungoProvider.name: NavlungoProvider,
    SandboxProvider.name: SandboxProvider,
}
