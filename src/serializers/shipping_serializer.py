from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

MIN_PARCEL_DESI = 1
MIN_PARCEL_WEIGHT_KG = 1

PREPARING_MESSAGE = "preparing"
PREPARING_LABEL = "Sipariş içeriği hazırlanıyor."


class PaymentType(str, Enum):
    SENDER_PAYS = "sender_pays"
    PLATFORM_PAYS = "platform_pays"
    RECEIVER_PAYS = "receiver_pays"


class ShipmentStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    RETURNED = "returned"
    FAILED = "failed"
    UNKNOWN = "unknown"


class Address(BaseModel):
    name: str = ""
    address: str = ""
    city: str = ""
    district: str = ""
    phone: str = ""
    email: str = ""
    city_id: Optional[str] = None
    address_id: Optional[str] = None
    tax_number: str = ""
    tax_office: str = ""


class SenderInfo(Address):
    """Seller (pharmacy) profile used as the shipment origin."""


class OrderLine(BaseModel):
    name: str = "Ürün"
    weight: float = Field(default=1000, ge=0)  # grams
    desi: float = Field(default=1, ge=0)
    quantity: int = Field(default=1, ge=1)


class Order(BaseModel):
    """Read-only snapshot of an order handed over by the order domain."""

    order_number: str
    invoice_number: Optional[str] = None
    tracking_number: Optional[str] = None
    barcode: Optional[str] = None
    shipping_address: Optional[Address] = None
    items: List[OrderLine] = []
    payment_type: PaymentType = PaymentType.SENDER_PAYS
    parcel_type: str = "Koli"
    description: str = ""
    cancellation_reason: str = ""
    is_return: bool = False

    @model_validator(mode="after")
    def default_invoice_number(self):
        if not self.invoice_number:
            self.invoice_number = self.order_number
        return self

    @property
    def reference(self) -> str:
        """Identifier the carrier knows this shipment by."""
        return self.tracking_number or self.barcode or self.invoice_number


class Parcel(BaseModel):
    weight_kg: float = Field(default=MIN_PARCEL_WEIGHT_KG, ge=MIN_PARCEL_WEIGHT_KG)
    desi: float = Field(default=MIN_PARCEL_DESI, ge=MIN_PARCEL_DESI)
    pieces: int = Field(default=1, ge=1)


class ShipmentRequest(BaseModel):
    invoice_number: str
    order_code: str
    barcode: str
    sender: SenderInfo
    receiver: Address
    items: List[OrderLine]
    parcel: Parcel
    payment_type: PaymentType = PaymentType.SENDER_PAYS
    parcel_type: str = "Koli"
    description: str = ""
    cancellation_reason: str = ""
    is_return: bool = False


class ShipmentResult(BaseModel):
    success: bool
    tracking_number: Optional[str] = None
    label_url: Optional[str] = None
    message: str = ""
    error: Optional[str] = None
    response_code: int = 200

    @model_validator(mode="after")
    def check_outcome(self):
        if self.success:
            if not self.tracking_number:
                raise ValueError("a successful shipment result needs a tracking number")
            if self.error:
                raise ValueError("a successful shipment result cannot carry an error")
        elif not self.error:
            raise ValueError("a failed shipment result needs an error")
        return self

    @classmethod
    def ok(
        cls,
        tracking_number: str,
        message: str = "",
        label_url: Optional[str] = None,
        code: int = 200,
    ) -> "ShipmentResult":
        return cls(
            success=True,
            tracking_number=tracking_number,
            label_url=label_url or None,
            message=message,
            response_code=code,
        )

    @classmethod
    def failure(
        cls, error: str, code: int = 400, message: Optional[str] = None
    ) -> "ShipmentResult":
        return cls(
            success=False,
            error=error,
            message=error if message is None else message,
            response_code=code,
        )


class TrackingEvent(BaseModel):
    status: ShipmentStatus = ShipmentStatus.UNKNOWN
    description: str = ""
    location: Optional[str] = None
    timestamp: Optional[str] = None


class TrackingResult(BaseModel):
    success: bool
    status: ShipmentStatus = ShipmentStatus.UNKNOWN
    status_label: str = ""
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    current_location: Optional[str] = None
    last_update: Optional[str] = None
    history: List[TrackingEvent] = []
    desi: Optional[float] = None
    price: Optional[float] = None
    message: str = ""
    error: Optional[str] = None
    response_code: int = 200

    @classmethod
    def from_status(
        cls,
        status: ShipmentStatus,
        status_label: str = "",
        message: str = "Kargo takibi başarılı.",
        **fields,
    ) -> "TrackingResult":
        return cls(
            success=True,
            status=status,
            status_label=status_label,
            message=message,
            **fields,
        )

    @classmethod
    def preparing(cls, tracking_number: Optional[str] = None) -> "TrackingResult":
        """No carrier record yet: the normal state before dispatch."""
        return cls(
            success=True,
            status=ShipmentStatus.PENDING,
            status_label=PREPARING_LABEL,
            tracking_number=tracking_number,
            message=PREPARING_MESSAGE,
        )

    @classmethod
    def failure(cls, error: str, code: int = 503) -> "TrackingResult":
        return cls(success=False, error=error, message=error, response_code=code)


class LabelResult(BaseModel):
    tracking_number: str
    label: Optional[str] = None  # base64 encoded body
    label_url: Optional[str] = None
    content_type: Optional[str] = None


class CreateShipmentPayload(BaseModel):
    order: Order
    sender: SenderInfo


class OrderPayload(BaseModel):
    order: Order


class ShippingCostRequest(BaseModel):
    subtotal: float = Field(ge=0)


class BoxDimensions(BaseModel):
    width: float = Field(gt=0)  # cm
    height: float = Field(gt=0)
    length: float = Field(gt=0)


class DesiRequest(BaseModel):
    items: List[OrderLine]
    box: Optional[BoxDimensions] = None
