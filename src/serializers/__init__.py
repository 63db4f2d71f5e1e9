from serializers.shipping_serializer import (
    MIN_PARCEL_DESI,
    MIN_PARCEL_WEIGHT_KG,
    PREPARING_LABEL,
    PREPARING_MESSAGE,
    Address,
    BoxDimensions,
    CreateShipmentPayload,
    DesiRequest,
    LabelResult,
    Order,
    OrderLine,
    OrderPayload,
    Parcel,
    PaymentType,
    SenderInfo,
    ShipmentRequest,
    ShipmentResult,
    ShipmentStatus,
    ShippingCostRequest,
    TrackingEvent,
    TrackingResult,
)
from serializers.carrier_serializer import (
    ArasAddressInfo,
    ArasCustomerInfo,
    ArasDeleteOrderRequest,
    ArasOrderModel,
    ArasQueryRequest,
    ArasSaveOrderRequest,
    MngCancelRequest,
    MngOrderRequest,
    MngParcel,
    MngReceiver,
    MngSender,
    MngTrackRequest,
    NavlungoCancelRequest,
    NavlungoLoginRequest,
    NavlungoParcel,
    NavlungoPostRequest,
    NavlungoReceiver,
    NavlungoSender,
    PttAcceptInput,
    PttDeleteInput,
    PttQueryInput,
    PttSenderInfo,
    PttShipmentLine,
    YurtIciCancelRequest,
    YurtIciCargoData,
    YurtIciCodData,
    YurtIciConsigneeAddress,
    YurtIciCreateRequest,
    YurtIciCustParams,
    YurtIciPayerData,
    YurtIciSenderAddress,
    YurtIciShipmentData,
    YurtIciTrackRequest,
)
