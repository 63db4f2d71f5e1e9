from http import HTTPStatus

from fastapi.responses import ORJSONResponse
from starlette.concurrency import run_in_threadpool

from config.app_vars import SHIPPING_FLAT_RATE, SHIPPING_FREE_THRESHOLD
from serializers import (
    CreateShipmentPayload,
    DesiRequest,
    OrderPayload,
    ShippingCostRequest,
)
from utils.helpers import (
    aggregate_parcel,
    calculate_shipping_cost,
    desi_from_dimensions,
    remaining_for_free_shipping,
)
from utils.shipping import shipping_gateway


async def list_providers():
    active = shipping_gateway.get_active_provider()
    return ORJSONResponse(
        content={
            "providers": shipping_gateway.available_providers(),
            "active": active.get_name() if active else None,
        },
        status_code=HTTPStatus.OK,
    )


async def calculate_cost(payload: ShippingCostRequest):
    cost = calculate_shipping_cost(payload.subtotal)
    return ORJSONResponse(
        content={
            "subtotal": payload.subtotal,
            "shipping_cost": cost,
            "is_free": cost == 0,
            "flat_rate": SHIPPING_FLAT_RATE,
            "free_threshold": SHIPPING_FREE_THRESHOLD,
            "remaining_for_free_shipping": remaining_for_free_shipping(payload.subtotal),
        },
        status_code=HTTPStatus.OK,
    )


async def calculate_desi(payload: DesiRequest):
    content = aggregate_parcel(payload.items).model_dump()
    if payload.box:
        content["volumetric_desi"] = desi_from_dimensions(
            payload.box.width, payload.box.height, payload.box.length
        )
    return ORJSONResponse(content=content, status_code=HTTPStatus.OK)


async def create_shipment(carrier: str, payload: CreateShipmentPayload):
    # drivers block on the carrier round trip
    result = await run_in_threadpool(
        shipping_gateway.create_shipment, carrier, payload.order, payload.sender
    )
    return ORJSONResponse(
        content=result.model_dump(mode="json"), status_code=result.response_code
    )


async def cancel_shipment(carrier: str, payload: OrderPayload):
    result = await run_in_threadpool(
        shipping_gateway.cancel_shipment, carrier, payload.order
    )
    return ORJSONResponse(
        content=result.model_dump(mode="json"), status_code=result.response_code
    )


async def track_shipment(carrier: str, payload: OrderPayload):
    result = await run_in_threadpool(
        shipping_gateway.track_shipment, carrier, payload.order
    )
    return ORJSONResponse(
        content=result.model_dump(mode="json"), status_code=result.response_code
    )


async def get_label(carrier: str, payload: OrderPayload):
    label = await run_in_threadpool(shipping_gateway.get_label, carrier, payload.order)
    if label is None:
        return ORJSONResponse(
            content={"message": "Etiket henüz hazır değil."},
            status_code=HTTPStatus.NOT_FOUND,
        )
    return ORJSONResponse(content=label.model_dump(mode="json"), status_code=HTTPStatus.OK)
