from fastapi import APIRouter

from controllers import (
    calculate_cost,
    calculate_desi,
    cancel_shipment,
    create_shipment,
    get_label,
    list_providers,
    track_shipment,
)
from serializers import (
    CreateShipmentPayload,
    DesiRequest,
    OrderPayload,
    ShippingCostRequest,
)

router = APIRouter(
    prefix="/shipping",
    tags=["shipping"],
    responses={404: {"description": "Not found"}},
)


@router.get("/providers", tags=["shipping"])
async def handle_list_providers():
    return await list_providers()


@router.post("/calculate", tags=["shipping"])
async def handle_calculate_cost(payload: ShippingCostRequest):
    return await calculate_cost(payload)


@router.post("/desi", tags=["shipping"])
async def handle_calculate_desi(payload: DesiRequest):
    return await calculate_desi(payload)


@router.post("/{carrier}/create", tags=["shipping"])
async def handle_create_shipment(carrier: str, payload: CreateShipmentPayload):
    return await create_shipment(carrier, payload)


@router.post("/{carrier}/cancel", tags=["shipping"])
async def handle_cancel_shipment(carrier: str, payload: OrderPayload):
    return await cancel_shipment(carrier, payload)


@router.post("/{carrier}/track", tags=["shipping"])
async def handle_track_shipment(carrier: str, payload: OrderPayload):
    return await track_shipment(carrier, payload)


@router.post("/{carrier}/label", tags=["shipping"])
async def handle_get_label(carrier: str, payload: OrderPayload):
    return await get_label(carrier, payload)


shipping_router = router
