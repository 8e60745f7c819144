"""
Admin shipment endpoints
"""

from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from storelink.api.dependencies import get_store, require_permission
from storelink.api.schemas import ShipmentDto
from storelink.models import Permission, Shipment
from storelink.storage.base import BaseStore

router = APIRouter(dependencies=[Depends(require_permission(Permission.MANAGE_ORDERS))])


async def _load_shipment(key: str, store: BaseStore) -> Shipment:
    shipment = await store.get_shipment(key)
    if shipment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shipment not found")
    return shipment


@router.get("", response_model=List[ShipmentDto])
async def list_shipments(store: BaseStore = Depends(get_store)):
    page = await store.list_shipments()
    return [ShipmentDto.from_model(s) for s in page.items]


@router.get("/{key}", response_model=ShipmentDto)
async def get_shipment(key: str, store: BaseStore = Depends(get_store)):
    return ShipmentDto.from_model(await _load_shipment(key, store))


@router.post("/{key}/SetAsShipped")
async def set_as_shipped(key: str, store: BaseStore = Depends(get_store)):
    shipment = await _load_shipment(key, store)
    await store.ship(shipment, notify_customer=True)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{key}/SetAsDelivered")
async def set_as_delivered(key: str, store: BaseStore = Depends(get_store)):
    shipment = await _load_shipment(key, store)
    await store.deliver(shipment, notify_customer=True)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{key}/SetTrackingNumber")
async def set_tracking_number(
    key: str,
    tracking_number: str = Body(..., description="Tracking number as a JSON string"),
    store: BaseStore = Depends(get_store),
):
    shipment = await _load_shipment(key, store)
    shipment.tracking_number = tracking_number
    await store.update_shipment(shipment)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shipment(key: str, store: BaseStore = Depends(get_store)):
    shipment = await _load_shipment(key, store)
    await store.delete_shipment(shipment)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
