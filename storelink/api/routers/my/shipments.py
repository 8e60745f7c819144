"""
Customer shipment endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from storelink.api.dependencies import get_current_customer, get_store
from storelink.api.schemas import ShipmentDto
from storelink.models import Customer
from storelink.storage.base import BaseStore

router = APIRouter()


@router.get("", response_model=List[ShipmentDto])
async def list_my_shipments(
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    """Shipments of every order of the customer"""
    orders = await store.search_orders(customer_id=customer.id)

    shipments = []
    for order in orders.items:
        shipments.extend(await store.get_shipments_by_order(order.id))
    return [ShipmentDto.from_model(s) for s in shipments]


@router.get("/{key}", response_model=ShipmentDto)
async def get_my_shipment(
    key: str,
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    """Shipment, owned through its order"""
    shipment = await store.get_shipment(key)
    if shipment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shipment not found")

    order = await store.get_order(shipment.order_id)
    if order is None or order.customer_id != customer.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shipment not found")

    return ShipmentDto.from_model(shipment)
