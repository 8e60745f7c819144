"""
Customer order endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from storelink.api.dependencies import get_current_customer, get_store
from storelink.api.schemas import OrderDto
from storelink.models import Customer
from storelink.storage.base import BaseStore

router = APIRouter()


@router.get("", response_model=List[OrderDto])
async def list_my_orders(
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    """Orders of the authenticated customer"""
    page = await store.search_orders(customer_id=customer.id)
    return [OrderDto.from_model(o) for o in page.items]


@router.get("/{key}", response_model=OrderDto)
async def get_my_order(
    key: str,
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    order = await store.get_order(key)
    if order is None or order.customer_id != customer.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return OrderDto.from_model(order)
