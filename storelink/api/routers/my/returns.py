"""
Customer merchandise return endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from storelink.api.dependencies import get_current_customer, get_store
from storelink.api.schemas import MerchandiseReturnDto
from storelink.models import Customer
from storelink.storage.base import BaseStore

router = APIRouter()


@router.get("", response_model=List[MerchandiseReturnDto])
async def list_my_returns(
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    page = await store.search_merchandise_returns(customer_id=customer.id)
    return [MerchandiseReturnDto.from_model(r) for r in page.items]


@router.get("/{key}", response_model=MerchandiseReturnDto)
async def get_my_return(
    key: str,
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    merchandise_return = await store.get_merchandise_return(key)
    if merchandise_return is None or merchandise_return.customer_id != customer.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Merchandise return not found")
    return MerchandiseReturnDto.from_model(merchandise_return)
