"""
Admin customer endpoints
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storelink.api.dependencies import Pagination, get_store, require_permission
from storelink.api.schemas import CustomerDto
from storelink.models import Permission
from storelink.storage.base import BaseStore

router = APIRouter(dependencies=[Depends(require_permission(Permission.MANAGE_CUSTOMERS))])


@router.get("", response_model=Dict[str, Any])
async def list_customers(
    email: Optional[str] = Query(None),
    username: Optional[str] = Query(None),
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(50, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    pagination = Pagination(page_index=page_index, page_size=page_size)
    page = await store.list_customers(
        email=email, username=username, page_index=pagination.page_index, page_size=pagination.page_size
    )
    return pagination.paginate(page, [CustomerDto.from_model(c) for c in page.items])


@router.get("/search", response_model=Dict[str, Any])
async def search_customers(
    email: Optional[str] = Query(None),
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(50, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    """Customer lookup by email, trimmed"""
    pagination = Pagination(page_index=page_index, page_size=page_size)
    page = await store.list_customers(email=email, page_index=pagination.page_index, page_size=pagination.page_size)
    items = [CustomerDto.summary(c).model_dump(by_alias=True, exclude_none=True) for c in page.items]
    return pagination.paginate(page, items)


@router.get("/{customer_id}", response_model=CustomerDto)
async def get_customer(customer_id: str, store: BaseStore = Depends(get_store)):
    customer = await store.get_customer(customer_id)
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return CustomerDto.from_model(customer)
