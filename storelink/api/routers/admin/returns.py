"""
Admin merchandise return endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from storelink.api.dependencies import get_store, require_permission
from storelink.api.schemas import MerchandiseReturnDto, UpdateMerchandiseReturnRequest
from storelink.models import MerchandiseReturn, Permission
from storelink.storage.base import BaseStore

router = APIRouter(dependencies=[Depends(require_permission(Permission.MANAGE_ORDERS))])


async def _load_return(key: str, store: BaseStore) -> MerchandiseReturn:
    merchandise_return = await store.get_merchandise_return(key)
    if merchandise_return is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Merchandise return not found")
    return merchandise_return


@router.get("", response_model=List[MerchandiseReturnDto])
async def list_returns(store: BaseStore = Depends(get_store)):
    page = await store.search_merchandise_returns()
    return [MerchandiseReturnDto.from_model(r) for r in page.items]


@router.get("/{key}", response_model=MerchandiseReturnDto)
async def get_return(key: str, store: BaseStore = Depends(get_store)):
    return MerchandiseReturnDto.from_model(await _load_return(key, store))


@router.patch("/{key}")
async def update_return(
    key: str,
    request: UpdateMerchandiseReturnRequest,
    store: BaseStore = Depends(get_store),
):
    """Change the status and/or the staff notes"""
    merchandise_return = await _load_return(key, store)

    if request.merchandise_return_status is not None:
        merchandise_return.status = request.merchandise_return_status
    if request.staff_notes:
        merchandise_return.staff_notes = request.staff_notes

    await store.update_merchandise_return(merchandise_return)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_return(key: str, store: BaseStore = Depends(get_store)):
    merchandise_return = await _load_return(key, store)
    await store.delete_merchandise_return(merchandise_return)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
