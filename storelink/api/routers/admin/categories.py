"""
Admin category endpoints
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storelink.api.dependencies import Pagination, get_store, require_permission
from storelink.api.schemas import CategoryDto
from storelink.models import Permission
from storelink.storage.base import BaseStore

router = APIRouter(dependencies=[Depends(require_permission(Permission.MANAGE_CATEGORIES))])


@router.get("", response_model=Dict[str, Any])
async def list_categories(
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(50, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    pagination = Pagination(page_index=page_index, page_size=page_size)
    page = await store.list_categories(pagination.page_index, pagination.page_size, show_hidden=True)
    return pagination.paginate(page, [CategoryDto.from_model(c) for c in page.items])


@router.get("/tree", response_model=List[CategoryDto], response_model_exclude_none=True)
async def category_tree(store: BaseStore = Depends(get_store)):
    """All categories of every level, trimmed"""
    categories = await store.get_all_categories(show_hidden=True)
    return [CategoryDto.tree_node(c) for c in categories]


@router.get("/{category_id}", response_model=CategoryDto)
async def get_category(category_id: str, store: BaseStore = Depends(get_store)):
    category = await store.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return CategoryDto.from_model(category)
