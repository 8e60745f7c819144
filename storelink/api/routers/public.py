"""
Integration endpoints (n8n and other automation tools)
Protected by the X-API-Key header or an admin token
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storelink.api.dependencies import get_app_settings, get_store, require_api_key_or_admin
from storelink.api.schemas import ProductDto, PublicOrderDto
from storelink.api.security import mask_secret
from storelink.config import Settings
from storelink.models import ProductSearchCriteria, ProductSorting
from storelink.storage.base import BaseStore

router = APIRouter(dependencies=[Depends(require_api_key_or_admin)])

NULL_PLACEHOLDER = "[NULL]"

PUBLIC_SORTING = {
    1: ProductSorting.NAME_ASC,
    2: ProductSorting.PRICE_ASC,
    3: ProductSorting.CREATED_ON,
}


@router.get("/products")
async def list_products(
    page_size: int = Query(100, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    """Raw product list, unpublished products included"""
    page = await store.search_products(ProductSearchCriteria(show_hidden=True, page_size=page_size))

    items = []
    for product in page.items:
        dto = ProductDto.from_model(product)
        dto.name = product.name if product.name is not None else NULL_PLACEHOLDER
        dto.short_description = product.short_description if product.short_description is not None else NULL_PLACEHOLDER
        dto.sku = product.sku if product.sku is not None else NULL_PLACEHOLDER
        items.append(dto)

    return {"items": items, "totalCount": page.total_count}


@router.get("/products/search")
async def search_products(
    keywords: str = Query(""),
    search_descriptions: bool = Query(False, alias="searchDescriptions"),
    search_sku: bool = Query(True, alias="searchSku"),
    price_min: Optional[float] = Query(None, alias="priceMin"),
    price_max: Optional[float] = Query(None, alias="priceMax"),
    published_only: bool = Query(True, alias="publishedOnly"),
    order_by: int = Query(0, alias="orderBy", description="1 name, 2 price, 3 newest, otherwise display order"),
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(50, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    page = await store.search_products(
        ProductSearchCriteria(
            keywords=keywords or None,
            search_descriptions=search_descriptions,
            search_sku=search_sku,
            sku_contains=True,
            price_min=price_min,
            price_max=price_max,
            show_hidden=not published_only,
            order_by=PUBLIC_SORTING.get(order_by, ProductSorting.POSITION),
            page_index=page_index,
            page_size=page_size,
        )
    )

    return {
        "items": [ProductDto.from_model(p) for p in page.items],
        "pageIndex": page_index,
        "pageSize": page_size,
        "totalCount": page.total_count,
    }


@router.get("/orders")
async def list_orders(
    page_size: int = Query(100, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    """Newest orders first"""
    page = await store.search_orders()
    orders = sorted(page.items, key=lambda o: o.created_on_utc, reverse=True)
    return {
        "items": [PublicOrderDto.from_model(o) for o in orders[:page_size]],
        "totalCount": page.total_count,
    }


@router.get("/check-api-config")
async def check_api_config(settings: Settings = Depends(get_app_settings)):
    """Backend token configuration with the secret key masked"""
    config = settings.backend_api
    return {
        "backendApiEnabled": config.enabled,
        "secretKey": mask_secret(config.secret_key),
        "validMinutes": config.expiry_in_minutes,
        "configExists": True,
    }
