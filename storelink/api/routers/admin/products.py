"""
Admin product endpoints
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storelink.api.dependencies import Pagination, get_store, require_permission
from storelink.api.schemas import ProductDto
from storelink.models import Permission, ProductSearchCriteria, ProductSorting
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_permission(Permission.MANAGE_PRODUCTS))])


@router.get("", response_model=Dict[str, Any])
async def list_products(
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(50, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    """Product list, unpublished products included"""
    pagination = Pagination(page_index=page_index, page_size=page_size)
    page = await store.search_products(
        ProductSearchCriteria(page_index=pagination.page_index, page_size=pagination.page_size, show_hidden=True)
    )
    return pagination.paginate(page, [ProductDto.from_model(p) for p in page.items])


@router.get("/search", response_model=Dict[str, Any])
async def search_products(
    keywords: str = Query(""),
    search_descriptions: bool = Query(False, alias="searchDescriptions"),
    search_sku: bool = Query(True, alias="searchSku"),
    search_product_tags: bool = Query(False, alias="searchProductTags"),
    category_ids: str = Query("", alias="categoryIds", description="Comma separated category IDs"),
    brand_id: str = Query("", alias="brandId"),
    vendor_id: str = Query("", alias="vendorId"),
    price_min: Optional[float] = Query(None, alias="priceMin"),
    price_max: Optional[float] = Query(None, alias="priceMax"),
    show_on_home_page: Optional[bool] = Query(None, alias="showOnHomePage"),
    featured_products: Optional[bool] = Query(None, alias="featuredProducts"),
    marked_as_new_only: bool = Query(False, alias="markedAsNewOnly"),
    published_only: bool = Query(True, alias="publishedOnly"),
    order_by: int = Query(0, alias="orderBy", description="0 position, 1 name, 2 price, 3 created on, 4 best sellers, 5 on sale"),
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(50, alias="pageSize", ge=1),
    store: BaseStore = Depends(get_store),
):
    """Product search with filters"""
    try:
        pagination = Pagination(page_index=page_index, page_size=page_size)
        category_list = [c.strip() for c in category_ids.split(",") if c.strip()] or None

        criteria = ProductSearchCriteria(
            keywords=keywords or None,
            search_descriptions=search_descriptions,
            search_sku=search_sku,
            search_product_tags=search_product_tags,
            category_ids=category_list,
            brand_id=brand_id or None,
            vendor_id=vendor_id or None,
            price_min=price_min,
            price_max=price_max,
            show_on_home_page=show_on_home_page,
            featured_products=featured_products,
            marked_as_new_only=marked_as_new_only,
            show_hidden=not published_only,
            order_by=ProductSorting.from_code(order_by),
            page_index=pagination.page_index,
            page_size=pagination.page_size,
        )
        page = await store.search_products(criteria)

        body = pagination.paginate(page, [ProductDto.from_model(p) for p in page.items])
        body["searchCriteria"] = {
            "keywords": keywords,
            "searchDescriptions": search_descriptions,
            "searchSku": search_sku,
            "searchProductTags": search_product_tags,
            "categoryIds": category_ids,
            "brandId": brand_id,
            "vendorId": vendor_id,
            "priceMin": price_min,
            "priceMax": price_max,
            "orderBy": order_by,
        }
        return body

    except Exception as e:
        logger.error(f"Product search failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Product search failed",
        )


@router.get("/{product_id}", response_model=ProductDto)
async def get_product(product_id: str, store: BaseStore = Depends(get_store)):
    product = await store.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return ProductDto.from_model(product)
