"""
Mobile catalog endpoints (anonymous)
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storelink.api.dependencies import get_store
from storelink.api.schemas import MobileCategoryDto, MobileProductDetailDto, MobileProductDto
from storelink.models import Category, Product, ProductSearchCriteria, ProductSorting
from storelink.storage.base import BaseStore

router = APIRouter()

LIST_IMAGE_SIZE = 300
DETAIL_IMAGE_SIZE = 600
CATEGORY_IMAGE_SIZE = 200


async def _image_url(store: BaseStore, product: Product) -> str:
    """First picture in display order, the default picture otherwise"""
    pictures = product.ordered_pictures()
    if pictures:
        url = await store.get_picture_url(pictures[0].picture_id, LIST_IMAGE_SIZE)
        if url:
            return url
    return await store.get_default_picture_url(LIST_IMAGE_SIZE)


async def _product_cards(store: BaseStore, products: List[Product]) -> List[MobileProductDto]:
    return [MobileProductDto.from_model(p, await _image_url(store, p)) for p in products]


def _subcategories(categories: List[Category], parent_id: str) -> List[Category]:
    """Every descendant of a category"""
    result = []
    for child in (c for c in categories if c.parent_category_id == parent_id):
        result.append(child)
        result.extend(_subcategories(categories, child.id))
    return result


def _paged_body(page, items: List[MobileProductDto], page_index: int, page_size: int) -> Dict[str, Any]:
    return {
        "items": items,
        "pageIndex": page_index,
        "pageSize": page_size,
        "totalCount": page.total_count,
        "totalPages": page.total_pages,
    }


@router.get("/featured")
async def get_featured_products(
    limit: int = Query(10, ge=1),
    store: BaseStore = Depends(get_store),
):
    """Products shown on the home page"""
    product_ids = await store.get_home_page_product_ids()
    products = await store.get_products_by_ids(product_ids[:limit])
    items = await _product_cards(store, [p for p in products if p.published])
    return {"items": items, "totalCount": len(product_ids)}


@router.get("/categories")
async def get_categories(store: BaseStore = Depends(get_store)):
    categories = await store.get_all_categories(show_hidden=False)

    items = []
    for category in categories:
        image_url = (
            await store.get_picture_url(category.picture_id, CATEGORY_IMAGE_SIZE) if category.picture_id else None
        )
        items.append(
            MobileCategoryDto(
                id=category.id,
                name=category.name,
                description=category.description,
                image_url=image_url,
                parent_category_id=category.parent_category_id,
                display_order=category.display_order,
            )
        )

    return {"items": items, "totalCount": len(categories)}


@router.get("/categories/{category_id}/products")
async def get_products_by_category(
    category_id: str,
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(20, alias="pageSize", ge=1),
    order_by: str = Query("position", alias="orderBy"),
    store: BaseStore = Depends(get_store),
):
    """Products of a category and all of its subcategories"""
    categories = await store.get_all_categories(show_hidden=False)
    category_ids = [category_id] + [c.id for c in _subcategories(categories, category_id)]

    page = await store.search_products(
        ProductSearchCriteria(
            category_ids=category_ids,
            visible_individually_only=True,
            order_by=ProductSorting.from_name(order_by),
            page_index=page_index,
            page_size=page_size,
        )
    )

    return _paged_body(page, await _product_cards(store, page.items), page_index, page_size)


@router.get("/search")
async def search_products(
    q: str = Query(""),
    page_index: int = Query(0, alias="pageIndex", ge=0),
    page_size: int = Query(20, alias="pageSize", ge=1),
    price_min: Optional[float] = Query(None, alias="priceMin"),
    price_max: Optional[float] = Query(None, alias="priceMax"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    order_by: str = Query("relevance", alias="orderBy"),
    store: BaseStore = Depends(get_store),
):
    page = await store.search_products(
        ProductSearchCriteria(
            keywords=q or None,
            search_descriptions=True,
            search_sku=True,
            price_min=price_min,
            price_max=price_max,
            category_ids=[category_id] if category_id else None,
            visible_individually_only=True,
            order_by=ProductSorting.from_name(order_by),
            page_index=page_index,
            page_size=page_size,
        )
    )

    body = _paged_body(page, await _product_cards(store, page.items), page_index, page_size)
    body["query"] = q
    return body


@router.get("/products/{product_id}", response_model=MobileProductDetailDto)
async def get_product(product_id: str, store: BaseStore = Depends(get_store)):
    """Product details with every picture"""
    product = await store.get_product(product_id)
    if product is None or not product.published:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    images = []
    for picture in product.ordered_pictures():
        url = await store.get_picture_url(picture.picture_id, DETAIL_IMAGE_SIZE)
        if url:
            images.append(url)

    main_image = images[0] if images else await store.get_default_picture_url(DETAIL_IMAGE_SIZE)
    return MobileProductDetailDto.from_product(product, main_image, images)


@router.get("/new")
async def get_new_products(
    limit: int = Query(10, ge=1),
    store: BaseStore = Depends(get_store),
):
    page = await store.search_products(
        ProductSearchCriteria(
            marked_as_new_only=True,
            visible_individually_only=True,
            order_by=ProductSorting.CREATED_ON,
            page_size=limit,
        )
    )
    return {"items": await _product_cards(store, page.items), "totalCount": page.total_count}


@router.get("/bestsellers")
async def get_best_sellers(
    limit: int = Query(10, ge=1),
    store: BaseStore = Depends(get_store),
):
    product_ids = await store.get_best_seller_product_ids()
    products = await store.get_products_by_ids(product_ids[:limit])
    items = await _product_cards(store, [p for p in products if p.published])
    return {"items": items, "totalCount": len(product_ids)}
