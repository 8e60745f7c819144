"""
Mobile shopping cart endpoints (customer token)
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from storelink.api.cart import build_cart, build_cart_item
from storelink.api.dependencies import get_app_settings, get_mobile_customer, get_store
from storelink.api.schemas import (
    AddToCartRequest,
    CartOperationResult,
    ShoppingCartDto,
    UpdateCartItemRequest,
)
from storelink.config import Settings
from storelink.models import CartAttribute, Customer, ShoppingCartItem, ShoppingCartType
from storelink.storage.base import BaseStore

router = APIRouter()


def cart_warnings(warnings) -> JSONResponse:
    """400 response carrying the warnings of a cart operation"""
    result = CartOperationResult(success=False, warnings=list(warnings))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump(by_alias=True, mode="json"))


async def find_cart_item(
    store: BaseStore, customer: Customer, item_id: str, cart_type: ShoppingCartType
) -> Optional[ShoppingCartItem]:
    items = await store.get_cart(customer.id, cart_type)
    return next((item for item in items if item.id == item_id), None)


@router.get("", response_model=ShoppingCartDto)
async def get_cart(
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    items = await store.get_cart(customer.id, ShoppingCartType.SHOPPING_CART)
    return await build_cart(store, items, settings.store_currency)


@router.post("", response_model=CartOperationResult)
async def add_to_cart(
    request: Optional[AddToCartRequest] = Body(None),
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    """Add a product, merging with an identical line"""
    if request is None or not request.product_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ProductId is required")

    product = await store.get_product(request.product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    attributes = [CartAttribute(key=a.key, value=a.value) for a in request.attributes or []]
    warnings, item = await store.add_to_cart(
        customer,
        request.product_id,
        ShoppingCartType.SHOPPING_CART,
        warehouse_id=request.warehouse_id,
        attributes=attributes,
        quantity=request.quantity if request.quantity > 0 else 1,
    )
    if warnings or item is None:
        return cart_warnings(warnings)

    return CartOperationResult(success=True, item=await build_cart_item(store, item, product, with_image=False))


@router.put("/{item_id}", response_model=CartOperationResult)
async def update_cart_item(
    item_id: str,
    request: Optional[UpdateCartItemRequest] = Body(None),
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    if request is None or request.quantity < 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Quantity must be at least 1")

    item = await find_cart_item(store, customer, item_id, ShoppingCartType.SHOPPING_CART)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart item not found")

    warnings = await store.update_cart_item(customer, item_id, request.quantity)
    if warnings:
        return cart_warnings(warnings)

    product = await store.get_product(item.product_id)
    updated = await find_cart_item(store, customer, item_id, ShoppingCartType.SHOPPING_CART)
    if updated is None or product is None:
        return CartOperationResult(success=True)

    return CartOperationResult(success=True, item=await build_cart_item(store, updated, product, with_image=False))


@router.delete("/{item_id}")
async def remove_cart_item(
    item_id: str,
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    item = await find_cart_item(store, customer, item_id, ShoppingCartType.SHOPPING_CART)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cart item not found")

    await store.delete_cart_item(customer, item)
    return {"success": True, "message": "Item removed from cart"}


@router.delete("")
async def clear_cart(
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    for item in await store.get_cart(customer.id, ShoppingCartType.SHOPPING_CART):
        await store.delete_cart_item(customer, item)
    return {"success": True, "message": "Cart cleared"}


@router.get("/count")
async def get_cart_count(
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    """Badge counters"""
    items = await store.get_cart(customer.id, ShoppingCartType.SHOPPING_CART)
    return {"itemCount": len(items), "totalQuantity": sum(item.quantity for item in items)}
