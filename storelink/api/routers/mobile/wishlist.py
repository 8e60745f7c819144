"""
Mobile wishlist endpoints (customer token)
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from storelink.api.cart import build_cart_item, build_cart_items
from storelink.api.dependencies import get_app_settings, get_mobile_customer, get_store
from storelink.api.schemas import AddToCartRequest, CartOperationResult
from storelink.config import Settings
from storelink.models import CartAttribute, Customer, ShoppingCartType
from storelink.storage.base import BaseStore

from .shoppingcart import cart_warnings, find_cart_item

router = APIRouter()


@router.get("")
async def get_wishlist(
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    items = await build_cart_items(store, await store.get_cart(customer.id, ShoppingCartType.WISHLIST))
    return {"items": items, "totalItems": len(items), "currencyCode": settings.store_currency}


@router.post("", response_model=CartOperationResult)
async def add_to_wishlist(
    request: Optional[AddToCartRequest] = Body(None),
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    if request is None or not request.product_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ProductId is required")

    product = await store.get_product(request.product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")

    attributes = [CartAttribute(key=a.key, value=a.value) for a in request.attributes or []]
    warnings, item = await store.add_to_cart(
        customer,
        request.product_id,
        ShoppingCartType.WISHLIST,
        warehouse_id=request.warehouse_id,
        attributes=attributes,
        quantity=request.quantity if request.quantity > 0 else 1,
    )
    if warnings or item is None:
        return cart_warnings(warnings)

    return CartOperationResult(success=True, item=await build_cart_item(store, item, product, with_image=False))


@router.delete("/{item_id}")
async def remove_wishlist_item(
    item_id: str,
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    item = await find_cart_item(store, customer, item_id, ShoppingCartType.WISHLIST)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wishlist item not found")

    await store.delete_cart_item(customer, item)
    return {"success": True, "message": "Item removed from wishlist"}


@router.post("/{item_id}/move-to-cart", response_model=CartOperationResult)
async def move_to_cart(
    item_id: str,
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    """Add the wishlist line to the cart, then drop it from the wishlist"""
    item = await find_cart_item(store, customer, item_id, ShoppingCartType.WISHLIST)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wishlist item not found")

    warnings, cart_item = await store.add_to_cart(
        customer,
        item.product_id,
        ShoppingCartType.SHOPPING_CART,
        warehouse_id=item.warehouse_id,
        attributes=list(item.attributes),
        entered_price=item.entered_price,
        quantity=item.quantity,
    )
    if warnings or cart_item is None:
        return cart_warnings(warnings)

    await store.delete_cart_item(customer, item)

    product = await store.get_product(cart_item.product_id)
    if product is None:
        return CartOperationResult(success=True)
    return CartOperationResult(success=True, item=await build_cart_item(store, cart_item, product, with_image=False))


@router.delete("")
async def clear_wishlist(
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    for item in await store.get_cart(customer.id, ShoppingCartType.WISHLIST):
        await store.delete_cart_item(customer, item)
    return {"success": True, "message": "Wishlist cleared"}


@router.get("/count")
async def get_wishlist_count(
    customer: Customer = Depends(get_mobile_customer),
    store: BaseStore = Depends(get_store),
):
    items = await store.get_cart(customer.id, ShoppingCartType.WISHLIST)
    return {"itemCount": len(items)}
