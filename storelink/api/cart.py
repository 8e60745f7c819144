"""
Cart projections shared by the cart, wishlist and checkout endpoints
"""

from typing import List, Optional

from storelink.api.schemas import ShoppingCartDto, ShoppingCartItemDto
from storelink.models import Product, ShoppingCartItem
from storelink.storage.base import BaseStore

CART_IMAGE_SIZE = 100


async def build_cart_item(
    store: BaseStore,
    item: ShoppingCartItem,
    product: Product,
    with_image: bool = True,
) -> ShoppingCartItemDto:
    """Project a cart line with its current unit price"""
    unit_price = await store.get_unit_price(item, product)

    image_url: Optional[str] = None
    pictures = product.ordered_pictures()
    if with_image and pictures:
        image_url = await store.get_picture_url(pictures[0].picture_id, CART_IMAGE_SIZE)

    return ShoppingCartItemDto(
        id=item.id,
        product_id=item.product_id,
        product_name=product.name,
        product_sku=product.sku,
        product_image_url=image_url,
        unit_price=unit_price,
        quantity=item.quantity,
        sub_total=unit_price * item.quantity,
        warehouse_id=item.warehouse_id,
        created_on_utc=item.created_on_utc,
        updated_on_utc=item.updated_on_utc,
        is_free_shipping=item.is_free_shipping,
        is_gift_voucher=item.is_gift_voucher,
    )


async def build_cart_items(store: BaseStore, items: List[ShoppingCartItem]) -> List[ShoppingCartItemDto]:
    """Project cart lines, skipping lines whose product is gone"""
    result = []
    for item in items:
        product = await store.get_product(item.product_id)
        if product is None:
            continue
        result.append(await build_cart_item(store, item, product))
    return result


async def build_cart(store: BaseStore, items: List[ShoppingCartItem], currency_code: str) -> ShoppingCartDto:
    """Shopping cart with the item count and sub total"""
    dtos = await build_cart_items(store, items)
    return ShoppingCartDto(
        items=dtos,
        total_items=sum(dto.quantity for dto in dtos),
        sub_total=sum(dto.sub_total for dto in dtos),
        currency_code=currency_code,
    )
