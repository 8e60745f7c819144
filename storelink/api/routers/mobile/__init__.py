"""
Mobile app endpoints
"""

from fastapi import APIRouter

from . import account, catalog, shoppingcart, store, wishlist

router = APIRouter()
router.include_router(account.router, prefix="/account", tags=["mobile-account"])
router.include_router(catalog.router, prefix="/catalog", tags=["mobile-catalog"])
router.include_router(store.router, prefix="/store", tags=["mobile-store"])
router.include_router(shoppingcart.router, prefix="/shoppingcart", tags=["mobile-cart"])
router.include_router(wishlist.router, prefix="/wishlist", tags=["mobile-wishlist"])
