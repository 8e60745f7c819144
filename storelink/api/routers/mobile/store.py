"""
Mobile store information (anonymous)
"""

from fastapi import APIRouter, Depends

from storelink.api.dependencies import get_app_settings
from storelink.config import Settings

router = APIRouter()


@router.get("/settings")
async def get_store_settings(settings: Settings = Depends(get_app_settings)):
    """Store name, theme colors, currency and language for the app"""
    return {
        "storeName": settings.store_name,
        "primaryColor": settings.store_primary_color,
        "secondaryColor": settings.store_secondary_color,
        "currency": settings.store_currency,
        "language": settings.store_language,
    }
