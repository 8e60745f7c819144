"""
ricardo.ch admin endpoints
Settings overview, connection test and article management
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from storelink.api.dependencies import get_app_settings, get_store, require_permission
from storelink.api.schemas import ArticleQuantityRequest, PublishProductResultDto, RicardoSettingsDto
from storelink.config import Settings
from storelink.marketplaces import MarketplaceType, publisher_registry
from storelink.marketplaces.ricardo import RicardoPublisher
from storelink.models import Permission
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_permission(Permission.MANAGE_PLUGINS))])

PASSWORD_MASK = "********"


async def get_ricardo_publisher(
    request: Request,
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> RicardoPublisher:
    """Publisher kept on the application for the lifetime of the process"""
    publisher = getattr(request.app.state, "ricardo_publisher", None)
    if publisher is None:
        publisher = publisher_registry.get_publisher(MarketplaceType.RICARDO.value, store, settings.ricardo)
        request.app.state.ricardo_publisher = publisher
    return publisher


@router.get("/settings", response_model=RicardoSettingsDto)
async def get_ricardo_settings(settings: Settings = Depends(get_app_settings)):
    """Current configuration, the account password masked"""
    config = settings.ricardo
    return RicardoSettingsDto(
        use_sandbox=config.use_sandbox,
        partner_id=config.partner_id,
        partner_key=config.partner_key,
        account_username=config.account_username,
        account_password=PASSWORD_MASK if config.account_password else None,
        enable_stock_sync=config.enable_stock_sync,
        stock_sync_interval_minutes=config.stock_sync_interval_minutes,
        default_article_duration_days=config.default_article_duration_days,
        default_category_id=config.default_category_id,
        price_markup_percentage=config.price_markup_percentage,
        enable_logging=config.enable_logging,
        configured=config.has_credentials(),
    )


@router.post("/test-connection")
async def test_connection(
    settings: Settings = Depends(get_app_settings),
    publisher: RicardoPublisher = Depends(get_ricardo_publisher),
):
    if not settings.ricardo.has_credentials():
        return {"success": False, "message": "Please configure all required credentials first"}

    if await publisher.test_connection():
        return {"success": True, "message": "Connection test successful"}

    return {"success": False, "message": "Connection test failed: authentication rejected by ricardo.ch"}


@router.post("/products/{product_id}/publish", response_model=PublishProductResultDto)
async def publish_product(
    product_id: str,
    category_id: Optional[int] = Query(None, alias="categoryId"),
    publisher: RicardoPublisher = Depends(get_ricardo_publisher),
):
    """Publish a store product as a ricardo.ch article"""
    result = PublishProductResultDto(**(await publisher.publish_product(product_id, category_id)).model_dump())
    if not result.success:
        logger.warning("Publish failed", product_id=product_id, error=result.error_message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump(by_alias=True, mode="json")
        )
    return result


@router.put("/articles/{article_id}/quantity")
async def update_article_quantity(
    article_id: int,
    request: ArticleQuantityRequest,
    publisher: RicardoPublisher = Depends(get_ricardo_publisher),
):
    if not await publisher.update_stock(article_id, request.quantity):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to update article quantity")
    return {"success": True, "articleId": article_id, "quantity": request.quantity}


@router.delete("/articles/{article_id}")
async def close_article(
    article_id: int,
    publisher: RicardoPublisher = Depends(get_ricardo_publisher),
):
    if not await publisher.close_article(article_id):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to close article")
    return {"success": True, "articleId": article_id}
