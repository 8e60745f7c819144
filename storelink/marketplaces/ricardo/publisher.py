"""
ricardo.ch publisher
Publishes store products as ricardo.ch articles
"""

import re
from typing import List, Optional, Tuple

from pydantic import BaseModel

from storelink.config import RicardoConfig
from storelink.marketplaces.base import BasePublisher, MarketplaceType
from storelink.models import MarketplaceListing, Product
from storelink.models.product import utcnow
from storelink.monitoring import get_logger, global_metrics
from storelink.storage.base import BaseStore

from . import defaults
from .client import RicardoApiClient
from .models import (
    DeliveryConditionIds,
    InsertArticleRequest,
    PaymentConditionIds,
    PictureInformation,
    WarrantyConditionIds,
)

logger = get_logger(__name__)

HTML_TAG_PATTERN = re.compile(r"<.*?>")


class PublishProductResult(BaseModel):
    """Outcome of a publish call"""

    success: bool = False
    ricardo_article_id: int = 0
    ricardo_article_nr: int = 0
    error_message: Optional[str] = None


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    """Cut to max_length, the last three characters becoming an ellipsis"""
    if not value:
        return value
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


class RicardoPublisher(BasePublisher):
    """ricardo.ch publisher"""

    def __init__(self, store: BaseStore, config: RicardoConfig, client: Optional[RicardoApiClient] = None):
        super().__init__(MarketplaceType.RICARDO, store, config)
        self.client = client or RicardoApiClient(config)

    async def publish_product(self, product_id: str, category_id: Optional[int] = None) -> PublishProductResult:
        """
        Publish a single product

        Args:
            product_id: Store product ID
            category_id: ricardo.ch category (defaults to the configured one)

        Returns:
            PublishProductResult
        """
        product = await self.store.get_product(product_id)
        if product is None:
            return PublishProductResult(success=False, error_message=f"Product {product_id} not found")

        is_valid, error_message = self.validate_product(product)
        if not is_valid:
            logger.warning("Product validation failed", product_id=product_id, reason=error_message)
            return PublishProductResult(
                success=False,
                error_message=f"Product validation failed: {error_message}",
            )

        request = self.build_article_request(product, category_id)
        response = await self.client.insert_article(request)

        if response.article_id > 0:
            logger.info(
                "Published product to ricardo.ch",
                product_id=product_id,
                article_id=response.article_id,
            )
            global_metrics.increment("ricardo.articles_published")

            await self.store.save_marketplace_listing(
                MarketplaceListing(
                    marketplace=self.marketplace_type.value,
                    product_id=product.id,
                    article_id=response.article_id,
                    title=request.article_title,
                    price=request.start_price,
                    quantity=request.availability,
                )
            )

            return PublishProductResult(
                success=True,
                ricardo_article_id=response.article_id,
                ricardo_article_nr=response.article_nr,
            )

        return PublishProductResult(success=False, error_message=response.error_message or "Unknown error")

    async def update_stock(self, article_id: int, quantity: int) -> bool:
        """Update the quantity of an article"""
        response = await self.client.update_article_quantity(article_id, quantity)

        if response.success:
            logger.info("Updated stock for ricardo article", article_id=article_id, quantity=quantity)
            global_metrics.increment("ricardo.stock_updates")

            listing = await self.store.get_marketplace_listing(self.marketplace_type.value, article_id)
            if listing is not None:
                listing.quantity = quantity
                listing.updated_on_utc = utcnow()
                await self.store.save_marketplace_listing(listing)
            return True

        logger.error(
            "Failed to update stock for ricardo article",
            article_id=article_id,
            error=response.error_message,
        )
        return False

    async def close_article(self, article_id: int) -> bool:
        """Close an article"""
        response = await self.client.close_article(article_id)

        if response.success:
            logger.info("Closed ricardo article", article_id=article_id)

            listing = await self.store.get_marketplace_listing(self.marketplace_type.value, article_id)
            if listing is not None:
                listing.active = False
                listing.updated_on_utc = utcnow()
                await self.store.save_marketplace_listing(listing)
            return True

        logger.error("Failed to close ricardo article", article_id=article_id, error=response.error_message)
        return False

    async def test_connection(self) -> bool:
        """Try to log in with the configured credentials"""
        return await self.client.authenticate()

    def validate_product(self, product: Product) -> Tuple[bool, Optional[str]]:
        """Product validation"""
        if not product.name or not product.name.strip():
            return False, "Product name is required"

        if product.price <= 0:
            return False, "Product price must be greater than 0"

        if product.stock_quantity <= 0:
            return False, "Product must have stock available"

        return True, None

    def build_article_request(self, product: Product, category_id: Optional[int] = None) -> InsertArticleRequest:
        """Map a product to an InsertArticle request"""
        final_price = product.price * (1 + self.config.price_markup_percentage / 100)

        return InsertArticleRequest(
            category_id=category_id if category_id is not None else self.config.default_category_id,
            article_title=truncate(product.name, defaults.MAX_TITLE_LENGTH),
            article_description=self.prepare_description(product),
            article_condition_id=defaults.ARTICLE_CONDITION_NEW,
            start_price=final_price,
            availability=product.stock_quantity,
            article_duration=self.config.default_article_duration_days,
            pictures=self.prepare_pictures(product),
            payment_condition_ids=PaymentConditionIds(
                payment_condition_id=[defaults.PAYMENT_CASH, defaults.PAYMENT_BANK_TRANSFER]
            ),
            delivery_condition_ids=DeliveryConditionIds(
                delivery_condition_id=[defaults.DELIVERY_PICKUP, defaults.DELIVERY_SHIPPING]
            ),
            warranty_condition_ids=WarrantyConditionIds(warranty_condition_id=[defaults.WARRANTY_MANUFACTURER]),
        )

    def prepare_description(self, product: Product) -> str:
        """Plain text description with the SKU appended"""
        lines: List[str] = []

        if product.short_description and product.short_description.strip():
            lines.append(product.short_description)
            lines.append("")

        if product.full_description and product.full_description.strip():
            lines.append(HTML_TAG_PATTERN.sub("", product.full_description))

        if product.sku and product.sku.strip():
            lines.append("")
            lines.append(f"SKU: {product.sku}")

        description = "".join(f"{line}\n" for line in lines)
        return truncate(description, defaults.MAX_DESCRIPTION_LENGTH)

    def prepare_pictures(self, product: Product) -> List[PictureInformation]:
        """Up to ten pictures in display order"""
        return [
            PictureInformation(
                picture_url=f"/content/images/thumbs/{picture.picture_id}.jpeg",
                picture_index=index,
            )
            for index, picture in enumerate(product.ordered_pictures()[: defaults.MAX_PICTURES])
        ]

    async def close(self):
        await self.client.close()
