"""
ricardo.ch API models
Article payloads use PascalCase member names, the login payload camelCase
"""

import re
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_pascal

from . import defaults

# WCF JSON date: /Date(1700000000000)/ or /Date(1700000000000+0100)/
WCF_DATE_PATTERN = re.compile(r"^/Date\((-?\d+)([+-]\d{4})?\)/$")


class RicardoModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, coerce_numbers_to_str=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class TokenCredentialLoginRequest(BaseModel):
    """TokenCredentialLogin parameters"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    partner_key: Optional[str] = None
    partner_partner_id: Optional[str] = None
    customer_username: Optional[str] = None
    customer_password: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class RicardoTokenCredential(RicardoModel):
    """Authentication result"""

    token_credential: Optional[str] = None
    token_expiration_date: Optional[str] = None
    session_duration: int = 0

    def expires_at(self) -> Optional[datetime]:
        """Expiration as an aware UTC datetime, None when missing or unparseable"""
        return parse_ricardo_date(self.token_expiration_date)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        expiration = self.expires_at()
        if expiration is None:
            return True
        return (now or datetime.now(timezone.utc)) >= expiration


def parse_ricardo_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 or WCF date, naive values are taken as UTC"""
    if not value:
        return None

    match = WCF_DATE_PATTERN.match(value.strip())
    if match:
        # The offset only tells the sender's zone, the milliseconds are UTC
        return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=int(match.group(1)))

    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class PictureInformation(RicardoModel):
    picture_url: str
    picture_index: int


class PaymentConditionIds(RicardoModel):
    payment_condition_id: List[int] = Field(default_factory=lambda: [defaults.PAYMENT_CASH])


class DeliveryConditionIds(RicardoModel):
    delivery_condition_id: List[int] = Field(default_factory=lambda: [defaults.DELIVERY_PICKUP])


class WarrantyConditionIds(RicardoModel):
    warranty_condition_id: List[int] = Field(default_factory=lambda: [defaults.WARRANTY_NONE])


class InsertArticleRequest(RicardoModel):
    """InsertArticle parameters"""

    category_id: int
    article_title: str
    article_description: str
    article_condition_id: int = defaults.ARTICLE_CONDITION_NEW
    start_price: float
    availability: int = 1
    is_customer_template: bool = False
    max_number_of_pictures: int = defaults.MAX_PICTURES
    pictures: List[PictureInformation] = Field(default_factory=list)
    article_duration: int = 7
    payment_condition_ids: PaymentConditionIds = Field(default_factory=PaymentConditionIds)
    delivery_condition_ids: DeliveryConditionIds = Field(default_factory=DeliveryConditionIds)
    warranty_condition_ids: WarrantyConditionIds = Field(default_factory=WarrantyConditionIds)


class InsertArticleResponse(RicardoModel):
    article_id: int = 0
    article_nr: int = 0
    is_customer_template: bool = False
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class UpdateArticleQuantityRequest(RicardoModel):
    article_id: int
    new_quantity: int


class UpdateArticleQuantityResponse(RicardoModel):
    success: bool = False
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class CloseArticleRequest(RicardoModel):
    article_id: int


class CloseArticleResponse(RicardoModel):
    success: bool = False
    error_code: Optional[str] = None
    error_message: Optional[str] = None
