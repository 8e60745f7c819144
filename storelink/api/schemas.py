"""
API data transfer objects
Every DTO is emitted in camelCase
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storelink.models import (
    Address,
    Category,
    Customer,
    MerchandiseReturn,
    MerchandiseReturnStatus,
    Order,
    PaymentMethod,
    Product,
    Shipment,
    ShippingOption,
)


class ApiModel(BaseModel):
    """Base DTO: camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Catalog


class ProductDto(ApiModel):
    id: str
    name: Optional[str] = None
    short_description: Optional[str] = None
    full_description: Optional[str] = None
    sku: Optional[str] = None
    gtin: Optional[str] = None
    brand_id: Optional[str] = None
    vendor_id: Optional[str] = None
    price: float = 0
    old_price: float = 0
    catalog_price: float = 0
    stock_quantity: int = 0
    published: bool = False
    show_on_home_page: bool = False
    best_seller: bool = False
    created_on_utc: Optional[datetime] = None
    updated_on_utc: Optional[datetime] = None

    @classmethod
    def from_model(cls, product: Product) -> "ProductDto":
        return cls(
            id=product.id,
            name=product.name,
            short_description=product.short_description,
            full_description=product.full_description,
            sku=product.sku,
            gtin=product.gtin,
            brand_id=product.brand_id,
            vendor_id=product.vendor_id,
            price=product.price,
            old_price=product.old_price,
            catalog_price=product.catalog_price,
            stock_quantity=product.stock_quantity,
            published=product.published,
            show_on_home_page=product.show_on_home_page,
            best_seller=product.best_seller,
            created_on_utc=product.created_on_utc,
            updated_on_utc=product.updated_on_utc,
        )


class CategoryDto(ApiModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    parent_category_id: Optional[str] = None
    picture_id: Optional[str] = None
    published: bool = False
    show_on_home_page: bool = False
    include_in_menu: bool = False
    display_order: int = 0
    created_on_utc: Optional[datetime] = None
    updated_on_utc: Optional[datetime] = None

    @classmethod
    def from_model(cls, category: Category) -> "CategoryDto":
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            parent_category_id=category.parent_category_id,
            picture_id=category.picture_id,
            published=category.published,
            show_on_home_page=category.show_on_home_page,
            include_in_menu=category.include_in_menu,
            display_order=category.display_order,
            created_on_utc=category.created_on_utc,
            updated_on_utc=category.updated_on_utc,
        )

    @classmethod
    def tree_node(cls, category: Category) -> "CategoryDto":
        """Trimmed projection used by the category tree"""
        return cls(
            id=category.id,
            name=category.name,
            parent_category_id=category.parent_category_id,
            display_order=category.display_order,
            published=category.published,
        )


class MobileProductDto(ApiModel):
    """Product card shown in the mobile app lists"""

    id: str
    name: Optional[str] = None
    short_description: Optional[str] = None
    sku: Optional[str] = None
    price: float = 0
    old_price: Optional[float] = None
    in_stock: bool = False
    image_url: Optional[str] = None
    is_featured: bool = False
    is_new: bool = False

    @classmethod
    def from_model(cls, product: Product, image_url: Optional[str]) -> "MobileProductDto":
        return cls(
            id=product.id,
            name=product.name,
            short_description=product.short_description,
            sku=product.sku,
            price=product.price,
            old_price=product.old_price if product.old_price > 0 else None,
            in_stock=product.in_stock,
            image_url=image_url,
            is_featured=product.show_on_home_page,
            is_new=product.mark_as_new,
        )


class MobileProductDetailDto(MobileProductDto):
    full_description: Optional[str] = None
    stock_quantity: int = 0
    images: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    review_count: int = 0

    @classmethod
    def from_product(cls, product: Product, image_url: Optional[str], images: List[str]) -> "MobileProductDetailDto":
        base = MobileProductDto.from_model(product, image_url)
        return cls(
            **base.model_dump(),
            full_description=product.full_description,
            stock_quantity=product.stock_quantity,
            images=images,
            rating=product.rating,
            review_count=product.approved_total_reviews,
        )


class MobileCategoryDto(ApiModel):
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    parent_category_id: Optional[str] = None
    display_order: int = 0


# Customers


class CustomerDto(ApiModel):
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    active: bool = False
    deleted: bool = False
    is_system_account: bool = False
    store_id: Optional[str] = None
    created_on_utc: Optional[datetime] = None
    last_activity_date_utc: Optional[datetime] = None

    @classmethod
    def from_model(cls, customer: Customer) -> "CustomerDto":
        return cls(
            id=customer.id,
            email=customer.email,
            username=customer.username,
            active=customer.active,
            deleted=customer.deleted,
            is_system_account=customer.is_system_account,
            store_id=customer.store_id,
            created_on_utc=customer.created_on_utc,
            last_activity_date_utc=customer.last_activity_date_utc,
        )

    @classmethod
    def summary(cls, customer: Customer) -> "CustomerDto":
        """Trimmed projection used by the customer search"""
        return cls(
            id=customer.id,
            email=customer.email,
            username=customer.username,
            active=customer.active,
            store_id=customer.store_id,
        )


class AddressDto(ApiModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None
    country_id: Optional[str] = None
    country_name: Optional[str] = None
    state_province_id: Optional[str] = None
    state_province_name: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    zip_postal_code: Optional[str] = None
    phone_number: Optional[str] = None

    @classmethod
    def from_model(cls, address: Address) -> "AddressDto":
        return cls(**address.model_dump())


class LoginRequest(ApiModel):
    email: str = ""
    password: str = ""


class RegisterRequest(ApiModel):
    email: str = ""
    password: str = ""
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class TokenRequest(ApiModel):
    email: str = ""
    password: str = ""


# Orders


class OrderDto(ApiModel):
    id: str
    order_number: int
    customer_id: str
    customer_email: Optional[str] = None
    order_total: float = 0
    order_status: str
    payment_status: str
    shipping_status: str
    created_on_utc: datetime
    paid_date_utc: Optional[datetime] = None
    currency_code: Optional[str] = None

    @classmethod
    def from_model(cls, order: Order) -> "OrderDto":
        return cls(
            id=order.id,
            order_number=order.order_number,
            customer_id=order.customer_id,
            customer_email=order.customer_email,
            order_total=order.order_total,
            order_status=str(order.order_status.value),
            payment_status=order.payment_status.value,
            shipping_status=order.shipping_status.value,
            created_on_utc=order.created_on_utc,
            paid_date_utc=order.paid_date_utc,
            currency_code=order.customer_currency_code,
        )


class ShipmentDto(ApiModel):
    id: str
    shipment_number: int
    order_id: str
    tracking_number: Optional[str] = None
    total_weight: Optional[float] = None
    shipped_date_utc: Optional[datetime] = None
    delivery_date_utc: Optional[datetime] = None
    admin_comment: Optional[str] = None
    created_on_utc: datetime

    @classmethod
    def from_model(cls, shipment: Shipment) -> "ShipmentDto":
        return cls(
            id=shipment.id,
            shipment_number=shipment.shipment_number,
            order_id=shipment.order_id,
            tracking_number=shipment.tracking_number,
            total_weight=shipment.total_weight,
            shipped_date_utc=shipment.shipped_date_utc,
            delivery_date_utc=shipment.delivery_date_utc,
            admin_comment=shipment.admin_comment,
            created_on_utc=shipment.created_on_utc,
        )


class MerchandiseReturnDto(ApiModel):
    id: str
    return_number: int
    order_id: str
    customer_id: str
    customer_comments: Optional[str] = None
    staff_notes: Optional[str] = None
    merchandise_return_status: str
    pickup_date: Optional[datetime] = None
    created_on_utc: datetime

    @classmethod
    def from_model(cls, merchandise_return: MerchandiseReturn) -> "MerchandiseReturnDto":
        return cls(
            id=merchandise_return.id,
            return_number=merchandise_return.return_number,
            order_id=merchandise_return.order_id,
            customer_id=merchandise_return.customer_id,
            customer_comments=merchandise_return.customer_comments,
            staff_notes=merchandise_return.staff_notes,
            merchandise_return_status=merchandise_return.status.value,
            pickup_date=merchandise_return.pickup_date,
            created_on_utc=merchandise_return.created_on_utc,
        )


class UpdateMerchandiseReturnRequest(ApiModel):
    merchandise_return_status: Optional[MerchandiseReturnStatus] = None
    staff_notes: Optional[str] = None


# Cart and checkout


class ProductAttributeDto(ApiModel):
    key: str
    value: Optional[str] = None


class ShoppingCartItemDto(ApiModel):
    id: str
    product_id: str
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    product_image_url: Optional[str] = None
    unit_price: float = 0
    quantity: int = 0
    sub_total: float = 0
    warehouse_id: Optional[str] = None
    created_on_utc: Optional[datetime] = None
    updated_on_utc: Optional[datetime] = None
    is_free_shipping: bool = False
    is_gift_voucher: bool = False


class ShoppingCartDto(ApiModel):
    items: List[ShoppingCartItemDto] = Field(default_factory=list)
    total_items: int = 0
    sub_total: float = 0
    currency_code: Optional[str] = None


class AddToCartRequest(ApiModel):
    product_id: Optional[str] = None
    quantity: int = 1
    warehouse_id: Optional[str] = None
    attributes: Optional[List[ProductAttributeDto]] = None


class UpdateCartItemRequest(ApiModel):
    shopping_cart_item_id: Optional[str] = None
    quantity: int = 0


class CartOperationResult(ApiModel):
    success: bool
    warnings: List[str] = Field(default_factory=list)
    item: Optional[ShoppingCartItemDto] = None


class OrderTotalsDto(ApiModel):
    sub_total: float = 0
    sub_total_discount: float = 0
    shipping: Optional[float] = None
    is_free_shipping: bool = False
    tax: float = 0
    total: Optional[float] = None
    currency_code: Optional[str] = None


class PaymentMethodDto(ApiModel):
    system_name: str
    name: str
    description: Optional[str] = None
    additional_fee: float = 0
    logo_url: Optional[str] = None

    @classmethod
    def from_model(cls, method: PaymentMethod, additional_fee: float) -> "PaymentMethodDto":
        return cls(
            system_name=method.system_name,
            name=method.friendly_name,
            description=method.description,
            additional_fee=additional_fee,
            logo_url=method.logo_url,
        )


class ShippingOptionDto(ApiModel):
    name: str
    description: Optional[str] = None
    rate: float = 0
    shipping_rate_provider_system_name: Optional[str] = None

    @classmethod
    def from_model(cls, option: ShippingOption) -> "ShippingOptionDto":
        return cls(**option.model_dump())


class CheckoutSummaryDto(ApiModel):
    cart: ShoppingCartDto
    totals: OrderTotalsDto
    billing_address: Optional[AddressDto] = None
    shipping_address: Optional[AddressDto] = None
    requires_shipping: bool = False
    available_payment_methods: List[PaymentMethodDto] = Field(default_factory=list)
    available_shipping_options: List[ShippingOptionDto] = Field(default_factory=list)
    can_place_order: bool = False
    warnings: List[str] = Field(default_factory=list)


class PlaceOrderRequest(ApiModel):
    payment_method_system_name: Optional[str] = None
    shipping_option_name: Optional[str] = None
    shipping_rate_provider_system_name: Optional[str] = None
    order_comment: Optional[str] = None
    use_loyalty_points: bool = False


class PlaceOrderResultDto(ApiModel):
    success: bool
    order_id: Optional[str] = None
    order_number: int = 0
    order_total: float = 0
    errors: List[str] = Field(default_factory=list)


# Marketplace


class ArticleQuantityRequest(ApiModel):
    quantity: int = Field(..., ge=0)


class RicardoSettingsDto(ApiModel):
    use_sandbox: bool
    partner_id: Optional[str] = None
    partner_key: Optional[str] = None
    account_username: Optional[str] = None
    account_password: Optional[str] = None
    enable_stock_sync: bool = False
    stock_sync_interval_minutes: int = 60
    default_article_duration_days: int = 7
    default_category_id: int = 0
    price_markup_percentage: float = 0
    enable_logging: bool = True
    configured: bool = False


class PublishProductResultDto(ApiModel):
    success: bool
    ricardo_article_id: int = 0
    ricardo_article_nr: int = 0
    error_message: Optional[str] = None


# Integration


class PublicOrderDto(OrderDto):
    """Order row for integrations, with the GUID and last update"""

    order_guid: str
    updated_on_utc: Optional[datetime] = None

    @classmethod
    def from_model(cls, order: Order) -> "PublicOrderDto":
        base = OrderDto.from_model(order)
        return cls(**base.model_dump(), order_guid=order.order_guid, updated_on_utc=order.updated_on_utc)
