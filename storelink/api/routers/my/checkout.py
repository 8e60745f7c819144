"""
Checkout endpoints
Summary, order placement and address selection for the authenticated customer
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from storelink.api.cart import build_cart
from storelink.api.dependencies import get_app_settings, get_current_customer, get_store
from storelink.api.schemas import (
    AddressDto,
    CheckoutSummaryDto,
    OrderTotalsDto,
    PaymentMethodDto,
    PlaceOrderRequest,
    PlaceOrderResultDto,
    ShippingOptionDto,
)
from storelink.config import Settings
from storelink.models import Customer, SelectedShippingOption, ShoppingCartType
from storelink.models.cart import requires_shipping
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

router = APIRouter()


def _place_order_failure(*errors: str) -> JSONResponse:
    result = PlaceOrderResultDto(success=False, errors=list(errors))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.model_dump(by_alias=True))


@router.get("", response_model=CheckoutSummaryDto)
async def get_summary(
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Checkout summary

    Cart, totals, selected addresses and the available payment and
    shipping options, with the reasons the order cannot be placed yet.
    """
    items = await store.get_cart(customer.id, ShoppingCartType.SHOPPING_CART)
    if not items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Shopping cart is empty")

    currency_code = settings.store_currency
    warnings = []

    cart = await build_cart(store, items, currency_code)
    totals = await store.get_cart_totals(items)

    billing = customer.billing_address
    if billing is None:
        warnings.append("Billing address is not set")

    ship = requires_shipping(items)
    shipping = customer.shipping_address if ship else None
    if ship and shipping is None:
        warnings.append("Shipping address is not set")

    payment_methods = []
    for method in await store.get_active_payment_methods(customer, billing.country_id if billing else None):
        fee = await store.get_additional_handling_fee(items, method.system_name)
        payment_methods.append(PaymentMethodDto.from_model(method, fee))

    shipping_options = []
    if ship and shipping is not None:
        options = await store.get_shipping_options(customer, items, shipping)
        if options.success:
            shipping_options = [ShippingOptionDto.from_model(o) for o in options.shipping_options]
        else:
            warnings.extend(options.errors)

    can_place_order = (
        not warnings
        and billing is not None
        and (not ship or shipping is not None)
        and bool(payment_methods)
        and (not ship or bool(shipping_options))
    )

    return CheckoutSummaryDto(
        cart=cart,
        totals=OrderTotalsDto(currency_code=currency_code, **totals.model_dump()),
        billing_address=AddressDto.from_model(billing) if billing else None,
        shipping_address=AddressDto.from_model(shipping) if shipping else None,
        requires_shipping=ship,
        available_payment_methods=payment_methods,
        available_shipping_options=shipping_options,
        can_place_order=can_place_order,
        warnings=warnings,
    )


@router.post("", response_model=PlaceOrderResultDto)
async def place_order(
    request: Optional[PlaceOrderRequest] = Body(None),
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    """Place an order from the shopping cart"""
    request = request or PlaceOrderRequest()
    if not request.payment_method_system_name:
        return _place_order_failure("Payment method is required")

    items = await store.get_cart(customer.id, ShoppingCartType.SHOPPING_CART)
    if not items:
        return _place_order_failure("Shopping cart is empty")

    if customer.billing_address is None:
        return _place_order_failure("Billing address is required")

    if requires_shipping(items):
        if customer.shipping_address is None:
            return _place_order_failure("Shipping address is required")

        if request.shipping_option_name:
            customer.selected_shipping_option = SelectedShippingOption(
                name=request.shipping_option_name,
                shipping_rate_provider_system_name=request.shipping_rate_provider_system_name,
            )

    customer.selected_payment_method = request.payment_method_system_name
    if request.use_loyalty_points:
        customer.use_loyalty_points = True
    await store.update_customer(customer)

    result = await store.place_order(customer, order_comment=request.order_comment)
    if not result.success:
        logger.warning("Order placement failed", customer_id=customer.id, errors=result.errors)
        return _place_order_failure(*result.errors)

    return PlaceOrderResultDto(
        success=True,
        order_id=result.order_id,
        order_number=result.order_number or 0,
        order_total=result.order_total,
    )


@router.get("/addresses")
async def get_addresses(customer: Customer = Depends(get_current_customer)):
    billing = customer.billing_address
    shipping = customer.shipping_address
    return {
        "addresses": [AddressDto.from_model(a).model_dump(by_alias=True) for a in customer.addresses],
        "billingAddressId": billing.id if billing else None,
        "shippingAddressId": shipping.id if shipping else None,
    }


@router.post("/billing-address/{address_id}")
async def set_billing_address(
    address_id: str,
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    address = customer.find_address(address_id)
    if address is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Address not found")

    customer.billing_address_id = address.id
    await store.update_customer(customer)
    return {"success": True, "message": "Billing address updated"}


@router.post("/shipping-address/{address_id}")
async def set_shipping_address(
    address_id: str,
    customer: Customer = Depends(get_current_customer),
    store: BaseStore = Depends(get_store),
):
    address = customer.find_address(address_id)
    if address is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Address not found")

    customer.shipping_address_id = address.id
    await store.update_customer(customer)
    return {"success": True, "message": "Shipping address updated"}
