"""
Admin order endpoints
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from storelink.api.dependencies import get_store, require_permission
from storelink.api.schemas import OrderDto
from storelink.models import Order, Permission
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_permission(Permission.MANAGE_ORDERS))])


async def _load_order(key: str, store: BaseStore) -> Order:
    order = await store.get_order(key)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return order


@router.get("", response_model=List[OrderDto])
async def list_orders(store: BaseStore = Depends(get_store)):
    page = await store.search_orders()
    return [OrderDto.from_model(o) for o in page.items]


@router.get("/{key}", response_model=OrderDto)
async def get_order(key: str, store: BaseStore = Depends(get_store)):
    return OrderDto.from_model(await _load_order(key, store))


@router.post("/{key}/MarkAsPaid")
async def mark_as_paid(key: str, store: BaseStore = Depends(get_store)):
    """Mark the order as paid through its payment transaction"""
    order = await _load_order(key, store)

    transaction = await store.get_payment_transaction(order.order_guid)
    if transaction is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No payment transaction found for this order",
        )

    await store.mark_order_as_paid(transaction)
    logger.info("Order marked as paid from admin", order_id=order.id)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{key}/MarkAsAuthorized")
async def mark_as_authorized(key: str, store: BaseStore = Depends(get_store)):
    """Stamp the payment transaction with the current UTC time as authorization ID"""
    order = await _load_order(key, store)

    transaction = await store.get_payment_transaction(order.order_guid)
    if transaction is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No payment transaction found for this order",
        )

    transaction.authorization_transaction_id = datetime.now(timezone.utc).isoformat()
    await store.update_payment_transaction(transaction)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/{key}/Cancel")
async def cancel_order(key: str, store: BaseStore = Depends(get_store)):
    order = await _load_order(key, store)
    await store.cancel_order(order, notify_customer=True)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(key: str, store: BaseStore = Depends(get_store)):
    order = await _load_order(key, store)
    await store.delete_order(order)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
