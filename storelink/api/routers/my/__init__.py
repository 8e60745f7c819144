"""
Customer ("my") endpoints, frontend token required
"""

from fastapi import APIRouter

from . import checkout, orders, returns, shipments

router = APIRouter()
router.include_router(orders.router, prefix="/orders", tags=["my"])
router.include_router(returns.router, prefix="/returns", tags=["my"])
router.include_router(shipments.router, prefix="/shipments", tags=["my"])
router.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
