"""
Back office endpoints, backend token and permission required
"""

from fastapi import APIRouter

from . import categories, customers, orders, products, returns, ricardo, shipments

router = APIRouter()
router.include_router(products.router, prefix="/product", tags=["admin-products"])
router.include_router(categories.router, prefix="/category", tags=["admin-categories"])
router.include_router(customers.router, prefix="/customer", tags=["admin-customers"])
router.include_router(orders.router, prefix="/order", tags=["admin-orders"])
router.include_router(shipments.router, prefix="/shipment", tags=["admin-shipments"])
router.include_router(returns.router, prefix="/merchandisereturn", tags=["admin-returns"])
router.include_router(ricardo.router, prefix="/ricardo", tags=["ricardo"])
