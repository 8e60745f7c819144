"""
API dependency injection
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

import jwt
from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storelink.config import JwtConfig, Settings, get_settings
from storelink.models import Customer, Page, Permission
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

from .security import decode_token

logger = get_logger(__name__)

# Bearer token scheme (errors are raised by the dependencies below)
security = HTTPBearer(auto_error=False)

API_KEY_HEADER = "X-API-Key"


def get_app_settings() -> Settings:
    """Settings instance (overridable in tests)"""
    return get_settings()


async def get_store(request: Request) -> BaseStore:
    """Store backend attached to the application"""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store is not initialized")
    return store


def _unauthorized(message: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _customer_from_token(token: str, config: JwtConfig, store: BaseStore) -> Customer:
    """Resolve the customer named by the Email claim of a token"""
    if not config.enabled:
        raise _unauthorized("API is disabled")

    try:
        payload = decode_token(token, config)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token")

    email = payload.get("Email")
    if not email:
        raise _unauthorized("Invalid token")

    customer = await store.get_customer_by_email(email)
    if customer is None or not customer.active or customer.deleted:
        raise _unauthorized("Customer not found")

    return customer


async def get_admin_customer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Customer:
    """Back office user authenticated with a backend token"""
    if credentials is None:
        raise _unauthorized()
    return await _customer_from_token(credentials.credentials, settings.backend_api, store)


def require_permission(permission: Permission) -> Callable:
    """Dependency factory: admin user holding the permission, 403 otherwise"""

    async def dependency(
        customer: Customer = Depends(get_admin_customer),
        store: BaseStore = Depends(get_store),
    ) -> Customer:
        if not await store.authorize(customer, permission):
            logger.warning("Permission denied", customer_id=customer.id, permission=permission.value)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return customer

    return dependency


async def get_current_customer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Customer:
    """Customer authenticated with a frontend token"""
    if credentials is None:
        raise _unauthorized()
    customer = await _customer_from_token(credentials.credentials, settings.frontend_api, store)
    if not customer.email:
        raise _unauthorized()
    return customer


async def get_mobile_customer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Customer:
    """Customer authenticated with either a backend or a frontend token"""
    if credentials is None:
        raise _unauthorized()

    last_error: Optional[HTTPException] = None
    for config in (settings.backend_api, settings.frontend_api):
        try:
            customer = await _customer_from_token(credentials.credentials, config, store)
        except HTTPException as e:
            last_error = e
            continue
        if not customer.email:
            raise _unauthorized()
        return customer

    raise last_error or _unauthorized()


async def require_api_key_or_admin(
    request: Request,
    x_api_key: Optional[str] = Header(None, alias=API_KEY_HEADER),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Integration key, or an admin token with ManageProducts"""
    if x_api_key is not None:
        if x_api_key == settings.api_key:
            request.state.auth_type = "api_key"
            return
        raise _unauthorized("Invalid API Key")

    if credentials is not None:
        try:
            customer = await _customer_from_token(credentials.credentials, settings.backend_api, store)
        except HTTPException:
            customer = None
        if customer is not None and await store.authorize(customer, Permission.MANAGE_PRODUCTS):
            request.state.auth_type = "bearer"
            return

    raise _unauthorized("Unauthorized - API Key or admin permissions required")


class RateLimiter:
    """Request rate limit per client address"""

    def __init__(self, requests: int = 100, window: int = 60):
        self.requests = requests
        self.window = window
        self.cache: Dict[str, List[datetime]] = {}

    async def __call__(self, request: Request) -> None:
        client_ip = request.client.host if request.client else "unknown"
        now = datetime.now()
        window_start = now - timedelta(seconds=self.window)

        requests_data = [t for t in self.cache.get(client_ip, []) if t > window_start]
        if len(requests_data) >= self.requests:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Rate limit exceeded. Max {self.requests} requests per {self.window} seconds",
            )

        requests_data.append(now)
        self.cache[client_ip] = requests_data


# Credential endpoints
login_rate_limiter = RateLimiter(requests=30, window=60)


class Pagination:
    """Zero based paging parameters"""

    def __init__(self, page_index: int = 0, page_size: int = 50, max_page_size: int = 1000):
        self.page_index = max(0, page_index)
        self.page_size = min(max(1, page_size), max_page_size)

    def paginate(self, page: Page, items: List[Any]) -> Dict[str, Any]:
        """Paged response body"""
        return {
            "items": items,
            "pageIndex": self.page_index,
            "pageSize": self.page_size,
            "totalCount": page.total_count,
        }
