"""
Backend token issuance
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from storelink.api.dependencies import get_app_settings, get_store, login_rate_limiter
from storelink.api.schemas import TokenRequest
from storelink.api.security import JwtTokenGenerator, decode_password
from storelink.config import Settings
from storelink.models import CustomerLoginResult
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

router = APIRouter()


@router.post("/create", dependencies=[Depends(login_rate_limiter)])
async def create_token(
    request: Optional[TokenRequest] = Body(None),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Issue a backend (admin) token

    The password is expected base64 encoded.
    """
    config = settings.backend_api
    if not config.enabled:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="API is disabled")

    if request is None or not request.email.strip() or not request.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")

    password = decode_password(request.password)
    result = await store.login_customer(request.email, password)
    if result != CustomerLoginResult.SUCCESSFUL:
        logger.warning("Token request rejected", email=request.email, result=result.value)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    customer = await store.get_customer_by_email(request.email)
    if customer is None or customer.is_system_account:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = JwtTokenGenerator(config).generate_token({"Email": customer.email, "CustomerId": customer.id})
    logger.info("Backend token issued", customer_id=customer.id)
    return token
