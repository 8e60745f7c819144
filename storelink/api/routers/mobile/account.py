"""
Mobile account endpoints
Login, registration and email availability (anonymous)
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from storelink.api.dependencies import get_app_settings, get_store, login_rate_limiter
from storelink.api.schemas import LoginRequest, RegisterRequest
from storelink.api.security import JwtTokenGenerator, decode_password
from storelink.config import Settings
from storelink.models import CustomerLoginResult, UserRegistrationType
from storelink.monitoring import get_logger
from storelink.storage.base import BaseStore

logger = get_logger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6

LOGIN_ERRORS = {
    CustomerLoginResult.WRONG_PASSWORD: "Invalid email or password",
    CustomerLoginResult.NOT_REGISTERED: "Account not found",
    CustomerLoginResult.NOT_ACTIVE: "Account is not active",
    CustomerLoginResult.DELETED: "Account has been deleted",
    CustomerLoginResult.REQUIRES_TWO_FACTOR: "Two-factor authentication required",
}

REGISTRATION_MESSAGES = {
    UserRegistrationType.EMAIL_VALIDATION: "Registration successful. Please check your email to activate your account.",
    UserRegistrationType.ADMIN_APPROVAL: "Registration successful. Your account is pending approval.",
}


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


@router.post("/login", dependencies=[Depends(login_rate_limiter)])
async def login(
    request: Optional[LoginRequest] = Body(None),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Check customer credentials and issue a customer token"""
    if request is None:
        raise _bad_request("Invalid request")
    if not request.email.strip():
        raise _bad_request("Email is required")
    if not request.password.strip():
        raise _bad_request("Password is required")

    password = decode_password(request.password)

    result = await store.login_customer(request.email, password)
    if result != CustomerLoginResult.SUCCESSFUL:
        logger.info("Mobile login rejected", email=request.email, result=result.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=LOGIN_ERRORS.get(result, "Login failed"),
        )

    customer = await store.get_customer_by_email(request.email)
    if customer is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Customer not found")

    token = JwtTokenGenerator(settings.frontend_api).generate_token(
        {
            "Email": customer.email,
            "CustomerId": customer.id,
            "Guid": customer.customer_guid,
        }
    )

    return {
        "token": token,
        "customerId": customer.id,
        "email": customer.email,
        "firstName": customer.first_name,
        "lastName": customer.last_name,
    }


@router.post("/register", dependencies=[Depends(login_rate_limiter)])
async def register(
    request: Optional[RegisterRequest] = Body(None),
    store: BaseStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Create a customer account"""
    if request is None:
        raise _bad_request("Invalid request")
    if not request.email.strip():
        raise _bad_request("Email is required")
    if not request.password.strip():
        raise _bad_request("Password is required")

    registration_type = settings.user_registration_type
    if registration_type == UserRegistrationType.DISABLED:
        raise _bad_request("Registration is disabled")

    password = decode_password(request.password)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise _bad_request(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if await store.get_customer_by_email(request.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This email is already registered")

    try:
        customer = await store.register_customer(
            email=request.email,
            password=password,
            first_name=request.first_name or None,
            last_name=request.last_name or None,
            approved=registration_type == UserRegistrationType.STANDARD,
        )
    except ValueError as e:
        raise _bad_request(str(e))

    return {
        "success": True,
        "message": REGISTRATION_MESSAGES.get(registration_type, "Registration successful. You can now log in."),
        "customerId": customer.id,
        "email": customer.email,
        "requiresActivation": registration_type == UserRegistrationType.EMAIL_VALIDATION,
        "requiresApproval": registration_type == UserRegistrationType.ADMIN_APPROVAL,
    }


@router.get("/check-email")
async def check_email(
    email: str = Query(""),
    store: BaseStore = Depends(get_store),
):
    if not email.strip():
        raise _bad_request("Email is required")

    existing = await store.get_customer_by_email(email)
    return {"available": existing is None}
