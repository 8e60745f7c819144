"""
Shared pytest fixtures
"""

import asyncio
import os

import pytest
import respx
from fastapi.testclient import TestClient

os.environ.setdefault("ENV", "test")

from storelink.api.dependencies import get_app_settings, login_rate_limiter
from storelink.api.main import create_app
from storelink.api.security import JwtTokenGenerator
from storelink.config import BackendApiConfig, FrontendApiConfig, RicardoConfig, Settings
from storelink.monitoring import global_metrics
from storelink.storage import MemoryStore, seed_demo_data
from storelink.storage.demo import ADMIN_EMAIL, CUSTOMER_EMAIL

API_KEY = "test-api-key"
RICARDO_SANDBOX = "https://ws.test.ricardo.ch/ricardoapi/"
# 2100-01-01T00:00:00Z
FUTURE_WCF_DATE = "/Date(4102444800000)/"


@pytest.fixture
def ricardo_config() -> RicardoConfig:
    return RicardoConfig(
        use_sandbox=True,
        partner_id="partner-1",
        partner_key="partner-key",
        account_username="seller",
        account_password="seller-password",
        price_markup_percentage=10,
        default_category_id=38000,
        timeout=5.0,
    )


@pytest.fixture
def test_settings(ricardo_config) -> Settings:
    """Settings isolated from the environment"""
    settings = Settings(env="test", api_key=API_KEY, store_name="Test Shop", store_currency="CHF")
    settings._backend_api = BackendApiConfig(secret_key="backend-secret-key-for-tests-0123456789", expiry_in_minutes=60)
    settings._frontend_api = FrontendApiConfig(secret_key="frontend-secret-key-for-tests-0123456789", expiry_in_minutes=60)
    settings._ricardo = ricardo_config
    return settings


@pytest.fixture
def store() -> MemoryStore:
    """In-memory store with the demo catalog"""
    store = MemoryStore()
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(seed_demo_data(store))
    finally:
        loop.close()
    return store


@pytest.fixture
def app(store, test_settings):
    app = create_app()
    app.state.store = store
    app.dependency_overrides[get_app_settings] = lambda: test_settings
    return app


@pytest.fixture
def client(app) -> TestClient:
    login_rate_limiter.cache.clear()
    global_metrics.reset()
    return TestClient(app)


@pytest.fixture
def admin_headers(test_settings) -> dict:
    token = JwtTokenGenerator(test_settings.backend_api).generate_token(
        {"Email": ADMIN_EMAIL, "CustomerId": "cust-admin"}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(test_settings) -> dict:
    token = JwtTokenGenerator(test_settings.frontend_api).generate_token(
        {"Email": CUSTOMER_EMAIL, "CustomerId": "cust-1"}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_backend_headers(test_settings) -> dict:
    """Backend token of a customer without back office permissions"""
    token = JwtTokenGenerator(test_settings.backend_api).generate_token(
        {"Email": CUSTOMER_EMAIL, "CustomerId": "cust-1"}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ricardo_api():
    """ricardo.ch sandbox mocked with respx, logins succeed"""
    with respx.mock(assert_all_called=False) as router:
        router.post(RICARDO_SANDBOX + "SecurityService.json", name="security").respond(
            json={
                "jsonrpc": "2.0",
                "id": "1",
                "result": {"TokenCredential": "token-123", "TokenExpirationDate": FUTURE_WCF_DATE},
            }
        )
        router.post(RICARDO_SANDBOX + "ArticlesService.json", name="articles").respond(status_code=500)
        yield router
