"""
Token and password helper tests
"""

import base64
from datetime import timedelta

import jwt
import pytest

from storelink.api.security import JwtTokenGenerator, decode_password, decode_token, mask_secret
from storelink.config import BackendApiConfig, FrontendApiConfig

SECRET = "unit-test-secret-key-0123456789abcdef"


@pytest.fixture
def config() -> BackendApiConfig:
    return BackendApiConfig(secret_key=SECRET, expiry_in_minutes=30)


class TestJwtTokenGenerator:
    def test_claims_and_expiry(self, config):
        token = JwtTokenGenerator(config).generate_token({"Email": "a@example.com", "CustomerId": "c-1"})

        payload = decode_token(token, config)

        assert payload["Email"] == "a@example.com"
        assert payload["CustomerId"] == "c-1"
        assert payload["exp"] - payload["iat"] == 30 * 60

    def test_expired_token(self, config):
        token = JwtTokenGenerator(config).generate_token({"Email": "a@example.com"}, expires_delta=timedelta(seconds=-1))

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token, config)

    def test_other_secret_is_rejected(self, config):
        token = JwtTokenGenerator(config).generate_token({"Email": "a@example.com"})

        with pytest.raises(jwt.InvalidSignatureError):
            decode_token(token, BackendApiConfig(secret_key="another-secret-key-0123456789abcdef"))

    def test_customer_token_is_not_a_backend_token(self, monkeypatch):
        monkeypatch.delenv("BACKEND_API_SECRET_KEY", raising=False)
        monkeypatch.delenv("FRONTEND_API_SECRET_KEY", raising=False)
        token = JwtTokenGenerator(FrontendApiConfig()).generate_token({"Email": "a@example.com"})

        with pytest.raises(jwt.InvalidSignatureError):
            decode_token(token, BackendApiConfig())

    def test_issuer_and_audience(self):
        config = BackendApiConfig(
            secret_key=SECRET,
            validate_issuer=True,
            valid_issuer="storelink",
            validate_audience=True,
            valid_audience="back-office",
        )
        token = JwtTokenGenerator(config).generate_token({"Email": "a@example.com"})

        assert decode_token(token, config)["iss"] == "storelink"

        config.valid_audience = "mobile"
        with pytest.raises(jwt.InvalidAudienceError):
            decode_token(token, config)


class TestDecodePassword:
    def test_base64(self):
        assert decode_password(base64.b64encode("pässword".encode("utf-8")).decode("ascii")) == "pässword"

    @pytest.mark.parametrize("value", ["plain text", "abc", ""])
    def test_not_base64_is_kept(self, value):
        assert decode_password(value) == value


def test_mask_secret():
    assert mask_secret("0123456789abcdef") == "0123456789..."
    assert mask_secret("short") == "short..."
    assert mask_secret(None) is None
