"""
Token issuance and validation
"""

import base64
import binascii
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from storelink.config import JwtConfig
from storelink.monitoring import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"


class JwtTokenGenerator:
    """Signs HS256 tokens with the claims given"""

    def __init__(self, config: JwtConfig):
        self.config = config

    def generate_token(self, claims: Dict[str, str], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a signed token

        Args:
            claims: Claims copied into the payload
            expires_delta: Lifetime (defaults to the configured minutes)

        Returns:
            Encoded JWT
        """
        now = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=self.config.expiry_in_minutes)

        payload: Dict[str, Any] = dict(claims)
        payload.update({"iat": now, "nbf": now, "exp": now + lifetime})

        if self.config.validate_issuer and self.config.valid_issuer:
            payload["iss"] = self.config.valid_issuer
        if self.config.validate_audience and self.config.valid_audience:
            payload["aud"] = self.config.valid_audience

        return jwt.encode(payload, self.config.secret_key, algorithm=ALGORITHM)


def decode_token(token: str, config: JwtConfig) -> Dict[str, Any]:
    """
    Decode and validate a token

    Raises:
        jwt.InvalidTokenError: Bad signature, expired, wrong issuer or audience
    """
    options = {"verify_aud": config.validate_audience and bool(config.valid_audience)}
    kwargs: Dict[str, Any] = {}
    if config.validate_issuer and config.valid_issuer:
        kwargs["issuer"] = config.valid_issuer
    if options["verify_aud"]:
        kwargs["audience"] = config.valid_audience

    return jwt.decode(token, config.secret_key, algorithms=[ALGORITHM], options=options, **kwargs)


def decode_password(value: str) -> str:
    """Base64 decoded password, or the value unchanged when it is not base64"""
    try:
        decoded = base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return value
    return decoded or value


def mask_secret(value: Optional[str], visible: int = 10) -> Optional[str]:
    """First characters of a secret followed by an ellipsis"""
    if value is None:
        return None
    return f"{value[:visible]}..."
