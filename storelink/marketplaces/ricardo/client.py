"""
ricardo.ch API client
JSON-RPC 2.0 over HTTPS with token credential authentication
"""

import time
import uuid
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from storelink.config import RicardoConfig
from storelink.monitoring import get_logger, global_metrics

from . import defaults
from .models import (
    CloseArticleRequest,
    CloseArticleResponse,
    InsertArticleRequest,
    InsertArticleResponse,
    RicardoTokenCredential,
    TokenCredentialLoginRequest,
    UpdateArticleQuantityRequest,
    UpdateArticleQuantityResponse,
)

logger = get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class RicardoApiError(Exception):
    """HTTP or JSON-RPC level failure"""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class RicardoApiClient:
    """ricardo.ch API client"""

    def __init__(self, config: RicardoConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.base_url = defaults.base_url(config.use_sandbox)

        # HTTP client
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=config.timeout)
        self._token_credential: Optional[RicardoTokenCredential] = None

    @property
    def token_credential(self) -> Optional[RicardoTokenCredential]:
        return self._token_credential

    def is_token_expired(self) -> bool:
        """Missing token or missing, unparseable or past expiration date"""
        if self._token_credential is None or not self._token_credential.token_credential:
            return True
        return self._token_credential.is_expired()

    async def authenticate(self) -> bool:
        """
        Log in with the partner and account credentials

        Returns:
            True when a token credential was received
        """
        request = TokenCredentialLoginRequest(
            partner_key=self.config.partner_key,
            partner_partner_id=self.config.partner_id,
            customer_username=self.config.account_username,
            customer_password=self.config.account_password,
        )

        try:
            response = await self._post(
                defaults.SECURITY_SERVICE,
                "TokenCredentialLogin",
                request.to_payload(),
                RicardoTokenCredential,
                authenticate_first=False,
            )
        except (RicardoApiError, httpx.HTTPError, ValidationError) as e:
            logger.error("Error authenticating with ricardo.ch", error=str(e))
            return False

        if response is not None and response.token_credential:
            self._token_credential = response
            global_metrics.increment("ricardo.authentications")
            logger.info(
                "Successfully authenticated with ricardo.ch",
                expires=response.token_expiration_date,
            )
            return True

        logger.error("Failed to authenticate with ricardo.ch: No token received")
        return False

    async def insert_article(self, request: InsertArticleRequest) -> InsertArticleResponse:
        """Insert a new article"""
        try:
            response = await self._post(
                defaults.ARTICLES_SERVICE,
                "InsertArticle",
                request.to_payload(),
                InsertArticleResponse,
            )
        except (RicardoApiError, httpx.HTTPError, ValidationError) as e:
            logger.error("Error inserting article on ricardo.ch", error=str(e))
            return InsertArticleResponse(error_message=str(e))

        return response or InsertArticleResponse(error_message="Empty response")

    async def update_article_quantity(self, article_id: int, new_quantity: int) -> UpdateArticleQuantityResponse:
        """Update the available quantity of an article"""
        request = UpdateArticleQuantityRequest(article_id=article_id, new_quantity=new_quantity)

        try:
            response = await self._post(
                defaults.ARTICLES_SERVICE,
                "UpdateArticleQuantity",
                request.to_payload(),
                UpdateArticleQuantityResponse,
            )
        except (RicardoApiError, httpx.HTTPError, ValidationError) as e:
            logger.error("Error updating article quantity on ricardo.ch", article_id=article_id, error=str(e))
            return UpdateArticleQuantityResponse(success=False, error_message=str(e))

        return response or UpdateArticleQuantityResponse(success=False, error_message="Empty response")

    async def close_article(self, article_id: int) -> CloseArticleResponse:
        """Close an article"""
        request = CloseArticleRequest(article_id=article_id)

        try:
            response = await self._post(
                defaults.ARTICLES_SERVICE,
                "CloseArticle",
                request.to_payload(),
                CloseArticleResponse,
            )
        except (RicardoApiError, httpx.HTTPError, ValidationError) as e:
            logger.error("Error closing article on ricardo.ch", article_id=article_id, error=str(e))
            return CloseArticleResponse(success=False, error_message=str(e))

        return response or CloseArticleResponse(success=False, error_message="Empty response")

    async def _post(
        self,
        service: str,
        method: str,
        payload: Dict[str, Any],
        response_model: Type[ResponseT],
        authenticate_first: bool = True,
    ) -> Optional[ResponseT]:
        """
        Call a JSON-RPC method

        Args:
            service: Service endpoint relative to the base URL
            method: JSON-RPC method name
            payload: Single positional parameter
            response_model: Model the result is parsed into
            authenticate_first: Log in first when the token is missing or expired

        Returns:
            Parsed result, None for a null result

        Raises:
            RicardoApiError: Authentication failure, non-2xx status or JSON-RPC error
        """
        if authenticate_first and self.is_token_expired():
            if not await self.authenticate():
                raise RicardoApiError("Failed to authenticate with ricardo.ch")

        body = {
            "jsonrpc": "2.0",
            "method": method,
            "params": [payload],
            "id": str(uuid.uuid4()),
        }

        headers = {"Content-Type": "application/json"}
        if self._token_credential is not None and self._token_credential.token_credential:
            headers[defaults.TOKEN_HEADER] = self._token_credential.token_credential

        if self.config.enable_logging:
            logger.debug("ricardo.ch API call", service=service, method=method)

        global_metrics.increment("ricardo.requests")
        start = time.perf_counter()
        try:
            response = await self.client.post(service, json=body, headers=headers)
        finally:
            global_metrics.record("ricardo.latency", time.perf_counter() - start)

        if not response.is_success:
            global_metrics.increment("ricardo.errors")
            logger.error(
                "ricardo.ch API error",
                status_code=response.status_code,
                content=response.text,
            )
            raise RicardoApiError(
                f"ricardo.ch API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            global_metrics.increment("ricardo.errors")
            raise RicardoApiError("ricardo.ch API error: invalid JSON response", status_code=response.status_code)

        error = data.get("error") if isinstance(data, dict) else None
        if error:
            global_metrics.increment("ricardo.errors")
            message = error.get("message") if isinstance(error, dict) else str(error)
            code = error.get("code") if isinstance(error, dict) else None
            logger.error("ricardo.ch API error", code=code, error=message)
            raise RicardoApiError(f"ricardo.ch API error: {message}", code=code)

        result = data.get("result") if isinstance(data, dict) else None
        if result is None:
            return None
        return response_model.model_validate(result)

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
