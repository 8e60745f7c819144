"""
Configuration management
Reads environment variables into pydantic models for type safety
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import load_dotenv
from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from storelink.models.customer import UserRegistrationType

# Load .env explicitly so sub-configs read the same values
load_dotenv(dotenv_path=".env", override=False)


class JwtConfig(BaseSettings):
    """Shared JWT settings"""

    enabled: bool = Field(default=True)
    secret_key: str
    expiry_in_minutes: int = Field(default=1440, ge=1)
    validate_issuer: bool = Field(default=False)
    valid_issuer: Optional[str] = Field(default=None)
    validate_audience: bool = Field(default=False)
    valid_audience: Optional[str] = Field(default=None)


class BackendApiConfig(JwtConfig):
    """Admin (back office) token settings"""

    secret_key: str = Field(default="change-me-backend-api-secret-use-a-long-random-value")

    model_config = ConfigDict(env_prefix="BACKEND_API_", extra="ignore")


class FrontendApiConfig(JwtConfig):
    """Customer token settings"""

    secret_key: str = Field(default="change-me-frontend-api-secret-use-a-long-random-value")

    model_config = ConfigDict(env_prefix="FRONTEND_API_", extra="ignore")


class RicardoConfig(BaseSettings):
    """ricardo.ch integration settings"""

    use_sandbox: bool = Field(default=True)
    partner_id: Optional[str] = Field(default=None)
    partner_key: Optional[str] = Field(default=None)
    account_username: Optional[str] = Field(default=None)
    account_password: Optional[str] = Field(default=None)

    enable_stock_sync: bool = Field(default=False)
    stock_sync_interval_minutes: int = Field(default=60, ge=15, le=1440)

    default_article_duration_days: int = Field(default=7, ge=1, le=10)
    default_category_id: int = Field(default=0)
    price_markup_percentage: float = Field(default=0, ge=0, le=100)

    enable_logging: bool = Field(default=True)
    timeout: float = Field(default=30.0)

    model_config = ConfigDict(env_prefix="RICARDO_", extra="ignore")

    def has_credentials(self) -> bool:
        """All four credentials are set"""
        return all(
            value and value.strip()
            for value in (
                self.partner_id,
                self.partner_key,
                self.account_username,
                self.account_password,
            )
        )


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    env: Literal["development", "staging", "production", "test"] = Field(default="development")
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    # HTTP server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Integration API key (X-API-Key)
    api_key: str = Field(default="default-api-key-change-me", alias="STORELINK_API_KEY")

    # Store information for the mobile app
    store_name: str = Field(default="La Baraque Shop")
    store_primary_color: str = Field(default="#2196F3")
    store_secondary_color: str = Field(default="#03DAC6")
    store_currency: str = Field(default="CHF")
    store_language: str = Field(default="fr-FR")
    store_id: str = Field(default="default")

    # Scheduler
    scheduler_enabled: bool = Field(default=False)
    scheduler_timezone: str = Field(default="Europe/Zurich")

    # Customer registration policy
    user_registration_type: UserRegistrationType = Field(default=UserRegistrationType.STANDARD)

    # Seed the in-memory store with demo data on startup
    seed_demo_data: bool = Field(default=False)

    # Sub-configs (lazy)
    _backend_api: Optional[BackendApiConfig] = None
    _frontend_api: Optional[FrontendApiConfig] = None
    _ricardo: Optional[RicardoConfig] = None

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def create_log_path(cls, v):
        if v:
            path = Path(v)
            path.parent.mkdir(parents=True, exist_ok=True)
            return path
        return v

    @property
    def backend_api(self) -> BackendApiConfig:
        """Admin token settings (lazy loading)"""
        if self._backend_api is None:
            self._backend_api = BackendApiConfig()
        return self._backend_api

    @property
    def frontend_api(self) -> FrontendApiConfig:
        """Customer token settings (lazy loading)"""
        if self._frontend_api is None:
            self._frontend_api = FrontendApiConfig()
        return self._frontend_api

    @property
    def ricardo(self) -> RicardoConfig:
        """ricardo.ch settings (lazy loading)"""
        if self._ricardo is None:
            self._ricardo = RicardoConfig()
        return self._ricardo

    def is_production(self) -> bool:
        """Production environment"""
        return self.env == "production"

    def is_development(self) -> bool:
        """Development environment"""
        return self.env == "development"


@lru_cache()
def get_settings() -> Settings:
    """Settings singleton"""
    return Settings()


# Global settings instance
settings = get_settings()
