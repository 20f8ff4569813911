"""Configuration management for the unified gateway layer."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MerchantESolutionsSettings(BaseSettings):
    """Merchant e-Solutions (Trident API) credentials."""

    login: str = Field(default="", description="Profile ID")
    password: str = Field(default="", description="Profile key")


class PlexoSettings(BaseSettings):
    """Plexo credentials."""

    client_id: str = Field(default="", description="Plexo client ID")
    api_key: str = Field(default="", description="Plexo API key")
    merchant_id: str | None = Field(default=None, description="Default merchant ID")


class TransportSettings(BaseSettings):
    """HTTP transport settings."""

    timeout_seconds: float = Field(default=30.0, description="Request timeout")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = Field(default="development", description="Environment name")
    test_mode: bool = Field(default=True, description="Route calls to provider sandboxes")
    default_gateway: str = Field(default="plexo", description="Gateway used when none is named")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format_json: bool = Field(default=True, description="Render logs as JSON")

    transport: TransportSettings = Field(default_factory=TransportSettings)

    # Providers
    merchant_e_solutions: MerchantESolutionsSettings = Field(
        default_factory=MerchantESolutionsSettings
    )
    plexo: PlexoSettings = Field(default_factory=PlexoSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
