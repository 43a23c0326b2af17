"""
Assistant Configuration Management

Provides centralized configuration handling with environment-aware settings,
secret retrieval for the completion API key and the preference passphrase,
and validation of the values the extension backend depends on.

Design Considerations:
- Environment-specific configuration profiles
- Secrets held as SecretStr so they never appear in reprs or logs
- Default values with proper documentation
"""

import os
from enum import Enum

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

from atom_mail.config.analyzer_config import ANALYZER_CONFIG

DEVELOPMENT_ENCRYPTION_KEY = "insecure_development_passphrase_do_not_use_in_production"


class EnvironmentType(str, Enum):
    """Valid environment types for configuration context."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Assistant configuration settings with environment-specific defaults.

    Loads from environment variables and an optional ``.env`` file. The
    completion API key may be empty (requests will then be rejected by the
    remote service); the encryption passphrase is mandatory.
    """
    # Environment Configuration
    ENVIRONMENT: EnvironmentType = Field(
        default=EnvironmentType.DEVELOPMENT,
        description="Runtime environment context"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    # Completion Service
    OPENAI_API_KEY: SecretStr = Field(
        default=SecretStr(""),
        description="Bearer token for the chat-completion endpoint"
    )
    OPENAI_API_ENDPOINT: str = Field(
        default=ANALYZER_CONFIG["completion_endpoint"]["api_endpoint"],
        description="Chat-completion endpoint URL"
    )
    OPENAI_MODEL: str = Field(
        default=ANALYZER_CONFIG["email_analysis"]["model"]["name"],
        description="Model identifier sent with every completion request"
    )
    OPENAI_TIMEOUT_SECONDS: float = Field(
        default=ANALYZER_CONFIG["completion_endpoint"]["timeout"],
        gt=0,
        description="Timeout applied to each completion request"
    )

    # Preference Storage
    ENCRYPTION_KEY: SecretStr = Field(
        ...,
        description="Passphrase used to derive preference encryption keys"
    )
    STORAGE_PATH: str = Field(
        default="data/extension_storage.json",
        description="Location of the local key-value store"
    )

    # API Settings
    API_TITLE: str = Field(
        default="Atom Mail Assistant",
        description="API title for documentation"
    )
    API_DESCRIPTION: str = Field(
        default="Background coordinator for AI-assisted email composition",
        description="API description for documentation"
    )
    API_VERSION: str = Field(
        default="1.0.0",
        description="API version"
    )

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed origins for CORS"
    )
    CORS_METHODS: str = Field(
        default="GET,POST,OPTIONS",
        description="Comma-separated list of allowed methods for CORS"
    )

    @field_validator("CORS_ORIGINS")
    @classmethod
    def parse_cors_origins(cls, value: str) -> list:
        """Parse comma-separated CORS origins into list."""
        if value == "*":
            return ["*"]
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @field_validator("CORS_METHODS")
    @classmethod
    def parse_cors_methods(cls, value: str) -> list:
        """Parse comma-separated CORS methods into list."""
        return [method.strip() for method in value.split(",") if method.strip()]

    @field_validator("ENCRYPTION_KEY")
    @classmethod
    def validate_encryption_key(cls, value: SecretStr) -> SecretStr:
        """Reject passphrases too short to be worth deriving a key from."""
        if len(value.get_secret_value()) < 16:
            raise ValueError("Encryption key must be at least 16 characters long")
        return value

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
        "validate_default": True
    }


def get_settings() -> Settings:
    """
    Retrieve validated settings with environment-specific configuration.

    Returns:
        Validated settings object

    Raises:
        ValidationError: If configuration fails validation
    """
    # For development/testing, fall back to a fixed passphrase if not provided
    env = os.getenv("ENVIRONMENT", "development")
    if env in ["development", "testing"]:
        os.environ.setdefault("ENCRYPTION_KEY", DEVELOPMENT_ENCRYPTION_KEY)

    return Settings()
