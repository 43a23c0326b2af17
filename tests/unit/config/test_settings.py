"""
Unit tests for configuration loading.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from atom_mail.config.analyzer_config import ANALYZER_CONFIG
from atom_mail.config.settings import (
    DEVELOPMENT_ENCRYPTION_KEY,
    EnvironmentType,
    Settings,
    get_settings,
)

VALID_KEY = "a-sufficiently-long-passphrase"


def test_defaults():
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None, ENCRYPTION_KEY=VALID_KEY)

    assert settings.ENVIRONMENT == EnvironmentType.DEVELOPMENT
    assert settings.OPENAI_API_KEY.get_secret_value() == ""
    assert settings.OPENAI_API_ENDPOINT == "https://api.openai.com/v1/chat/completions"
    assert settings.OPENAI_MODEL == "gpt-4"
    assert settings.OPENAI_TIMEOUT_SECONDS == 30
    assert settings.CORS_ORIGINS == ["*"]
    assert settings.CORS_METHODS == ["GET", "POST", "OPTIONS"]


def test_values_from_environment():
    env = {
        "ENVIRONMENT": "production",
        "ENCRYPTION_KEY": VALID_KEY,
        "OPENAI_API_KEY": "sk-test",
        "CORS_ORIGINS": "chrome-extension://abc, https://mail.example.com",
        "OPENAI_TIMEOUT_SECONDS": "12.5"
    }
    with patch.dict(os.environ, env, clear=True):
        settings = Settings(_env_file=None)

    assert settings.ENVIRONMENT == EnvironmentType.PRODUCTION
    assert settings.OPENAI_API_KEY.get_secret_value() == "sk-test"
    assert settings.CORS_ORIGINS == ["chrome-extension://abc", "https://mail.example.com"]
    assert settings.OPENAI_TIMEOUT_SECONDS == 12.5


def test_secrets_are_masked():
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None, ENCRYPTION_KEY=VALID_KEY, OPENAI_API_KEY="sk-secret")

    assert "sk-secret" not in repr(settings)
    assert VALID_KEY not in repr(settings)


def test_short_encryption_key_rejected():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENCRYPTION_KEY="short")


def test_missing_encryption_key_rejected():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


def test_non_positive_timeout_rejected():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENCRYPTION_KEY=VALID_KEY, OPENAI_TIMEOUT_SECONDS=0)


class TestGetSettings:
    def test_development_fallback_key(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "development"}, clear=True), \
                patch.dict(Settings.model_config, {"env_file": None}):
            settings = get_settings()

        assert settings.ENCRYPTION_KEY.get_secret_value() == DEVELOPMENT_ENCRYPTION_KEY

    def test_production_requires_key(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}, clear=True), \
                patch.dict(Settings.model_config, {"env_file": None}):
            with pytest.raises(ValidationError):
                get_settings()


def test_api_key_comes_only_from_settings():
    assert set(ANALYZER_CONFIG["completion_endpoint"]) == {"api_endpoint", "timeout"}
