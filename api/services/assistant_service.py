"""
Assistant Service Wiring

Builds the background coordinator and its collaborators from settings and
exposes it to routes through dependency injection. The coordinator lives
on ``app.state`` so its lifetime is the lifetime of the application.
"""

import logging

from fastapi import Request

from atom_mail.config.settings import Settings
from atom_mail.email_processing.analyzers.email_analyzer import EmailAnalyzer
from atom_mail.integrations.openai.client import ChatCompletionClient
from atom_mail.orchestration.background import BackgroundService
from atom_mail.storage.encryption import SecurityManager
from atom_mail.storage.key_value import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)


def build_background_service(settings: Settings, store: KeyValueStore = None) -> BackgroundService:
    """
    Construct a coordinator with one analyzer and one security manager.

    Args:
        settings: Validated settings
        store: Key-value store, defaults to a JSON file at STORAGE_PATH

    Returns:
        Uninitialized BackgroundService
    """
    client = ChatCompletionClient(
        api_key=settings.OPENAI_API_KEY.get_secret_value(),
        api_endpoint=settings.OPENAI_API_ENDPOINT,
        timeout=settings.OPENAI_TIMEOUT_SECONDS
    )
    analyzer = EmailAnalyzer(client, model=settings.OPENAI_MODEL)
    security_manager = SecurityManager(settings.ENCRYPTION_KEY.get_secret_value())

    if store is None:
        store = JsonFileStore(settings.STORAGE_PATH)
        logger.info(f"Using key-value store at {settings.STORAGE_PATH}")

    return BackgroundService(analyzer, security_manager, store)


def get_background_service(request: Request) -> BackgroundService:
    """Provide the application's coordinator for dependency injection."""
    return request.app.state.background_service
