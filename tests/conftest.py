"""
Shared fixtures for the assistant test suite.

No fixture touches the network: the completion client is always replaced
with an AsyncMock before it is used.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from atom_mail.email_processing.analyzers.email_analyzer import EmailAnalyzer
from atom_mail.email_processing.models import Analysis, Response, Sentiment
from atom_mail.integrations.openai.client import ChatCompletionClient
from atom_mail.orchestration.background import BackgroundService
from atom_mail.storage.encryption import SecurityManager
from atom_mail.storage.key_value import InMemoryStore

TEST_PASSPHRASE = "unit-test-passphrase-0123456789"


def completion(content):
    """Build a chat-completion response body with a single choice."""
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def sample_email_data():
    """Wire form of a captured email."""
    return {
        "to": "team@example.com",
        "subject": "Q3 budget review",
        "content": "Hi team, the budget review went great. Please send your reports.",
        "sender": "user@example.com",
        "recipients": ["team@example.com"],
        "timestamp": "2024-05-01T10:15:00.000Z"
    }


@pytest.fixture
def completion_client():
    """Completion client whose network call is replaced by an AsyncMock."""
    client = ChatCompletionClient(api_key="test-api-key")
    client.create_completion = AsyncMock(return_value=completion(""))
    return client


@pytest.fixture
def email_analyzer(completion_client):
    return EmailAnalyzer(completion_client)


@pytest.fixture
def security_manager():
    return SecurityManager(TEST_PASSPHRASE)


@pytest.fixture
def memory_store():
    return InMemoryStore()


@pytest.fixture
def mock_analyzer():
    """Analyzer double returning fixed results."""
    analyzer = MagicMock(spec=EmailAnalyzer)
    analyzer.analyze_email = AsyncMock(return_value=Analysis(
        sentiment=Sentiment.POSITIVE,
        key_points=["Budget approved", "Recommend a follow-up call"],
        suggested_actions=["Recommend a follow-up call"]
    ))
    analyzer.generate_response = AsyncMock(return_value=Response(
        content="Thanks, I will follow up next week.",
        tone="formal",
        suggested_edits=[]
    ))
    return analyzer


@pytest.fixture
def background_service(mock_analyzer, security_manager, memory_store):
    return BackgroundService(mock_analyzer, security_manager, memory_store)
