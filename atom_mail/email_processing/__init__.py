"""
Email processing package initialization.
"""

from .models import (
    Analysis,
    Attachment,
    Email,
    EmailContext,
    EncryptedData,
    ExtensionState,
    PrivacyLevel,
    Response,
    Sentiment,
    Suggestion,
    SuggestionType,
    Theme,
    UserPreferences
)
from .analyzers.email_analyzer import EmailAnalyzer

__all__ = [
    'Analysis',
    'Attachment',
    'Email',
    'EmailContext',
    'EncryptedData',
    'ExtensionState',
    'PrivacyLevel',
    'Response',
    'Sentiment',
    'Suggestion',
    'SuggestionType',
    'Theme',
    'UserPreferences',
    'EmailAnalyzer'
]
