"""
Shared data models for email assistance.

All models serialize with camelCase field names so they can cross the
extension message boundary unchanged; Python code uses the snake_case
attribute names.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Sentiment(str, Enum):
    """Overall sentiment detected in a completion."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class PrivacyLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SuggestionType(str, Enum):
    RESPONSE = "response"
    ACTION = "action"
    IMPROVEMENT = "improvement"


class AssistantModel(BaseModel):
    """Base model accepting both camelCase and snake_case field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump to the camelCase JSON-compatible form used in messages."""
        return self.model_dump(by_alias=True, mode="json")


class Attachment(AssistantModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    size: int = Field(..., ge=0)
    url: str


class Email(AssistantModel):
    """
    Email captured from the compose view.

    Immutable once captured; ``timestamp`` is the ISO-8601 capture time.
    """
    model_config = ConfigDict(frozen=True)

    to: str
    subject: str
    content: str
    sender: str
    recipients: List[str] = Field(default_factory=list)
    timestamp: str
    attachments: Optional[List[Attachment]] = None


class Analysis(AssistantModel):
    """Structured insights extracted from an analysis completion."""
    sentiment: Sentiment
    key_points: List[str] = Field(default_factory=list)
    suggested_actions: List[str] = Field(default_factory=list)


class UserPreferences(AssistantModel):
    """Extension settings, persisted only in encrypted form."""
    theme: Theme = Theme.LIGHT
    notifications: bool = True
    ai_enabled: bool = True
    privacy_level: PrivacyLevel = PrivacyLevel.HIGH


class EmailContext(AssistantModel):
    """Input to reply generation. ``tone`` is free text supplied by the user."""
    summary: str
    tone: str
    previous_emails: Optional[List[Email]] = None
    user_preferences: Optional[UserPreferences] = None


class Response(AssistantModel):
    """Generated reply. ``suggested_edits`` is reserved and always empty."""
    content: str
    tone: str
    suggested_edits: List[str] = Field(default_factory=list)


class EncryptedData(AssistantModel):
    """
    Self-describing encrypted record.

    ``data`` is base64 ciphertext; ``iv`` and ``salt`` are hex and are
    generated fresh for every encryption.
    """
    model_config = ConfigDict(frozen=True)

    data: str
    iv: str
    salt: str


class Suggestion(AssistantModel):
    id: str
    type: SuggestionType
    content: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    context: str


class ExtensionState(AssistantModel):
    """Coordinator state reported to the popup."""
    is_authenticated: bool = False
    current_email: Optional[Email] = None
    suggestions: List[Suggestion] = Field(default_factory=list)
    settings: UserPreferences = Field(default_factory=UserPreferences)
