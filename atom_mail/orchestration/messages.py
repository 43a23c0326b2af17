"""
Extension message contract.

Messages exchanged between the compose view, the popup and the background
coordinator. Transport-agnostic: the same models travel over the HTTP API
and in-process calls.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    # Inbound
    ANALYZE_EMAIL = "ANALYZE_EMAIL"
    GENERATE_RESPONSE = "GENERATE_RESPONSE"
    UPDATE_PREFERENCES = "UPDATE_PREFERENCES"
    GET_STATE = "GET_STATE"

    # Outbound
    ANALYSIS_COMPLETE = "ANALYSIS_COMPLETE"
    ANALYSIS_ERROR = "ANALYSIS_ERROR"
    RESPONSE_GENERATED = "RESPONSE_GENERATED"
    RESPONSE_ERROR = "RESPONSE_ERROR"
    PREFERENCES_UPDATED = "PREFERENCES_UPDATED"
    PREFERENCES_ERROR = "PREFERENCES_ERROR"


class ExtensionMessage(BaseModel):
    """A single message with an optional payload or error text."""
    type: str = Field(..., description="Message type")
    data: Optional[Any] = Field(default=None, description="Message payload")
    error: Optional[str] = Field(default=None, description="Error text for *_ERROR messages")

    @classmethod
    def failure(cls, message_type: MessageType, error: Exception) -> "ExtensionMessage":
        return cls(type=message_type.value, error=str(error) or "Unknown error occurred")
