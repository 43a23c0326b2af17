"""
Popup Controller

Settings popup logic without the markup: loads the coordinator state,
edits settings locally and saves them back through the message channel.
"""

import logging
from typing import Any, Awaitable, Callable, NamedTuple, Optional

from pydantic import ValidationError

from atom_mail.email_processing.models import ExtensionState, UserPreferences
from atom_mail.orchestration.messages import ExtensionMessage, MessageType

logger = logging.getLogger(__name__)

SendMessage = Callable[[ExtensionMessage], Awaitable[Optional[ExtensionMessage]]]

EDITABLE_SETTINGS = ('theme', 'notifications', 'ai_enabled', 'privacy_level')


class Notification(NamedTuple):
    message: str
    kind: str = "success"


class PopupController:
    """Popup state holder talking to the background coordinator."""

    def __init__(self, send_message: SendMessage):
        self.send_message = send_message
        self.state = ExtensionState()

    async def load_state(self) -> ExtensionState:
        """Fetch the coordinator state; keeps the current state on failure."""
        try:
            reply = await self.send_message(ExtensionMessage(type=MessageType.GET_STATE.value))
            if reply is None:
                raise ValueError("No reply to state request")
            self.state = ExtensionState.model_validate(reply.data)
        except (ValueError, ValidationError) as e:
            logger.error(f"Error loading state: {str(e)}")
        return self.state

    def update_setting(self, name: str, value: Any) -> None:
        """
        Change a single setting locally; nothing is saved until save_settings.

        Raises:
            KeyError: If the setting does not exist
            ValidationError: If the value is not allowed for the setting
        """
        if name not in EDITABLE_SETTINGS:
            raise KeyError(f"Unknown setting: {name}")
        self.state.settings = UserPreferences.model_validate(
            {**self.state.settings.model_dump(), name: value}
        )

    async def save_settings(self) -> Notification:
        reply = await self.send_message(ExtensionMessage(
            type=MessageType.UPDATE_PREFERENCES.value,
            data=self.state.settings.to_wire()
        ))
        if reply is None or reply.type != MessageType.PREFERENCES_UPDATED.value:
            error = reply.error if reply is not None else "no reply"
            logger.error(f"Error saving settings: {error}")
            return Notification("Error saving settings", "error")
        return Notification("Settings saved successfully")

    async def refresh_status(self) -> Notification:
        await self.load_state()
        return Notification("Status refreshed")
