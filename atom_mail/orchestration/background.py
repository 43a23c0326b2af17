"""
Background Coordinator

Routes extension messages to the analysis client and the security
manager, keeps the extension state reported to the popup, and persists
preferences in encrypted form.

Design Considerations:
- One instance per hosting process, constructed with its collaborators
- Core failures become *_ERROR messages; the core itself never retries
- Completion and error messages are broadcast to registered listeners
"""

import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from atom_mail.email_processing.analyzers.email_analyzer import EmailAnalyzer
from atom_mail.email_processing.models import (
    Analysis,
    Email,
    EmailContext,
    EncryptedData,
    ExtensionState,
    Suggestion,
    SuggestionType,
    UserPreferences,
)
from atom_mail.errors import AssistantError, CryptoFailure
from atom_mail.orchestration.messages import ExtensionMessage, MessageType
from atom_mail.storage.encryption import SecurityManager
from atom_mail.storage.key_value import AUTH_TOKEN_KEY, PREFERENCES_KEY, KeyValueStore

logger = logging.getLogger(__name__)

KEY_POINT_CONFIDENCE = 0.8
ACTION_CONFIDENCE = 0.7
SUGGESTION_CONTEXT = "email-analysis"

MessageListener = Callable[[ExtensionMessage], None]


class BackgroundService:
    """
    Message coordinator for the extension.

    Holds one analyzer, one security manager and one key-value store, and
    owns the ExtensionState reported through GET_STATE.
    """

    def __init__(self,
                 analyzer: EmailAnalyzer,
                 security_manager: SecurityManager,
                 store: KeyValueStore):
        self.analyzer = analyzer
        self.security_manager = security_manager
        self.store = store
        self.state = ExtensionState()
        self._listeners: List[MessageListener] = []
        self._handlers: Dict[str, Callable[[Any], Awaitable[ExtensionMessage]]] = {
            MessageType.ANALYZE_EMAIL.value: self._handle_email_analysis,
            MessageType.GENERATE_RESPONSE.value: self._handle_response_generation,
            MessageType.UPDATE_PREFERENCES.value: self._handle_preferences_update,
            MessageType.GET_STATE.value: self._handle_get_state,
        }

    async def init(self) -> None:
        """Restore authentication status and stored preferences."""
        await self._handle_auth()
        self._load_preferences()
        logger.info(f"Background service initialized "
                    f"(authenticated={self.state.is_authenticated})")

    def add_listener(self, listener: MessageListener) -> None:
        self._listeners.append(listener)

    async def handle_message(
        self,
        message: Union[ExtensionMessage, Dict[str, Any]]
    ) -> Optional[ExtensionMessage]:
        """
        Dispatch an inbound message.

        Args:
            message: Message model or its dict form

        Returns:
            The reply message, or None for an unsupported message type
        """
        if isinstance(message, dict):
            message = ExtensionMessage.model_validate(message)

        handler = self._handlers.get(message.type)
        if handler is None:
            logger.warning(f"Ignoring unsupported message type: {message.type}")
            return None

        logger.debug(f"Handling {message.type} message")
        return await handler(message.data)

    async def _handle_auth(self) -> None:
        token = self.store.get(AUTH_TOKEN_KEY)
        if not token:
            return

        if self.security_manager.validate_token(token):
            self.state.is_authenticated = True
        else:
            await self._refresh_token()

    async def _refresh_token(self) -> None:
        try:
            await self.security_manager.refresh_token_if_needed()
            self.state.is_authenticated = True
        except Exception as e:
            logger.error(f"Token refresh error: {str(e)}")
            self.state.is_authenticated = False

    def _load_preferences(self) -> None:
        raw = self.store.get(PREFERENCES_KEY)
        if raw is None:
            return

        try:
            record = EncryptedData.model_validate(raw)
            self.state.settings = UserPreferences.model_validate(
                self.security_manager.decrypt_data(record)
            )
        except (CryptoFailure, ValidationError) as e:
            logger.error(f"Stored preferences could not be restored, using defaults: {str(e)}")

    async def _handle_email_analysis(self, data: Any) -> ExtensionMessage:
        try:
            email = Email.model_validate(data)
            analysis = await self.analyzer.analyze_email(email)
        except (AssistantError, ValidationError) as e:
            logger.error(f"Email analysis error: {str(e)}")
            return self._broadcast(ExtensionMessage.failure(MessageType.ANALYSIS_ERROR, e))

        self.state.current_email = email
        self.state.suggestions = self.convert_analysis_to_suggestions(analysis)

        return self._broadcast(ExtensionMessage(
            type=MessageType.ANALYSIS_COMPLETE.value,
            data=analysis.to_wire()
        ))

    async def _handle_response_generation(self, data: Any) -> ExtensionMessage:
        try:
            context = EmailContext.model_validate(data)
            response = await self.analyzer.generate_response(context)
        except (AssistantError, ValidationError) as e:
            logger.error(f"Response generation error: {str(e)}")
            return self._broadcast(ExtensionMessage.failure(MessageType.RESPONSE_ERROR, e))

        return self._broadcast(ExtensionMessage(
            type=MessageType.RESPONSE_GENERATED.value,
            data=response.to_wire()
        ))

    async def _handle_preferences_update(self, data: Any) -> ExtensionMessage:
        try:
            if not isinstance(data, dict):
                raise ValueError("Preferences payload must be an object")

            # Partial updates are merged over the current settings by field name
            changes = UserPreferences.model_validate(data).model_dump(exclude_unset=True)
            settings = UserPreferences.model_validate({**self.state.settings.model_dump(), **changes})
            encrypted = self.security_manager.encrypt_data(settings.to_wire())
            self.store.set(PREFERENCES_KEY, encrypted.to_wire())
        except (AssistantError, ValueError, OSError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(f"Preferences update error: {str(e)}")
            return self._broadcast(ExtensionMessage.failure(MessageType.PREFERENCES_ERROR, e))

        self.state.settings = settings
        return self._broadcast(ExtensionMessage(
            type=MessageType.PREFERENCES_UPDATED.value,
            data=settings.to_wire()
        ))

    async def _handle_get_state(self, data: Any) -> ExtensionMessage:
        return ExtensionMessage(type=MessageType.GET_STATE.value, data=self.state.to_wire())

    def _broadcast(self, message: ExtensionMessage) -> ExtensionMessage:
        for listener in self._listeners:
            listener(message)
        return message

    @staticmethod
    def convert_analysis_to_suggestions(analysis: Analysis) -> List[Suggestion]:
        """Turn key points and actions into popup suggestions."""
        stamp = int(time.time() * 1000)
        suggestions = [
            Suggestion(
                id=f"key-point-{stamp}-{index}",
                type=SuggestionType.ACTION,
                content=point,
                confidence=KEY_POINT_CONFIDENCE,
                context=SUGGESTION_CONTEXT
            )
            for index, point in enumerate(analysis.key_points)
        ]
        suggestions.extend(
            Suggestion(
                id=f"action-{stamp}-{index}",
                type=SuggestionType.ACTION,
                content=action,
                confidence=ACTION_CONFIDENCE,
                context=SUGGESTION_CONTEXT
            )
            for index, action in enumerate(analysis.suggested_actions)
        )
        return suggestions
