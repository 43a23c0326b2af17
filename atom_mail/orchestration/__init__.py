"""
Orchestration package initialization.
"""

from .background import BackgroundService
from .compose_assistant import ComposeAssistant
from .messages import ExtensionMessage, MessageType
from .popup import Notification, PopupController

__all__ = [
    'BackgroundService',
    'ComposeAssistant',
    'ExtensionMessage',
    'MessageType',
    'Notification',
    'PopupController'
]
