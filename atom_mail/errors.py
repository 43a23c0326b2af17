"""
Assistant Error Types

Defines the typed failures raised by the analysis client and the crypto
helper. Callers in the orchestration layer translate these into error
messages; the core never swallows them.
"""

from typing import Optional


class AssistantError(Exception):
    """Base class for all assistant failures."""
    pass


class RemoteServiceError(AssistantError):
    """Completion endpoint returned a non-2xx status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EncodingError(AssistantError):
    """JSON serialization or deserialization failed."""
    pass


class CryptoFailure(AssistantError):
    """Key derivation, cipher, padding or payload failure during encrypt/decrypt."""
    pass
