"""
Auth Token Validation

Defines the interface for checking and refreshing the extension's opaque
bearer token, and the default implementation used today.

Design Considerations:
- Provider-agnostic abstract interface
- A real implementation (e.g. JWT signature and expiry checks) can be
  swapped in without touching the callers
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class TokenValidator(ABC):
    """
    Abstract base class for token validators.

    Implementations decide whether a stored token may still be used and
    refresh it when it may not.
    """

    @abstractmethod
    def validate_token(self, token: str) -> bool:
        """
        Check whether a token is usable.

        Args:
            token: Opaque bearer token

        Returns:
            True if the token is valid
        """
        pass

    @abstractmethod
    async def refresh_token_if_needed(self) -> None:
        """Refresh the token if it is close to expiry."""
        pass


class NoOpTokenValidator(TokenValidator):
    """
    Validator that accepts every token and never refreshes.

    No validation rules exist yet for the extension's token, so this
    implementation reports every token as valid and performs no network
    call on refresh.
    """

    def validate_token(self, token: str) -> bool:
        logger.debug("Token accepted without validation")
        return True

    async def refresh_token_if_needed(self) -> None:
        logger.debug("Token refresh skipped")
