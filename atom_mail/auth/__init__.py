"""
Authentication package initialization.
"""

from .token_validator import NoOpTokenValidator, TokenValidator

__all__ = [
    'NoOpTokenValidator',
    'TokenValidator'
]
