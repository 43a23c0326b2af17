"""
Integrations package initialization.
"""

from .openai import ChatCompletionClient

__all__ = [
    'ChatCompletionClient'
]
