from .client import ChatCompletionClient

__all__ = [
    'ChatCompletionClient'
]
