"""
Storage package initialization.
"""

from .encryption import SecurityManager, decrypt_value, encrypt_value
from .key_value import InMemoryStore, JsonFileStore, KeyValueStore

__all__ = [
    'SecurityManager',
    'encrypt_value',
    'decrypt_value',
    'KeyValueStore',
    'InMemoryStore',
    'JsonFileStore'
]
