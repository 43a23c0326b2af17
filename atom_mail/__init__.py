"""
Atom Mail Assistant package initialization.
"""

from . import auth
from . import config
from . import email_processing
from . import integrations
from . import orchestration
from . import storage

__all__ = [
    'auth',
    'config',
    'email_processing',
    'integrations',
    'orchestration',
    'storage'
]
