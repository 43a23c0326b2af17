"""
Configuration package initialization.
"""

from .analyzer_config import ANALYZER_CONFIG
from .settings import EnvironmentType, Settings, get_settings

__all__ = [
    'ANALYZER_CONFIG',
    'EnvironmentType',
    'Settings',
    'get_settings'
]
