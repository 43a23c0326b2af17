"""
API Services Package
"""

from api.services.assistant_service import build_background_service, get_background_service

__all__ = ["build_background_service", "get_background_service"]
