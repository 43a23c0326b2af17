"""
API Routes Package
"""

from api.routes import messages

__all__ = ["messages"]
