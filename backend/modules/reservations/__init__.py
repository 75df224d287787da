"""
Reservation register.
"""

from .routes import router

__all__ = ["router"]
