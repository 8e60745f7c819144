"""
API routers
"""

from . import admin, mobile, my, public, token

__all__ = [
    "admin",
    "mobile",
    "my",
    "public",
    "token",
]
