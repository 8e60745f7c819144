"""
storelink API
FastAPI server with the back office, customer, mobile and integration endpoints
"""

from .main import app

__all__ = ["app"]
