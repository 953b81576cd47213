"""
Blogforge API
=============

Health and batch status endpoints.
"""

from .routes import router

__all__ = ["router"]
