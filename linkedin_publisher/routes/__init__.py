"""
HTTP routes exposing the plugin commands.
"""

from .post_routes import router as linkedin_router

__all__ = ['linkedin_router']
