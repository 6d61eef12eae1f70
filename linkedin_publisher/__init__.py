"""
LinkedIn Publisher
------------------
Resolves a LinkedIn access token to the member's person URN and publishes
text posts to their feed.
"""

__version__ = "1.0.0"

from .core import IdentityResolver, LinkedInPlugin, PostComposer, PostPublisher, SettingsStore
from .models import Identity, PostRequest, PublishResult

__all__ = [
    'IdentityResolver',
    'LinkedInPlugin',
    'PostComposer',
    'PostPublisher',
    'SettingsStore',
    'Identity',
    'PostRequest',
    'PublishResult',
]
