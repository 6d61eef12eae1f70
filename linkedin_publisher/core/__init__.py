"""
Identity resolution, publishing and the plugin lifecycle.
"""

from .identity import IdentityResolver
from .publisher import PostPublisher
from .composer import ComposerState, PostComposer
from .settings_store import SettingsStore
from .plugin import LinkedInPlugin, NoticeLog

__all__ = [
    'IdentityResolver',
    'PostPublisher',
    'ComposerState',
    'PostComposer',
    'SettingsStore',
    'LinkedInPlugin',
    'NoticeLog'
]
