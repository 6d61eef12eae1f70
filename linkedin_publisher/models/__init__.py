"""
Data models for identity resolution and publishing.
"""

from .post_models import (
    MAX_COMMENTARY_LENGTH,
    PERSON_URN_PREFIX,
    Distribution,
    FailureReason,
    FeedDistribution,
    Identity,
    LifecycleState,
    PluginSettings,
    PostRequest,
    PublishResult,
    ValidationOutcome,
    Visibility,
)

__all__ = [
    'MAX_COMMENTARY_LENGTH',
    'PERSON_URN_PREFIX',
    'Distribution',
    'FailureReason',
    'FeedDistribution',
    'Identity',
    'LifecycleState',
    'PluginSettings',
    'PostRequest',
    'PublishResult',
    'ValidationOutcome',
    'Visibility',
]
