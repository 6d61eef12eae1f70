"""
LinkedIn REST API transport.
"""

from .linkedin import ApiResponse, LinkedInAPI

__all__ = [
    'ApiResponse',
    'LinkedInAPI'
]
