"""
Logging and encryption helpers.
"""

from .logger import LogLevel, NoOpLogger, PluginLogger, create_logger, get_logger

__all__ = [
    'LogLevel',
    'NoOpLogger',
    'PluginLogger',
    'create_logger',
    'get_logger'
]
