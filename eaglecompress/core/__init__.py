"""
Core functionality for Eagle Compress.

Settings and the exception hierarchy shared by the compression layer.
"""

from .config import Settings, settings, get_settings
from .exceptions import CompressionError, ConfigurationError, UnsupportedAlgorithmError


__all__ = [
    'Settings', 'settings', 'get_settings',
    'CompressionError', 'ConfigurationError', 'UnsupportedAlgorithmError',
]
