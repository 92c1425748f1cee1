# middleware/__init__.py
"""
Eagle Compress Middleware System

Registers the built-in middlewares and applies them to a FastAPI app.
"""
from typing import List, Dict, Any, Optional, Union
from fastapi import FastAPI
import logging as log

from ..core.config import Settings
from .base import EagleMiddleware
from .compression import CompressionMiddleware
from .timing import TimingMiddleware

logger = log.getLogger("eaglecompress.middleware")

class MiddlewareManager:
    """Manages middleware registration and configuration for Eagle Compress apps."""

    def __init__(self):
        self.middlewares: List[Dict[str, Any]] = []
        self._builtin_middlewares = {
            'timing': TimingMiddleware,
            'compression': CompressionMiddleware,
        }

    def add_middleware(
        self,
        middleware_class: Union[str, type],
        **options
    ) -> 'MiddlewareManager':
        """Add middleware to the stack. The first one added ends up outermost."""
        if isinstance(middleware_class, str):
            if middleware_class not in self._builtin_middlewares:
                raise ValueError(f"Unknown middleware: {middleware_class}")
            middleware_class = self._builtin_middlewares[middleware_class]

        self.middlewares.append({
            'class': middleware_class,
            'options': options
        })
        return self

    def configure_timing(
        self,
        enabled: bool = True,
        time_header: str = "X-Process-Time",
    ) -> 'MiddlewareManager':
        """Configure timing middleware."""
        if enabled:
            return self.add_middleware('timing', time_header=time_header)
        return self

    def configure_compression(
        self,
        enabled: bool = True,
        compressible_types: Optional[List[str]] = None,
        algorithms: Optional[List[str]] = None,
        compression_level: int = 6,
        defer_encoding_header: bool = True,
        **kwargs
    ) -> 'MiddlewareManager':
        """Configure compression middleware."""
        if enabled:
            options = {
                'compressible_types': compressible_types,
                'algorithms': algorithms,
                'compression_level': compression_level,
                'defer_encoding_header': defer_encoding_header,
                **kwargs
            }
            return self.add_middleware('compression', **options)
        return self

    @classmethod
    def from_settings(cls, settings: Settings) -> 'MiddlewareManager':
        """Build the middleware stack described by ``settings``."""
        manager = cls()
        manager.configure_timing(enabled=settings.TIMING_ENABLED)
        manager.configure_compression(
            enabled=settings.COMPRESSION_ENABLED,
            compressible_types=settings.COMPRESSIBLE_TYPES,
            algorithms=settings.COMPRESSION_ALGORITHMS,
            compression_level=settings.COMPRESSION_LEVEL,
            defer_encoding_header=settings.DEFER_ENCODING_HEADER,
            chunk_size=settings.COMPRESSION_CHUNK_SIZE,
        )
        return manager

    def apply_to_app(self, app: FastAPI) -> None:
        """Apply all configured middlewares to the FastAPI app."""
        # add_middleware prepends, so walk the list backwards
        for middleware_config in reversed(self.middlewares):
            middleware_class = middleware_config['class']
            options = middleware_config['options']

            app.add_middleware(middleware_class, **options)
            logger.info(f"Added middleware: {middleware_class.__name__}")

    def __len__(self) -> int:
        return len(self.middlewares)


__all__ = [
    'MiddlewareManager',
    'EagleMiddleware',
    'CompressionMiddleware',
    'TimingMiddleware',
]
