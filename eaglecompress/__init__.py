#main __init__.py
"""
Eagle Compress - HTTP response compression for FastAPI and Starlette.

Negotiates gzip or deflate from the client's Accept-Encoding header, buffers
the response the application writes, and compresses it when its content-type
qualifies, rewriting Content-Length to the compressed size.
"""

__version__ = "0.1.0"

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
import logging

from .core.config import Settings, get_settings
from .core.exceptions import CompressionError, ConfigurationError, UnsupportedAlgorithmError
from .compression import (
    Algorithm,
    EligibilityRule,
    Negotiator,
    SUPPORTED_ALGORITHMS,
    DEFAULT_ELIGIBILITY_RULES,
    select_algorithm,
    is_eligible,
)
from .middleware import MiddlewareManager, CompressionMiddleware, TimingMiddleware

# Initialize module-level logger; logging configuration is handled in `create_app`
logger = logging.getLogger(__name__)


class CompressedAPI(FastAPI):
    """FastAPI application with the middleware stack described by ``Settings``."""

    def __init__(self, *args, settings: Optional[Settings] = None, **kwargs):
        kwargs.setdefault("lifespan", self._lifespan)
        super().__init__(*args, **kwargs)

        self.settings = settings or get_settings()
        self.logger = logging.getLogger(__name__)
        self.middleware_manager = MiddlewareManager.from_settings(self.settings)
        self._setup()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        await self.on_startup()
        yield
        await self.on_shutdown()

    def _setup(self):
        """Set up the application with middleware and routes."""
        self.middleware_manager.apply_to_app(self)

        @self.get("/health", include_in_schema=False)
        async def health_check():
            """Health check endpoint reporting the compression configuration."""
            return {
                "status": "ok",
                "compression": {
                    "enabled": self.settings.COMPRESSION_ENABLED,
                    "algorithms": self.settings.COMPRESSION_ALGORITHMS,
                    "level": self.settings.COMPRESSION_LEVEL,
                    "compressible_types": self.settings.COMPRESSIBLE_TYPES
                    or [rule.pattern for rule in DEFAULT_ELIGIBILITY_RULES if rule.eligible],
                    "defer_encoding_header": self.settings.DEFER_ENCODING_HEADER,
                },
            }

    async def on_startup(self):
        """Log the active compression configuration."""
        self.logger.info(
            f"Starting up {self.title} with {len(self.middleware_manager)} middleware(s)",
            extra={
                "compression_enabled": self.settings.COMPRESSION_ENABLED,
                "algorithms": self.settings.COMPRESSION_ALGORITHMS,
            },
        )

    async def on_shutdown(self):
        """Handle application shutdown events."""
        self.logger.info(f"{self.title} shutdown complete")


def create_app(
    title: Optional[str] = None,
    description: str = "FastAPI application with response compression",
    version: str = __version__,
    settings: Optional[Settings] = None,
    debug: Optional[bool] = None,
    **kwargs
) -> CompressedAPI:
    """
    Create and configure an application with response compression.

    Args:
        title: The title of the API. Defaults to ``settings.APP_NAME``.
        description: The description of the API.
        version: The version of the API.
        settings: Settings to use instead of the cached environment settings.
        debug: Debug mode and DEBUG logging. Defaults to ``settings.DEBUG``.
        **kwargs: Additional keyword arguments passed to the FastAPI constructor.

    Returns:
        CompressedAPI: The configured application instance.
    """
    settings = settings or get_settings()
    debug = settings.DEBUG if debug is None else debug

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    title = title or settings.APP_NAME
    logger.info(f"Creating {title} application (version: {version})")

    try:
        app = CompressedAPI(
            title=title,
            description=description,
            version=version,
            debug=debug,
            settings=settings,
            **kwargs
        )
    except Exception as e:
        logger.critical(f"Failed to create application: {e}", exc_info=True)
        raise

    logger.info("Application initialization complete")
    return app


__all__ = [
    'CompressedAPI', 'create_app', 'Settings', 'get_settings',
    'Algorithm', 'EligibilityRule', 'Negotiator',
    'SUPPORTED_ALGORITHMS', 'DEFAULT_ELIGIBILITY_RULES',
    'select_algorithm', 'is_eligible',
    'MiddlewareManager', 'CompressionMiddleware', 'TimingMiddleware',
    'CompressionError', 'ConfigurationError', 'UnsupportedAlgorithmError',
    '__version__',
]
