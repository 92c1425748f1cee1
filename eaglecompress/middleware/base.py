# middleware/base.py
"""Base middleware class for Eagle Compress."""
from abc import ABC, abstractmethod
from starlette.types import ASGIApp, Receive, Scope, Send


class EagleMiddleware(ABC):
    """
    Base class for pure ASGI middlewares.

    Subclasses get the raw ``send`` callable and may hold back or rewrite
    the response messages of the application they wrap.
    """

    def __init__(self, app: ASGIApp, **kwargs):
        self.app = app
        self.config = kwargs
        self.setup()

    def setup(self) -> None:
        """Override this method for middleware-specific setup."""
        pass

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        # websocket and lifespan scopes go straight through
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        await self.handle_http(scope, receive, send)

    @abstractmethod
    async def handle_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process one HTTP request."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
