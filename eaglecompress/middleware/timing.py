import logging
import time

from starlette.datastructures import MutableHeaders
from starlette.types import Message, Receive, Scope, Send

from .base import EagleMiddleware

logger = logging.getLogger(__name__)

class TimingMiddleware(EagleMiddleware):
    """
    Middleware for measuring request processing time.

    Adds the time taken until the response starts to the response headers.
    Installed outside CompressionMiddleware it therefore includes the time
    spent buffering and compressing the body.
    """

    def setup(self):
        self.time_header = self.config.get('time_header', "X-Process-Time")

    async def handle_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        start_time = time.perf_counter()

        async def send_with_timing(message: Message) -> None:
            if message["type"] == "http.response.start":
                process_time = time.perf_counter() - start_time
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                headers[self.time_header] = f"{process_time:.4f} sec"
                logger.debug(f"{scope.get('method')} {scope.get('path')} started response after {process_time:.4f} sec")
            await send(message)

        await self.app(scope, receive, send_with_timing)
