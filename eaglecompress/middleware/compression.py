# middleware/compression.py
"""
Response compression middleware.

The downstream application writes its response into an in-memory capture
buffer instead of the real ``send``. Once it returns, the now-known
Content-Type decides whether the captured body goes out verbatim or through
the negotiated compressor, in which case Content-Length is rewritten to the
compressed size before anything is sent.
"""
import io
import logging
import shutil
from typing import Iterable, Optional

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import Message, Receive, Scope, Send

from ..compression.algorithms import Algorithm, open_compressor
from ..compression.buffering import DEFAULT_CHUNK_SIZE, ResponseCapture, copy_to_sink
from ..compression.negotiation import Negotiator
from ..core.exceptions import ConfigurationError
from .base import EagleMiddleware

logger = logging.getLogger("eaglecompress.middleware.compression")

CONTENT_ENCODING_HEADER = "content-encoding"

# statuses whose responses never carry a body
BODYLESS_STATUSES = frozenset({204, 304})


class CompressionMiddleware(EagleMiddleware):
    """
    Buffering gzip/deflate compression middleware.

    Options:
        compressible_types: Content-type patterns to compress, replacing the
            built-in list. Every supplied pattern is eligible.
        algorithms: Algorithms (or tokens) offered to clients. Defaults to all.
        compression_level: Codec level, 0-9.
        defer_encoding_header: Only emit Content-Encoding once the response
            is known to be compressed. ``False`` advertises the negotiated
            encoding even when the body goes out uncompressed.
        chunk_size: Size of the body messages sent downstream.
        negotiator: A prebuilt ``Negotiator``; overrides the two table options.
    """

    def setup(self):
        self.compression_level = self.config.get('compression_level', 6)
        self.defer_encoding_header = self.config.get('defer_encoding_header', True)
        self.chunk_size = self.config.get('chunk_size', DEFAULT_CHUNK_SIZE)

        if not 0 <= self.compression_level <= 9:
            raise ConfigurationError(
                f"compression_level must be between 0 and 9, got {self.compression_level}",
                context={"compression_level": self.compression_level},
            )
        if self.chunk_size <= 0:
            raise ConfigurationError(
                f"chunk_size must be positive, got {self.chunk_size}",
                context={"chunk_size": self.chunk_size},
            )

        negotiator = self.config.get('negotiator')
        if negotiator is None:
            compressible_types: Optional[Iterable[str]] = self.config.get('compressible_types')
            negotiator = Negotiator.from_patterns(
                patterns=compressible_types,
                algorithms=self.config.get('algorithms'),
            )
        self.negotiator = negotiator
        logger.debug(f"CompressionMiddleware configured: {self.negotiator!r}, level={self.compression_level}")

    async def handle_http(self, scope: Scope, receive: Receive, send: Send) -> None:
        algorithm = self.negotiator.select_algorithm(Headers(scope=scope))

        if algorithm is Algorithm.NONE:
            await self.app(scope, receive, send)
            return

        await self._invoke_and_compress(scope, receive, send, algorithm)

    async def _invoke_and_compress(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
        algorithm: Algorithm,
    ) -> None:
        encoding = algorithm.token

        with ResponseCapture() as capture:
            await self.app(scope, receive, capture.send)

            start = capture.start_message
            if start is None:
                logger.warning(f"{scope.get('path')}: application returned without starting a response")
                return
            if not capture.complete:
                logger.debug(f"{scope.get('path')}: response body ended without a final message")

            if capture.passthrough_messages:
                logger.debug(f"{scope.get('path')}: body sent through a server extension, forwarded unchanged")
                await send(start)
                for message in capture.passthrough_messages:
                    await send(message)
                return

            headers = MutableHeaders(scope=start)

            if not self._should_compress(scope, start, headers):
                if not self.defer_encoding_header and CONTENT_ENCODING_HEADER not in headers:
                    headers.append("Content-Encoding", encoding)
                await send(start)
                await copy_to_sink(capture.buffer, send, self.chunk_size)
                return

            with io.BytesIO() as compressed:
                with open_compressor(algorithm, compressed, self.compression_level) as stream:
                    capture.buffer.seek(0)
                    shutil.copyfileobj(capture.buffer, stream)

                headers["Content-Encoding"] = encoding
                headers["Content-Length"] = str(compressed.tell())
                headers.add_vary_header("Accept-Encoding")

                logger.debug(
                    f"{scope.get('path')}: {encoding} {capture.size} -> {compressed.tell()} bytes"
                )
                await send(start)
                await copy_to_sink(compressed, send, self.chunk_size)

    def _should_compress(self, scope: Scope, start: Message, headers: MutableHeaders) -> bool:
        """Post-invocation eligibility check against the captured response."""
        if scope.get("method") == "HEAD":
            return False

        status = start.get("status", 200)
        if status < 200 or status in BODYLESS_STATUSES:
            return False

        # already encoded by the application
        if CONTENT_ENCODING_HEADER in headers:
            return False

        return self.negotiator.is_eligible(headers.get("content-type"))
