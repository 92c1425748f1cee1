# compression/buffering.py
"""
In-memory capture of a downstream ASGI response.

``ResponseCapture.send`` stands in for the real ``send`` callable while the
downstream application runs: the ``http.response.start`` message is held
back and every body chunk lands in a ``BytesIO``. Nothing reaches the
network until the owner copies the buffer out with ``copy_to_sink``.
"""
import io
import logging
from typing import BinaryIO, List, Optional

from starlette.types import Message, Send

logger = logging.getLogger("eaglecompress.compression.buffering")

DEFAULT_CHUNK_SIZE = 64 * 1024

# server extensions that carry the body outside http.response.body
PASSTHROUGH_MESSAGE_TYPES = frozenset({"http.response.pathsend", "http.response.zerocopysend"})


class ResponseCapture:
    """Capture sink for a single response. Use as a context manager."""

    def __init__(self):
        self.buffer = io.BytesIO()
        self.start_message: Optional[Message] = None
        self.complete = False
        self.passthrough_messages: List[Message] = []

    async def send(self, message: Message) -> None:
        message_type = message["type"]

        if message_type == "http.response.start":
            self.start_message = dict(message)
            self.start_message["headers"] = list(message.get("headers", []))
        elif message_type == "http.response.body":
            body = message.get("body", b"")
            if body:
                self.buffer.write(body)
            if not message.get("more_body", False):
                self.complete = True
        elif message_type in PASSTHROUGH_MESSAGE_TYPES:
            self.passthrough_messages.append(message)
            if not message.get("more_body", False):
                self.complete = True
        else:
            logger.debug(f"Ignoring captured message of type {message_type}")

    @property
    def size(self) -> int:
        with self.buffer.getbuffer() as view:
            return view.nbytes

    def close(self) -> None:
        self.buffer.close()

    def __enter__(self) -> "ResponseCapture":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


async def copy_to_sink(
    buffer: BinaryIO,
    send: Send,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Send the whole of ``buffer``, from its start, as ``http.response.body`` messages.

    Every message but the last carries ``more_body=True``. An empty buffer
    still produces one (empty) final message.

    Returns:
        Number of bytes sent.
    """
    buffer.seek(0)
    sent = 0
    chunk = buffer.read(chunk_size)
    while True:
        next_chunk = buffer.read(chunk_size)
        await send({
            "type": "http.response.body",
            "body": chunk,
            "more_body": bool(next_chunk),
        })
        sent += len(chunk)
        if not next_chunk:
            return sent
        chunk = next_chunk


__all__ = ['ResponseCapture', 'copy_to_sink', 'DEFAULT_CHUNK_SIZE', 'PASSTHROUGH_MESSAGE_TYPES']
