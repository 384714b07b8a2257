"""Upload transport streaming a PUT body with httpx."""

import asyncio
import contextlib
from typing import AsyncIterator, Optional

import httpx

from transport.base import TransferEvent, UploadProgress, UploadResult, UploadTransport
from logger import get_logger

logger = get_logger()

DEFAULT_CHUNK_SIZE = 64 * 1024


class HttpxUploadTransport(UploadTransport):
    """Streams the body in fixed-size slices and reports bytes as they are sent.

    The request carries an explicit Content-Length so it goes out as one
    plain PUT, which is what pre-signed storage URLs accept.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the transport.

        Args:
            chunk_size: Bytes per slice handed to the connection.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self._transport = transport

    async def upload(
        self, url: str, body: bytes, content_type: str
    ) -> AsyncIterator[TransferEvent]:
        total = len(body)
        queue: asyncio.Queue = asyncio.Queue()

        async def stream():
            loaded = 0
            for start in range(0, total, self.chunk_size):
                chunk = body[start : start + self.chunk_size]
                yield chunk
                # httpx asks for the next slice once this one is written
                loaded += len(chunk)
                queue.put_nowait(UploadProgress(loaded=loaded, total=total))

        async def send() -> UploadResult:
            headers = {"Content-Type": content_type, "Content-Length": str(total)}
            try:
                async with httpx.AsyncClient(
                    timeout=None, transport=self._transport
                ) as client:
                    response = await client.put(url, content=stream(), headers=headers)
            except httpx.TransportError as e:
                logger.warning(f"Upload failed before a response was received: {e}")
                return UploadResult(status_code=0, status_text="")
            finally:
                queue.put_nowait(None)
            return UploadResult(
                status_code=response.status_code, status_text=response.reason_phrase
            )

        task = asyncio.create_task(send())
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
            yield await task
        finally:
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
