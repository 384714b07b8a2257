"""Progress-tracked upload of staged payloads."""

import contextlib
import json
import math
import time
from typing import Any, AsyncIterator, Callable, Optional

from errors import TransferError
from models.import_result import UploadProgressReport
from transport.base import (
    TransferEvent,
    UploadProgress,
    UploadResult,
    UploadTransport,
)
from logger import get_logger

logger = get_logger()

JSON_CONTENT_TYPE = "application/json"

# Reported instead of 100: the last byte is sent but storage has not answered yet
NEAR_COMPLETE_PROGRESS = 99.5

MIN_ELAPSED_SECONDS = 0.001


def build_progress_report(
    loaded: int, total: int, elapsed: float
) -> UploadProgressReport:
    """Compute progress, speed and remaining time for one progress event.

    Args:
        loaded: Bytes sent so far.
        total: Total bytes to send (must be positive).
        elapsed: Seconds since the transfer started.

    Returns:
        UploadProgressReport with progress clamped to 99.5 at completion.
    """
    progress = round(loaded / total * 100, 1)
    elapsed = max(elapsed, MIN_ELAPSED_SECONDS)
    speed_in_bytes = loaded / elapsed

    # Average rate since start, not smoothed
    rest_time = (total - loaded) / speed_in_bytes if speed_in_bytes else math.inf

    return UploadProgressReport(
        progress=NEAR_COMPLETE_PROGRESS if progress == 100 else progress,
        speed=speed_in_bytes / 1024,
        rest_time=rest_time,
    )


def serialize_payload(payload: Any) -> bytes:
    """Serialize payload to compact JSON text encoded as UTF-8."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode(
        "utf-8"
    )


class ProgressUploader:
    """Uploads a JSON payload to a pre-signed URL and reports progress."""

    def __init__(
        self,
        transport: UploadTransport,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the uploader.

        Args:
            transport: Transport that performs the PUT.
            clock: Monotonic clock in seconds. Defaults to time.monotonic.
        """
        self.transport = transport
        self.clock = clock or time.monotonic

    async def upload(
        self,
        url: str,
        payload: Any,
        on_progress: Optional[Callable[[UploadProgressReport], None]] = None,
    ) -> UploadResult:
        """Upload payload with a single PUT.

        Args:
            url: Pre-signed write URL.
            payload: JSON-serializable data.
            on_progress: Called for each progress event with a known total.

        Returns:
            The transport's 2xx UploadResult.

        Raises:
            TransferError: If the payload is not JSON-serializable, the transport
                failed, or it finished without a 2xx status.
        """
        try:
            body = serialize_payload(payload)
        except (TypeError, ValueError) as e:
            logger.error(f"Payload could not be serialized for upload: {e}")
            raise TransferError(str(e)) from e
        logger.info(f"Uploading {len(body)} bytes to storage")

        start = self.clock()
        async with contextlib.aclosing(
            self.transport.upload(url, body, JSON_CONTENT_TYPE)
        ) as events:
            while True:
                event = await _next_event(events)
                if event is None:
                    break

                if isinstance(event, UploadResult):
                    if event.ok:
                        logger.info(
                            f"Upload finished with status {event.status_code} "
                            f"in {self.clock() - start:.2f}s"
                        )
                        return event
                    logger.error(
                        f"Upload rejected with status {event.status_code} {event.status_text}"
                    )
                    raise TransferError(event.status_text, event.status_code)

                if isinstance(event, UploadProgress) and event.total and on_progress:
                    report = build_progress_report(
                        event.loaded, event.total, self.clock() - start
                    )
                    logger.debug(
                        f"Upload progress {report.progress}% at {report.speed:.1f} KB/s"
                    )
                    on_progress(report)

        raise TransferError("")


async def _next_event(events: AsyncIterator[TransferEvent]) -> Optional[TransferEvent]:
    """Fetch the next transport event, turning transport failures into TransferError."""
    try:
        return await events.__anext__()
    except StopAsyncIteration:
        return None
    except TransferError:
        raise
    except Exception as e:
        raise TransferError(str(e)) from e
