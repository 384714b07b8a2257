"""Base interface for upload transports."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Union


@dataclass
class UploadProgress:
    """Bytes sent so far.

    Attributes:
        loaded: Bytes handed to the connection so far.
        total: Total body size, or None when the length is not computable.
    """

    loaded: int
    total: Optional[int]


@dataclass
class UploadResult:
    """Final event of an upload.

    Attributes:
        status_code: HTTP status, 0 when no response was received.
        status_text: Reason phrase, empty when no response was received.
    """

    status_code: int
    status_text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


TransferEvent = Union[UploadProgress, UploadResult]


class UploadTransport(ABC):
    """Abstract base class for upload transports.

    A transport streams a request body to a write URL and reports what it
    observes as a sequence of events: zero or more UploadProgress events with
    non-decreasing ``loaded`` followed by exactly one UploadResult.
    """

    @abstractmethod
    def upload(
        self, url: str, body: bytes, content_type: str
    ) -> AsyncIterator[TransferEvent]:
        """Send body to url with a single PUT request.

        Args:
            url: Pre-signed write URL.
            body: Complete request body.
            content_type: Value of the Content-Type header.

        Returns:
            Async iterator of transfer events, terminated by an UploadResult.
        """
        pass
