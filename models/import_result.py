"""Stage, progress and outcome types reported to import callers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class ImportStage(str, Enum):
    """Caller-visible lifecycle marker. Moves forward only."""

    IDLE = "idle"
    UPLOADING = "uploading"
    IMPORTING = "importing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class UploadProgressReport:
    """Live upload progress.

    Attributes:
        progress: Percentage in [0, 100] with one decimal; 100 is reported as 99.5.
        speed: Average transfer rate since start in KB/s.
        rest_time: Estimated seconds remaining.
    """

    progress: float
    speed: float
    rest_time: float


@dataclass
class ImportOutcome:
    """Result of a completed backend import.

    Attributes:
        results: Backend-defined summary of imported records.
        duration: Milliseconds from issuing the backend call until it resolved.
    """

    results: Any
    duration: int


@dataclass
class ImportFailure:
    """Normalized failure shape, regardless of which path failed."""

    code: Optional[str]
    http_status: Optional[int]
    message: str
    path: Optional[str]


@dataclass
class ImportCallbacks:
    """Optional callbacks notified during an import.

    Any callback left as None is simply not invoked.
    """

    on_stage_change: Optional[Callable[[ImportStage], None]] = None
    on_error: Optional[Callable[[ImportFailure], None]] = None
    on_success: Optional[Callable[[Any, int], None]] = None
    on_file_uploading: Optional[Callable[[UploadProgressReport], None]] = None
