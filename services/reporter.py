"""Stage and error reporting through an import callback bundle."""

from typing import Optional

from models.import_result import (
    ImportCallbacks,
    ImportFailure,
    ImportOutcome,
    ImportStage,
    UploadProgressReport,
)


def normalize_error(error: BaseException) -> ImportFailure:
    """Translate any failure into an ImportFailure.

    code, httpStatus and path are read from the error's structured ``data``
    mapping when it has one; the message is the error's own text.
    """
    data = getattr(error, "data", None)
    if not isinstance(data, dict):
        data = {}
    return ImportFailure(
        code=data.get("code"),
        http_status=data.get("httpStatus"),
        message=str(error),
        path=data.get("path"),
    )


class StageReporter:
    """Invokes whichever callbacks the caller supplied.

    Exceptions raised by a callback are not caught.
    """

    def __init__(self, callbacks: Optional[ImportCallbacks] = None):
        self.callbacks = callbacks or ImportCallbacks()

    def stage(self, stage: ImportStage) -> None:
        if self.callbacks.on_stage_change:
            self.callbacks.on_stage_change(stage)

    def success(self, outcome: ImportOutcome) -> None:
        if self.callbacks.on_success:
            self.callbacks.on_success(outcome.results, outcome.duration)

    def failure(self, failure: ImportFailure) -> None:
        if self.callbacks.on_error:
            self.callbacks.on_error(failure)

    def progress(self, report: UploadProgressReport) -> None:
        if self.callbacks.on_file_uploading:
            self.callbacks.on_file_uploading(report)

    def error(self, error: BaseException) -> ImportFailure:
        """Announce the Error stage, then report the normalized failure."""
        self.stage(ImportStage.ERROR)
        failure = normalize_error(error)
        self.failure(failure)
        return failure

    def completed(self, outcome: ImportOutcome) -> None:
        """Announce the Success stage, then report the outcome."""
        self.stage(ImportStage.SUCCESS)
        self.success(outcome)

