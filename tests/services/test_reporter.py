import pytest

from errors import RemoteCallError, UploadError
from models.import_result import (
    ImportCallbacks,
    ImportFailure,
    ImportOutcome,
    ImportStage,
    UploadProgressReport,
)
from services.reporter import StageReporter, normalize_error
from tests.helpers import CallbackRecorder


class TestNormalizeError:
    """Tests for normalize_error function."""

    def test_structured_error(self):
        """Test that code, httpStatus and path are copied verbatim."""
        error = RemoteCallError(
            "boom", {"code": "E1", "httpStatus": 500, "path": "importer.importByFile"}
        )

        assert normalize_error(error) == ImportFailure(
            code="E1", http_status=500, message="boom", path="importer.importByFile"
        )

    def test_partial_data(self):
        """Test that missing structured fields become None."""
        error = RemoteCallError("denied", {"code": "FORBIDDEN"})

        failure = normalize_error(error)

        assert failure.code == "FORBIDDEN"
        assert failure.http_status is None
        assert failure.path is None

    def test_plain_exception(self):
        """Test that errors without a data field are still normalized."""
        failure = normalize_error(ValueError("bad value"))

        assert failure == ImportFailure(
            code=None, http_status=None, message="bad value", path=None
        )

    def test_upload_error(self):
        """Test that UploadError maps to the UPLOAD_ERROR code."""
        failure = normalize_error(UploadError(path="import_config/a.json"))

        assert failure.code == "UPLOAD_ERROR"
        assert failure.message == "Upload Error"
        assert failure.path == "import_config/a.json"


class TestStageReporter:
    """Tests for StageReporter."""

    def test_missing_callbacks_are_skipped(self):
        """Test that a reporter without callbacks does nothing."""
        reporter = StageReporter(None)

        reporter.stage(ImportStage.IMPORTING)
        reporter.progress(UploadProgressReport(progress=1.0, speed=1.0, rest_time=1.0))
        reporter.completed(ImportOutcome(results=[], duration=1))
        failure = reporter.error(RuntimeError("x"))

        assert failure.message == "x"

    def test_partial_callbacks(self):
        """Test that only supplied callbacks are invoked."""
        stages = []
        reporter = StageReporter(ImportCallbacks(on_stage_change=stages.append))

        reporter.error(RuntimeError("x"))

        assert stages == [ImportStage.ERROR]

    def test_error_announces_stage_first(self):
        """Test that the Error stage precedes on_error."""
        recorder = CallbackRecorder()
        reporter = StageReporter(recorder.callbacks())

        reporter.error(RemoteCallError("boom", {"code": "E1"}))

        assert [kind for kind, _ in recorder.events] == ["stage", "error"]
        assert recorder.stages == [ImportStage.ERROR]

    def test_completed_announces_stage_first(self):
        """Test that the Success stage precedes on_success."""
        recorder = CallbackRecorder()
        reporter = StageReporter(recorder.callbacks())

        reporter.completed(ImportOutcome(results={"messages": 3}, duration=12))

        assert recorder.events == [
            ("stage", ImportStage.SUCCESS),
            ("success", ({"messages": 3}, 12)),
        ]

    def test_callback_exception_propagates(self):
        """Test that a raising callback is not caught."""

        def on_stage_change(stage):
            raise RuntimeError("listener failed")

        reporter = StageReporter(ImportCallbacks(on_stage_change=on_stage_change))

        with pytest.raises(RuntimeError, match="listener failed"):
            reporter.stage(ImportStage.UPLOADING)

