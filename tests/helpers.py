"""Helper utilities for tests."""

from typing import Any, List, Optional

from errors import RemoteCallError
from models.import_result import ImportCallbacks
from services.settings import SettingsStore
from transport.base import UploadProgress, UploadResult, UploadTransport


def make_rows(count: int, prefix: str = "row") -> List[dict]:
    """Build count distinct records."""
    return [{"id": f"{prefix}-{i}"} for i in range(count)]


class CallbackRecorder:
    """Records every callback invocation in order.

    ``events`` holds (kind, value) tuples; ``stages`` only the stages.
    """

    def __init__(self):
        self.events: List[tuple] = []

    @property
    def stages(self) -> list:
        return [value for kind, value in self.events if kind == "stage"]

    @property
    def errors(self) -> list:
        return [value for kind, value in self.events if kind == "error"]

    @property
    def successes(self) -> list:
        return [value for kind, value in self.events if kind == "success"]

    @property
    def progress(self) -> list:
        return [value for kind, value in self.events if kind == "progress"]

    def callbacks(self) -> ImportCallbacks:
        return ImportCallbacks(
            on_stage_change=lambda stage: self.events.append(("stage", stage)),
            on_error=lambda failure: self.events.append(("error", failure)),
            on_success=lambda results, duration: self.events.append(
                ("success", (results, duration))
            ),
            on_file_uploading=lambda report: self.events.append(("progress", report)),
        )


class FakeImporterApi:
    """Importer procedures returning canned results or raising a canned error."""

    def __init__(self, results: Any = None, error: Optional[Exception] = None):
        self.results = ["ok"] if results is None else results
        self.error = error
        self.calls: List[tuple] = []

    async def _respond(self, name: str, argument: Any):
        self.calls.append((name, argument))
        if self.error is not None:
            raise self.error
        return {"results": self.results}

    async def import_by_post(self, dataset):
        return await self._respond("import_by_post", dataset)

    async def import_by_file(self, pathname):
        return await self._respond("import_by_file", pathname)

    async def import_pg_by_post(self, dataset):
        return await self._respond("import_pg_by_post", dataset)


class FakeUploadApi:
    """Presign issuer returning a URL derived from the pathname."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.pathnames: List[str] = []

    async def create_presigned_url(self, pathname: str) -> str:
        self.pathnames.append(pathname)
        if self.error is not None:
            raise self.error
        return f"https://storage.test/{pathname}?signature=abc"


class FakeUploadTransport(UploadTransport):
    """Replays progress in fixed steps, then a final result.

    Args:
        status_code: Final HTTP status (0 simulates a network failure).
        status_text: Final status text.
        steps: Number of progress events to emit.
        total_known: Whether progress events carry the total length.
    """

    def __init__(
        self,
        status_code: int = 200,
        status_text: str = "OK",
        steps: int = 4,
        total_known: bool = True,
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.steps = steps
        self.total_known = total_known
        self.requests: List[tuple] = []

    async def upload(self, url, body, content_type):
        self.requests.append((url, body, content_type))
        total = len(body)
        for step in range(1, self.steps + 1):
            yield UploadProgress(
                loaded=total * step // self.steps,
                total=total if self.total_known else None,
            )
        yield UploadResult(status_code=self.status_code, status_text=self.status_text)


class FakeClock:
    """Monotonic clock advancing by a fixed step on every read."""

    def __init__(self, start: float = 100.0, step: float = 0.5):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


class MemorySettingsStore(SettingsStore):
    """Settings sink keeping imports in memory."""

    def __init__(self):
        self.imported: List[dict] = []

    def import_settings(self, settings):
        self.imported.append(settings)

    def load(self):
        merged = {}
        for settings in self.imported:
            merged.update(settings)
        return merged


def remote_error(
    message: str = "boom",
    code: str = "E1",
    http_status: int = 500,
    path: str = "importer.importByFile",
) -> RemoteCallError:
    return RemoteCallError(
        message, {"code": code, "httpStatus": http_status, "path": path}
    )
