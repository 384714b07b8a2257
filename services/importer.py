"""Import service routing datasets to the backend by size."""

import asyncio
import time
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from errors import TransferError, UploadError
from models.import_dataset import ImportDataset, RelationalImportDataset
from models.import_result import ImportCallbacks, ImportOutcome, ImportStage
from services.reporter import StageReporter
from services.settings import SettingsStore
from services.uploader import ProgressUploader
from logger import get_logger

logger = get_logger()

# Datasets with at least this many records go through object storage
IMPORT_THRESHOLD = 500

UPLOAD_PATH_PREFIX = "import_config"


def _default_id() -> str:
    return str(uuid.uuid4())


class ImportService:
    """Delivers import datasets to the backend importer.

    Small datasets are sent inline in one call. Datasets of IMPORT_THRESHOLD
    records or more are uploaded to object storage through a pre-signed URL
    and imported from there by pathname.

    Args:
        importer_api: Backend importer procedures.
        upload_api: Issuer of pre-signed upload URLs.
        uploader: Progress-tracked uploader for staged payloads.
        settings_store: Sink that imported settings are applied to.
        id_factory: Produces unique, path-safe ids for staged files.
        report_transfer_errors: Report presign and upload failures through
            the callbacks instead of raising them.
    """

    def __init__(
        self,
        importer_api,
        upload_api,
        uploader: ProgressUploader,
        settings_store: SettingsStore,
        id_factory: Optional[Callable[[], str]] = None,
        report_transfer_errors: bool = False,
    ):
        self.importer_api = importer_api
        self.upload_api = upload_api
        self.uploader = uploader
        self.settings_store = settings_store
        self.id_factory = id_factory or _default_id
        self.report_transfer_errors = report_transfer_errors

    async def import_settings(self, settings: Dict[str, Any]) -> None:
        """Apply imported application settings to the settings store.

        The store may do blocking file I/O, so it runs in a worker thread.
        """
        await asyncio.to_thread(self.settings_store.import_settings, settings)

    async def import_data(
        self, dataset: ImportDataset, callbacks: Optional[ImportCallbacks] = None
    ) -> None:
        """Import chat messages, sessions, session groups and topics.

        Backend failures are reported through callbacks.on_error.

        Raises:
            UploadError: If uploading a large dataset to storage failed.
            RemoteCallError: If no pre-signed URL could be obtained.
        """
        await self._deliver(
            dataset,
            lambda: self.importer_api.import_by_post(dataset),
            StageReporter(callbacks),
        )

    async def import_pg_data(
        self,
        dataset: RelationalImportDataset,
        *,
        callbacks: Optional[ImportCallbacks] = None,
    ) -> None:
        """Import relational table rows.

        Raises:
            UploadError: If uploading a large dataset to storage failed.
            RemoteCallError: If no pre-signed URL could be obtained.
        """
        await self._deliver(
            dataset,
            lambda: self.importer_api.import_pg_by_post(dataset),
            StageReporter(callbacks),
        )

    async def _deliver(
        self,
        dataset: Union[ImportDataset, RelationalImportDataset],
        import_inline: Callable[[], Awaitable[Any]],
        reporter: StageReporter,
    ) -> None:
        total_length = dataset.unit_count()

        if total_length < IMPORT_THRESHOLD:
            logger.info(f"Importing {total_length} record(s) inline")
            await self._run_import(import_inline, reporter)
            return

        # Too large for one request: upload to storage and import by file
        logger.info(f"Importing {total_length} record(s) through object storage")
        pathname = await self._upload(dataset.to_payload(), reporter)
        if pathname is None:
            return

        await self._run_import(
            lambda: self.importer_api.import_by_file(pathname), reporter
        )

    async def _upload(self, payload: Any, reporter: StageReporter) -> Optional[str]:
        """Upload payload to a fresh storage pathname.

        Returns:
            The pathname, or None if a failure was reported through callbacks.
        """
        pathname = f"{UPLOAD_PATH_PREFIX}/{self.id_factory()}.json"

        try:
            url = await self.upload_api.create_presigned_url(pathname)
        except Exception as e:
            logger.error(f"Could not get an upload URL for {pathname}: {e}")
            if not self.report_transfer_errors:
                raise
            reporter.error(e)
            return None

        reporter.stage(ImportStage.UPLOADING)
        try:
            await self.uploader.upload(url, payload, reporter.progress)
        except TransferError as e:
            logger.error(f"Upload of {pathname} failed: {e!r}")
            error = UploadError(path=pathname)
            if not self.report_transfer_errors:
                raise error from e
            reporter.error(error)
            return None

        return pathname

    async def _run_import(
        self, call: Callable[[], Awaitable[Any]], reporter: StageReporter
    ) -> None:
        reporter.stage(ImportStage.IMPORTING)

        start = time.monotonic()
        try:
            result = await call()
        except Exception as e:
            logger.error(f"Import failed: {e}")
            reporter.error(e)
            return
        duration = int((time.monotonic() - start) * 1000)

        logger.info(f"Import finished in {duration}ms")
        reporter.completed(
            ImportOutcome(results=_results_of(result), duration=duration)
        )


def _results_of(result: Any) -> Any:
    if isinstance(result, dict):
        return result.get("results")
    return getattr(result, "results", None)
