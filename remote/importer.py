"""Backend procedures used by the import service."""

from typing import Any

from models.import_dataset import ImportDataset, RelationalImportDataset
from remote.trpc import TrpcClient


class ImporterApi:
    """Importer router procedures.

    Each call returns the procedure output, a mapping holding ``results``.
    """

    def __init__(self, client: TrpcClient):
        self.client = client

    async def import_by_post(self, dataset: ImportDataset) -> Any:
        """Import a structured dataset sent inline."""
        return await self.client.mutate(
            "importer.importByPost", {"data": dataset.to_payload()}
        )

    async def import_by_file(self, pathname: str) -> Any:
        """Import a payload previously uploaded to object storage."""
        return await self.client.mutate("importer.importByFile", {"pathname": pathname})

    async def import_pg_by_post(self, dataset: RelationalImportDataset) -> Any:
        """Import relational rows sent inline."""
        return await self.client.mutate("importer.importPgByPost", dataset.to_payload())


class UploadApi:
    """Upload router procedures."""

    def __init__(self, client: TrpcClient):
        self.client = client

    async def create_presigned_url(self, pathname: str) -> str:
        """Get a pre-signed URL authorizing one PUT to pathname."""
        return await self.client.mutate(
            "upload.createS3PreSignedUrl", {"pathname": pathname}
        )
