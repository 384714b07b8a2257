"""Clients for the backend importer and upload routers."""

from remote.importer import ImporterApi, UploadApi
from remote.trpc import TrpcClient

__all__ = ["ImporterApi", "TrpcClient", "UploadApi"]
