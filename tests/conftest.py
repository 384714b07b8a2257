"""Shared pytest fixtures for all tests."""

import pytest

from config import Config
from services.base import Services
from tests.helpers import (
    CallbackRecorder,
    FakeImporterApi,
    FakeUploadApi,
    FakeUploadTransport,
    MemorySettingsStore,
)


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "chatport",
        log_level="DEBUG",
        log_dir=tmp_path / "chatport" / "logs",
        api_base_url="http://backend.test",
        upload_transport="httpx",
        upload_chunk_size=1024,
        report_transfer_errors=False,
        settings_filename="settings.yaml",
    )


@pytest.fixture
def importer_api():
    return FakeImporterApi()


@pytest.fixture
def upload_api():
    return FakeUploadApi()


@pytest.fixture
def upload_transport():
    return FakeUploadTransport()


@pytest.fixture
def settings_store():
    return MemorySettingsStore()


@pytest.fixture
def recorder():
    return CallbackRecorder()


@pytest.fixture
def services(test_config, importer_api, upload_api, upload_transport, settings_store):
    """Create a Services container wired to fake collaborators.

    Staged uploads get sequential ids (upload-1, upload-2, ...).
    """
    counter = iter(range(1, 1_000_000))

    return Services(
        test_config,
        importer_api=importer_api,
        upload_api=upload_api,
        upload_transport=upload_transport,
        settings_store=settings_store,
        id_factory=lambda: f"upload-{next(counter)}",
    )
