"""Factory for creating upload transport instances."""

from config import Config
from transport.base import UploadTransport
from transport.httpx_put import HttpxUploadTransport
from logger import get_logger

logger = get_logger()


def get_upload_transport(config: Config) -> UploadTransport:
    """Create an upload transport based on configuration.

    Args:
        config: Application configuration.

    Returns:
        UploadTransport instance.

    Raises:
        ValueError: If the configured transport is unknown.
    """
    transport_name = getattr(config, "upload_transport", None) or "httpx"

    if transport_name == "httpx":
        chunk_size = config.upload_chunk_size
        logger.debug(f"Using httpx upload transport (chunk size: {chunk_size})")
        return HttpxUploadTransport(chunk_size=chunk_size)

    raise ValueError(f"Unknown upload transport: {transport_name}")
