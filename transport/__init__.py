"""Upload transports used to stream staged payloads to object storage."""

from transport.factory import get_upload_transport

__all__ = ["get_upload_transport"]
