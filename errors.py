"""Exception types raised by the import client."""

from typing import Any, Dict, Optional


class ChatportError(Exception):
    """Base error for failures reachable from an import operation.

    Args:
        message: Human readable description.
        data: Structured error fields using the backend's wire names
              (code, httpStatus, path). Missing keys are allowed.
    """

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.data = data or {}


class RemoteCallError(ChatportError):
    """A backend RPC call (import or presign) failed."""


class UploadError(ChatportError):
    """Uploading the staged payload to object storage failed."""

    def __init__(self, message: str = "Upload Error", path: Optional[str] = None):
        super().__init__(
            message, {"code": "UPLOAD_ERROR", "httpStatus": None, "path": path}
        )


class TransferError(Exception):
    """The staged payload could not be delivered to storage.

    Raised when the payload cannot be serialized, the transport fails, or it
    finishes without a 2xx response.

    Args:
        status_text: Status text reported by the transport (empty when no
                     response was received).
        status_code: HTTP status code, 0 for network-level failures.
    """

    def __init__(self, status_text: str, status_code: int = 0):
        super().__init__(status_text)
        self.status_text = status_text
        self.status_code = status_code
