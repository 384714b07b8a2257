"""Minimal tRPC-over-HTTP client for backend mutations."""

from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from errors import RemoteCallError
from logger import get_logger

logger = get_logger()

# tRPC error codes by HTTP status, used when the body carries no error envelope
_HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_SUPPORTED",
    408: "TIMEOUT",
    409: "CONFLICT",
    412: "PRECONDITION_FAILED",
    413: "PAYLOAD_TOO_LARGE",
    429: "TOO_MANY_REQUESTS",
    499: "CLIENT_CLOSED_REQUEST",
    501: "NOT_IMPLEMENTED",
}


# Pydantic models for the response envelopes
class TrpcErrorData(BaseModel):
    code: Optional[str] = None
    httpStatus: Optional[int] = None
    path: Optional[str] = None


class TrpcErrorBody(BaseModel):
    message: str
    data: TrpcErrorData = TrpcErrorData()


class TrpcErrorResponse(BaseModel):
    error: TrpcErrorBody


class TrpcResult(BaseModel):
    data: Any = None


class TrpcSuccessResponse(BaseModel):
    result: TrpcResult


class TrpcClient:
    """Calls mutation procedures on one tRPC router.

    Args:
        base_url: Router URL, e.g. http://localhost:3010/trpc/lambda.
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
    """

    def __init__(
        self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def mutate(self, path: str, input: Any) -> Any:
        """Run a mutation procedure and return its output.

        Args:
            path: Procedure path, e.g. "importer.importByFile".
            input: JSON-serializable procedure input.

        Returns:
            The procedure's output data.

        Raises:
            RemoteCallError: If the server answers with an error.
            httpx.TransportError: If no response was received.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=None, transport=self._transport
        ) as client:
            response = await client.post(f"/{path}", json=input)

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            try:
                return TrpcSuccessResponse.model_validate(body).result.data
            except ValidationError as e:
                raise RemoteCallError(
                    f"Malformed response from {path}",
                    {
                        "code": "PARSE_ERROR",
                        "httpStatus": response.status_code,
                        "path": path,
                    },
                ) from e

        raise self._to_error(path, response, body)

    def _to_error(
        self, path: str, response: httpx.Response, body: Any
    ) -> RemoteCallError:
        """Convert an error response into a RemoteCallError."""
        try:
            error = TrpcErrorResponse.model_validate(body).error
        except ValidationError:
            error = None

        if error is not None:
            data = error.data.model_dump()
            if data["httpStatus"] is None:
                data["httpStatus"] = response.status_code
            if data["path"] is None:
                data["path"] = path
            logger.debug(f"{path} failed with {data['code']}: {error.message}")
            return RemoteCallError(error.message, data)

        status = response.status_code
        return RemoteCallError(
            response.reason_phrase or f"HTTP {status}",
            {
                "code": _HTTP_STATUS_CODES.get(status, "INTERNAL_SERVER_ERROR"),
                "httpStatus": status,
                "path": path,
            },
        )
