"""Typed JSON-RPC 2.0 requester bound to one node endpoint.

Each per-service client holds one ``EndpointRequester`` and calls
``send_request`` once per public method.
"""

from __future__ import annotations

import dataclasses
import functools
import json
import time
import uuid
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from avaxapi.utils.exceptions import (
    DecodingError,
    EncodingError,
    RemoteError,
    TimeoutError,
    TransportError,
)

T = TypeVar("T")

DEFAULT_REQUEST_TIMEOUT = 10.0
JSONRPC_VERSION = "2.0"

# Parameterless calls still send an (empty) params object.
EMPTY_PARAMS: Mapping[str, Any] = MappingProxyType({})


@functools.lru_cache(maxsize=256)
def _cached_adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def _type_adapter(result_type: Any) -> TypeAdapter:
    try:
        return _cached_adapter(result_type)
    except TypeError:
        # unhashable type hint
        return TypeAdapter(result_type)


class EndpointRequester:
    """Sends ``<namespace>.<method>`` calls to ``uri + path``.

    Holds read-only configuration; the underlying ``httpx.Client`` pool is safe to
    share between threads, so one requester may serve concurrent callers.
    """

    def __init__(
        self,
        uri: str,
        path: str,
        namespace: str,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        *,
        client: httpx.Client | None = None,
    ):
        self._uri = uri.rstrip("/")
        self._path = path if path.startswith("/") else f"/{path}"
        self._namespace = namespace
        self._request_timeout = float(request_timeout)
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=self._request_timeout)

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def path(self) -> str:
        return self._path

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def request_timeout(self) -> float:
        """Budget in seconds for the whole call, from connect to the last body byte."""
        return self._request_timeout

    @property
    def url(self) -> str:
        return f"{self.uri}{self.path}"

    def qualify(self, method: str) -> str:
        return f"{self.namespace}.{method}"

    def close(self) -> None:
        """Release the connection pool (only when this requester created it)."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "EndpointRequester":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"EndpointRequester(url={self.url!r}, namespace={self.namespace!r}, timeout={self.request_timeout})"

    @staticmethod
    def _params_to_object(params: Any) -> Mapping[str, Any]:
        if params is None or params is EMPTY_PARAMS:
            return {}
        if isinstance(params, BaseModel):
            return params.model_dump(mode="json", by_alias=True)
        if dataclasses.is_dataclass(params) and not isinstance(params, type):
            return dataclasses.asdict(params)
        if isinstance(params, Mapping):
            return params
        raise TypeError(f"params must be a model, dataclass or mapping, got {type(params).__name__}")

    def _encode(self, qualified: str, request_id: str, params: Any) -> bytes:
        try:
            payload = {
                "jsonrpc": JSONRPC_VERSION,
                "method": qualified,
                "params": dict(self._params_to_object(params)),
                "id": request_id,
            }
            return json.dumps(payload, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodingError(qualified, str(exc)) from exc

    @staticmethod
    def _remote_error(qualified: str, error: Any) -> RemoteError:
        if not isinstance(error, dict):
            return RemoteError(0, str(error), method=qualified)
        raw_code = error.get("code", 0)
        try:
            code = int(raw_code)
        except (TypeError, ValueError):
            code = 0
        message = str(error.get("message") or "")
        return RemoteError(code, message, error.get("data"), method=qualified)

    def _exchange(self, qualified: str, body: bytes) -> tuple[int, bytes]:
        """POST ``body`` and read the whole reply within ``request_timeout``.

        httpx applies its timeout per connect/read/write, so a reply trickling
        in byte by byte is cut off here against one overall deadline.
        """
        deadline = time.monotonic() + self.request_timeout
        try:
            with self._client.stream(
                "POST",
                self.url,
                content=body,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=self.request_timeout,
            ) as resp:
                chunks: list[bytes] = []
                for chunk in resp.iter_bytes():
                    if time.monotonic() > deadline:
                        raise TimeoutError(qualified, self.request_timeout)
                    chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise TimeoutError(qualified, self.request_timeout)
                return resp.status_code, b"".join(chunks)
        except httpx.TimeoutException as exc:
            raise TimeoutError(qualified, self.request_timeout) from exc
        except httpx.RequestError as exc:
            raise TransportError(qualified, str(exc) or type(exc).__name__) from exc

    def send_request(self, method: str, params: Any, result_type: type[T]) -> T:
        """Call ``<namespace>.<method>`` and decode the result as ``result_type``.

        Raises exactly one of EncodingError, TimeoutError, TransportError,
        RemoteError or DecodingError on failure. No retries are attempted.
        """
        qualified = self.qualify(method)
        request_id = uuid.uuid4().hex
        body = self._encode(qualified, request_id, params)

        status_code, raw = self._exchange(qualified, body)
        try:
            envelope = json.loads(raw)
        except ValueError:
            envelope = None

        if not isinstance(envelope, dict):
            if status_code >= 400:
                raise TransportError(qualified, f"http status {status_code}", status_code=status_code)
            raise DecodingError(qualified, "response body is not a JSON-RPC object")

        if envelope.get("error") is not None:
            raise self._remote_error(qualified, envelope["error"])
        if status_code >= 400:
            raise TransportError(qualified, f"http status {status_code}", status_code=status_code)
        if envelope.get("id") != request_id:
            raise DecodingError(qualified, f"response id {envelope.get('id')!r} does not match request id")
        if "result" not in envelope:
            raise DecodingError(qualified, "response carries neither result nor error")

        try:
            return _type_adapter(result_type).validate_python(envelope["result"])
        except ValidationError as exc:
            raise DecodingError(qualified, str(exc)) from exc
