"""Pytest hooks and fixtures."""

import json
import os
from typing import Any, Callable

import httpx
import pytest

from avaxapi.config.access import clear_config_cache


def pytest_collection_modifyitems(config, items):
    """Skip requires_node tests unless AVAXAPI_TEST_URI points at a live node."""
    if os.environ.get("AVAXAPI_TEST_URI"):
        return
    skip = pytest.mark.skip(reason="AVAXAPI_TEST_URI not set")
    for item in items:
        if "requires_node" in item.keywords:
            item.add_marker(skip)


class RPCStub:
    """In-process JSON-RPC node: records every call and answers per method.

    ``on(method, result)`` answers with a result, ``on(method, error={...})``
    with an error object, ``on(method, respond=fn)`` lets ``fn(body, request)``
    build the whole httpx.Response.
    """

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.paths: list[str] = []
        self._routes: dict[str, Any] = {}
        self._clients: list[httpx.Client] = []

    def on(
        self,
        method: str,
        result: Any = None,
        *,
        error: dict[str, Any] | None = None,
        respond: Callable[[dict[str, Any], httpx.Request], httpx.Response] | None = None,
    ) -> "RPCStub":
        self._routes[method] = (result, error, respond)
        return self

    def on_sequence(self, method: str, results: list[Any]) -> "RPCStub":
        """Answer successive calls with successive results; the last one repeats."""
        pending = list(results)

        def respond(body: dict[str, Any], request: httpx.Request) -> httpx.Response:
            value = pending.pop(0) if len(pending) > 1 else pending[0]
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": value})

        return self.on(method, respond=respond)

    def params(self, index: int = -1) -> dict[str, Any]:
        return self.calls[index]["params"]

    def methods(self) -> list[str]:
        return [c["method"] for c in self.calls]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.calls.append(body)
        self.paths.append(request.url.path)
        if body["method"] not in self._routes:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32601, "message": "method not found"}},
            )
        result, error, respond = self._routes[body["method"]]
        if respond is not None:
            return respond(body, request)
        if error is not None:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": error})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    def client(self) -> httpx.Client:
        c = httpx.Client(transport=httpx.MockTransport(self))
        self._clients.append(c)
        return c

    def close(self) -> None:
        for c in self._clients:
            c.close()


@pytest.fixture
def rpc_stub():
    stub = RPCStub()
    yield stub
    stub.close()


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ at a temp dir so config and logs never touch the real home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("AVAXAPI_"):
            monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield tmp_path
    clear_config_cache()
