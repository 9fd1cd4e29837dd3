"""Tests for avaxapi.rpc.requester.EndpointRequester."""

from __future__ import annotations

import json
import socket
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest
from pydantic import BaseModel, model_validator

from avaxapi.rpc import EMPTY_PARAMS, EndpointRequester
from avaxapi.utils.exceptions import (
    DecodingError,
    EncodingError,
    ErrorCategory,
    RemoteError,
    RPCError,
    TimeoutError,
    TransportError,
)


class _Reply(BaseModel):
    value: int


def _requester(stub, namespace: str = "svc", timeout: float = 2.0) -> EndpointRequester:
    return EndpointRequester("http://node.test:9650/", "/ext/svc", namespace, timeout, client=stub.client())


def test_send_request_qualifies_method_and_decodes_result(rpc_stub) -> None:
    rpc_stub.on("svc.getValue", {"value": 42})
    req = _requester(rpc_stub)

    res = req.send_request("getValue", {"key": "a"}, _Reply)

    assert res == _Reply(value=42)
    assert rpc_stub.methods() == ["svc.getValue"]
    assert rpc_stub.paths == ["/ext/svc"]
    call = rpc_stub.calls[0]
    assert call["jsonrpc"] == "2.0"
    assert call["params"] == {"key": "a"}
    assert isinstance(call["id"], str) and call["id"]


def test_empty_params_sent_as_empty_object(rpc_stub) -> None:
    rpc_stub.on("svc.ping", {"value": 1})
    req = _requester(rpc_stub)
    req.send_request("ping", EMPTY_PARAMS, _Reply)
    req.send_request("ping", None, _Reply)
    assert [c["params"] for c in rpc_stub.calls] == [{}, {}]


def test_params_from_model_and_dataclass(rpc_stub) -> None:
    @dataclass
    class Args:
        chain: str
        limit: int

    class ModelArgs(BaseModel):
        chain: str

    rpc_stub.on("svc.m", {"value": 1})
    req = _requester(rpc_stub)
    req.send_request("m", Args(chain="X", limit=3), _Reply)
    req.send_request("m", ModelArgs(chain="P"), _Reply)
    assert rpc_stub.params(0) == {"chain": "X", "limit": 3}
    assert rpc_stub.params(1) == {"chain": "P"}


def test_correlation_ids_are_unique_per_call(rpc_stub) -> None:
    rpc_stub.on("svc.m", {"value": 1})
    req = _requester(rpc_stub)
    for _ in range(5):
        req.send_request("m", {}, _Reply)
    ids = [c["id"] for c in rpc_stub.calls]
    assert len(set(ids)) == 5


def test_result_type_can_be_plain_type_hint(rpc_stub) -> None:
    rpc_stub.on("svc.list", ["a", "b"])
    req = _requester(rpc_stub)
    assert req.send_request("list", {}, list[str]) == ["a", "b"]


@pytest.mark.parametrize("params", [{"bad": object()}, 42, "text", {"nan": float("nan")}])
def test_unserializable_params_raise_encoding_error_without_network(rpc_stub, params) -> None:
    req = _requester(rpc_stub)
    with pytest.raises(EncodingError) as exc_info:
        req.send_request("m", params, _Reply)
    assert exc_info.value.category == ErrorCategory.VALIDATION
    assert not exc_info.value.retryable
    assert rpc_stub.calls == []


def test_remote_error_carries_code_and_message_and_skips_decoding(rpc_stub) -> None:
    decoded: list[dict] = []

    class Tracked(BaseModel):
        value: int

        @model_validator(mode="before")
        @classmethod
        def _track(cls, data):
            decoded.append(data)
            return data

    rpc_stub.on("svc.m", error={"code": 7, "message": "bad request"})
    req = _requester(rpc_stub)

    with pytest.raises(RemoteError) as exc_info:
        req.send_request("m", {}, Tracked)

    err = exc_info.value
    assert err == RemoteError(7, "bad request")
    assert err.rpc_code == 7
    assert err.rpc_message == "bad request"
    assert err.details["method"] == "svc.m"
    assert decoded == []


def test_remote_error_with_data_and_non_numeric_code(rpc_stub) -> None:
    rpc_stub.on("svc.m", error={"code": "oops", "message": "broken", "data": {"hint": 1}})
    with pytest.raises(RemoteError) as exc_info:
        _requester(rpc_stub).send_request("m", {}, _Reply)
    assert exc_info.value.rpc_code == 0
    assert exc_info.value.data == {"hint": 1}


def test_remote_error_wins_over_http_error_status(rpc_stub) -> None:
    rpc_stub.on(
        "svc.m",
        respond=lambda body, request: httpx.Response(
            500, json={"jsonrpc": "2.0", "id": body["id"], "error": {"code": -32000, "message": "internal"}}
        ),
    )
    with pytest.raises(RemoteError) as exc_info:
        _requester(rpc_stub).send_request("m", {}, _Reply)
    assert exc_info.value.rpc_code == -32000


def test_shape_mismatch_raises_decoding_error(rpc_stub) -> None:
    rpc_stub.on("svc.m", {"value": "not-a-number"})
    with pytest.raises(DecodingError):
        _requester(rpc_stub).send_request("m", {}, _Reply)


def test_missing_result_raises_decoding_error(rpc_stub) -> None:
    rpc_stub.on("svc.m", respond=lambda body, request: httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"]}))
    with pytest.raises(DecodingError):
        _requester(rpc_stub).send_request("m", {}, _Reply)


def test_mismatched_response_id_raises_decoding_error(rpc_stub) -> None:
    rpc_stub.on(
        "svc.m",
        respond=lambda body, request: httpx.Response(200, json={"jsonrpc": "2.0", "id": "other", "result": {"value": 1}}),
    )
    with pytest.raises(DecodingError, match="does not match"):
        _requester(rpc_stub).send_request("m", {}, _Reply)


def test_non_json_body_raises_decoding_error(rpc_stub) -> None:
    rpc_stub.on("svc.m", respond=lambda body, request: httpx.Response(200, text="<html>hi</html>"))
    with pytest.raises(DecodingError):
        _requester(rpc_stub).send_request("m", {}, _Reply)


def test_http_error_without_envelope_raises_transport_error(rpc_stub) -> None:
    rpc_stub.on("svc.m", respond=lambda body, request: httpx.Response(503, text="unavailable"))
    with pytest.raises(TransportError) as exc_info:
        _requester(rpc_stub).send_request("m", {}, _Reply)
    assert exc_info.value.status_code == 503
    assert exc_info.value.retryable


def test_connect_failure_raises_transport_error_with_cause() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    req = EndpointRequester("http://node.test", "/ext/svc", "svc", client=client)
    with pytest.raises(TransportError) as exc_info:
        req.send_request("m", {}, _Reply)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.category == ErrorCategory.RETRYABLE
    client.close()


def test_transport_timeout_raises_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    req = EndpointRequester("http://node.test", "/ext/svc", "svc", 0.25, client=client)
    with pytest.raises(TimeoutError) as exc_info:
        req.send_request("m", {}, _Reply)
    assert exc_info.value.timeout_seconds == 0.25
    assert exc_info.value.category == ErrorCategory.TIMEOUT
    client.close()


class _SlowHandler(BaseHTTPRequestHandler):
    delay = 1.0

    def do_POST(self) -> None:  # noqa: N802
        length = int(self.headers.get("Content-Length", 0))
        self.rfile.read(length)
        time.sleep(self.delay)
        body = b'{"jsonrpc": "2.0", "id": "late", "result": {"value": 1}}'
        try:
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, *args) -> None:
        pass


def test_slow_server_yields_timeout_not_stale_success() -> None:
    server = ThreadingHTTPServer(("127.0.0.1", 0), _SlowHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        uri = f"http://127.0.0.1:{server.server_address[1]}"
        with EndpointRequester(uri, "/ext/svc", "svc", request_timeout=0.2) as req:
            with pytest.raises(TimeoutError):
                req.send_request("m", {}, _Reply)
    finally:
        server.shutdown()
        server.server_close()


class _TrickleHandler(BaseHTTPRequestHandler):
    """Sends the reply one byte at a time, never idle longer than ``gap``."""

    gap = 0.15
    slow_bytes = 6

    def do_POST(self) -> None:  # noqa: N802
        length = int(self.headers.get("Content-Length", 0))
        request = json.loads(self.rfile.read(length))
        body = json.dumps({"jsonrpc": "2.0", "id": request["id"], "result": {"value": 1}}).encode()
        try:
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            for i in range(self.slow_bytes):
                self.wfile.write(body[i : i + 1])
                self.wfile.flush()
                time.sleep(self.gap)
            self.wfile.write(body[self.slow_bytes :])
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, *args) -> None:
        pass


def test_trickling_reply_past_deadline_yields_timeout() -> None:
    server = ThreadingHTTPServer(("127.0.0.1", 0), _TrickleHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        uri = f"http://127.0.0.1:{server.server_address[1]}"
        with EndpointRequester(uri, "/ext/svc", "svc", request_timeout=0.3) as req:
            started = time.monotonic()
            with pytest.raises(TimeoutError) as exc_info:
                req.send_request("m", {}, _Reply)
            assert time.monotonic() - started < 0.8
        assert exc_info.value.timeout_seconds == 0.3
    finally:
        server.shutdown()
        server.server_close()


def test_trickling_reply_within_deadline_succeeds() -> None:
    server = ThreadingHTTPServer(("127.0.0.1", 0), _TrickleHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        uri = f"http://127.0.0.1:{server.server_address[1]}"
        with EndpointRequester(uri, "/ext/svc", "svc", request_timeout=5.0) as req:
            assert req.send_request("m", {}, _Reply) == _Reply(value=1)
    finally:
        server.shutdown()
        server.server_close()


def test_unreachable_node_raises_transport_error() -> None:
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    with EndpointRequester(f"http://127.0.0.1:{port}", "/ext/svc", "svc", 1.0) as req:
        with pytest.raises(TransportError):
            req.send_request("m", {}, _Reply)


def test_every_failure_is_an_rpc_error(rpc_stub) -> None:
    rpc_stub.on("svc.m", error={"code": 1, "message": "x"})
    with pytest.raises(RPCError):
        _requester(rpc_stub).send_request("m", {}, _Reply)


def test_concurrent_calls_share_one_requester(rpc_stub) -> None:
    rpc_stub.on(
        "svc.echo",
        respond=lambda body, request: httpx.Response(
            200, json={"jsonrpc": "2.0", "id": body["id"], "result": {"value": body["params"]["n"]}}
        ),
    )
    req = _requester(rpc_stub)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda n: req.send_request("echo", {"n": n}, _Reply).value, range(32)))
    assert results == list(range(32))


def test_injected_client_is_not_closed(rpc_stub) -> None:
    client = rpc_stub.client()
    req = EndpointRequester("http://node.test", "ext/svc", "svc", client=client)
    assert req.url == "http://node.test/ext/svc"
    req.close()
    assert not client.is_closed


def test_owned_client_closed_on_exit() -> None:
    with EndpointRequester("http://node.test", "/ext/svc", "svc") as req:
        inner = req._client
    assert inner.is_closed


def test_configuration_is_read_only(rpc_stub) -> None:
    req = _requester(rpc_stub)
    assert (req.uri, req.path, req.namespace, req.request_timeout) == ("http://node.test:9650", "/ext/svc", "svc", 2.0)
    for attr, value in (("uri", "http://other"), ("path", "/x"), ("namespace", "evil"), ("request_timeout", 99.0)):
        with pytest.raises(AttributeError):
            setattr(req, attr, value)
