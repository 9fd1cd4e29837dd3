"""JSON-RPC transport shared by every service client."""

from avaxapi.rpc.requester import DEFAULT_REQUEST_TIMEOUT, EMPTY_PARAMS, EndpointRequester

__all__ = ["DEFAULT_REQUEST_TIMEOUT", "EMPTY_PARAMS", "EndpointRequester"]
