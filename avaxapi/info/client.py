"""Client for the node Info API (``/ext/info``)."""

from __future__ import annotations

import httpx

from avaxapi.info.models import (
    BlockchainIDArgs,
    BlockchainIDReply,
    IsBootstrappedArgs,
    IsBootstrappedReply,
    NetworkIDReply,
    NetworkNameReply,
    NodeIDReply,
    NodeVersionReply,
    Peer,
    PeersReply,
)
from avaxapi.rpc import DEFAULT_REQUEST_TIMEOUT, EMPTY_PARAMS, EndpointRequester

INFO_PATH = "/ext/info"
INFO_NAMESPACE = "info"


class InfoClient:
    def __init__(
        self,
        uri: str,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        *,
        client: httpx.Client | None = None,
    ):
        self.requester = EndpointRequester(uri, INFO_PATH, INFO_NAMESPACE, request_timeout, client=client)

    def close(self) -> None:
        self.requester.close()

    def get_node_id(self) -> str:
        return self.requester.send_request("getNodeID", EMPTY_PARAMS, NodeIDReply).node_id

    def get_network_id(self) -> int:
        return self.requester.send_request("getNetworkID", EMPTY_PARAMS, NetworkIDReply).network_id

    def get_network_name(self) -> str:
        return self.requester.send_request("getNetworkName", EMPTY_PARAMS, NetworkNameReply).network_name

    def get_blockchain_id(self, alias: str) -> str:
        """Resolve a chain alias (e.g. ``X``) to its blockchain ID."""
        res = self.requester.send_request("getBlockchainID", BlockchainIDArgs(alias=alias), BlockchainIDReply)
        return res.blockchain_id

    def peers(self) -> list[Peer]:
        return self.requester.send_request("peers", EMPTY_PARAMS, PeersReply).peers

    def is_bootstrapped(self, chain: str) -> bool:
        res = self.requester.send_request("isBootstrapped", IsBootstrappedArgs(chain=chain), IsBootstrappedReply)
        return res.is_bootstrapped

    def get_node_version(self) -> str:
        return self.requester.send_request("getNodeVersion", EMPTY_PARAMS, NodeVersionReply).version
