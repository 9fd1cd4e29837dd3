"""Info API request and reply bodies."""

from __future__ import annotations

from pydantic import Field

from avaxapi.models import Uint32, WireModel


class NodeIDReply(WireModel):
    node_id: str = Field(alias="nodeID")


class NetworkIDReply(WireModel):
    network_id: Uint32 = Field(alias="networkID")


class NetworkNameReply(WireModel):
    network_name: str


class BlockchainIDArgs(WireModel):
    alias: str


class BlockchainIDReply(WireModel):
    blockchain_id: str = Field(alias="blockchainID")


class Peer(WireModel):
    """A connected peer as reported by ``info.peers``."""
    ip: str = ""
    public_ip: str = Field("", alias="publicIP")
    node_id: str = Field("", alias="nodeID")
    version: str = ""
    last_sent: str = ""
    last_received: str = ""


class PeersReply(WireModel):
    peers: list[Peer] = Field(default_factory=list)


class IsBootstrappedArgs(WireModel):
    chain: str


class IsBootstrappedReply(WireModel):
    is_bootstrapped: bool


class NodeVersionReply(WireModel):
    version: str
