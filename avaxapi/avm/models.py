"""AVM request and reply bodies."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from avaxapi.models import SpendHeader, Uint32, Uint64, UserPass, WireModel
from avaxapi.utils.formatting import HEX_ENCODING


class Status(str, Enum):
    """Decision status of a transaction."""
    UNKNOWN = "Unknown"
    PROCESSING = "Processing"
    REJECTED = "Rejected"
    ACCEPTED = "Accepted"

    @property
    def decided(self) -> bool:
        return self in (Status.REJECTED, Status.ACCEPTED)


class GetTxArgs(WireModel):
    tx_id: str = Field(alias="txID")
    encoding: str = HEX_ENCODING


class GetTxStatusReply(WireModel):
    status: Status


class Index(WireModel):
    """Pagination cursor for getUTXOs."""
    address: str = ""
    utxo: str = ""


class GetUTXOsArgs(WireModel):
    addresses: list[str]
    limit: Uint32 = 0
    start_index: Index = Field(default_factory=Index)
    encoding: str = HEX_ENCODING


class GetUTXOsReply(WireModel):
    num_fetched: Uint64 = 0
    utxos: list[str] = Field(default_factory=list, alias="utxos")
    end_index: Index = Field(default_factory=Index)
    encoding: str = HEX_ENCODING


class GetAssetDescriptionArgs(WireModel):
    asset_id: str = Field(alias="assetID")


class AssetDescription(WireModel):
    asset_id: str = Field(alias="assetID")
    name: str
    symbol: str
    denomination: int = Field(ge=0, le=255)


class GetBalanceArgs(WireModel):
    address: str
    asset_id: str = Field(alias="assetID")


class UTXOID(WireModel):
    tx_id: str = Field(alias="txID")
    output_index: int = 0


class BalanceReply(WireModel):
    balance: Uint64
    utxo_ids: list[UTXOID] = Field(default_factory=list, alias="utxoIDs")


class Balance(WireModel):
    asset: str
    balance: Uint64


class GetAllBalancesReply(WireModel):
    balances: list[Balance] = Field(default_factory=list)


class Holder(WireModel):
    amount: Uint64
    address: str


class Owners(WireModel):
    """A minter set: ``threshold`` of ``minters`` must sign."""
    threshold: Uint32
    minters: list[str]


class CreateAssetArgs(SpendHeader):
    name: str
    symbol: str
    denomination: int = Field(0, ge=0, le=255)
    initial_holders: list[Holder] = Field(default_factory=list)
    minter_sets: list[Owners] = Field(default_factory=list)


class CreateNFTAssetArgs(SpendHeader):
    name: str
    symbol: str
    minter_sets: list[Owners] = Field(default_factory=list)


class ExportKeyArgs(UserPass):
    address: str


class ExportKeyReply(WireModel):
    private_key: str

    def __repr__(self) -> str:
        return "ExportKeyReply(private_key='***')"


class ImportKeyArgs(UserPass):
    private_key: str


class SendOutput(WireModel):
    amount: Uint64
    asset_id: str = Field(alias="assetID")
    to: str


class SendArgs(SpendHeader):
    amount: Uint64
    asset_id: str = Field(alias="assetID")
    to: str
    memo: str = ""


class SendMultipleArgs(SpendHeader):
    outputs: list[SendOutput]
    memo: str = ""


class MintArgs(SpendHeader):
    amount: Uint64
    asset_id: str = Field(alias="assetID")
    to: str


class SendNFTArgs(SpendHeader):
    asset_id: str = Field(alias="assetID")
    group_id: Uint32 = Field(alias="groupID")
    to: str


class MintNFTArgs(SpendHeader):
    asset_id: str = Field(alias="assetID")
    payload: str
    encoding: str = HEX_ENCODING
    to: str


class ImportArgs(UserPass):
    source_chain: str
    to: str


class ExportAVAXArgs(SpendHeader):
    amount: Uint64
    to: str


class ExportArgs(ExportAVAXArgs):
    asset_id: str = Field(alias="assetID")
