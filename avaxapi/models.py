"""Wire models shared by the service clients.

Field names follow the node's JSON (camelCase, with ``ID`` suffixes kept
upper-case). Integers wider than a JSON double travel as decimal strings.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Node encodes these as JSON strings; lax validation accepts either form on the way in.
Uint64 = Annotated[int, Field(ge=0, le=2**64 - 1), PlainSerializer(str, return_type=str)]
Uint32 = Annotated[int, Field(ge=0, le=2**32 - 1), PlainSerializer(str, return_type=str)]


class WireModel(BaseModel):
    """Base for every request/response body."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserPass(WireModel):
    """Keystore credentials."""
    username: str
    password: str

    def __repr__(self) -> str:
        return f"UserPass(username={self.username!r}, password='***')"

    __str__ = __repr__


class SpendHeader(UserPass):
    """Credentials plus the addresses funds may be spent from and change goes to."""
    from_addrs: list[str] = Field(default_factory=list, alias="from")
    change_addr: str = ""


class TxIDReply(WireModel):
    tx_id: str = Field(alias="txID")


class TxIDArgs(TxIDReply):
    pass


class AddressReply(WireModel):
    address: str


class AddressesReply(WireModel):
    addresses: list[str] = Field(default_factory=list)


class FormattedTx(WireModel):
    tx: str
    encoding: str = "hex"


class AssetIDReply(WireModel):
    asset_id: str = Field(alias="assetID")
    change_addr: str = ""
