"""Client for the AVM (asset transaction VM) API of a chain (``/ext/bc/<chain>``)."""

from __future__ import annotations

import httpx

from avaxapi.avm.models import (
    AssetDescription,
    Balance,
    BalanceReply,
    CreateAssetArgs,
    CreateNFTAssetArgs,
    ExportArgs,
    ExportAVAXArgs,
    ExportKeyArgs,
    ExportKeyReply,
    GetAllBalancesReply,
    GetAssetDescriptionArgs,
    GetBalanceArgs,
    GetTxArgs,
    GetTxStatusReply,
    GetUTXOsArgs,
    GetUTXOsReply,
    Holder,
    ImportArgs,
    ImportKeyArgs,
    Index,
    MintArgs,
    MintNFTArgs,
    Owners,
    SendArgs,
    SendMultipleArgs,
    SendNFTArgs,
    SendOutput,
    Status,
)
from avaxapi.models import (
    AddressesReply,
    AddressReply,
    AssetIDReply,
    FormattedTx,
    TxIDArgs,
    TxIDReply,
    UserPass,
)
from avaxapi.rpc import DEFAULT_REQUEST_TIMEOUT, EndpointRequester
from avaxapi.utils.formatting import HEX_ENCODING, decode_hex, encode_hex

AVM_NAMESPACE = "avm"
DEFAULT_CHAIN = "X"


def chain_path(chain: str) -> str:
    return f"/ext/bc/{chain}"


class AVMClient:
    """
    Typed wrapper over the ``avm.*`` methods of one chain.

    Keystore-backed calls take a ``UserPass``; spending calls also take the
    addresses to spend from and the change address.
    """

    def __init__(
        self,
        uri: str,
        chain: str = DEFAULT_CHAIN,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        *,
        client: httpx.Client | None = None,
    ):
        self.chain = chain
        self.requester = EndpointRequester(uri, chain_path(chain), AVM_NAMESPACE, request_timeout, client=client)

    def close(self) -> None:
        self.requester.close()

    @staticmethod
    def _spend(user: UserPass, from_addrs: list[str] | None, change_addr: str) -> dict:
        return {
            "username": user.username,
            "password": user.password,
            "from_addrs": list(from_addrs or []),
            "change_addr": change_addr,
        }

    def _tx_id(self, method: str, args) -> str:
        return self.requester.send_request(method, args, TxIDReply).tx_id

    def _asset_id(self, method: str, args) -> str:
        return self.requester.send_request(method, args, AssetIDReply).asset_id

    # Transactions

    def issue_tx(self, tx_bytes: bytes) -> str:
        """Issue a signed transaction; returns its ID."""
        return self._tx_id("issueTx", FormattedTx(tx=encode_hex(tx_bytes), encoding=HEX_ENCODING))

    def get_tx_status(self, tx_id: str) -> Status:
        return self.requester.send_request("getTxStatus", TxIDArgs(tx_id=tx_id), GetTxStatusReply).status

    def get_tx(self, tx_id: str) -> bytes:
        res = self.requester.send_request("getTx", GetTxArgs(tx_id=tx_id), FormattedTx)
        return decode_hex(res.tx)

    def get_utxos(
        self,
        addrs: list[str],
        limit: int = 0,
        start_address: str = "",
        start_utxo_id: str = "",
    ) -> tuple[list[bytes], Index]:
        """Return raw UTXOs controlled by ``addrs`` and the cursor to continue from."""
        args = GetUTXOsArgs(
            addresses=addrs,
            limit=limit,
            start_index=Index(address=start_address, utxo=start_utxo_id),
        )
        res = self.requester.send_request("getUTXOs", args, GetUTXOsReply)
        return [decode_hex(utxo) for utxo in res.utxos], res.end_index

    # Assets and balances

    def get_asset_description(self, asset_id: str) -> AssetDescription:
        return self.requester.send_request(
            "getAssetDescription", GetAssetDescriptionArgs(asset_id=asset_id), AssetDescription
        )

    def get_balance(self, addr: str, asset_id: str) -> BalanceReply:
        return self.requester.send_request("getBalance", GetBalanceArgs(address=addr, asset_id=asset_id), BalanceReply)

    def get_all_balances(self, addr: str) -> list[Balance]:
        return self.requester.send_request("getAllBalances", AddressReply(address=addr), GetAllBalancesReply).balances

    def create_fixed_cap_asset(
        self,
        user: UserPass,
        name: str,
        symbol: str,
        denomination: int,
        holders: list[Holder],
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        args = CreateAssetArgs(
            **self._spend(user, from_addrs, change_addr),
            name=name,
            symbol=symbol,
            denomination=denomination,
            initial_holders=holders,
        )
        return self._asset_id("createFixedCapAsset", args)

    def create_variable_cap_asset(
        self,
        user: UserPass,
        name: str,
        symbol: str,
        denomination: int,
        minters: list[Owners],
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        args = CreateAssetArgs(
            **self._spend(user, from_addrs, change_addr),
            name=name,
            symbol=symbol,
            denomination=denomination,
            minter_sets=minters,
        )
        return self._asset_id("createVariableCapAsset", args)

    def create_nft_asset(
        self,
        user: UserPass,
        name: str,
        symbol: str,
        minters: list[Owners],
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        args = CreateNFTAssetArgs(
            **self._spend(user, from_addrs, change_addr),
            name=name,
            symbol=symbol,
            minter_sets=minters,
        )
        return self._asset_id("createNFTAsset", args)

    # Keystore

    def create_address(self, user: UserPass) -> str:
        return self.requester.send_request("createAddress", user, AddressReply).address

    def list_addresses(self, user: UserPass) -> list[str]:
        return self.requester.send_request("listAddresses", user, AddressesReply).addresses

    def export_key(self, user: UserPass, addr: str) -> str:
        args = ExportKeyArgs(username=user.username, password=user.password, address=addr)
        return self.requester.send_request("exportKey", args, ExportKeyReply).private_key

    def import_key(self, user: UserPass, private_key: str) -> str:
        args = ImportKeyArgs(username=user.username, password=user.password, private_key=private_key)
        return self.requester.send_request("importKey", args, AddressReply).address

    # Spending

    def send(
        self,
        user: UserPass,
        amount: int,
        asset_id: str,
        to: str,
        from_addrs: list[str] | None = None,
        change_addr: str = "",
        memo: str = "",
    ) -> str:
        args = SendArgs(
            **self._spend(user, from_addrs, change_addr),
            amount=amount,
            asset_id=asset_id,
            to=to,
            memo=memo,
        )
        return self._tx_id("send", args)

    def send_multiple(
        self,
        user: UserPass,
        outputs: list[SendOutput],
        from_addrs: list[str] | None = None,
        change_addr: str = "",
        memo: str = "",
    ) -> str:
        args = SendMultipleArgs(**self._spend(user, from_addrs, change_addr), outputs=outputs, memo=memo)
        return self._tx_id("sendMultiple", args)

    def mint(
        self,
        user: UserPass,
        amount: int,
        asset_id: str,
        to: str,
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        args = MintArgs(**self._spend(user, from_addrs, change_addr), amount=amount, asset_id=asset_id, to=to)
        return self._tx_id("mint", args)

    def send_nft(
        self,
        user: UserPass,
        asset_id: str,
        group_id: int,
        to: str,
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        args = SendNFTArgs(
            **self._spend(user, from_addrs, change_addr),
            asset_id=asset_id,
            group_id=group_id,
            to=to,
        )
        return self._tx_id("sendNFT", args)

    def mint_nft(
        self,
        user: UserPass,
        asset_id: str,
        payload: bytes,
        to: str,
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        args = MintNFTArgs(
            **self._spend(user, from_addrs, change_addr),
            asset_id=asset_id,
            payload=encode_hex(payload),
            encoding=HEX_ENCODING,
            to=to,
        )
        return self._tx_id("mintNFT", args)

    # Cross-chain

    def import_avax(self, user: UserPass, to: str, source_chain: str) -> str:
        args = ImportArgs(username=user.username, password=user.password, to=to, source_chain=source_chain)
        return self._tx_id("importAVAX", args)

    def export_avax(
        self,
        user: UserPass,
        amount: int,
        to: str,
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        args = ExportAVAXArgs(**self._spend(user, from_addrs, change_addr), amount=amount, to=to)
        return self._tx_id("exportAVAX", args)

    def import_(self, user: UserPass, to: str, source_chain: str) -> str:
        """Import any asset from ``source_chain`` (``avm.import``)."""
        args = ImportArgs(username=user.username, password=user.password, to=to, source_chain=source_chain)
        return self._tx_id("import", args)

    def export(
        self,
        user: UserPass,
        amount: int,
        to: str,
        asset_id: str,
        from_addrs: list[str] | None = None,
        change_addr: str = "",
    ) -> str:
        """Export ``amount`` of ``asset_id`` to another chain (``avm.export``)."""
        args = ExportArgs(
            **self._spend(user, from_addrs, change_addr),
            amount=amount,
            to=to,
            asset_id=asset_id,
        )
        return self._tx_id("export", args)
