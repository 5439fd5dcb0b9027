"""
Tests for the JSON-RPC provider, contract bindings and the core signer.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from eth_abi import encode
from eth_account import Account
from eth_utils import to_checksum_address

from arianee_sdk.core.exceptions import ArianeeError, FetchTimeoutError, RpcError, TransactionError
from arianee_sdk.protocol.abis import SMART_ASSET_V1_ABI
from arianee_sdk.protocol.contract import Contract, PendingTransaction
from arianee_sdk.protocol.provider import JsonRpcProvider
from arianee_sdk.protocol.signer import CoreSigner, GasStation
from arianee_sdk.utils.fetch import FetchResponse

from conftest import PRIVATE_KEY, TESTNET_SMART_ASSET, json_rpc_transport

RPC_URL = "https://rpc.test"
OWNER = "0x57743748483674faa8a3395a5142f81cb63b2849"
TX_HASH = "0x" + "cd" * 32


def make_provider(handler):
    return JsonRpcProvider(RPC_URL, http_client=httpx.AsyncClient(transport=json_rpc_transport(handler)))


def receipt(status):
    return {
        "transactionHash": TX_HASH,
        "blockNumber": "0x10",
        "status": status,
        "gasUsed": "0x5208",
        "effectiveGasPrice": "0x3b9aca00",
    }


class TestJsonRpcProvider:
    """Test JsonRpcProvider transport."""

    @pytest.mark.asyncio
    async def test_request(self):
        seen = []

        def handler(method, params):
            seen.append((method, params))
            return "0x4d"

        provider = make_provider(handler)

        assert await provider.chain_id() == 77
        assert seen == [("eth_chainId", [])]

    @pytest.mark.asyncio
    async def test_rpc_error(self):
        def handler(method, params):
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "execution reverted"}},
            )

        provider = make_provider(handler)

        with pytest.raises(RpcError) as exc_info:
            await provider.call({"to": TESTNET_SMART_ASSET, "data": "0x"})
        assert exc_info.value.code == -32000
        assert exc_info.value.message == "execution reverted"

    @pytest.mark.asyncio
    async def test_http_error(self):
        provider = make_provider(lambda method, params: httpx.Response(502, text="Bad gateway"))

        with pytest.raises(RpcError) as exc_info:
            await provider.gas_price()
        assert exc_info.value.code == 502

    @pytest.mark.asyncio
    async def test_timeout(self):
        def respond(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider = JsonRpcProvider(
            RPC_URL,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(respond)),
            timeout=1.5,
        )

        with pytest.raises(FetchTimeoutError):
            await provider.chain_id()

    @pytest.mark.asyncio
    async def test_connect_error(self):
        def respond(request):
            raise httpx.ConnectError("connection refused", request=request)

        provider = JsonRpcProvider(
            RPC_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(respond))
        )

        with pytest.raises(RpcError, match="connection refused") as exc_info:
            await provider.chain_id()
        assert exc_info.value.details["method"] == "eth_chainId"

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        provider = make_provider(lambda method, params: httpx.Response(200, text="<html>"))

        with pytest.raises(RpcError, match="invalid JSON"):
            await provider.chain_id()

    @pytest.mark.asyncio
    async def test_receipt(self):
        provider = make_provider(lambda method, params: receipt("0x1"))

        result = await provider.get_transaction_receipt(TX_HASH)

        assert result.block_number == 16
        assert result.succeeded is True
        assert result.fee == 21000 * 10**9

    @pytest.mark.asyncio
    async def test_receipt_pending(self):
        provider = make_provider(lambda method, params: None)

        assert await provider.get_transaction_receipt(TX_HASH) is None


class TestContract:
    """Test Contract encoding and calls."""

    @pytest.mark.asyncio
    async def test_call_decodes_address(self):
        calls = []

        def handler(method, params):
            calls.append(params[0])
            return "0x" + encode(["address"], [OWNER]).hex()

        contract = Contract(TESTNET_SMART_ASSET, SMART_ASSET_V1_ABI, make_provider(handler))

        owner = await contract.call("ownerOf", 749430)

        assert owner == to_checksum_address(OWNER)
        assert calls[0]["to"] == TESTNET_SMART_ASSET
        # ownerOf(uint256)
        assert calls[0]["data"].startswith("0x6352211e")

    def test_encode_by_signature(self):
        contract = Contract(TESTNET_SMART_ASSET, SMART_ASSET_V1_ABI, make_provider(lambda m, p: None))

        data = contract.encode("safeTransferFrom(address,address,uint256)", OWNER, OWNER, 1)

        assert data.startswith("0x42842e0e")

    def test_unknown_function(self):
        contract = Contract(TESTNET_SMART_ASSET, SMART_ASSET_V1_ABI, make_provider(lambda m, p: None))

        with pytest.raises(ArianeeError, match="not found in contract ABI"):
            contract.encode("doesNotExist", 1)

    @pytest.mark.asyncio
    async def test_transact_requires_signer(self):
        contract = Contract(TESTNET_SMART_ASSET, SMART_ASSET_V1_ABI, make_provider(lambda m, p: None))

        with pytest.raises(ArianeeError, match="signer is required"):
            await contract.transact("approve", OWNER, 1)

    @pytest.mark.asyncio
    async def test_transact(self):
        provider = make_provider(lambda m, p: None)
        signer = MagicMock()
        signer.send_transaction = AsyncMock(return_value=TX_HASH)
        contract = Contract(TESTNET_SMART_ASSET, SMART_ASSET_V1_ABI, provider, signer, poll_interval=0.001)

        pending = await contract.transact("approve", OWNER, 1)

        assert isinstance(pending, PendingTransaction)
        assert pending.hash == TX_HASH
        sent = signer.send_transaction.await_args.args[0]
        assert sent["to"] == TESTNET_SMART_ASSET
        assert sent["data"].startswith("0x095ea7b3")


class TestPendingTransaction:
    """Test PendingTransaction.wait()."""

    @pytest.mark.asyncio
    async def test_polls_until_mined(self):
        answers = iter([None, None, receipt("0x1")])
        provider = make_provider(lambda method, params: next(answers))

        result = await PendingTransaction(TX_HASH, provider, poll_interval=0.001).wait()

        assert result.transaction_hash == TX_HASH

    @pytest.mark.asyncio
    async def test_reverted(self):
        provider = make_provider(lambda method, params: receipt("0x0"))

        with pytest.raises(TransactionError) as exc_info:
            await PendingTransaction(TX_HASH, provider, poll_interval=0.001).wait()
        assert exc_info.value.tx_hash == TX_HASH

    @pytest.mark.asyncio
    async def test_timeout(self):
        provider = make_provider(lambda method, params: None)

        with pytest.raises(TransactionError, match="Could not retrieve"):
            await PendingTransaction(TX_HASH, provider, poll_interval=0.001).wait(timeout=0.01)


class TestGasStation:
    """Test GasStation price conversion."""

    @pytest.mark.asyncio
    async def test_standard_price_in_wei(self):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock(
            return_value=FetchResponse(
                url="https://gas", status_code=200, text='{"safeLow": 1, "standard": 1.5, "fast": 3}'
            )
        )

        price = await GasStation("https://gas", fetcher).get_gas_price()

        assert price == int(Decimal("1.5") * 10**9)


class TestCoreSigner:
    """Test CoreSigner transaction population and submission."""

    def rpc_handler(self, sent):
        def handler(method, params):
            if method == "eth_getTransactionCount":
                return "0x7"
            if method == "eth_estimateGas":
                return "0x5208"
            if method == "eth_gasPrice":
                return "0x3b9aca00"
            if method == "eth_getBlockByNumber":
                return {"baseFeePerGas": "0x64"}
            if method == "eth_maxPriorityFeePerGas":
                return "0xa"
            if method == "eth_sendRawTransaction":
                sent.append(params[0])
                return TX_HASH
            raise AssertionError(f"unexpected {method}")

        return handler

    @pytest.mark.asyncio
    async def test_legacy_chain(self, core):
        provider = make_provider(self.rpc_handler([]))
        signer = CoreSigner(core, provider, 77)

        tx = await signer.populate_transaction({"to": TESTNET_SMART_ASSET, "data": "0x"})

        assert tx["nonce"] == 7
        assert tx["gas"] == 21000
        assert tx["gasPrice"] == 10**9
        assert "maxFeePerGas" not in tx
        assert tx["chainId"] == 77

    @pytest.mark.asyncio
    async def test_eip1559_chain(self, core):
        provider = make_provider(self.rpc_handler([]))
        signer = CoreSigner(core, provider, 137)

        tx = await signer.populate_transaction({"to": TESTNET_SMART_ASSET, "data": "0x"})

        assert tx["maxPriorityFeePerGas"] == 10
        assert tx["maxFeePerGas"] == 100 * 2 + 10
        assert "gasPrice" not in tx

    @pytest.mark.asyncio
    async def test_gas_station_price(self, core):
        provider = make_provider(self.rpc_handler([]))
        gas_station = MagicMock()
        gas_station.get_gas_price = AsyncMock(return_value=42)
        signer = CoreSigner(core, provider, 137, gas_station)

        tx = await signer.populate_transaction({"to": TESTNET_SMART_ASSET})

        assert tx["gasPrice"] == 42
        assert "maxFeePerGas" not in tx

    @pytest.mark.asyncio
    async def test_gas_station_failure_falls_back(self, core):
        provider = make_provider(self.rpc_handler([]))
        gas_station = MagicMock()
        gas_station.get_gas_price = AsyncMock(side_effect=httpx.ConnectError("down"))
        signer = CoreSigner(core, provider, 77, gas_station)

        tx = await signer.populate_transaction({"to": TESTNET_SMART_ASSET})

        assert tx["gasPrice"] == 10**9

    @pytest.mark.asyncio
    async def test_send_signs_and_broadcasts(self, core):
        sent = []
        provider = make_provider(self.rpc_handler(sent))
        signer = CoreSigner(core, provider, 77)

        tx_hash = await signer.send_transaction({"to": TESTNET_SMART_ASSET, "data": "0x"})

        assert tx_hash == TX_HASH
        assert len(sent) == 1
        sender = Account.recover_transaction(sent[0])
        assert sender == Account.from_key(PRIVATE_KEY).address
