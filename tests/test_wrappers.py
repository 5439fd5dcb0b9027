"""
Tests for the version-polymorphic call and transaction wrappers.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from arianee_sdk.core.config import Config
from arianee_sdk.core.exceptions import (
    ProtocolCompatibilityError,
    TransactionError,
    UnavailableFeatureError,
)
from arianee_sdk.core.types import ProtocolVersion, TransactionReceipt, TransactionStrategy
from arianee_sdk.protocol.wrappers import call_wrapper, transaction_wrapper

from conftest import make_v1_connection


def make_client(connection, strategy=TransactionStrategy.WAIT_TRANSACTION_RECEIPT):
    client = MagicMock()
    client.config = Config(transaction_strategy=strategy)
    client.connect = AsyncMock(return_value=connection)
    return client


def make_v2_connection():
    connection = MagicMock()
    connection.version = ProtocolVersion.V2
    return connection


def make_pending(receipt=None, error=None):
    pending = MagicMock()
    pending.hash = "0x" + "ab" * 32
    pending.wait = AsyncMock(return_value=receipt, side_effect=error)
    return pending


RECEIPT = TransactionReceipt(
    transaction_hash="0x" + "ab" * 32,
    block_number=12,
    status=1,
    gas_used=21000,
    effective_gas_price=1,
)


class TestCallWrapper:
    """Test call_wrapper()."""

    @pytest.mark.asyncio
    async def test_runs_v1_action(self):
        connection = make_v1_connection()
        client = make_client(connection)

        async def v1(protocol):
            assert protocol is connection
            return "v1-result"

        result = await call_wrapper(client, "testnet", v1, None)

        assert result == "v1-result"
        client.connect.assert_awaited_once_with("testnet", None)

    @pytest.mark.asyncio
    async def test_runs_v2_action(self):
        client = make_client(make_v2_connection())

        result = await call_wrapper(
            client,
            "137-0-arianee-0",
            AsyncMock(return_value="v1"),
            AsyncMock(return_value="v2"),
            "https://custom.rpc",
        )

        assert result == "v2"
        client.connect.assert_awaited_once_with("137-0-arianee-0", "https://custom.rpc")

    @pytest.mark.asyncio
    async def test_missing_action(self):
        client = make_client(make_v2_connection())

        with pytest.raises(UnavailableFeatureError, match="protocol v2"):
            await call_wrapper(client, "137-0-arianee-0", AsyncMock(), None)

    @pytest.mark.asyncio
    async def test_unknown_version(self):
        connection = MagicMock()
        connection.version = "v3"
        client = make_client(connection)

        with pytest.raises(ProtocolCompatibilityError):
            await call_wrapper(client, "slug", AsyncMock(), AsyncMock())

    @pytest.mark.asyncio
    async def test_action_errors_propagate(self):
        client = make_client(make_v1_connection())
        action = AsyncMock(side_effect=ValueError("boom"))

        with pytest.raises(ValueError, match="boom"):
            await call_wrapper(client, "testnet", action, None)
        action.assert_awaited_once()


class TestTransactionWrapper:
    """Test transaction_wrapper() strategies."""

    @pytest.mark.asyncio
    async def test_wait_receipt(self):
        pending = make_pending(receipt=RECEIPT)
        client = make_client(make_v1_connection())

        result = await transaction_wrapper(client, "testnet", AsyncMock(return_value=pending), None)

        assert result.hash == pending.hash
        assert result.receipt is RECEIPT
        pending.wait.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_return_hash(self):
        pending = make_pending(receipt=RECEIPT)
        client = make_client(make_v1_connection(), TransactionStrategy.RETURN_TRANSACTION_HASH)

        result = await transaction_wrapper(client, "testnet", AsyncMock(return_value=pending), None)

        assert result.hash == pending.hash
        assert result.receipt is None
        pending.wait.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reverted(self):
        pending = make_pending(error=TransactionError("Transaction reverted", tx_hash="0x01"))
        client = make_client(make_v1_connection())

        with pytest.raises(TransactionError, match="reverted"):
            await transaction_wrapper(client, "testnet", AsyncMock(return_value=pending), None)

    @pytest.mark.asyncio
    async def test_missing_v1_action(self):
        client = make_client(make_v1_connection())

        with pytest.raises(UnavailableFeatureError, match="protocol v1"):
            await transaction_wrapper(client, "testnet", None, AsyncMock())
