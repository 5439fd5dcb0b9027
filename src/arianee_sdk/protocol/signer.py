"""
Signer adapter routing chain writes through a `Core`.

`CoreSigner` holds a signing identity and a chain provider side by side.
It fills in the transaction fields a node needs (nonce, gas, chain id,
fees), optionally asks a gas station for a price, then either lets the
core relay the transaction or signs it and broadcasts the raw bytes.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from arianee_sdk.core.exceptions import RpcError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.protocol.provider import JsonRpcProvider
from arianee_sdk.signing.core import Core
from arianee_sdk.utils.fetch import Fetcher

logger = get_logger("protocol.signer")

# Chains without EIP-1559 support (Arianee POA testnet and mainnet)
LEGACY_TRANSACTION_CHAIN_IDS = frozenset({77, 99})

DEFAULT_PRIORITY_FEE = 1_500_000_000  # 1.5 gwei
GWEI = 10**9


class GasStation:
    """Gas price oracle answering `{"safeLow", "standard", "fast", "fastest"}` in gwei."""

    def __init__(self, url: str, fetcher: Fetcher) -> None:
        self.url = url
        self._fetcher = fetcher

    async def get_gas_price(self) -> int:
        """Recommended (`standard`) gas price in wei."""
        response = await self._fetcher.fetch(self.url)
        standard = response.json()["standard"]
        return int(Decimal(str(standard)) * GWEI)


class CoreSigner:
    """Composition of a `Core` and a `JsonRpcProvider` for one chain."""

    def __init__(
        self,
        core: Core,
        provider: JsonRpcProvider,
        chain_id: int,
        gas_station: GasStation | None = None,
    ) -> None:
        self.core = core
        self.provider = provider
        self.chain_id = chain_id
        self.gas_station = gas_station

    @property
    def address(self) -> str:
        return self.core.get_address()

    async def sign_message(self, message: str) -> str:
        return (await self.core.sign_message(message)).signature

    # ─── Transaction population ──────────────────────────────────────

    async def _gas_station_price(self) -> int | None:
        if self.gas_station is None:
            return None
        try:
            return await self.gas_station.get_gas_price()
        except Exception as e:
            logger.debug(f"Gas station unavailable, using node fees: {e}")
            return None

    async def _fill_fees(self, tx: dict[str, Any]) -> None:
        if tx.get("gasPrice") is None and tx.get("maxFeePerGas") is None:
            gas_price = await self._gas_station_price()
            if gas_price:
                tx["gasPrice"] = gas_price

        if self.chain_id in LEGACY_TRANSACTION_CHAIN_IDS:
            tx.pop("maxFeePerGas", None)
            tx.pop("maxPriorityFeePerGas", None)
            if tx.get("gasPrice") is None:
                tx["gasPrice"] = await self.provider.gas_price()
            return

        if tx.get("gasPrice") is not None or tx.get("maxFeePerGas") is not None:
            return

        block = await self.provider.get_block("latest")
        base_fee = block.get("baseFeePerGas") if block else None
        if base_fee is None:
            tx["gasPrice"] = await self.provider.gas_price()
            return

        try:
            priority_fee = await self.provider.max_priority_fee()
        except RpcError:
            priority_fee = DEFAULT_PRIORITY_FEE
        tx["maxPriorityFeePerGas"] = priority_fee
        base_fee = int(base_fee, 16) if isinstance(base_fee, str) else int(base_fee)
        tx["maxFeePerGas"] = base_fee * 2 + priority_fee

    async def populate_transaction(self, transaction: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of `transaction` with every field needed for signing."""
        tx = {k: v for k, v in transaction.items() if v is not None}
        tx["from"] = self.address
        tx["chainId"] = self.chain_id
        tx.setdefault("value", 0)
        tx.setdefault("data", "0x")

        if "nonce" not in tx:
            tx["nonce"] = await self.provider.get_transaction_count(self.address, "pending")
        if "gas" not in tx:
            tx["gas"] = await self.provider.estimate_gas(
                {k: tx[k] for k in ("from", "to", "data", "value") if k in tx}
            )

        await self._fill_fees(tx)
        return tx

    async def send_transaction(self, transaction: dict[str, Any]) -> str:
        """Submit a transaction; returns its hash."""
        if self.core.relays_transactions:
            # The relayer fills nonce and gas itself, only the price hint is forwarded
            tx = {k: v for k, v in transaction.items() if v is not None}
            tx["from"] = self.address
            if tx.get("gasPrice") is None:
                gas_price = await self._gas_station_price()
                if gas_price:
                    tx["gasPrice"] = gas_price
            return await self.core.send_transaction(tx)

        tx = await self.populate_transaction(transaction)
        signed = await self.core.sign_transaction(tx)
        tx_hash = await self.provider.send_raw_transaction(signed.signature)
        logger.debug(f"Broadcast transaction {tx_hash} from {self.address}")
        return tx_hash


__all__ = [
    "CoreSigner",
    "GasStation",
    "LEGACY_TRANSACTION_CHAIN_IDS",
]
