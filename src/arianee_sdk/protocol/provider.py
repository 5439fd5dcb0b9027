"""
Lightweight chain JSON-RPC provider.

Talks to the protocol's `httpProvider` with httpx. No web3.py dependency:
contracts are encoded with eth-abi in `Contract` and sent through
`eth_call` / `eth_sendRawTransaction` here.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from arianee_sdk.core.exceptions import FetchTimeoutError, RpcError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import TransactionReceipt

logger = get_logger("protocol.provider")


def _to_hex(value: int) -> str:
    return hex(value)


def _from_hex(value: str | int | None) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    return int(value, 16)


class JsonRpcProvider:
    """
    JSON-RPC client bound to one endpoint.

    Transactions are broadcast without comparing the returned hash to a
    locally computed one: relayers may forge a new transaction.
    """

    RPC_TIMEOUT = 30.0  # seconds

    def __init__(
        self,
        url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = RPC_TIMEOUT,
    ) -> None:
        self.url = url
        self._http_client = http_client
        self._owns_client = False
        self._timeout = timeout
        self._ids = itertools.count(1)

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy-init HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close owned HTTP client."""
        if self._owns_client and self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    # ─── Transport ───────────────────────────────────────────────────

    async def request(self, method: str, params: list[Any] | None = None) -> Any:
        """
        Perform one JSON-RPC call and return its `result`.

        Raises:
            RpcError: On a transport or HTTP failure, or an `error` object in
                the response.
            FetchTimeoutError: If the endpoint does not answer in time.
        """
        client = await self._get_client()
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }

        try:
            response = await client.post(self.url, json=payload, timeout=self._timeout)
        except httpx.TimeoutException:
            raise FetchTimeoutError(self.url, int(self._timeout * 1000)) from None
        except httpx.HTTPError as e:
            raise RpcError(f"RPC request failed: {e}", details={"method": method}) from e

        if response.status_code >= 400:
            raise RpcError(
                f"RPC endpoint returned HTTP {response.status_code}",
                code=response.status_code,
                details={"method": method},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RpcError("RPC endpoint returned invalid JSON", details={"method": method}) from e
        if not isinstance(body, dict):
            raise RpcError("RPC endpoint returned a non-object response", details={"method": method})
        if body.get("error"):
            error = body["error"]
            raise RpcError(
                error.get("message", "RPC error"),
                code=error.get("code"),
                data=error.get("data"),
                details={"method": method},
            )

        logger.debug(f"{method} -> ok")
        return body.get("result")

    # ─── Reads ───────────────────────────────────────────────────────

    async def chain_id(self) -> int:
        return _from_hex(await self.request("eth_chainId"))

    async def call(self, transaction: dict[str, Any], block: str = "latest") -> str:
        """`eth_call`; returns the 0x-hex return data."""
        return await self.request("eth_call", [transaction, block])

    async def get_balance(self, address: str, block: str = "latest") -> int:
        return _from_hex(await self.request("eth_getBalance", [address, block]))

    async def get_transaction_count(self, address: str, block: str = "pending") -> int:
        return _from_hex(await self.request("eth_getTransactionCount", [address, block]))

    async def gas_price(self) -> int:
        return _from_hex(await self.request("eth_gasPrice"))

    async def max_priority_fee(self) -> int:
        return _from_hex(await self.request("eth_maxPriorityFeePerGas"))

    async def estimate_gas(self, transaction: dict[str, Any]) -> int:
        rpc_tx = {k: (_to_hex(v) if isinstance(v, int) else v) for k, v in transaction.items()}
        return _from_hex(await self.request("eth_estimateGas", [rpc_tx]))

    async def get_block(self, block: str = "latest") -> dict[str, Any] | None:
        return await self.request("eth_getBlockByNumber", [block, False])

    async def get_transaction_receipt(self, tx_hash: str) -> TransactionReceipt | None:
        result = await self.request("eth_getTransactionReceipt", [tx_hash])
        if not result:
            return None
        return TransactionReceipt.from_rpc(result)

    # ─── Writes ──────────────────────────────────────────────────────

    async def send_raw_transaction(self, raw_transaction: str) -> str:
        """Broadcast a signed transaction; returns the hash reported by the node."""
        return await self.request("eth_sendRawTransaction", [raw_transaction])


__all__ = ["JsonRpcProvider"]
