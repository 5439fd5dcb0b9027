"""
ABI-driven contract bindings.

Encodes calls with eth-abi from ABI dicts and routes them through a
`JsonRpcProvider` (reads) or a `CoreSigner` (writes).
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

from eth_abi import decode, encode
from eth_utils import (
    collapse_if_tuple,
    function_abi_to_4byte_selector,
    to_checksum_address,
    to_hex,
)

from arianee_sdk.core.exceptions import ArianeeError, TransactionError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import TransactionReceipt
from arianee_sdk.protocol.provider import JsonRpcProvider
from arianee_sdk.protocol.signer import CoreSigner

logger = get_logger("protocol.contract")


def _types(params: list[dict[str, Any]]) -> list[str]:
    return [collapse_if_tuple(p) for p in params]


def _signature(fn_abi: dict[str, Any]) -> str:
    return f"{fn_abi['name']}({','.join(_types(fn_abi.get('inputs', [])))})"


def _normalize_output(abi_type: str, value: Any) -> Any:
    if abi_type == "address":
        return to_checksum_address(value)
    if abi_type.startswith("bytes") and isinstance(value, bytes):
        return to_hex(value)
    return value


class PendingTransaction:
    """A submitted transaction, awaitable for its receipt."""

    def __init__(self, hash: str, provider: JsonRpcProvider, poll_interval: float = 2.0) -> None:
        self.hash = hash
        self._provider = provider
        self._poll_interval = poll_interval

    async def wait(self, timeout: float | None = None) -> TransactionReceipt:
        """
        Poll until the transaction is mined (one confirmation).

        Raises:
            TransactionError: If the transaction reverted or `timeout`
                seconds elapsed without a receipt.
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        while True:
            receipt = await self._provider.get_transaction_receipt(self.hash)
            if receipt is not None:
                if not receipt.succeeded:
                    raise TransactionError("Transaction reverted", tx_hash=self.hash)
                return receipt
            if deadline is not None and time.monotonic() >= deadline:
                raise TransactionError(
                    "Could not retrieve the receipt of the transaction",
                    tx_hash=self.hash,
                )
            await asyncio.sleep(self._poll_interval)

    def __repr__(self) -> str:
        return f"PendingTransaction(hash={self.hash})"


class Contract:
    """
    Binding of one deployed contract.

    Functions are looked up by name, or by full signature
    (`"safeTransferFrom(address,address,uint256)"`) for overloads.

    Example:
        >>> owner = await contract.call("ownerOf", 42)
        >>> tx = await contract.transact("approve", spender, 42)
        >>> receipt = await tx.wait()
    """

    def __init__(
        self,
        address: str,
        abi: list[dict[str, Any]],
        provider: JsonRpcProvider,
        signer: CoreSigner | None = None,
        poll_interval: float = 2.0,
    ) -> None:
        self.address = to_checksum_address(address)
        self.abi = abi
        self.provider = provider
        self.signer = signer
        self._poll_interval = poll_interval

    def _find_function(self, name: str, args: tuple[Any, ...]) -> dict[str, Any]:
        functions = [f for f in self.abi if f.get("type") == "function"]
        if "(" in name:
            matches = [f for f in functions if _signature(f) == name]
        else:
            matches = [
                f for f in functions if f["name"] == name and len(f.get("inputs", [])) == len(args)
            ]
        if not matches:
            raise ArianeeError(
                f"Function {name} with {len(args)} argument(s) not found in contract ABI",
                {"address": self.address},
            )
        return matches[0]

    def encode(self, fn_name: str, *args: Any) -> str:
        """0x-hex call data for `fn_name(*args)`."""
        fn_abi = self._find_function(fn_name, args)
        selector = function_abi_to_4byte_selector(fn_abi)
        return to_hex(selector + encode(_types(fn_abi.get("inputs", [])), list(args)))

    def _decode_result(self, fn_abi: dict[str, Any], data: str) -> Any:
        outputs = fn_abi.get("outputs", [])
        if not outputs:
            return None
        types = _types(outputs)
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
        values = [_normalize_output(t, v) for t, v in zip(types, decode(types, raw))]
        return values[0] if len(values) == 1 else tuple(values)

    async def call(self, fn_name: str, *args: Any, block: str = "latest") -> Any:
        """Read-only call; single outputs are unwrapped."""
        fn_abi = self._find_function(fn_name, args)
        tx: dict[str, Any] = {"to": self.address, "data": self.encode(fn_name, *args)}
        result = await self.provider.call(tx, block)
        return self._decode_result(fn_abi, result)

    async def static_call(self, fn_name: str, *args: Any) -> Any:
        """Simulate a write from the signer's address without submitting it."""
        fn_abi = self._find_function(fn_name, args)
        tx: dict[str, Any] = {"to": self.address, "data": self.encode(fn_name, *args)}
        if self.signer is not None:
            tx["from"] = self.signer.address
        result = await self.provider.call(tx)
        return self._decode_result(fn_abi, result)

    async def transact(self, fn_name: str, *args: Any, **overrides: Any) -> PendingTransaction:
        """
        Submit a state-changing call through the signer.

        `overrides` are transaction fields (`gas`, `gasPrice`, `nonce`, `value`).
        """
        if self.signer is None:
            raise ArianeeError("A signer is required to send transactions", {"address": self.address})
        tx = {"to": self.address, "data": self.encode(fn_name, *args), **overrides}
        tx_hash = await self.signer.send_transaction(tx)
        logger.info(f"Sent {fn_name} to {self.address}: {tx_hash}")
        return PendingTransaction(tx_hash, self.provider, self._poll_interval)

    def __repr__(self) -> str:
        return f"Contract(address={self.address})"


__all__ = ["Contract", "PendingTransaction"]
