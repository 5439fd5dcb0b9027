"""Decode raw Arianee transactions against the known contract interfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak, to_checksum_address, to_hex

from arianee_sdk.core.exceptions import DecodeTransactionError
from arianee_sdk.utils.tx_abis import ARIANEE_ABI_GENERATIONS


@dataclass(frozen=True)
class FunctionFragment:
    """One function of a contract interface."""

    name: str
    signature: str
    input_types: tuple[str, ...]
    selector: bytes


@dataclass(frozen=True)
class DecodedArianeeTransaction:
    contract_name: str
    function_name: str
    function_args: list[Any] = field(default_factory=list)
    from_address: str = ""
    to_address: str = ""


def split_types(types: str) -> list[str]:
    """Split a comma-separated ABI type list, keeping tuples whole."""
    result: list[str] = []
    depth = 0
    current = ""
    for char in types:
        if char == "," and depth == 0:
            result.append(current)
            current = ""
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        current += char
    if current:
        result.append(current)
    return result


def parse_signature(signature: str) -> FunctionFragment:
    name, _, rest = signature.partition("(")
    return FunctionFragment(
        name=name,
        signature=signature,
        input_types=tuple(split_types(rest[:-1])),
        selector=keccak(text=signature)[:4],
    )


@lru_cache(maxsize=1)
def _registry() -> tuple[tuple[str, tuple[FunctionFragment, ...]], ...]:
    return tuple(
        (contract_name, tuple(parse_signature(sig) for sig in signatures))
        for generation in ARIANEE_ABI_GENERATIONS
        for contract_name, signatures in generation.items()
    )


def _normalize(abi_type: str, value: Any) -> Any:
    if abi_type.startswith("(") or abi_type.endswith("]"):
        if abi_type.endswith("]"):
            inner = abi_type[: abi_type.rindex("[")]
            return [_normalize(inner, v) for v in value]
        return [_normalize(t, v) for t, v in zip(split_types(abi_type[1:-1]), value)]
    if abi_type == "address":
        return to_checksum_address(value)
    if abi_type.startswith("bytes"):
        return to_hex(value)
    return value


def _hex_to_bytes(data: str | bytes) -> bytes:
    if isinstance(data, bytes):
        return data
    return bytes.fromhex(data[2:] if data.startswith("0x") else data)


def decode_transaction(transaction: dict[str, Any]) -> DecodedArianeeTransaction:
    """
    Find the contract function a transaction calls.

    Interfaces are tried in registry order and the first one whose selector
    matches and whose arguments decode wins.

    Raises:
        DecodeTransactionError: On missing `data`, `from` or `to`, or when no
            known interface matches ("No matching interface").
    """
    data = transaction.get("data")
    from_address = transaction.get("from")
    to_address = transaction.get("to")
    if not data:
        raise DecodeTransactionError("Missing data")
    if not from_address:
        raise DecodeTransactionError("Missing from")
    if not to_address:
        raise DecodeTransactionError("Missing to")

    try:
        raw = _hex_to_bytes(data)
    except ValueError:
        raise DecodeTransactionError("No matching interface") from None

    selector, payload = raw[:4], raw[4:]
    for contract_name, fragments in _registry():
        for fragment in fragments:
            if fragment.selector != selector:
                continue
            try:
                values = decode(list(fragment.input_types), payload)
            except (DecodingError, ValueError, OverflowError):
                continue
            return DecodedArianeeTransaction(
                contract_name=contract_name,
                function_name=fragment.name,
                function_args=[_normalize(t, v) for t, v in zip(fragment.input_types, values)],
                from_address=str(from_address),
                to_address=str(to_address),
            )

    raise DecodeTransactionError("No matching interface")


__all__ = [
    "DecodedArianeeTransaction",
    "FunctionFragment",
    "decode_transaction",
    "parse_signature",
    "split_types",
]
