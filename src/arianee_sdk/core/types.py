"""
Type definitions for the Arianee SDK.

Enums and small data classes shared across the SDK packages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProtocolVersion(str, Enum):
    """Generation of the protocol contract suite a connection is bound to."""

    V1 = "v1"
    V2 = "v2"

    @classmethod
    def from_protocol_version(cls, protocol_version: str) -> ProtocolVersion:
        """Map a `protocolVersion` tag ("1.0", "1.5", "2.0", ...) to its generation."""
        version = str(protocol_version).strip()
        if version.startswith("1"):
            return cls.V1
        if version.startswith("2"):
            return cls.V2
        raise ValueError(f"Unsupported protocol version: {protocol_version}")


class TransactionStrategy(str, Enum):
    """What the transaction wrapper resolves with once a transaction is submitted."""

    WAIT_TRANSACTION_RECEIPT = "WAIT_TRANSACTION_RECEIPT"
    RETURN_TRANSACTION_HASH = "RETURN_TRANSACTION_HASH"

    @classmethod
    def from_string(cls, value: str) -> TransactionStrategy:
        """Parse strategy from string (case-insensitive)."""
        normalized = value.strip().upper()
        for strategy in cls:
            if strategy.value == normalized:
                return strategy
        raise ValueError(f"Unknown transaction strategy: {value}")


class ChainType(str, Enum):
    """Family of chains a protocol is deployed on."""

    TESTNET = "testnet"
    MAINNET = "mainnet"


class ProtocolV2NftInterface(str, Enum):
    """Interfaces a V2 nft contract may declare in `nftInterfaces`."""

    ERC721 = "ERC721"
    SMART_ASSET = "SmartAsset"
    SMART_ASSET_BURNABLE = "SmartAssetBurnable"
    SMART_ASSET_RECOVERABLE = "SmartAssetRecoverable"
    SMART_ASSET_SOULBOUND = "SmartAssetSoulbound"
    SMART_ASSET_UPDATABLE = "SmartAssetUpdatable"
    SMART_ASSET_URI_STORAGE = "SmartAssetURIStorage"
    SMART_ASSET_URI_STORAGE_OVERRIDABLE = "SmartAssetURIStorageOverridable"


class ProtocolV2Feature(str, Enum):
    """Collection features a V2 protocol may enable."""

    BURNABLE = "burnable"
    RECOVERABLE = "recoverable"
    URI_UPDATABLE = "uriUpdatable"
    IMPRINT_UPDATABLE = "imprintUpdatable"
    TRANSFERABLE = "transferable"


class InterfaceNeed(str, Enum):
    """Expected state of a V2 nft interface."""

    IMPLEMENTED = "Implemented"
    NOT_IMPLEMENTED = "NotImplemented"


class AccessTokenSubject(str, Enum):
    """Scope of an access token."""

    WALLET = "wallet"
    CERTIFICATE = "certificate"


@dataclass(frozen=True)
class SignatureResult:
    """A message (or transaction) and the 0x-hex signature produced for it."""

    message: Any
    signature: str


@dataclass(frozen=True)
class SmartAssetProtocol:
    """Protocol a smart asset lives on."""

    name: str
    chain_id: int


@dataclass(frozen=True)
class SmartAssetDescriptor:
    """Minimal description of a smart asset needed to share it."""

    certificate_id: str
    protocol: SmartAssetProtocol


@dataclass
class TransactionReceipt:
    """Mined transaction receipt, normalised from the JSON-RPC response."""

    transaction_hash: str
    block_number: int
    status: int
    gas_used: int
    effective_gas_price: int
    from_address: str | None = None
    to_address: str | None = None
    contract_address: str | None = None
    logs: list[dict[str, Any]] = field(default_factory=list)

    @property
    def fee(self) -> int:
        """Total fee paid in wei."""
        return self.gas_used * self.effective_gas_price

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_rpc(cls, data: dict[str, Any]) -> TransactionReceipt:
        """Build from an `eth_getTransactionReceipt` result."""

        def _int(value: Any) -> int:
            if value is None:
                return 0
            if isinstance(value, int):
                return value
            return int(value, 16)

        return cls(
            transaction_hash=data["transactionHash"],
            block_number=_int(data.get("blockNumber")),
            status=_int(data.get("status")),
            gas_used=_int(data.get("gasUsed")),
            effective_gas_price=_int(data.get("effectiveGasPrice") or data.get("gasPrice")),
            from_address=data.get("from"),
            to_address=data.get("to"),
            contract_address=data.get("contractAddress"),
            logs=list(data.get("logs") or []),
        )


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a write through the transaction wrapper."""

    hash: str
    receipt: TransactionReceipt | None = None


__all__ = [
    "ProtocolVersion",
    "TransactionStrategy",
    "ChainType",
    "ProtocolV2NftInterface",
    "ProtocolV2Feature",
    "InterfaceNeed",
    "AccessTokenSubject",
    "SignatureResult",
    "SmartAssetProtocol",
    "SmartAssetDescriptor",
    "TransactionReceipt",
    "TransactionResult",
]
