"""Protocol details documents, as served per slug."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from arianee_sdk.core.exceptions import ContentError, ProtocolCompatibilityError
from arianee_sdk.core.types import ProtocolVersion

_V1_ADDRESS_KEYS = {
    "smart_asset": "smartAsset",
    "identity": "identity",
    "aria": "aria",
    "store": "store",
    "credit_history": "creditHistory",
    "whitelist": "whitelist",
    "event_arianee": "eventArianee",
    "message": "message",
    "user_action": "userAction",
    "update_smart_assets": "updateSmartAssets",
}
_V1_OPTIONAL_ADDRESS_KEYS = {
    "lost": "lost",
    "issuer_proxy": "issuerProxy",
    "credit_note_pool": "creditNotePool",
}
_V2_ADDRESS_KEYS = {
    "nft": "nft",
    "ownership_registry": "ownershipRegistry",
    "event_hub": "eventHub",
    "message_hub": "messageHub",
    "rules_manager": "rulesManager",
    "credit_manager": "creditManager",
}


@dataclass(frozen=True)
class ContractAddressesV1:
    smart_asset: str
    identity: str
    aria: str
    store: str
    credit_history: str
    whitelist: str
    event_arianee: str
    message: str
    user_action: str
    update_smart_assets: str
    lost: str | None = None
    issuer_proxy: str | None = None
    credit_note_pool: str | None = None


@dataclass(frozen=True)
class ContractAddressesV2:
    nft: str
    ownership_registry: str
    event_hub: str
    message_hub: str
    rules_manager: str
    credit_manager: str


@dataclass(frozen=True)
class ProtocolDetailsV1:
    """A V1 deployment ("1", "1.0", "1.1", "1.5")."""

    protocol_version: str
    chain_id: int
    http_provider: str
    contract_addresses: ContractAddressesV1
    gas_station: str | None = None
    soulbound: bool = False
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def version(self) -> ProtocolVersion:
        return ProtocolVersion.V1


@dataclass(frozen=True)
class ProtocolDetailsV2:
    """A V2 deployment ("2.0")."""

    protocol_version: str
    chain_id: int
    http_provider: str
    contract_addresses: ContractAddressesV2
    gas_station: str | None = None
    nft_interfaces: dict[str, bool] | None = None
    collection_features: dict[str, bool] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def version(self) -> ProtocolVersion:
        return ProtocolVersion.V2


ProtocolDetails = Union[ProtocolDetailsV1, ProtocolDetailsV2]


def _addresses(raw: dict[str, Any], required: dict[str, str], optional: dict[str, str] | None = None) -> dict[str, Any]:
    missing = [key for key in required.values() if not raw.get(key)]
    if missing:
        raise ContentError(
            "Malformed protocol details: missing contract addresses",
            {"missing": missing},
        )
    values = {attr: raw[key] for attr, key in required.items()}
    for attr, key in (optional or {}).items():
        values[attr] = raw.get(key) or None
    return values


def parse_protocol_details(data: dict[str, Any]) -> ProtocolDetails:
    """
    Build typed protocol details from a `contractAddresses/<slug>.json` document.

    Raises:
        ContentError: If required fields or contract addresses are missing.
        ProtocolCompatibilityError: If `protocolVersion` is not a known generation.
    """
    if not isinstance(data, dict):
        raise ContentError("Malformed protocol details: expected an object")

    for key in ("protocolVersion", "chainId", "httpProvider", "contractAdresses"):
        if key not in data:
            raise ContentError(f"Malformed protocol details: {key} must be defined")

    protocol_version = str(data["protocolVersion"])
    try:
        version = ProtocolVersion.from_protocol_version(protocol_version)
    except ValueError:
        raise ProtocolCompatibilityError(
            f"Unsupported protocol version: {protocol_version}",
            protocol_version=protocol_version,
        ) from None

    raw_addresses = data["contractAdresses"] or {}
    common = {
        "protocol_version": protocol_version,
        "chain_id": int(data["chainId"]),
        "http_provider": data["httpProvider"],
        "gas_station": data.get("gasStation") or None,
        "raw": data,
    }

    if version is ProtocolVersion.V1:
        return ProtocolDetailsV1(
            contract_addresses=ContractAddressesV1(
                **_addresses(raw_addresses, _V1_ADDRESS_KEYS, _V1_OPTIONAL_ADDRESS_KEYS)
            ),
            soulbound=bool(data.get("soulbound", False)),
            **common,
        )

    return ProtocolDetailsV2(
        contract_addresses=ContractAddressesV2(**_addresses(raw_addresses, _V2_ADDRESS_KEYS)),
        nft_interfaces=data.get("nftInterfaces"),
        collection_features=data.get("collectionFeatures"),
        **common,
    )
