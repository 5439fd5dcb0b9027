"""Protocol name to chain id / chain type lookups."""

from __future__ import annotations

from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import ChainType

logger = get_logger("chain")

# (protocol name, chain id) pairs per chain type
CHAIN_TYPE_IDS: dict[ChainType, list[tuple[str, int]]] = {
    ChainType.TESTNET: [
        ("testnet", 77),
        ("mumbai", 80001),
        ("arianeeTestnet", 42),
        ("testnetSbt", 77),
        ("tezostestnet", 42793),
        ("supernettestnet", 999118981),
        ("etherlinktestnet", 128123),
    ],
    ChainType.MAINNET: [
        ("mainnet", 99),
        ("polygon", 137),
        ("stadetoulousain", 137),
        ("ysl", 137),
        ("arialabs", 137),
        ("arianeeSupernet", 11891),
        ("arianeesbt", 11891),
        ("richemontsupernet", 11891),
    ],
}

DEFAULT_CHAIN_TYPE = ChainType.MAINNET
DEFAULT_PROTOCOL_NAME = "polygon"


def chain_ids_by_chain_type(chain_type: ChainType) -> list[int]:
    return [chain_id for _, chain_id in CHAIN_TYPE_IDS[chain_type]]


def chain_names_by_chain_type(chain_type: ChainType) -> list[str]:
    return [name for name, _ in CHAIN_TYPE_IDS[chain_type]]


def protocol_name_to_chain_type(protocol_name: str) -> ChainType:
    """Chain type of a known protocol name, mainnet when unknown."""
    for chain_type, chains in CHAIN_TYPE_IDS.items():
        if any(name == protocol_name for name, _ in chains):
            return chain_type
    logger.warning("No matching chain type found, returning default chain type")
    return DEFAULT_CHAIN_TYPE


def protocol_name_to_chain_id(protocol_name: str) -> int:
    """
    Chain id of a protocol.

    V2 slugs (`<chainId>-...`) carry the chain id as their first segment;
    V1 names are looked up, defaulting to polygon.
    """
    if "-" in protocol_name:
        return int(protocol_name.split("-")[0])
    for chains in CHAIN_TYPE_IDS.values():
        for name, chain_id in chains:
            if name == protocol_name:
                return chain_id
    logger.warning("No matching chain ID found, returning default chain ID")
    return protocol_name_to_chain_id(DEFAULT_PROTOCOL_NAME)


def get_chain_type_of(protocol_name: str) -> ChainType:
    return protocol_name_to_chain_type(protocol_name)
