"""Protocol resolution, contract bindings and transaction wrappers."""

from arianee_sdk.protocol.client import (
    ArianeeProtocolClient,
    ProtocolConnection,
    ProtocolDetailsResolver,
    V1Connection,
    V2Connection,
    check_v2_nft_interface,
    requires_v2_feature,
)
from arianee_sdk.protocol.contract import Contract, PendingTransaction
from arianee_sdk.protocol.provider import JsonRpcProvider
from arianee_sdk.protocol.signer import LEGACY_TRANSACTION_CHAIN_IDS, CoreSigner, GasStation
from arianee_sdk.protocol.types import (
    ContractAddressesV1,
    ContractAddressesV2,
    ProtocolDetails,
    ProtocolDetailsV1,
    ProtocolDetailsV2,
    parse_protocol_details,
)
from arianee_sdk.protocol.wrappers import call_wrapper, transaction_wrapper

__all__ = [
    # Client
    "ArianeeProtocolClient",
    "ProtocolConnection",
    "ProtocolDetailsResolver",
    "V1Connection",
    "V2Connection",
    "check_v2_nft_interface",
    "requires_v2_feature",
    # Chain
    "Contract",
    "PendingTransaction",
    "JsonRpcProvider",
    "CoreSigner",
    "GasStation",
    "LEGACY_TRANSACTION_CHAIN_IDS",
    # Details
    "ContractAddressesV1",
    "ContractAddressesV2",
    "ProtocolDetails",
    "ProtocolDetailsV1",
    "ProtocolDetailsV2",
    "parse_protocol_details",
    # Wrappers
    "call_wrapper",
    "transaction_wrapper",
]
