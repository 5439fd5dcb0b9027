"""
Arianee SDK - Python client for the Arianee smart asset protocol

Signing identities, access tokens, protocol connections, sharing tokens
and privacy gateway access.

Usage:
    >>> from arianee_sdk import ArianeeProtocolClient, Core, ProtocolVersion
    >>>
    >>> core = Core.from_private_key("0x...")
    >>> async with ArianeeProtocolClient(core) as client:
    ...     protocol = await client.connect("testnet")
    ...     if protocol.version is ProtocolVersion.V1:
    ...         owner = await protocol.smart_asset.call("ownerOf", 42)
"""

from arianee_sdk.access_token import ArianeeAccessToken
from arianee_sdk.core.config import Config
from arianee_sdk.core.exceptions import (
    AccessTokenError,
    ArianeeError,
    AuthenticationError,
    CapabilityError,
    CheckV2NftInterfaceError,
    ConfigurationError,
    ContentError,
    DecodeTransactionError,
    ErrorKind,
    FetchTimeoutError,
    IdentityNotApprovedError,
    InsufficientCreditsError,
    LinkError,
    NotIssuerError,
    NotOwnerError,
    PermitError,
    PrivacyGatewayError,
    ProtocolCompatibilityError,
    ProtocolNotFoundError,
    RpcError,
    SharingTokenError,
    TransactionError,
    UnavailableFeatureError,
)
from arianee_sdk.core.logging import configure_logging, get_logger
from arianee_sdk.core.types import (
    ChainType,
    InterfaceNeed,
    ProtocolV2Feature,
    ProtocolV2NftInterface,
    ProtocolVersion,
    SignatureResult,
    SmartAssetDescriptor,
    SmartAssetProtocol,
    TransactionReceipt,
    TransactionResult,
    TransactionStrategy,
)
from arianee_sdk.permit721 import PERMIT721_ADDRESS, PermitTransferFrom, SignatureTransfer
from arianee_sdk.privacy_gateway import ArianeePrivacyGatewayClient
from arianee_sdk.protocol import (
    ArianeeProtocolClient,
    V1Connection,
    V2Connection,
    call_wrapper,
    check_v2_nft_interface,
    requires_v2_feature,
    transaction_wrapper,
)
from arianee_sdk.service_provider import ServiceProvider, SSTValidation
from arianee_sdk.signing import Core
from arianee_sdk.token_provider import approve_permit721, generate_sst
from arianee_sdk.utils.links import create_link, read_arianee_link, read_link
from arianee_sdk.utils.tx import decode_transaction

__version__ = "0.1.0"

__all__ = [
    # Main entry points
    "Core",
    "ArianeeAccessToken",
    "ArianeeProtocolClient",
    "ArianeePrivacyGatewayClient",
    "ServiceProvider",
    "SSTValidation",
    "V1Connection",
    "V2Connection",
    # Operations
    "call_wrapper",
    "transaction_wrapper",
    "check_v2_nft_interface",
    "requires_v2_feature",
    "generate_sst",
    "approve_permit721",
    "decode_transaction",
    "read_link",
    "read_arianee_link",
    "create_link",
    # Permit721
    "PERMIT721_ADDRESS",
    "PermitTransferFrom",
    "SignatureTransfer",
    # Types
    "ChainType",
    "InterfaceNeed",
    "ProtocolV2Feature",
    "ProtocolV2NftInterface",
    "ProtocolVersion",
    "SignatureResult",
    "SmartAssetDescriptor",
    "SmartAssetProtocol",
    "TransactionReceipt",
    "TransactionResult",
    "TransactionStrategy",
    # Config & logging
    "Config",
    "configure_logging",
    "get_logger",
    # Exceptions
    "ArianeeError",
    "ErrorKind",
    "ConfigurationError",
    "ProtocolNotFoundError",
    "ProtocolCompatibilityError",
    "CheckV2NftInterfaceError",
    "UnavailableFeatureError",
    "CapabilityError",
    "AccessTokenError",
    "AuthenticationError",
    "SharingTokenError",
    "PermitError",
    "PrivacyGatewayError",
    "ContentError",
    "FetchTimeoutError",
    "RpcError",
    "TransactionError",
    "DecodeTransactionError",
    "LinkError",
    "InsufficientCreditsError",
    "NotIssuerError",
    "IdentityNotApprovedError",
    "NotOwnerError",
    "__version__",
]
