"""Privacy gateway JSON-RPC client."""

from arianee_sdk.privacy_gateway.client import (
    RPC_HEADERS,
    ArianeePrivacyGatewayClient,
    PrivacyGatewayAuth,
    PrivacyGatewayErrorKind,
)

__all__ = [
    "ArianeePrivacyGatewayClient",
    "PrivacyGatewayAuth",
    "PrivacyGatewayErrorKind",
    "RPC_HEADERS",
]
