"""Permit721 typed-data helpers."""

from arianee_sdk.permit721.signature_transfer import (
    MAX_SIG_DEADLINE,
    MAX_TOKEN_ID,
    MAX_UINT256,
    MAX_UNORDERED_NONCE,
    PERMIT721_ADDRESS,
    PermitBatchTransferFrom,
    PermitData,
    PermitTransferFrom,
    SignatureTransfer,
    TokenPermissions,
    Witness,
    permit721_domain,
    to_deadline,
)

__all__ = [
    "PERMIT721_ADDRESS",
    "MAX_UINT256",
    "MAX_TOKEN_ID",
    "MAX_UNORDERED_NONCE",
    "MAX_SIG_DEADLINE",
    "TokenPermissions",
    "PermitTransferFrom",
    "PermitBatchTransferFrom",
    "PermitData",
    "Witness",
    "SignatureTransfer",
    "permit721_domain",
    "to_deadline",
]
