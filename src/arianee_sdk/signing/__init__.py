"""Signing identities."""

from arianee_sdk.signing.core import (
    DEFAULT_DERIVATION_PATH,
    Core,
    get_signature_values,
    recover_message_signer,
)

__all__ = [
    "Core",
    "DEFAULT_DERIVATION_PATH",
    "get_signature_values",
    "recover_message_signer",
]
