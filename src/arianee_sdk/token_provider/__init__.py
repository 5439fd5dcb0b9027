"""Smart asset sharing token issuance (owner side)."""

from arianee_sdk.token_provider.sst import DEFAULT_SST_VALIDITY_MS, approve_permit721, generate_sst

__all__ = [
    "DEFAULT_SST_VALIDITY_MS",
    "approve_permit721",
    "generate_sst",
]
