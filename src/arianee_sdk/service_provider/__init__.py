"""Smart asset sharing token validation and redemption (service side)."""

from arianee_sdk.service_provider.provider import DRY_RUN_ADDRESS, SSTValidation, ServiceProvider

__all__ = [
    "DRY_RUN_ADDRESS",
    "SSTValidation",
    "ServiceProvider",
]
