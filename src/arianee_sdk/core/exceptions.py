"""
Exception hierarchy for the Arianee SDK.

All SDK-specific exceptions inherit from ArianeeError and carry a `kind`
discriminator so callers can branch on a closed set of conditions without
relying on class identity alone.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of error conditions raised by the SDK."""

    GENERIC = "generic"
    CONFIGURATION = "configuration"
    PROTOCOL_NOT_FOUND = "protocol_not_found"
    PROTOCOL_COMPATIBILITY = "protocol_compatibility"
    NFT_INTERFACE = "nft_interface"
    UNAVAILABLE_FEATURE = "unavailable_feature"
    CAPABILITY = "capability"
    ACCESS_TOKEN = "access_token"
    AUTHENTICATION = "authentication"
    SHARING_TOKEN = "sharing_token"
    PERMIT = "permit"
    PRIVACY_GATEWAY = "privacy_gateway"
    CONTENT = "content"
    TIMEOUT = "timeout"
    RPC = "rpc"
    TRANSACTION = "transaction"
    DECODE = "decode"
    LINK = "link"
    INSUFFICIENT_CREDITS = "insufficient_credits"
    NOT_ISSUER = "not_issuer"
    IDENTITY_NOT_APPROVED = "identity_not_approved"
    NOT_OWNER = "not_owner"


class ArianeeError(Exception):
    """
    Base exception for all Arianee SDK errors.

    Catch this to handle any SDK-related exception, or switch on `kind`.

    Example:
        >>> try:
        ...     await client.connect("testnet")
        ... except ArianeeError as e:
        ...     if e.kind is ErrorKind.PROTOCOL_NOT_FOUND:
        ...         ...
    """

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ArianeeError):
    """
    Configuration is missing or invalid.

    Raised when:
    - Environment variables hold values that fail validation
    - An unknown transaction strategy or storage backend is requested
    """

    kind = ErrorKind.CONFIGURATION


# ─── Protocol errors ──────────────────────────────────────────────


class ProtocolNotFoundError(ArianeeError):
    """The protocol details resolver could not find the slug."""

    kind = ErrorKind.PROTOCOL_NOT_FOUND

    def __init__(self, slug: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"No protocol with slug {slug} found", details)
        self.slug = slug


class ProtocolCompatibilityError(ArianeeError):
    """
    The connected protocol version cannot serve the request.

    Raised when:
    - Protocol details advertise a version this SDK does not know
    - An operation is only implemented for one protocol generation
    """

    kind = ErrorKind.PROTOCOL_COMPATIBILITY

    def __init__(
        self,
        message: str,
        protocol_version: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.protocol_version = protocol_version


class CheckV2NftInterfaceError(ArianeeError):
    """A V2 nft contract does not satisfy a required interface need."""

    kind = ErrorKind.NFT_INTERFACE

    def __init__(
        self,
        message: str,
        interface: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.interface = interface


class UnavailableFeatureError(ArianeeError):
    """A feature is not available on the connected protocol."""

    kind = ErrorKind.UNAVAILABLE_FEATURE

    def __init__(
        self,
        message: str,
        feature: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.feature = feature


class CapabilityError(ArianeeError):
    """A signing core lacks the callable an operation needs."""

    kind = ErrorKind.CAPABILITY

    def __init__(
        self,
        capability: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{capability} is not implemented in Core", details)
        self.capability = capability


# ─── Token errors ─────────────────────────────────────────────────


class AccessTokenError(ArianeeError):
    """An access token is malformed, expired or carries a bad signature."""

    kind = ErrorKind.ACCESS_TOKEN


class AuthenticationError(ArianeeError):
    """The configured authentication cannot satisfy the requested operation."""

    kind = ErrorKind.AUTHENTICATION


class SharingTokenError(ArianeeError):
    """
    A smart asset sharing token failed validation.

    `reason` holds a short machine-friendly tag of the failed check
    (e.g. "scope", "expired", "owner_mismatch", "not_approved").
    """

    kind = ErrorKind.SHARING_TOKEN

    def __init__(
        self,
        message: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.reason = reason


class PermitError(ArianeeError):
    """A permit value is outside of its on-chain range."""

    kind = ErrorKind.PERMIT


# ─── Transport errors ─────────────────────────────────────────────


class PrivacyGatewayError(ArianeeError):
    """The privacy gateway answered with an error envelope or a failed status."""

    kind = ErrorKind.PRIVACY_GATEWAY

    def __init__(
        self,
        message: str,
        error_kind: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.error_kind = error_kind


class ContentError(ArianeeError):
    """Fetched content could not be parsed."""

    kind = ErrorKind.CONTENT


class FetchTimeoutError(ArianeeError):
    """An HTTP fetch exceeded its timeout."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, url: str, timeout_ms: int) -> None:
        super().__init__(f"Request to {url} timed out after {timeout_ms}ms")
        self.url = url
        self.timeout_ms = timeout_ms


class RpcError(ArianeeError):
    """A chain JSON-RPC call returned an error object."""

    kind = ErrorKind.RPC

    def __init__(
        self,
        message: str,
        code: int | None = None,
        data: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.code = code
        self.data = data


class TransactionError(ArianeeError):
    """A submitted transaction could not be confirmed."""

    kind = ErrorKind.TRANSACTION

    def __init__(
        self,
        message: str,
        tx_hash: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.tx_hash = tx_hash


class DecodeTransactionError(ArianeeError):
    """Raw call data did not match any known contract interface."""

    kind = ErrorKind.DECODE

    def __init__(self, reason: str) -> None:
        super().__init__(f"An error occured while decoding transaction: {reason}")
        self.reason = reason


class LinkError(ArianeeError):
    """A deep link could not be parsed."""

    kind = ErrorKind.LINK


# ─── Creator-side conditions ──────────────────────────────────────


class InsufficientCreditsError(ArianeeError):
    """The issuer lacks credits of the required type."""

    kind = ErrorKind.INSUFFICIENT_CREDITS

    def __init__(
        self,
        message: str,
        credit_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.credit_type = credit_type


class NotIssuerError(ArianeeError):
    """The caller is not the issuer of the smart asset."""

    kind = ErrorKind.NOT_ISSUER


class IdentityNotApprovedError(ArianeeError):
    """The issuer identity is not approved on the protocol."""

    kind = ErrorKind.IDENTITY_NOT_APPROVED


class NotOwnerError(ArianeeError):
    """The caller does not own the smart asset."""

    kind = ErrorKind.NOT_OWNER


__all__ = [
    "ErrorKind",
    "ArianeeError",
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
]
