"""
Smart asset sharing token (SST) validation and redemption.

A service provider receives an SST (usually as the `SST` query parameter
of one of its URLs), checks it against the chain and can then transfer
the shared smart asset through the Permit721 contract.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlsplit

import httpx
from eth_utils import to_bytes

from arianee_sdk.access_token.jwt import DecodedToken
from arianee_sdk.access_token.token import ArianeeAccessToken
from arianee_sdk.core.exceptions import ArianeeError, ProtocolCompatibilityError, SharingTokenError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import AccessTokenSubject, ProtocolVersion
from arianee_sdk.permit721.signature_transfer import PermitTransferFrom
from arianee_sdk.protocol.client import ArianeeProtocolClient, V1Connection
from arianee_sdk.protocol.contract import PendingTransaction
from arianee_sdk.signing.core import Core

logger = get_logger("service_provider")

# transferFrom to the zero address always reverts on ERC721
DRY_RUN_ADDRESS = "0x0000000000000000000000000000000000000001"

PERMIT_TRANSFER_FROM = (
    "permitTransferFrom(((address,uint256),uint256,uint256),(address,uint256),address,bytes)"
)


@dataclass(frozen=True)
class SSTValidation:
    """Outcome of an SST check. All fields but `valid` are None on failure."""

    valid: bool
    owner: str | None = None
    token_id: str | None = None
    permit: PermitTransferFrom | None = None
    permit_sig: str | None = None
    protocol_slug: str | None = None


class ServiceProvider:
    """
    Validates and redeems sharing tokens.

    `core` is the service provider's own identity: it pays for and signs
    the redemption transfer.

    Example:
        >>> provider = ServiceProvider(Core.from_private_key(key))
        >>> sst = provider.extract_sst(request_url)
        >>> if sst and await provider.is_valid_sst(sst):
        ...     await provider.transfer_smart_asset(sst, to=customer_address)
    """

    SST_SEARCH_PARAM_KEY = "SST"

    def __init__(
        self,
        core: Core,
        client: ArianeeProtocolClient | None = None,
    ) -> None:
        self._core = core
        self.protocol_client = client or ArianeeProtocolClient(core)

    @property
    def permit721_address(self) -> str:
        return self.protocol_client.config.permit721_address

    # ─── Extraction ──────────────────────────────────────────────────

    def extract_sst(self, url: str) -> str | None:
        """The SST carried by `url`, or None if it has none."""
        key = self.SST_SEARCH_PARAM_KEY
        query = parse_qs(urlsplit(url).query, keep_blank_values=True)
        if key not in query:
            logger.warning(f"Could not extract SST: {key} is not present in the URL")
            return None
        sst = query[key][0]
        if not sst:
            logger.warning(f"Could not extract SST: {key} is empty")
            return None
        return sst

    @staticmethod
    def parse_sst(sst: str) -> DecodedToken:
        """
        Raises:
            AccessTokenError: If the SST is not a valid access token.
        """
        return ArianeeAccessToken.decode_jwt(sst)

    # ─── Validation ──────────────────────────────────────────────────

    async def is_valid_sst(
        self,
        sst: str,
        perform_dry_run: bool = False,
        should_throw: bool = False,
    ) -> bool:
        result = await self.validate_sst(sst, perform_dry_run, should_throw)
        return result.valid

    async def validate_sst(
        self,
        sst: str,
        perform_dry_run: bool = False,
        should_throw: bool = False,
    ) -> SSTValidation:
        """
        Check an SST end to end: token signature, scope, permit deadline,
        current owner, Permit721 approval and optionally a simulated transfer.

        Failures are logged and reported as `valid=False` unless
        `should_throw` is set.

        Raises:
            SharingTokenError: On a failed check, in throwing mode.
            ArianeeError: On protocol or RPC failures, in throwing mode.
            httpx.HTTPError: If protocol details cannot be fetched, in throwing mode.
        """
        try:
            return await self._validate(sst, perform_dry_run)
        except (ArianeeError, httpx.HTTPError) as e:
            if should_throw:
                raise
            logger.error(f"An error occurred while validating SST: {e}")
            return SSTValidation(valid=False)

    async def _validate(self, sst: str, perform_dry_run: bool) -> SSTValidation:
        if not ArianeeAccessToken.is_arianee_access_token_valid(sst):
            raise SharingTokenError("SST is not a valid AAT", reason="invalid_token")

        payload = self.parse_sst(sst).payload
        if payload.get("sub") != AccessTokenSubject.CERTIFICATE.value:
            raise SharingTokenError('Invalid AAT scope, should be "certificate"', reason="scope")
        if not payload.get("network"):
            raise SharingTokenError("Invalid AAT network", reason="network")

        raw_permit = payload.get("permit")
        if not isinstance(raw_permit, dict) or not raw_permit.get("permitted"):
            raise SharingTokenError("Invalid SST permit", reason="permit")
        permitted_id = raw_permit["permitted"].get("tokenId")
        if not permitted_id or permitted_id != payload.get("subId"):
            raise SharingTokenError(
                "Invalid SST permit tokenId, not matching AAT subId", reason="token_id"
            )
        permit_sig = payload.get("permitSig")
        if not permit_sig:
            raise SharingTokenError("Invalid SST permit signature", reason="permit_signature")

        protocol_slug = payload["network"]
        try:
            permit = PermitTransferFrom.from_dict(raw_permit)
        except (KeyError, TypeError, ValueError) as e:
            raise SharingTokenError(f"Invalid SST permit: {e!r}", reason="permit") from e

        now_seconds = int(time.time())
        if not permit.deadline > now_seconds:
            raise SharingTokenError(
                f"SST is expired (deadline: {permit.deadline}, now: {now_seconds})",
                reason="expired",
            )

        token_id = str(permit.permitted.token_id)
        connection = await self._connect(protocol_slug)

        owner = (await connection.smart_asset.call("ownerOf", int(token_id))).lower()
        issuer = (payload.get("iss") or "").lower()
        if not issuer:
            raise SharingTokenError("Invalid SST issuer", reason="issuer")
        if owner != issuer:
            raise SharingTokenError(
                f"Owner address {owner} is not the same as the one who signed the permit {issuer}",
                reason="owner_mismatch",
            )

        approved = await connection.smart_asset.call("getApproved", int(token_id))
        permit721 = self.permit721_address.lower()
        if not approved or approved.lower() != permit721:
            raise SharingTokenError(
                f"Owner {owner} has not approved Permit721 contract {permit721}",
                reason="not_approved",
            )

        if perform_dry_run:
            await self._transfer(connection, owner, token_id, permit, permit_sig, DRY_RUN_ADDRESS, True)

        return SSTValidation(
            valid=True,
            owner=owner,
            token_id=token_id,
            permit=permit,
            permit_sig=permit_sig,
            protocol_slug=protocol_slug,
        )

    # ─── Redemption ──────────────────────────────────────────────────

    async def transfer_smart_asset(
        self,
        sst: str,
        to: str,
        perform_dry_run: bool = False,
    ) -> PendingTransaction:
        """
        Validate `sst` (throwing mode) and transfer the shared smart asset to `to`.

        With `perform_dry_run`, the transfer is simulated first.
        """
        result = await self.validate_sst(sst, perform_dry_run=False, should_throw=True)
        connection = await self._connect(result.protocol_slug)  # type: ignore[arg-type]
        args = (connection, result.owner, result.token_id, result.permit, result.permit_sig, to)

        if perform_dry_run:
            await self._transfer(*args, True)  # type: ignore[arg-type]
        pending = await self._transfer(*args, False)  # type: ignore[arg-type]
        logger.info(f"Transferred smart asset {result.token_id} to {to}: {pending.hash}")
        return pending

    async def _transfer(
        self,
        connection: V1Connection,
        owner: str,
        token_id: str,
        permit: PermitTransferFrom,
        permit_sig: str,
        to: str,
        dry_run: bool,
    ) -> Any:
        args = (permit.as_abi_tuple(), (to, int(token_id)), owner, to_bytes(hexstr=permit_sig))
        if dry_run:
            return await connection.permit721.static_call(PERMIT_TRANSFER_FROM, *args)
        return await connection.permit721.transact(PERMIT_TRANSFER_FROM, *args)

    async def _connect(self, protocol_slug: str) -> V1Connection:
        connection = await self.protocol_client.connect(protocol_slug)
        if connection.version is not ProtocolVersion.V1:
            raise ProtocolCompatibilityError(
                "Protocol v2 is not supported yet",
                protocol_version=connection.protocol_details.protocol_version,
            )
        return connection  # type: ignore[return-value]


__all__ = [
    "DRY_RUN_ADDRESS",
    "SSTValidation",
    "ServiceProvider",
]
