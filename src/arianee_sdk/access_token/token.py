"""
Arianee Access Token (AAT) engine.

Issues wallet-scoped and certificate-scoped bearer tokens signed by a
`Core`, caches wallet tokens in a pluggable store and validates tokens
presented by third parties.
"""

from __future__ import annotations

import time
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from arianee_sdk.access_token.jwt import (
    DecodedToken,
    TokenFormatError,
    decode_token,
    exp_in_ms,
    sign_token,
    verify_token,
)
from arianee_sdk.core.config import Config
from arianee_sdk.core.exceptions import AccessTokenError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import AccessTokenSubject
from arianee_sdk.signing.core import Core
from arianee_sdk.storage import storage_from_config
from arianee_sdk.storage.base import StorageBackend

logger = get_logger("access_token")

DEFAULT_TIME_BEFORE_EXP = 10  # seconds
ACCESS_TOKEN_QUERY_PARAM = "arianeeAccessToken"

_CACHE_COLLECTION = "access_tokens"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _cache_key(sub: str, user_id: str | None, network: str | None) -> str:
    return f"{sub}:{user_id or ''}:{network or ''}"


class ArianeeAccessToken:
    """
    Issue and validate Arianee access tokens.

    Wallet tokens are cached per (subject, user id, network) in `storage`,
    by default the backend named by `config.storage_backend`, and reissued
    when they are about to expire. Certificate tokens are minted on every
    call. Token lifetime is `config.access_token_validity_ms`.

    Example:
        >>> aat = ArianeeAccessToken(Core.from_random())
        >>> token = await aat.get_valid_wallet_access_token()
        >>> ArianeeAccessToken.is_arianee_access_token_valid(token)
        True
    """

    def __init__(
        self,
        core: Core,
        storage: StorageBackend | None = None,
        validity_ms: int | None = None,
        config: Config | None = None,
    ) -> None:
        config = config or Config()
        self._core = core
        self._storage = storage or storage_from_config(config)
        self._validity_ms = config.access_token_validity_ms if validity_ms is None else validity_ms

    # ─── Issuance ────────────────────────────────────────────────────

    async def _generate(self, payload: dict[str, Any] | None = None) -> str:
        now = _now_ms()
        claims: dict[str, Any] = {
            "iss": self._core.get_address(),
            "sub": AccessTokenSubject.WALLET.value,
            "exp": now + self._validity_ms,
            "iat": now,
        }
        # Caller-supplied claims win over defaults
        claims.update(payload or {})

        async def signer(message: str) -> str:
            return (await self._core.sign_message(message)).signature

        return await sign_token(claims, signer)

    async def create_wallet_access_token(
        self,
        payload_override: dict[str, Any] | None = None,
        user_id: str | None = None,
    ) -> str:
        """Mint a new wallet-scoped token."""
        payload: dict[str, Any] = {}
        if user_id is not None:
            payload["id"] = user_id
        payload.update(payload_override or {})
        return await self._generate(payload)

    async def get_valid_wallet_access_token(
        self,
        payload_override: dict[str, Any] | None = None,
        time_before_exp: float = DEFAULT_TIME_BEFORE_EXP,
        user_id: str | None = None,
        network: str | None = None,
    ) -> str:
        """
        Return the cached wallet token, minting a new one when none is cached
        or the cached one expires within `time_before_exp` seconds.
        """
        key = _cache_key(AccessTokenSubject.WALLET.value, user_id, network)
        cached = await self._storage.get(_CACHE_COLLECTION, key)
        if cached and not self.is_exp_in_less_than(cached["token"], time_before_exp):
            return cached["token"]

        payload = dict(payload_override or {})
        if network is not None:
            payload.setdefault("network", network)
        token = await self.create_wallet_access_token(payload, user_id=user_id)
        await self._storage.save(
            _CACHE_COLLECTION,
            key,
            {"token": token, "stored_at": time.time()},
        )
        logger.debug(f"Issued wallet access token for {self._core.get_address()}")
        return token

    async def set_wallet_access_token(
        self,
        token: str,
        user_id: str | None = None,
        network: str | None = None,
    ) -> None:
        """Seed the cache with a token obtained elsewhere."""
        key = _cache_key(AccessTokenSubject.WALLET.value, user_id, network)
        await self._storage.save(_CACHE_COLLECTION, key, {"token": token, "stored_at": time.time()})

    async def invalidate(self, user_id: str | None = None, network: str | None = None) -> bool:
        """Drop the cached wallet token, if any."""
        key = _cache_key(AccessTokenSubject.WALLET.value, user_id, network)
        return await self._storage.delete(_CACHE_COLLECTION, key)

    async def clear_cache(self) -> int:
        """Drop every cached wallet token. Returns the number of tokens removed."""
        return await self._storage.clear(_CACHE_COLLECTION)

    async def create_certificate_arianee_access_token(
        self,
        certificate_id: int,
        network: str,
        payload_override: dict[str, Any] | None = None,
    ) -> str:
        """Mint a certificate-scoped token; overrides are applied last."""
        payload: dict[str, Any] = {
            "subId": certificate_id,
            "sub": AccessTokenSubject.CERTIFICATE.value,
            "network": network,
        }
        payload.update(payload_override or {})
        return await self._generate(payload)

    async def create_action_arianee_access_token_link(
        self,
        url: str,
        certificate_id: int,
        network: str,
    ) -> str:
        """Append a fresh certificate token to `url` as `arianeeAccessToken`."""
        token = await self.create_certificate_arianee_access_token(certificate_id, network)
        parts = urlsplit(url)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append((ACCESS_TOKEN_QUERY_PARAM, token))
        return urlunsplit(parts._replace(query=urlencode(query)))

    # ─── Validation ──────────────────────────────────────────────────

    @staticmethod
    def is_exp_in_less_than(token: str, time_before_exp: float) -> bool:
        """Whether the token expires within `time_before_exp` seconds (or is unreadable)."""
        try:
            payload = decode_token(token).payload
            return exp_in_ms(payload["exp"]) - _now_ms() < time_before_exp * 1000
        except (TokenFormatError, KeyError, TypeError, ValueError):
            return True

    @staticmethod
    def is_arianee_access_token_valid(token: str, ignore_expiration: bool = False) -> bool:
        """
        Signature recovers to the `iss` claim and the token is not expired.

        Never raises: malformed tokens are simply invalid.
        """
        try:
            decoded = decode_token(token)
        except TokenFormatError as e:
            logger.debug(f"Malformed access token: {e}")
            return False

        issuer = decoded.payload.get("iss")
        if not issuer:
            return False
        return verify_token(decoded, issuer, -1 if ignore_expiration else 0)

    @staticmethod
    def decode_jwt(token: str, ignore_expiration: bool = False) -> DecodedToken:
        """
        Decode a token after checking it.

        Raises:
            AccessTokenError: If the token is malformed, badly signed or expired.
        """
        try:
            decoded = decode_token(token)
        except TokenFormatError as e:
            raise AccessTokenError(f"ArianeeAccessToken could not be parsed: {e}") from e

        if not ArianeeAccessToken.is_arianee_access_token_valid(token, ignore_expiration):
            raise AccessTokenError("ArianeeAccessToken is not valid")
        return decoded
