"""
Arianee privacy gateway client.

Reads and stores off-chain smart asset content (certificates, updates,
messages, events) through a brand's privacy gateway, a JSON-RPC 2.0
endpoint. Reads authenticate with a wallet access token, a raw bearer
token, a message/signature pair or a passphrase-derived signature.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Union

from arianee_sdk.access_token.token import ArianeeAccessToken
from arianee_sdk.core.config import Config
from arianee_sdk.core.exceptions import AuthenticationError, ContentError, PrivacyGatewayError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.signing.core import Core
from arianee_sdk.utils.fetch import Fetcher, FetchResponse, HttpFetcher

logger = get_logger("privacy_gateway")

RPC_HEADERS = {
    "Accept": "application/json, text/plain",
    "Content-Type": "application/json;charset=UTF-8",
}
RPC_ID = 2

# Raw bearer token, or a `{"message", "signature"}` pair
PrivacyGatewayAuth = Union[Core, str, dict[str, str]]


class PrivacyGatewayErrorKind(str, Enum):
    """Gateway error conditions, indexed by the JSON-RPC error `code`."""

    UNKNOWN = "unknown"
    NOT_FOUND = "notFound"
    UNAUTHORIZED = "unauthorized"
    INVALID_PARAMS = "invalidParams"
    ALREADY_EXISTS = "alreadyExists"
    INVALID_CONTENT = "invalidContent"
    INTERNAL = "internal"

    @classmethod
    def from_code(cls, code: Any) -> PrivacyGatewayErrorKind:
        members = list(cls)
        if isinstance(code, int) and 0 <= code < len(members):
            return members[code]
        return cls.UNKNOWN


def _is_signature_auth(auth: Any) -> bool:
    return isinstance(auth, dict) and "message" in auth and "signature" in auth


class ArianeePrivacyGatewayClient:
    """
    JSON-RPC client for privacy gateways.

    Example:
        >>> client = ArianeePrivacyGatewayClient(core)
        >>> content = await client.certificate_read(rpc_url, certificate_id="123")
    """

    def __init__(
        self,
        auth: PrivacyGatewayAuth,
        fetcher: Fetcher | None = None,
        access_token: ArianeeAccessToken | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = config or Config()
        self._auth = auth
        self._fetcher = fetcher or HttpFetcher(timeout=self.config.http_timeout)
        self._access_token = access_token

    # ─── Authentication ──────────────────────────────────────────────

    async def _get_arianee_access_token(self) -> str:
        if isinstance(self._auth, Core):
            if self._access_token is None:
                self._access_token = ArianeeAccessToken(self._auth, config=self.config)
            return await self._access_token.get_valid_wallet_access_token()
        if isinstance(self._auth, str):
            return self._auth
        raise AuthenticationError("Cannot get an arianee access token from this auth (message/signature)")

    async def _get_authentication(self) -> dict[str, str]:
        if _is_signature_auth(self._auth):
            return {"message": self._auth["message"], "signature": self._auth["signature"]}  # type: ignore[index]
        return {"bearer": await self._get_arianee_access_token()}

    @staticmethod
    async def _get_authentication_from(certificate_id: str, passphrase: str) -> dict[str, str]:
        """Sign a timestamped challenge with the passphrase-derived identity."""
        core = Core.from_pass_phrase(passphrase)
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        challenge = json.dumps(
            {"certificateId": certificate_id, "timestamp": timestamp},
            separators=(",", ":"),
        )
        result = await core.sign_message(challenge)
        return {"message": result.message, "signature": result.signature}

    async def _read_authentication(self, certificate_id: str, passphrase: str | None) -> dict[str, str]:
        if passphrase:
            return await self._get_authentication_from(certificate_id, passphrase)
        return await self._get_authentication()

    # ─── Transport ───────────────────────────────────────────────────

    async def _rpc_call(self, rpc_url: str, method: str, params: dict[str, Any]) -> Any:
        body = {"jsonrpc": "2.0", "method": method, "params": params, "id": RPC_ID}
        response = await self._fetcher.fetch(rpc_url, method="POST", headers=RPC_HEADERS, json_body=body)
        logger.debug(f"{method} on {rpc_url} -> {response.status_code}")
        return self._handle_rpc_response(response)

    @staticmethod
    def _handle_rpc_response(response: FetchResponse) -> Any:
        try:
            data = response.json()
        except ContentError:
            data = None

        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            raise PrivacyGatewayError(
                error.get("message", "Privacy gateway error"),
                PrivacyGatewayErrorKind.from_code(error.get("code")),
                {"code": error.get("code")},
            )
        if not response.ok:
            raise PrivacyGatewayError(
                f"Privacy gateway returned HTTP {response.status_code}",
                PrivacyGatewayErrorKind.UNKNOWN,
                {"status_code": response.status_code},
            )
        if not isinstance(data, dict) or "result" not in data:
            raise PrivacyGatewayError("Malformed privacy gateway response", PrivacyGatewayErrorKind.UNKNOWN)
        return data["result"]

    # ─── Certificates ────────────────────────────────────────────────

    async def certificate_read(
        self,
        rpc_url: str,
        certificate_id: str,
        passphrase: str | None = None,
    ) -> dict[str, Any]:
        authentication = await self._read_authentication(certificate_id, passphrase)
        return await self._rpc_call(
            rpc_url,
            "certificate.read",
            {"certificateId": certificate_id, "authentification": authentication},
        )

    async def certificate_create(self, rpc_url: str, certificate_id: str, content: dict[str, Any]) -> Any:
        return await self._rpc_call(
            rpc_url, "certificate.create", {"certificateId": certificate_id, "json": content}
        )

    # ─── Updates ─────────────────────────────────────────────────────

    async def update_read(
        self,
        rpc_url: str,
        certificate_id: str,
        passphrase: str | None = None,
    ) -> dict[str, Any]:
        authentication = await self._read_authentication(certificate_id, passphrase)
        return await self._rpc_call(
            rpc_url,
            "update.read",
            {"certificateId": certificate_id, "authentification": authentication},
        )

    async def update_create(self, rpc_url: str, certificate_id: str, content: dict[str, Any]) -> Any:
        return await self._rpc_call(
            rpc_url, "update.create", {"certificateId": certificate_id, "json": content}
        )

    # ─── Messages ────────────────────────────────────────────────────

    async def message_read(self, rpc_url: str, message_id: str) -> dict[str, Any]:
        """
        Raises:
            AuthenticationError: With message/signature authentication, which
                cannot read messages.
        """
        authentication = await self._get_authentication()
        if "message" in authentication or "signature" in authentication:
            raise AuthenticationError("Cannot read message with message/signature authentication")
        return await self._rpc_call(
            rpc_url,
            "message.read",
            {"messageId": message_id, "authentification": authentication},
        )

    async def message_create(self, rpc_url: str, message_id: str, content: dict[str, Any]) -> Any:
        return await self._rpc_call(rpc_url, "message.create", {"messageId": message_id, "json": content})

    # ─── Events ──────────────────────────────────────────────────────

    async def event_read(
        self,
        rpc_url: str,
        certificate_id: str,
        event_id: str,
        passphrase: str | None = None,
    ) -> dict[str, Any]:
        authentication = await self._read_authentication(certificate_id, passphrase)
        return await self._rpc_call(
            rpc_url,
            "event.read",
            {
                "certificateId": certificate_id,
                "eventId": event_id,
                "authentification": authentication,
            },
        )

    async def event_create(self, rpc_url: str, event_id: str, content: dict[str, Any]) -> Any:
        return await self._rpc_call(rpc_url, "event.create", {"eventId": event_id, "json": content})


__all__ = [
    "ArianeePrivacyGatewayClient",
    "PrivacyGatewayAuth",
    "PrivacyGatewayErrorKind",
    "RPC_HEADERS",
]
