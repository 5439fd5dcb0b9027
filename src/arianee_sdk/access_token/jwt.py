"""
Generic signed-token codec.

Tokens look like JWTs but are signed with an Ethereum personal_sign
signature: `base64(header).base64(payload).0x<65-byte signature>`.
The signature covers the `header.payload` string exactly as transmitted,
so verification never re-serializes the decoded JSON.
"""

from __future__ import annotations

import base64
import binascii
import json
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from eth_account import Account
from eth_account.messages import encode_defunct

HEADER_SECP256K1: dict[str, str] = {"typ": "JWT", "alg": "secp256k1"}
HEADER_ETH: dict[str, str] = {"typ": "JWT", "alg": "ETH"}

# Segments as produced by every issuer; tokens may carry a prefix before them
ENCODED_HEADER_SECP256K1 = "eyJ0eXAiOiJKV1QiLCJhbGciOiJzZWNwMjU2azEifQ=="
ENCODED_HEADER_ETH = "eyJ0eXAiOiJKV1QiLCJhbGciOiJFVEgifQ=="

Signer = Callable[[str], Awaitable[str]]


class TokenFormatError(ValueError):
    """The token string cannot be split or parsed."""


@dataclass(frozen=True)
class DecodedToken:
    """A token split into its parts."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signature: str
    prefix: str
    signed_message: str


def _now_ms() -> int:
    return int(time.time() * 1000)


def encode_segment(data: dict[str, Any]) -> str:
    """Standard base64 of compact JSON (insertion order kept)."""
    raw = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_segment(segment: str) -> dict[str, Any]:
    """Decode a base64 or base64url JSON segment."""
    normalized = segment.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        raw = base64.b64decode(normalized, validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TokenFormatError(f"Could not parse token segment: {e}") from e
    if not isinstance(data, dict):
        raise TokenFormatError("Token segment is not a JSON object")
    return data


def exp_in_ms(exp: int | float) -> int:
    """Expiration claims with 13 digits are milliseconds, anything else seconds."""
    exp = int(exp)
    return exp if len(str(exp)) == 13 else exp * 1000


async def sign_token(
    payload: dict[str, Any],
    signer: Signer,
    header: dict[str, Any] | None = None,
    prefix: str = "",
) -> str:
    """Encode `payload` and sign `prefix + header.payload` with `signer`."""
    encoded_header = encode_segment(header or HEADER_SECP256K1)
    encoded_payload = encode_segment(payload)
    message = f"{prefix}{encoded_header}.{encoded_payload}"
    signature = await signer(message)
    return f"{message}.{signature}"


def decode_token(token: str) -> DecodedToken:
    """
    Split a token into prefix, header, payload and signature.

    Raises:
        TokenFormatError: If the token is not three dot-separated segments
            or a segment is not base64 JSON.
    """
    if not isinstance(token, str) or not token:
        raise TokenFormatError("Token must be a non-empty string")

    known_header = next(
        (h for h in (ENCODED_HEADER_ETH, ENCODED_HEADER_SECP256K1) if f"{h}." in token),
        None,
    )
    if known_header is not None:
        prefix, remainder = token.split(f"{known_header}.", 1)
        parts = [known_header, *remainder.split(".")]
    else:
        prefix = ""
        parts = token.split(".")

    if len(parts) != 3 or not all(parts):
        raise TokenFormatError("Token must have exactly three segments")

    header_segment, payload_segment, signature = parts
    return DecodedToken(
        header=decode_segment(header_segment),
        payload=decode_segment(payload_segment),
        signature=signature,
        prefix=prefix,
        signed_message=f"{prefix}{header_segment}.{payload_segment}",
    )


def is_exp_valid(payload: dict[str, Any], time_before_exp: float = 0, now_ms: int | None = None) -> bool:
    """
    Whether `exp` is still more than `time_before_exp` seconds away.

    A `time_before_exp` of -1 skips the check.
    """
    if time_before_exp == -1:
        return True
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return False
    now = _now_ms() if now_ms is None else now_ms
    return now + time_before_exp * 1000 < exp_in_ms(exp)


def are_properties_valid(payload: dict[str, Any], time_before_exp: float = 0, now_ms: int | None = None) -> bool:
    """Check time-based claims (`exp`, and `nbf` when present)."""
    now = _now_ms() if now_ms is None else now_ms
    if not is_exp_valid(payload, time_before_exp, now):
        return False

    nbf = payload.get("nbf")
    if nbf is None:
        return True
    if not isinstance(nbf, (int, float)) or isinstance(nbf, bool):
        return False
    if nbf * 1000 > now:
        return False
    return True


def recover_signer(decoded: DecodedToken) -> str:
    """Address that produced the token signature."""
    return Account.recover_message(encode_defunct(text=decoded.signed_message), signature=decoded.signature)


def verify_token(decoded: DecodedToken, issuer: str, time_before_exp: float = 0) -> bool:
    """Signature recovers to `issuer` (case-insensitive) and time claims hold."""
    if not are_properties_valid(decoded.payload, time_before_exp):
        return False
    try:
        recovered = recover_signer(decoded)
    except Exception:
        return False
    return recovered.lower() == str(issuer).lower()
