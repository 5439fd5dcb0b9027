"""Arianee access tokens."""

from arianee_sdk.access_token.jwt import (
    ENCODED_HEADER_ETH,
    ENCODED_HEADER_SECP256K1,
    HEADER_ETH,
    HEADER_SECP256K1,
    DecodedToken,
    TokenFormatError,
    decode_token,
    is_exp_valid,
    sign_token,
    verify_token,
)
from arianee_sdk.access_token.token import (
    ACCESS_TOKEN_QUERY_PARAM,
    ArianeeAccessToken,
)

__all__ = [
    "ArianeeAccessToken",
    "ACCESS_TOKEN_QUERY_PARAM",
    "DecodedToken",
    "TokenFormatError",
    "decode_token",
    "sign_token",
    "verify_token",
    "is_exp_valid",
    "HEADER_SECP256K1",
    "HEADER_ETH",
    "ENCODED_HEADER_SECP256K1",
    "ENCODED_HEADER_ETH",
]
