"""
Permit721 signature transfers.

EIP-712 typed data for the Permit721 contract, which moves ERC-721 tokens
on behalf of an owner who signed an off-chain permit.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from eth_account.messages import encode_typed_data
from eth_utils import keccak, to_hex

from arianee_sdk.core.exceptions import PermitError

PERMIT721_ADDRESS = "0x9d6ac3167db03d0b0aee75f5ed90c8b780f93585"
PERMIT721_DOMAIN_NAME = "Permit721"

MAX_UINT48 = 2**48 - 1
MAX_UINT160 = 2**160 - 1
MAX_UINT256 = 2**256 - 1

MAX_TOKEN_ID = MAX_UINT256
MAX_UNORDERED_NONCE = MAX_UINT256
MAX_SIG_DEADLINE = MAX_UINT256

TOKEN_PERMISSIONS_TYPE = [
    {"name": "token", "type": "address"},
    {"name": "tokenId", "type": "uint256"},
]

PERMIT_TRANSFER_FROM_TYPES: dict[str, list[dict[str, str]]] = {
    "PermitTransferFrom": [
        {"name": "permitted", "type": "TokenPermissions"},
        {"name": "spender", "type": "address"},
        {"name": "nonce", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
    ],
    "TokenPermissions": TOKEN_PERMISSIONS_TYPE,
}

PERMIT_BATCH_TRANSFER_FROM_TYPES: dict[str, list[dict[str, str]]] = {
    "PermitBatchTransferFrom": [
        {"name": "permitted", "type": "TokenPermissions[]"},
        {"name": "spender", "type": "address"},
        {"name": "nonce", "type": "uint256"},
        {"name": "deadline", "type": "uint256"},
    ],
    "TokenPermissions": TOKEN_PERMISSIONS_TYPE,
}


@dataclass(frozen=True)
class TokenPermissions:
    """Token contract and id a permit lets the spender move."""

    token: str
    token_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "tokenId": self.token_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenPermissions:
        return cls(token=data["token"], token_id=int(data["tokenId"]))


@dataclass(frozen=True)
class PermitTransferFrom:
    """Single-token permit."""

    permitted: TokenPermissions
    spender: str
    nonce: int
    deadline: int

    def to_dict(self) -> dict[str, Any]:
        """JSON shape embedded in sharing tokens and fed to EIP-712 signing."""
        return {
            "permitted": self.permitted.to_dict(),
            "spender": self.spender,
            "nonce": self.nonce,
            "deadline": self.deadline,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PermitTransferFrom:
        return cls(
            permitted=TokenPermissions.from_dict(data["permitted"]),
            spender=data["spender"],
            nonce=int(data["nonce"]),
            deadline=int(data["deadline"]),
        )

    def as_abi_tuple(self) -> tuple[tuple[str, int], int, int]:
        """`((address,uint256),uint256,uint256)` argument of `permitTransferFrom`."""
        return (self.permitted.token, self.permitted.token_id), self.nonce, self.deadline


@dataclass(frozen=True)
class PermitBatchTransferFrom:
    """Multi-token permit."""

    permitted: list[TokenPermissions]
    spender: str
    nonce: int
    deadline: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "permitted": [p.to_dict() for p in self.permitted],
            "spender": self.spender,
            "nonce": self.nonce,
            "deadline": self.deadline,
        }


@dataclass(frozen=True)
class Witness:
    """Extra typed struct signed alongside a permit."""

    witness: dict[str, Any]
    witness_type_name: str
    witness_type: dict[str, list[dict[str, str]]]


@dataclass(frozen=True)
class PermitData:
    """Domain, types and values ready for `eth_signTypedData`."""

    domain: dict[str, Any]
    types: dict[str, list[dict[str, str]]]
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def primary_type(self) -> str:
        return next(iter(self.types))


def permit721_domain(permit721_address: str, chain_id: int) -> dict[str, Any]:
    """EIP-712 domain of the Permit721 contract (no version field)."""
    return {
        "name": PERMIT721_DOMAIN_NAME,
        "chainId": chain_id,
        "verifyingContract": permit721_address,
    }


def _validate_token_permissions(permissions: TokenPermissions) -> None:
    if not 0 <= permissions.token_id <= MAX_TOKEN_ID:
        raise PermitError("TOKEN_ID_OUT_OF_RANGE")


def _with_witness(primary: str, batch: bool, witness: Witness) -> dict[str, list[dict[str, str]]]:
    return {
        primary: [
            {"name": "permitted", "type": "TokenPermissions[]" if batch else "TokenPermissions"},
            {"name": "spender", "type": "address"},
            {"name": "nonce", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
            {"name": "witness", "type": witness.witness_type_name},
        ],
        "TokenPermissions": TOKEN_PERMISSIONS_TYPE,
        **witness.witness_type,
    }


class SignatureTransfer:
    """Builders for Permit721 signature-transfer typed data."""

    @staticmethod
    def get_permit_data(
        permit: PermitTransferFrom | PermitBatchTransferFrom,
        permit721_address: str,
        chain_id: int,
        witness: Witness | None = None,
    ) -> PermitData:
        """
        Typed data for signing `permit`.

        Raises:
            PermitError: SIG_DEADLINE_OUT_OF_RANGE, NONCE_OUT_OF_RANGE or
                TOKEN_ID_OUT_OF_RANGE when a value exceeds uint256.
        """
        if not 0 <= permit.deadline <= MAX_SIG_DEADLINE:
            raise PermitError("SIG_DEADLINE_OUT_OF_RANGE")
        if not 0 <= permit.nonce <= MAX_UNORDERED_NONCE:
            raise PermitError("NONCE_OUT_OF_RANGE")

        domain = permit721_domain(permit721_address, chain_id)
        values = permit.to_dict()

        if isinstance(permit, PermitTransferFrom):
            _validate_token_permissions(permit.permitted)
            if witness:
                types = _with_witness("PermitWitnessTransferFrom", False, witness)
            else:
                types = PERMIT_TRANSFER_FROM_TYPES
        else:
            for permissions in permit.permitted:
                _validate_token_permissions(permissions)
            if witness:
                types = _with_witness("PermitBatchWitnessTransferFrom", True, witness)
            else:
                types = PERMIT_BATCH_TRANSFER_FROM_TYPES

        if witness:
            values["witness"] = witness.witness
        return PermitData(domain=domain, types=types, values=values)

    @staticmethod
    def hash(
        permit: PermitTransferFrom | PermitBatchTransferFrom,
        permit721_address: str,
        chain_id: int,
        witness: Witness | None = None,
    ) -> str:
        """EIP-712 digest of the permit, 0x-hex."""
        data = SignatureTransfer.get_permit_data(permit, permit721_address, chain_id, witness)
        signable = encode_typed_data(
            domain_data=data.domain,
            message_types=dict(data.types),
            message_data=data.values,
        )
        return to_hex(keccak(b"\x19" + signable.version + signable.header + signable.body))


def to_deadline(expiration_ms: int) -> int:
    """Convert a relative expiration in milliseconds to an absolute deadline in seconds."""
    return int((time.time() * 1000 + expiration_ms) // 1000)
