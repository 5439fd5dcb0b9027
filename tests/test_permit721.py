"""
Tests for Permit721 typed data.
"""

import time

import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import keccak, to_hex

from arianee_sdk.core.exceptions import PermitError
from arianee_sdk.permit721 import (
    MAX_UINT256,
    PERMIT721_ADDRESS,
    PermitBatchTransferFrom,
    PermitTransferFrom,
    SignatureTransfer,
    TokenPermissions,
    Witness,
    to_deadline,
)

from conftest import TESTNET_SMART_ASSET

SPENDER = "0x7F9D9545629d784470045109e2206D997b5E8926"


def make_permit(token_id=749430, nonce=0, deadline=4855640626):
    return PermitTransferFrom(
        permitted=TokenPermissions(TESTNET_SMART_ASSET, token_id),
        spender=SPENDER,
        nonce=nonce,
        deadline=deadline,
    )


class TestPermitShapes:
    """Test permit serialisation."""

    def test_to_dict(self):
        assert make_permit().to_dict() == {
            "permitted": {"token": TESTNET_SMART_ASSET, "tokenId": 749430},
            "spender": SPENDER,
            "nonce": 0,
            "deadline": 4855640626,
        }

    def test_from_dict_coerces_numbers(self):
        permit = PermitTransferFrom.from_dict(
            {
                "permitted": {"token": TESTNET_SMART_ASSET, "tokenId": "749430"},
                "spender": SPENDER,
                "nonce": "3",
                "deadline": "4855640626",
            }
        )

        assert permit == make_permit(nonce=3)

    def test_as_abi_tuple(self):
        assert make_permit().as_abi_tuple() == ((TESTNET_SMART_ASSET, 749430), 0, 4855640626)


class TestGetPermitData:
    """Test SignatureTransfer.get_permit_data()."""

    def test_single(self):
        data = SignatureTransfer.get_permit_data(make_permit(), PERMIT721_ADDRESS, 77)

        assert data.domain == {
            "name": "Permit721",
            "chainId": 77,
            "verifyingContract": PERMIT721_ADDRESS,
        }
        assert data.primary_type == "PermitTransferFrom"
        assert data.values == make_permit().to_dict()

    def test_batch(self):
        permit = PermitBatchTransferFrom(
            permitted=[TokenPermissions(TESTNET_SMART_ASSET, 1), TokenPermissions(TESTNET_SMART_ASSET, 2)],
            spender=SPENDER,
            nonce=1,
            deadline=4855640626,
        )

        data = SignatureTransfer.get_permit_data(permit, PERMIT721_ADDRESS, 137)

        assert data.primary_type == "PermitBatchTransferFrom"
        assert [p["tokenId"] for p in data.values["permitted"]] == [1, 2]

    def test_witness(self):
        witness = Witness(
            witness={"recipient": SPENDER},
            witness_type_name="Recipient",
            witness_type={"Recipient": [{"name": "recipient", "type": "address"}]},
        )

        data = SignatureTransfer.get_permit_data(make_permit(), PERMIT721_ADDRESS, 77, witness)

        assert data.primary_type == "PermitWitnessTransferFrom"
        assert data.types["PermitWitnessTransferFrom"][-1] == {"name": "witness", "type": "Recipient"}
        assert data.types["Recipient"] == [{"name": "recipient", "type": "address"}]
        assert data.values["witness"] == {"recipient": SPENDER}

    @pytest.mark.parametrize(
        "permit,reason",
        [
            (make_permit(deadline=MAX_UINT256 + 1), "SIG_DEADLINE_OUT_OF_RANGE"),
            (make_permit(nonce=-1), "NONCE_OUT_OF_RANGE"),
            (make_permit(token_id=MAX_UINT256 + 1), "TOKEN_ID_OUT_OF_RANGE"),
        ],
    )
    def test_out_of_range(self, permit, reason):
        with pytest.raises(PermitError, match=reason):
            SignatureTransfer.get_permit_data(permit, PERMIT721_ADDRESS, 77)


class TestHash:
    """Test SignatureTransfer.hash()."""

    def test_hash_matches_signature(self, core):
        permit = make_permit()
        data = SignatureTransfer.get_permit_data(permit, PERMIT721_ADDRESS, 77)
        signable = encode_typed_data(
            domain_data=data.domain, message_types=dict(data.types), message_data=data.values
        )

        digest = SignatureTransfer.hash(permit, PERMIT721_ADDRESS, 77)

        assert digest == to_hex(keccak(b"\x19" + signable.version + signable.header + signable.body))
        assert len(digest) == 66

    @pytest.mark.asyncio
    async def test_core_signature_recovers(self, core):
        data = SignatureTransfer.get_permit_data(make_permit(), PERMIT721_ADDRESS, 77)
        signature = (await core.sign_typed_data(data.domain, data.types, data.values)).signature
        signable = encode_typed_data(
            domain_data=data.domain, message_types=dict(data.types), message_data=data.values
        )

        assert Account.recover_message(signable, signature=signature) == core.get_address()

    def test_hash_depends_on_chain(self):
        assert SignatureTransfer.hash(make_permit(), PERMIT721_ADDRESS, 77) != SignatureTransfer.hash(
            make_permit(), PERMIT721_ADDRESS, 137
        )


class TestToDeadline:
    """Test to_deadline()."""

    def test_relative_to_now(self):
        now = int(time.time())
        deadline = to_deadline(60_000)

        assert now + 59 <= deadline <= now + 61
