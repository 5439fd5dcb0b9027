"""
Smart asset sharing token (SST) issuance.

An SST is a certificate access token whose payload embeds a Permit721
transfer permit and the owner's EIP-712 signature over it. Whoever holds
the token can transfer the smart asset to the permit's spender, once,
until the permit deadline.
"""

from __future__ import annotations

import secrets

from arianee_sdk.access_token.token import ArianeeAccessToken
from arianee_sdk.core.exceptions import ProtocolCompatibilityError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import ProtocolVersion, SmartAssetDescriptor, TransactionStrategy
from arianee_sdk.permit721.signature_transfer import (
    PERMIT721_ADDRESS,
    PermitTransferFrom,
    SignatureTransfer,
    TokenPermissions,
    to_deadline,
)
from arianee_sdk.protocol.client import ArianeeProtocolClient, V1Connection, V2Connection
from arianee_sdk.protocol.contract import PendingTransaction
from arianee_sdk.protocol.wrappers import call_wrapper, transaction_wrapper
from arianee_sdk.signing.core import Core

logger = get_logger("token_provider")

DEFAULT_SST_VALIDITY_MS = 1000 * 60 * 60 * 24 * 30  # 30 days
MAX_RANDOM_NONCE = 1_000_000


async def _v2_not_implemented(_: V2Connection):
    raise ProtocolCompatibilityError("Protocol v2 is not supported yet", protocol_version="2")


async def approve_permit721(
    core: Core,
    token_id: str | int,
    protocol_name: str,
    permit721_address: str = PERMIT721_ADDRESS,
    client: ArianeeProtocolClient | None = None,
) -> bool:
    """
    Make sure the Permit721 contract may move `token_id` on behalf of its owner.

    Reads the current approval and, when it is not the Permit721 contract,
    sends an `approve` transaction and waits for it to be mined.

    Returns:
        True if an approval transaction was sent.
    """
    client = client or ArianeeProtocolClient(core)
    permit721 = permit721_address.lower()

    async def get_approved(v1: V1Connection) -> str:
        return await v1.smart_asset.call("getApproved", int(token_id))

    approved = await call_wrapper(client, protocol_name, get_approved, _v2_not_implemented)
    if approved and approved.lower() == permit721:
        return False

    async def approve(v1: V1Connection) -> PendingTransaction:
        pending = await v1.smart_asset.transact("approve", permit721_address, int(token_id))
        if client.config.transaction_strategy is TransactionStrategy.RETURN_TRANSACTION_HASH:
            await pending.wait()
        return pending

    result = await transaction_wrapper(client, protocol_name, approve, _v2_not_implemented)
    logger.info(f"Approved Permit721 {permit721_address} for token {token_id} ({result.hash})")
    return True


async def generate_sst(
    smart_asset: SmartAssetDescriptor,
    core: Core,
    spender: str,
    deadline: int | None = None,
    nonce: int | None = None,
    permit721_address: str | None = None,
    client: ArianeeProtocolClient | None = None,
) -> str:
    """
    Issue a sharing token letting `spender` transfer `smart_asset`.

    Args:
        smart_asset: Asset to share, with the protocol it lives on
        core: Owner identity; must be able to sign typed data
        spender: Address allowed to redeem the permit
        deadline: Permit deadline in unix seconds, defaults to 30 days from now
        nonce: Permit nonce, random when omitted
        permit721_address: Permit721 contract, defaults to the canonical one
        client: Protocol client to reuse

    Raises:
        ProtocolCompatibilityError: If the asset lives on a V2 protocol.
    """
    client = client or ArianeeProtocolClient(core)
    permit721_address = permit721_address or client.config.permit721_address or PERMIT721_ADDRESS
    protocol_name = smart_asset.protocol.name

    await approve_permit721(
        core,
        smart_asset.certificate_id,
        protocol_name,
        permit721_address,
        client=client,
    )

    connection = await client.connect(protocol_name)
    if connection.version is not ProtocolVersion.V1:
        raise ProtocolCompatibilityError(
            "unsupported protocol version",
            protocol_version=connection.protocol_details.protocol_version,
        )

    exp = deadline if deadline is not None else to_deadline(DEFAULT_SST_VALIDITY_MS)
    permit = PermitTransferFrom(
        permitted=TokenPermissions(
            token=connection.protocol_details.contract_addresses.smart_asset,
            # subId of the access token is an int
            token_id=int(smart_asset.certificate_id),
        ),
        spender=spender,
        nonce=nonce if nonce is not None else secrets.randbelow(MAX_RANDOM_NONCE),
        deadline=exp,
    )
    data = SignatureTransfer.get_permit_data(permit, permit721_address, smart_asset.protocol.chain_id)
    permit_sig = (await core.sign_typed_data(data.domain, data.types, data.values)).signature

    # AAT exp is in ms, permit deadline in s
    access_token = ArianeeAccessToken(core, config=client.config)
    return await access_token.create_certificate_arianee_access_token(
        int(smart_asset.certificate_id),
        protocol_name,
        {"permit": permit.to_dict(), "permitSig": permit_sig, "exp": exp * 1000},
    )


__all__ = [
    "DEFAULT_SST_VALIDITY_MS",
    "approve_permit721",
    "generate_sst",
]
