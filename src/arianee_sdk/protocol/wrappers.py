"""
Version-polymorphic call and transaction wrappers.

Both connect to a slug, then run the callback matching the connection's
protocol version. Callback exceptions propagate unchanged and nothing is
retried: resubmitting a transaction is unsafe.
"""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from arianee_sdk.core.exceptions import ProtocolCompatibilityError, UnavailableFeatureError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import ProtocolVersion, TransactionResult, TransactionStrategy
from arianee_sdk.protocol.client import ArianeeProtocolClient, V1Connection, V2Connection
from arianee_sdk.protocol.contract import PendingTransaction

logger = get_logger("protocol.wrappers")

T = TypeVar("T")

V1Action = Callable[[V1Connection], Awaitable[T]]
V2Action = Callable[[V2Connection], Awaitable[T]]


async def _dispatch(
    client: ArianeeProtocolClient,
    slug: str,
    protocol_v1_action: V1Action | None,
    protocol_v2_action: V2Action | None,
    http_provider: str | None,
):
    connection = await client.connect(slug, http_provider)

    if connection.version is ProtocolVersion.V1:
        if protocol_v1_action is None:
            raise UnavailableFeatureError(f"This action is not available on protocol v1 ({slug})")
        return await protocol_v1_action(connection)  # type: ignore[arg-type]

    if connection.version is ProtocolVersion.V2:
        if protocol_v2_action is None:
            raise UnavailableFeatureError(f"This action is not available on protocol v2 ({slug})")
        return await protocol_v2_action(connection)  # type: ignore[arg-type]

    raise ProtocolCompatibilityError(f"This protocol is not yet supported ({slug})")


async def call_wrapper(
    client: ArianeeProtocolClient,
    slug: str,
    protocol_v1_action: V1Action | None,
    protocol_v2_action: V2Action | None,
    http_provider: str | None = None,
) -> T:
    """Run a read action against `slug` and return its result unmodified."""
    return await _dispatch(client, slug, protocol_v1_action, protocol_v2_action, http_provider)


async def transaction_wrapper(
    client: ArianeeProtocolClient,
    slug: str,
    protocol_v1_action: Callable[[V1Connection], Awaitable[PendingTransaction]] | None,
    protocol_v2_action: Callable[[V2Connection], Awaitable[PendingTransaction]] | None,
    http_provider: str | None = None,
) -> TransactionResult:
    """
    Run a write action against `slug` and apply the client's transaction strategy.

    `RETURN_TRANSACTION_HASH` resolves as soon as the transaction is
    submitted; `WAIT_TRANSACTION_RECEIPT` waits for its mined receipt.

    Raises:
        TransactionError: If the transaction reverted while waiting.
    """
    pending: PendingTransaction = await _dispatch(
        client, slug, protocol_v1_action, protocol_v2_action, http_provider
    )

    if client.config.transaction_strategy is TransactionStrategy.RETURN_TRANSACTION_HASH:
        return TransactionResult(hash=pending.hash)

    receipt = await pending.wait()
    logger.info(f"Transaction {pending.hash} mined in block {receipt.block_number}")
    return TransactionResult(hash=pending.hash, receipt=receipt)


__all__ = ["call_wrapper", "transaction_wrapper"]
