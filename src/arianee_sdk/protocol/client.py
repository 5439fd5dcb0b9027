"""
Arianee protocol client.

Resolves a protocol slug to its deployment details and builds a
version-tagged connection (`V1Connection` or `V2Connection`) with one
contract binding per role.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Union

import httpx

from arianee_sdk.core.config import Config
from arianee_sdk.core.exceptions import (
    CheckV2NftInterfaceError,
    ContentError,
    ProtocolCompatibilityError,
    ProtocolNotFoundError,
    UnavailableFeatureError,
)
from arianee_sdk.core.logging import configure_logging, get_logger
from arianee_sdk.core.types import (
    InterfaceNeed,
    ProtocolV2Feature,
    ProtocolV2NftInterface,
    ProtocolVersion,
)
from arianee_sdk.protocol import abis
from arianee_sdk.protocol.contract import Contract
from arianee_sdk.protocol.provider import JsonRpcProvider
from arianee_sdk.protocol.signer import CoreSigner, GasStation
from arianee_sdk.protocol.types import (
    ProtocolDetails,
    ProtocolDetailsV1,
    ProtocolDetailsV2,
    parse_protocol_details,
)
from arianee_sdk.signing.core import Core
from arianee_sdk.utils.fetch import Fetcher, build_default_fetcher

logger = get_logger("protocol.client")

ProtocolDetailsResolver = Callable[[str], Awaitable[ProtocolDetails]]


# ─── Connections ─────────────────────────────────────────────────


@dataclass
class V1Connection:
    """Connection to a V1 contract suite."""

    slug: str
    protocol_details: ProtocolDetailsV1
    provider: JsonRpcProvider
    signer: CoreSigner | None
    permit721: Contract
    smart_asset: Contract
    identity: Contract
    aria: Contract
    store: Contract
    credit_history: Contract
    whitelist: Contract
    event: Contract
    message: Contract
    user_action: Contract
    update_smart_assets: Contract
    lost: Contract | None = None
    issuer_proxy: Contract | None = None
    credit_note_pool: Contract | None = None
    version: ProtocolVersion = field(default=ProtocolVersion.V1, init=False)

    async def get_native_balance(self, address: str) -> int:
        return await self.provider.get_balance(address)


@dataclass
class V2Connection:
    """Connection to a V2 contract suite."""

    slug: str
    protocol_details: ProtocolDetailsV2
    provider: JsonRpcProvider
    signer: CoreSigner | None
    permit721: Contract
    nft: Contract
    ownership_registry: Contract
    event_hub: Contract
    message_hub: Contract
    rules_manager: Contract
    credit_manager: Contract
    version: ProtocolVersion = field(default=ProtocolVersion.V2, init=False)

    async def get_native_balance(self, address: str) -> int:
        return await self.provider.get_balance(address)


ProtocolConnection = Union[V1Connection, V2Connection]


# ─── V2 capability checks ────────────────────────────────────────


def _v2_details(target: V2Connection | ProtocolDetailsV2) -> ProtocolDetailsV2:
    return target.protocol_details if isinstance(target, V2Connection) else target


def check_v2_nft_interface(
    target: V2Connection | ProtocolDetailsV2,
    nft_interface: ProtocolV2NftInterface | str,
    need: InterfaceNeed | str = InterfaceNeed.IMPLEMENTED,
    throw_if_need_not_satisfied: bool = True,
) -> bool:
    """
    Whether the nft contract's `nft_interface` support matches `need`.

    Raises:
        CheckV2NftInterfaceError: If the need is not satisfied and
            `throw_if_need_not_satisfied` is set.
        ContentError: If the protocol details declare no `nftInterfaces`.
    """
    details = _v2_details(target)
    if details.nft_interfaces is None:
        raise ContentError("Malformed protocol details: nftInterfaces must be defined")

    interface = ProtocolV2NftInterface(nft_interface).value
    need = InterfaceNeed(need)
    implemented = bool(details.nft_interfaces.get(interface))
    satisfied = implemented if need is InterfaceNeed.IMPLEMENTED else not implemented

    if throw_if_need_not_satisfied and not satisfied:
        negation = "not " if need is InterfaceNeed.IMPLEMENTED else ""
        raise CheckV2NftInterfaceError(
            f'Interface "{interface}" is {negation}implemented on the nft contract of this protocol',
            interface=interface,
        )
    return satisfied


def requires_v2_feature(
    feature: ProtocolV2Feature | str,
    target: V2Connection | ProtocolDetailsV2,
) -> None:
    """
    Raises:
        UnavailableFeatureError: If `feature` is not enabled on the protocol.
        ContentError: If the protocol details declare no `collectionFeatures`.
    """
    details = _v2_details(target)
    if details.collection_features is None:
        raise ContentError("Malformed protocol details: collectionFeatures must be defined")

    name = ProtocolV2Feature(feature).value
    if not details.collection_features.get(name):
        raise UnavailableFeatureError(f'Feature "{name}" is not available on this protocol', feature=name)


# ─── Client ──────────────────────────────────────────────────────


class ArianeeProtocolClient:
    """
    Connects to Arianee protocols by slug.

    Protocol details come from `resolver` (an async `slug -> ProtocolDetails`
    callable), by default a cached GET of
    `{config.protocol_details_url}/{slug}.json`. The client caches no
    connections; callers keep the ones they reuse.

    Example:
        >>> client = ArianeeProtocolClient(Core.from_private_key(key))
        >>> protocol = await client.connect("testnet")
        >>> if protocol.version is ProtocolVersion.V1:
        ...     owner = await protocol.smart_asset.call("ownerOf", 42)
    """

    def __init__(
        self,
        core: Core | None = None,
        fetcher: Fetcher | None = None,
        resolver: ProtocolDetailsResolver | None = None,
        config: Config | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.core = core
        self.config = config or Config()
        if self.config.log_level is not None:
            configure_logging(level=self.config.log_level.upper())
        self._fetcher = fetcher or build_default_fetcher(self.config)
        self._resolver = resolver or self._fetch_protocol_details
        self._http_client = http_client
        self._owns_client = False

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy-init HTTP client shared by the chain providers."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.http_timeout)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close owned HTTP client."""
        if self._owns_client and self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> ArianeeProtocolClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ─── Resolution ──────────────────────────────────────────────────

    async def _fetch_protocol_details(self, slug: str) -> ProtocolDetails:
        url = f"{self.config.protocol_details_url}/{slug}.json"
        response = await self._fetcher.fetch(url)
        if not response.ok:
            raise ProtocolNotFoundError(slug, {"status_code": response.status_code})
        return parse_protocol_details(response.json())

    async def get_protocol_details(self, slug: str) -> ProtocolDetails:
        return await self._resolver(slug)

    # ─── Connection ──────────────────────────────────────────────────

    async def connect(self, slug: str, http_provider: str | None = None) -> ProtocolConnection:
        """
        Resolve `slug` and build a connection to its contract suite.

        Args:
            slug: Protocol slug ("testnet", "polygon", "137-0-arianee-0", ...)
            http_provider: RPC endpoint overriding the one from protocol details

        Raises:
            ProtocolNotFoundError: If the resolver does not know `slug`.
            ProtocolCompatibilityError: If the protocol version is unsupported.
            CheckV2NftInterfaceError: If a V2 nft contract is not an ERC721.
        """
        details = await self.get_protocol_details(slug)
        provider = JsonRpcProvider(
            http_provider or details.http_provider,
            http_client=await self._get_client(),
            timeout=self.config.http_timeout,
        )
        gas_station = GasStation(details.gas_station, self._fetcher) if details.gas_station else None
        signer = CoreSigner(self.core, provider, details.chain_id, gas_station) if self.core else None

        def bind(address: str, abi: abis.ABI) -> Contract:
            return Contract(address, abi, provider, signer, poll_interval=self.config.receipt_poll_interval)

        permit721 = bind(self.config.permit721_address, abis.PERMIT721_ABI)

        if isinstance(details, ProtocolDetailsV1):
            addresses = details.contract_addresses
            logger.debug(f"Connected to {slug} (v{details.protocol_version})")
            return V1Connection(
                slug=slug,
                protocol_details=details,
                provider=provider,
                signer=signer,
                permit721=permit721,
                smart_asset=bind(addresses.smart_asset, abis.SMART_ASSET_V1_ABI),
                identity=bind(addresses.identity, abis.IDENTITY_V1_ABI),
                aria=bind(addresses.aria, abis.ARIA_V1_ABI),
                store=bind(addresses.store, abis.STORE_V1_ABI),
                credit_history=bind(addresses.credit_history, abis.CREDIT_HISTORY_V1_ABI),
                whitelist=bind(addresses.whitelist, abis.WHITELIST_V1_ABI),
                event=bind(addresses.event_arianee, abis.EVENT_V1_ABI),
                message=bind(addresses.message, abis.MESSAGE_V1_ABI),
                user_action=bind(addresses.user_action, abis.USER_ACTION_V1_ABI),
                update_smart_assets=bind(addresses.update_smart_assets, abis.UPDATE_SMART_ASSETS_V1_ABI),
                lost=bind(addresses.lost, abis.LOST_V1_ABI) if addresses.lost else None,
                issuer_proxy=(
                    bind(addresses.issuer_proxy, abis.ISSUER_PROXY_V1_1_ABI) if addresses.issuer_proxy else None
                ),
                credit_note_pool=(
                    bind(addresses.credit_note_pool, abis.CREDIT_NOTE_POOL_V1_1_ABI)
                    if addresses.credit_note_pool
                    else None
                ),
            )

        if isinstance(details, ProtocolDetailsV2):
            check_v2_nft_interface(details, ProtocolV2NftInterface.ERC721, InterfaceNeed.IMPLEMENTED)
            addresses_v2 = details.contract_addresses
            logger.debug(f"Connected to {slug} (v{details.protocol_version})")
            return V2Connection(
                slug=slug,
                protocol_details=details,
                provider=provider,
                signer=signer,
                permit721=permit721,
                nft=bind(addresses_v2.nft, abis.NFT_V2_ABI),
                ownership_registry=bind(addresses_v2.ownership_registry, abis.OWNERSHIP_REGISTRY_V2_ABI),
                event_hub=bind(addresses_v2.event_hub, abis.EVENT_HUB_V2_ABI),
                message_hub=bind(addresses_v2.message_hub, abis.MESSAGE_HUB_V2_ABI),
                rules_manager=bind(addresses_v2.rules_manager, abis.RULES_MANAGER_V2_ABI),
                credit_manager=bind(addresses_v2.credit_manager, abis.CREDIT_MANAGER_V2_ABI),
            )

        raise ProtocolCompatibilityError(f"This protocol is not yet supported ({slug})")


__all__ = [
    "ArianeeProtocolClient",
    "ProtocolConnection",
    "ProtocolDetailsResolver",
    "V1Connection",
    "V2Connection",
    "check_v2_nft_interface",
    "requires_v2_feature",
]
