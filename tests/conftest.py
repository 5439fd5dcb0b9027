import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from arianee_sdk.core.config import Config
from arianee_sdk.core.types import ProtocolVersion
from arianee_sdk.protocol.types import parse_protocol_details
from arianee_sdk.signing.core import Core
from arianee_sdk.storage.memory import InMemoryStorage
from arianee_sdk.utils.fetch import FetchResponse

PRIVATE_KEY = "0x353eb24be50ce3a8b8dc2518733625c66aa1b773b05913846f9c77bdad1ecd42"

TESTNET_SMART_ASSET = "0x512C1FCF401133680f373a386F3f752b98070BC5"

TESTNET_DETAILS: dict[str, Any] = {
    "protocolVersion": "1.0",
    "chainId": 77,
    "httpProvider": "https://sokol.poa.network",
    "gasStation": "https://cert.arianee.org/gasStation/testnet.json",
    "contractAdresses": {
        "aria": "0x" + "a1" * 20,
        "creditHistory": "0x" + "a2" * 20,
        "eventArianee": "0x" + "a3" * 20,
        "identity": "0x" + "a4" * 20,
        "smartAsset": TESTNET_SMART_ASSET,
        "store": "0x" + "a5" * 20,
        "whitelist": "0x3a125be5bb8a3e1c171947c384795b4a488b7a22",
        "lost": "0x" + "a6" * 20,
        "message": "0x" + "a7" * 20,
        "userAction": "0x" + "a8" * 20,
        "updateSmartAssets": "0x" + "a9" * 20,
    },
}

V2_DETAILS: dict[str, Any] = {
    "protocolVersion": "2.0",
    "chainId": 137,
    "httpProvider": "https://polygon.rpc",
    "contractAdresses": {
        "nft": "0x0000000000000000000000000000000000000a01",
        "ownershipRegistry": "0x0000000000000000000000000000000000000a02",
        "eventHub": "0x0000000000000000000000000000000000000a03",
        "messageHub": "0x0000000000000000000000000000000000000a04",
        "rulesManager": "0x0000000000000000000000000000000000000a05",
        "creditManager": "0x0000000000000000000000000000000000000a06",
    },
    "nftInterfaces": {"ERC721": True, "SmartAsset": True, "SmartAssetBurnable": False},
    "collectionFeatures": {"burnable": False, "transferable": True},
}


@pytest.fixture
def core():
    """Deterministic signing identity."""
    return Core.from_private_key(PRIVATE_KEY)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def config():
    return Config(receipt_poll_interval=0.001, fetch_retries=0)


@pytest.fixture
def testnet_details():
    return parse_protocol_details(json.loads(json.dumps(TESTNET_DETAILS)))


@pytest.fixture
def v2_details():
    return parse_protocol_details(json.loads(json.dumps(V2_DETAILS)))


@pytest.fixture
def fetcher():
    """Fetcher stub answering protocol details per slug."""
    documents = {"testnet": TESTNET_DETAILS, "v2net": V2_DETAILS}

    async def fetch(url, method="GET", headers=None, json_body=None, timeout=None):
        slug = url.rsplit("/", 1)[-1].removesuffix(".json")
        if slug not in documents:
            return FetchResponse(url=url, status_code=404, text="Not found", headers={})
        return FetchResponse(url=url, status_code=200, text=json.dumps(documents[slug]), headers={})

    mock = MagicMock()
    mock.fetch = AsyncMock(side_effect=fetch)
    return mock


def make_v1_connection(smart_asset=None, permit721=None, slug="testnet"):
    """V1 connection double; contract methods are AsyncMocks."""
    connection = MagicMock()
    connection.version = ProtocolVersion.V1
    connection.slug = slug
    connection.protocol_details = parse_protocol_details(json.loads(json.dumps(TESTNET_DETAILS)))
    connection.smart_asset = smart_asset or MagicMock(call=AsyncMock(), transact=AsyncMock())
    connection.permit721 = permit721 or MagicMock(static_call=AsyncMock(), transact=AsyncMock())
    return connection


def json_rpc_transport(handler):
    """httpx transport dispatching JSON-RPC bodies to `handler(method, params)`."""

    def respond(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        result = handler(body["method"], body.get("params", []))
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return httpx.MockTransport(respond)
