"""
Arianee contract ABIs (as Python dicts).

Minimal interfaces: only the functions the SDK and its callers use are
declared. Bindings are built from these with `Contract`.
"""

from __future__ import annotations

from typing import Any

ABI = list[dict[str, Any]]


def _params(params: list[tuple[str, str]]) -> list[dict[str, str]]:
    return [{"name": name, "type": type_} for name, type_ in params]


def _function(
    name: str,
    inputs: list[tuple[str, str]] | None = None,
    outputs: list[tuple[str, str]] | None = None,
    mutability: str = "nonpayable",
) -> dict[str, Any]:
    return {
        "name": name,
        "type": "function",
        "stateMutability": mutability,
        "inputs": _params(inputs or []),
        "outputs": _params(outputs or []),
    }


def _view(name: str, inputs: list[tuple[str, str]], outputs: list[tuple[str, str]]) -> dict[str, Any]:
    return _function(name, inputs, outputs, mutability="view")


# ─── Shared ERC-721 surface ──────────────────────────────────────

_ERC721: ABI = [
    _view("balanceOf", [("owner", "address")], [("", "uint256")]),
    _view("ownerOf", [("tokenId", "uint256")], [("", "address")]),
    _view("getApproved", [("tokenId", "uint256")], [("", "address")]),
    _view("isApprovedForAll", [("owner", "address"), ("operator", "address")], [("", "bool")]),
    _view("tokenURI", [("tokenId", "uint256")], [("", "string")]),
    _function("approve", [("to", "address"), ("tokenId", "uint256")]),
    _function("setApprovalForAll", [("operator", "address"), ("approved", "bool")]),
    _function("transferFrom", [("from", "address"), ("to", "address"), ("tokenId", "uint256")]),
    _function("safeTransferFrom", [("from", "address"), ("to", "address"), ("tokenId", "uint256")]),
]

# ─── Protocol V1 ─────────────────────────────────────────────────

SMART_ASSET_V1_ABI: ABI = [
    *_ERC721,
    _view("tokenImprint", [("tokenId", "uint256")], [("", "bytes32")]),
    _view("issuerOf", [("tokenId", "uint256")], [("", "address")]),
    _view("tokenCreation", [("tokenId", "uint256")], [("", "uint256")]),
    _view("tokenRecoveryDate", [("tokenId", "uint256")], [("", "uint256")]),
    _view("isTokenValid", [("tokenId", "uint256"), ("hash", "bytes32"), ("tokenType", "uint256"), ("signature", "bytes")], [("", "bool")]),
    _function("addTokenAccess", [("tokenId", "uint256"), ("key", "address"), ("enable", "bool"), ("tokenType", "uint256")]),
    _function("recoverTokenToIssuer", [("tokenId", "uint256")]),
    _function("updateTokenURI", [("tokenId", "uint256"), ("uri", "string")]),
    _function("destroy", [("tokenId", "uint256")]),
    _function(
        "requestToken",
        [("tokenId", "uint256"), ("hash", "bytes32"), ("keepRequestToken", "bool"), ("providerOwner", "address"), ("signature", "bytes")],
    ),
]

STORE_V1_ABI: ABI = [
    _view("getCreditPrice", [("creditType", "uint256")], [("", "uint256")]),
    _function("buyCredit", [("creditType", "uint256"), ("quantity", "uint256"), ("to", "address")]),
    _function("reserveToken", [("id", "uint256"), ("to", "address")]),
    _function(
        "hydrateToken",
        [
            ("tokenId", "uint256"),
            ("imprint", "bytes32"),
            ("uri", "string"),
            ("encryptedInitialKey", "address"),
            ("tokenRecoveryTimestamp", "uint256"),
            ("initialKeyIsRequestKey", "bool"),
            ("providerBrand", "address"),
        ],
    ),
    _function(
        "createEvent",
        [("eventId", "uint256"), ("tokenId", "uint256"), ("imprint", "bytes32"), ("uri", "string"), ("providerBrand", "address")],
    ),
    _function("acceptEvent", [("eventId", "uint256"), ("providerOwner", "address")]),
    _function("refuseEvent", [("eventId", "uint256"), ("providerOwner", "address")]),
    _function("createMessage", [("messageId", "uint256"), ("tokenId", "uint256"), ("imprint", "bytes32"), ("providerBrand", "address")]),
    _function("readMessage", [("messageId", "uint256"), ("walletProvider", "address")]),
    _function("updateSmartAsset", [("tokenId", "uint256"), ("imprint", "bytes32"), ("providerBrand", "address")]),
]

IDENTITY_V1_ABI: ABI = [
    _view("addressIsApproved", [("identity", "address")], [("", "bool")]),
    _view("addressURI", [("identity", "address")], [("", "string")]),
    _view("addressImprint", [("identity", "address")], [("", "bytes32")]),
    _view("addressFromId", [("id", "bytes3")], [("", "address")]),
    _function("updateInformations", [("uri", "string"), ("imprint", "bytes32")]),
]

ARIA_V1_ABI: ABI = [
    _view("balanceOf", [("owner", "address")], [("", "uint256")]),
    _view("allowance", [("owner", "address"), ("spender", "address")], [("", "uint256")]),
    _function("approve", [("spender", "address"), ("value", "uint256")]),
    _function("transfer", [("to", "address"), ("value", "uint256")]),
]

CREDIT_HISTORY_V1_ABI: ABI = [
    _view("balanceOf", [("spender", "address"), ("creditType", "uint256")], [("", "uint256")]),
]

WHITELIST_V1_ABI: ABI = [
    _view("isAuthorized", [("tokenId", "uint256"), ("sender", "address"), ("tokenOwner", "address")], [("", "bool")]),
    _view("isBlacklisted", [("owner", "address"), ("sender", "address"), ("tokenId", "uint256")], [("", "bool")]),
    _function("addBlacklistedAddress", [("sender", "address"), ("tokenId", "uint256"), ("activate", "bool")]),
]

EVENT_V1_ABI: ABI = [
    _view("eventsLength", [("tokenId", "uint256")], [("", "uint256")]),
    _view(
        "getEvent",
        [("eventId", "uint256")],
        [("uri", "string"), ("imprint", "bytes32"), ("provider", "address"), ("timestamp", "uint256")],
    ),
    _view("pendingEvents", [("tokenId", "uint256"), ("index", "uint256")], [("", "uint256")]),
]

MESSAGE_V1_ABI: ABI = [
    _view("messageLengthByReceiver", [("receiver", "address")], [("", "uint256")]),
    _view(
        "messages",
        [("messageId", "uint256")],
        [("imprint", "bytes32"), ("sender", "address"), ("to", "address"), ("tokenId", "uint256")],
    ),
]

LOST_V1_ABI: ABI = [
    _view("isMissing", [("tokenId", "uint256")], [("", "bool")]),
    _view("isStolen", [("tokenId", "uint256")], [("", "bool")]),
    _function("setMissingStatus", [("tokenId", "uint256")]),
    _function("unsetMissingStatus", [("tokenId", "uint256")]),
]

USER_ACTION_V1_ABI: ABI = [
    _function("setLastTransferTimestamp", [("tokenId", "uint256")]),
]

UPDATE_SMART_ASSETS_V1_ABI: ABI = [
    _view("getUpdate", [("tokenId", "uint256")], [("imprint", "bytes32"), ("updateId", "uint256"), ("timestamp", "uint256")]),
]

_OWNERSHIP_PROOF_COMPONENTS = [
    {
        "name": "_proof",
        "type": "tuple",
        "components": [
            {"name": "_pA", "type": "uint256[2]"},
            {"name": "_pB", "type": "uint256[2][2]"},
            {"name": "_pC", "type": "uint256[2]"},
        ],
    },
    {"name": "_pubSignals", "type": "uint256[3]"},
]

ISSUER_PROXY_V1_1_ABI: ABI = [
    _view("commitmentHashes", [("tokenId", "uint256")], [("", "uint256")]),
    {
        "name": "updateTokenURI",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_ownershipProof", "type": "tuple", "components": _OWNERSHIP_PROOF_COMPONENTS},
            {"name": "_tokenId", "type": "uint256"},
            {"name": "_uri", "type": "string"},
        ],
        "outputs": [],
    },
]

CREDIT_NOTE_POOL_V1_1_ABI: ABI = [
    _view("nullifierHashes", [("nullifierHash", "uint256")], [("", "bool")]),
]

# ─── Protocol V2 ─────────────────────────────────────────────────

NFT_V2_ABI: ABI = [
    *_ERC721,
    _view("supportsInterface", [("interfaceId", "bytes4")], [("", "bool")]),
    _view("issuerOf", [("tokenId", "uint256")], [("", "address")]),
    _view("imprintOf", [("tokenId", "uint256")], [("", "bytes32")]),
    _function("burn", [("tokenId", "uint256")]),
    _function("recover", [("tokenId", "uint256")]),
    _function("setTokenURI", [("tokenId", "uint256"), ("uri", "string")]),
    _function("updateImprint", [("tokenId", "uint256"), ("imprint", "bytes32")]),
]

OWNERSHIP_REGISTRY_V2_ABI: ABI = [
    _view("ownerOf", [("nft", "address"), ("tokenId", "uint256")], [("", "address")]),
]

EVENT_HUB_V2_ABI: ABI = [
    _function(
        "createEvent",
        [("eventId", "uint256"), ("tokenId", "uint256"), ("imprint", "bytes32"), ("uri", "string"), ("provider", "address")],
    ),
    _function("acceptEvent", [("eventId", "uint256")]),
    _function("refuseEvent", [("eventId", "uint256")]),
]

MESSAGE_HUB_V2_ABI: ABI = [
    _function("sendMessage", [("messageId", "uint256"), ("tokenId", "uint256"), ("imprint", "bytes32"), ("provider", "address")]),
    _function("markAsRead", [("messageId", "uint256")]),
]

RULES_MANAGER_V2_ABI: ABI = [
    _view("getRule", [("nft", "address"), ("ruleId", "uint256")], [("", "bytes")]),
]

CREDIT_MANAGER_V2_ABI: ABI = [
    _view("balanceOf", [("owner", "address"), ("creditType", "uint256")], [("", "uint256")]),
    _function("buyCredits", [("creditType", "uint256"), ("quantity", "uint256"), ("to", "address")]),
]

# ─── Permit721 ───────────────────────────────────────────────────

PERMIT721_ABI: ABI = [
    _view("DOMAIN_SEPARATOR", [], [("", "bytes32")]),
    _view("nonceBitmap", [("owner", "address"), ("wordPos", "uint256")], [("", "uint256")]),
    _function("invalidateUnorderedNonces", [("wordPos", "uint256"), ("mask", "uint256")]),
    {
        "name": "permitTransferFrom",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "permit",
                "type": "tuple",
                "components": [
                    {
                        "name": "permitted",
                        "type": "tuple",
                        "components": [
                            {"name": "token", "type": "address"},
                            {"name": "tokenId", "type": "uint256"},
                        ],
                    },
                    {"name": "nonce", "type": "uint256"},
                    {"name": "deadline", "type": "uint256"},
                ],
            },
            {
                "name": "transferDetails",
                "type": "tuple",
                "components": [
                    {"name": "to", "type": "address"},
                    {"name": "requestedTokenId", "type": "uint256"},
                ],
            },
            {"name": "owner", "type": "address"},
            {"name": "signature", "type": "bytes"},
        ],
        "outputs": [],
    },
]
