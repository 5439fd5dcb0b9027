"""
Function signatures of the Arianee contracts, per ABI generation.

Only state-changing functions are listed since only they appear in
transaction call data. Order matters: the decoder returns the first
contract whose interface matches, so generations are listed oldest first
and contracts alphabetically within a generation.
"""

from __future__ import annotations

ARIANEE_ABIS_V1: dict[str, list[str]] = {
    "Aria_v1": [
        "approve(address,uint256)",
        "decreaseApproval(address,uint256)",
        "increaseApproval(address,uint256)",
        "transfer(address,uint256)",
        "transferFrom(address,address,uint256)",
    ],
    "ArianeeCreditHistory_v1": [
        "addCreditHistory(address,uint256,uint256,uint256)",
        "consumeCredits(address,uint256,uint256)",
        "setArianeeStoreAddress(address)",
    ],
    "ArianeeEvent_v1": [
        "accept(uint256,address)",
        "create(uint256,uint256,bytes32,string,address,uint256)",
        "destroy(uint256)",
        "invalidateDestroy(uint256)",
        "refuse(uint256,address)",
        "setStoreAddress(address)",
        "updateDestroyRequest(uint256,bool)",
        "validDestroy(uint256)",
    ],
    "ArianeeIdentity_v1": [
        "addAddressToApprovedList(address)",
        "addShortId(address,bytes3)",
        "removeAddressFromApprovedList(address)",
        "unapproveAndRemove(address)",
        "updateInformations(string,bytes32)",
        "validateInformation(address,string,bytes32)",
    ],
    "ArianeeLost_v1": [
        "setAuthorizedIdentity(address)",
        "setManagerIdentity(address)",
        "setMissingStatus(uint256)",
        "setStolenStatus(uint256)",
        "unsetAuthorizedIdentity(address)",
        "unsetMissingStatus(uint256)",
        "unsetStolenStatus(uint256)",
    ],
    "ArianeeMessage_v1": [
        "readMessage(uint256,address)",
        "sendMessage(uint256,uint256,bytes32,address,uint256)",
    ],
    "ArianeeSmartAsset_v1": [
        "addTokenAccess(uint256,address,bool,uint256)",
        "approve(address,uint256)",
        "hydrateToken(uint256,bytes32,string,address,uint256,bool,address)",
        "recoverTokenToIssuer(uint256)",
        "requestToken(uint256,bytes32,bool,address,bytes)",
        "requestToken(uint256,bytes32,bool,address,bytes,address)",
        "reserveToken(uint256,address)",
        "safeTransferFrom(address,address,uint256)",
        "safeTransferFrom(address,address,uint256,bytes)",
        "setApprovalForAll(address,bool)",
        "transferFrom(address,address,uint256)",
        "updateRecoveryRequest(uint256,bool)",
        "updateTokenURI(uint256,string)",
        "validRecoveryRequest(uint256)",
    ],
    "ArianeeStore_v1": [
        "acceptEvent(uint256,address)",
        "buyCredit(uint256,uint256,address)",
        "createEvent(uint256,uint256,bytes32,string,address)",
        "createMessage(uint256,uint256,bytes32,address)",
        "hydrateToken(uint256,bytes32,string,address,uint256,bool,address)",
        "readMessage(uint256,address)",
        "refuseEvent(uint256,address)",
        "requestToken(uint256,bytes32,bool,address,bytes)",
        "requestToken(uint256,bytes32,bool,address,bytes,address)",
        "reserveToken(uint256,address)",
        "setArianeeProjectAddress(address)",
        "updateSmartAsset(uint256,bytes32,address)",
        "withdrawArias()",
    ],
    "ArianeeUpdate_v1": [
        "readUpdateSmartAsset(uint256,address)",
        "updateSmartAsset(uint256,bytes32,uint256)",
    ],
    "ArianeeUserAction_v1": [
        "setLastTransferTimestamp(uint256)",
    ],
    "ArianeeWhitelist_v1": [
        "addBlacklistedAddress(address,address,bool)",
        "addWhitelistedAddress(uint256,address)",
    ],
}

# Issuer proxy and credit note pool: calls carry a zero-knowledge ownership
# proof `((uint256[2],uint256[2][2],uint256[2]),uint256[3])` as first argument
_OWNERSHIP_PROOF = "((uint256[2],uint256[2][2],uint256[2]),uint256[3])"
_CREDIT_NOTE_PROOF = "((uint256[2],uint256[2][2],uint256[2]),uint256[4])"

ARIANEE_ABIS_V1_1: dict[str, list[str]] = {
    "ArianeeCreditNotePool_v1_1": [
        f"purchase({_CREDIT_NOTE_PROOF},uint256,uint256)",
        "setIssuerProxy(address)",
    ],
    "ArianeeIssuerProxy_v1_1": [
        f"acceptEvent({_OWNERSHIP_PROOF},uint256,address)",
        "addCreditNotePool(address)",
        f"addTokenAccess({_OWNERSHIP_PROOF},uint256,address,bool,uint256)",
        f"createEvent({_OWNERSHIP_PROOF},uint256,uint256,bytes32,string,address)",
        f"createMessage({_OWNERSHIP_PROOF},uint256,uint256,bytes32,address)",
        f"destroy({_OWNERSHIP_PROOF},uint256)",
        f"hydrateToken({_OWNERSHIP_PROOF},uint256,bytes32,string,address,uint256,bool,address)",
        f"recoverTokenToIssuer({_OWNERSHIP_PROOF},uint256)",
        f"refuseEvent({_OWNERSHIP_PROOF},uint256,address)",
        "reserveToken(uint256,address)",
        f"updateSmartAsset({_OWNERSHIP_PROOF},uint256,bytes32,address)",
        f"updateTokenURI({_OWNERSHIP_PROOF},uint256,string)",
    ],
}

ARIANEE_ABIS_V2: dict[str, list[str]] = {
    "ArianeeCreditManager_v2": [
        "buyCredits(uint256,uint256,address)",
    ],
    "ArianeeEventHub_v2": [
        "acceptEvent(uint256)",
        "createEvent(uint256,uint256,bytes32,string,address)",
        "refuseEvent(uint256)",
    ],
    "ArianeeMessageHub_v2": [
        "markAsRead(uint256)",
        "sendMessage(uint256,uint256,bytes32,address)",
    ],
    "ArianeeNft_v2": [
        "burn(uint256)",
        "mint(uint256,address,bytes32,string,bool)",
        "recover(uint256)",
        "safeTransferFrom(address,address,uint256,bytes)",
        "setTokenURI(uint256,string)",
        "transferFromWithSignature(address,address,uint256,bytes32,bytes)",
        "updateImprint(uint256,bytes32)",
    ],
    "ArianeeOwnershipRegistry_v2": [
        "setOwnershipRegistry(address,uint256,address)",
    ],
    "ArianeeRulesManager_v2": [
        "setRule(address,uint256,bytes)",
    ],
}

ARIANEE_ABI_GENERATIONS: list[dict[str, list[str]]] = [
    ARIANEE_ABIS_V1,
    ARIANEE_ABIS_V1_1,
    ARIANEE_ABIS_V2,
]
