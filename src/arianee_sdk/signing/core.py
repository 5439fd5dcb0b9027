"""
Signing Core.

`Core` abstracts an entity able to report its address and sign messages,
typed data and transactions, regardless of where the key material lives.
Local keys are handled with eth-account; remote signers (HSM, wallet
connectors, relayers) plug in by passing their own callables.
"""

from __future__ import annotations

import secrets
from typing import Any, Awaitable, Callable

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_utils import to_hex

from arianee_sdk.core.exceptions import CapabilityError
from arianee_sdk.core.logging import get_logger
from arianee_sdk.core.types import SignatureResult

logger = get_logger("signing")

Account.enable_unaudited_hdwallet_features()

DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/0"

SignMessageFn = Callable[[str], Awaitable[SignatureResult]]
SignTypedDataFn = Callable[[dict[str, Any], dict[str, Any], dict[str, Any]], Awaitable[SignatureResult]]
SignTransactionFn = Callable[[dict[str, Any]], Awaitable[SignatureResult]]
SendTransactionFn = Callable[[dict[str, Any]], Awaitable[str]]


class Core:
    """
    An identity capable of signing.

    Immutable once constructed. Exactly one of `sign_transaction` (the SDK
    broadcasts the raw transaction) or `send_transaction` (the core relays
    the transaction itself and returns its hash) must be provided.

    Example:
        >>> core = Core.from_mnemonic("between pulse elite ...")
        >>> result = await core.sign_message("hello")
        >>> result.signature
        '0x520ea8c1...'
    """

    def __init__(
        self,
        get_address: Callable[[], str],
        sign_message: SignMessageFn,
        sign_typed_data: SignTypedDataFn | None = None,
        sign_transaction: SignTransactionFn | None = None,
        send_transaction: SendTransactionFn | None = None,
    ) -> None:
        if sign_transaction is not None and send_transaction is not None:
            raise ValueError("You can not use sign_transaction and send_transaction at the same time")
        if sign_transaction is None and send_transaction is None:
            raise ValueError("You must provide a sign_transaction or a send_transaction function")
        if sign_message is None:
            raise ValueError("You must provide a sign_message function")
        if get_address is None:
            raise ValueError("You must provide a get_address function")

        self._get_address = get_address
        self._sign_message = sign_message
        self._sign_typed_data = sign_typed_data
        self._sign_transaction = sign_transaction
        self._send_transaction = send_transaction

    # ─── Capabilities ────────────────────────────────────────────────

    def get_address(self) -> str:
        """Checksummed address of the identity."""
        return self._get_address()

    async def sign_message(self, message: str) -> SignatureResult:
        """EIP-191 personal_sign over the UTF-8 text `message`."""
        return await self._sign_message(message)

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, Any],
        value: dict[str, Any],
    ) -> SignatureResult:
        """EIP-712 signature of `value` under `domain` and `types`."""
        if self._sign_typed_data is None:
            raise CapabilityError("sign_typed_data")
        return await self._sign_typed_data(domain, types, value)

    async def sign_transaction(self, transaction: dict[str, Any]) -> SignatureResult:
        """Sign a transaction dict; `signature` holds the raw signed transaction."""
        if self._sign_transaction is None:
            raise CapabilityError("sign_transaction")
        return await self._sign_transaction(transaction)

    async def send_transaction(self, transaction: dict[str, Any]) -> str:
        """Relay a transaction through the core; returns the transaction hash."""
        if self._send_transaction is None:
            raise CapabilityError("send_transaction")
        return await self._send_transaction(transaction)

    @property
    def can_sign_typed_data(self) -> bool:
        return self._sign_typed_data is not None

    @property
    def relays_transactions(self) -> bool:
        return self._send_transaction is not None

    def __repr__(self) -> str:
        return f"Core(address={self.get_address()})"

    # ─── Factories ───────────────────────────────────────────────────

    @classmethod
    def from_account(cls, account: LocalAccount) -> Core:
        """Wrap an eth-account LocalAccount."""

        async def sign_message(message: str) -> SignatureResult:
            signed = account.sign_message(encode_defunct(text=message))
            return SignatureResult(message=message, signature=to_hex(signed.signature))

        async def sign_typed_data(
            domain: dict[str, Any],
            types: dict[str, Any],
            value: dict[str, Any],
        ) -> SignatureResult:
            # eth-account derives EIP712Domain from the domain itself
            message_types = {k: v for k, v in types.items() if k != "EIP712Domain"}
            signed = account.sign_typed_data(
                domain_data=domain,
                message_types=message_types,
                message_data=value,
            )
            return SignatureResult(message=value, signature=to_hex(signed.signature))

        async def sign_transaction(transaction: dict[str, Any]) -> SignatureResult:
            signed = account.sign_transaction(transaction)
            return SignatureResult(message=transaction, signature=to_hex(signed.raw_transaction))

        return cls(
            get_address=lambda: account.address,
            sign_message=sign_message,
            sign_typed_data=sign_typed_data,
            sign_transaction=sign_transaction,
        )

    @classmethod
    def from_private_key(cls, private_key: str | bytes) -> Core:
        """Build a Core from a 32-byte private key (hex or bytes)."""
        try:
            account = Account.from_key(private_key)
        except Exception as e:
            raise ValueError("invalid private key") from e
        return cls.from_account(account)

    @classmethod
    def from_mnemonic(cls, phrase: str, account_path: str = DEFAULT_DERIVATION_PATH) -> Core:
        """Build a Core from a BIP-39 mnemonic, first account by default."""
        try:
            account = Account.from_mnemonic(phrase, account_path=account_path)
        except Exception as e:
            raise ValueError("invalid mnemonic") from e
        return cls.from_account(account)

    @classmethod
    def from_pass_phrase(cls, passphrase: str | int) -> Core:
        """
        Deterministically derive a Core from a smart asset passphrase.

        Numeric passphrases are turned into hex digits left-padded to ten
        characters; other passphrases use one byte per character. The result
        is left-padded with zeros to a 32-byte private key.
        """
        if isinstance(passphrase, int):
            hex_passphrase = format(passphrase, "x").rjust(10, "0")
        elif passphrase.isdigit():
            # Numeric strings keep their decimal digits as hex nibbles
            hex_passphrase = passphrase.rjust(10, "0")
        else:
            hex_passphrase = bytes(ord(c) & 0xFF for c in passphrase).hex()

        if len(hex_passphrase) % 2:
            hex_passphrase = "0" + hex_passphrase
        if len(hex_passphrase) > 64:
            raise ValueError("invalid private key")

        return cls.from_private_key("0x" + hex_passphrase.rjust(64, "0"))

    @classmethod
    def from_random(cls) -> Core:
        """Build a Core around a freshly generated key."""
        return cls.from_private_key("0x" + secrets.token_hex(32))


def recover_message_signer(message: str, signature: str) -> str:
    """Recover the checksummed address that personal_signed `message`."""
    return Account.recover_message(encode_defunct(text=message), signature=signature)


def get_signature_values(signature: str) -> tuple[str, str, int]:
    """Split a 65-byte 0x-hex signature into (r, s, v)."""
    if not signature.startswith("0x") or len(signature) != 132:
        raise ValueError("Invalid signature")
    r = signature[0:66]
    s = "0x" + signature[66:130]
    v = int(signature[130:132], 16)
    return r, s, v
