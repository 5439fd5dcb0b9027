"""Addresses with a protocol-level meaning."""

from enum import Enum


class SpecialAddress(str, Enum):
    NULL = "0x0000000000000000000000000000000000000000"
    BRIDGE = "0x0000000000000000000000000000000B7269d67e"
    BURN = "0x000000000000000000000000000000000000dEaD"

    @property
    def lowercase(self) -> str:
        return self.value.lower()


def is_special_address(address: str) -> bool:
    return address.lower() in {a.value.lower() for a in SpecialAddress}
