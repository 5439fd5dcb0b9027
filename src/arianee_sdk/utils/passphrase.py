"""Smart asset passphrase generation."""

from __future__ import annotations

import secrets
import string

_ALPHABET = string.ascii_lowercase + string.digits
PASSPHRASE_LENGTH = 12


def generate_random_passphrase() -> str:
    """Random `[a-z0-9]{12}` passphrase."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(PASSPHRASE_LENGTH))
