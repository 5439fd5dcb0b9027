"""Protocol slug helpers."""

from __future__ import annotations

import re

# V2 slugs: <chainId>-<index>-<name>-<index>, e.g. 137-0-arianee-0
_V2_SLUG = re.compile(r"^\d+-\d+-[A-Za-z0-9_]+-\d+$")


def is_protocol_v2_from_slug(slug: str) -> bool:
    return bool(_V2_SLUG.match(slug))
