"""
Smart asset deep links.

Links look like `https://<host>[/<method>]/<certificateId>,<passphrase>[,<slug>]`
where the host identifies a V1 protocol and an optional trailing slug
names a V2 protocol.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from arianee_sdk.core.exceptions import LinkError
from arianee_sdk.utils.slug import is_protocol_v2_from_slug

DEFAULT_METHOD = "requestOwnership"
V2_LINK_HOSTNAME = "arian.ee"

# Ordered: reverse lookups return the first hostname of a protocol
WHITELABEL_HOSTNAMES_TO_PROTOCOL_NAME: dict[str, str] = {
    "test.arian.ee": "testnet",
    "arian.ee": "mainnet",
    "arianee.net": "mainnet",
    "test.arianee.net": "testnet",
    "poly.arian.ee": "polygon",
    "testnet.aria.fyi": "testnet",
    "arialabs.arian.ee": "mainnet",
    "poa.leclubleaderprice.fr": "mainnet",
    "iwc-sokol.arianee.net": "testnet",
    "poa.iwc.com": "mainnet",
    "panerai-sokol.arianee.net": "testnet",
    "poa.panerai.com": "mainnet",
    "poa.yslbeauty.com": "mainnet",
    "polygon.yslbeauty.com": "ysl",
    "innovation-day.arian.ee": "polygon",
    "stadetoulousain.arian.ee": "stadetoulousain",
    "testsbt.arian.ee": "testnetSbt",
    "supernet.arian.ee": "arianeeSupernet",
    "supernet.arianee.net": "arianeeSupernet",
    "arianeesbt.arian.ee": "arianeesbt",
    "arianeesbt.arianee.net": "arianeesbt",
    "sbt.panerai.com": "arianeesbt",
    "paneraisbt.arianee.net": "arianeesbt",
    "supernettestnet.arian.ee": "supernettestnet",
    "tezostestnet.arianee.net": "tezostestnet",
    "etherlinktestnet.arianee.net": "etherlinktestnet",
    "etherlinktestnet.arian.ee": "etherlinktestnet",
}


@dataclass(frozen=True)
class ReadLink:
    """A parsed smart asset deep link."""

    certificate_id: str
    passphrase: str | None
    aat: str | None
    method: str
    network: str
    link: str


@dataclass(frozen=True)
class ArianeeLink:
    """A parsed `tokenId,passphrase,network[,issuer]` link."""

    token_id: str
    passphrase: str
    network: str
    issuer: str | None
    link: str


def get_protocol_name_from_hostname(hostname: str) -> str | None:
    return WHITELABEL_HOSTNAMES_TO_PROTOCOL_NAME.get(hostname.lower())


def get_hostname_from_protocol_name(protocol_name: str) -> str | None:
    return next(
        (host for host, name in WHITELABEL_HOSTNAMES_TO_PROTOCOL_NAME.items() if name == protocol_name),
        None,
    )


def _split_url(link: str):
    parts = urlsplit(link)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        return None
    return parts


def read_link(link: str) -> ReadLink:
    """
    Parse a deep link.

    Raises:
        LinkError: If the link is not a URL or no protocol can be derived
            from its hostname or trailing slug.
    """
    parts = _split_url(link)
    if parts is None:
        raise LinkError("The link is not a valid URL", {"link": link})

    protocol_name_v1 = get_protocol_name_from_hostname(parts.hostname or "")
    path = parts.path[1:].split("/")
    method = path[0] if len(path) > 1 else DEFAULT_METHOD
    segment = path[1] if len(path) > 1 else path[0]

    fields = segment.split(",")
    certificate_id = fields[0]
    passphrase = fields[1] if len(fields) > 1 else None
    protocol_name_v2 = fields[2] if len(fields) > 2 else None

    if not protocol_name_v1 and not protocol_name_v2:
        raise LinkError("No protocol found", {"link": link})

    aat = parse_qs(parts.query).get("arianeeAccessToken", [None])[0]

    return ReadLink(
        certificate_id=certificate_id,
        passphrase=passphrase,
        aat=aat,
        method=method,
        network=protocol_name_v2 or protocol_name_v1,  # type: ignore[arg-type]
        link=link,
    )


def read_arianee_link(link: str) -> ArianeeLink:
    """
    Parse a host-agnostic `tokenId,passphrase,network[,issuer]` link.

    Raises:
        LinkError: If the link is not a URL, has fewer than three parts or
            an empty token id, passphrase or network.
    """
    parts = _split_url(link)
    if parts is None:
        raise LinkError("Invalid arianee link format", {"link": link})

    fields = parts.path.rstrip("/").split("/")[-1].split(",")
    if len(fields) not in (3, 4) or not all(fields[:3]):
        raise LinkError("Invalid arianee link format", {"link": link})

    return ArianeeLink(
        token_id=fields[0],
        passphrase=fields[1],
        network=fields[2],
        issuer=(fields[3] or None) if len(fields) == 4 else None,
        link=link,
    )


def _normalize_custom_domain(domain: str) -> str:
    for scheme in ("http://", "https://"):
        if domain.startswith(scheme):
            domain = domain[len(scheme):]
    if domain.endswith("/"):
        domain = domain[:-1]
    return domain


def create_link(
    slug: str,
    token_id: str | int,
    passphrase: str,
    suffix: str = "",
    deep_link_domain: str | None = None,
) -> str:
    """
    Build a proof / request / view link for a smart asset.

    V2 slugs always link through arian.ee with the slug appended; V1 links
    use `deep_link_domain` (a brand's custom domain) when given, else the
    protocol's whitelabel hostname.
    """
    suffix = suffix or ""
    if is_protocol_v2_from_slug(slug):
        return f"https://{V2_LINK_HOSTNAME}{suffix}/{token_id},{passphrase},{slug}"

    host = _normalize_custom_domain(deep_link_domain) if deep_link_domain else None
    host = host or get_hostname_from_protocol_name(slug)
    return f"https://{host}{suffix}/{token_id},{passphrase}"


def deep_link_domain_from_brand_identity(brand_identity: dict | None) -> str | None:
    """URL of the `deepLinkDomain` external content of a brand identity, if any."""
    if not brand_identity:
        return None
    raw = brand_identity.get("rawContent") or {}
    for content in raw.get("externalContents") or []:
        if content.get("type") == "deepLinkDomain" and content.get("url"):
            return content["url"]
    return None


__all__ = [
    "WHITELABEL_HOSTNAMES_TO_PROTOCOL_NAME",
    "ReadLink",
    "ArianeeLink",
    "get_protocol_name_from_hostname",
    "get_hostname_from_protocol_name",
    "read_link",
    "read_arianee_link",
    "create_link",
    "deep_link_domain_from_brand_identity",
]
