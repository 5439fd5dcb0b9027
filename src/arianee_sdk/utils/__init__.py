"""Stateless helpers: fetching, links, chains, slugs and transaction decoding."""

from arianee_sdk.utils.chain import (
    CHAIN_TYPE_IDS,
    chain_ids_by_chain_type,
    chain_names_by_chain_type,
    get_chain_type_of,
    protocol_name_to_chain_id,
    protocol_name_to_chain_type,
)
from arianee_sdk.utils.fetch import (
    CACHEABLE_URL_PREFIXES,
    CachedFetcher,
    Fetcher,
    FetchResponse,
    HttpFetcher,
    RetryFetcher,
    build_default_fetcher,
    is_cacheable_url,
)
from arianee_sdk.utils.links import (
    WHITELABEL_HOSTNAMES_TO_PROTOCOL_NAME,
    ArianeeLink,
    ReadLink,
    create_link,
    deep_link_domain_from_brand_identity,
    get_hostname_from_protocol_name,
    get_protocol_name_from_hostname,
    read_arianee_link,
    read_link,
)
from arianee_sdk.utils.passphrase import generate_random_passphrase
from arianee_sdk.utils.retry import execute_with_retry, is_transient_error
from arianee_sdk.utils.slug import is_protocol_v2_from_slug
from arianee_sdk.utils.special_address import SpecialAddress, is_special_address
from arianee_sdk.utils.tx import DecodedArianeeTransaction, decode_transaction

__all__ = [
    # Chains
    "CHAIN_TYPE_IDS",
    "chain_ids_by_chain_type",
    "chain_names_by_chain_type",
    "get_chain_type_of",
    "protocol_name_to_chain_id",
    "protocol_name_to_chain_type",
    # Fetch
    "CACHEABLE_URL_PREFIXES",
    "CachedFetcher",
    "Fetcher",
    "FetchResponse",
    "HttpFetcher",
    "RetryFetcher",
    "build_default_fetcher",
    "is_cacheable_url",
    "execute_with_retry",
    "is_transient_error",
    # Links
    "WHITELABEL_HOSTNAMES_TO_PROTOCOL_NAME",
    "ArianeeLink",
    "ReadLink",
    "create_link",
    "deep_link_domain_from_brand_identity",
    "get_hostname_from_protocol_name",
    "get_protocol_name_from_hostname",
    "read_arianee_link",
    "read_link",
    # Misc
    "generate_random_passphrase",
    "is_protocol_v2_from_slug",
    "SpecialAddress",
    "is_special_address",
    "DecodedArianeeTransaction",
    "decode_transaction",
]
