#!/usr/bin/env python3
"""
Pair Resolver for DLMM Terminal
Maps "SOL-USDC", "sol/usdc", "USDC SOL" or a raw pool address to a
(address, name) pair.

Aliases are kept in a plain dict keyed by normalized alias. When two pools
share an alias the one that appears later in the index response wins, so
the result for an ambiguous pair depends on the API's ordering.
"""

import logging

from solders.pubkey import Pubkey

from .constants import (
    ADDRESS_FIELDS, NAME_FIELDS, WRAPPED_NATIVE_SYMBOL, NATIVE_SYMBOL,
    ALIAS_SEPARATORS, MAX_NEAR_CANDIDATES, BASE58_ALPHABET,
    ADDRESS_MIN_LENGTH, ADDRESS_MAX_LENGTH
)
from .errors import ResolutionError
from .models import ResolvedPool
from .normalizer import pool_display_name, pool_symbols
from .utils import normalize_key, pick_text, apply_symbol_mapping

logger = logging.getLogger(__name__)

_BASE58 = frozenset(BASE58_ALPHABET)


def is_address(text):
    """True when text parses as a Solana public key"""
    candidate = text.strip()
    if not ADDRESS_MIN_LENGTH <= len(candidate) <= ADDRESS_MAX_LENGTH:
        return False
    if not set(candidate) <= _BASE58:
        return False
    try:
        Pubkey.from_string(candidate)
    except ValueError:
        return False
    return True


def _symbol_variants(symbol):
    if not symbol:
        return []
    variants = [symbol]
    unwrapped = apply_symbol_mapping(symbol)
    if unwrapped != symbol:
        variants.append(unwrapped)
    return variants


def pool_aliases(record):
    """Every alias string a user might type for this pool (not yet normalized)"""
    aliases = []
    for field in NAME_FIELDS:
        value = pick_text(record, (field,))
        if value:
            aliases.append(value)

    base, quote = pool_symbols(record)
    for b in _symbol_variants(base):
        for q in _symbol_variants(quote):
            for sep in ALIAS_SEPARATORS:
                aliases.append(f"{b}{sep}{q}")
                aliases.append(f"{q}{sep}{b}")
    return aliases


def build_alias_index(records):
    """normalized alias -> ResolvedPool; later records overwrite earlier ones"""
    index = {}
    for record in records:
        if not isinstance(record, dict):
            continue
        address = pick_text(record, ADDRESS_FIELDS)
        if not address:
            continue
        resolved = ResolvedPool(address=address, name=pool_display_name(record))
        for alias in pool_aliases(record):
            key = normalize_key(alias)
            if key:
                index[key] = resolved
    return index


def near_candidates(query_key, keys, limit=MAX_NEAR_CANDIDATES):
    """Alias keys that are substrings of the query or contain it"""
    probes = [query_key]
    if NATIVE_SYMBOL in query_key and WRAPPED_NATIVE_SYMBOL not in query_key:
        probes.append(query_key.replace(NATIVE_SYMBOL, WRAPPED_NATIVE_SYMBOL))

    found = []
    for key in keys:
        if any(key in probe or probe in key for probe in probes if probe):
            found.append(key)
            if len(found) >= limit:
                break
    return found


class PairResolver:
    """Resolves user input to a pool using a fresh index snapshot per call"""

    def __init__(self, index_client):
        self.index_client = index_client

    def resolve(self, text):
        query = text.strip()
        if is_address(query):
            return ResolvedPool(address=query, name=query)

        records = self.index_client.fetch_all_pools()
        index = build_alias_index(records)
        logger.debug("Built %d pool aliases from %d records", len(index), len(records))

        query_key = normalize_key(query)
        match = index.get(query_key)
        if match is not None:
            return match

        raise ResolutionError(text, near_candidates(query_key, index.keys()))


def resolve_pair(text, index_client):
    return PairResolver(index_client).resolve(text)
