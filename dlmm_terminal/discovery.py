#!/usr/bin/env python3
"""
Pool Discovery Service for DLMM Terminal
Fetch -> normalize -> filter -> limit, in the index's original order.
Sorting and token filters are presentation concerns and live in the helpers
below, applied by the CLI after discovery.
"""

import logging

from .normalizer import normalize_pool_records
from .resolver import PairResolver

logger = logging.getLogger(__name__)

SORT_KEYS = {
    "apr": "apr_24h",
    "tvl": "tvl_usd",
}


class PoolDiscovery:
    """Discovery and resolution over one index client"""

    def __init__(self, index_client):
        self.index_client = index_client
        self.resolver = PairResolver(index_client)

    def discover(self, limit=50, min_tvl=0, min_apr=0):
        pools = normalize_pool_records(self.index_client.fetch_all_pools())
        matching = [
            pool for pool in pools
            if pool.tvl_usd >= min_tvl and pool.apr_24h >= min_apr
        ]
        logger.debug(
            "Discovery: %d pools, %d pass min_tvl=%s min_apr=%s",
            len(pools), len(matching), min_tvl, min_apr
        )
        return matching[:limit]

    def resolve_pair(self, text):
        return self.resolver.resolve(text)


def discover_pools(index_client, limit=50, min_tvl=0, min_apr=0):
    return PoolDiscovery(index_client).discover(limit, min_tvl, min_apr)


def filter_by_token(pools, token):
    """Case-insensitive substring match on the pool name"""
    needle = token.lower()
    return [pool for pool in pools if needle in pool.name.lower()]


def filter_active(pools):
    return [pool for pool in pools if pool.tvl_usd > 0]


def sort_pools(pools, key="apr", order="desc"):
    """Sort by "apr" or "tvl"; unknown keys fall back to TVL"""
    attribute = SORT_KEYS.get((key or "").lower(), "tvl_usd")
    descending = (order or "desc").lower() == "desc"
    return sorted(pools, key=lambda pool: getattr(pool, attribute), reverse=descending)
