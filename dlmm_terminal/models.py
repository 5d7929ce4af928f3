#!/usr/bin/env python3
"""
Data types for DLMM Terminal

Raw pool records from the index are plain dicts with no guaranteed schema;
everything downstream works with PoolInfo.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

# Untyped record as returned by GET /pair/all
RawPoolRecord = Dict[str, Any]


@dataclass(frozen=True)
class PoolMints:
    x: str = ""
    y: str = ""


@dataclass(frozen=True)
class PoolInfo:
    """
    Canonical pool record.

    tvl_usd and apr_24h are never negative; apr_24h is in percent units
    (2.5 means 2.5%).
    """
    address: str = ""
    name: str = "unknown"
    tvl_usd: float = 0.0
    apr_24h: float = 0.0
    fee_tier: str = ""
    bin_step: int = 0
    mints: PoolMints = field(default_factory=PoolMints)

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape used by --json output"""
        return {
            "address": self.address,
            "name": self.name,
            "tvlUsd": self.tvl_usd,
            "apr24h": self.apr_24h,
            "feeTier": self.fee_tier,
            "binStep": self.bin_step,
            "mints": {"x": self.mints.x, "y": self.mints.y},
        }


@dataclass(frozen=True)
class ResolvedPool:
    address: str
    name: str
