#!/usr/bin/env python3
"""
Field Normalizer for DLMM Terminal
Turns loosely-typed index records into PoolInfo. Every "which alias holds
this field" decision lives here; normalize_pool_record never raises for a
single record.
"""

import math
from collections.abc import Mapping

from .constants import (
    ADDRESS_FIELDS, NAME_FIELDS, BASE_SYMBOL_FIELDS, QUOTE_SYMBOL_FIELDS,
    TVL_FIELDS, APR_FIELDS, FEES_24H_FIELDS, FEE_PERCENT_FIELDS,
    FEE_BPS_FIELDS, BIN_STEP_FIELDS, MINT_X_FIELDS, MINT_Y_FIELDS,
    DERIVED_APR_CEILING, DAYS_PER_YEAR
)
from .models import PoolInfo, PoolMints, RawPoolRecord
from .utils import (
    parse_numeric_loose, normalize_usd, normalize_percent, pick_field,
    pick_text, format_percent_string
)


def pool_symbols(record):
    """(base, quote) token symbols, empty strings when absent"""
    return pick_text(record, BASE_SYMBOL_FIELDS), pick_text(record, QUOTE_SYMBOL_FIELDS)


def pool_display_name(record):
    """Explicit name field, else "BASE/QUOTE" from whatever symbols exist, else "unknown" """
    name = pick_text(record, NAME_FIELDS)
    if name:
        return name
    joined = "/".join(part for part in pool_symbols(record) if part)
    return joined or "unknown"


def derive_apr_from_fees(fees_24h, tvl_usd):
    """Annualize 24h fees over TVL; 0 when not derivable or implausible"""
    if not (fees_24h > 0 and tvl_usd > 0):
        return 0.0
    apr = fees_24h * DAYS_PER_YEAR * 100 / tvl_usd
    if not math.isfinite(apr) or apr > DERIVED_APR_CEILING:
        return 0.0
    return apr


def format_fee_tier(record):
    percent = parse_numeric_loose(pick_field(record, FEE_PERCENT_FIELDS))
    if math.isfinite(percent) and percent >= 0:
        return format_percent_string(percent)
    bps = parse_numeric_loose(pick_field(record, FEE_BPS_FIELDS))
    if math.isfinite(bps) and bps >= 0:
        return format_percent_string(bps / 100)
    return ""


def parse_bin_step(record):
    step = parse_numeric_loose(pick_field(record, BIN_STEP_FIELDS))
    if not math.isfinite(step) or step < 0:
        return 0
    return int(step)


def _non_negative(value):
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def normalize_pool_record(record: RawPoolRecord) -> PoolInfo:
    """Convert one raw index record into a PoolInfo"""
    if not isinstance(record, Mapping):
        return PoolInfo()

    tvl_usd = _non_negative(normalize_usd(pick_field(record, TVL_FIELDS)))

    apr_24h = _non_negative(normalize_percent(pick_field(record, APR_FIELDS)))
    if apr_24h == 0:
        fees_24h = normalize_usd(pick_field(record, FEES_24H_FIELDS))
        apr_24h = derive_apr_from_fees(fees_24h, tvl_usd)

    return PoolInfo(
        address=pick_text(record, ADDRESS_FIELDS),
        name=pool_display_name(record),
        tvl_usd=tvl_usd,
        apr_24h=apr_24h,
        fee_tier=format_fee_tier(record),
        bin_step=parse_bin_step(record),
        mints=PoolMints(
            x=pick_text(record, MINT_X_FIELDS),
            y=pick_text(record, MINT_Y_FIELDS),
        ),
    )


def normalize_pool_records(records):
    return [normalize_pool_record(record) for record in records]
