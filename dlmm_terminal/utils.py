#!/usr/bin/env python3
"""
Utility Functions Module for DLMM Terminal
Loose numeric parsing, percent/USD normalization and display formatting
shared across modules
"""

import math
import re

from .constants import (
    TOKEN_SYMBOL_MAPPINGS, PERCENT_FRACTION_CEILING, PERCENT_SANITY_CEILING,
    RANGE_DASHES
)

_STRIP_CHARS = re.compile(r"[,%$_\s]")
_KEY_SEPARATORS = re.compile(r"[\s_\-/|]")


def parse_numeric_loose(value):
    """Parse numbers and strings like "$1,234.50" or "2.5 %"; NaN when not numeric"""
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # JSON integers have no size limit
            return math.nan
    if isinstance(value, str):
        cleaned = _STRIP_CHARS.sub("", value)
        if not cleaned:
            return math.nan
        try:
            return float(cleaned)
        except ValueError:
            return math.nan
    return math.nan


def normalize_usd(value):
    """USD amount, 0 when unparseable. Negative values are passed through."""
    parsed = parse_numeric_loose(value)
    if not math.isfinite(parsed):
        return 0.0
    return parsed


def normalize_percent(value):
    """Percentage in percent units.

    Sources disagree on whether 2.5% is stored as 2.5 or 0.025, so values in
    (0, 1] are read as fractions and scaled by 100. Values above 1000 are
    treated as data errors and become 0.
    """
    parsed = parse_numeric_loose(value)
    if not math.isfinite(parsed):
        return 0.0
    if 0 < parsed <= PERCENT_FRACTION_CEILING:
        return parsed * 100
    if parsed > PERCENT_SANITY_CEILING:
        return 0.0
    return parsed


def pick_field(record, fields):
    """Return the first non-empty value among the aliased keys, or None"""
    for field in fields:
        value = record.get(field)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def pick_text(record, fields):
    value = pick_field(record, fields)
    if value is None:
        return ""
    return str(value).strip()


def normalize_key(text):
    """Alias key: uppercase with whitespace, underscores, hyphens, slashes and pipes removed"""
    return _KEY_SEPARATORS.sub("", str(text)).upper()


def format_percent_string(value):
    """Render a percent value with trailing zeros stripped, e.g. 0.25 -> 0.25%"""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return f"{text}%"


def apply_symbol_mapping(symbol):
    """Apply symbol mapping (e.g., WSOL -> SOL)"""
    return TOKEN_SYMBOL_MAPPINGS.get(symbol.upper(), symbol)


def parse_range(text):
    """Parse "0.98-1.02" into (0.98, 1.02), accepting unicode dashes"""
    if not text:
        raise ValueError("Empty --range value")
    safe = text
    for dash in RANGE_DASHES:
        safe = safe.replace(dash, "-")
    parts = safe.strip().split("-")
    if len(parts) == 2:
        low = parse_numeric_loose(parts[0])
        high = parse_numeric_loose(parts[1])
        if math.isfinite(low) and math.isfinite(high):
            return low, high
    raise ValueError(f'Bad --range value: "{text}". Use e.g. 0.98-1.02')


def format_usd(value):
    """Format USD amounts for tables, "-" for zero"""
    if not value:
        return "-"
    if value >= 1_000_000_000:
        return f"${value / 1_000_000_000:.2f}B"
    if value >= 1_000_000:
        return f"${value / 1_000_000:.2f}M"
    return f"${round(value):,}"


def format_apr(value):
    if value is None or not math.isfinite(value):
        return "-"
    return f"{value:.2f}%"


def shorten_address(address, head=4, tail=4):
    if not address or len(address) <= head + tail + 3:
        return address or "-"
    return f"{address[:head]}...{address[-tail:]}"
