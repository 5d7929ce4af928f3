#!/usr/bin/env python3
"""
DLMM Terminal Package
Pool discovery and position tooling for Meteora DLMM pools on Solana

Package Structure:
├── __init__.py        # This file - package initialization
├── main.py            # CLI entry point (argparse)
├── config.py          # JSON config + .env overrides
├── constants.py       # Defaults, endpoints, field aliases
├── display.py         # Rich tables and panels
├── pool_index.py      # GET /pair/all client
├── normalizer.py      # Raw record -> PoolInfo
├── resolver.py        # Pair name / address -> pool
├── discovery.py       # Filtered pool lists
├── pool_monitor.py    # Watch loop
├── positions.py       # Open / claim requests
├── wallet.py          # Keypair loading
├── notifications.py   # Telegram alerts
├── blockchain.py      # RPC health check
└── utils.py           # Parsing and formatting helpers
"""

from .constants import VERSION
from .discovery import PoolDiscovery, discover_pools
from .errors import (
    DlmmTerminalError, RemoteFetchError, ResolutionError, ConfigError,
    NotificationError, PositionActionError, WalletError, RpcError
)
from .models import PoolInfo, PoolMints, ResolvedPool
from .normalizer import normalize_pool_record
from .pool_index import PoolIndexClient
from .resolver import PairResolver, resolve_pair

__version__ = VERSION
__description__ = "Meteora DLMM pool discovery and position CLI"

__all__ = [
    "PoolDiscovery",
    "discover_pools",
    "resolve_pair",
    "PairResolver",
    "PoolIndexClient",
    "normalize_pool_record",
    "PoolInfo",
    "PoolMints",
    "ResolvedPool",
    "DlmmTerminalError",
    "RemoteFetchError",
    "ResolutionError",
    "ConfigError",
    "NotificationError",
    "PositionActionError",
    "WalletError",
    "RpcError",
]
