#!/usr/bin/env python3
"""
Constants Module for DLMM Terminal
Contains default configuration, API endpoints and the field-alias tables used
to read loosely-typed pool records from the DLMM index.
"""

# Version and metadata
VERSION = "0.2.0"
CONFIG_FILE = "dlmm_terminal_config.json"

# Remote endpoints
DEFAULT_API_BASE = "https://dlmm-api.meteora.ag"
DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
TELEGRAM_API_BASE = "https://api.telegram.org"

# Wrapped native token and the symbol users actually type
WRAPPED_NATIVE_SYMBOL = "WSOL"
NATIVE_SYMBOL = "SOL"

# Token symbol mappings for display (wrapped -> native)
TOKEN_SYMBOL_MAPPINGS = {
    WRAPPED_NATIVE_SYMBOL: NATIVE_SYMBOL,
}

# Normalization policy
PERCENT_FRACTION_CEILING = 1.0     # values in (0, 1] are fractions
PERCENT_SANITY_CEILING = 1000.0    # anything above is a data error
DERIVED_APR_CEILING = 5000.0       # fee-derived APR above this is implausible
DAYS_PER_YEAR = 365

# Pair resolution
MAX_NEAR_CANDIDATES = 5
ALIAS_SEPARATORS = ("/", "-", "")

# Base58 shape of a Solana public key
BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
ADDRESS_MIN_LENGTH = 32
ADDRESS_MAX_LENGTH = 44

# Field aliases, first non-empty value wins
ADDRESS_FIELDS = ("address", "lb_pair_address", "lbPairAddress", "pair_address")
NAME_FIELDS = ("name", "pair_symbol", "symbol")
BASE_SYMBOL_FIELDS = ("base_symbol", "token_x_symbol", "symbol_x", "baseSymbol")
QUOTE_SYMBOL_FIELDS = ("quote_symbol", "token_y_symbol", "symbol_y", "quoteSymbol")
TVL_FIELDS = ("tvl_usd", "tvlUsd", "liquidity_usd", "liquidity", "tvl")
APR_FIELDS = ("apr24h", "apr_24h", "apr")
FEES_24H_FIELDS = ("fees_24h", "fees24h", "today_fees")
FEE_PERCENT_FIELDS = ("base_fee_percentage", "fee_tier", "feeTier", "fee_pct")
FEE_BPS_FIELDS = ("base_fee_bps", "fee_bps")
BIN_STEP_FIELDS = ("bin_step", "binStep", "binStepBps")
MINT_X_FIELDS = ("mint_x", "token_x_mint", "mintX")
MINT_Y_FIELDS = ("mint_y", "token_y_mint", "mintY")

# Telegram pacing
TELEGRAM_MIN_INTERVAL = 1.5   # seconds between paced messages
TELEGRAM_MAX_RETRY_AFTER = 10  # only honour short 429 back-offs
TELEGRAM_RETRY_PADDING = 0.25

# Unicode dashes accepted in --range
RANGE_DASHES = ("‒", "–", "—", "−")

# Default configuration
DEFAULT_CONFIG = {
    "version": VERSION,
    "api_base_url": DEFAULT_API_BASE,
    "cluster": "",
    "rpc_url": DEFAULT_RPC_URL,
    "request_timeout": 30,
    "wallet": {
        "private_key": "",
        "keypair_path": ""
    },
    "positions": {
        "backend": ""
    },
    "watch": {
        "interval": 30,
        "limit": 50
    },
    "display_settings": {
        "use_rich_ui": True,
        "debug_mode": False
    },
    "notifications": {
        "enabled": False,
        "type": "telegram",
        "min_interval": TELEGRAM_MIN_INTERVAL,
        "max_retries": 3,
        "telegram": {
            "bot_token": "",
            "chat_id": ""
        }
    }
}

# Environment variable -> config path
ENV_OVERRIDES = {
    "SOLANA_RPC": ("rpc_url",),
    "DLMM_API_BASE": ("api_base_url",),
    "DLMM_CLUSTER": ("cluster",),
    "TELEGRAM_BOT_TOKEN": ("notifications", "telegram", "bot_token"),
    "TELEGRAM_CHAT_ID": ("notifications", "telegram", "chat_id"),
    "WALLET_PRIVATE_KEY": ("wallet", "private_key"),
    "WALLET_KEYPAIR_PATH": ("wallet", "keypair_path"),
    "DLMM_POSITION_BACKEND": ("positions", "backend"),
}
