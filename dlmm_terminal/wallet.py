#!/usr/bin/env python3
"""
Wallet loading for DLMM Terminal
"""

import json
import os

from solders.keypair import Keypair

from .constants import BASE58_ALPHABET
from .errors import WalletError

_BASE58 = frozenset(BASE58_ALPHABET)

# base58 length range of a 64-byte secret key
SECRET_KEY_MIN_LENGTH = 80
SECRET_KEY_MAX_LENGTH = 88


def load_keypair(private_key=None, keypair_path=None):
    """Load a signer from a base58 secret key or a keypair.json byte array"""
    secret = (private_key or "").strip()
    path = (keypair_path or "").strip()

    if secret:
        # solders panics instead of raising on malformed input, so check the shape first
        if not SECRET_KEY_MIN_LENGTH <= len(secret) <= SECRET_KEY_MAX_LENGTH or not set(secret) <= _BASE58:
            raise WalletError("WALLET_PRIVATE_KEY is not a base58-encoded 64-byte secret key")
        try:
            return Keypair.from_base58_string(secret)
        except ValueError as e:
            raise WalletError(f"WALLET_PRIVATE_KEY is not a valid base58 secret key: {e}") from e

    if path:
        if not os.path.exists(path):
            raise WalletError(f"Keypair file {path} not found")
        try:
            with open(path, "r") as f:
                raw = json.load(f)
            return Keypair.from_bytes(bytes(raw))
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            raise WalletError(f"Could not read keypair file {path}: {e}") from e

    raise WalletError("Set WALLET_PRIVATE_KEY (base58 secret) or WALLET_KEYPAIR_PATH (keypair.json).")


def load_keypair_from_config(config):
    wallet = config.get("wallet", {})
    return load_keypair(wallet.get("private_key"), wallet.get("keypair_path"))
