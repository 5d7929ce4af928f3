#!/usr/bin/env python3
"""
Blockchain Module for DLMM Terminal
Minimal Solana JSON-RPC access used to check that the configured endpoint
is reachable
"""

import logging

import requests

from .constants import DEFAULT_RPC_URL
from .errors import RpcError

logger = logging.getLogger(__name__)


class BlockchainManager:
    """JSON-RPC calls against one Solana endpoint"""

    def __init__(self, rpc_url=DEFAULT_RPC_URL, timeout=10, session=None):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._request_id = 0

    def _rpc(self, method, params=None):
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }
        try:
            response = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise RpcError(f"{method} to {self.rpc_url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RpcError(f"{method} returned HTTP {response.status_code} from {self.rpc_url}")

        try:
            data = response.json()
        except ValueError as e:
            raise RpcError(f"{method} returned a non-JSON response") from e

        if data.get("error"):
            error = data["error"]
            raise RpcError(f"{method} error {error.get('code')}: {error.get('message')}")
        logger.debug("%s -> %s", method, data.get("result"))
        return data.get("result")

    def get_slot(self):
        return self._rpc("getSlot")

    def get_version(self):
        result = self._rpc("getVersion") or {}
        return result.get("solana-core", "unknown")

    def check_connection(self):
        return {"slot": self.get_slot(), "version": self.get_version()}
