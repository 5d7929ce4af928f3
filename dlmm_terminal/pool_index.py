#!/usr/bin/env python3
"""
Remote Pool Index Client for DLMM Terminal
Fetches the full pool list from the DLMM index API. No transformation and
no retries: every call is an independent snapshot.
"""

import logging

import requests

from .constants import DEFAULT_API_BASE
from .errors import RemoteFetchError

logger = logging.getLogger(__name__)


class PoolIndexClient:
    """Thin client for GET {base_url}/pair/all"""

    def __init__(self, base_url=DEFAULT_API_BASE, cluster="", timeout=30, session=None):
        self.base_url = base_url.rstrip("/")
        self.cluster = cluster
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config, session=None):
        return cls(
            base_url=config.get("api_base_url") or DEFAULT_API_BASE,
            cluster=config.get("cluster", ""),
            timeout=config.get("request_timeout", 30),
            session=session,
        )

    @property
    def pairs_url(self):
        return f"{self.base_url}/pair/all"

    def fetch_all_pools(self):
        """Return the raw pool records as a list of dicts"""
        url = self.pairs_url
        params = {"cluster": self.cluster} if self.cluster else None
        logger.debug("Fetching pool index from %s (cluster=%s)", url, self.cluster or "default")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteFetchError(None, url, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise RemoteFetchError(response.status_code, url)

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteFetchError(response.status_code, url, "response is not JSON") from e

        records = self._extract_records(payload)
        if records is None:
            raise RemoteFetchError(response.status_code, url, "expected a JSON array of pools")

        logger.debug("Pool index returned %d records", len(records))
        return records

    @staticmethod
    def _extract_records(payload):
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in ("data", "pairs"):
                if isinstance(payload.get(key), list):
                    return payload[key]
        return None
