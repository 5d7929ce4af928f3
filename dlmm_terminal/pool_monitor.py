#!/usr/bin/env python3
"""
Pool Watch Module for DLMM Terminal
Re-runs discovery on an interval, redraws the table and reports pools that
were not in the previous snapshot
"""

import logging
import time

from .errors import DlmmTerminalError
from .notifications import format_new_pools_message

logger = logging.getLogger(__name__)


class PoolWatcher:
    """Polling loop over PoolDiscovery with new-pool detection"""

    def __init__(self, discovery, interval=30, limit=50, min_tvl=0, min_apr=0,
                 notifier=None, on_update=None, sleep=time.sleep):
        self.discovery = discovery
        self.interval = interval
        self.limit = limit
        self.min_tvl = min_tvl
        self.min_apr = min_apr
        self.notifier = notifier
        self.on_update = on_update
        self.sleep = sleep
        self.known_addresses = None
        self.cycles = 0

    def check_once(self):
        """One discovery pass; returns (pools, new_pools)"""
        pools = self.discovery.discover(self.limit, self.min_tvl, self.min_apr)
        addresses = {pool.address for pool in pools if pool.address}

        # First pass only seeds the snapshot
        if self.known_addresses is None:
            new_pools = []
            self.known_addresses = addresses
        else:
            new_pools = [
                pool for pool in pools
                if pool.address and pool.address not in self.known_addresses
            ]
            self.known_addresses |= addresses

        self.cycles += 1
        return pools, new_pools

    def notify_new_pools(self, new_pools):
        if not self.notifier or not new_pools:
            return False
        try:
            self.notifier.send_markdown_alert(format_new_pools_message(new_pools))
        except DlmmTerminalError as e:
            logger.warning("Failed to send new-pool alert: %s", e)
            return False
        logger.info("🔔 Alerted %d new pool(s)", len(new_pools))
        return True

    def run(self, max_cycles=None):
        """Loop until interrupted or max_cycles passes have run"""
        while max_cycles is None or self.cycles < max_cycles:
            try:
                pools, new_pools = self.check_once()
            except DlmmTerminalError as e:
                self.cycles += 1
                logger.warning("Watch cycle failed: %s", e)
            else:
                notified = self.notify_new_pools(new_pools)
                if self.on_update:
                    self.on_update(pools, new_pools, notified)

            if max_cycles is not None and self.cycles >= max_cycles:
                break
            self.sleep(self.interval)
