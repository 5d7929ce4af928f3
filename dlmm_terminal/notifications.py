#!/usr/bin/env python3
"""
Notification Module for DLMM Terminal
Telegram Bot API alerts with explicit pacing state and short 429 back-off
"""

import logging
import time

import requests

from .constants import (
    TELEGRAM_API_BASE, TELEGRAM_MIN_INTERVAL, TELEGRAM_MAX_RETRY_AFTER,
    TELEGRAM_RETRY_PADDING
)
from .errors import ConfigError, NotificationError
from .utils import format_usd, format_apr

logger = logging.getLogger(__name__)

_MARKDOWN_V2_SPECIAL = "_*[]()~`>#+-=|{}.!\\"


class RateLimiter:
    """Keeps at least min_interval seconds between paced sends"""

    def __init__(self, min_interval=TELEGRAM_MIN_INTERVAL, clock=time.monotonic, sleep=time.sleep):
        self.min_interval = min_interval
        self.clock = clock
        self.sleep = sleep
        self.last_sent = None

    def wait(self):
        if self.last_sent is not None:
            remaining = self.min_interval - (self.clock() - self.last_sent)
            if remaining > 0:
                self.sleep(remaining)
        self.last_sent = self.clock()


class TelegramNotifier:
    """Sends messages to one chat through the Telegram Bot API"""

    def __init__(self, bot_token, chat_id, rate_limiter=None, timeout=10,
                 max_retries=3, session=None, sleep=time.sleep):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.rate_limiter = rate_limiter or RateLimiter()
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self.sleep = sleep

    @classmethod
    def from_config(cls, config, rate_limiter=None, session=None):
        notifications = config.get("notifications", {})
        telegram = notifications.get("telegram", {})
        bot_token = telegram.get("bot_token")
        chat_id = telegram.get("chat_id")
        if not bot_token:
            raise ConfigError("Missing TELEGRAM_BOT_TOKEN (notifications.telegram.bot_token)")
        if not chat_id:
            raise ConfigError("Missing TELEGRAM_CHAT_ID (notifications.telegram.chat_id)")
        if rate_limiter is None:
            rate_limiter = RateLimiter(notifications.get("min_interval", TELEGRAM_MIN_INTERVAL))
        return cls(
            bot_token,
            chat_id,
            rate_limiter=rate_limiter,
            max_retries=notifications.get("max_retries", 3),
            session=session,
        )

    def _call(self, method, params):
        url = f"{TELEGRAM_API_BASE}/bot{self.bot_token}/{method}"
        attempt = 0
        while True:
            try:
                response = self.session.post(url, data=params, timeout=self.timeout)
            except requests.RequestException as e:
                raise NotificationError(None, str(e)) from e
            try:
                data = response.json()
            except ValueError:
                data = {}

            if 200 <= response.status_code < 300 and data.get("ok") is not False:
                return data

            retry_after = (data.get("parameters") or {}).get("retry_after")
            if (response.status_code == 429 and retry_after is not None
                    and retry_after <= TELEGRAM_MAX_RETRY_AFTER and attempt < self.max_retries):
                attempt += 1
                logger.debug("Telegram rate limited, retrying in %ss (attempt %d)", retry_after, attempt)
                self.sleep(retry_after + TELEGRAM_RETRY_PADDING)
                continue

            raise NotificationError(response.status_code, data)

    def send_alert(self, text):
        """Plain text alert; returns the Telegram message id"""
        self.rate_limiter.wait()
        data = self._call("sendMessage", {
            "chat_id": self.chat_id,
            "text": text,
            "disable_web_page_preview": "true",
        })
        return (data.get("result") or {}).get("message_id")

    def send_markdown_alert(self, text):
        """MarkdownV2 alert, caller is responsible for escaping"""
        self.rate_limiter.wait()
        data = self._call("sendMessage", {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "MarkdownV2",
            "disable_web_page_preview": "true",
        })
        return (data.get("result") or {}).get("message_id")


def escape_markdown_v2(text):
    return "".join(f"\\{char}" if char in _MARKDOWN_V2_SPECIAL else char for char in str(text))


def format_new_pools_message(pools, max_rows=10):
    """MarkdownV2 summary of newly listed pools"""
    lines = [f"*🆕 {len(pools)} new DLMM pool(s)*", ""]
    for pool in pools[:max_rows]:
        details = f"TVL {format_usd(pool.tvl_usd)} • APR {format_apr(pool.apr_24h)} • bin {pool.bin_step}"
        lines.append(f"*{escape_markdown_v2(pool.name)}*")
        lines.append(escape_markdown_v2(details))
        lines.append(f"`{pool.address}`")
        lines.append("")
    if len(pools) > max_rows:
        lines.append(escape_markdown_v2(f"... and {len(pools) - max_rows} more"))
    return "\n".join(lines).rstrip()
