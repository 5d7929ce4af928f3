#!/usr/bin/env python3
"""
Error types for DLMM Terminal
"""


class DlmmTerminalError(Exception):
    """Base class for operational errors reported by the CLI"""


class ConfigError(DlmmTerminalError):
    pass


class RemoteFetchError(DlmmTerminalError):
    """Pool index request failed; status_code is None for transport failures"""

    def __init__(self, status_code, url, detail=""):
        self.status_code = status_code
        self.url = url
        self.detail = detail
        if status_code is None:
            message = f"Pool index request to {url} failed: {detail}"
        else:
            message = f"Pool index returned HTTP {status_code} from {url}"
            if detail:
                message = f"{message}: {detail}"
        super().__init__(message)


class ResolutionError(DlmmTerminalError):
    """No pool alias matched a pair-name query"""

    def __init__(self, query, candidates):
        self.query = query
        self.candidates = list(candidates)
        near = ", ".join(self.candidates) if self.candidates else "none"
        super().__init__(f'No DLMM pool matches "{query}" (near matches: {near})')


class NotificationError(DlmmTerminalError):
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"Telegram error {status_code}: {payload}")


class PositionActionError(DlmmTerminalError):
    pass


class WalletError(DlmmTerminalError):
    pass


class RpcError(DlmmTerminalError):
    pass
