import pytest

from dlmm_terminal.pool_index import PoolIndexClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=False):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    """Records requests and replays scripted responses in order"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


WSOL_USDC = "5rCf1DM8LjKTw4YqhnoLcngyZYeNnQqztScTogYHAS6"
JUP_USDC = "BhQEFZCRnWKQ21LEt4DUby7fKynfmLVJcNjfHNqjEF61"
BONK_SOL = "6oFWm7KPLfxnwMb3z5xwBoXNSPP3JJyirAPqPSiVcnsp"

# Five records with varying field names and dirty values
POOL_FIXTURE = [
    {
        "address": WSOL_USDC,
        "name": "SOL-USDC",
        "base_symbol": "WSOL",
        "quote_symbol": "USDC",
        "liquidity": "1,250,000.50",
        "apr": 0.025,
        "base_fee_percentage": "0.25",
        "bin_step": 10,
        "mint_x": "So11111111111111111111111111111111111111112",
        "mint_y": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
    },
    {
        "lb_pair_address": JUP_USDC,
        "pair_symbol": "JUP-USDC",
        "tvl_usd": "$50",
        "apr24h": "12 %",
        "binStep": "25",
    },
    {
        "address": BONK_SOL,
        "base_symbol": "BONK",
        "quote_symbol": "WSOL",
        "tvlUsd": 900.0,
        "fees_24h": 1.0,
        "fee_bps": 100,
        "bin_step": 100,
    },
    {
        "address": "",
        "liquidity_usd": "not a number",
    },
    {
        "address": "7qbRF6YsyGuLUVs6Y1q64bdVrfe4ZcUUz1JRdoVNUJnm",
        "name": "USDT-USDC",
        "tvl": 5000,
        "apr": 1500,
    },
]


@pytest.fixture
def pool_session():
    return FakeSession(FakeResponse(200, POOL_FIXTURE))


@pytest.fixture
def index_client(pool_session):
    return PoolIndexClient(base_url="https://dlmm.test", session=pool_session)
