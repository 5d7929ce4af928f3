import pytest

from dlmm_terminal.errors import ResolutionError, RemoteFetchError
from dlmm_terminal.pool_index import PoolIndexClient
from dlmm_terminal.resolver import (
    PairResolver, resolve_pair, is_address, build_alias_index, near_candidates
)

from conftest import FakeResponse, FakeSession, WSOL_USDC, JUP_USDC, BONK_SOL

NATIVE_MINT = "So11111111111111111111111111111111111111112"


@pytest.mark.parametrize("query", ["SOL-USDC", "SOL/USDC", "SOLUSDC", "sol usdc", "USDC-SOL", "WSOL_USDC"])
def test_pair_spellings_resolve_to_same_pool(index_client, query):
    resolved = PairResolver(index_client).resolve(query)
    assert resolved.address == WSOL_USDC
    assert resolved.name == "SOL-USDC"


def test_name_field_alias(index_client):
    assert resolve_pair("jup-usdc", index_client).address == JUP_USDC


def test_wrapped_native_symbol_is_unwrapped(index_client):
    resolved = resolve_pair("BONK-SOL", index_client)
    assert resolved.address == BONK_SOL
    assert resolved.name == "BONK/WSOL"


def test_address_short_circuits_without_fetch(index_client, pool_session):
    resolved = resolve_pair(f"  {NATIVE_MINT} ", index_client)
    assert resolved.address == NATIVE_MINT
    assert resolved.name == NATIVE_MINT
    assert pool_session.calls == []


def test_each_resolution_fetches_fresh_snapshot(index_client, pool_session):
    resolver = PairResolver(index_client)
    resolver.resolve("SOL-USDC")
    resolver.resolve("SOL-USDC")
    assert len(pool_session.calls) == 2


def test_unmatched_query_lists_near_matches(index_client):
    with pytest.raises(ResolutionError) as excinfo:
        resolve_pair("USDC", index_client)
    assert excinfo.value.candidates
    assert len(excinfo.value.candidates) <= 5
    assert all("USDC" in key for key in excinfo.value.candidates)
    assert 'No DLMM pool matches "USDC"' in str(excinfo.value)


def test_unmatched_query_with_no_near_matches(index_client):
    with pytest.raises(ResolutionError) as excinfo:
        resolve_pair("BONKUSDC", index_client)
    assert excinfo.value.candidates == []
    assert str(excinfo.value).endswith("(near matches: none)")


def test_alias_collision_keeps_last_record():
    records = [
        {"address": "first", "name": "ABC-DEF"},
        {"address": "second", "name": "ABC-DEF"},
    ]
    index = build_alias_index(records)
    assert index["ABCDEF"].address == "second"


def test_records_without_address_are_skipped():
    index = build_alias_index([{"name": "ABC-DEF"}, "garbage", None])
    assert index == {}


def test_near_candidates_probe_wrapped_symbol():
    keys = ["WSOLUSDC", "JUPUSDC"]
    assert near_candidates("SOLUSD", keys) == ["WSOLUSDC"]


def test_is_address():
    assert is_address(NATIVE_MINT)
    assert not is_address("SOL-USDC")
    # right length but contains 0, which base58 excludes
    assert not is_address("0" * 43)


def test_fetch_failure_propagates():
    session = FakeSession(FakeResponse(500, None))
    client = PoolIndexClient(base_url="https://dlmm.test", session=session)
    with pytest.raises(RemoteFetchError):
        resolve_pair("SOL-USDC", client)
