# [TESTER] v1

from __future__ import annotations

from pairswap.core.invariants import INVARIANT_REGISTRY, check_all
from pairswap.state.pool import PoolState
from pairswap.state.shares import ShareTable


def _shares(**balances: int) -> ShareTable:
    table = ShareTable()
    for holder, amount in balances.items():
        table.set(holder, amount)
    return table


def test_registry_names_match_functions() -> None:
    for name, fn in INVARIANT_REGISTRY.items():
        assert fn.__name__ == name


def test_empty_pool_passes() -> None:
    assert check_all(PoolState("TKA", "TKB"), ShareTable()) == []


def test_active_pool_passes() -> None:
    state = PoolState("TKA", "TKB", reserve_a=100, reserve_b=200, total_shares=141)
    assert check_all(state, _shares(owner=100, alice=41)) == []


def test_reserves_without_shares_flagged() -> None:
    state = PoolState("TKA", "TKB", reserve_a=5, reserve_b=0, total_shares=0)
    assert check_all(state, ShareTable()) == ["inv_empty_iff_no_shares"]


def test_shares_without_reserves_flagged() -> None:
    state = PoolState("TKA", "TKB", total_shares=3)
    violated = check_all(state, _shares(owner=3))
    assert "inv_empty_iff_no_shares" in violated
    assert "inv_active_reserves_positive" in violated


def test_one_sided_active_pool_flagged() -> None:
    state = PoolState("TKA", "TKB", reserve_a=10, reserve_b=0, total_shares=3)
    assert check_all(state, _shares(owner=3)) == ["inv_active_reserves_positive"]


def test_share_sum_mismatch_flagged() -> None:
    state = PoolState("TKA", "TKB", reserve_a=100, reserve_b=200, total_shares=141)
    assert check_all(state, _shares(owner=140)) == ["inv_shares_sum_to_total"]


def test_non_positive_share_entry_flagged() -> None:
    state = PoolState("TKA", "TKB", reserve_a=100, reserve_b=200, total_shares=141)
    table = _shares(owner=141)
    table._balances["ghost"] = 0  # bypasses set(), which drops zero entries
    assert check_all(state, table) == ["inv_share_balances_positive"]
