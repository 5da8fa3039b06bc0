# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.state import BalanceTable, ShareTable


@pytest.mark.parametrize("table_cls", [BalanceTable, ShareTable])
def test_zero_balances_are_dropped(table_cls) -> None:
    table = table_cls()
    table.set("alice", 5)
    table.subtract("alice", 5)
    assert table.get("alice") == 0
    assert table.get_all_balances() == {}


@pytest.mark.parametrize("table_cls", [BalanceTable, ShareTable])
def test_negative_results_rejected(table_cls) -> None:
    table = table_cls()
    table.add("alice", 3)
    with pytest.raises(ValueError):
        table.subtract("alice", 4)
    with pytest.raises(ValueError):
        table.set("alice", -1)
    with pytest.raises(ValueError):
        table.subtract("alice", -1)
    assert table.get("alice") == 3


@pytest.mark.parametrize("table_cls", [BalanceTable, ShareTable])
def test_total_sums_entries(table_cls) -> None:
    table = table_cls()
    table.add("alice", 70)
    table.add("bob", 71)
    assert table.total() == 141


def test_share_table_copy_is_independent() -> None:
    shares = ShareTable()
    shares.set("alice", 10)
    copied = shares.copy()
    copied.add("bob", 5)
    copied.subtract("alice", 10)
    assert shares.get_all_balances() == {"alice": 10}
    assert copied.get_all_balances() == {"bob": 5}
    assert len(shares) == len(copied) == 1


def test_get_all_balances_returns_copy() -> None:
    shares = ShareTable()
    shares.set("alice", 1)
    shares.get_all_balances()["alice"] = 999
    assert shares.get("alice") == 1
