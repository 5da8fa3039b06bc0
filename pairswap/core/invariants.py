"""Invariant checkers for a pool state and its share table.

Each function returns True when the invariant holds, and `check_all()` returns
the list of violated invariant names (empty = all pass). The engine runs
`check_all()` against every candidate post-state before committing it.
"""

from __future__ import annotations

from typing import Callable

from ..state.pool import PoolState
from ..state.shares import ShareTable


def inv_empty_iff_no_shares(s: PoolState, shares: ShareTable) -> bool:
    no_reserves = s.reserve_a == 0 and s.reserve_b == 0
    return (s.total_shares == 0) == no_reserves


def inv_active_reserves_positive(s: PoolState, shares: ShareTable) -> bool:
    # A one-sided pool would make every later deposit a ratio mismatch.
    if s.total_shares == 0:
        return True
    return s.reserve_a > 0 and s.reserve_b > 0


def inv_shares_sum_to_total(s: PoolState, shares: ShareTable) -> bool:
    return shares.total() == s.total_shares


def inv_share_balances_positive(s: PoolState, shares: ShareTable) -> bool:
    return all(amount > 0 for amount in shares.get_all_balances().values())


InvariantFn = Callable[[PoolState, ShareTable], bool]

INVARIANT_REGISTRY: dict[str, InvariantFn] = {
    "inv_empty_iff_no_shares": inv_empty_iff_no_shares,
    "inv_active_reserves_positive": inv_active_reserves_positive,
    "inv_shares_sum_to_total": inv_shares_sum_to_total,
    "inv_share_balances_positive": inv_share_balances_positive,
}


def check_all(state: PoolState, shares: ShareTable) -> list[str]:
    """Return names of all violated invariants (empty list = all pass)."""
    return [name for name, fn in INVARIANT_REGISTRY.items() if not fn(state, shares)]
