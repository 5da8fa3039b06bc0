"""
Ownership share tracking for a pool.

Shares are scoped to a single pool and tracked separately from asset balances.
"""

from __future__ import annotations

from typing import Dict

from .balances import Amount, Participant


class ShareTable:
    """
    Share balance table mapping participant -> share count.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    - The table is copied before each pool operation and swapped in on commit,
      so a failed operation never leaves a half-updated table behind.
    """

    def __init__(self) -> None:
        self._balances: Dict[Participant, Amount] = {}

    def get(self, holder: Participant) -> Amount:
        """Get share balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def set(self, holder: Participant, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Share balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def add(self, holder: Participant, delta: int) -> None:
        """Add delta to a share balance (delta may be negative)."""
        current = self.get(holder)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient share balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, new_balance)

    def subtract(self, holder: Participant, delta: Amount) -> None:
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, -delta)

    def total(self) -> Amount:
        return sum(self._balances.values())

    def copy(self) -> "ShareTable":
        copied = ShareTable()
        copied._balances = dict(self._balances)
        return copied

    def get_all_balances(self) -> Dict[Participant, Amount]:
        """Return all share balances."""
        return dict(self._balances)

    def __len__(self) -> int:
        return len(self._balances)

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} entries)"
