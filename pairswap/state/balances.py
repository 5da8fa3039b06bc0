"""
Single-asset balance tracking.

Implements BalanceTable[Participant] -> Amount for one fungible asset.
"""

from typing import Dict


# Type aliases
Participant = str  # account identifier on an asset ledger
AssetId = str  # ledger identifier, e.g. "TKA"
Amount = int  # Non-negative integer (arbitrary precision)


class BalanceTable:
    """
    Balance table mapping participant -> amount for a single asset.

    Note: this class stores balances in a plain dict. Callers that need a
    deterministic ordering must sort keys explicitly (see `pairswap/integration/snapshot.py`).
    """

    def __init__(self):
        """Initialize empty balance table."""
        self._balances: Dict[Participant, Amount] = {}

    def get(self, holder: Participant) -> Amount:
        """Get balance for holder. Returns 0 if not found."""
        return self._balances.get(holder, 0)

    def set(self, holder: Participant, amount: Amount) -> None:
        """
        Set balance for holder.

        Args:
            holder: Account identifier
            amount: Non-negative amount

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop(holder, None)
        else:
            self._balances[holder] = amount

    def add(self, holder: Participant, delta: Amount) -> None:
        """
        Add delta to balance. Equivalent to set(holder, get(holder) + delta).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(holder)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, new_balance)

    def subtract(self, holder: Participant, delta: Amount) -> None:
        """Subtract a non-negative delta from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, -delta)

    def total(self) -> Amount:
        """Sum of all balances (the asset's circulating supply in this table)."""
        return sum(self._balances.values())

    def get_all_balances(self) -> Dict[Participant, Amount]:
        """Return a copy of all non-zero balances."""
        return dict(self._balances)

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
