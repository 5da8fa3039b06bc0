"""
In-memory fungible asset ledger.

A standard transferable-balance account system (balances + allowances) used
to back the custody adapter in tests and in `tools/pool_scenario.py`.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from ..core.errors import InsufficientAllowance, InsufficientBalance, InvalidAmount
from ..state.balances import Amount, AssetId, BalanceTable, Participant

logger = logging.getLogger(__name__)


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise InvalidAmount(f"{name} must be non-negative: {value}")


class InMemoryLedger:
    """
    Ledger for a single asset.

    Notes:
    - transfer_from debits the spender's allowance and the owner's balance;
      the allowance check runs after the balance check.
    - A failed transfer leaves balances and allowances untouched.
    """

    def __init__(self, asset_id: AssetId, name: str = "") -> None:
        if not isinstance(asset_id, str) or not asset_id:
            raise ValueError("asset_id must be a non-empty string")
        self.asset_id = asset_id
        self.name = name or asset_id
        self._balances = BalanceTable()
        self._allowances: Dict[Tuple[Participant, Participant], Amount] = {}

    def mint(self, to: Participant, amount: Amount) -> None:
        _require_amount("amount", amount)
        self._balances.add(to, amount)

    def balance_of(self, holder: Participant) -> Amount:
        return self._balances.get(holder)

    def total_supply(self) -> Amount:
        return self._balances.total()

    def approve(self, owner: Participant, spender: Participant, amount: Amount) -> None:
        """Set (not add to) the amount `spender` may move out of `owner`'s balance."""
        _require_amount("amount", amount)
        if amount == 0:
            self._allowances.pop((owner, spender), None)
        else:
            self._allowances[(owner, spender)] = amount

    def allowance(self, owner: Participant, spender: Participant) -> Amount:
        return self._allowances.get((owner, spender), 0)

    def transfer(self, sender: Participant, recipient: Participant, amount: Amount) -> None:
        _require_amount("amount", amount)
        if self._balances.get(sender) < amount:
            raise InsufficientBalance(
                f"{sender} holds {self._balances.get(sender)} {self.asset_id}, needs {amount}"
            )
        self._balances.subtract(sender, amount)
        self._balances.add(recipient, amount)
        logger.debug("%s transfer %s -> %s: %d", self.asset_id, sender, recipient, amount)

    def transfer_from(
        self, spender: Participant, owner: Participant, recipient: Participant, amount: Amount
    ) -> None:
        _require_amount("amount", amount)
        if self._balances.get(owner) < amount:
            raise InsufficientBalance(
                f"{owner} holds {self._balances.get(owner)} {self.asset_id}, needs {amount}"
            )
        allowed = self.allowance(owner, spender)
        if allowed < amount:
            raise InsufficientAllowance(
                f"{spender} may move {allowed} {self.asset_id} from {owner}, needs {amount}"
            )
        self.approve(owner, spender, allowed - amount)
        self._balances.subtract(owner, amount)
        self._balances.add(recipient, amount)
        logger.debug(
            "%s transfer_from %s -> %s by %s: %d", self.asset_id, owner, recipient, spender, amount
        )

    def __repr__(self) -> str:
        return f"InMemoryLedger({self.asset_id}, supply={self.total_supply()})"
