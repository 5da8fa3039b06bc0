"""
Asset custody adapter.

The pool never touches an asset ledger directly. It holds one CustodyAdapter
per asset, bound to the pool's own custody account, and calls:
  - pull(owner, amount): move `amount` from `owner` into pool custody
  - push(to, amount): move `amount` from pool custody to `to`

Ledger failures (InsufficientBalance / InsufficientAllowance) propagate unchanged.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.errors import InsufficientAllowance, InsufficientBalance
from ..state.balances import Amount, AssetId, Participant


@runtime_checkable
class AssetLedger(Protocol):
    """Standard transferable-balance account system for one fungible asset."""

    asset_id: AssetId

    def balance_of(self, holder: Participant) -> Amount: ...

    def allowance(self, owner: Participant, spender: Participant) -> Amount: ...

    def transfer_from(
        self, spender: Participant, owner: Participant, recipient: Participant, amount: Amount
    ) -> None: ...

    def transfer(self, sender: Participant, recipient: Participant, amount: Amount) -> None: ...


class CustodyAdapter:
    """Pass-through from the pool's custody account to one asset ledger."""

    def __init__(self, ledger: AssetLedger, account: Participant) -> None:
        if not isinstance(account, str) or not account:
            raise ValueError("custody account must be a non-empty string")
        self._ledger = ledger
        self._account = account

    @property
    def asset_id(self) -> AssetId:
        return self._ledger.asset_id

    @property
    def account(self) -> Participant:
        return self._account

    def check_pull(self, owner: Participant, amount: Amount) -> None:
        """
        Raise the error `pull(owner, amount)` would raise, without moving anything.

        Used to preflight both legs of a deposit before the first transfer.
        """
        if self._ledger.balance_of(owner) < amount:
            raise InsufficientBalance(
                f"{owner} holds less than {amount} of {self.asset_id}"
            )
        if self._ledger.allowance(owner, self._account) < amount:
            raise InsufficientAllowance(
                f"{owner} has not approved {amount} of {self.asset_id} for {self._account}"
            )

    def pull(self, owner: Participant, amount: Amount) -> None:
        self._ledger.transfer_from(self._account, owner, self._account, amount)

    def push(self, to: Participant, amount: Amount) -> None:
        self._ledger.transfer(self._account, to, amount)

    def held(self) -> Amount:
        """Amount of the asset currently in pool custody."""
        return self._ledger.balance_of(self._account)

    def __repr__(self) -> str:
        return f"CustodyAdapter(asset={self.asset_id}, account={self._account})"
