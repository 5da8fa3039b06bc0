"""
Two-asset constant-product pool engine.

This is the imperative shell around the pure functions in `cpmm.py`:

1. Validate inputs against the current state.
2. Compute the candidate post-state (new PoolState + copied ShareTable).
3. Check invariants on the candidate (fail-closed).
4. Move assets through the custody adapters.
5. Commit the candidate and emit a notification.

Nothing is committed before every custody call has succeeded, so a rejected
operation leaves the pool exactly as it was. All public operations hold one
re-entrant lock for their whole duration, including custody calls.
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Callable, Iterator, List, Mapping, Optional, Tuple, Union

from ..integration.custody import AssetLedger, CustodyAdapter
from ..state.balances import Amount, AssetId, Participant
from ..state.pool import PoolState, PoolStatus
from ..state.shares import ShareTable
from . import cpmm
from .errors import InsufficientShares, InvalidAmount, NoLiquidity, PoolError, PoolInvariantError
from .invariants import check_all
from .types import (
    DepositResult,
    Direction,
    LiquidityAdded,
    LiquidityRemoved,
    Notification,
    Swap,
    SwapResult,
    WithdrawResult,
)

logger = logging.getLogger(__name__)

Listener = Callable[[Notification], None]


def _bool_env(environ: Mapping[str, str], name: str, *, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return bool(default)
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class PoolEngineConfig:
    # Account id the pool holds custody under, on both asset ledgers.
    # Participants approve this account before depositing or swapping.
    custody_account: str = "pool"

    # Run the invariant registry against every candidate post-state before commit.
    check_invariants: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PoolEngineConfig":
        env = os.environ if environ is None else environ
        default = cls()
        account = (env.get("PAIRSWAP_CUSTODY_ACCOUNT") or "").strip() or default.custody_account
        return cls(
            custody_account=account,
            check_invariants=_bool_env(env, "PAIRSWAP_CHECK_INVARIANTS", default=default.check_invariants),
        )


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


class LiquidityPool:
    """
    Constant-product pool over two asset ledgers.

    The ledgers are bound at construction and never change. The pool starts
    EMPTY; the first deposit makes it ACTIVE and withdrawing every share makes
    it EMPTY again.
    """

    def __init__(
        self,
        ledger_a: AssetLedger,
        ledger_b: AssetLedger,
        config: Optional[PoolEngineConfig] = None,
    ) -> None:
        self._config = config or PoolEngineConfig()
        if ledger_a.asset_id == ledger_b.asset_id:
            raise ValueError(f"Pool assets must be distinct: {ledger_a.asset_id}")
        self._custody_a = CustodyAdapter(ledger_a, self._config.custody_account)
        self._custody_b = CustodyAdapter(ledger_b, self._config.custody_account)
        self._state = PoolState(asset_a=ledger_a.asset_id, asset_b=ledger_b.asset_id)
        self._shares = ShareTable()
        self._events: List[Notification] = []
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def config(self) -> PoolEngineConfig:
        return self._config

    @property
    def asset_a(self) -> AssetId:
        return self._state.asset_a

    @property
    def asset_b(self) -> AssetId:
        return self._state.asset_b

    @property
    def state(self) -> PoolState:
        with self._lock:
            return self._state

    @property
    def status(self) -> PoolStatus:
        return self.state.status

    @property
    def total_shares(self) -> Amount:
        return self.state.total_shares

    @property
    def events(self) -> Tuple[Notification, ...]:
        with self._lock:
            return tuple(self._events)

    def reserves(self) -> Tuple[Amount, Amount]:
        s = self.state
        return s.reserve_a, s.reserve_b

    def share_of(self, participant: Participant) -> Amount:
        with self._lock:
            return self._shares.get(participant)

    def share_balances(self) -> dict:
        with self._lock:
            return self._shares.get_all_balances()

    def state_and_shares(self) -> Tuple[PoolState, ShareTable]:
        """Consistent (state, copy of share table) pair read under the pool lock."""
        with self._lock:
            return self._state, self._shares.copy()

    def custody_covers_reserves(self) -> bool:
        """True iff the pool's custody account holds at least its recorded reserves."""
        with self._lock:
            return (
                self._custody_a.held() >= self._state.reserve_a
                and self._custody_b.held() >= self._state.reserve_b
            )

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    @staticmethod
    def quote_output(amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
        return cpmm.quote_output(amount_in, reserve_in, reserve_out)

    def price_of_a_in_b(self) -> Amount:
        s = self.state
        return cpmm.spot_price(s.reserve_a, s.reserve_b)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every committed notification. Returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def deposit(self, provider: Participant, amount_a: Amount, amount_b: Amount) -> DepositResult:
        """
        Deposit an asset pair and mint ownership shares to `provider`.

        Raises:
            InvalidAmount: If either amount is not positive, or the deposit mints no share
            RatioMismatch: If the pool is active and the pair breaks the reserve ratio
            InsufficientBalance / InsufficientAllowance: From the asset ledgers
        """
        with self._lock, self._rejections("deposit", provider):
            _require_int("amount_a", amount_a)
            _require_int("amount_b", amount_b)
            if amount_a <= 0 or amount_b <= 0:
                raise InvalidAmount(f"Deposit amounts must be positive: ({amount_a}, {amount_b})")

            s = self._state
            if s.status is PoolStatus.EMPTY:
                minted = cpmm.compute_initial_shares(amount_a, amount_b)
            else:
                minted = cpmm.compute_proportional_shares(
                    amount_a, amount_b, s.reserve_a, s.reserve_b, s.total_shares
                )

            next_state = replace(
                s,
                reserve_a=s.reserve_a + amount_a,
                reserve_b=s.reserve_b + amount_b,
                total_shares=s.total_shares + minted,
            )
            next_shares = self._shares.copy()
            next_shares.add(provider, minted)
            self._verify(next_state, next_shares)

            self._pull_pair(provider, amount_a, amount_b)
            self._commit(
                next_state,
                next_shares,
                LiquidityAdded(provider, amount_a, amount_b, next_state.total_shares),
            )
            return DepositResult(shares_minted=minted, state=next_state)

    def withdraw(self, provider: Participant, shares: Amount) -> WithdrawResult:
        """
        Burn `shares` of `provider` and pay out the proportional slice of both reserves.

        Raises:
            InvalidAmount: If shares is not positive
            InsufficientShares: If provider owns fewer than `shares`
        """
        with self._lock, self._rejections("withdraw", provider):
            _require_int("shares", shares)
            if shares <= 0:
                raise InvalidAmount(f"shares must be positive: {shares}")
            owned = self._shares.get(provider)
            if shares > owned:
                raise InsufficientShares(f"{provider} owns {owned} shares, requested {shares}")

            s = self._state
            amount_a, amount_b = cpmm.compute_redemption(
                shares, s.reserve_a, s.reserve_b, s.total_shares
            )
            next_state = replace(
                s,
                reserve_a=s.reserve_a - amount_a,
                reserve_b=s.reserve_b - amount_b,
                total_shares=s.total_shares - shares,
            )
            next_shares = self._shares.copy()
            next_shares.subtract(provider, shares)
            self._verify(next_state, next_shares)

            self._custody_a.push(provider, amount_a)
            self._custody_b.push(provider, amount_b)
            self._commit(
                next_state,
                next_shares,
                LiquidityRemoved(provider, amount_a, amount_b, next_state.total_shares),
            )
            return WithdrawResult(amount_a=amount_a, amount_b=amount_b, state=next_state)

    def swap(
        self,
        trader: Participant,
        direction: Union[Direction, str],
        amount_in: Amount,
    ) -> SwapResult:
        """
        Exchange `amount_in` of the input asset for the quoted amount of the other.

        Raises:
            NoLiquidity: If the pool is empty
            InvalidAmount: If amount_in is not positive
            InsufficientBalance / InsufficientAllowance: From the input asset ledger
        """
        direction = Direction(direction)
        with self._lock, self._rejections("swap", trader):
            _require_int("amount_in", amount_in)
            s = self._state
            if s.status is PoolStatus.EMPTY:
                raise NoLiquidity("No liquidity")
            if amount_in <= 0:
                raise InvalidAmount(f"amount_in must be positive: {amount_in}")

            if direction is Direction.A_TO_B:
                custody_in, custody_out = self._custody_a, self._custody_b
                reserve_in, reserve_out = s.reserve_a, s.reserve_b
            else:
                custody_in, custody_out = self._custody_b, self._custody_a
                reserve_in, reserve_out = s.reserve_b, s.reserve_a

            amount_out, (new_reserve_in, new_reserve_out) = cpmm.swap_exact_in(
                reserve_in, reserve_out, amount_in
            )
            if direction is Direction.A_TO_B:
                next_state = replace(s, reserve_a=new_reserve_in, reserve_b=new_reserve_out)
            else:
                next_state = replace(s, reserve_a=new_reserve_out, reserve_b=new_reserve_in)
            self._verify(next_state, self._shares)

            custody_in.check_pull(trader, amount_in)
            custody_in.pull(trader, amount_in)
            try:
                custody_out.push(trader, amount_out)
            except Exception:
                custody_in.push(trader, amount_in)
                raise
            self._commit(
                next_state,
                self._shares,
                Swap(trader, direction, amount_in, amount_out),
            )
            return SwapResult(
                amount_out=amount_out,
                k_before=s.get_constant_product(),
                k_after=next_state.get_constant_product(),
                state=next_state,
            )

    def swap_a_for_b(self, trader: Participant, amount_in: Amount) -> SwapResult:
        return self.swap(trader, Direction.A_TO_B, amount_in)

    def swap_b_for_a(self, trader: Participant, amount_in: Amount) -> SwapResult:
        return self.swap(trader, Direction.B_TO_A, amount_in)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _rejections(self, op: str, participant: Participant) -> Iterator[None]:
        try:
            yield
        except PoolError as exc:
            logger.debug("%s by %s rejected: %s: %s", op, participant, type(exc).__name__, exc)
            raise

    def _verify(self, state: PoolState, shares: ShareTable) -> None:
        if not self._config.check_invariants:
            return
        violations = check_all(state, shares)
        if violations:
            raise PoolInvariantError(violations)

    def _pull_pair(self, owner: Participant, amount_a: Amount, amount_b: Amount) -> None:
        # Preflight both legs so an ordinary shortfall fails before anything moves.
        self._custody_a.check_pull(owner, amount_a)
        self._custody_b.check_pull(owner, amount_b)
        self._custody_a.pull(owner, amount_a)
        try:
            self._custody_b.pull(owner, amount_b)
        except Exception:
            self._custody_a.push(owner, amount_a)
            raise

    def _commit(self, state: PoolState, shares: ShareTable, notification: Notification) -> None:
        self._state = state
        self._shares = shares
        self._events.append(notification)
        logger.debug("%s committed: %r -> %r", notification.event.value, notification, state)
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception("pool listener %r failed on %s", listener, notification.event.value)

    def __repr__(self) -> str:
        return f"LiquidityPool({self._state!r})"
