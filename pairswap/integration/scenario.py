"""
Scenario replay against a freshly bootstrapped pool.

A scenario is a YAML document:

    unit: 1000000000000000000      # optional multiplier applied to every amount
    participants:
      alice: {a: 1000, b: 1000}    # minted on both ledgers and approved for the pool
    steps:
      - {op: deposit, who: alice, a: 100, b: 200}
      - {op: swap, who: alice, direction: A_TO_B, amount: 10}
      - {op: withdraw, who: alice, shares: all}
      - {op: price}
      - {op: deposit, who: alice, a: 50, b: 90, expect_error: RatioMismatch}

`shares` may be an int (raw share count, not scaled by `unit`), "all", or "half".
A step with `expect_error` succeeds only if the operation raises that PoolError
subclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from ..core import errors as pool_errors
from ..core.engine import LiquidityPool, PoolEngineConfig
from ..core.errors import PoolError
from ..core.types import Direction
from .ledger import InMemoryLedger
from .snapshot import PoolSnapshot, snapshot_from_pool

_OPS = ("deposit", "withdraw", "swap", "price", "quote")


class ScenarioError(Exception):
    """Malformed scenario, or a step whose outcome differs from what it declares."""


@dataclass(frozen=True)
class StepOutcome:
    index: int
    op: str
    ok: bool
    reserves: Tuple[int, int]
    total_shares: int
    value: Optional[Any] = None
    error: Optional[str] = None


@dataclass
class ScenarioRun:
    pool: LiquidityPool
    ledger_a: InMemoryLedger
    ledger_b: InMemoryLedger
    outcomes: List[StepOutcome] = field(default_factory=list)

    def snapshot(self) -> PoolSnapshot:
        return snapshot_from_pool(self.pool)


def _require_mapping(obj: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise ScenarioError(f"{name} must be a mapping")
    return obj


def _require_amount(obj: Any, *, name: str) -> int:
    if not isinstance(obj, int) or isinstance(obj, bool):
        raise ScenarioError(f"{name} must be an int")
    return obj


def load_scenario(text: str) -> Dict[str, Any]:
    try:
        obj = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ScenarioError(f"invalid scenario YAML: {exc}") from exc
    scenario = dict(_require_mapping(obj, name="scenario"))
    unit = scenario.get("unit", 1)
    if _require_amount(unit, name="unit") <= 0:
        raise ScenarioError("unit must be positive")
    _require_mapping(scenario.get("participants", {}), name="participants")
    if not isinstance(scenario.get("steps"), list):
        raise ScenarioError("steps must be a list")
    return scenario


def _error_class(name: str) -> type:
    cls = getattr(pool_errors, name, None)
    if not isinstance(cls, type) or not issubclass(cls, PoolError):
        raise ScenarioError(f"unknown pool error: {name}")
    return cls


def _resolve_shares(pool: LiquidityPool, who: str, raw: Any) -> int:
    owned = pool.share_of(who)
    if raw == "all":
        return owned
    if raw == "half":
        return owned // 2
    return _require_amount(raw, name="shares")


def _direction(raw: Any) -> Direction:
    try:
        return Direction(str(raw))
    except ValueError as exc:
        raise ScenarioError(f"unknown direction {raw!r}") from exc


def _run_step(pool: LiquidityPool, step: Mapping[str, Any], unit: int) -> Any:
    op = step.get("op")
    who = str(step.get("who", ""))
    if op == "deposit":
        a = _require_amount(step.get("a"), name="a") * unit
        b = _require_amount(step.get("b"), name="b") * unit
        return pool.deposit(who, a, b).shares_minted
    if op == "withdraw":
        res = pool.withdraw(who, _resolve_shares(pool, who, step.get("shares")))
        return [res.amount_a, res.amount_b]
    if op == "swap":
        amount = _require_amount(step.get("amount"), name="amount") * unit
        return pool.swap(who, _direction(step.get("direction", "A_TO_B")), amount).amount_out
    if op == "price":
        return pool.price_of_a_in_b()
    if op == "quote":
        amount = _require_amount(step.get("amount"), name="amount") * unit
        reserve_a, reserve_b = pool.reserves()
        if _direction(step.get("direction", "A_TO_B")) is Direction.A_TO_B:
            return pool.quote_output(amount, reserve_a, reserve_b)
        return pool.quote_output(amount, reserve_b, reserve_a)
    raise ScenarioError(f"unknown op {op!r}; expected one of {', '.join(_OPS)}")


def run_scenario(
    scenario: Mapping[str, Any],
    *,
    config: Optional[PoolEngineConfig] = None,
    asset_a: str = "TKA",
    asset_b: str = "TKB",
) -> ScenarioRun:
    """
    Bootstrap two in-memory ledgers and a pool, fund participants, replay steps.

    Raises:
        ScenarioError: On malformed input, an unexpected PoolError, or a step
            that declared `expect_error` but succeeded or failed differently
    """
    unit = int(scenario.get("unit", 1))
    ledger_a = InMemoryLedger(asset_a, name="Token A")
    ledger_b = InMemoryLedger(asset_b, name="Token B")
    pool = LiquidityPool(ledger_a, ledger_b, config=config)
    account = pool.config.custody_account

    for who, funding in _require_mapping(scenario.get("participants", {}), name="participants").items():
        funding = _require_mapping(funding, name=f"participants.{who}")
        for ledger, key in ((ledger_a, "a"), (ledger_b, "b")):
            amount = _require_amount(funding.get(key, 0), name=f"participants.{who}.{key}") * unit
            ledger.mint(str(who), amount)
            ledger.approve(str(who), account, amount)

    run = ScenarioRun(pool=pool, ledger_a=ledger_a, ledger_b=ledger_b)
    for index, raw_step in enumerate(scenario.get("steps", [])):
        step = _require_mapping(raw_step, name=f"steps[{index}]")
        op = str(step.get("op"))
        expected = step.get("expect_error")
        expected_cls = _error_class(str(expected)) if expected is not None else None
        try:
            value = _run_step(pool, step, unit)
        except PoolError as exc:
            if expected_cls is None or not isinstance(exc, expected_cls):
                raise ScenarioError(f"step {index} ({op}) failed: {type(exc).__name__}: {exc}") from exc
            reserve_a, reserve_b = pool.reserves()
            run.outcomes.append(
                StepOutcome(index, op, False, (reserve_a, reserve_b), pool.total_shares, error=type(exc).__name__)
            )
            continue
        if expected_cls is not None:
            raise ScenarioError(f"step {index} ({op}) succeeded, expected {expected}")
        reserve_a, reserve_b = pool.reserves()
        run.outcomes.append(StepOutcome(index, op, True, (reserve_a, reserve_b), pool.total_shares, value=value))
    return run
