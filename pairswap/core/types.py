"""Data types for the pool engine.

All types are frozen dataclasses (immutable). Notifications carry exactly the
fields observers are promised; results carry what the caller needs back plus
the committed post-state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Union

from ..state.pool import PoolState


@unique
class Direction(Enum):
    """Which asset a swap takes in."""
    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"


@unique
class Event(Enum):
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    SWAP = "Swap"


@dataclass(frozen=True)
class LiquidityAdded:
    provider: str
    amount_a: int
    amount_b: int
    total_shares: int
    event: Event = Event.LIQUIDITY_ADDED


@dataclass(frozen=True)
class LiquidityRemoved:
    provider: str
    amount_a: int
    amount_b: int
    total_shares: int
    event: Event = Event.LIQUIDITY_REMOVED


@dataclass(frozen=True)
class Swap:
    trader: str
    direction: Direction
    amount_in: int
    amount_out: int
    event: Event = Event.SWAP


Notification = Union[LiquidityAdded, LiquidityRemoved, Swap]


@dataclass(frozen=True)
class DepositResult:
    shares_minted: int
    state: PoolState


@dataclass(frozen=True)
class WithdrawResult:
    amount_a: int
    amount_b: int
    state: PoolState


@dataclass(frozen=True)
class SwapResult:
    amount_out: int
    k_before: int
    k_after: int
    state: PoolState
