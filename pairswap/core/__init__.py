"""
Core pool algorithms
"""

from .cpmm import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    compute_initial_shares,
    compute_proportional_shares,
    compute_redemption,
    quote_output,
    spot_price,
    swap_exact_in,
)
from .engine import LiquidityPool, PoolEngineConfig
from .errors import (
    InsufficientAllowance,
    InsufficientBalance,
    InsufficientShares,
    InvalidAmount,
    NoLiquidity,
    PoolError,
    PoolInvariantError,
    RatioMismatch,
)
from .invariants import INVARIANT_REGISTRY, check_all
from .types import (
    DepositResult,
    Direction,
    Event,
    LiquidityAdded,
    LiquidityRemoved,
    Notification,
    Swap,
    SwapResult,
    WithdrawResult,
)

__all__ = [
    "FEE_DENOMINATOR",
    "FEE_NUMERATOR",
    "compute_initial_shares",
    "compute_proportional_shares",
    "compute_redemption",
    "quote_output",
    "spot_price",
    "swap_exact_in",
    "LiquidityPool",
    "PoolEngineConfig",
    "PoolError",
    "InvalidAmount",
    "RatioMismatch",
    "InsufficientShares",
    "NoLiquidity",
    "InsufficientBalance",
    "InsufficientAllowance",
    "PoolInvariantError",
    "INVARIANT_REGISTRY",
    "check_all",
    "DepositResult",
    "Direction",
    "Event",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Notification",
    "Swap",
    "SwapResult",
    "WithdrawResult",
]
