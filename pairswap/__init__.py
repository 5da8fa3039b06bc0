"""
pairswap: two-asset constant-product liquidity pool.
"""

from .core import (
    Direction,
    InsufficientAllowance,
    InsufficientBalance,
    InsufficientShares,
    InvalidAmount,
    LiquidityPool,
    NoLiquidity,
    PoolEngineConfig,
    PoolError,
    RatioMismatch,
    quote_output,
)
from .integration import InMemoryLedger

__all__ = [
    "Direction",
    "InsufficientAllowance",
    "InsufficientBalance",
    "InsufficientShares",
    "InvalidAmount",
    "LiquidityPool",
    "NoLiquidity",
    "PoolEngineConfig",
    "PoolError",
    "RatioMismatch",
    "quote_output",
    "InMemoryLedger",
]
