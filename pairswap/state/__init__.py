"""
State management for pairswap pools
"""

from .balances import BalanceTable
from .pool import PoolState, PoolStatus
from .shares import ShareTable

__all__ = [
    "BalanceTable",
    "PoolState",
    "PoolStatus",
    "ShareTable",
]
