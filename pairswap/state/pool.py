"""
Pool state for a two-asset constant-product pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .balances import AssetId, Amount


class PoolStatus(Enum):
    """Pool status enumeration."""
    EMPTY = "EMPTY"
    ACTIVE = "ACTIVE"


def _require_amount(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


@dataclass(frozen=True)
class PoolState:
    """
    Immutable snapshot of a pool's reserves and share supply.

    The engine never mutates a PoolState; each committed operation replaces
    it with a new instance.

    Attributes:
        asset_a: Identifier of the ledger holding asset A
        asset_b: Identifier of the ledger holding asset B
        reserve_a: Amount of asset A held by the pool
        reserve_b: Amount of asset B held by the pool
        total_shares: Sum of all outstanding ownership shares
    """
    asset_a: AssetId
    asset_b: AssetId
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    total_shares: Amount = 0

    def __post_init__(self) -> None:
        if self.asset_a == self.asset_b:
            raise ValueError(f"Pool assets must be distinct: {self.asset_a}")
        _require_amount("reserve_a", self.reserve_a)
        _require_amount("reserve_b", self.reserve_b)
        _require_amount("total_shares", self.total_shares)

    @property
    def status(self) -> PoolStatus:
        return PoolStatus.EMPTY if self.total_shares == 0 else PoolStatus.ACTIVE

    def get_reserve(self, asset: AssetId) -> Amount:
        """
        Get reserve for a specific asset.

        Raises:
            ValueError: If asset is not in this pool
        """
        if asset == self.asset_a:
            return self.reserve_a
        if asset == self.asset_b:
            return self.reserve_b
        raise ValueError(f"Asset {asset} not in pool ({self.asset_a}, {self.asset_b})")

    def get_constant_product(self) -> int:
        """Compute k = reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    def __repr__(self) -> str:
        return (
            f"PoolState(assets=({self.asset_a}, {self.asset_b}), "
            f"reserves=({self.reserve_a}, {self.reserve_b}), "
            f"total_shares={self.total_shares}, status={self.status.value})"
        )
