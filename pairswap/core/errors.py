"""Exception types for the pool engine.

Every ``PoolError`` is a caller-input or state-precondition failure: it aborts
the triggering operation with no state change. ``PoolInvariantError`` is raised
when a computed post-state would break a pool invariant, which indicates a bug
rather than bad input.
"""

from __future__ import annotations


class PoolError(ValueError):
    """Base class for rejected pool operations."""


class InvalidAmount(PoolError):
    """A quantity required to be strictly positive was zero or negative."""


class RatioMismatch(PoolError):
    """A deposit's asset pair does not match the current reserve ratio exactly."""


class InsufficientShares(PoolError):
    """A withdrawal requests more shares than the caller owns."""


class NoLiquidity(PoolError):
    """A swap or price query was made against an empty pool."""


class InsufficientBalance(PoolError):
    """An asset ledger could not debit the owner's balance."""


class InsufficientAllowance(PoolError):
    """An asset ledger could not debit the spender's allowance."""


class PoolInvariantError(Exception):
    """Raised when a candidate post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
