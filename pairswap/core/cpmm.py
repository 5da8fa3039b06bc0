"""
Constant Product Market Maker (CPMM) pricing and share accounting.

This module implements the pool's integer-only arithmetic with fixed
floor rounding. Every function is pure; the engine composes them.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Floor Rounding
- Time Complexity: O(1) per operation (O(log n) for the initial isqrt)
- Space Complexity: O(1) auxiliary
- Invariant: After each swap, x' * y' >= x * y, strictly greater for any
  positive input because the fee haircut stays in the pool.
"""

from __future__ import annotations

import math
from typing import Tuple

from ..state.balances import Amount
from .errors import InvalidAmount, NoLiquidity, RatioMismatch

# Fee haircut on swap input: 0.3% retained by the pool.
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def _require_reserves(*pairs: Tuple[str, int]) -> None:
    for name, value in pairs:
        _require_int(name, value)
        if value < 0:
            raise ValueError(f"{name} must be non-negative: {value}")


def quote_output(amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
    """
    Output amount for an exact-in swap against the given reserves.

    Formula (floor division):
        effective_in = amount_in * 997
        amount_out = effective_in * reserve_out // (reserve_in * 1000 + effective_in)

    Args:
        amount_in: Exact input amount
        reserve_in: Current reserve of the input asset
        reserve_out: Current reserve of the output asset

    Returns:
        Amount of the output asset the trade yields

    Raises:
        InvalidAmount: If amount_in is not strictly positive
    """
    _require_int("amount_in", amount_in)
    if amount_in <= 0:
        raise InvalidAmount(f"amount_in must be positive: {amount_in}")
    _require_reserves(("reserve_in", reserve_in), ("reserve_out", reserve_out))

    effective_in = amount_in * FEE_NUMERATOR
    numerator = effective_in * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + effective_in
    return numerator // denominator


def swap_exact_in(
    reserve_in: Amount,
    reserve_out: Amount,
    amount_in: Amount,
) -> Tuple[Amount, Tuple[Amount, Amount]]:
    """
    Quote an exact-in swap and compute the post-swap reserves.

    Post-swap reserves:
        new_reserve_in = reserve_in + amount_in  (fee stays in pool)
        new_reserve_out = reserve_out - amount_out

    Returns:
        Tuple of (amount_out, (new_reserve_in, new_reserve_out))

    Raises:
        InvalidAmount: If amount_in is not strictly positive
        NoLiquidity: If either reserve is empty
        ValueError: If the result would violate the constant-product invariant
    """
    _require_reserves(("reserve_in", reserve_in), ("reserve_out", reserve_out))
    if reserve_in == 0 or reserve_out == 0:
        raise NoLiquidity("cannot swap against an empty reserve")

    amount_out = quote_output(amount_in, reserve_in, reserve_out)
    if amount_out >= reserve_out:
        raise ValueError(f"amount_out ({amount_out}) would drain reserve_out ({reserve_out})")

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

    k_before = reserve_in * reserve_out
    k_after = new_reserve_in * new_reserve_out
    if k_after <= k_before:
        raise ValueError(f"Invariant violation: new_k ({k_after}) <= old_k ({k_before})")

    return amount_out, (new_reserve_in, new_reserve_out)


def compute_initial_shares(amount_a: Amount, amount_b: Amount) -> Amount:
    """
    Shares minted by the deposit that initializes an empty pool.

        shares = isqrt(amount_a * amount_b)

    The geometric mean is symmetric in the two assets and at least 1 for any
    positive pair. math.isqrt keeps this exact for products beyond float range.
    """
    _require_int("amount_a", amount_a)
    _require_int("amount_b", amount_b)
    if amount_a <= 0 or amount_b <= 0:
        raise InvalidAmount(f"Deposit amounts must be positive: ({amount_a}, {amount_b})")
    return math.isqrt(amount_a * amount_b)


def compute_proportional_shares(
    amount_a: Amount,
    amount_b: Amount,
    reserve_a: Amount,
    reserve_b: Amount,
    total_shares: Amount,
) -> Amount:
    """
    Shares minted by a deposit into an initialized pool.

    The pair must match the reserve ratio exactly:
        amount_a * reserve_b == amount_b * reserve_a

    Shares minted (floor):
        shares = total_shares * amount_a // reserve_a

    Raises:
        InvalidAmount: If an amount is not positive, or the deposit is too
            small to mint a single share
        RatioMismatch: If the pair does not match the reserve ratio
        ValueError: If called against an empty pool
    """
    _require_int("amount_a", amount_a)
    _require_int("amount_b", amount_b)
    _require_reserves(
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_shares", total_shares),
    )
    if amount_a <= 0 or amount_b <= 0:
        raise InvalidAmount(f"Deposit amounts must be positive: ({amount_a}, {amount_b})")
    if total_shares == 0 or reserve_a == 0 or reserve_b == 0:
        raise ValueError("Proportional deposit requires an initialized pool")

    if amount_a * reserve_b != amount_b * reserve_a:
        raise RatioMismatch(
            f"Deposit ({amount_a}, {amount_b}) does not match reserve ratio ({reserve_a}, {reserve_b})"
        )

    shares = (total_shares * amount_a) // reserve_a
    if shares <= 0:
        raise InvalidAmount(f"Deposit ({amount_a}, {amount_b}) is too small to mint a share")
    return shares


def compute_redemption(
    shares: Amount,
    reserve_a: Amount,
    reserve_b: Amount,
    total_shares: Amount,
) -> Tuple[Amount, Amount]:
    """
    Asset amounts returned for burning `shares`.

    Formula (floor):
        amount_a = reserve_a * shares // total_shares
        amount_b = reserve_b * shares // total_shares

    Burning every outstanding share returns the reserves exactly.

    Returns:
        Tuple of (amount_a, amount_b)
    """
    _require_int("shares", shares)
    if shares <= 0:
        raise InvalidAmount(f"shares must be positive: {shares}")
    _require_reserves(
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_shares", total_shares),
    )
    if shares > total_shares:
        raise ValueError(f"Cannot burn more shares than supply: {shares} > {total_shares}")

    amount_a = (reserve_a * shares) // total_shares
    amount_b = (reserve_b * shares) // total_shares
    return amount_a, amount_b


def spot_price(reserve_a: Amount, reserve_b: Amount) -> Amount:
    """
    Coarse spot price of A in units of B: reserve_b // reserve_a.

    Floors toward zero. Execution pricing always goes through quote_output.
    """
    _require_reserves(("reserve_a", reserve_a), ("reserve_b", reserve_b))
    if reserve_a == 0:
        raise NoLiquidity("No liquidity")
    return reserve_b // reserve_a
