# [TESTER] v1

from __future__ import annotations

import pytest

from pairswap.core.cpmm import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    compute_initial_shares,
    compute_proportional_shares,
    compute_redemption,
    quote_output,
    spot_price,
    swap_exact_in,
)
from pairswap.core.errors import InvalidAmount, NoLiquidity, RatioMismatch

E18 = 10**18


def test_fee_is_thirty_basis_points() -> None:
    assert (FEE_NUMERATOR, FEE_DENOMINATOR) == (997, 1000)


def test_quote_output_small_numbers() -> None:
    # 10 * 997 * 200 // (100 * 1000 + 10 * 997) = 1_994_000 // 109_970 = 18
    assert quote_output(10, 100, 200) == 18


def test_quote_output_matches_formula_at_scale() -> None:
    amount_in, reserve_in, reserve_out = 10 * E18, 100 * E18, 200 * E18
    effective_in = amount_in * 997
    expected = effective_in * reserve_out // (reserve_in * 1000 + effective_in)
    assert quote_output(amount_in, reserve_in, reserve_out) == expected
    assert 0 < expected < 20 * E18  # fee and slippage both cost the trader


@pytest.mark.parametrize("reserves", [(0, 0), (100, 200), (E18, 1)])
def test_quote_output_rejects_zero_input_for_any_reserves(reserves: tuple[int, int]) -> None:
    with pytest.raises(InvalidAmount):
        quote_output(0, *reserves)


def test_quote_output_rejects_negative_input() -> None:
    with pytest.raises(InvalidAmount):
        quote_output(-1, 100, 200)


def test_quote_output_rejects_non_int() -> None:
    with pytest.raises(TypeError):
        quote_output(1.5, 100, 200)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        quote_output(True, 100, 200)  # type: ignore[arg-type]


def test_quote_output_can_floor_to_zero() -> None:
    assert quote_output(1, 1000, 1000) == 0


def test_swap_exact_in_grows_k_even_when_output_floors_to_zero() -> None:
    amount_out, (new_in, new_out) = swap_exact_in(1000, 1000, 1)
    assert amount_out == 0
    assert (new_in, new_out) == (1001, 1000)
    assert new_in * new_out > 1000 * 1000


def test_swap_exact_in_rejects_empty_reserve() -> None:
    with pytest.raises(NoLiquidity):
        swap_exact_in(0, 100, 10)
    with pytest.raises(NoLiquidity):
        swap_exact_in(100, 0, 10)


def test_compute_initial_shares_uses_integer_isqrt() -> None:
    # Pick values where float sqrt would be wrong due to precision loss.
    n = (1 << 70) + 12345
    assert compute_initial_shares(n, n) == n


def test_compute_initial_shares_is_symmetric() -> None:
    assert compute_initial_shares(100, 200) == compute_initial_shares(200, 100) == 141
    assert compute_initial_shares(100 * E18, 200 * E18) == 141421356237309504880


def test_compute_initial_shares_positive_for_smallest_deposit() -> None:
    assert compute_initial_shares(1, 1) == 1


def test_compute_proportional_shares_exact_ratio() -> None:
    assert compute_proportional_shares(50, 100, 100, 200, 141) == 70


def test_compute_proportional_shares_rejects_ratio_mismatch() -> None:
    with pytest.raises(RatioMismatch):
        compute_proportional_shares(50, 90, 100, 200, 141)


def test_compute_proportional_shares_rejects_dust_deposit() -> None:
    # reserves (2, 2) backed by a single share: (1, 1) matches the ratio but mints 0.
    with pytest.raises(InvalidAmount, match="too small"):
        compute_proportional_shares(1, 1, 2, 2, 1)


def test_compute_redemption_floors_and_drains_exactly() -> None:
    assert compute_redemption(70, 100, 200, 141) == (49, 99)
    assert compute_redemption(141, 100, 200, 141) == (100, 200)


def test_compute_redemption_rejects_more_than_supply() -> None:
    with pytest.raises(ValueError, match="more shares than supply"):
        compute_redemption(142, 100, 200, 141)


def test_spot_price_floors() -> None:
    assert spot_price(100 * E18, 200 * E18) == 2
    assert spot_price(110, 200) == 1


def test_spot_price_requires_liquidity() -> None:
    with pytest.raises(NoLiquidity):
        spot_price(0, 0)
