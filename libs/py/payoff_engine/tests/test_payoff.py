# SPDX-License-Identifier: MIT

from __future__ import annotations

import math

import pytest

from payoff_engine.core.models import FuturesPosition, OptionPosition, OptionType, PayoffPoint, SpotPosition
from payoff_engine.core.payoff import (
    ChartParameterError,
    calculate_max_loss,
    calculate_max_profit,
    calculate_portfolio_payoff,
    calculate_single_payoff,
    find_breakeven_points,
    generate_payoff_curve,
    intrinsic_value,
    sample_prices,
)


def _branch_option_payoff(option: OptionPosition, price: float) -> float:
    """Legacy form that branches on the sign of the quantity."""

    if option.option_type == OptionType.CALL:
        intrinsic = max(price - option.strike_price, 0.0)
    else:
        intrinsic = max(option.strike_price - price, 0.0)
    if option.quantity >= 0:
        net = intrinsic - option.premium
    else:
        net = option.premium - intrinsic
    return abs(option.quantity) * net


def test_spot_payoff_is_zero_at_entry() -> None:
    spot = SpotPosition(quantity=100, entry_price=50)
    assert calculate_single_payoff(spot, 50.0) == 0.0
    assert calculate_single_payoff(spot, 60.0) == 1000.0
    assert calculate_single_payoff(spot, 40.0) == -1000.0

    short = SpotPosition(quantity=-100, entry_price=50)
    assert calculate_single_payoff(short, 40.0) == 1000.0


def test_long_call_loses_premium_below_strike() -> None:
    call = OptionPosition(option_type=OptionType.CALL, quantity=1, strike_price=50, premium=5)
    assert calculate_single_payoff(call, 45.0) == -5.0
    assert calculate_single_payoff(call, 50.0) == -5.0
    assert calculate_single_payoff(call, 60.0) == 5.0
    assert calculate_single_payoff(call, 0.0) == -5.0


def test_short_put_keeps_premium_and_owes_intrinsic() -> None:
    put = OptionPosition(option_type=OptionType.PUT, quantity=-1, strike_price=50, premium=3)
    assert calculate_single_payoff(put, 60.0) == 3.0
    assert calculate_single_payoff(put, 40.0) == -7.0
    assert intrinsic_value(put, 40.0) == 10.0


def test_futures_payoff_scales_by_contract_size() -> None:
    futures = FuturesPosition(quantity=2, entry_price=4000, contract_size=50)
    assert calculate_single_payoff(futures, 4010.0) == 1000.0
    short = FuturesPosition(quantity=-1, entry_price=4000, contract_size=50)
    assert calculate_single_payoff(short, 4010.0) == -500.0


def test_signed_option_formula_matches_branch_form() -> None:
    prices = [0.0, 25.0, 47.5, 50.0, 52.5, 75.0, 180.0]
    for option_type in (OptionType.CALL, OptionType.PUT):
        for quantity in (-7.0, -1.0, 0.5, 1.0, 3.0):
            for premium in (0.0, 2.5, 11.0):
                option = OptionPosition(
                    option_type=option_type, quantity=quantity, strike_price=50, premium=premium
                )
                for price in prices:
                    assert calculate_single_payoff(option, price) == pytest.approx(
                        _branch_option_payoff(option, price)
                    )


def test_portfolio_payoff_ignores_inactive_positions() -> None:
    spot = SpotPosition(quantity=100, entry_price=50)
    call = OptionPosition(option_type=OptionType.CALL, quantity=-1, strike_price=55, premium=2)
    positions = [spot, call]
    price = 60.0

    full = calculate_portfolio_payoff(positions, price)
    assert full == pytest.approx(calculate_single_payoff(spot, price) + calculate_single_payoff(call, price))

    without_call = calculate_portfolio_payoff([spot, call.toggled()], price)
    assert without_call == pytest.approx(full - calculate_single_payoff(call, price))

    restored = calculate_portfolio_payoff([spot, call.toggled().toggled()], price)
    assert restored == full


def test_curve_matches_spot_scenario() -> None:
    spot = SpotPosition(quantity=100, entry_price=50)
    curve = generate_payoff_curve([spot], 40.0, 60.0, 5.0)
    assert curve == [
        PayoffPoint(40.0, -1000.0),
        PayoffPoint(45.0, -500.0),
        PayoffPoint(50.0, 0.0),
        PayoffPoint(55.0, 500.0),
        PayoffPoint(60.0, 1000.0),
    ]


def test_curve_prices_are_increasing_and_reach_the_end() -> None:
    spot = SpotPosition(quantity=1, entry_price=1)
    for start, end, step in [(0.0, 0.3, 0.1), (0.0, 100.0, 0.01), (10.0, 17.0, 3.0), (1.0, 2.0, 0.07)]:
        curve = generate_payoff_curve([spot], start, end, step)
        prices = [point.price for point in curve]
        assert prices[0] == start
        assert all(b > a for a, b in zip(prices, prices[1:]))
        assert prices[-1] <= end
        assert prices[-1] >= end - step

    tenths = generate_payoff_curve([spot], 0.0, 0.3, 0.1)
    assert len(tenths) == 4
    assert tenths[-1].price == 0.3

    cents = generate_payoff_curve([spot], 0.0, 100.0, 0.01)
    assert len(cents) == 10001


def test_curve_for_reversed_range_is_empty() -> None:
    spot = SpotPosition(quantity=1, entry_price=1)
    assert generate_payoff_curve([spot], 100.0, 50.0, 1.0) == []
    assert generate_payoff_curve([spot], 5.0, 5.0, 1.0) == [PayoffPoint(5.0, 4.0)]


def test_curve_with_no_active_positions_is_flat() -> None:
    spot = SpotPosition(quantity=1, entry_price=1, active=False)
    curve = generate_payoff_curve([spot], 0.0, 2.0, 1.0)
    assert [point.payoff for point in curve] == [0.0, 0.0, 0.0]


@pytest.mark.parametrize(
    "start, end, step",
    [
        (0.0, 10.0, 0.0),
        (0.0, 10.0, -1.0),
        (math.nan, 10.0, 1.0),
        (0.0, math.inf, 1.0),
        (1.0, 1e308, 1e-10),
        (-1e308, 1e308, 1.0),
    ],
)
def test_sampling_rejects_degenerate_parameters(start: float, end: float, step: float) -> None:
    with pytest.raises(ChartParameterError):
        sample_prices(start, end, step)


def test_breakeven_for_long_call() -> None:
    call = OptionPosition(option_type=OptionType.CALL, quantity=1, strike_price=50, premium=5)
    points = find_breakeven_points([call], 40.0, 70.0, 1.0)
    # 55 is a sample, so both intervals touching it report the crossing
    assert points == [pytest.approx(55.0), pytest.approx(55.0)]
    assert find_breakeven_points([call], 40.0, 70.0, 2.0) == [pytest.approx(55.0)]


def test_breakevens_for_short_straddle() -> None:
    straddle = [
        OptionPosition(option_type=OptionType.CALL, quantity=-1, strike_price=100, premium=5),
        OptionPosition(option_type=OptionType.PUT, quantity=-1, strike_price=100, premium=5),
    ]
    points = find_breakeven_points(straddle, 50.0, 150.0, 1.0)
    assert points == [pytest.approx(90.0), pytest.approx(90.0), pytest.approx(110.0), pytest.approx(110.0)]


def test_breakevens_lie_on_zero_payoff() -> None:
    positions = [
        SpotPosition(quantity=100, entry_price=50.3),
        FuturesPosition(quantity=-1, entry_price=48.1, contract_size=10),
    ]
    points = find_breakeven_points(positions, 40.0, 60.0, 1.0)
    assert len(points) == 1
    for point in points:
        assert abs(calculate_portfolio_payoff(positions, point)) <= 1e-6


def test_breakevens_within_one_step_are_not_detected() -> None:
    straddle = [
        OptionPosition(option_type=OptionType.CALL, quantity=-1, strike_price=100, premium=5),
        OptionPosition(option_type=OptionType.PUT, quantity=-1, strike_price=100, premium=5),
    ]
    # both crossings (90 and 110) sit inside the single [80, 120] interval
    assert find_breakeven_points(straddle, 80.0, 120.0, 40.0) == []


def test_breakevens_empty_without_active_positions() -> None:
    spot = SpotPosition(quantity=100, entry_price=50, active=False)
    assert find_breakeven_points([spot], 40.0, 60.0, 5.0) == []
    assert find_breakeven_points([], 40.0, 60.0, 5.0) == []


def test_max_profit_and_loss_are_range_bounded() -> None:
    call = OptionPosition(option_type=OptionType.CALL, quantity=1, strike_price=50, premium=5)
    assert calculate_max_profit([call], 0.0, 100.0, 1.0) == pytest.approx(45.0)
    assert calculate_max_profit([call], 0.0, 200.0, 1.0) == pytest.approx(145.0)
    assert calculate_max_loss([call], 0.0, 100.0, 1.0) == pytest.approx(-5.0)


def test_max_profit_and_loss_none_without_active_positions() -> None:
    call = OptionPosition(option_type=OptionType.CALL, quantity=1, strike_price=50, premium=5, active=False)
    assert calculate_max_profit([call], 0.0, 100.0, 1.0) is None
    assert calculate_max_loss([call], 0.0, 100.0, 1.0) is None
    assert calculate_max_profit([], 0.0, 100.0, 1.0) is None


def test_breakeven_on_a_sample_is_reported_per_interval() -> None:
    spot = SpotPosition(quantity=100, entry_price=50)
    assert find_breakeven_points([spot], 40.0, 60.0, 5.0) == [50.0, 50.0]
    # the curve ends on the zero sample, so only one interval touches it
    assert find_breakeven_points([spot], 40.0, 50.0, 5.0) == [50.0]


def test_flat_zero_curve_reports_every_interval() -> None:
    flat = [SpotPosition(quantity=1, entry_price=50), SpotPosition(quantity=-1, entry_price=50)]
    assert find_breakeven_points(flat, 0.0, 3.0, 1.0) == [0.0, 1.0, 2.0]
