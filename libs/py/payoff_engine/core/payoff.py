# SPDX-License-Identifier: MIT

"""Terminal (expiry) payoff math for spot, option and futures positions.

Every function here is pure: positions and sampling parameters in, freshly
built floats or :class:`PayoffPoint` lists out. Option payoff uses intrinsic
value at a single price; there is no time value, volatility or discounting.

Prices are sampled as ``price_start + i * step_size`` so that long ranges do
not accumulate floating-point drift and the end of the range is not skipped.

Breakeven detection interpolates linearly between neighbouring samples and
therefore finds at most one crossing per sampling interval. Payoff curves
with several sign changes inside one step (tight option combinations) are
under-reported; a finer ``step_size`` reduces but never removes this.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence

import numpy as np

from .logging import get_logger
from .models import (
    FuturesPosition,
    OptionPosition,
    OptionType,
    PayoffPoint,
    Position,
    SpotPosition,
    active_positions,
)

log = get_logger(__name__)

# Relative slack when counting samples so an endpoint lost to rounding
# (e.g. 0.3 / 0.1 == 2.9999999999999996) is still sampled.
_SAMPLE_COUNT_TOLERANCE = 1e-9


class ChartParameterError(ValueError):
    """Raised when sampling parameters cannot describe a price grid."""


def intrinsic_value(option: OptionPosition, underlying_price: float | np.ndarray) -> float | np.ndarray:
    if option.option_type == OptionType.CALL:
        return np.maximum(underlying_price - option.strike_price, 0.0)
    return np.maximum(option.strike_price - underlying_price, 0.0)


def position_payoff(position: Position, prices: float | np.ndarray) -> float | np.ndarray:
    if isinstance(position, SpotPosition):
        return position.quantity * (prices - position.entry_price)
    if isinstance(position, OptionPosition):
        # Signed quantity covers both sides: a short pays intrinsic and keeps premium.
        return position.quantity * (intrinsic_value(position, prices) - position.premium)
    if isinstance(position, FuturesPosition):
        return position.quantity * position.contract_size * (prices - position.entry_price)
    raise TypeError(f"Unsupported position type: {type(position).__name__}")


def calculate_single_payoff(position: Position, underlying_price: float) -> float:
    """Return the P&L of ``position`` if the underlying settles at ``underlying_price``.

    The ``active`` flag is ignored here; aggregation functions filter on it.
    """

    return float(position_payoff(position, float(underlying_price)))


def calculate_portfolio_payoff(positions: Sequence[Position], underlying_price: float) -> float:
    """Sum single payoffs over active positions only."""

    return sum(
        (calculate_single_payoff(position, underlying_price) for position in active_positions(positions)),
        0.0,
    )


def payoff_vector(positions: Sequence[Position], prices: np.ndarray) -> np.ndarray:
    """Vectorised portfolio payoff for an array of prices."""

    totals = np.zeros(len(prices), dtype=float)
    for position in active_positions(positions):
        totals = totals + position_payoff(position, prices)
    return totals


def sample_prices(price_start: float, price_end: float, step_size: float) -> np.ndarray:
    """Return the sampling grid ``price_start + i * step_size`` bounded by ``price_end``.

    Raises :class:`ChartParameterError` for a non-positive step, non-finite
    bounds, or a range too wide to count in steps. A reversed range yields an
    empty grid.
    """

    for label, value in (("price_start", price_start), ("price_end", price_end), ("step_size", step_size)):
        if not math.isfinite(value):
            raise ChartParameterError(f"{label} must be finite, got {value!r}")
    if step_size <= 0:
        raise ChartParameterError(f"step_size must be positive, got {step_size!r}")
    if price_start > price_end:
        return np.empty(0, dtype=float)

    steps = (price_end - price_start) / step_size
    if not math.isfinite(steps):
        raise ChartParameterError(
            f"range {price_start!r}..{price_end!r} cannot be sampled with step_size {step_size!r}"
        )
    count = int(math.floor(steps + _SAMPLE_COUNT_TOLERANCE)) + 1
    prices = price_start + np.arange(count, dtype=float) * step_size
    prices[-1] = min(prices[-1], price_end)
    return prices


def generate_payoff_curve(
    positions: Sequence[Position],
    price_start: float,
    price_end: float,
    step_size: float,
) -> list[PayoffPoint]:
    """Sample the portfolio payoff across ``[price_start, price_end]``."""

    prices = sample_prices(price_start, price_end, step_size)
    payoffs = payoff_vector(positions, prices)
    log.debug("Generated payoff curve with %d points", len(prices))
    return [PayoffPoint(price=float(price), payoff=float(payoff)) for price, payoff in zip(prices, payoffs)]


def _interpolate_zero_crossing(x1: float, y1: float, x2: float, y2: float) -> float:
    if abs(y2 - y1) < sys.float_info.epsilon:
        return x1
    return x1 + (0.0 - y1) * (x2 - x1) / (y2 - y1)


def breakevens_from_curve(curve: Sequence[PayoffPoint]) -> list[float]:
    """Locate zero crossings on an already sampled curve.

    Every qualifying interval contributes one crossing, so a sample landing
    exactly on zero is reported twice (once per adjacent interval) and flat
    stretches of zero payoff report every sample they touch.
    """

    crossings: list[float] = []
    for left, right in zip(curve, curve[1:]):
        y1, y2 = left.payoff, right.payoff
        if (y1 <= 0.0 and y2 >= 0.0) or (y1 >= 0.0 and y2 <= 0.0):
            crossings.append(_interpolate_zero_crossing(left.price, y1, right.price, y2))
    return crossings


def find_breakeven_points(
    positions: Sequence[Position],
    price_start: float,
    price_end: float,
    step_size: float,
) -> list[float]:
    if not active_positions(positions):
        return []
    return breakevens_from_curve(generate_payoff_curve(positions, price_start, price_end, step_size))


def max_payoff(curve: Sequence[PayoffPoint]) -> float | None:
    if not curve:
        return None
    return max(point.payoff for point in curve)


def min_payoff(curve: Sequence[PayoffPoint]) -> float | None:
    if not curve:
        return None
    return min(point.payoff for point in curve)


def calculate_max_profit(
    positions: Sequence[Position],
    price_start: float,
    price_end: float,
    step_size: float,
) -> float | None:
    """Highest sampled payoff inside the range.

    This is a range-bounded estimate: a naked long call reports the payoff at
    ``price_end``, not an unlimited bound. See ``has_unlimited_profit`` for
    the structural view.
    """

    if not active_positions(positions):
        return None
    result = max_payoff(generate_payoff_curve(positions, price_start, price_end, step_size))
    if result is not None:
        log.debug("Max profit calculated: %.2f", result)
    return result


def calculate_max_loss(
    positions: Sequence[Position],
    price_start: float,
    price_end: float,
    step_size: float,
) -> float | None:
    """Lowest sampled payoff inside the range (range-bounded, like max profit)."""

    if not active_positions(positions):
        return None
    result = min_payoff(generate_payoff_curve(positions, price_start, price_end, step_size))
    if result is not None:
        log.debug("Max loss calculated: %.2f", result)
    return result
