# SPDX-License-Identifier: MIT

"""Portfolio-level metrics and structural risk classification."""

from __future__ import annotations

from collections.abc import Sequence

from .logging import get_logger
from .models import (
    FuturesPosition,
    OptionPosition,
    OptionType,
    PayoffPoint,
    PortfolioMetrics,
    Position,
    RiskLevel,
    SpotPosition,
    active_positions,
)
from .payoff import breakevens_from_curve, generate_payoff_curve, max_payoff, min_payoff

log = get_logger(__name__)


def analyze_portfolio(
    positions: Sequence[Position],
    price_start: float,
    price_end: float,
    step_size: float,
) -> PortfolioMetrics:
    """Summarise the sampled payoff curve of the active positions.

    ``profit_probability`` and ``expected_value`` treat every sampled price as
    equally likely. They are naive heuristics, not a price-distribution model.
    """

    active = active_positions(positions)
    if not active:
        return PortfolioMetrics(total_positions=0)

    curve = generate_payoff_curve(active, price_start, price_end, step_size)
    metrics = PortfolioMetrics(
        total_positions=len(active),
        breakeven_points=breakevens_from_curve(curve),
        max_profit=max_payoff(curve),
        max_loss=min_payoff(curve),
        profit_probability=profit_probability(curve),
        expected_value=expected_value(curve),
    )
    log.debug(
        "Analyzed %d active positions over %d samples: %d breakevens",
        metrics.total_positions,
        len(curve),
        len(metrics.breakeven_points),
    )
    return metrics


def profit_probability(curve: Sequence[PayoffPoint]) -> float | None:
    if not curve:
        return None
    profitable = sum(1 for point in curve if point.payoff > 0.0)
    return profitable / len(curve)


def expected_value(curve: Sequence[PayoffPoint]) -> float | None:
    if not curve:
        return None
    return sum(point.payoff for point in curve) / len(curve)


def _has_unlimited_upside(position: Position) -> bool:
    if isinstance(position, (SpotPosition, FuturesPosition)):
        return position.quantity > 0
    if isinstance(position, OptionPosition):
        return position.option_type == OptionType.CALL and position.quantity > 0
    return False


def _has_unlimited_downside(position: Position) -> bool:
    if isinstance(position, SpotPosition):
        # bounded by price -> 0, still classified as unlimited
        return position.quantity > 0
    if isinstance(position, OptionPosition):
        if position.option_type == OptionType.CALL:
            return position.quantity < 0
        return position.quantity > 0
    if isinstance(position, FuturesPosition):
        return True
    return False


def has_unlimited_profit(positions: Sequence[Position]) -> bool:
    """True when any active position has uncapped upside (long spot, call or futures)."""

    return any(_has_unlimited_upside(position) for position in active_positions(positions))


def has_unlimited_loss(positions: Sequence[Position]) -> bool:
    """True when any active position has structurally open downside.

    Long spot, short calls, long puts and every futures position qualify.
    """

    return any(_has_unlimited_downside(position) for position in active_positions(positions))


_RISK_MATRIX: dict[tuple[bool, bool], RiskLevel] = {
    (True, True): RiskLevel.HIGH,
    (True, False): RiskLevel.MEDIUM,
    (False, True): RiskLevel.HIGH,
    (False, False): RiskLevel.LOW,
}


def get_risk_level(positions: Sequence[Position]) -> RiskLevel:
    """Classify from position structure alone; sampled curve data is not consulted."""

    return _RISK_MATRIX[(has_unlimited_profit(positions), has_unlimited_loss(positions))]
