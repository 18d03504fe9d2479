# SPDX-License-Identifier: MIT

"""Core primitives for the payoff engine."""

from .models import (
    FuturesPosition,
    OptionPosition,
    OptionType,
    PayoffPoint,
    PortfolioMetrics,
    Position,
    PositionType,
    RiskLevel,
    SpotPosition,
    active_positions,
    parse_position,
    parse_positions,
)
from .payoff import (
    ChartParameterError,
    calculate_max_loss,
    calculate_max_profit,
    calculate_portfolio_payoff,
    calculate_single_payoff,
    find_breakeven_points,
    generate_payoff_curve,
)
from .portfolio import analyze_portfolio, get_risk_level, has_unlimited_loss, has_unlimited_profit
from .ranges import suggest_price_range
from .tables import payoff_table

__all__ = [
    "ChartParameterError",
    "FuturesPosition",
    "OptionPosition",
    "OptionType",
    "PayoffPoint",
    "PortfolioMetrics",
    "Position",
    "PositionType",
    "RiskLevel",
    "SpotPosition",
    "active_positions",
    "analyze_portfolio",
    "calculate_max_loss",
    "calculate_max_profit",
    "calculate_portfolio_payoff",
    "calculate_single_payoff",
    "find_breakeven_points",
    "generate_payoff_curve",
    "get_risk_level",
    "has_unlimited_loss",
    "has_unlimited_profit",
    "parse_position",
    "parse_positions",
    "payoff_table",
    "suggest_price_range",
]
