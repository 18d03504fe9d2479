# SPDX-License-Identifier: MIT

"""Payoff and risk engine for spot, option and futures portfolios."""

from .core.models import (
    FuturesPosition,
    OptionPosition,
    OptionType,
    PayoffPoint,
    PortfolioMetrics,
    Position,
    PositionType,
    RiskLevel,
    SpotPosition,
)
from .core.payoff import (
    ChartParameterError,
    calculate_max_loss,
    calculate_max_profit,
    calculate_portfolio_payoff,
    calculate_single_payoff,
    find_breakeven_points,
    generate_payoff_curve,
)
from .core.portfolio import analyze_portfolio, get_risk_level, has_unlimited_loss, has_unlimited_profit
from .validation import ValidationResult, validate_chart_parameters, validate_portfolio, validate_position

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
    "ValidationResult",
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
    "validate_chart_parameters",
    "validate_portfolio",
    "validate_position",
]
