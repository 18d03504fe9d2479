# SPDX-License-Identifier: MIT

"""Position, portfolio and chart-parameter validation."""

from .checks import notional_exposure, validate_chart_parameters, validate_portfolio, validate_position
from .schema import ValidationResult

__all__ = [
    "ValidationResult",
    "notional_exposure",
    "validate_chart_parameters",
    "validate_portfolio",
    "validate_position",
]
