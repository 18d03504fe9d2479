# SPDX-License-Identifier: MIT

"""Structural checks for positions, portfolios and chart sampling parameters.

Nothing here raises for bad input: problems are collected into a
:class:`ValidationResult` and callers decide whether to block. Thresholds for
warnings come from :mod:`payoff_engine.config`.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..config import EngineSettings, ValidationThresholds, settings as default_settings
from ..core.logging import get_logger
from ..core.models import FuturesPosition, OptionPosition, Position, SpotPosition
from .schema import ValidationResult

log = get_logger(__name__)


def _thresholds(settings: EngineSettings | None) -> ValidationThresholds:
    return (settings or default_settings).validation


def _finite_fields(result: ValidationResult, **values: float) -> set[str]:
    """Report each non-finite value and return the names that are usable."""

    finite: set[str] = set()
    for name, value in values.items():
        if math.isfinite(value):
            finite.add(name)
        else:
            result.add_error(f"{name.replace('_', ' ').capitalize()} must be a finite number")
    return finite


def _validate_spot(spot: SpotPosition, result: ValidationResult, limits: ValidationThresholds) -> None:
    finite = _finite_fields(result, quantity=spot.quantity, entry_price=spot.entry_price)
    if "quantity" in finite and spot.quantity == 0:
        result.add_error("Quantity cannot be zero")
    if "entry_price" in finite and spot.entry_price <= 0:
        result.add_error("Entry price must be positive")

    if "quantity" in finite and abs(spot.quantity) > limits.spot_quantity_warn:
        result.add_warning("Large position size detected")


def _validate_option(option: OptionPosition, result: ValidationResult, limits: ValidationThresholds) -> None:
    finite = _finite_fields(
        result,
        quantity=option.quantity,
        strike_price=option.strike_price,
        premium=option.premium,
    )
    if "quantity" in finite and option.quantity == 0:
        result.add_error("Quantity cannot be zero")
    if "strike_price" in finite and option.strike_price <= 0:
        result.add_error("Strike price must be positive")
    if "premium" in finite and option.premium < 0:
        result.add_error("Premium cannot be negative")

    if "premium" in finite and option.premium == 0:
        result.add_warning("Zero premium option - verify this is correct")
    if "quantity" in finite and abs(option.quantity) > limits.option_quantity_warn:
        result.add_warning("Large option position detected")
    premium_cap = option.strike_price * limits.premium_strike_ratio_warn
    if {"premium", "strike_price"} <= finite and option.premium > premium_cap:
        result.add_warning("Premium seems unusually high relative to strike price")


def _validate_futures(futures: FuturesPosition, result: ValidationResult, limits: ValidationThresholds) -> None:
    finite = _finite_fields(
        result,
        quantity=futures.quantity,
        entry_price=futures.entry_price,
        contract_size=futures.contract_size,
    )
    if "quantity" in finite and futures.quantity == 0:
        result.add_error("Quantity cannot be zero")
    if "contract_size" in finite and futures.contract_size <= 0:
        result.add_error("Contract size must be positive")

    # Futures have settled below zero before; flag it without blocking.
    if "entry_price" in finite and futures.entry_price <= 0:
        result.add_warning("Non-positive futures entry price")
    if "quantity" in finite and abs(futures.quantity) > limits.futures_quantity_warn:
        result.add_warning("Large futures position detected")
    if "contract_size" in finite and futures.contract_size > limits.contract_size_warn:
        result.add_warning("Very large contract size detected")


def validate_position(position: Position, settings: EngineSettings | None = None) -> ValidationResult:
    result = ValidationResult()
    limits = _thresholds(settings)
    if isinstance(position, SpotPosition):
        _validate_spot(position, result, limits)
    elif isinstance(position, OptionPosition):
        _validate_option(position, result, limits)
    elif isinstance(position, FuturesPosition):
        _validate_futures(position, result, limits)
    else:
        result.add_error(f"Unsupported position type: {type(position).__name__}")
    return result


def notional_exposure(position: Position) -> float:
    """``|quantity|`` times the position's reference price (and contract size)."""

    if isinstance(position, SpotPosition):
        return abs(position.quantity) * position.entry_price
    if isinstance(position, OptionPosition):
        return abs(position.quantity) * position.strike_price
    if isinstance(position, FuturesPosition):
        return abs(position.quantity) * position.entry_price * position.contract_size
    return 0.0


def validate_portfolio(
    positions: Sequence[Position],
    settings: EngineSettings | None = None,
) -> ValidationResult:
    """Validate each position (messages prefixed ``Position n:``) plus portfolio-wide limits.

    Every position is checked regardless of its ``active`` flag.
    """

    result = ValidationResult()
    if not positions:
        result.add_warning("Portfolio is empty")
        return result

    for idx, position in enumerate(positions, start=1):
        result.extend(validate_position(position, settings), prefix=f"Position {idx}: ")

    limits = _thresholds(settings)
    total_notional = sum(notional_exposure(position) for position in positions)
    if total_notional > limits.notional_warn:
        result.add_warning("Portfolio has very large notional exposure")
    if len(positions) > limits.max_positions_warn:
        result.add_warning("Complex portfolio with many positions - consider simplification")

    log.debug(
        "Validated %d positions: %d errors, %d warnings",
        len(positions),
        len(result.errors),
        len(result.warnings),
    )
    return result


def validate_chart_parameters(
    price_start: float,
    price_end: float,
    step_size: float,
    settings: EngineSettings | None = None,
) -> ValidationResult:
    """Check a sampling window before it reaches the payoff engine.

    The sample-count warning is guidance to raise ``step_size``; it never caps
    the curve.
    """

    result = ValidationResult()
    finite = _finite_fields(result, start_price=price_start, end_price=price_end, step_size=step_size)
    bounds_ok = {"start_price", "end_price"} <= finite

    if "start_price" in finite and price_start <= 0:
        result.add_error("Start price must be positive")
    if "end_price" in finite and price_end <= 0:
        result.add_error("End price must be positive")
    if bounds_ok and price_start >= price_end:
        result.add_error("End price must be greater than start price")
    if "step_size" in finite and step_size <= 0:
        result.add_error("Step size must be positive")
    elif bounds_ok and "step_size" in finite and step_size > (price_end - price_start):
        result.add_error("Step size is too large for the price range")

    if not (bounds_ok and "step_size" in finite) or step_size <= 0 or price_end <= price_start:
        return result
    total_steps = (price_end - price_start) / step_size
    if not math.isfinite(total_steps):
        result.add_error("Step size is too small for the price range")
    elif total_steps > _thresholds(settings).max_chart_points_warn:
        result.add_warning(
            f"Large number of data points ({int(total_steps)}). "
            "Consider increasing step size for better performance."
        )
    return result
