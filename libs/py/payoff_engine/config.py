# SPDX-License-Identifier: MIT

"""Runtime settings for the payoff engine.

Values can be overridden through ``PAYOFF_*`` environment variables or a
``.env`` file, e.g. ``PAYOFF_VALIDATION__NOTIONAL_WARN=5000000``.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ValidationThresholds(BaseModel):
    spot_quantity_warn: float = 10_000.0
    option_quantity_warn: float = 1_000.0
    futures_quantity_warn: float = 100.0
    # premium above this fraction of the strike is flagged as unusual
    premium_strike_ratio_warn: float = 0.5
    contract_size_warn: float = 100_000.0
    notional_warn: float = 1_000_000.0
    max_positions_warn: int = 10
    max_chart_points_warn: int = 10_000


class ChartDefaults(BaseModel):
    price_start: float = 0.0
    price_end: float = 300.0
    step_size: float = 1.0
    option_padding: float = 0.5
    spot_padding: float = 0.3
    futures_padding: float = 0.3
    min_span: float = 100.0


class EngineSettings(BaseSettings):
    validation: ValidationThresholds = ValidationThresholds()
    chart: ChartDefaults = ChartDefaults()
    cache_size: int = 128
    log_level: str = "INFO"
    model_config = SettingsConfigDict(
        env_prefix="PAYOFF_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = EngineSettings()  # singleton
