# SPDX-License-Identifier: MIT

"""Tabular payoff output for reporting collaborators."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from .models import Position
from .payoff import payoff_vector, position_payoff, sample_prices


def payoff_table(
    positions: Sequence[Position],
    price_start: float,
    price_end: float,
    step_size: float,
) -> pd.DataFrame:
    """Return sampled prices with portfolio payoff and per-position contributions.

    Contribution columns are labelled ``"{n}: {description}"`` where ``n`` is the
    1-based index into ``positions``; inactive positions get no column.
    """

    prices = sample_prices(price_start, price_end, step_size)
    df = pd.DataFrame({"price": prices, "payoff": payoff_vector(positions, prices)})
    for idx, position in enumerate(positions, start=1):
        if not position.is_active():
            continue
        df[f"{idx}: {position.description}"] = position_payoff(position, prices)
    return df
