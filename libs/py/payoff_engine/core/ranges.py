# SPDX-License-Identifier: MIT

"""Chart range suggestions derived from position reference prices."""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..config import EngineSettings, settings as default_settings
from .models import FuturesPosition, OptionPosition, Position, SpotPosition, active_positions


def suggest_price_range(
    positions: Sequence[Position],
    settings: EngineSettings | None = None,
) -> tuple[float, float]:
    """Return a ``(price_start, price_end)`` window covering every active position.

    Option strikes are padded by ``chart.option_padding`` of the strike, spot and
    futures entries by their own padding fraction. The start is floored at zero
    and the window is at least ``chart.min_span`` wide.
    """

    chart = (settings or default_settings).chart
    active = active_positions(positions)
    if not active:
        return chart.price_start, chart.price_end

    low = math.inf
    high = -math.inf
    for position in active:
        if isinstance(position, OptionPosition):
            anchor, padding = position.strike_price, chart.option_padding
        elif isinstance(position, SpotPosition):
            anchor, padding = position.entry_price, chart.spot_padding
        elif isinstance(position, FuturesPosition):
            anchor, padding = position.entry_price, chart.futures_padding
        else:
            continue
        pad = abs(anchor) * padding
        low = min(low, anchor - pad)
        high = max(high, anchor + pad)

    start = max(low, 0.0)
    end = max(high, start + chart.min_span)
    return start, end
