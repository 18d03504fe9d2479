# SPDX-License-Identifier: MIT

"""Memoized analysis for callers that recompute on every edit."""

from __future__ import annotations

import hashlib
import json
import threading
from collections import OrderedDict
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any, TypeVar

from ..config import settings as default_settings
from ..core.logging import get_logger
from ..core.models import PayoffPoint, PortfolioMetrics, Position
from ..core.payoff import generate_payoff_curve
from ..core.portfolio import analyze_portfolio

log = get_logger(__name__)

T = TypeVar("T")

CacheKey = tuple[str, str, float, float, float]


def positions_fingerprint(positions: Sequence[Position]) -> str:
    """Stable digest of the ordered positions, ``active`` flags included."""

    payload = json.dumps([position.model_dump(mode="json") for position in positions], sort_keys=True)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


class AnalysisCache:
    """LRU store of curves and metrics keyed by positions and sampling window.

    Results are deterministic for a key, so entries never go stale; eviction
    only bounds memory. Safe to share between threads.
    """

    def __init__(self, maxsize: int | None = None) -> None:
        self._maxsize = max(1, int(maxsize if maxsize is not None else default_settings.cache_size))
        self._entries: OrderedDict[CacheKey, Any] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def analyze(
        self,
        positions: Sequence[Position],
        price_start: float,
        price_end: float,
        step_size: float,
    ) -> PortfolioMetrics:
        metrics = self._get_or_compute(
            "metrics", positions, price_start, price_end, step_size, analyze_portfolio
        )
        return replace(metrics, breakeven_points=list(metrics.breakeven_points))

    def curve(
        self,
        positions: Sequence[Position],
        price_start: float,
        price_end: float,
        step_size: float,
    ) -> list[PayoffPoint]:
        points = self._get_or_compute(
            "curve", positions, price_start, price_end, step_size, generate_payoff_curve
        )
        return list(points)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def _get_or_compute(
        self,
        kind: str,
        positions: Sequence[Position],
        price_start: float,
        price_end: float,
        step_size: float,
        compute: Callable[[Sequence[Position], float, float, float], T],
    ) -> T:
        key: CacheKey = (
            kind,
            positions_fingerprint(positions),
            float(price_start),
            float(price_end),
            float(step_size),
        )
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                log.debug("Cache hit for %s %s", kind, key[1][:8])
                return self._entries[key]
            self.misses += 1

        value = compute(positions, price_start, price_end, step_size)
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self._maxsize:
                self._entries.popitem(last=False)
        return value
