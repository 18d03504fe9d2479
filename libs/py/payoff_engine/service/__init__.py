# SPDX-License-Identifier: MIT

"""Service helpers layered over the pure engine."""

from .cache import AnalysisCache, positions_fingerprint

__all__ = ["AnalysisCache", "positions_fingerprint"]
