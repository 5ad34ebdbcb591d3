"""Density evaluators used to build the distribution curves.

The geometry code only needs ``evaluator(x, mean, sd) -> ndarray``; swapping the
evaluator changes the distribution family without touching grid or overlap logic.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from scipy import stats


class DensityEvaluator(Protocol):
    def __call__(self, x: np.ndarray, mean: float, sd: float) -> np.ndarray: ...


class NormalDensity:
    """Normal PDF with the given location and scale."""

    name = "normal"

    def __call__(self, x: np.ndarray, mean: float, sd: float) -> np.ndarray:
        return stats.norm.pdf(x, loc=mean, scale=sd)

    def __repr__(self) -> str:
        return "NormalDensity()"


normal_density = NormalDensity()
