"""Common Language Effect Size - Cohen's d restated as probabilities."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Literal

import numpy as np
from scipy import stats

from .validation import require_finite

Magnitude = Literal["negligible", "small", "medium", "large"]
Direction = Literal["positive", "negative", "none"]


@dataclass(frozen=True)
class MetricSet:
    """The five interpretable restatements of one effect size, each in [0, 1]."""

    probability_of_superiority: float
    overlap: float
    u1: float
    u2: float
    u3: float

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class MetricTranslator:
    """
    Concepts covered:
    1. Probability of superiority (CLES)
    2. Overlap coefficient
    3. Cohen's U1 (proportion of non-overlap)
    4. Cohen's U2
    5. Cohen's U3
    """

    @staticmethod
    def translate(d: float) -> MetricSet:
        """Translate a standardized mean difference into a MetricSet.

        Only the magnitude of ``d`` matters; the sign is a narrative concern.
        """
        a = abs(require_finite(d, "effect_size"))

        # Phi(a / 2) >= 0.5 for any a >= 0, so the u1 denominator never underflows.
        half = float(stats.norm.cdf(a / 2))

        values = (
            stats.norm.cdf(a / np.sqrt(2)),
            2 * stats.norm.cdf(-a / 2),
            (2 * half - 1) / half,
            half,
            stats.norm.cdf(a),
        )
        return MetricSet(*(float(np.clip(v, 0.0, 1.0)) for v in values))

    @staticmethod
    def interpret_magnitude(d: float) -> Magnitude:
        """Cohen's conventional label for |d|."""
        a = abs(require_finite(d, "effect_size"))
        if a < 0.2:
            return "negligible"
        if a < 0.5:
            return "small"
        if a < 0.8:
            return "medium"
        return "large"

    @staticmethod
    def direction(d: float) -> Direction:
        d = require_finite(d, "effect_size")
        if d > 0:
            return "positive"
        if d < 0:
            return "negative"
        return "none"


translate = MetricTranslator.translate
interpret_magnitude = MetricTranslator.interpret_magnitude
direction = MetricTranslator.direction
