"""Distribution geometry behind the overlap and superiority charts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .densities import DensityEvaluator, normal_density
from .validation import InvalidInput, require_finite, require_points, require_positive

CONTROL_MEAN = 0.0
DEFAULT_N_POINTS = 20000
DEFAULT_SPAN_SD = 3.0


def _frozen(values: np.ndarray) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class DensityCurve:
    x: np.ndarray
    y: np.ndarray
    mean: float
    sd: float


@dataclass(frozen=True)
class OverlapCurve:
    """Pointwise minimum of two densities on their shared grid."""

    x: np.ndarray
    y: np.ndarray


@dataclass(frozen=True)
class SuperiorityRegion:
    """Closed polygon: the overlap envelope at or below the control mean."""

    x: np.ndarray
    y: np.ndarray

    @property
    def vertices(self) -> np.ndarray:
        return np.column_stack([self.x, self.y])


class DistributionGeometry:
    """
    Builds the two equal-variance density curves compared by an effect size,
    the overlap envelope between them, and the superiority sub-region.
    """

    @staticmethod
    def build_grid(d: float, sd: float, n_points: int = DEFAULT_N_POINTS,
                   span: float = DEFAULT_SPAN_SD) -> np.ndarray:
        """Evenly spaced grid from ``-span*sd`` to ``|d| + span*sd`` inclusive."""
        d = require_finite(d, "effect_size")
        sd = require_positive(sd, "sd")
        n_points = require_points(n_points)
        span = require_positive(span, "span")

        lower = CONTROL_MEAN - span * sd
        upper = abs(d) + span * sd
        if not (math.isfinite(lower) and math.isfinite(upper) and math.isfinite(upper - lower)):
            raise InvalidInput(f"grid bounds overflow for effect_size={d}, sd={sd}, span={span}")
        return _frozen(np.linspace(lower, upper, n_points))

    @staticmethod
    def build_curves(d: float, sd: float = 1.0, n_points: int = DEFAULT_N_POINTS,
                     density: DensityEvaluator = normal_density,
                     span: float = DEFAULT_SPAN_SD) -> Tuple[DensityCurve, DensityCurve, OverlapCurve]:
        """Control (mean 0) and treatment (mean |d|) curves plus their overlap.

        All three share the identical grid.
        """
        grid = DistributionGeometry.build_grid(d, sd, n_points, span)
        sd = float(sd)
        treatment_mean = abs(float(d))

        control_y = _frozen(density(grid, CONTROL_MEAN, sd))
        treatment_y = _frozen(density(grid, treatment_mean, sd))
        if control_y.shape != grid.shape or treatment_y.shape != grid.shape:
            raise InvalidInput(f"density evaluator {density!r} returned a different shape than the grid")

        control = DensityCurve(x=grid, y=control_y, mean=CONTROL_MEAN, sd=sd)
        treatment = DensityCurve(x=grid, y=treatment_y, mean=treatment_mean, sd=sd)
        overlap = OverlapCurve(x=grid, y=_frozen(np.minimum(control_y, treatment_y)))
        return control, treatment, overlap

    @staticmethod
    def build_superiority_region(overlap: OverlapCurve,
                                 control_mean: float = CONTROL_MEAN) -> SuperiorityRegion:
        """Clip the overlap envelope to ``x <= control_mean`` and close it at y=0."""
        control_mean = require_finite(control_mean, "control_mean")
        x_min = float(overlap.x[0])
        if control_mean < x_min:
            raise InvalidInput(f"control_mean {control_mean} lies left of the grid start {x_min}")

        keep = overlap.x <= control_mean
        x = np.concatenate(([x_min], overlap.x[keep], [control_mean]))
        y = np.concatenate(([0.0], overlap.y[keep], [0.0]))
        return SuperiorityRegion(x=_frozen(x), y=_frozen(y))

    @staticmethod
    def overlap_area(overlap: OverlapCurve) -> float:
        """Trapezoidal area under the overlap envelope."""
        return float(np.trapezoid(overlap.y, overlap.x))


build_grid = DistributionGeometry.build_grid
build_curves = DistributionGeometry.build_curves
build_superiority_region = DistributionGeometry.build_superiority_region
overlap_area = DistributionGeometry.overlap_area
