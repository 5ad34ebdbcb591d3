"""Effect size translation and distribution geometry."""

from .common_language import MetricSet, MetricTranslator, direction, interpret_magnitude, translate
from .densities import DensityEvaluator, NormalDensity, normal_density
from .geometry import (
    DensityCurve,
    DistributionGeometry,
    OverlapCurve,
    SuperiorityRegion,
    build_curves,
    build_grid,
    build_superiority_region,
    overlap_area,
)
from .validation import InvalidInput

__all__ = [
    "MetricSet",
    "MetricTranslator",
    "translate",
    "interpret_magnitude",
    "direction",
    "DensityEvaluator",
    "NormalDensity",
    "normal_density",
    "DensityCurve",
    "OverlapCurve",
    "SuperiorityRegion",
    "DistributionGeometry",
    "build_grid",
    "build_curves",
    "build_superiority_region",
    "overlap_area",
    "InvalidInput",
]
