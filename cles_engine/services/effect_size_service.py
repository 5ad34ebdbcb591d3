"""
Effect size service: glue between the HTTP layer and the pure stats core.

- Metric translation with magnitude/direction labels
- Curve geometry, thinned for JSON transport
- Chart rendering to PNG
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import numpy as np

from cles_engine.charts.distributions import CHARTS, figure_to_png
from cles_engine.config import settings
from cles_engine.stats import (
    InvalidInput,
    build_curves,
    build_superiority_region,
    direction,
    interpret_magnitude,
    overlap_area,
    translate,
)

logger = logging.getLogger(__name__)


def _resolve_points(n_points: Optional[int]) -> int:
    if n_points is None:
        return settings.n_points
    if n_points > settings.max_points:
        raise InvalidInput(f"n_points must be <= {settings.max_points}, got {n_points}")
    return n_points


def _thin(values: np.ndarray, stride: int) -> list:
    """Every stride-th value, always keeping the last one so the curve ends where the grid does."""
    if stride <= 1:
        return values.tolist()
    picked = values[::stride]
    if (len(values) - 1) % stride:
        picked = np.append(picked, values[-1])
    return picked.tolist()


def compute_metrics(effect_size: float) -> Dict[str, Any]:
    metrics = translate(effect_size)
    logger.debug("Translated d=%s -> %s", effect_size, metrics)
    return {
        "effect_size": float(effect_size),
        "metrics": metrics.as_dict(),
        "magnitude": interpret_magnitude(effect_size),
        "direction": direction(effect_size),
    }


def compute_curves(effect_size: float, sd: float, n_points: Optional[int] = None,
                   stride: int = 1) -> Dict[str, Any]:
    n = _resolve_points(n_points)
    if stride < 1:
        raise InvalidInput(f"stride must be >= 1, got {stride}")

    control, treatment, overlap = build_curves(effect_size, sd, n, span=settings.grid_span_sd)
    region = build_superiority_region(overlap, control.mean)
    logger.debug("Built curves d=%s sd=%s n=%d region_vertices=%d",
                 effect_size, sd, n, len(region.x))

    # The polygon keeps its synthetic closing vertices regardless of stride.
    inner_x, inner_y = region.x[1:-1], region.y[1:-1]
    region_x = [float(region.x[0])] + _thin(inner_x, stride) + [float(region.x[-1])]
    region_y = [0.0] + _thin(inner_y, stride) + [0.0]

    return {
        "effect_size": float(effect_size),
        "sd": float(sd),
        "n_points": n,
        "control_mean": control.mean,
        "treatment_mean": treatment.mean,
        "x": _thin(control.x, stride),
        "control": _thin(control.y, stride),
        "treatment": _thin(treatment.y, stride),
        "overlap": _thin(overlap.y, stride),
        "superiority_region": {"x": region_x, "y": region_y},
        "overlap_area": overlap_area(overlap),
    }


def render_chart(kind: str, effect_size: float, sd: float,
                 n_points: Optional[int] = None) -> bytes:
    """Render one of CHARTS as PNG bytes. Unknown kinds raise KeyError."""
    plot = CHARTS[kind]
    n = _resolve_points(n_points)
    fig = plot(effect_size, sd, n, dpi=settings.chart_dpi, span=settings.grid_span_sd)
    png = figure_to_png(fig, dpi=settings.chart_dpi)
    logger.debug("Rendered %s chart d=%s sd=%s (%d bytes)", kind, effect_size, sd, len(png))
    return png
