"""
Chart rendering for the two effect-size views.

- Overlap chart: both densities with the shared envelope filled.
- Superiority chart: both densities with the envelope below the control mean filled.

Figures are built with ``matplotlib.figure.Figure`` rather than pyplot so
concurrent requests never share pyplot's global figure state.
"""

from __future__ import annotations

import io
from typing import Optional, Tuple

import matplotlib

matplotlib.use("Agg")

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..stats.common_language import translate
from ..stats.geometry import (
    CONTROL_MEAN,
    DEFAULT_N_POINTS,
    DEFAULT_SPAN_SD,
    DensityCurve,
    build_curves,
    build_superiority_region,
)

CONTROL_COLOR = "#1f77b4"
TREATMENT_COLOR = "#d62728"
OVERLAP_COLOR = "#7f7f7f"
SUPERIORITY_COLOR = "#2ca02c"
DEFAULT_FIGSIZE: Tuple[float, float] = (8.0, 4.5)

X_LABEL = "value (arbitrary unit)"
Y_LABEL = "Density"


def _draw_curves(ax: Axes, control: DensityCurve, treatment: DensityCurve) -> None:
    ax.plot(control.x, control.y, color=CONTROL_COLOR, linewidth=1.5, label="Control")
    ax.plot(treatment.x, treatment.y, color=TREATMENT_COLOR, linewidth=1.5, label="Treatment")


def _annotate_mean(ax: Axes, x: float, label: str, color: str) -> None:
    ax.axvline(x, color=color, linestyle="--", linewidth=0.9)
    ax.annotate(
        label,
        xy=(x, 1.0),
        xycoords=("data", "axes fraction"),
        xytext=(3, -12),
        textcoords="offset points",
        color=color,
        fontsize=8,
    )


def _new_figure(figsize: Tuple[float, float], dpi: Optional[int]) -> Tuple[Figure, Axes]:
    fig = Figure(figsize=figsize, dpi=dpi)
    ax = fig.add_subplot(1, 1, 1)
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)
    ax.set_ylim(bottom=0)
    return fig, ax


def plot_overlap(d: float, sd: float = 1.0, n_points: int = DEFAULT_N_POINTS,
                 figsize: Tuple[float, float] = DEFAULT_FIGSIZE,
                 dpi: Optional[int] = None, span: float = DEFAULT_SPAN_SD) -> Figure:
    """Both distributions with the overlap envelope shaded."""
    control, treatment, overlap = build_curves(d, sd, n_points, span=span)
    metrics = translate(d)

    fig, ax = _new_figure(figsize, dpi)
    ax.fill_between(overlap.x, overlap.y, color=OVERLAP_COLOR, alpha=0.35,
                    label=f"Overlap ({metrics.overlap:.1%})")
    _draw_curves(ax, control, treatment)
    _annotate_mean(ax, control.mean, "control mean", CONTROL_COLOR)
    _annotate_mean(ax, treatment.mean, "treatment mean", TREATMENT_COLOR)
    ax.set_title(f"d = {d:g}: distributions overlap by {metrics.overlap:.1%}")
    ax.legend(loc="upper right", fontsize=8)
    return fig


def plot_superiority(d: float, sd: float = 1.0, n_points: int = DEFAULT_N_POINTS,
                     figsize: Tuple[float, float] = DEFAULT_FIGSIZE,
                     dpi: Optional[int] = None, span: float = DEFAULT_SPAN_SD) -> Figure:
    """Both distributions with the shared mass below the control mean shaded."""
    control, treatment, overlap = build_curves(d, sd, n_points, span=span)
    region = build_superiority_region(overlap, CONTROL_MEAN)
    metrics = translate(d)

    fig, ax = _new_figure(figsize, dpi)
    ax.fill(region.x, region.y, color=SUPERIORITY_COLOR, alpha=0.4,
            label=f"U3 = {metrics.u3:.1%}")
    _draw_curves(ax, control, treatment)
    _annotate_mean(ax, control.mean, "control mean", CONTROL_COLOR)
    _annotate_mean(ax, treatment.mean, "treatment mean", TREATMENT_COLOR)
    ax.set_title(
        f"d = {d:g}: probability of superiority {metrics.probability_of_superiority:.1%}"
    )
    ax.legend(loc="upper right", fontsize=8)
    return fig


CHARTS = {
    "overlap": plot_overlap,
    "superiority": plot_superiority,
}


def figure_to_png(fig: Figure, dpi: Optional[int] = None) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, bbox_inches="tight")
    fig.clear()
    return buf.getvalue()
