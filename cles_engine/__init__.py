"""Common language effect sizes for Cohen's d / Hedges' g."""

__version__ = "1.0.0"
