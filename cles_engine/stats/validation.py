"""Input validation shared by the metric and geometry functions."""

from __future__ import annotations

import math
import numbers
from typing import Any


class InvalidInput(ValueError):
    """Raised when an effect size, SD or grid size cannot be used."""


def require_finite(value: Any, name: str) -> float:
    """Return ``value`` as a float, or raise if it is not a finite real number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInput(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be finite, got {value}")
    return value


def require_positive(value: Any, name: str) -> float:
    value = require_finite(value, name)
    if value <= 0:
        raise InvalidInput(f"{name} must be > 0, got {value}")
    return value


def require_points(value: Any, name: str = "n_points") -> int:
    """Grid sizes must be integers; two points are the least that form a curve."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if value < 2:
        raise InvalidInput(f"{name} must be >= 2, got {value}")
    return value
