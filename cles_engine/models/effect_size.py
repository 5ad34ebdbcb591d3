from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from cles_engine.config import settings


class MetricsRequest(BaseModel):
    effect_size: float


class MetricValues(BaseModel):
    probability_of_superiority: float
    overlap: float
    u1: float
    u2: float
    u3: float


class MetricsResponse(BaseModel):
    effect_size: float
    metrics: MetricValues
    magnitude: Literal["negligible", "small", "medium", "large"]
    direction: Literal["positive", "negative", "none"]


class CurvesRequest(BaseModel):
    effect_size: float
    sd: float = Field(default_factory=lambda: settings.default_sd, gt=0)
    n_points: Optional[int] = Field(None, ge=2)
    # Every stride-th grid point is returned; the geometry itself is unaffected.
    stride: int = Field(1, ge=1)


class Polygon(BaseModel):
    x: List[float]
    y: List[float]


class CurvesResponse(BaseModel):
    effect_size: float
    sd: float
    n_points: int
    control_mean: float
    treatment_mean: float
    x: List[float]
    control: List[float]
    treatment: List[float]
    overlap: List[float]
    superiority_region: Polygon
    overlap_area: float
