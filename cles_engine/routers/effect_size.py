from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from cles_engine.charts.distributions import CHARTS
from cles_engine.config import settings
from cles_engine.models.effect_size import (
    CurvesRequest,
    CurvesResponse,
    MetricsRequest,
    MetricsResponse,
)
from cles_engine.services.effect_size_service import compute_curves, compute_metrics, render_chart
from cles_engine.stats import InvalidInput

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/metrics", response_model=MetricsResponse)
def effect_size_metrics(req: MetricsRequest):
    try:
        return compute_metrics(req.effect_size)
    except InvalidInput as e:
        logger.warning("Rejected metrics request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/curves", response_model=CurvesResponse)
def effect_size_curves(req: CurvesRequest):
    try:
        return compute_curves(req.effect_size, req.sd, req.n_points, req.stride)
    except InvalidInput as e:
        logger.warning("Rejected curves request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/charts/{kind}.png")
def effect_size_chart(
    kind: str,
    effect_size: float = Query(...),
    sd: Optional[float] = Query(default=None, gt=0),
    n_points: Optional[int] = Query(default=None, ge=2),
):
    if kind not in CHARTS:
        raise HTTPException(status_code=404, detail=f"Unknown chart '{kind}', expected one of {sorted(CHARTS)}")

    try:
        png = render_chart(kind, effect_size, sd if sd is not None else settings.default_sd, n_points)
    except InvalidInput as e:
        logger.warning("Rejected %s chart request: %s", kind, e)
        raise HTTPException(status_code=400, detail=str(e))

    return Response(content=png, media_type="image/png")
