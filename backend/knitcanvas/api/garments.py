"""POST /api/garments/layout: display box, bounds and motif size for a garment."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from knitcanvas.dependencies import get_dimension_calculator
from knitcanvas.engine.garment import (
    DimensionCalculator,
    DisplayLayout,
    Gauge,
    default_dimensions,
    motif_size_px,
)
from knitcanvas.models.requests import BoundsModel, GarmentLayoutRequest
from knitcanvas.models.responses import GarmentLayoutResponse

router = APIRouter(prefix="/garments")


def compute_layout(
    req: GarmentLayoutRequest,
    calculator: DimensionCalculator,
) -> tuple[DisplayLayout, tuple[float, float] | None]:
    """Layout plus the gauge-derived motif size (None without gauge and chart)."""
    default_w, default_h = default_dimensions(req.garment)
    try:
        layout = calculator.calculate(
            req.width_cm or default_w,
            req.height_cm or default_h,
            ribbon_cm=req.ribbon_cm,
        )
        motif_size = None
        if req.gauge is not None and req.motif_stitches and req.motif_rows:
            gauge = Gauge(req.gauge.stitches_per_10cm, req.gauge.rows_per_10cm)
            motif_size = motif_size_px(req.motif_stitches, req.motif_rows, gauge, layout.scale)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return layout, motif_size


@router.post("/layout", response_model=GarmentLayoutResponse)
async def garment_layout(
    req: GarmentLayoutRequest,
    calculator: DimensionCalculator = Depends(get_dimension_calculator),
) -> GarmentLayoutResponse:
    layout, motif_size = compute_layout(req, calculator)
    stage_w, stage_h = calculator.stage_size
    return GarmentLayoutResponse(
        display_width=layout.display_width,
        display_height=layout.display_height,
        x=layout.x,
        y=layout.y,
        scale=layout.scale,
        bounds=BoundsModel(**layout.bounds.to_dict()),
        stage_width=stage_w,
        stage_height=stage_h,
        motif_size=list(motif_size) if motif_size else None,
    )
