"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from knitcanvas.models.requests import BoundsModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    sessions: int = 0


class StitchCount(BaseModel):
    cols: int = 0
    rows: int = 0


class MotifOut(BaseModel):
    id: str
    image: str
    x: float
    y: float
    width: float
    height: float
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    stitches: StitchCount = Field(default_factory=StitchCount)


class SessionResponse(BaseModel):
    id: str
    version: int
    motifs: list[MotifOut] = Field(default_factory=list)
    selected_id: str | None = None
    bounds: BoundsModel
    motif_size: list[float] | None = None
    max_motifs: int = 0


class GarmentLayoutResponse(BaseModel):
    display_width: float
    display_height: float
    x: float
    y: float
    scale: float
    bounds: BoundsModel
    stage_width: float
    stage_height: float
    motif_size: list[float] | None = None


class DragResponse(BaseModel):
    x: float
    y: float


class CommitResponse(BaseModel):
    outcome: str
    motif: MotifOut
    session: SessionResponse


class OverlapOut(BaseModel):
    first: str
    second: str
    overlap_area: float


class AuditResponse(BaseModel):
    valid: bool
    out_of_bounds: list[str] = Field(default_factory=list)
    overlaps: list[OverlapOut] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    message: str
    detail: str = ""
    unplaced_ids: list[str] = Field(default_factory=list)
    motifs: list[MotifOut] = Field(default_factory=list)
