"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from knitcanvas.engine.garment import GarmentType


class BoundsModel(BaseModel):
    left: float
    top: float
    right: float
    bottom: float


class GaugeModel(BaseModel):
    stitches_per_10cm: float = Field(..., gt=0, description="Stitches per 10 cm swatch")
    rows_per_10cm: float = Field(..., gt=0, description="Rows per 10 cm swatch")


class GarmentLayoutRequest(BaseModel):
    garment: GarmentType = Field(default=GarmentType.BABY_BLANKET, description="Garment template")
    width_cm: float | None = Field(default=None, gt=0, description="Garment width; template default if omitted")
    height_cm: float | None = Field(default=None, gt=0, description="Garment height; template default if omitted")
    ribbon_cm: float | None = Field(default=None, ge=0, description="Decorative border kept free of motifs")
    gauge: GaugeModel | None = Field(default=None, description="Tension used to size motifs")
    motif_stitches: int | None = Field(default=None, gt=0, description="Motif chart width in stitches")
    motif_rows: int | None = Field(default=None, gt=0, description="Motif chart height in rows")


class CreateSessionRequest(BaseModel):
    bounds: BoundsModel | None = Field(default=None, description="Explicit placement bounds")
    garment: GarmentLayoutRequest | None = Field(
        default=None,
        description="Derive bounds (and motif size, when a gauge is given) from a garment",
    )
    motif_width: float | None = Field(default=None, gt=0)
    motif_height: float | None = Field(default=None, gt=0)


class AddMotifRequest(BaseModel):
    image: str = Field(..., description="Image source, relative to the asset directory")
    fallback_image: str | None = Field(default=None, description="Tried once if the image fails to load")


class SelectRequest(BaseModel):
    motif_id: str | None = Field(default=None, description="Motif to select; null clears the selection")


class DragRequest(BaseModel):
    x: float
    y: float


class CommitRequest(BaseModel):
    x: float
    y: float
    scale_x: float | None = Field(default=None, gt=0)
    scale_y: float | None = Field(default=None, gt=0)
    rotation: float | None = Field(default=None, description="Degrees, clockwise; ignored unless rotation is enabled")


class GaugeChangeRequest(BaseModel):
    bounds: BoundsModel | None = Field(default=None, description="New bounds; kept if omitted")
    garment: GarmentLayoutRequest | None = Field(
        default=None,
        description="Recompute bounds and motif size from the garment and gauge",
    )
    motif_width: float | None = Field(default=None, gt=0)
    motif_height: float | None = Field(default=None, gt=0)
