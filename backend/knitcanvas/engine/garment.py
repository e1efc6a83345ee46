"""Garment display box, placement bounds and gauge-driven motif size.

A garment of W x H cm is drawn inside a fixed canvas container. The largest
supported garment (140 cm) fills the padded container; smaller garments keep
the same px/cm scale so sizes stay comparable. Blankets carry a knitted ribbon
border that motifs must stay off, so the bounds are inset by it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from knitcanvas.engine.bounds import Bounds

# Gauge is quoted per 10 cm swatch
_GAUGE_SWATCH_CM = 10.0


class GarmentType(str, enum.Enum):
    BABY_BLANKET = "BabyBlanket"
    HAT = "Hat"
    SCARF = "Scarf"
    SWEATER = "Sweater"
    MITTENS = "Mittens"
    BAG = "Bag"


def default_dimensions(garment: GarmentType) -> tuple[float, float]:
    """(width_cm, height_cm) when the pattern file gives none."""
    if garment is GarmentType.BABY_BLANKET:
        return (60.0, 80.0)
    return (100.0, 100.0)


@dataclass
class CanvasConfig:
    container_width: float = 400.0
    container_height: float = 500.0
    padding: float = 20.0
    max_size_cm: float = 140.0
    ribbon_cm: float = 5.0


@dataclass(frozen=True)
class DisplayLayout:
    display_width: float
    display_height: float
    x: float
    y: float
    scale: float  # px per cm
    bounds: Bounds


@dataclass(frozen=True)
class Gauge:
    """Tension: stitches and rows per 10 cm."""

    stitches_per_10cm: float
    rows_per_10cm: float

    def __post_init__(self) -> None:
        if self.stitches_per_10cm <= 0 or self.rows_per_10cm <= 0:
            raise ValueError(
                f"Gauge must be positive, got {self.stitches_per_10cm}x{self.rows_per_10cm}"
            )

    @property
    def stitches_per_cm(self) -> float:
        return self.stitches_per_10cm / _GAUGE_SWATCH_CM

    @property
    def rows_per_cm(self) -> float:
        return self.rows_per_10cm / _GAUGE_SWATCH_CM


class DimensionCalculator:
    """Scales a garment into the canvas container and derives its placement bounds."""

    def __init__(self, config: CanvasConfig | None = None) -> None:
        self.config = config or CanvasConfig()

    @property
    def stage_size(self) -> tuple[float, float]:
        return (self.config.container_width, self.config.container_height)

    def scale(self) -> float:
        cfg = self.config
        available_w = cfg.container_width - cfg.padding * 2
        available_h = cfg.container_height - cfg.padding * 2
        return min(available_w / cfg.max_size_cm, available_h / cfg.max_size_cm)

    def calculate(self, width_cm: float, height_cm: float, ribbon_cm: float | None = None) -> DisplayLayout:
        if width_cm <= 0 or height_cm <= 0:
            raise ValueError(f"Garment dimensions must be positive, got {width_cm}x{height_cm}")
        cfg = self.config
        ribbon = cfg.ribbon_cm if ribbon_cm is None else ribbon_cm
        if ribbon * 2 >= min(width_cm, height_cm):
            raise ValueError(f"Ribbon of {ribbon} cm leaves no room on a {width_cm}x{height_cm} cm garment")

        scale = self.scale()
        available_w = cfg.container_width - cfg.padding * 2
        available_h = cfg.container_height - cfg.padding * 2
        display_w = width_cm * scale
        display_h = height_cm * scale
        x = cfg.padding + (available_w - display_w) / 2
        y = cfg.padding + (available_h - display_h) / 2

        inset = ribbon * scale
        bounds = Bounds(x + inset, y + inset, x + display_w - inset, y + display_h - inset)
        return DisplayLayout(
            display_width=display_w,
            display_height=display_h,
            x=x,
            y=y,
            scale=scale,
            bounds=bounds,
        )


def motif_size_cm(stitches: int, rows: int, gauge: Gauge) -> tuple[float, float]:
    """Physical motif size for a chart of ``stitches`` x ``rows`` at ``gauge``."""
    if stitches <= 0 or rows <= 0:
        raise ValueError(f"Motif chart must be at least 1x1, got {stitches}x{rows}")
    return (stitches / gauge.stitches_per_cm, rows / gauge.rows_per_cm)


def motif_size_px(stitches: int, rows: int, gauge: Gauge, px_per_cm: float) -> tuple[float, float]:
    """Canvas size of a motif chart; this is the target of a gauge-change resize."""
    width_cm, height_cm = motif_size_cm(stitches, rows, gauge)
    return (width_cm * px_per_cm, height_cm * px_per_cm)
