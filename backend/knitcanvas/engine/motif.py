"""Motif: a placed decorative image instance."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace

from knitcanvas.utils.geometry import Rect


def new_motif_id() -> str:
    return f"motif-{uuid.uuid4().hex[:12]}"


def stitch_count(width: float, height: float, stitch_size: float) -> tuple[int, int]:
    """(cols, rows) covered by a motif. Display only."""
    if stitch_size <= 0:
        return (0, 0)
    return (math.floor(width / stitch_size), math.floor(height / stitch_size))


@dataclass(frozen=True)
class Motif:
    """Immutable placement record. Changes go through ``dataclasses.replace``."""

    id: str
    image: str  # asset handle, see knitcanvas.assets
    x: float
    y: float
    width: float
    height: float
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    stitches: tuple[int, int] = field(default=(0, 0), compare=False)

    @property
    def scaled_width(self) -> float:
        return self.width * self.scale_x

    @property
    def scaled_height(self) -> float:
        return self.height * self.scale_y

    def effective_rect(self) -> Rect:
        return Rect(self.x, self.y, self.scaled_width, self.scaled_height, self.rotation)

    def extent(self) -> tuple[float, float, float, float]:
        return self.effective_rect().extent()

    def moved(self, x: float, y: float) -> Motif:
        return replace(self, x=x, y=y)

    def resized(self, width: float, height: float, stitch_size: float) -> Motif:
        return replace(
            self,
            width=width,
            height=height,
            stitches=stitch_count(width, height, stitch_size),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "image": self.image,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "scale_x": self.scale_x,
            "scale_y": self.scale_y,
            "rotation": self.rotation,
            "stitches": {"cols": self.stitches[0], "rows": self.stitches[1]},
        }
