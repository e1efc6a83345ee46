"""Bounds: the rectangular region of a garment where motifs may sit."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """Immutable placement region. Replaced, never mutated, on garment/gauge change."""

    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        if self.right < self.left or self.bottom < self.top:
            raise ValueError(
                f"Degenerate bounds: ({self.left}, {self.top}, {self.right}, {self.bottom})"
            )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2

    def contains(self, x: float, y: float, width: float, height: float) -> bool:
        """True when the box lies fully inside (edges may touch)."""
        return (
            x >= self.left
            and y >= self.top
            and x + width <= self.right
            and y + height <= self.bottom
        )

    def clamp(self, x: float, y: float, width: float, height: float) -> tuple[float, float]:
        """Translate a box inward on every violated edge.

        Right/bottom are pulled back first, then left/top pushed forward, so a
        box larger than the bounds ends up flush with the left/top edge.
        """
        x = max(self.left, min(self.right - width, x))
        y = max(self.top, min(self.bottom - height, y))
        return x, y

    def contains_extent(self, extent: tuple[float, float, float, float]) -> bool:
        xmin, ymin, xmax, ymax = extent
        return self.contains(xmin, ymin, xmax - xmin, ymax - ymin)

    @classmethod
    def from_dimensions(cls, x: float, y: float, width: float, height: float) -> Bounds:
        return cls(x, y, x + width, y + height)

    def to_dict(self) -> dict[str, float]:
        return {
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
        }
