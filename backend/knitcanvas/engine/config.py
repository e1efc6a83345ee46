"""Placement configuration: tuning knobs for search, padding and interaction."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from knitcanvas.config import Settings


class DragEndPolicy(str, enum.Enum):
    """What a drop does when it lands on another motif."""

    SNAP = "snap"  # search for the nearest free slot, revert if none
    REVERT = "revert"  # go back to the last committed position


@dataclass
class PlacementConfig:
    """Controls the spiral search and the motif lifecycle rules."""

    # Ceiling on placed motifs per session
    max_motifs: int = 4

    # Margin removed from every side of a motif before collision tests
    collision_padding: float = 15.0

    # Spiral search
    step_size: float = 10.0
    max_steps: int = 400

    # Clone starts this far right/down of its source
    duplicate_offset: float = 20.0

    # New motif size when none is given: fraction of min(bounds w, h)
    default_size_fraction: float = 1 / 3

    # Canvas units per stitch, display-only stitch counts
    stitch_size: float = 4.0

    # Interaction layer
    rotation_enabled: bool = False
    drag_end_policy: DragEndPolicy = DragEndPolicy.SNAP

    @classmethod
    def from_settings(cls, settings: Settings) -> PlacementConfig:
        return cls(
            max_motifs=settings.knitcanvas_max_motifs,
            collision_padding=settings.knitcanvas_collision_padding,
            step_size=settings.knitcanvas_search_step,
            max_steps=settings.knitcanvas_search_max_steps,
            duplicate_offset=settings.knitcanvas_duplicate_offset,
            default_size_fraction=settings.knitcanvas_default_size_fraction,
            stitch_size=settings.knitcanvas_stitch_size,
            rotation_enabled=settings.knitcanvas_rotation_enabled,
            drag_end_policy=DragEndPolicy(settings.knitcanvas_drag_end_policy),
        )
