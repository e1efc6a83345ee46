"""Interactive drag constraint.

``clamp_to_bounds`` runs on every pointer move and only looks at the bounds.
``reconcile_drop`` runs once when a drag or transform ends and also checks the
other motifs, applying the configured ``DragEndPolicy``.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.config import DragEndPolicy
from knitcanvas.engine.motif import Motif
from knitcanvas.engine.placement import (
    DEFAULT_MAX_STEPS,
    DEFAULT_STEP_SIZE,
    find_position,
    is_valid_position,
)
from knitcanvas.utils.geometry import padded_rect

logger = logging.getLogger(__name__)


class DropOutcome(str, enum.Enum):
    ACCEPTED = "accepted"  # dropped point was already valid (after clamping)
    SNAPPED = "snapped"  # moved to the nearest free slot
    REVERTED = "reverted"  # back to the last committed state


@dataclass(frozen=True)
class DropResult:
    motif: Motif
    outcome: DropOutcome


def clamp_to_bounds(
    x: float,
    y: float,
    width: float,
    height: float,
    scale_x: float,
    scale_y: float,
    bounds: Bounds,
) -> tuple[float, float]:
    """Per-frame clamp using the current scaled size. No collision work."""
    return bounds.clamp(x, y, width * scale_x, height * scale_y)


def reconcile_drop(
    motif: Motif,
    x: float,
    y: float,
    scale_x: float,
    scale_y: float,
    rotation: float,
    others: Sequence[Motif],
    bounds: Bounds,
    padding: float,
    policy: DragEndPolicy = DragEndPolicy.SNAP,
    *,
    step_size: float = DEFAULT_STEP_SIZE,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> DropResult:
    """Final position for a drag/transform end.

    ``motif`` is the last committed state and is what a revert restores.
    ``others`` must not contain ``motif`` itself.
    """
    cx, cy = clamp_to_bounds(x, y, motif.width, motif.height, scale_x, scale_y, bounds)
    candidate = replace(motif, x=cx, y=cy, scale_x=scale_x, scale_y=scale_y, rotation=rotation)

    obstacles = [padded_rect(m.effective_rect(), padding) for m in others]
    if is_valid_position(candidate.effective_rect(), obstacles, bounds, padding):
        return DropResult(candidate, DropOutcome.ACCEPTED)

    if policy is DragEndPolicy.SNAP:
        pos = find_position(
            cx, cy, motif.width, motif.height, scale_x, scale_y, rotation,
            [m.effective_rect() for m in others],
            bounds,
            padding,
            step_size=step_size,
            max_steps=max_steps,
        )
        if pos is not None:
            logger.debug("Drop of %s snapped to (%.1f, %.1f)", motif.id, pos.x, pos.y)
            return DropResult(candidate.moved(pos.x, pos.y), DropOutcome.SNAPPED)
        logger.debug("Drop of %s found no free slot, reverting", motif.id)

    return DropResult(motif, DropOutcome.REVERTED)
