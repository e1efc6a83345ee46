"""Spiral placement search: nearest in-bounds, collision-free position.

The walk starts at the caller's preferred point and moves outward in a square
spiral: right, down, left, up, with the run length growing every two turns
(1, 1, 2, 2, 3, 3, ...). The first probe that passes is returned, so the result
is the closest valid point in walk order.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable
from typing import NamedTuple

from knitcanvas.engine.bounds import Bounds
from knitcanvas.utils.geometry import Rect, intersects, padded_rect

logger = logging.getLogger(__name__)

# Walk directions in canvas space (y down): right, down, left, up
_DIRECTIONS = ((1, 0), (0, 1), (-1, 0), (0, -1))

DEFAULT_STEP_SIZE = 10.0
DEFAULT_MAX_STEPS = 400


class Position(NamedTuple):
    x: float
    y: float


def iter_spiral(
    start_x: float,
    start_y: float,
    step_size: float = DEFAULT_STEP_SIZE,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Generator[Position, None, None]:
    """Yield the start point, then ``max_steps`` spiral probes."""
    yield Position(start_x, start_y)

    # Integer grid offsets so probes don't accumulate float drift
    gx, gy = 0, 0
    direction = 0
    run_length = 1
    taken = 0
    turns = 0
    for _ in range(max_steps):
        dx, dy = _DIRECTIONS[direction]
        gx += dx
        gy += dy
        yield Position(start_x + gx * step_size, start_y + gy * step_size)

        taken += 1
        if taken >= run_length:
            taken = 0
            direction = (direction + 1) % 4
            turns += 1
            if turns % 2 == 0:
                run_length += 1


def is_valid_position(
    rect: Rect,
    obstacles: Iterable[Rect],
    bounds: Bounds,
    padding: float,
) -> bool:
    """Exact extent inside bounds and padded box clear of every padded obstacle.

    ``obstacles`` must already be padded.
    """
    if not bounds.contains_extent(rect.extent()):
        return False
    probe = padded_rect(rect, padding)
    return not any(intersects(probe, other) for other in obstacles)


def find_position(
    start_x: float,
    start_y: float,
    width: float,
    height: float,
    scale_x: float,
    scale_y: float,
    rotation: float,
    existing: Iterable[Rect],
    bounds: Bounds,
    padding: float = 0.0,
    *,
    step_size: float = DEFAULT_STEP_SIZE,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Position | None:
    """Closest valid top-left position for the shape, or None when the budget runs out.

    Args:
        start_x, start_y: Preferred top-left corner.
        width, height: Base size; multiplied by scale_x/scale_y.
        rotation: Degrees, clockwise-positive, about the box centre.
        existing: Effective rects of the shapes already placed (unpadded).
        bounds: Region the exact box must stay inside.
        padding: Shrink applied to the probe and to every existing shape.
    """
    eff_w = width * scale_x
    eff_h = height * scale_y
    obstacles = [padded_rect(r, padding) for r in existing]

    for i, pos in enumerate(iter_spiral(start_x, start_y, step_size, max_steps)):
        rect = Rect(pos.x, pos.y, eff_w, eff_h, rotation)
        if is_valid_position(rect, obstacles, bounds, padding):
            if i:
                logger.debug(
                    "Placement: moved (%.1f, %.1f) -> (%.1f, %.1f) after %d probes",
                    start_x, start_y, pos.x, pos.y, i,
                )
            return pos

    logger.debug(
        "Placement: no slot for %.0fx%.0f near (%.1f, %.1f) within %d probes (%d obstacles)",
        eff_w, eff_h, start_x, start_y, max_steps, len(obstacles),
    )
    return None
