"""Leaf-node geometry helpers. No engine imports.

Rectangles live in canvas space (y grows downward). Rotation is in degrees,
clockwise-positive on screen, about the rectangle centre.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

# Shrunk collision boxes never collapse below one canvas unit.
_MIN_PADDED_SIZE = 1.0


@dataclass(frozen=True)
class Rect:
    """A (possibly rotated) rectangle anchored at its unrotated top-left corner."""

    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def corners(self) -> NDArray[np.float64]:
        return rotated_corners(self)

    def extent(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax) of the rotated corners."""
        if self.rotation % 360 == 0:
            return (self.x, self.y, self.x + self.width, self.y + self.height)
        pts = self.corners()
        return (
            float(np.min(pts[:, 0])),
            float(np.min(pts[:, 1])),
            float(np.max(pts[:, 0])),
            float(np.max(pts[:, 1])),
        )


def rotated_corners(rect: Rect) -> NDArray[np.float64]:
    """Corners TL, TR, BR, BL rotated about the centre. 4x2 array."""
    cx, cy = rect.center
    w2 = rect.width / 2
    h2 = rect.height / 2
    local = np.array(
        [[-w2, -h2], [w2, -h2], [w2, h2], [-w2, h2]],
        dtype=np.float64,
    )
    theta = math.radians(rect.rotation)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    rot = np.array([[cos_t, -sin_t], [sin_t, cos_t]], dtype=np.float64)
    return local @ rot.T + np.array([cx, cy])


def _project(axis: NDArray[np.float64], polygon: NDArray[np.float64]) -> tuple[float, float]:
    dots = polygon @ axis
    return float(np.min(dots)), float(np.max(dots))


def polygons_intersect(poly1: NDArray[np.float64], poly2: NDArray[np.float64]) -> bool:
    """Separating Axis Theorem for two convex polygons (Nx2 arrays).

    Every edge normal of either polygon is a candidate axis. Projections that
    only touch count as separated.
    """
    for polygon in (poly1, poly2):
        edges = np.roll(polygon, -1, axis=0) - polygon
        for ex, ey in edges:
            length = math.hypot(ex, ey)
            if length < 1e-12:
                continue
            axis = np.array([-ey / length, ex / length])
            min1, max1 = _project(axis, poly1)
            min2, max2 = _project(axis, poly2)
            if max1 <= min2 or max2 <= min1:
                return False
    return True


def intersects(a: Rect, b: Rect) -> bool:
    """Rotation-aware rectangle overlap test (SAT)."""
    if a.rotation % 360 == 0 and b.rotation % 360 == 0:
        return intersects_aabb(a, b)
    return polygons_intersect(rotated_corners(a), rotated_corners(b))


def intersects_aabb(a: Rect, b: Rect) -> bool:
    """Axis-aligned overlap test. Rotation is ignored."""
    return not (
        a.x + a.width <= b.x
        or b.x + b.width <= a.x
        or a.y + a.height <= b.y
        or b.y + b.height <= a.y
    )


def padded_rect(rect: Rect, padding: float) -> Rect:
    """Collision box: shrink every side by ``padding``, keep centre and rotation.

    A side too short for the padding collapses to the minimum size around the
    original centre.
    """
    if padding == 0:
        return rect
    width = max(_MIN_PADDED_SIZE, rect.width - padding * 2)
    height = max(_MIN_PADDED_SIZE, rect.height - padding * 2)
    return Rect(
        x=rect.x + (rect.width - width) / 2,
        y=rect.y + (rect.height - height) / 2,
        width=width,
        height=height,
        rotation=rect.rotation,
    )
