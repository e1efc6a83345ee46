"""Tests for the spiral placement search."""

from __future__ import annotations

from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.placement import (
    Position,
    find_position,
    is_valid_position,
    iter_spiral,
)
from knitcanvas.utils.geometry import Rect, intersects, padded_rect
from tests.conftest import SQUARE_BOUNDS, TIGHT_BOUNDS


def test_spiral_walk_order():
    probes = list(iter_spiral(0, 0, step_size=10, max_steps=8))
    assert probes == [
        (0, 0),
        (10, 0),  # right 1
        (10, 10),  # down 1
        (0, 10), (-10, 10),  # left 2
        (-10, 0), (-10, -10),  # up 2
        (0, -10), (10, -10),  # right 3 (first of)
    ]


def test_spiral_yields_start_plus_budget():
    assert len(list(iter_spiral(5, 5, step_size=1, max_steps=400))) == 401


def test_spiral_stays_on_grid():
    for p in iter_spiral(0.1, 0.2, step_size=0.1, max_steps=200):
        gx = (p.x - 0.1) / 0.1
        gy = (p.y - 0.2) / 0.1
        assert abs(gx - round(gx)) < 1e-9
        assert abs(gy - round(gy)) < 1e-9


def test_empty_canvas_keeps_centered_start():
    pos = find_position(150, 150, 100, 100, 1, 1, 0, [], SQUARE_BOUNDS, 25)
    assert pos == Position(150, 150)


def test_offset_start_walks_to_first_clear_point():
    existing = [Rect(150, 150, 100, 100)]
    pos = find_position(170, 170, 100, 100, 1, 1, 0, existing, SQUARE_BOUNDS, 25)
    # Padded x-ranges touch at 225: the first probe clear of the obstacle
    assert pos == Position(200, 150)
    assert pos != Position(150, 150)


def test_result_is_first_valid_probe_in_walk_order():
    existing = [Rect(150, 150, 100, 100), Rect(60, 60, 80, 80)]
    pos = find_position(120, 120, 60, 60, 1, 1, 0, existing, SQUARE_BOUNDS, 10)
    assert pos is not None

    obstacles = [padded_rect(r, 10) for r in existing]
    for probe in iter_spiral(120, 120):
        valid = is_valid_position(Rect(probe.x, probe.y, 60, 60), obstacles, SQUARE_BOUNDS, 10)
        if probe == pos:
            assert valid
            break
        assert not valid


def test_no_space_returns_none():
    existing = [Rect(5, 5, 90, 90)]
    assert find_position(5, 5, 90, 90, 1, 1, 0, existing, TIGHT_BOUNDS, 15) is None


def test_out_of_bounds_start_is_pulled_in():
    pos = find_position(-50, -50, 10, 10, 1, 1, 0, [], TIGHT_BOUNDS)
    assert pos is not None
    assert TIGHT_BOUNDS.contains(pos.x, pos.y, 10, 10)


def test_scale_applies_to_search_size():
    bounds = Bounds(0, 0, 100, 100)
    # 60x60 at scale 2 can never fit a 100x100 region
    assert find_position(0, 0, 60, 60, 2, 2, 0, [], bounds) is None
    assert find_position(0, 0, 60, 60, 1, 1, 0, [], bounds) == Position(0, 0)


def test_rotated_obstacle_is_avoided():
    obstacle = Rect(100, 100, 60, 60, rotation=45)
    pos = find_position(110, 110, 40, 40, 1, 1, 30, [obstacle], Bounds(0, 0, 400, 400))
    assert pos is not None
    assert not intersects(Rect(pos.x, pos.y, 40, 40, 30), obstacle)


def test_rotated_probe_must_fit_by_extent():
    bounds = Bounds(0, 0, 100, 100)
    # A 100x100 square fits flush, but rotated 45 its extent is ~141 wide
    assert find_position(0, 0, 100, 100, 1, 1, 0, [], bounds) == Position(0, 0)
    assert find_position(0, 0, 100, 100, 1, 1, 45, [], bounds) is None


def test_search_is_deterministic():
    existing = [Rect(150, 150, 100, 100)]
    first = find_position(170, 170, 100, 100, 1, 1, 0, existing, SQUARE_BOUNDS, 25)
    second = find_position(170, 170, 100, 100, 1, 1, 0, existing, SQUARE_BOUNDS, 25)
    assert first == second
