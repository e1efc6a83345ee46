"""Tests for garment display layout and gauge sizing."""

from __future__ import annotations

import pytest

from knitcanvas.engine.garment import (
    CanvasConfig,
    DimensionCalculator,
    GarmentType,
    Gauge,
    default_dimensions,
    motif_size_cm,
    motif_size_px,
)

SCALE = 360 / 140


def test_scale_fits_largest_garment_in_padded_container():
    assert DimensionCalculator().scale() == pytest.approx(SCALE)


def test_baby_blanket_layout():
    layout = DimensionCalculator().calculate(60, 80)
    assert layout.display_width == pytest.approx(60 * SCALE)
    assert layout.display_height == pytest.approx(80 * SCALE)
    assert layout.x == pytest.approx(20 + (360 - 60 * SCALE) / 2)
    assert layout.y == pytest.approx(20 + (460 - 80 * SCALE) / 2)

    inset = 5 * SCALE
    b = layout.bounds
    assert b.left == pytest.approx(layout.x + inset)
    assert b.top == pytest.approx(160.0)
    assert b.right == pytest.approx(layout.x + layout.display_width - inset)
    assert b.bottom == pytest.approx(340.0)


def test_layout_is_centered_in_container():
    layout = DimensionCalculator().calculate(100, 100, ribbon_cm=0)
    assert layout.x + layout.display_width / 2 == pytest.approx(200)
    assert layout.y + layout.display_height / 2 == pytest.approx(250)
    assert layout.bounds.width == pytest.approx(layout.display_width)


def test_custom_container():
    calc = DimensionCalculator(CanvasConfig(container_width=300, container_height=300, padding=10, max_size_cm=100))
    assert calc.stage_size == (300, 300)
    assert calc.scale() == pytest.approx(2.8)


@pytest.mark.parametrize(
    "width, height, ribbon",
    [(0, 80, None), (60, -1, None), (8, 80, 5), (60, 80, 30)],
)
def test_invalid_layout_inputs(width, height, ribbon):
    with pytest.raises(ValueError):
        DimensionCalculator().calculate(width, height, ribbon_cm=ribbon)


def test_default_dimensions():
    assert default_dimensions(GarmentType.BABY_BLANKET) == (60.0, 80.0)
    assert default_dimensions(GarmentType.SCARF) == (100.0, 100.0)


def test_gauge_must_be_positive():
    with pytest.raises(ValueError):
        Gauge(0, 28)


def test_motif_size_from_gauge():
    gauge = Gauge(stitches_per_10cm=20, rows_per_10cm=28)
    assert motif_size_cm(20, 28, gauge) == pytest.approx((10, 10))
    assert motif_size_px(20, 28, gauge, SCALE) == pytest.approx((10 * SCALE, 10 * SCALE))


def test_tighter_gauge_makes_smaller_motif():
    loose = motif_size_cm(30, 30, Gauge(15, 20))
    tight = motif_size_cm(30, 30, Gauge(30, 40))
    assert tight[0] < loose[0]
    assert tight[1] < loose[1]


def test_empty_chart_rejected():
    with pytest.raises(ValueError):
        motif_size_cm(0, 10, Gauge(20, 28))
