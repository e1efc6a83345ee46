"""Tests for the layout audit."""

from __future__ import annotations

import pytest

from knitcanvas.engine.audit import audit_layout
from tests.conftest import WIDE_BOUNDS, make_motif


def test_clean_layout_is_valid():
    motifs = [make_motif("a", 0, 0), make_motif("b", 200, 0)]
    audit = audit_layout(motifs, WIDE_BOUNDS, 15)
    assert audit.valid
    assert audit.to_dict() == {"valid": True, "out_of_bounds": [], "overlaps": []}


def test_reports_out_of_bounds():
    audit = audit_layout([make_motif("a", 350, 10)], WIDE_BOUNDS, 0)
    assert audit.out_of_bounds == ["a"]
    assert not audit.valid


def test_reports_padded_overlap_area():
    motifs = [make_motif("a", 0, 0), make_motif("b", 50, 0)]
    audit = audit_layout(motifs, WIDE_BOUNDS, 10)
    assert len(audit.overlaps) == 1
    pair = audit.overlaps[0]
    assert (pair.first, pair.second) == ("a", "b")
    # Padded boxes: x 10..90 and 60..140, y 10..90
    assert pair.overlap_area == pytest.approx(30 * 80)


def test_padding_absorbs_small_overlap():
    motifs = [make_motif("a", 0, 0), make_motif("b", 90, 0)]
    assert not audit_layout(motifs, WIDE_BOUNDS, 0).valid
    assert audit_layout(motifs, WIDE_BOUNDS, 5).valid


def test_rotated_overlap_uses_polygon_area():
    motifs = [make_motif("a", 100, 100, rotation=45), make_motif("b", 100, 100)]
    audit = audit_layout(motifs, WIDE_BOUNDS, 0)
    assert len(audit.overlaps) == 1
    # Square and its 45 degree twin share a regular octagon
    side = 100 * (2 ** 0.5 - 1)
    octagon = 2 * (1 + 2 ** 0.5) * side ** 2
    assert audit.overlaps[0].overlap_area == pytest.approx(octagon, abs=0.01)
