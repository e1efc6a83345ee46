"""Layout audit: containment and padded-overlap report for a motif list.

The placement engine keeps layouts valid; the audit reports where a layout is
not (served by the /audit endpoint, used as the oracle in tests).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from shapely.geometry import Polygon

from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.motif import Motif
from knitcanvas.utils.geometry import intersects, padded_rect


@dataclass(frozen=True)
class OverlapPair:
    first: str
    second: str
    overlap_area: float


@dataclass
class LayoutAudit:
    out_of_bounds: list[str] = field(default_factory=list)
    overlaps: list[OverlapPair] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.out_of_bounds and not self.overlaps

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "out_of_bounds": list(self.out_of_bounds),
            "overlaps": [
                {"first": o.first, "second": o.second, "overlap_area": o.overlap_area}
                for o in self.overlaps
            ],
        }


def audit_layout(motifs: Sequence[Motif], bounds: Bounds, padding: float) -> LayoutAudit:
    result = LayoutAudit()
    padded = [padded_rect(m.effective_rect(), padding) for m in motifs]

    for m in motifs:
        if not bounds.contains_extent(m.extent()):
            result.out_of_bounds.append(m.id)

    for i, a in enumerate(padded):
        for j in range(i + 1, len(padded)):
            b = padded[j]
            if not intersects(a, b):
                continue
            area = Polygon(a.corners()).intersection(Polygon(b.corners())).area
            result.overlaps.append(
                OverlapPair(motifs[i].id, motifs[j].id, round(float(area), 2))
            )
    return result
