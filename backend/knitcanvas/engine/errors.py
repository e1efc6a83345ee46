"""Placement error taxonomy.

Every error is recoverable at the call site. The API layer turns them into
discrete JSON signals keyed by ``code`` so the frontend can open the matching
explanatory dialog.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from knitcanvas.engine.motif import Motif


class PlacementError(Exception):
    code = "placement_error"
    user_message = "The motif could not be placed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class MaxMotifsReached(PlacementError):
    code = "max_motifs_reached"
    user_message = "You have reached the maximum number of motifs. Remove one to add another."

    def __init__(self, max_motifs: int) -> None:
        self.max_motifs = max_motifs
        super().__init__(f"Maximum of {max_motifs} motifs reached")


class NoSpaceAvailable(PlacementError):
    code = "no_space_available"
    user_message = (
        "There is no free space left for this motif. "
        "Remove a motif, shrink it, or enlarge the garment."
    )


class MotifsCannotFit(PlacementError):
    """A batch resize left at least one motif without a valid slot.

    ``motifs`` holds the best-effort layout (every motif, in order);
    ``unplaced_ids`` the ones still overlapping.
    """

    code = "motifs_cannot_fit"
    user_message = (
        "The motifs no longer fit on the garment at this tension. "
        "Remove a motif or choose a larger size."
    )

    def __init__(self, motifs: list[Motif], unplaced_ids: list[str]) -> None:
        self.motifs = motifs
        self.unplaced_ids = unplaced_ids
        super().__init__(f"{len(unplaced_ids)} motif(s) cannot fit: {', '.join(unplaced_ids)}")


class ImageLoadFailed(PlacementError):
    code = "image_load_failed"
    user_message = "The motif image could not be loaded."

    def __init__(self, source: str, fallback: str | None = None) -> None:
        self.source = source
        self.fallback = fallback
        detail = f"Failed to load motif image: {source}"
        if fallback:
            detail += f" (fallback {fallback} also failed)"
        super().__init__(detail)


class MotifNotFound(PlacementError):
    code = "motif_not_found"
    user_message = "That motif no longer exists."

    def __init__(self, motif_id: str) -> None:
        self.motif_id = motif_id
        super().__init__(f"Unknown motif: {motif_id}")
