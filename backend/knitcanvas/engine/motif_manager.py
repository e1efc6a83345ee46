"""Motif Manager: create, duplicate, resize and re-resolve motifs.

All geometry here is synchronous. The only await is the image load inside
``create_motif``, which happens before the motif joins any placed list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from knitcanvas.assets.loader import ImageLoader, ImageLoadError, LoadedImage
from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.config import PlacementConfig
from knitcanvas.engine.errors import (
    ImageLoadFailed,
    MaxMotifsReached,
    MotifsCannotFit,
    NoSpaceAvailable,
)
from knitcanvas.engine.motif import Motif, new_motif_id, stitch_count
from knitcanvas.engine.placement import Position, find_position

logger = logging.getLogger(__name__)


class MotifManager:
    """Business rules for the motif lifecycle."""

    def __init__(
        self,
        config: PlacementConfig | None = None,
        loader: ImageLoader | None = None,
    ) -> None:
        self.config = config or PlacementConfig()
        self.loader = loader

    @property
    def max_motifs(self) -> int:
        return self.config.max_motifs

    def can_add_motif(self, current_count: int) -> bool:
        return current_count < self.config.max_motifs

    def check_capacity(self, current_count: int) -> None:
        if not self.can_add_motif(current_count):
            logger.info("Motif limit reached (%d)", self.config.max_motifs)
            raise MaxMotifsReached(self.config.max_motifs)

    def _search(
        self,
        start_x: float,
        start_y: float,
        width: float,
        height: float,
        scale_x: float,
        scale_y: float,
        rotation: float,
        existing: Sequence[Motif],
        bounds: Bounds,
    ) -> Position | None:
        return find_position(
            start_x, start_y, width, height, scale_x, scale_y, rotation,
            [m.effective_rect() for m in existing],
            bounds,
            self.config.collision_padding,
            step_size=self.config.step_size,
            max_steps=self.config.max_steps,
        )

    # ------------------------------------------------------------------
    # Image resolution
    # ------------------------------------------------------------------

    async def load_image(self, image_source: str, fallback_source: str | None = None) -> LoadedImage:
        """Load the primary source, retrying once with the fallback."""
        if self.loader is None:
            raise RuntimeError("MotifManager has no image loader configured")
        try:
            return await self.loader.load(image_source)
        except ImageLoadError as e:
            if fallback_source and fallback_source != image_source:
                logger.warning(
                    "Failed to load motif image %s (%s), trying fallback %s",
                    image_source, e.reason, fallback_source,
                )
                try:
                    return await self.loader.load(fallback_source)
                except ImageLoadError as fallback_error:
                    logger.warning("Fallback image %s failed: %s", fallback_source, fallback_error.reason)
                    raise ImageLoadFailed(image_source, fallback_source) from fallback_error
            raise ImageLoadFailed(image_source) from e

    def default_size(self, image: LoadedImage, bounds: Bounds) -> tuple[float, float]:
        """Longer image side = fraction of the smaller bounds side, aspect kept."""
        side = self.config.default_size_fraction * min(bounds.width, bounds.height)
        if image.width <= 0 or image.height <= 0 or image.width == image.height:
            return (side, side)
        if image.width > image.height:
            return (side, side * image.height / image.width)
        return (side * image.width / image.height, side)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def create_motif(
        self,
        image_source: str,
        bounds: Bounds,
        existing: Sequence[Motif],
        fallback_source: str | None = None,
        desired_size: tuple[float, float] | None = None,
    ) -> Motif:
        """New motif as close to the bounds centre as the placed motifs allow.

        ``existing`` is searched as it stands after the image load. A caller
        whose motif list can change during that await should load and place
        separately (see ``MotifSession.add_motif``).

        Raises:
            MaxMotifsReached: before any loading or geometry.
            ImageLoadFailed: primary and fallback sources both failed.
            NoSpaceAvailable: the spiral search ran out of probes.
        """
        self.check_capacity(len(existing))
        image = await self.load_image(image_source, fallback_source)
        return self.place_new_motif(image.handle, bounds, existing, desired_size or self.default_size(image, bounds))

    def place_new_motif(
        self,
        image_handle: str,
        bounds: Bounds,
        existing: Sequence[Motif],
        size: tuple[float, float],
    ) -> Motif:
        """Place an already-loaded image, seeded at the bounds centre."""
        self.check_capacity(len(existing))
        width, height = size
        start_x = bounds.center_x - width / 2
        start_y = bounds.center_y - height / 2

        pos = self._search(start_x, start_y, width, height, 1.0, 1.0, 0.0, existing, bounds)
        if pos is None:
            logger.warning("No space for new %.0fx%.0f motif (%d placed)", width, height, len(existing))
            raise NoSpaceAvailable()

        motif = Motif(
            id=new_motif_id(),
            image=image_handle,
            x=pos.x,
            y=pos.y,
            width=width,
            height=height,
            stitches=stitch_count(width, height, self.config.stitch_size),
        )
        logger.info("Created %s at (%.1f, %.1f)", motif.id, motif.x, motif.y)
        return motif

    def duplicate_motif(
        self,
        source: Motif,
        bounds: Bounds,
        existing: Sequence[Motif],
    ) -> Motif:
        """Clone ``source`` next to itself, keeping size, scale, rotation and image."""
        self.check_capacity(len(existing))
        offset = self.config.duplicate_offset
        pos = self._search(
            source.x + offset,
            source.y + offset,
            source.width,
            source.height,
            source.scale_x,
            source.scale_y,
            source.rotation,
            existing,
            bounds,
        )
        if pos is None:
            logger.warning("No space to duplicate %s", source.id)
            raise NoSpaceAvailable()

        clone = replace(source, id=new_motif_id(), x=pos.x, y=pos.y)
        logger.info("Duplicated %s as %s at (%.1f, %.1f)", source.id, clone.id, clone.x, clone.y)
        return clone

    def update_motif_size(
        self,
        motif: Motif,
        new_size: tuple[float, float],
        bounds: Bounds,
    ) -> Motif:
        """Replace width/height (scale untouched), then pull the box back inside."""
        width, height = new_size
        resized = motif.resized(width, height, self.config.stitch_size)
        xmin, ymin, xmax, ymax = resized.extent()
        nx, ny = bounds.clamp(xmin, ymin, xmax - xmin, ymax - ymin)
        return resized.moved(motif.x + nx - xmin, motif.y + ny - ymin)

    def resolve_overlaps(self, motifs: Sequence[Motif], bounds: Bounds) -> list[Motif]:
        """Re-validate every motif in list order against those already resolved.

        Raises:
            MotifsCannotFit: with the best-effort list when any motif has no slot.
        """
        resolved: list[Motif] = []
        unplaced: list[str] = []

        for motif in motifs:
            pos = self._search(
                motif.x, motif.y, motif.width, motif.height,
                motif.scale_x, motif.scale_y, motif.rotation,
                resolved,
                bounds,
            )
            if pos is None:
                unplaced.append(motif.id)
                resolved.append(motif)
                continue
            if (pos.x, pos.y) != (motif.x, motif.y):
                logger.debug("Resolved %s: (%.1f, %.1f) -> (%.1f, %.1f)", motif.id, motif.x, motif.y, pos.x, pos.y)
            resolved.append(motif.moved(pos.x, pos.y))

        if unplaced:
            logger.warning("%d of %d motifs cannot fit after resize", len(unplaced), len(motifs))
            raise MotifsCannotFit(resolved, unplaced)
        return resolved

    def resize_all(
        self,
        motifs: Sequence[Motif],
        new_size: tuple[float, float],
        bounds: Bounds,
    ) -> list[Motif]:
        """Gauge change: resize every motif, then resolve the resulting overlaps."""
        resized = [self.update_motif_size(m, new_size, bounds) for m in motifs]
        logger.info("Resized %d motifs to %.1fx%.1f", len(resized), new_size[0], new_size[1])
        return self.resolve_overlaps(resized, bounds)
