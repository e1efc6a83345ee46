"""MotifSession: the single owner of a canvas's placed motifs.

The motif list is an immutable tuple replaced wholesale on every accepted
change, so a renderer reading ``session.motifs`` never sees a half-applied
update. Renderers subscribe for snapshots; they never mutate.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.drag import DropResult, clamp_to_bounds, reconcile_drop
from knitcanvas.engine.errors import MotifNotFound, MotifsCannotFit
from knitcanvas.engine.motif import Motif
from knitcanvas.engine.motif_manager import MotifManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    version: int
    motifs: tuple[Motif, ...]
    selected_id: str | None
    bounds: Bounds
    motif_size: tuple[float, float] | None

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "motifs": [m.to_dict() for m in self.motifs],
            "selected_id": self.selected_id,
            "bounds": self.bounds.to_dict(),
            "motif_size": list(self.motif_size) if self.motif_size else None,
        }


Subscriber = Callable[[SessionSnapshot], None]


class MotifSession:
    """Placed motifs + selection for one garment canvas."""

    def __init__(
        self,
        manager: MotifManager,
        bounds: Bounds,
        motif_size: tuple[float, float] | None = None,
        session_id: str | None = None,
    ) -> None:
        self.id = session_id or uuid.uuid4().hex[:8]
        self.manager = manager
        self._bounds = bounds
        self._motif_size = motif_size
        self._motifs: tuple[Motif, ...] = ()
        self._selected_id: str | None = None
        self._version = 0
        self._subscribers: list[Subscriber] = []

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def motifs(self) -> tuple[Motif, ...]:
        return self._motifs

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def version(self) -> int:
        return self._version

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def motif_size(self) -> tuple[float, float] | None:
        return self._motif_size

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            version=self._version,
            motifs=self._motifs,
            selected_id=self._selected_id,
            bounds=self._bounds,
            motif_size=self._motif_size,
        )

    def get(self, motif_id: str) -> Motif:
        for m in self._motifs:
            if m.id == motif_id:
                return m
        raise MotifNotFound(motif_id)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a read-only listener. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def _commit(
        self,
        motifs: tuple[Motif, ...] | list[Motif],
        selected_id: str | None = None,
        *,
        keep_selection: bool = False,
    ) -> SessionSnapshot:
        self._motifs = tuple(motifs)
        if not keep_selection:
            self._selected_id = selected_id
        if self._selected_id is not None and all(m.id != self._selected_id for m in self._motifs):
            self._selected_id = None
        self._version += 1
        snap = self.snapshot()
        for callback in list(self._subscribers):
            callback(snap)
        return snap

    def _others(self, motif_id: str) -> list[Motif]:
        return [m for m in self._motifs if m.id != motif_id]

    def _replace(self, updated: Motif) -> tuple[Motif, ...]:
        return tuple(updated if m.id == updated.id else m for m in self._motifs)

    async def add_motif(self, image_source: str, fallback_source: str | None = None) -> Motif:
        """Load the image, then place against the motifs present after the await.

        Other adds on this session may commit while the image loads, so the
        capacity check and the search both run again once it resolves.
        """
        self.manager.check_capacity(len(self._motifs))
        image = await self.manager.load_image(image_source, fallback_source)

        size = self._motif_size or self.manager.default_size(image, self._bounds)
        motif = self.manager.place_new_motif(image.handle, self._bounds, self._motifs, size)
        self._commit(self._motifs + (motif,), motif.id)
        return motif

    def duplicate(self, motif_id: str) -> Motif:
        clone = self.manager.duplicate_motif(self.get(motif_id), self._bounds, self._motifs)
        self._commit(self._motifs + (clone,), clone.id)
        return clone

    def delete(self, motif_id: str) -> None:
        self.get(motif_id)
        self._commit(tuple(m for m in self._motifs if m.id != motif_id), keep_selection=True)
        logger.info("Deleted %s", motif_id)

    def delete_selected(self) -> str | None:
        """Keyboard shortcut (Delete/Backspace). No-op without a selection."""
        if self._selected_id is None:
            return None
        deleted = self._selected_id
        self.delete(deleted)
        return deleted

    def select(self, motif_id: str | None) -> None:
        if motif_id is not None:
            self.get(motif_id)
        if motif_id == self._selected_id:
            return
        self._commit(self._motifs, motif_id)

    def drag_move(self, motif_id: str, x: float, y: float) -> tuple[float, float]:
        """Clamp an in-flight drag position. Nothing is committed."""
        motif = self.get(motif_id)
        return clamp_to_bounds(x, y, motif.width, motif.height, motif.scale_x, motif.scale_y, self._bounds)

    def commit_transform(
        self,
        motif_id: str,
        x: float,
        y: float,
        scale_x: float | None = None,
        scale_y: float | None = None,
        rotation: float | None = None,
    ) -> DropResult:
        """Drag/transform end: clamp, collide, apply the drag-end policy, commit."""
        motif = self.get(motif_id)
        config = self.manager.config
        if rotation is None or not config.rotation_enabled:
            rotation = motif.rotation
        result = reconcile_drop(
            motif,
            x,
            y,
            motif.scale_x if scale_x is None else scale_x,
            motif.scale_y if scale_y is None else scale_y,
            rotation,
            self._others(motif_id),
            self._bounds,
            config.collision_padding,
            config.drag_end_policy,
            step_size=config.step_size,
            max_steps=config.max_steps,
        )
        if result.motif != motif:
            self._commit(self._replace(result.motif), keep_selection=True)
        logger.debug("Commit %s: %s", motif_id, result.outcome.value)
        return result

    def apply_gauge(self, bounds: Bounds, motif_size: tuple[float, float]) -> list[Motif]:
        """External gauge/garment change: new bounds, every motif resized and resolved.

        On ``MotifsCannotFit`` the best-effort layout is still committed before
        the error propagates.
        """
        self._bounds = bounds
        self._motif_size = motif_size
        try:
            resolved = self.manager.resize_all(self._motifs, motif_size, bounds)
        except MotifsCannotFit as e:
            self._commit(e.motifs, keep_selection=True)
            raise
        self._commit(resolved, keep_selection=True)
        return resolved


class SessionStore:
    """In-memory store for active motif sessions.

    Sessions live until ``DELETE /api/sessions/{id}`` or process exit; there is
    no expiry and nothing is persisted.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, MotifSession] = {}

    def add(self, session: MotifSession) -> str:
        self._sessions[session.id] = session
        return session.id

    def get(self, session_id: str) -> MotifSession | None:
        return self._sessions.get(session_id)

    def list_ids(self) -> list[str]:
        return list(self._sessions.keys())

    def delete(self, session_id: str) -> bool:
        if session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False
