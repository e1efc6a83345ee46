"""knitcanvas motif placement engine."""

from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.config import DragEndPolicy, PlacementConfig
from knitcanvas.engine.motif import Motif
from knitcanvas.engine.motif_manager import MotifManager
from knitcanvas.engine.placement import Position, find_position
from knitcanvas.engine.session import MotifSession, SessionStore

__all__ = [
    "Bounds",
    "DragEndPolicy",
    "PlacementConfig",
    "Motif",
    "MotifManager",
    "Position",
    "find_position",
    "MotifSession",
    "SessionStore",
]
