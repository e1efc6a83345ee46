"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from knitcanvas.assets.loader import FileImageLoader
from knitcanvas.config import settings
from knitcanvas.engine.config import PlacementConfig
from knitcanvas.engine.garment import DimensionCalculator
from knitcanvas.engine.motif_manager import MotifManager
from knitcanvas.engine.session import SessionStore

_store = SessionStore()


def get_store() -> SessionStore:
    return _store


@lru_cache(maxsize=1)
def get_manager() -> MotifManager:
    loader = FileImageLoader(settings.knitcanvas_asset_dir)
    return MotifManager(PlacementConfig.from_settings(settings), loader)


@lru_cache(maxsize=1)
def get_dimension_calculator() -> DimensionCalculator:
    return DimensionCalculator()
