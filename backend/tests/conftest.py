"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from PIL import Image

from knitcanvas.assets.loader import AssetCache, ImageLoadError, LoadedImage
from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.config import PlacementConfig
from knitcanvas.engine.motif import Motif
from knitcanvas.engine.motif_manager import MotifManager


# Canvas regions used across the suite

SQUARE_BOUNDS = Bounds(50, 50, 350, 350)
TIGHT_BOUNDS = Bounds(0, 0, 100, 100)
WIDE_BOUNDS = Bounds(0, 0, 400, 400)

# Motif images written by the asset fixtures (name -> natural size)
MOTIF_IMAGES = {
    "star.png": (64, 64),
    "heart.png": (80, 40),
    "tree.png": (30, 60),
}


class StubLoader:
    """In-memory image loader: every source resolves except the failing ones."""

    def __init__(
        self,
        sizes: dict[str, tuple[int, int]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.sizes = sizes or {}
        self.failing = failing or set()
        self.cache = AssetCache()
        self.calls: list[str] = []

    async def load(self, source: str) -> LoadedImage:
        self.calls.append(source)
        if source in self.failing:
            raise ImageLoadError(source, "not found")
        width, height = self.sizes.get(source, (64, 64))
        return self.cache.register(source, width, height)


class SlowLoader(StubLoader):
    """Yields to the event loop before resolving, like a real file load."""

    async def load(self, source: str) -> LoadedImage:
        await asyncio.sleep(0.01)
        return await super().load(source)


def make_motif(motif_id: str, x: float, y: float, width: float = 100, height: float = 100, **kw) -> Motif:
    return Motif(id=motif_id, image=f"img-{motif_id}", x=x, y=y, width=width, height=height, **kw)


def write_motif_images(asset_dir: Path) -> Path:
    motifs = asset_dir / "motifs"
    motifs.mkdir(parents=True, exist_ok=True)
    for name, size in MOTIF_IMAGES.items():
        Image.new("RGBA", size, (200, 40, 90, 255)).save(motifs / name)
    (motifs / "broken.png").write_bytes(b"definitely not a png")
    return asset_dir


@pytest.fixture
def stub_loader() -> StubLoader:
    return StubLoader()


@pytest.fixture
def manager(stub_loader: StubLoader) -> MotifManager:
    return MotifManager(PlacementConfig(), stub_loader)


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    return write_motif_images(tmp_path / "assets")
