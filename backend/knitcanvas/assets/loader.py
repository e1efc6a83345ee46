"""Motif image loading: sources become opaque handles into an asset cache.

The placement engine never holds a bitmap. It only needs a handle and the
natural pixel size, which the loader reads with Pillow off the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ImageLoadError(Exception):
    """A single source could not be resolved or decoded."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


@dataclass(frozen=True)
class LoadedImage:
    handle: str
    width: int
    height: int
    source: str


class ImageLoader(Protocol):
    async def load(self, source: str) -> LoadedImage: ...


class AssetCache:
    """Handle → loaded image. One entry per distinct source."""

    def __init__(self) -> None:
        self._by_handle: dict[str, LoadedImage] = {}
        self._by_source: dict[str, str] = {}

    def get(self, handle: str) -> LoadedImage | None:
        return self._by_handle.get(handle)

    def lookup_source(self, source: str) -> LoadedImage | None:
        handle = self._by_source.get(source)
        return self._by_handle.get(handle) if handle else None

    def register(self, source: str, width: int, height: int) -> LoadedImage:
        existing = self.lookup_source(source)
        if existing is not None:
            return existing
        image = LoadedImage(
            handle=f"img-{uuid.uuid4().hex[:12]}",
            width=width,
            height=height,
            source=source,
        )
        self._by_handle[image.handle] = image
        self._by_source[source] = image.handle
        return image


class FileImageLoader:
    """Loads images from a local asset directory.

    Sources are paths relative to ``asset_dir`` (a leading ``/`` is allowed, as
    the frontend uses site-absolute URLs like ``/IconsImages/ImageIcon.png``).
    """

    def __init__(self, asset_dir: str | Path, cache: AssetCache | None = None) -> None:
        self.asset_dir = Path(asset_dir).resolve()
        self.cache = cache or AssetCache()

    def _resolve(self, source: str) -> Path:
        relative = source.lstrip("/")
        if not relative:
            raise ImageLoadError(source, "empty source")
        path = (self.asset_dir / relative).resolve()
        if not path.is_relative_to(self.asset_dir):
            raise ImageLoadError(source, "outside the asset directory")
        return path

    def _read_size(self, source: str) -> tuple[int, int]:
        path = self._resolve(source)
        try:
            with Image.open(path) as img:
                img.verify()
                return img.size
        except FileNotFoundError:
            raise ImageLoadError(source, "not found") from None
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ImageLoadError(source, f"unreadable image ({e})") from e

    async def load(self, source: str) -> LoadedImage:
        cached = self.cache.lookup_source(source)
        if cached is not None:
            return cached

        loop = asyncio.get_running_loop()
        width, height = await loop.run_in_executor(None, self._read_size, source)
        image = self.cache.register(source, width, height)
        logger.debug("Loaded %s (%dx%d) as %s", source, width, height, image.handle)
        return image
