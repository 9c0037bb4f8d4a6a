"""
Self-hosted asset lookup

Maps image ``src`` values onto files under the source root, measures raster
images and reads vector images for inlining.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional

from PIL import Image

from ..config import PipelineConfig

_PIXEL_LIMIT_LOCK = threading.Lock()


@contextmanager
def _unbounded_pixels() -> Iterator[None]:
    """Lift Pillow's decompression bomb limit for a header-only read."""
    with _PIXEL_LIMIT_LOCK:
        saved = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = None
        try:
            yield
        finally:
            Image.MAX_IMAGE_PIXELS = saved


class AssetNamespace(Enum):
    """Address namespaces an image ``src`` may belong to."""

    RASTER = "raster"
    VECTOR = "vector"
    FOREIGN = "foreign"


@dataclass(frozen=True)
class ImageGeometry:
    """Pixel size of a decoded raster image."""

    width: int
    height: int


class AssetResolver:
    """Resolves markdown image sources against the on-disk source tree."""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()

    def namespace_of(self, src: str) -> AssetNamespace:
        if src.startswith(self.config.raster_prefix):
            return AssetNamespace.RASTER
        if src.startswith(self.config.vector_prefix):
            return AssetNamespace.VECTOR
        return AssetNamespace.FOREIGN

    def resolve(self, src: str) -> Path:
        """Return the file backing ``src``.

        The source root is prepended verbatim, so ``/_img/a.png`` under the
        default root becomes ``src/_img/a.png``.
        """
        return Path(f"{self.config.source_root}{src}")

    def retina_src(self, src: str) -> Optional[str]:
        """Return ``src`` with the retina marker inserted before its extension.

        ``/photo.jpg`` becomes ``/photo@2x.jpg``. Sources whose file name has
        no extension have no retina variant.
        """
        suffix = PurePosixPath(src).suffix
        if not suffix:
            return None
        return f"{src[:-len(suffix)]}{self.config.retina_marker}{suffix}"

    def find_retina_variant(self, src: str) -> Optional[str]:
        """Return the retina ``src`` if that file exists next to the original."""
        candidate = self.retina_src(src)
        if candidate is None or not self.resolve(candidate).is_file():
            return None
        return candidate

    def measure(self, src: str) -> ImageGeometry:
        """Read the image header and return its pixel dimensions."""
        # Image.open only parses the header; pixel data stays undecoded, so
        # the pixel limit guarding decodes does not apply here
        with _unbounded_pixels(), Image.open(self.resolve(src)) as image:
            width, height = image.size
        return ImageGeometry(width=int(width), height=int(height))

    def read_text(self, src: str) -> str:
        """Return the file contents exactly as stored on disk."""
        with open(self.resolve(src), encoding="utf-8", newline="") as handle:
            return handle.read()
