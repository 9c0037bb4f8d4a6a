"""Runtime settings shared by the image passes."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

SOURCE_ROOT_ENV = "MD_IMAGE_PIPELINE_SOURCE_ROOT"

RASTER_PREFIX = "/_img/"
VECTOR_PREFIX = "/_svg/"
RETINA_MARKER = "@2x"


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Where assets live on disk and how they are addressed from markdown."""

    source_root: Path = Path("src")
    raster_prefix: str = RASTER_PREFIX
    vector_prefix: str = VECTOR_PREFIX
    retina_marker: str = RETINA_MARKER
    lazy_loading: str = "lazy"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PipelineConfig":
        environ = os.environ if environ is None else environ
        root = environ.get(SOURCE_ROOT_ENV)
        return cls(source_root=Path(root)) if root else cls()

    def with_source_root(self, source_root: Optional[Path]) -> "PipelineConfig":
        if source_root is None:
            return self
        return replace(self, source_root=Path(source_root))
