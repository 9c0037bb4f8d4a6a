"""Exceptions raised while post-processing a token stream."""
from __future__ import annotations


class PipelineError(Exception):
    """Base class for every failure that aborts a document."""


class DocumentValidationError(PipelineError, ValueError):
    """The source document is malformed and must be fixed by its author."""

    def __init__(self, src: str, message: str) -> None:
        super().__init__(message)
        self.src = src


class ImagePlacementError(DocumentValidationError):
    """An image sits in an inline run outside any figure."""

    def __init__(self, src: str) -> None:
        super().__init__(src, f"Image {src} is not in a separate block. Missing newlines around?")


class AssetPathError(DocumentValidationError):
    """An image points outside the self-hosted asset namespaces."""

    def __init__(self, src: str, raster_prefix: str = "/_img/") -> None:
        super().__init__(src, f'Image {src} is not in the "{raster_prefix}..." directory.')


class FigureStructureError(PipelineError, AssertionError):
    """Figure open/close markers are unbalanced or overlap.

    Raised for token streams no markdown source can produce, so it points at
    the parser or an earlier pass rather than at the document.
    """


class PassOrderError(PipelineError, RuntimeError):
    """A pass was scheduled twice for the same document."""


class TokenLoadError(PipelineError, ValueError):
    """A serialized token stream could not be turned into tokens."""
