"""Attach size, lazy-loading and srcset attributes to self-hosted images."""
from __future__ import annotations

from typing import Optional, Sequence

from md_image_pipeline.errors import AssetPathError
from md_image_pipeline.media.asset_resolver import AssetNamespace, AssetResolver
from md_image_pipeline.model.tokens import Token, TokenKind
from md_image_pipeline.utils.logger import get_logger

LOGGER = get_logger(__name__)


class ImageEmbedder:
    """Enrich raster images found in inline runs.

    Only images that are children of an inline token are visited. Raster
    images get ``width``, ``height`` and ``loading`` appended, plus a
    ``srcset`` when a retina variant exists on disk. Vector images are left
    for :class:`~md_image_pipeline.passes.svg_inliner.SvgInliner`; any other
    source is rejected.

    Attributes are appended, so running the pass twice over the same tokens
    stores each value twice. ``Token.attr_get`` still reports the first one.
    """

    name = "embed_image"

    def __init__(self, resolver: Optional[AssetResolver] = None) -> None:
        self.resolver = resolver or AssetResolver()

    def run(self, tokens: Sequence[Token]) -> None:
        for token in tokens:
            if token.kind is not TokenKind.INLINE:
                continue
            for image in token.iter_children(TokenKind.IMAGE):
                self.embed(image)

    def embed(self, image: Token) -> None:
        src = str(image.attr_get("src") or "")
        namespace = self.resolver.namespace_of(src)
        if namespace is AssetNamespace.RASTER:
            self._embed_raster(image, src)
        elif namespace is AssetNamespace.VECTOR:
            LOGGER.debug("Leaving %s for the svg pass", src)
        else:
            raise AssetPathError(src, self.resolver.config.raster_prefix)

    def _embed_raster(self, image: Token, src: str) -> None:
        geometry = self.resolver.measure(src)
        # explicit sizes reserve the layout box before the image loads
        image.attr_push("width", geometry.width)
        image.attr_push("height", geometry.height)
        image.attr_push("loading", self.resolver.config.lazy_loading)

        retina_src = self.resolver.find_retina_variant(src)
        if retina_src is not None:
            image.attr_push("srcset", f"{retina_src} 2x")
        LOGGER.debug(
            "Embedded %s (%dx%d)%s",
            src,
            geometry.width,
            geometry.height,
            f" with srcset {retina_src}" if retina_src else "",
        )
