"""Replace ``/_svg/`` image references with the SVG markup itself."""
from __future__ import annotations

from typing import Optional, Sequence

from md_image_pipeline.media.asset_resolver import AssetNamespace, AssetResolver
from md_image_pipeline.model.tokens import Token, TokenKind
from md_image_pipeline.utils.logger import get_logger

LOGGER = get_logger(__name__)

HTML_INLINE_TYPE = "html_inline"


class SvgInliner:
    """Turn vector image tokens into raw html tokens in place.

    Must run after implicit figure wrapping: that step only recognizes
    ``image`` tokens and would miss an already inlined SVG.
    """

    name = "embed_svg"

    def __init__(self, resolver: Optional[AssetResolver] = None) -> None:
        self.resolver = resolver or AssetResolver()

    def run(self, tokens: Sequence[Token]) -> None:
        for token in tokens:
            if token.kind is not TokenKind.INLINE:
                continue
            # TODO: confirm with the parser owners whether an inline run can hold several images
            image = token.find_child(TokenKind.IMAGE)
            if image is None:
                continue
            src = str(image.attr_get("src") or "")
            if self.resolver.namespace_of(src) is AssetNamespace.VECTOR:
                self.inline(image, src)

    def inline(self, image: Token, src: str) -> None:
        markup = self.resolver.read_text(src)
        image.type = HTML_INLINE_TYPE
        image.tag = ""
        image.content = markup
        LOGGER.debug("Inlined %s (%d chars)", src, len(markup))
