"""Check that every image sits inside a figure block."""
from __future__ import annotations

from typing import Sequence

from md_image_pipeline.errors import FigureStructureError, ImagePlacementError
from md_image_pipeline.model.tokens import Token, TokenKind
from md_image_pipeline.utils.logger import get_logger

LOGGER = get_logger(__name__)


class FigureValidator:
    """Read-only pass rejecting images that are not wrapped in a figure."""

    name = "check_img_in_figure"

    def run(self, tokens: Sequence[Token]) -> None:
        in_figure = False
        for token in tokens:
            kind = token.kind
            if kind is TokenKind.FIGURE_OPEN:
                if in_figure:
                    raise FigureStructureError("figure opened inside another figure")
                in_figure = True
            elif kind is TokenKind.FIGURE_CLOSE:
                if not in_figure:
                    raise FigureStructureError("figure closed without being opened")
                in_figure = False
            elif kind is TokenKind.INLINE:
                if not in_figure:
                    self._reject_stray_image(token)
        if in_figure:
            raise FigureStructureError("figure left open at end of document")
        LOGGER.debug("Figure containment verified over %d tokens", len(tokens))

    @staticmethod
    def _reject_stray_image(inline: Token) -> None:
        image = inline.find_child(TokenKind.IMAGE)
        if image is not None:
            raise ImagePlacementError(str(image.attr_get("src") or ""))
