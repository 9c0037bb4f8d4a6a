"""Ordered execution of the image passes over one token document."""
from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from md_image_pipeline.config import PipelineConfig
from md_image_pipeline.errors import PassOrderError
from md_image_pipeline.media.asset_resolver import AssetResolver
from md_image_pipeline.model.document_model import TokenDocument
from md_image_pipeline.model.tokens import Token
from md_image_pipeline.passes.figure_validator import FigureValidator
from md_image_pipeline.passes.image_embedder import ImageEmbedder
from md_image_pipeline.passes.svg_inliner import SvgInliner
from md_image_pipeline.utils.logger import get_logger

LOGGER = get_logger(__name__)


class TokenPass(Protocol):
    name: str

    def run(self, tokens: Sequence[Token]) -> None:
        ...


class ImagePipeline:
    """Validate, embed, wrap and inline, in that order.

    ``figure_passes`` are caller supplied passes (typically implicit figure
    wrapping) executed between the embedder and the SVG inliner.

    With ``validate_last`` the figure check runs after inlining instead.
    That is the order the markdown-it plugin actually registers its rules in
    (``check_img_in_figure`` pushed last, after ``embed_svg``). Inlined SVGs
    are no longer images at that point, so a standalone SVG paragraph passes;
    use it to accept documents written against the plugin.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        figure_passes: Sequence[TokenPass] = (),
        validate_last: bool = False,
    ) -> None:
        self.config = config or PipelineConfig()
        resolver = AssetResolver(self.config)
        self.passes: List[TokenPass] = [
            ImageEmbedder(resolver),
            *figure_passes,
            SvgInliner(resolver),
        ]
        if validate_last:
            self.passes.append(FigureValidator())
        else:
            self.passes.insert(0, FigureValidator())

    def process(self, document: TokenDocument) -> TokenDocument:
        """Run every pass over ``document`` in place and return it."""
        LOGGER.info("Processing images in %s", document.label)
        for token_pass in self.passes:
            if token_pass.name in document.applied_passes:
                raise PassOrderError(f"Pass {token_pass.name} already ran on {document.label}")
            token_pass.run(document.tokens)
            document.applied_passes.append(token_pass.name)
        return document

    def process_tokens(self, tokens: List[Token], source: Optional[str] = None) -> List[Token]:
        return self.process(TokenDocument(tokens=tokens, source=source)).tokens
