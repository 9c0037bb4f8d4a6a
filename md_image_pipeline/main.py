"""Entry-point for the markdown image pipeline."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image

from md_image_pipeline.config import PipelineConfig
from md_image_pipeline.errors import PipelineError
from md_image_pipeline.model.document_model import TokenDocument
from md_image_pipeline.parser.token_loader import TokenLoader
from md_image_pipeline.pipeline import ImagePipeline
from md_image_pipeline.utils.debug import TokenDumper
from md_image_pipeline.utils.logger import get_logger, set_level

LOGGER = get_logger(__name__)


def process_file(
    tokens_path: Path,
    config: Optional[PipelineConfig] = None,
    *,
    validate_last: bool = False,
) -> TokenDocument:
    """Load a token dump and run every image pass over it."""
    tokens_path = Path(tokens_path).resolve()
    if not tokens_path.exists():
        raise FileNotFoundError(f"Token file not found: {tokens_path}")

    document = TokenLoader().load(tokens_path)
    pipeline = ImagePipeline(config or PipelineConfig.from_env(), validate_last=validate_last)
    return pipeline.process(document)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Embed image sizes and inline SVGs in a markdown token stream"
    )
    parser.add_argument("tokens_file", help="JSON dump of the parser's token stream")
    parser.add_argument("--output", help="Where to write the processed tokens (default: stdout)")
    parser.add_argument("--source-root", help="Directory that /_img/ and /_svg/ paths are relative to")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG")
    parser.add_argument(
        "--validate-last",
        action="store_true",
        help="Check figure containment after SVG inlining instead of first",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the token file → image passes → JSON pipeline."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.log_level:
        try:
            set_level(args.log_level)
        except ValueError as exc:
            arg_parser.error(str(exc))

    config = PipelineConfig.from_env().with_source_root(args.source_root)
    try:
        document = process_file(Path(args.tokens_file), config, validate_last=args.validate_last)
    except (PipelineError, OSError, UnicodeDecodeError, Image.DecompressionBombError) as exc:
        LOGGER.error("Cannot render %s: %s", args.tokens_file, exc)
        return 1

    dumper = TokenDumper()
    if args.output:
        output_path = Path(args.output).resolve()
        LOGGER.info("Writing processed tokens to %s", output_path)
        dumper.dump(document, output_path)
    else:
        dumper.write(document, sys.stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
