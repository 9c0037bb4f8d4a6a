"""Helpers to persist processed token streams."""
from __future__ import annotations

import json
from pathlib import Path
from typing import TextIO

from md_image_pipeline.model.document_model import TokenDocument


class TokenDumper:
    """Writes a token document as JSON for the renderer or for inspection."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def dumps(self, document: TokenDocument) -> str:
        return json.dumps(document.to_dict(), indent=self.indent, ensure_ascii=False)

    def dump(self, document: TokenDocument, path: Path) -> None:
        """Persist the document next to other build artifacts."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.dumps(document) + "\n", encoding="utf-8")

    def write(self, document: TokenDocument, stream: TextIO) -> None:
        stream.write(self.dumps(document))
        stream.write("\n")
