"""Loader for token streams serialized by an upstream markdown parser."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from md_image_pipeline.errors import TokenLoadError
from md_image_pipeline.model.document_model import TokenDocument
from md_image_pipeline.model.tokens import Token
from md_image_pipeline.utils.logger import get_logger

LOGGER = get_logger(__name__)

Payload = Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]


class TokenLoader:
    """Builds a :class:`TokenDocument` from JSON token dumps.

    Accepts either a bare list of token objects or an object with a
    ``tokens`` list and an optional ``env`` mapping.
    """

    def load(self, path: Path) -> TokenDocument:
        """Read a JSON file from disk and convert it into tokens."""
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise TokenLoadError(f"{path.name} is not valid JSON: {exc}") from exc
        document = self.from_payload(payload, source=path.name)
        LOGGER.debug("Loaded %d tokens from %s", len(document.tokens), path.name)
        return document

    def loads(self, text: str, source: Optional[str] = None) -> TokenDocument:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TokenLoadError(f"Token stream is not valid JSON: {exc}") from exc
        return self.from_payload(payload, source=source)

    def from_payload(self, payload: Payload, source: Optional[str] = None) -> TokenDocument:
        env: Mapping[str, Any] = {}
        if isinstance(payload, Mapping):
            raw_tokens = payload.get("tokens")
            env = payload.get("env") or {}
            source = source or payload.get("source")
        else:
            raw_tokens = payload
        if not isinstance(raw_tokens, list):
            raise TokenLoadError("Token stream must be a list of token objects")
        return TokenDocument(tokens=self._convert_all(raw_tokens), source=source, env=dict(env))

    # ------------------------------------------------------------------
    # Internal helpers
    def _convert_all(self, raw_tokens: List[Any]) -> List[Token]:
        tokens: List[Token] = []
        for index, raw in enumerate(raw_tokens):
            self._check_shape(raw, f"tokens[{index}]")
            try:
                tokens.append(Token.from_dict(raw))
            except (TypeError, ValueError) as exc:
                raise TokenLoadError(f"tokens[{index}]: {exc}") from exc
        return tokens

    def _check_shape(self, raw: Any, where: str) -> None:
        if not isinstance(raw, Mapping):
            raise TokenLoadError(f"{where} is not an object")
        if not isinstance(raw.get("type"), str):
            raise TokenLoadError(f"{where} has no 'type'")
        children = raw.get("children")
        if children is None:
            return
        if not isinstance(children, list):
            raise TokenLoadError(f"{where}.children must be a list")
        for index, child in enumerate(children):
            self._check_shape(child, f"{where}.children[{index}]")
