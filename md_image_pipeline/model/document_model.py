"""Aggregate model for one document's token stream."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from md_image_pipeline.model.tokens import Token


@dataclass(slots=True)
class TokenDocument:
    """Token sequence shared, in order, by every pass of the pipeline."""

    tokens: List[Token]
    source: Optional[str] = None
    env: Dict[str, Any] = field(default_factory=dict)
    applied_passes: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.source or "<tokens>"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "env": self.env,
            "tokens": [token.to_dict() for token in self.tokens],
        }
