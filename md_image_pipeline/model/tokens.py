"""In-memory representation of the markdown token stream."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

AttrValue = Union[str, int]
Attribute = Tuple[str, AttrValue]


class TokenKind(Enum):
    """Closed set of token roles the image passes care about."""

    FIGURE_OPEN = "figure_open"
    FIGURE_CLOSE = "figure_close"
    INLINE = "inline"
    IMAGE = "image"
    HTML_INLINE = "html_inline"
    OTHER = "other"


_KIND_BY_TYPE: Dict[str, TokenKind] = {
    "figure_open": TokenKind.FIGURE_OPEN,
    "container_figure_open": TokenKind.FIGURE_OPEN,
    "figure_close": TokenKind.FIGURE_CLOSE,
    "container_figure_close": TokenKind.FIGURE_CLOSE,
    "inline": TokenKind.INLINE,
    "image": TokenKind.IMAGE,
    "html_inline": TokenKind.HTML_INLINE,
}


def classify(token_type: str) -> TokenKind:
    """Map a raw parser token type onto a TokenKind."""
    return _KIND_BY_TYPE.get(token_type, TokenKind.OTHER)


@dataclass(slots=True)
class Token:
    """Single node of the flattened document tree.

    ``attrs`` is an ordered list of ``(name, value)`` pairs. Names may repeat;
    new entries are appended and existing ones are never replaced.
    ``children`` is only populated for inline tokens.
    """

    type: str
    tag: str = ""
    nesting: int = 0
    attrs: List[Attribute] = field(default_factory=list)
    children: Optional[List["Token"]] = None
    content: str = ""
    markup: str = ""
    info: str = ""
    map: Optional[List[int]] = None
    block: bool = False
    hidden: bool = False
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> TokenKind:
        return classify(self.type)

    # ------------------------------------------------------------------
    # Attribute helpers
    def attr_get(self, name: str) -> Optional[AttrValue]:
        """Return the first value stored under ``name``."""
        for key, value in self.attrs:
            if key == name:
                return value
        return None

    def attr_values(self, name: str) -> List[AttrValue]:
        return [value for key, value in self.attrs if key == name]

    def attr_push(self, name: str, value: AttrValue) -> None:
        self.attrs.append((name, value))

    # ------------------------------------------------------------------
    # Children helpers
    def iter_children(self, kind: TokenKind) -> Iterator["Token"]:
        for child in self.children or ():
            if child.kind is kind:
                yield child

    def find_child(self, kind: TokenKind) -> Optional["Token"]:
        """Return the first child of the given kind, ignoring later siblings."""
        return next(self.iter_children(kind), None)

    # ------------------------------------------------------------------
    # Serialization
    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "tag": self.tag,
            "nesting": self.nesting,
            "attrs": [[key, value] for key, value in self.attrs],
            "children": None if self.children is None else [child.to_dict() for child in self.children],
            "content": self.content,
            "markup": self.markup,
            "info": self.info,
            "map": self.map,
            "block": self.block,
            "hidden": self.hidden,
            "meta": self.meta,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Token":
        children = payload.get("children")
        return cls(
            type=payload["type"],
            tag=payload.get("tag") or "",
            nesting=int(payload.get("nesting") or 0),
            attrs=_normalize_attrs(payload.get("attrs")),
            children=None if children is None else [cls.from_dict(child) for child in children],
            content=payload.get("content") or "",
            markup=payload.get("markup") or "",
            info=payload.get("info") or "",
            map=payload.get("map"),
            block=bool(payload.get("block", False)),
            hidden=bool(payload.get("hidden", False)),
            meta=dict(payload.get("meta") or {}),
        )


def _normalize_attrs(raw: Union[None, Mapping[str, AttrValue], Sequence[Sequence[AttrValue]]]) -> List[Attribute]:
    # markdown-it-py dumps attrs as a mapping, markdown-it (JS) as a list of pairs
    if not raw:
        return []
    if isinstance(raw, Mapping):
        return [(str(key), value) for key, value in raw.items()]
    attrs: List[Attribute] = []
    for pair in raw:
        if len(pair) != 2:
            raise ValueError(f"Attribute entry must be a name/value pair, got {pair!r}")
        attrs.append((str(pair[0]), pair[1]))
    return attrs
