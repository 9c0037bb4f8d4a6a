"""Test cases for the token model."""

import unittest

from md_image_pipeline.model.tokens import Token, TokenKind, classify
from md_image_pipeline.tests.token_factory import image, inline, text


class TokenKindTest(unittest.TestCase):
    """Raw parser types map onto the closed kind enumeration."""

    def test_figure_spellings(self):
        self.assertIs(classify("figure_open"), TokenKind.FIGURE_OPEN)
        self.assertIs(classify("container_figure_open"), TokenKind.FIGURE_OPEN)
        self.assertIs(classify("figure_close"), TokenKind.FIGURE_CLOSE)
        self.assertIs(classify("container_figure_close"), TokenKind.FIGURE_CLOSE)

    def test_unknown_types_are_other(self):
        for token_type in ("paragraph_open", "text", "em_open", "fence"):
            self.assertIs(classify(token_type), TokenKind.OTHER)

    def test_kind_follows_type_changes(self):
        token = image("/_svg/a.svg")
        self.assertIs(token.kind, TokenKind.IMAGE)
        token.type = "html_inline"
        self.assertIs(token.kind, TokenKind.HTML_INLINE)


class TokenAttributeTest(unittest.TestCase):
    """Attributes behave as an append-only list of pairs."""

    def test_push_appends_duplicates(self):
        token = Token(type="image", attrs=[("width", 10)])
        token.attr_push("width", 20)

        self.assertEqual(token.attrs, [("width", 10), ("width", 20)])
        self.assertEqual(token.attr_get("width"), 10)
        self.assertEqual(token.attr_values("width"), [10, 20])

    def test_missing_attribute(self):
        self.assertIsNone(Token(type="image").attr_get("src"))

    def test_find_child_returns_first_match(self):
        first = image("/_img/a.png")
        second = image("/_img/b.png")
        token = inline(text("x"), first, second)

        self.assertIs(token.find_child(TokenKind.IMAGE), first)
        self.assertEqual(list(token.iter_children(TokenKind.IMAGE)), [first, second])
        self.assertIsNone(inline(text("only text")).find_child(TokenKind.IMAGE))


class TokenSerializationTest(unittest.TestCase):
    """Conversion from and to JSON-compatible dictionaries."""

    def test_attrs_mapping_is_accepted(self):
        token = Token.from_dict({"type": "image", "attrs": {"src": "/_img/a.png", "alt": ""}})
        self.assertEqual(token.attrs, [("src", "/_img/a.png"), ("alt", "")])

    def test_attrs_pairs_and_children(self):
        payload = {
            "type": "inline",
            "children": [{"type": "image", "tag": "img", "attrs": [["src", "/_img/a.png"]]}],
        }
        token = Token.from_dict(payload)

        self.assertEqual(token.attrs, [])
        self.assertEqual(len(token.children), 1)
        self.assertEqual(token.children[0].attr_get("src"), "/_img/a.png")

    def test_to_dict_emits_pairs(self):
        token = image("/_img/a.png")
        token.attr_push("width", 3)
        data = token.to_dict()

        self.assertEqual(data["attrs"], [["src", "/_img/a.png"], ["alt", ""], ["width", 3]])
        self.assertEqual(Token.from_dict(data), token)

    def test_malformed_attr_pair(self):
        with self.assertRaises(ValueError):
            Token.from_dict({"type": "image", "attrs": [["src"]]})


if __name__ == '__main__':
    unittest.main()
