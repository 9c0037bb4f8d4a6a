"""Test cases for loading serialized token streams."""

import json
import tempfile
import unittest
from pathlib import Path

from md_image_pipeline.errors import TokenLoadError
from md_image_pipeline.model.tokens import TokenKind
from md_image_pipeline.parser.token_loader import TokenLoader
from md_image_pipeline.utils.debug import TokenDumper
from md_image_pipeline.tests.token_factory import figure, image


class TokenLoaderTest(unittest.TestCase):
    """Building token documents from JSON."""

    def setUp(self):
        self.loader = TokenLoader()

    def test_bare_list(self):
        payload = [
            {"type": "figure_open", "tag": "figure", "nesting": 1},
            {"type": "inline", "children": [{"type": "image", "tag": "img", "attrs": {"src": "/_img/a.png"}}]},
            {"type": "figure_close", "tag": "figure", "nesting": -1},
        ]
        document = self.loader.loads(json.dumps(payload))

        self.assertEqual([token.kind for token in document.tokens],
                         [TokenKind.FIGURE_OPEN, TokenKind.INLINE, TokenKind.FIGURE_CLOSE])
        self.assertEqual(document.tokens[1].children[0].attr_get("src"), "/_img/a.png")
        self.assertIsNone(document.source)

    def test_wrapped_object_keeps_env(self):
        payload = {"tokens": [{"type": "paragraph_open"}], "env": {"title": "Post"}, "source": "post.md"}
        document = self.loader.from_payload(payload)

        self.assertEqual(document.env, {"title": "Post"})
        self.assertEqual(document.source, "post.md")

    def test_invalid_json(self):
        with self.assertRaises(TokenLoadError):
            self.loader.loads("[{")

    def test_tokens_must_be_list(self):
        with self.assertRaises(TokenLoadError):
            self.loader.from_payload({"tokens": {"type": "inline"}})

    def test_token_without_type(self):
        with self.assertRaises(TokenLoadError) as ctx:
            self.loader.from_payload([{"type": "inline", "children": [{"tag": "img"}]}])
        self.assertIn("tokens[0].children[0]", str(ctx.exception))

    def test_bad_attribute_pair(self):
        with self.assertRaises(TokenLoadError):
            self.loader.from_payload([{"type": "image", "attrs": [["src", "/_img/a.png", "extra"]]}])

    def test_load_from_file_and_dump(self):
        tokens = figure(image("/_img/a.png"))
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "post.json"
            path.write_text(json.dumps([token.to_dict() for token in tokens]), encoding="utf-8")

            document = self.loader.load(path)
            self.assertEqual(document.source, "post.json")
            self.assertEqual(document.tokens, tokens)

            out_path = Path(tmp) / "out" / "post.json"
            TokenDumper().dump(document, out_path)
            reloaded = self.loader.load(out_path)
            self.assertEqual(reloaded.tokens, tokens)


if __name__ == '__main__':
    unittest.main()
