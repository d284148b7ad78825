"""Tests for the top-level genine package."""

import genine


class TestPackage:
    """Test package metadata and public exports."""

    def test_version_and_author(self):
        """Test package metadata."""
        assert genine.__version__ == "0.1.0"
        assert genine.__author__

    def test_all_exports_resolve(self):
        """Test that every name in __all__ is importable."""
        for name in genine.__all__:
            assert hasattr(genine, name), name

    def test_end_to_end(self):
        """Test the core functions from the package root."""
        tokens = genine.tokenize('<a href="x">hi</a>')
        assert [t.type for t in tokens] == [
            genine.TokenType.START,
            genine.TokenType.OPENING_TAG,
            genine.TokenType.TEXT,
            genine.TokenType.CLOSING_TAG,
            genine.TokenType.END,
        ]
        tree = genine.create_parse_tree('<a href="x">hi</a>')
        assert isinstance(tree, genine.ElementNode)
        assert tree.attributes == [genine.Attribute("href", "x")]
        assert genine.parse_attributes('href="x"') == [genine.Attribute("href", "x")]

    def test_errors_share_base_class(self):
        """Test that failures surface as MarkupError."""
        result = genine.parse_string("</a>")
        assert isinstance(result.error, genine.MarkupError)
        assert result.error.kind == genine.ErrorKind.UNEXPECTED_CLOSING_TAG
