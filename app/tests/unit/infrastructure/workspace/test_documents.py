"""Unit tests for infrastructure.workspace.documents module."""

from pathlib import Path

import pytest

from infrastructure.workspace import UTF8_BOM, TextDocument

pytestmark = pytest.mark.unit


def make_document(text: str) -> TextDocument:
    return TextDocument(Path("messages.properties"), text)


class TestTextDocument:
    """Tests for TextDocument."""

    def test_from_bytes_strips_bom(self):
        """A BOM is remembered and not part of the text."""
        document = TextDocument.from_bytes(Path("a"), UTF8_BOM + "키=값".encode("utf-8"))

        assert document.text == "키=값"
        assert document.has_bom
        assert document.encode() == UTF8_BOM + "키=값".encode("utf-8")

    def test_from_bytes_without_bom(self):
        """Plain UTF-8 round-trips unchanged."""
        document = TextDocument.from_bytes(Path("a"), b"a=1\n")
        assert not document.has_bom
        assert document.encode() == b"a=1\n"

    def test_invalid_utf8(self):
        """Undecodable files raise UnicodeDecodeError."""
        with pytest.raises(UnicodeDecodeError):
            TextDocument.from_bytes(Path("a"), b"\xff\xfe")

    def test_replace_marks_dirty(self):
        """A changing edit sets dirty."""
        document = make_document("a=1\n")
        document.replace(2, 3, "22")

        assert document.text == "a=22\n"
        assert document.dirty

    def test_noop_replace_keeps_clean(self):
        """Replacing text with itself is not an edit."""
        document = make_document("a=1\n")
        document.replace(2, 3, "1")
        assert not document.dirty

    @pytest.mark.parametrize("start,end", [(-1, 2), (3, 2), (0, 99)])
    def test_invalid_span(self, start, end):
        """Spans outside the text are rejected."""
        with pytest.raises(ValueError):
            make_document("a=1\n").replace(start, end, "x")

    def test_insert_delete_set_text(self):
        """Convenience edits are span replacements."""
        document = make_document("a=1\n")
        document.insert(4, "b=2\n")
        assert document.text == "a=1\nb=2\n"

        document.delete(0, 4)
        assert document.text == "b=2\n"

        document.set_text("")
        assert document.text == ""

    @pytest.mark.parametrize(
        "text,expected", [("a=1\r\nb=2\r\n", "\r\n"), ("a=1\nb=2\n", "\n"), ("", "\n")]
    )
    def test_line_ending(self, text, expected):
        """The document's line ending style is detected."""
        assert make_document(text).line_ending == expected
