"""In-memory text documents with span edits.

A ``TextDocument`` is the unit the write-back code edits: it holds the full
decoded text of one file, applies offset-based edits to it and remembers
whether it needs to be flushed. Files are UTF-8; a byte order mark present
on disk is kept on save.
"""

from pathlib import Path

UTF8_BOM = b"\xef\xbb\xbf"


class TextDocument:
    """Decoded contents of one file plus edit bookkeeping.

    Attributes:
        path: File the document was read from and is saved to.
        has_bom: Whether the file started with a UTF-8 byte order mark.
        dirty: True once an edit changed the text.
    """

    def __init__(self, path: Path, text: str, has_bom: bool = False):
        self.path = path
        self.has_bom = has_bom
        self.dirty = False
        self._text = text

    @classmethod
    def from_bytes(cls, path: Path, data: bytes) -> "TextDocument":
        """Decode raw file contents.

        Raises:
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        has_bom = data.startswith(UTF8_BOM)
        if has_bom:
            data = data[len(UTF8_BOM):]
        return cls(path, data.decode("utf-8"), has_bom=has_bom)

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_ending(self) -> str:
        """Line ending style of the document, ``\\n`` when it has none."""
        return "\r\n" if "\r\n" in self._text else "\n"

    def replace(self, start: int, end: int, new_text: str) -> None:
        """Replace ``text[start:end]`` with ``new_text``."""
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(
                f"Invalid span {start}:{end} for document of length {len(self._text)}"
            )
        if self._text[start:end] == new_text:
            return
        self._text = self._text[:start] + new_text + self._text[end:]
        self.dirty = True

    def insert(self, offset: int, new_text: str) -> None:
        self.replace(offset, offset, new_text)

    def delete(self, start: int, end: int) -> None:
        self.replace(start, end, "")

    def set_text(self, new_text: str) -> None:
        """Replace the whole document."""
        self.replace(0, len(self._text), new_text)

    def encode(self) -> bytes:
        data = self._text.encode("utf-8")
        return UTF8_BOM + data if self.has_bom else data
