"""Translation models for the i18n resolution engine.

Defines keys, locales, file formats and key matches.
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

DEFAULT_LOCALE = "default"

KEY_SEGMENT_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")

# messages_ko.properties, messages_en_US.yml
_LOCALE_SUFFIX_PATTERN = re.compile(
    r"_([a-zA-Z]{2,3}(?:_[a-zA-Z]{2})?)\.(properties|yml|yaml)$"
)


class FileFormat(str, Enum):
    """Backing format of a translation file."""

    FLAT = "flat"
    TREE = "tree"

    @classmethod
    def from_path(cls, path: Path) -> Optional["FileFormat"]:
        """Detect the format from a file extension.

        Returns:
            The format, or None for files that are not translation files.
        """
        suffix = Path(path).suffix.lower()
        if suffix == ".properties":
            return cls.FLAT
        if suffix in (".yml", ".yaml"):
            return cls.TREE
        return None

    @property
    def extension(self) -> str:
        """Extension used when creating a new file of this format."""
        return "properties" if self is FileFormat.FLAT else "yml"


def locale_from_filename(filename: str) -> Optional[str]:
    """Derive the locale of a translation file from its name.

    Args:
        filename: Base name such as ``messages_en_US.yml``.

    Returns:
        The locale (``en_US``), ``"default"`` for a translation file without
        a locale suffix, or None when the file is not a translation file.
    """
    match = _LOCALE_SUFFIX_PATTERN.search(filename)
    if match:
        return match.group(1)
    if FileFormat.from_path(Path(filename)) is not None:
        return DEFAULT_LOCALE
    return None


@dataclass(frozen=True)
class TranslationKey:
    """Dot-separated, case-sensitive translation key.

    Frozen to ensure immutability and hashability. Renaming a key is modeled
    as deleting the old key and creating the new one.

    Attributes:
        segments: Key parts, e.g. ``("user", "login", "title")``.
    """

    segments: Tuple[str, ...]

    def __str__(self) -> str:
        return ".".join(self.segments)

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Parse a dotted key.

        Raises:
            ValueError: If a segment is empty or contains characters outside
                ``[a-zA-Z0-9_]``.
        """
        segments = tuple(key_string.split("."))
        for segment in segments:
            if not KEY_SEGMENT_PATTERN.fullmatch(segment):
                raise ValueError(f"Invalid translation key: {key_string!r}")
        return cls(segments=segments)

    @property
    def group_path(self) -> Tuple[str, ...]:
        """Segments minus the last; used for grouping and YAML nesting."""
        return self.segments[:-1]

    @property
    def leaf(self) -> str:
        return self.segments[-1]


@dataclass(frozen=True)
class KeyMatch:
    """One key occurrence in a text buffer.

    Attributes:
        key: The matched key text.
        start: Offset of the first character of the whole match.
        end: Offset one past the last character of the whole match.
    """

    key: str
    start: int
    end: int

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


@dataclass(frozen=True)
class ResolvedTranslation:
    """A key's value in one locale and the file it came from."""

    locale: str
    value: str
    source: Optional[Path]
