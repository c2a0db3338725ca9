"""Translation file parsing.

Defines the loader contract and the two formats found in Spring projects:
``.properties`` files (flat ``key=value`` lines) and YAML files (nested
mappings flattened to dotted keys on read).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, List, Tuple

import yaml

from infrastructure.i18n.errors import TranslationParseError
from infrastructure.i18n.models import FileFormat
from infrastructure.logging import get_module_logger

logger = get_module_logger()

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class TranslationLoader(ABC):
    """Abstract base for translation file parsers.

    Implementations turn the text of one file into the structure stored by
    the matching translation store.
    """

    format: FileFormat

    @abstractmethod
    def parse(self, text: str, path: Path) -> Dict[str, Any]:
        """Parse the text of a translation file.

        Args:
            text: Full file contents.
            path: Source file (for error reporting).

        Returns:
            Parsed translations.

        Raises:
            TranslationParseError: If the text is not a valid file of this
                format.
        """
        pass


def has_continuation(line: str) -> bool:
    """True when a line ends with an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _unescape(text: str) -> str:
    result = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 == len(text):
            result.append(char)
            i += 1
            continue
        escaped = text[i + 1]
        if escaped == "u":
            digits = text[i + 2:i + 6]
            try:
                if len(digits) != 4:
                    raise ValueError(digits)
                result.append(chr(int(digits, 16)))
                i += 6
                continue
            except ValueError:
                # Lenient: keep a malformed \u escape as written
                result.append("\\u")
                i += 2
                continue
        result.append(_ESCAPES.get(escaped, escaped))
        i += 2
    return "".join(result)


def _logical_lines(text: str) -> Iterator[str]:
    pending = None
    for raw_line in text.splitlines():
        line = raw_line.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue
        if has_continuation(line):
            pending = (pending or "") + line[:-1]
            continue
        yield (pending or "") + line
        pending = None
    if pending is not None:
        yield pending


def _split_entry(line: str) -> Tuple[str, str]:
    key_end = len(line)
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            key_end = i
            break
        i += 1

    rest = line[key_end:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return line[:key_end], rest


def parse_properties(text: str) -> Dict[str, str]:
    """Parse ``.properties`` text with Java ``Properties.load`` rules.

    Comment lines start with ``#`` or ``!``; keys end at an unescaped ``=``,
    ``:`` or whitespace; a trailing odd backslash continues the value on the
    next line; ``\\uXXXX`` and the usual character escapes are decoded.
    A key defined twice keeps its first value, the entry write-back edits.
    """
    entries: Dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        entries.setdefault(_unescape(raw_key), _unescape(raw_value))
    return entries


def escape_value(value: str) -> str:
    """Escape a value so that ``parse_properties`` reads it back unchanged."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\f", "\\f")
    )
    stripped = escaped.lstrip(" ")
    return "\\ " * (len(escaped) - len(stripped)) + stripped


def escape_key(key: str) -> str:
    escaped = escape_value(key)
    for char in "=: ":
        escaped = escaped.replace(char, "\\" + char)
    if escaped[:1] in ("#", "!"):
        escaped = "\\" + escaped
    return escaped


def normalize_tree(node: Dict[Any, Any]) -> Dict[str, Any]:
    """Copy a parsed YAML mapping with every key turned into a string."""
    normalized: Dict[str, Any] = {}
    for key, value in node.items():
        if isinstance(value, dict):
            value = normalize_tree(value)
        normalized[str(key)] = value
    return normalized


def iter_leaf_keys(node: Dict[str, Any], prefix: str = "") -> Iterator[str]:
    """Dotted paths of every non-mapping value, depth first."""
    for key, value in node.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            yield from iter_leaf_keys(value, full_key)
        else:
            yield full_key


def scalar_text(value: Any) -> Any:
    """Text of a resolvable leaf: strings and numbers only."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class PropertiesLoader(TranslationLoader):
    """Loader for flat ``.properties`` files."""

    format = FileFormat.FLAT

    def parse(self, text: str, path: Path) -> Dict[str, str]:
        entries = parse_properties(text)
        logger.debug("parsed_properties", file=str(path), key_count=len(entries))
        return entries


class YAMLTreeLoader(TranslationLoader):
    """Loader for nested YAML files.

    An empty document is an empty mapping; any other non-mapping top level
    node is rejected.
    """

    format = FileFormat.TREE

    def parse(self, text: str, path: Path) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise TranslationParseError(path, str(e)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning("invalid_yaml_format", file=str(path), expected="dict")
            raise TranslationParseError(path, "top-level node is not a mapping")
        return normalize_tree(data)


_LOADERS: List[TranslationLoader] = [PropertiesLoader(), YAMLTreeLoader()]


def get_loader(file_format: FileFormat) -> TranslationLoader:
    """Loader for a file format."""
    for loader in _LOADERS:
        if loader.format is file_format:
            return loader
    raise ValueError(f"No loader for format {file_format}")
