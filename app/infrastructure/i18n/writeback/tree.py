"""Edits of YAML translation files.

Deletion works on lines so that comments and formatting elsewhere in the
file survive. Locating a key walks its segments with a small state machine
that tracks the expected indent; files indented with tabs or inconsistent
widths are not supported.

Writing a value re-serializes the whole document, which drops comments.
"""

from typing import List, Optional, Sequence

import yaml

from infrastructure.i18n.errors import TranslationParseError
from infrastructure.logging import get_module_logger
from infrastructure.workspace import TextDocument

logger = get_module_logger()


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _is_content(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def _starts_segment(content: str, segment: str) -> bool:
    return any(
        content.startswith(form + ":")
        for form in (segment, f'"{segment}"', f"'{segment}'")
    )


def _next_content_line(lines: Sequence[str], start: int) -> Optional[int]:
    for index in range(start, len(lines)):
        if _is_content(lines[index]):
            return index
    return None


def locate_key_line(lines: Sequence[str], segments: Sequence[str]) -> Optional[int]:
    """Index of the line defining the dotted key ``segments``.

    Args:
        lines: Document lines.
        segments: Key segments, e.g. ``["user", "login"]``.

    Returns:
        Line index, or None when a segment is missing at its level.
    """
    if not segments:
        return None

    depth = 0
    expected_indent = 0
    index = 0
    while index < len(lines):
        line = lines[index]
        if not _is_content(line):
            index += 1
            continue

        indent = _indent(line)
        if indent < expected_indent:
            return None
        if indent == expected_indent and _starts_segment(line.strip(), segments[depth]):
            if depth == len(segments) - 1:
                return index
            child = _next_content_line(lines, index + 1)
            if child is None or _indent(lines[child]) <= expected_indent:
                return None
            depth += 1
            expected_indent = _indent(lines[child])
            index = child
            continue
        index += 1
    return None


def block_end(lines: Sequence[str], key_line: int) -> int:
    """Index of the last line of the block opened at ``key_line``."""
    key_indent = _indent(lines[key_line])
    last = key_line
    for index in range(key_line + 1, len(lines)):
        line = lines[index]
        if not line.strip():
            continue
        if _indent(line) > key_indent:
            last = index
        else:
            break
    return last


def delete_tree_key(document: TextDocument, key: str) -> bool:
    """Delete ``key`` and its whole descendant block.

    Returns:
        True if the key was found and removed; the document is untouched
        otherwise.
    """
    lines: List[str] = document.text.splitlines(keepends=True)
    key_line = locate_key_line(lines, key.split("."))
    if key_line is None:
        return False

    last_line = block_end(lines, key_line)
    start = sum(len(line) for line in lines[:key_line])
    end = start + sum(len(line) for line in lines[key_line:last_line + 1])
    document.delete(start, end)
    return True


def set_tree_value(document: TextDocument, key: str, value: str, indent: int = 2) -> None:
    """Set ``key`` to ``value``, creating intermediate mappings.

    A non-mapping value found on the way is replaced by a mapping.

    Raises:
        TranslationParseError: If the document is not valid YAML or its top
            level node is not a mapping.
    """
    try:
        data = yaml.safe_load(document.text)
    except yaml.YAMLError as e:
        raise TranslationParseError(document.path, str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TranslationParseError(document.path, "top-level node is not a mapping")

    parts = key.split(".")
    current = data
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            if part in current:
                logger.warning("replaced_non_mapping_node", key=key, segment=part)
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value

    dumped = yaml.dump(
        data,
        indent=indent,
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        width=4096,
    )
    if document.line_ending != "\n":
        dumped = dumped.replace("\n", document.line_ending)
    document.set_text(dumped)
