"""In-place edits of ``.properties`` files.

Only the entries of the edited key are touched; comments, ordering, other
entries and line endings stay byte-identical.
"""

import re
from dataclasses import dataclass
from typing import Optional, Set

from infrastructure.i18n.loader import escape_key, escape_value, has_continuation
from infrastructure.workspace import TextDocument


@dataclass(frozen=True)
class FlatEntrySpan:
    """Offsets of one logical ``key=value`` entry.

    Attributes:
        start: Start of the entry's first line.
        value_start: First character of the value.
        value_end: End of the value, continuation lines included.
        end: End of the entry including its final line break.
    """

    start: int
    value_start: int
    value_end: int
    end: int


def _entry_pattern(key: str) -> "re.Pattern[str]":
    return re.compile(
        rf"^[ \t\f]*{re.escape(key)}[ \t\f]*[=:][ \t\f]*([^\r\n]*)(?=\r?\n|\Z)",
        re.MULTILINE,
    )


def _line_break_length(text: str, offset: int) -> int:
    if text.startswith("\r\n", offset):
        return 2
    if text.startswith("\n", offset):
        return 1
    return 0


def _line_end(text: str, offset: int) -> int:
    match = re.compile(r"\r?\n").search(text, offset)
    return match.start() if match else len(text)


def _entry_line_starts(text: str) -> Set[int]:
    """Offsets of the physical lines that begin a logical entry.

    Lines inside a continued value, comments and blank lines are left out.
    """
    starts = set()
    offset = 0
    continued = False
    for raw_line in text.splitlines(keepends=True):
        line = raw_line.splitlines()[0].lstrip(" \t\f")
        if continued:
            continued = has_continuation(line)
        elif line and line[0] not in "#!":
            starts.add(offset)
            continued = has_continuation(line)
        offset += len(raw_line)
    return starts


def find_entry(text: str, key: str) -> Optional[FlatEntrySpan]:
    """Locate the first entry for ``key``, following continuation lines."""
    starts = _entry_line_starts(text)
    for match in _entry_pattern(key).finditer(text):
        if match.start() in starts:
            break
    else:
        return None

    value_end = match.end(1)
    line = match.group(1)
    while has_continuation(line):
        break_length = _line_break_length(text, value_end)
        if not break_length:
            break
        next_start = value_end + break_length
        next_end = _line_end(text, next_start)
        line = text[next_start:next_end]
        value_end = next_end

    end = value_end + _line_break_length(text, value_end)
    return FlatEntrySpan(
        start=match.start(), value_start=match.start(1), value_end=value_end, end=end
    )


def set_flat_value(document: TextDocument, key: str, value: str) -> bool:
    """Replace the value of ``key`` or append a new entry.

    Returns:
        True if an existing entry was updated, False if one was appended.
    """
    text = document.text
    span = find_entry(text, key)
    if span is not None:
        document.replace(span.value_start, span.value_end, escape_value(value))
        return True

    prefix = "" if not text or text.endswith("\n") else document.line_ending
    document.insert(len(text), f"{prefix}{escape_key(key)}={escape_value(value)}")
    return False


def delete_flat_key(document: TextDocument, key: str) -> bool:
    """Delete every logical entry of ``key``.

    Returns:
        True if at least one entry was found and removed.
    """
    deleted = False
    span = find_entry(document.text, key)
    while span is not None:
        document.delete(span.start, span.end)
        deleted = True
        span = find_entry(document.text, key)
    return deleted
