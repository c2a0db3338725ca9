"""Key matcher: finds i18n keys in a text buffer.

Pure text scanning; translation lookups happen elsewhere.
"""

import re
from typing import Iterable, Iterator, Optional

from infrastructure.configuration.features.i18n import DEFAULT_KEY_REGEX
from infrastructure.i18n.models import KeyMatch
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Used when a user supplied pattern does not compile: only quoted keys.
FALLBACK_KEY_REGEX = r'"([a-zA-Z0-9_]+(?:\.[a-zA-Z0-9_]+)+)"'


def compile_key_pattern(raw_pattern: Optional[str]) -> "re.Pattern[str]":
    """Compile a key pattern, falling back instead of raising.

    Args:
        raw_pattern: User pattern; empty or None means the default pattern.

    Returns:
        The compiled pattern, or the quoted-key fallback pattern when
        ``raw_pattern`` is invalid.
    """
    try:
        return re.compile(raw_pattern or DEFAULT_KEY_REGEX)
    except re.error as e:
        logger.warning("invalid_key_regex", pattern=raw_pattern, error=str(e))
        return re.compile(FALLBACK_KEY_REGEX)


class _MatchIterable:
    """Restartable view over the matches of one buffer."""

    def __init__(self, pattern: "re.Pattern[str]", text: str):
        self._pattern = pattern
        self._text = text

    def __iter__(self) -> Iterator[KeyMatch]:
        for match in self._pattern.finditer(self._text):
            if match.end() == match.start():
                continue
            key = match.group(1) if self._pattern.groups and match.group(1) else match.group(0)
            yield KeyMatch(key=key, start=match.start(), end=match.end())


class KeyMatcher:
    """Applies the configured key pattern to text.

    Attributes:
        pattern: Compiled pattern in use.
    """

    def __init__(self, pattern: Optional[str] = None):
        self.pattern = compile_key_pattern(pattern)

    def matches(self, text: str) -> Iterable[KeyMatch]:
        """All key occurrences, left to right, non-overlapping.

        The result is lazy and can be iterated more than once.
        """
        return _MatchIterable(self.pattern, text)

    def match_at(self, text: str, offset: int) -> Optional[KeyMatch]:
        """The key occurrence covering ``offset``, if any."""
        for match in self.matches(text):
            if match.start > offset:
                break
            if match.contains(offset):
                return match
        return None
