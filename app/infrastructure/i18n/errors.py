"""Exceptions raised by the translation engine."""

from pathlib import Path


class TranslationParseError(ValueError):
    """A translation file could not be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to parse {path}: {reason}")
