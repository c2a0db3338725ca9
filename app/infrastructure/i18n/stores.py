"""Per-locale translation stores and the project-wide index snapshot.

A store holds the translations of one locale, in one format, along with the
file that owns each key. Two variants share the ``TranslationStore``
interface: ``FlatStore`` for ``.properties`` files and ``TreeStore`` for
YAML files.
"""

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from infrastructure.i18n.loader import iter_leaf_keys, scalar_text
from infrastructure.i18n.models import FileFormat
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class TranslationStore(ABC):
    """Translations of one locale.

    The first file that introduces a key owns it; a later file never takes
    over the attribution of a key that is already present.

    Attributes:
        locale: Locale this store is for.
        key_source: Key to owning file.
        files: Files merged into this store, in merge order.
    """

    format: FileFormat

    def __init__(self, locale: str):
        self.locale = locale
        self.key_source: Dict[str, Path] = {}
        self.files: List[Path] = []

    @abstractmethod
    def lookup(self, key: str) -> Optional[str]:
        """Value of ``key``, or None when absent."""
        pass

    @abstractmethod
    def all_keys(self) -> Iterable[str]:
        """Every key of the store."""
        pass

    @abstractmethod
    def merge(self, path: Path, data: Dict[str, Any]) -> int:
        """Merge the parsed contents of ``path`` into the store.

        Returns:
            Number of keys attributed to ``path``.
        """
        pass

    def source_of(self, key: str) -> Optional[Path]:
        return self.key_source.get(key)

    def accepts(self, file_format: FileFormat) -> bool:
        return file_format is self.format

    def __len__(self) -> int:
        return len(self.key_source)


class FlatStore(TranslationStore):
    """Store backed by ``.properties`` files.

    Attributes:
        entries: Key to value; always holds the same keys as ``key_source``.
    """

    format = FileFormat.FLAT

    def __init__(self, locale: str):
        super().__init__(locale)
        self.entries: Dict[str, str] = {}

    def lookup(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def all_keys(self) -> Iterable[str]:
        return self.entries.keys()

    def append(self, path: Path, entries: Mapping[str, str]) -> int:
        """Add the keys of another file; existing keys keep value and owner."""
        self.files.append(path)
        added = 0
        for key, value in entries.items():
            if key in self.entries:
                continue
            self.entries[key] = value
            self.key_source[key] = path
            added += 1
        return added

    def merge(self, path: Path, data: Dict[str, Any]) -> int:
        return self.append(path, data)


def deep_merge(
    target: Dict[str, Any],
    source: Dict[str, Any],
    overwrite_leaves: bool = False,
    prefix: str = "",
) -> List[str]:
    """Merge ``source`` into ``target`` in place, structure first.

    Mappings present on both sides are merged key-wise. A key only in
    ``source`` is copied over. A mapping is never replaced by a scalar or a
    scalar by a mapping. Two scalars keep the target value unless
    ``overwrite_leaves`` is set.

    Returns:
        Dotted paths of the leaves taken from ``source``.
    """
    adopted: List[str] = []
    for key, value in source.items():
        path = f"{prefix}.{key}" if prefix else key
        if key not in target:
            target[key] = copy.deepcopy(value)
            if isinstance(value, dict):
                adopted.extend(iter_leaf_keys(value, path))
            else:
                adopted.append(path)
            continue

        existing = target[key]
        if isinstance(existing, dict) and isinstance(value, dict):
            adopted.extend(deep_merge(existing, value, overwrite_leaves, path))
        elif isinstance(existing, dict) or isinstance(value, dict):
            logger.warning("tree_merge_conflict", key=path)
        elif overwrite_leaves:
            target[key] = copy.deepcopy(value)
            adopted.append(path)
    return adopted


class TreeStore(TranslationStore):
    """Store backed by YAML files.

    ``key_source`` holds exactly the leaf paths of ``root``.

    Attributes:
        root: Deep-merged mapping of every file of the locale.
        overwrite_leaves: Whether later files overwrite existing scalars.
    """

    format = FileFormat.TREE

    def __init__(self, locale: str, overwrite_leaves: bool = False):
        super().__init__(locale)
        self.root: Dict[str, Any] = {}
        self.overwrite_leaves = overwrite_leaves

    def lookup(self, key: str) -> Optional[str]:
        current: Any = self.root
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return scalar_text(current)

    def all_keys(self) -> Iterable[str]:
        return iter_leaf_keys(self.root)

    def flatten(self) -> Dict[str, str]:
        """Dotted key to text for every resolvable leaf."""
        flat = {}
        for key in self.all_keys():
            value = self.lookup(key)
            if value is not None:
                flat[key] = value
        return flat

    def merge(self, path: Path, data: Dict[str, Any]) -> int:
        self.files.append(path)
        adopted = deep_merge(self.root, data, self.overwrite_leaves)
        for key in adopted:
            self.key_source[key] = path
        return len(adopted)


def create_store(
    locale: str, file_format: FileFormat, overwrite_leaves: bool = False
) -> TranslationStore:
    """Empty store of the given format."""
    if file_format is FileFormat.FLAT:
        return FlatStore(locale)
    return TreeStore(locale, overwrite_leaves=overwrite_leaves)


@dataclass(frozen=True)
class TranslationIndex:
    """Immutable snapshot of every locale's store.

    Replaced as a whole on reload; never mutated once published.

    Attributes:
        stores: Locale to store.
        files: Every file loaded into the snapshot, in load order.
        generation: Reload generation that produced the snapshot.
    """

    stores: Mapping[str, TranslationStore] = field(default_factory=dict)
    files: Tuple[Path, ...] = ()
    generation: int = 0

    def get(self, locale: str) -> Optional[TranslationStore]:
        return self.stores.get(locale)

    @property
    def locales(self) -> List[str]:
        return sorted(self.stores)
