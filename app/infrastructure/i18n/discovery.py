"""Translation file discovery across a project.

Finds translation files in priority order:

1. the configured discovery globs (resource root first, then anywhere);
2. basenames declared with ``spring.messages.basename`` in Spring
   application config files, looked up under the resource root.

The order of the returned files is the merge order, and therefore decides
which file owns a key defined more than once.
"""

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional

import yaml

from infrastructure.configuration.features.i18n import (
    TRANSLATION_EXTENSIONS,
    I18nSettings,
)
from infrastructure.i18n.models import FileFormat, locale_from_filename
from infrastructure.logging import get_module_logger
from infrastructure.workspace import Workspace

logger = get_module_logger()

BASENAME_PROPERTY = "spring.messages.basename"

_BASENAME_LINE = re.compile(
    r"^\s*spring\.messages\.basename\s*[=:]\s*(.*?)\s*$", re.MULTILINE
)


@dataclass(frozen=True)
class DiscoveredFile:
    """A translation file and how it was found.

    Attributes:
        path: Absolute file path.
        locale: Locale derived from the file name.
        format: Backing format derived from the extension.
        origin: Glob (or basename) that found the file.
    """

    path: Path
    locale: str
    format: FileFormat
    origin: str


def split_basenames(value: Any) -> List[str]:
    """Turn a ``spring.messages.basename`` value into lookup paths.

    Example:
        >>> split_basenames("classpath:i18n/messages, errors")
        ['i18n/messages', 'errors']
    """
    if isinstance(value, (list, tuple)):
        raw_items = [str(item) for item in value]
    elif value is None:
        return []
    else:
        raw_items = str(value).split(",")

    basenames = []
    for item in raw_items:
        item = item.strip().strip("\"'")
        if item.startswith("classpath:"):
            item = item[len("classpath:"):]
        item = item.strip("/").replace(".", "/")
        if item and item not in basenames:
            basenames.append(item)
    return basenames


def _lookup_nested(document: Any, dotted: str) -> Any:
    if not isinstance(document, dict):
        return None
    if dotted in document:
        return document[dotted]
    head, _, rest = dotted.partition(".")
    if not rest:
        return document.get(head)
    # Spring relaxed binding also allows partially dotted keys
    for key, value in document.items():
        if isinstance(key, str) and dotted.startswith(key + "."):
            found = _lookup_nested(value, dotted[len(key) + 1:])
            if found is not None:
                return found
    return None


def basenames_from_config(text: str, path: Path) -> List[str]:
    """Basenames declared by one application config file.

    ``.properties`` files are scanned line by line. YAML files are parsed
    (every ``---`` document) and searched for the nested or dotted key.

    Raises:
        yaml.YAMLError: If a YAML config file cannot be parsed.
    """
    if Path(path).suffix == ".properties":
        match = _BASENAME_LINE.search(text)
        return split_basenames(match.group(1)) if match else []

    basenames: List[str] = []
    for document in yaml.safe_load_all(text):
        for basename in split_basenames(_lookup_nested(document, BASENAME_PROPERTY)):
            if basename not in basenames:
                basenames.append(basename)
    return basenames


class TranslationDiscovery:
    """Finds the translation files of a workspace in merge order.

    Attributes:
        workspace: Workspace to search.
        settings: Discovery configuration.
    """

    def __init__(self, workspace: Workspace, settings: I18nSettings):
        self.workspace = workspace
        self.settings = settings

    async def discover(self) -> List[DiscoveredFile]:
        """Find every translation file, each path once, in priority order."""
        seen = set()
        discovered: List[DiscoveredFile] = []

        def _collect(paths: Iterable[Path], origin: str) -> None:
            for path in paths:
                if path in seen:
                    continue
                found = self._classify(path, origin)
                if found is not None:
                    seen.add(path)
                    discovered.append(found)

        globs = self.settings.resolved_discovery_globs()
        # Globs are searched concurrently, results are joined in glob order
        results = await asyncio.gather(*(self._find(pattern) for pattern in globs))
        for pattern, paths in zip(globs, results):
            _collect(paths, pattern)

        for basename in await self.configured_basenames():
            pattern = f"{self.settings.resource_root}/{basename}*.{TRANSLATION_EXTENSIONS}"
            _collect(await self._find(pattern), pattern)

        logger.info("discovered_translation_files", file_count=len(discovered))
        return discovered

    async def configured_basenames(self) -> List[str]:
        """Basenames declared across all Spring application config files."""
        basenames: List[str] = []
        config_files = await self._find(self.settings.application_config_glob)
        for config_file in config_files:
            try:
                text = await self.workspace.read_text(config_file)
                found = basenames_from_config(text, config_file)
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
                logger.error(
                    "application_config_parse_failed",
                    file=str(config_file),
                    error=str(e),
                )
                continue
            for basename in found:
                if basename not in basenames:
                    basenames.append(basename)

        if basenames:
            logger.info("configured_basenames_found", basenames=basenames)
        return basenames

    async def _find(self, pattern: str) -> List[Path]:
        try:
            return await self.workspace.find_files(pattern)
        except (OSError, ValueError) as e:
            logger.error("file_discovery_failed", pattern=pattern, error=str(e))
            return []

    def _classify(self, path: Path, origin: str) -> Optional[DiscoveredFile]:
        locale = locale_from_filename(path.name)
        file_format = FileFormat.from_path(path)
        if locale is None or file_format is None:
            return None
        return DiscoveredFile(path=path, locale=locale, format=file_format, origin=origin)
