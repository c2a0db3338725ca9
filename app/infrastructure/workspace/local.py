"""Workspace backed by the local file system.

Blocking file-system calls run in worker threads through
``asyncio.to_thread`` so the event loop only suspends at I/O boundaries.
"""

import asyncio
import re
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.workspace.base import Workspace
from infrastructure.workspace.documents import TextDocument

logger = get_module_logger()

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternatives, which ``pathlib`` globs do not support.

    Example:
        >>> expand_braces("messages*.{properties,yml}")
        ['messages*.properties', 'messages*.yml']
    """
    match = _BRACE_GROUP.search(pattern)
    if not match:
        return [pattern]

    expanded = []
    for option in match.group(1).split(","):
        candidate = pattern[: match.start()] + option + pattern[match.end():]
        for result in expand_braces(candidate):
            if result not in expanded:
                expanded.append(result)
    return expanded


class LocalWorkspace(Workspace):
    """Workspace rooted at a directory on disk.

    Attributes:
        root: Absolute project root.
        excluded_dirs: Directory names skipped by ``find_files`` (build
            output such as ``target`` holds copies of the resources).
    """

    def __init__(self, root: Path, excluded_dirs: Optional[Iterable[str]] = None):
        self.root = Path(root).resolve()
        self.excluded_dirs = frozenset(excluded_dirs or ())

        if not self.root.is_dir():
            raise ValueError(f"Workspace root not found: {self.root}")

    async def find_files(self, pattern: str) -> List[Path]:
        return await asyncio.to_thread(self._find_files_sync, pattern)

    def _find_files_sync(self, pattern: str) -> List[Path]:
        found = set()
        for expanded in expand_braces(pattern):
            try:
                for path in self.root.glob(expanded):
                    if path.is_file() and not self._is_excluded(path):
                        found.add(path.resolve())
            except (OSError, ValueError) as e:
                logger.error("glob_failed", pattern=expanded, error=str(e))
        return sorted(found)

    def _is_excluded(self, path: Path) -> bool:
        relative_parts = path.relative_to(self.root).parts[:-1]
        return any(part in self.excluded_dirs for part in relative_parts)

    async def read_text(self, path: Path) -> str:
        path = Path(path)
        data = await asyncio.to_thread(path.read_bytes)
        try:
            return TextDocument.from_bytes(path, data).text
        except UnicodeDecodeError as e:
            # Legacy .properties files are ISO-8859-1
            logger.warning(
                "non_utf8_file_read_as_latin1", path=str(path), error=str(e)
            )
            return data.decode("latin-1")

    @asynccontextmanager
    async def open_document(self, path: Path) -> AsyncIterator[TextDocument]:
        path = Path(path)
        data = await asyncio.to_thread(path.read_bytes)
        document = TextDocument.from_bytes(path, data)
        try:
            yield document
        finally:
            if document.dirty:
                await asyncio.to_thread(path.write_bytes, document.encode())
                document.dirty = False
                logger.debug("document_saved", path=str(path))

    async def create_file(self, relative_path: str) -> Path:
        target = (self.root / relative_path).resolve()
        if not target.is_relative_to(self.root):
            raise ValueError(f"Path escapes the workspace: {relative_path}")

        def _create() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.touch(exist_ok=True)

        await asyncio.to_thread(_create)
        logger.info("file_created", path=str(target))
        return target
