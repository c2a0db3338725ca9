"""Workspace interface consumed by the translation engine.

Defines what the engine needs from its host: finding files by glob, reading
them, editing them through a scoped document and creating new ones.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import AsyncContextManager, List

from infrastructure.workspace.documents import TextDocument


class Workspace(ABC):
    """Abstract project workspace.

    Implementations must return absolute paths so that paths can be used as
    file identifiers and compared for equality.

    Attributes:
        root: Absolute project root directory.
    """

    root: Path

    @abstractmethod
    async def find_files(self, pattern: str) -> List[Path]:
        """Find all files under the root matching a glob.

        Args:
            pattern: Root-relative glob; supports ``**`` and ``{a,b}``.

        Returns:
            Sorted, de-duplicated absolute paths.
        """

    @abstractmethod
    async def read_text(self, path: Path) -> str:
        """Read a whole file as text.

        UTF-8 is expected; a file that is not valid UTF-8 is decoded as
        ISO-8859-1 so that legacy resource bundles stay readable.

        Raises:
            OSError: If the file cannot be read.
        """

    @abstractmethod
    def open_document(self, path: Path) -> AsyncContextManager[TextDocument]:
        """Acquire a document for editing.

        The document is flushed to disk when the context exits, on every exit
        path, if an edit changed it.
        """

    @abstractmethod
    async def create_file(self, relative_path: str) -> Path:
        """Create an empty file (and parent directories) under the root.

        An existing file is left as it is.

        Returns:
            Absolute path of the file.

        Raises:
            ValueError: If the path escapes the workspace root.
            OSError: If the file cannot be created.
        """
