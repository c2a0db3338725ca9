"""Project workspace access for the translation engine.

- base: Workspace interface (find, read, scoped documents, create)
- local: LocalWorkspace over the file system
- documents: TextDocument with span edits
- prompts: Prompter interface and the non-interactive DeclinePrompter
"""

from infrastructure.workspace.base import Workspace
from infrastructure.workspace.documents import UTF8_BOM, TextDocument
from infrastructure.workspace.local import LocalWorkspace, expand_braces
from infrastructure.workspace.prompts import DeclinePrompter, Prompter

__all__ = [
    "Workspace",
    "LocalWorkspace",
    "TextDocument",
    "UTF8_BOM",
    "Prompter",
    "DeclinePrompter",
    "expand_braces",
]
