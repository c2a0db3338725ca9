"""Write-back of single translation edits to ``.properties`` and YAML files."""

from infrastructure.i18n.writeback.engine import WriteBackEngine
from infrastructure.i18n.writeback.flat import (
    FlatEntrySpan,
    delete_flat_key,
    find_entry,
    set_flat_value,
)
from infrastructure.i18n.writeback.tree import (
    delete_tree_key,
    locate_key_line,
    set_tree_value,
)

__all__ = [
    "WriteBackEngine",
    "FlatEntrySpan",
    "find_entry",
    "set_flat_value",
    "delete_flat_key",
    "locate_key_line",
    "delete_tree_key",
    "set_tree_value",
]
