"""Write-back engine: applies single-key edits to translation files."""

from pathlib import Path
from typing import Optional

from infrastructure.configuration.features.i18n import I18nSettings
from infrastructure.i18n.models import FileFormat
from infrastructure.i18n.writeback.flat import delete_flat_key, set_flat_value
from infrastructure.i18n.writeback.tree import delete_tree_key, set_tree_value
from infrastructure.logging import get_module_logger
from infrastructure.workspace import Prompter, Workspace

logger = get_module_logger()

CREATE_PROPERTIES = "Yes (properties)"
CREATE_YAML = "Yes (yaml)"
CREATE_DECLINE = "No"


def _format_of(path: Path) -> FileFormat:
    file_format = FileFormat.from_path(path)
    if file_format is None:
        raise ValueError(f"Not a translation file: {path}")
    return file_format


class WriteBackEngine:
    """Mutates exactly one key's region in one file.

    ``.properties`` edits are lossless. YAML deletions are line based and
    keep the rest of the file; YAML value writes re-serialize the document.

    Attributes:
        workspace: Workspace providing scoped documents.
        settings: Resource root and YAML indent configuration.
    """

    def __init__(self, workspace: Workspace, settings: I18nSettings):
        self.workspace = workspace
        self.settings = settings

    async def write(self, path: Path, key: str, value: str) -> None:
        """Set ``key`` to ``value`` in ``path``, adding the key if missing.

        Raises:
            TranslationParseError: If a YAML file cannot be parsed.
            OSError: If the file cannot be read or written.
        """
        file_format = _format_of(path)
        async with self.workspace.open_document(path) as document:
            if file_format is FileFormat.FLAT:
                updated = set_flat_value(document, key, value)
            else:
                updated = None
                set_tree_value(document, key, value, indent=self.settings.yaml_indent)

        logger.info(
            "translation_written",
            file=str(path),
            key=key,
            format=file_format.value,
            updated=updated,
        )

    async def delete_key(self, path: Path, key: str) -> bool:
        """Remove ``key`` (and for YAML its descendant block) from ``path``.

        Returns:
            True if the key was removed. A key that cannot be located is
            logged and the file left untouched.

        Raises:
            OSError: If the file cannot be read or written.
        """
        file_format = _format_of(path)
        async with self.workspace.open_document(path) as document:
            if file_format is FileFormat.FLAT:
                deleted = delete_flat_key(document, key)
            else:
                deleted = delete_tree_key(document, key)

        if not deleted:
            logger.warning("key_not_found_for_delete", file=str(path), key=key)
            return False
        logger.info("translation_deleted", file=str(path), key=key)
        return True

    async def create_locale_file(self, locale: str, prompter: Prompter) -> Optional[Path]:
        """Ask whether and where to create a translation file for ``locale``.

        Returns:
            The created file, or None when the user declined or creation
            failed (failures are reported through the prompter).
        """
        choice = await prompter.choose(
            f"Translation file for locale '{locale}' not found. Create a new file?",
            [CREATE_PROPERTIES, CREATE_YAML, CREATE_DECLINE],
        )
        if not choice or choice == CREATE_DECLINE:
            logger.info("file_creation_declined", locale=locale)
            return None

        file_format = FileFormat.TREE if choice == CREATE_YAML else FileFormat.FLAT
        default_path = (
            f"{self.settings.resource_root}/messages_{locale}.{file_format.extension}"
        )
        relative_path = await prompter.ask_text(
            "Enter file path to create", default=default_path
        )
        if not relative_path or not relative_path.strip():
            logger.info("file_creation_declined", locale=locale)
            return None

        try:
            return await self.workspace.create_file(relative_path.strip())
        except (OSError, ValueError) as e:
            logger.error(
                "file_creation_failed",
                locale=locale,
                path=relative_path,
                error=str(e),
            )
            await prompter.show_error(f"Failed to create file: {e}")
            return None
