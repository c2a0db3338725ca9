"""Resolution engine: the project-wide translation index.

Discovers translation files, builds one store per locale, answers
key/locale lookups and routes edits to the write-back engine. The engine is
an explicit object owned by the application's composition root (see
``factory.create_engine``); collaborators receive it rather than reaching a
global.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from infrastructure.configuration.features.i18n import I18nSettings
from infrastructure.events import EventEmitter
from infrastructure.i18n.discovery import DiscoveredFile, TranslationDiscovery
from infrastructure.i18n.errors import TranslationParseError
from infrastructure.i18n.loader import get_loader
from infrastructure.i18n.models import TranslationKey
from infrastructure.i18n.stores import TranslationIndex, TranslationStore, create_store
from infrastructure.i18n.writeback import WriteBackEngine
from infrastructure.logging import bind_operation_context, get_module_logger
from infrastructure.workspace import DeclinePrompter, Prompter, Workspace

logger = get_module_logger()

INDEX_RELOADED = "i18n.index.reloaded"


class ResolutionEngine:
    """Locale-keyed translation index with lookups and edits.

    Reads never see a partially built index: ``reload`` builds a new
    ``TranslationIndex`` privately and publishes it with one assignment.

    Attributes:
        workspace: Project workspace.
        settings: Translation settings.
        prompter: Used when a write needs a new file.
        writer: Write-back engine for single-key edits.
        discovery: Translation file discovery.
        on_change: Fired once after every published reload.
    """

    def __init__(
        self,
        workspace: Workspace,
        settings: I18nSettings,
        prompter: Optional[Prompter] = None,
        writer: Optional[WriteBackEngine] = None,
    ):
        self.workspace = workspace
        self.settings = settings
        self.prompter = prompter or DeclinePrompter()
        self.writer = writer or WriteBackEngine(workspace, settings)
        self.discovery = TranslationDiscovery(workspace, settings)
        self.on_change = EventEmitter(INDEX_RELOADED)
        self._index = TranslationIndex()
        self._generation = 0
        self._in_flight: Set[int] = set()
        self._pending: Optional[TranslationIndex] = None

    @property
    def index(self) -> TranslationIndex:
        """Currently published snapshot."""
        return self._index

    async def reload(self) -> bool:
        """Rebuild the index from the files on disk.

        Never raises: unreadable or malformed files are logged and skipped.
        Overlapping reloads publish in generation order. A finished index is
        held back while a newer reload is still running and dropped once a
        newer one is published; if every newer reload fails, the held index
        is published instead.

        Returns:
            True if the index built by this call was published.
        """
        self._generation += 1
        generation = self._generation
        self._in_flight.add(generation)

        with bind_operation_context(operation="reload", generation=generation):
            index = None
            try:
                index = await self._build_index(generation)
            except Exception as e:
                logger.exception("reload_failed", error=str(e))
            finally:
                self._in_flight.discard(generation)

            published = self._publish(index)
            if index is not None and index not in (published, self._pending):
                logger.info("reload_superseded", latest_generation=self._generation)

        if published is not None:
            self.on_change.fire(
                locale_count=len(published.stores), file_count=len(published.files)
            )
        return index is not None and published is index

    def _publish(self, index: Optional[TranslationIndex]) -> Optional[TranslationIndex]:
        """Publish the newest finished index no running reload can replace."""
        candidate = self._pending
        if index is not None and (
            candidate is None or index.generation > candidate.generation
        ):
            candidate = index

        if candidate is None or candidate.generation <= self._index.generation:
            self._pending = None
            return None
        if any(running > candidate.generation for running in self._in_flight):
            self._pending = candidate
            return None

        self._pending = None
        self._index = candidate
        logger.info(
            "translations_reloaded",
            published_generation=candidate.generation,
            locale_count=len(candidate.stores),
            file_count=len(candidate.files),
        )
        return candidate

    async def _build_index(self, generation: int) -> TranslationIndex:
        discovered = await self.discovery.discover()
        # Parsing fans out, merging happens in discovery order
        parsed = await asyncio.gather(*(self._load_file(found) for found in discovered))

        stores: Dict[str, TranslationStore] = {}
        loaded: List[Path] = []
        for found, data in zip(discovered, parsed):
            if data is None:
                continue
            if self._merge_file(stores, found, data):
                loaded.append(found.path)

        return TranslationIndex(stores=stores, files=tuple(loaded), generation=generation)

    async def _load_file(self, found: DiscoveredFile) -> Optional[Dict[str, Any]]:
        try:
            text = await self.workspace.read_text(found.path)
            return get_loader(found.format).parse(text, found.path)
        except (OSError, UnicodeDecodeError, TranslationParseError) as e:
            logger.error(
                "translation_file_load_failed",
                file=str(found.path),
                locale=found.locale,
                error=str(e),
            )
            return None

    def _merge_file(
        self,
        stores: Dict[str, TranslationStore],
        found: DiscoveredFile,
        data: Dict[str, Any],
    ) -> bool:
        store = stores.get(found.locale)
        if store is None:
            store = create_store(
                found.locale,
                found.format,
                overwrite_leaves=self.settings.tree_merge_overwrite,
            )
            stores[found.locale] = store
        elif not store.accepts(found.format):
            logger.warning(
                "mixed_format_skipped",
                file=str(found.path),
                locale=found.locale,
                store_format=store.format.value,
                file_format=found.format.value,
            )
            return False

        added = store.merge(found.path, data)
        logger.debug(
            "translation_file_loaded",
            file=str(found.path),
            locale=found.locale,
            origin=found.origin,
            keys_added=added,
        )
        return True

    def get_translation(self, key: str, locale: str) -> Optional[str]:
        """Value of ``key`` in ``locale``, or None when absent."""
        store = self._index.get(locale)
        return store.lookup(key) if store else None

    def get_source_file(self, key: str, locale: str) -> Optional[Path]:
        """File owning ``key`` in ``locale``, or None when absent."""
        store = self._index.get(locale)
        return store.source_of(key) if store else None

    def get_all_keys(self) -> List[str]:
        """Every key of every locale, sorted and de-duplicated."""
        keys = set()
        for store in self._index.stores.values():
            keys.update(store.all_keys())
        return sorted(keys)

    def locales(self) -> List[str]:
        """Locales present in the current index, sorted."""
        return self._index.locales

    async def delete_key(self, key: str) -> List[Path]:
        """Delete ``key`` from every locale's owning file, then reload.

        Files are edited concurrently; a failure in one file does not stop
        the others.

        Returns:
            Files the key was removed from.

        Raises:
            OSError: The first file error, raised after the reload.
        """
        with bind_operation_context(operation="delete_key", key=key):
            targets: List[Path] = []
            for locale in self.locales():
                source = self.get_source_file(key, locale)
                if source is not None and source not in targets:
                    targets.append(source)

            logger.info("deleting_key", file_count=len(targets))
            results = await asyncio.gather(
                *(self.writer.delete_key(path, key) for path in targets),
                return_exceptions=True,
            )

            deleted: List[Path] = []
            errors: List[BaseException] = []
            for path, result in zip(targets, results):
                if isinstance(result, BaseException):
                    logger.error("delete_key_failed", file=str(path), error=str(result))
                    errors.append(result)
                elif result:
                    deleted.append(path)

        await self.reload()
        if errors:
            raise errors[0]
        return deleted

    async def write_translation(self, key: str, locale: str, value: str) -> Optional[Path]:
        """Set ``key`` to ``value`` for ``locale``, then reload.

        The target is the file owning the key, else the first file of the
        locale, else a new file the user is asked to create.

        Returns:
            The file written, or None when file creation was declined.

        Raises:
            ValueError: If ``key`` is not a valid translation key.
            TranslationParseError: If the target YAML file is malformed.
            OSError: If the target file cannot be written.
        """
        TranslationKey.from_string(key)

        with bind_operation_context(operation="write_translation", key=key, locale=locale):
            target = self._target_file(key, locale)
            if target is None:
                target = await self.writer.create_locale_file(locale, self.prompter)
                if target is None:
                    return None

            await self.writer.write(target, key, value)

        await self.reload()
        return target

    def _target_file(self, key: str, locale: str) -> Optional[Path]:
        source = self.get_source_file(key, locale)
        if source is not None:
            return source
        store = self._index.get(locale)
        if store is not None and store.files:
            return store.files[0]
        return None
