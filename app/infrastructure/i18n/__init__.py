"""i18n resolution engine for Spring translation files.

Locates translation keys in source text and resolves them against
locale-keyed ``.properties`` and YAML files, with in-place write-back.

Main components:
- models: TranslationKey, FileFormat, KeyMatch, locale parsing
- matcher: KeyMatcher for finding keys in text
- loader: PropertiesLoader and YAMLTreeLoader
- stores: FlatStore, TreeStore and the TranslationIndex snapshot
- discovery: TranslationDiscovery for finding files in priority order
- engine: ResolutionEngine with lookups, reload and edits
- writeback: WriteBackEngine for single-key file edits
- resolvers: LocaleResolver for display fallback
- service: TranslationService for interactive flows
"""

from infrastructure.i18n.discovery import DiscoveredFile, TranslationDiscovery
from infrastructure.i18n.engine import INDEX_RELOADED, ResolutionEngine
from infrastructure.i18n.errors import TranslationParseError
from infrastructure.i18n.factory import create_engine, create_service
from infrastructure.i18n.loader import (
    PropertiesLoader,
    TranslationLoader,
    YAMLTreeLoader,
)
from infrastructure.i18n.matcher import KeyMatcher
from infrastructure.i18n.models import (
    DEFAULT_LOCALE,
    FileFormat,
    KeyMatch,
    ResolvedTranslation,
    TranslationKey,
    locale_from_filename,
)
from infrastructure.i18n.resolvers import LocaleResolver
from infrastructure.i18n.service import TranslationService, generate_key_from_text
from infrastructure.i18n.stores import (
    FlatStore,
    TranslationIndex,
    TranslationStore,
    TreeStore,
)
from infrastructure.i18n.writeback import WriteBackEngine

__all__ = [
    "DEFAULT_LOCALE",
    "INDEX_RELOADED",
    "DiscoveredFile",
    "FileFormat",
    "FlatStore",
    "KeyMatch",
    "KeyMatcher",
    "LocaleResolver",
    "PropertiesLoader",
    "ResolutionEngine",
    "ResolvedTranslation",
    "TranslationDiscovery",
    "TranslationIndex",
    "TranslationKey",
    "TranslationLoader",
    "TranslationParseError",
    "TranslationService",
    "TranslationStore",
    "TreeStore",
    "WriteBackEngine",
    "YAMLTreeLoader",
    "create_engine",
    "create_service",
    "generate_key_from_text",
    "locale_from_filename",
]
