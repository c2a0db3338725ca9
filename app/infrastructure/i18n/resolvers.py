"""Locale resolution for displaying translations.

Decides which locale's value to show for a key: the view locale override
when one is set, otherwise the configured locales in priority order followed
by the locale-less ``default`` files.
"""

from typing import List, Optional

from infrastructure.configuration.features.i18n import I18nSettings
from infrastructure.i18n.engine import ResolutionEngine
from infrastructure.i18n.models import DEFAULT_LOCALE, ResolvedTranslation
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class LocaleResolver:
    """Resolves the display value of a key from the engine.

    Implements the fallback chain:
    1. View locale (only this one when set)
    2. Configured locales, in order
    3. The ``default`` locale
    """

    def __init__(self, settings: I18nSettings):
        """Initialize locale resolver.

        Args:
            settings: Source of ``locales`` and ``view_locale``.
        """
        self.settings = settings

    def effective_locales(self) -> List[str]:
        """Locales tried, in order, before the ``default`` fallback."""
        if self.settings.view_locale:
            return [self.settings.view_locale]
        return list(self.settings.locales)

    def primary_locale(self) -> str:
        """Locale targeted by edits: view locale, first configured, or en."""
        locales = self.effective_locales()
        return locales[0] if locales else "en"

    def resolve(self, engine: ResolutionEngine, key: str) -> Optional[str]:
        """First non-empty value of ``key`` along the fallback chain.

        Returns:
            The display value, or None when no locale has one.
        """
        for locale in self.effective_locales():
            value = engine.get_translation(key, locale)
            if value:
                return value

        if not self.settings.view_locale:
            value = engine.get_translation(key, DEFAULT_LOCALE)
            if value:
                return value

        logger.debug("display_value_not_found", key=key)
        return None

    def translations_for(
        self, engine: ResolutionEngine, key: str
    ) -> List[ResolvedTranslation]:
        """Every locale's value of ``key`` with its source file.

        Locales without a value are left out. Sorted by locale.
        """
        resolved = []
        for locale in engine.locales():
            value = engine.get_translation(key, locale)
            if value:
                resolved.append(
                    ResolvedTranslation(
                        locale=locale,
                        value=value,
                        source=engine.get_source_file(key, locale),
                    )
                )
        return resolved
