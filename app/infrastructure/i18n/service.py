"""Translation service: interactive edit, extract and delete flows.

Thin layer over the ``ResolutionEngine`` that asks the user for input
through a ``Prompter`` and reports failures back to them. Cancelled or empty
input is a no-op.
"""

import re
from pathlib import Path
from typing import Optional

from infrastructure.configuration.features.i18n import I18nSettings
from infrastructure.i18n.engine import ResolutionEngine
from infrastructure.i18n.matcher import KeyMatcher
from infrastructure.i18n.models import TranslationKey
from infrastructure.i18n.resolvers import LocaleResolver
from infrastructure.logging import get_module_logger
from infrastructure.workspace import Prompter

logger = get_module_logger()


def generate_key_from_text(text: str) -> str:
    """Suggest a key for a piece of text.

    Example:
        >>> generate_key_from_text("Hello, World!")
        'hello.world'
    """
    key = re.sub(r"[^a-z0-9]", ".", text.lower())
    key = re.sub(r"\.+", ".", key)
    return key.strip(".")


class TranslationService:
    """User-facing translation flows.

    Usage:
        service = TranslationService(engine, prompter, settings)
        await service.edit_key("user.login.title")
        key = await service.extract_key("Welcome back")
    """

    def __init__(
        self,
        engine: ResolutionEngine,
        prompter: Prompter,
        settings: I18nSettings,
    ):
        self.engine = engine
        self.prompter = prompter
        self.settings = settings
        self.resolver = LocaleResolver(settings)
        self.matcher = KeyMatcher(settings.key_regex)

    async def edit_key(self, key: str) -> Optional[Path]:
        """Prompt for a new value of ``key`` in the primary locale and save it.

        Returns:
            The file written, or None when nothing was written.
        """
        locale = self.resolver.primary_locale()
        current = self.engine.get_translation(key, locale)
        value = await self.prompter.ask_text(
            f"Edit {key} ({locale})", default=current or ""
        )
        if value is None:
            return None

        written = await self._write(key, locale, value)
        if written is not None:
            await self.prompter.show_info(f"Updated {key}")
        return written

    async def extract_key(self, text: str) -> Optional[str]:
        """Move selected text into a new key of the first configured locale.

        Returns:
            The key the text was stored under (the caller replaces the
            selection with it), or None when nothing was extracted.
        """
        if not text:
            await self.prompter.show_info("Please select text to extract.")
            return None

        key = await self.prompter.ask_text(
            "Enter the property key (e.g. user.greeting)",
            default=generate_key_from_text(text),
        )
        if not key:
            return None

        locale = self.settings.locales[0] if self.settings.locales else "en"
        written = await self._write(key, locale, text)
        if written is None:
            return None

        await self.prompter.show_info(f"Extracted '{text}' to '{key}' in {locale}")
        return key

    async def delete_key(self, key: str) -> bool:
        """Delete ``key`` from every locale after a confirmation.

        Returns:
            True if the key was deleted.
        """
        if not await self.prompter.confirm(
            f"Delete key '{key}' from all translation files?"
        ):
            return False

        try:
            deleted = await self.engine.delete_key(key)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("delete_key_failed", key=key, error=str(e))
            await self.prompter.show_error(f"Failed to delete {key}: {e}")
            return False

        await self.prompter.show_info(f"Deleted {key}")
        return bool(deleted)

    def key_at(self, text: str, offset: int) -> Optional[str]:
        """Key under the cursor in a source buffer, if any."""
        match = self.matcher.match_at(text, offset)
        return match.key if match else None

    async def _write(self, key: str, locale: str, value: str) -> Optional[Path]:
        try:
            TranslationKey.from_string(key)
            return await self.engine.write_translation(key, locale, value)
        except (ValueError, OSError) as e:
            # TranslationParseError and UnicodeDecodeError are ValueErrors
            logger.error("write_translation_failed", key=key, locale=locale, error=str(e))
            await self.prompter.show_error(f"Failed to write {key}: {e}")
            return None
