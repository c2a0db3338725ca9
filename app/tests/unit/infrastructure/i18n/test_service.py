"""Tests for infrastructure.i18n.service module."""

from unittest.mock import AsyncMock

import pytest

from infrastructure.i18n import TranslationService, generate_key_from_text
from tests.factories.i18n import RESOURCES, make_i18n_settings

pytestmark = pytest.mark.unit


@pytest.fixture
def service(engine, mock_prompter, i18n_settings):
    return TranslationService(engine, mock_prompter, i18n_settings)


class TestGenerateKeyFromText:
    """Tests for generate_key_from_text."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello, World!", "hello.world"),
            ("  Save   changes  ", "save.changes"),
            ("Error 404", "error.404"),
            ("already.dotted..key", "already.dotted.key"),
            ("로그인", ""),
        ],
    )
    def test_generated_keys(self, text, expected):
        """Non alphanumerics collapse into single dots."""
        assert generate_key_from_text(text) == expected


class TestEditKey:
    """Tests for TranslationService.edit_key."""

    @pytest.mark.asyncio
    async def test_edits_primary_locale(self, service, engine, workspace, mock_prompter):
        """The first configured locale is edited, prefilled with its value."""
        await engine.reload()
        mock_prompter.ask_text.return_value = "접속"

        target = await service.edit_key("user.login")

        assert target == workspace.root / RESOURCES / "messages_ko.properties"
        assert engine.get_translation("user.login", "ko") == "접속"
        _, kwargs = mock_prompter.ask_text.call_args
        assert kwargs["default"] == "로그인"
        mock_prompter.show_info.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_view_locale_is_edited(self, engine, mock_prompter):
        """A view locale takes precedence."""
        await engine.reload()
        service = TranslationService(engine, mock_prompter, make_i18n_settings(view_locale="fr"))
        mock_prompter.ask_text.return_value = "Se connecter"

        await service.edit_key("user.login")

        assert engine.get_translation("user.login", "fr") == "Se connecter"
        assert engine.get_translation("user.login", "ko") == "로그인"

    @pytest.mark.asyncio
    async def test_cancel_is_noop(self, service, engine, mock_prompter):
        """Cancelling the prompt writes nothing."""
        await engine.reload()
        mock_prompter.ask_text.return_value = None

        assert await service.edit_key("user.login") is None
        assert engine.get_translation("user.login", "ko") == "로그인"
        assert engine.index.generation == 1

    @pytest.mark.asyncio
    async def test_write_failure_reported(self, engine, workspace, mock_prompter):
        """A malformed YAML target is reported to the user."""
        await engine.reload()
        (workspace.root / RESOURCES / "messages_fr.yml").write_text("user: [\n", encoding="utf-8")
        service = TranslationService(engine, mock_prompter, make_i18n_settings(view_locale="fr"))
        mock_prompter.ask_text.return_value = "Se connecter"

        assert await service.edit_key("user.login") is None
        mock_prompter.show_error.assert_awaited_once()


class TestExtractKey:
    """Tests for TranslationService.extract_key."""

    @pytest.mark.asyncio
    async def test_extracts_to_first_locale(self, service, engine, mock_prompter):
        """The text is stored under the accepted key."""
        await engine.reload()
        mock_prompter.ask_text.side_effect = lambda prompt, default="": default

        key = await service.extract_key("Welcome back")

        assert key == "welcome.back"
        assert engine.get_translation("welcome.back", "ko") == "Welcome back"

    @pytest.mark.asyncio
    async def test_custom_key(self, service, engine, mock_prompter):
        """The user may type a different key."""
        await engine.reload()
        mock_prompter.ask_text.return_value = "home.title"

        assert await service.extract_key("Welcome") == "home.title"
        assert engine.get_translation("home.title", "ko") == "Welcome"

    @pytest.mark.asyncio
    async def test_empty_selection(self, service, mock_prompter):
        """Nothing selected means nothing to extract."""
        assert await service.extract_key("") is None
        mock_prompter.ask_text.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancelled_key(self, service, engine, mock_prompter):
        """An empty key cancels the extraction."""
        await engine.reload()
        mock_prompter.ask_text.return_value = ""

        assert await service.extract_key("Welcome") is None
        assert engine.index.generation == 1

    @pytest.mark.asyncio
    async def test_invalid_key_reported(self, service, engine, mock_prompter):
        """Keys that are not dotted identifiers are rejected."""
        await engine.reload()
        mock_prompter.ask_text.return_value = "not a key"

        assert await service.extract_key("Welcome") is None
        mock_prompter.show_error.assert_awaited_once()


class TestDeleteKey:
    """Tests for TranslationService.delete_key."""

    @pytest.mark.asyncio
    async def test_confirmed(self, service, engine, mock_prompter):
        """After confirmation the key is removed everywhere it is owned."""
        await engine.reload()
        mock_prompter.confirm.return_value = True

        assert await service.delete_key("user.logout") is True
        assert engine.get_translation("user.logout", "ko") is None

    @pytest.mark.asyncio
    async def test_declined(self, service, engine, mock_prompter):
        """Answering no keeps the key."""
        await engine.reload()
        mock_prompter.confirm.return_value = False

        assert await service.delete_key("user.logout") is False
        assert engine.get_translation("user.logout", "ko") == "로그아웃"

    @pytest.mark.asyncio
    async def test_failure_reported(self, service, engine, mock_prompter):
        """File errors are shown to the user."""
        engine.delete_key = AsyncMock(side_effect=OSError("read-only"))

        assert await service.delete_key("user.logout") is False
        mock_prompter.show_error.assert_awaited_once()


class TestKeyAt:
    """Tests for TranslationService.key_at."""

    def test_key_under_cursor(self, service):
        """The key covering the offset is returned."""
        text = 'messageSource.getMessage("user.login", null, locale);'
        assert service.key_at(text, text.index("login")) == "user.login"

    def test_no_key(self, service):
        """Offsets outside any key give None."""
        assert service.key_at("int x = 5;", 4) is None
