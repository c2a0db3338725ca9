"""Feature-level fixtures for i18n engine tests.

Provides Spring-style project trees and engines built over them.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.i18n import ResolutionEngine
from infrastructure.workspace import Prompter
from tests.factories.i18n import RESOURCES, write_project


@pytest.fixture
def spring_project(project_root):
    """Project with flat files for ko/en, a YAML locale and a default file.

    Layout:
    - src/main/resources/messages.properties        (default)
    - src/main/resources/messages_ko.properties     (ko)
    - src/main/resources/messages_en.properties     (en)
    - src/main/resources/i18n/messages_en.properties (en, nested)
    - src/main/resources/messages_fr.yml            (fr)
    """
    return write_project(
        project_root,
        {
            f"{RESOURCES}/messages.properties": "user.login=Login (default)\n",
            f"{RESOURCES}/messages_ko.properties": (
                "# Korean\n"
                "user.login=로그인\n"
                "user.logout=로그아웃\n"
            ),
            f"{RESOURCES}/messages_en.properties": (
                "user.login=Login\n"
                "user.greeting=Hello, {0}\n"
            ),
            f"{RESOURCES}/i18n/messages_en.properties": (
                "user.login=Sign in\n"
                "error.not_found=Not found\n"
            ),
            f"{RESOURCES}/messages_fr.yml": (
                "user:\n"
                "  login: Connexion\n"
                "  profile:\n"
                "    title: Profil\n"
                "  age: 42\n"
                "  active: true\n"
            ),
        },
    )


@pytest.fixture
def engine(workspace, i18n_settings, spring_project):
    """ResolutionEngine over the Spring project (not loaded yet)."""
    return ResolutionEngine(workspace, i18n_settings)


@pytest.fixture
def mock_prompter():
    """Prompter whose answers are set per test."""
    prompter = MagicMock(spec=Prompter)
    prompter.choose = AsyncMock(return_value=None)
    prompter.ask_text = AsyncMock(return_value=None)
    prompter.show_error = AsyncMock()
    prompter.show_info = AsyncMock()
    prompter.confirm = AsyncMock(return_value=True)
    return prompter
