"""Shared fixtures for the test suite."""

import pytest

from infrastructure.workspace import LocalWorkspace
from tests.factories.i18n import make_i18n_settings


@pytest.fixture
def i18n_settings():
    """Default translation settings, independent of the environment."""
    return make_i18n_settings()


@pytest.fixture
def project_root(tmp_path):
    """Empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def workspace(project_root, i18n_settings):
    """LocalWorkspace over the project directory."""
    return LocalWorkspace(project_root, excluded_dirs=i18n_settings.excluded_dirs)
