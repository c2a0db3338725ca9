"""Unit tests for infrastructure.configuration.settings module.

Tests cover:
- I18nSettings validation and defaults
- Settings class initialization
- Integration with Pydantic BaseSettings
"""

import pytest

from infrastructure.configuration import I18nSettings, Settings
from infrastructure.configuration.features.i18n import DEFAULT_KEY_REGEX

pytestmark = pytest.mark.unit


class TestI18nSettings:
    """Test suite for I18nSettings configuration."""

    def test_i18n_settings_defaults(self):
        """Test I18nSettings uses correct default values."""
        i18n = I18nSettings(_env_file=None)

        assert i18n.locales == ["ko", "en"]
        assert i18n.view_locale is None
        assert i18n.key_regex == DEFAULT_KEY_REGEX
        assert i18n.resource_root == "src/main/resources"
        assert i18n.tree_merge_overwrite is False
        assert i18n.yaml_indent == 2
        assert "target" in i18n.excluded_dirs
        assert "node_modules" in i18n.excluded_dirs

    def test_i18n_settings_from_environment(self, monkeypatch):
        """Test I18nSettings accepts custom configuration."""
        monkeypatch.setenv("I18N_LOCALES", '["en", "ja"]')
        monkeypatch.setenv("I18N_VIEW_LOCALE", "ja")
        monkeypatch.setenv("I18N_RESOURCE_ROOT", "resources/")
        monkeypatch.setenv("I18N_TREE_MERGE_OVERWRITE", "true")
        monkeypatch.setenv("I18N_YAML_INDENT", "4")

        i18n = I18nSettings(_env_file=None)

        assert i18n.locales == ["en", "ja"]
        assert i18n.view_locale == "ja"
        assert i18n.resource_root == "resources"
        assert i18n.tree_merge_overwrite is True
        assert i18n.yaml_indent == 4

    def test_empty_view_locale_is_auto(self, monkeypatch):
        """An empty view locale means no override."""
        monkeypatch.setenv("I18N_VIEW_LOCALE", "  ")
        assert I18nSettings(_env_file=None).view_locale is None

    def test_resource_root_normalized(self):
        """Backslashes and surrounding slashes are normalized."""
        assert I18nSettings(_env_file=None, resource_root="\\src\\main\\res\\").resource_root == (
            "src/main/res"
        )
        assert I18nSettings(_env_file=None, resource_root="/").resource_root == "src/main/resources"

    @pytest.mark.parametrize("indent", [0, 1, 10])
    def test_yaml_indent_clamped(self, indent):
        """Indents the emitter cannot produce fall back to 2."""
        assert I18nSettings(_env_file=None, yaml_indent=indent).yaml_indent == 2

    def test_resolved_discovery_globs(self):
        """{root} is replaced by the resource root, order kept."""
        i18n = I18nSettings(_env_file=None, resource_root="res")
        globs = i18n.resolved_discovery_globs()

        assert globs[0] == "res/messages*.{properties,yml,yaml}"
        assert globs[1] == "res/**/messages*.{properties,yml,yaml}"
        assert globs[-1] == "**/messages*.{properties,yml,yaml}"

    def test_custom_discovery_globs(self, monkeypatch):
        """The discovery order can be configured."""
        monkeypatch.setenv("I18N_DISCOVERY_GLOBS", '["lang/*.properties", "{root}/*.yml"]')
        i18n = I18nSettings(_env_file=None)

        assert i18n.resolved_discovery_globs() == [
            "lang/*.properties",
            "src/main/resources/*.yml",
        ]


class TestSettings:
    """Test suite for the Settings aggregator."""

    def test_settings_initializes_feature_settings(self, monkeypatch):
        """Test Settings instantiates the i18n section."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)

        assert isinstance(settings.i18n, I18nSettings)
        assert settings.LOG_LEVEL == "INFO"

    def test_settings_accepts_section_override(self):
        """Explicit sections are used as given."""
        i18n = I18nSettings(_env_file=None, locales=["en"])
        settings = Settings(_env_file=None, i18n=i18n)

        assert settings.i18n is i18n

    def test_is_production(self, monkeypatch):
        """An empty PREFIX means production."""
        monkeypatch.setenv("PREFIX", "")
        assert Settings(_env_file=None).is_production is True

        monkeypatch.setenv("PREFIX", "dev-")
        assert Settings(_env_file=None).is_production is False
