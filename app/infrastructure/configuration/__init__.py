"""Infrastructure configuration module - public API.

This module provides centralized configuration management using Pydantic
BaseSettings with domain-based organization.

Exports:
    settings: Settings instance built from the environment
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation engine settings class

Example:
    ```python
    from infrastructure.configuration import settings

    locales = settings.i18n.locales
    resource_root = settings.i18n.resource_root
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features import I18nSettings

__all__ = ["Settings", "settings", "I18nSettings"]
