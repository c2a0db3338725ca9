"""Base class shared by the feature settings sections."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureSettings(BaseSettings):
    """Base class for feature settings sections.

    Values come from the environment or a ``.env`` file, matched
    case-sensitively against each field's alias (``I18N_LOCALES``). Fields can
    also be passed by name, which is how tests and host applications build a
    section without touching the environment:

        I18nSettings(_env_file=None, locales=["en"])
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )
