"""Translation resolution feature settings."""

from typing import Any, List, Optional

from pydantic import Field, field_validator
import structlog

from infrastructure.configuration.base import FeatureSettings

logger = structlog.stdlib.get_logger().bind(component="config.i18n")

DEFAULT_KEY_REGEX = r"([a-zA-Z0-9_]+(?:\.[a-zA-Z0-9_]+)+)"
DEFAULT_RESOURCE_ROOT = "src/main/resources"
TRANSLATION_EXTENSIONS = "{properties,yml,yaml}"


def _default_discovery_globs() -> List[str]:
    # Priority order: resource root, nested resource dirs, anywhere.
    return [
        "{root}/messages*." + TRANSLATION_EXTENSIONS,
        "{root}/**/messages*." + TRANSLATION_EXTENSIONS,
        "**/message_*." + TRANSLATION_EXTENSIONS,
        "**/messages*." + TRANSLATION_EXTENSIONS,
    ]


class I18nSettings(FeatureSettings):
    """Translation file discovery, lookup and write-back configuration.

    Environment Variables:
        I18N_LOCALES: JSON list of locales in display priority order
        I18N_VIEW_LOCALE: Optional locale that overrides the priority list
        I18N_KEY_REGEX: Pattern used to find keys in source text
        I18N_RESOURCE_ROOT: Resource directory relative to the project root
        I18N_DISCOVERY_GLOBS: JSON list of globs, searched in order.
            ``{root}`` is replaced by the resource root.
        I18N_APPLICATION_CONFIG_GLOB: Glob for Spring application config files
            declaring ``spring.messages.basename``
        I18N_EXCLUDED_DIRS: JSON list of directory names never searched
        I18N_TREE_MERGE_OVERWRITE: Let a later YAML file overwrite scalars
            already defined by an earlier file of the same locale
        I18N_YAML_INDENT: Indent width used when re-writing YAML files

    Example:
        ```python
        from infrastructure.configuration import settings

        locales = settings.i18n.locales
        pattern = settings.i18n.key_regex
        ```
    """

    locales: List[str] = Field(default_factory=lambda: ["ko", "en"], alias="I18N_LOCALES")
    view_locale: Optional[str] = Field(default=None, alias="I18N_VIEW_LOCALE")
    key_regex: str = Field(default=DEFAULT_KEY_REGEX, alias="I18N_KEY_REGEX")
    resource_root: str = Field(default=DEFAULT_RESOURCE_ROOT, alias="I18N_RESOURCE_ROOT")
    discovery_globs: List[str] = Field(
        default_factory=_default_discovery_globs, alias="I18N_DISCOVERY_GLOBS"
    )
    application_config_glob: str = Field(
        default="**/application." + TRANSLATION_EXTENSIONS,
        alias="I18N_APPLICATION_CONFIG_GLOB",
    )
    excluded_dirs: List[str] = Field(
        default_factory=lambda: [
            ".git",
            "node_modules",
            "target",
            "build",
            "out",
            ".gradle",
            ".idea",
        ],
        alias="I18N_EXCLUDED_DIRS",
    )
    tree_merge_overwrite: bool = Field(default=False, alias="I18N_TREE_MERGE_OVERWRITE")
    yaml_indent: int = Field(default=2, alias="I18N_YAML_INDENT")

    @field_validator("view_locale", mode="before")
    @classmethod
    def validate_view_locale(cls, v: Any) -> Any:
        """Treat an empty view locale as unset ("Auto")."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("resource_root", mode="before")
    @classmethod
    def validate_resource_root(cls, v: Any) -> Any:
        """Normalize the resource root to a relative posix path."""
        if isinstance(v, str):
            normalized = v.replace("\\", "/").strip("/")
            if not normalized:
                logger.warning("empty_resource_root", fallback=DEFAULT_RESOURCE_ROOT)
                return DEFAULT_RESOURCE_ROOT
            return normalized
        return v

    @field_validator("yaml_indent")
    @classmethod
    def validate_yaml_indent(cls, v: int) -> int:
        """Clamp the YAML indent to the range accepted by the emitter."""
        if v < 2 or v > 9:
            logger.warning("invalid_yaml_indent", value=v, fallback=2)
            return 2
        return v

    def resolved_discovery_globs(self) -> List[str]:
        """Return the discovery globs with ``{root}`` expanded."""
        return [
            pattern.replace("{root}", self.resource_root)
            for pattern in self.discovery_globs
        ]
