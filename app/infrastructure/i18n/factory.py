"""Factory functions for creating i18n components.

The composition root of a host application calls ``create_engine`` once per
project and hands the returned engine to every collaborator.
"""

from pathlib import Path
from typing import Optional

from infrastructure.configuration import settings as app_settings
from infrastructure.configuration.features.i18n import I18nSettings
from infrastructure.i18n.engine import ResolutionEngine
from infrastructure.i18n.service import TranslationService
from infrastructure.logging import get_module_logger
from infrastructure.workspace import LocalWorkspace, Prompter

logger = get_module_logger()


async def create_engine(
    project_root: Path,
    settings: Optional[I18nSettings] = None,
    prompter: Optional[Prompter] = None,
    preload: bool = True,
) -> ResolutionEngine:
    """Create and configure a ResolutionEngine for a project directory.

    Args:
        project_root: Root directory of the Spring project.
        settings: Translation settings (default: from the environment).
        prompter: Prompter for interactive writes (default: decline all).
        preload: Whether to run the first reload immediately.

    Returns:
        ResolutionEngine: Configured engine

    Raises:
        ValueError: If project_root is not a directory

    Usage:
        engine = await create_engine(Path("/work/shop"))
        engine.get_translation("user.login.title", "en")

        # Lazy loading
        engine = await create_engine(Path("/work/shop"), preload=False)
        await engine.reload()
    """
    settings = settings or app_settings.i18n
    workspace = LocalWorkspace(project_root, excluded_dirs=settings.excluded_dirs)
    engine = ResolutionEngine(workspace, settings, prompter=prompter)

    if preload:
        await engine.reload()
        logger.info(
            "engine_created_with_preload",
            project_root=str(workspace.root),
            locale_count=len(engine.locales()),
        )
    else:
        logger.info("engine_created_lazy", project_root=str(workspace.root))

    return engine


def create_service(
    engine: ResolutionEngine,
    prompter: Optional[Prompter] = None,
) -> TranslationService:
    """Create the interactive TranslationService for an engine."""
    return TranslationService(
        engine=engine,
        prompter=prompter or engine.prompter,
        settings=engine.settings,
    )
