"""Infrastructure modules for the Spring i18n engine.

Centralized components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- events: Change notification (EventEmitter, Event)
- workspace: Project file access and user prompts (LocalWorkspace, Prompter)
- i18n: Translation discovery, resolution and write-back (ResolutionEngine)
"""
