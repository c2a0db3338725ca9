"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_module_logger function
- Test logging suppression in test environment
"""

import logging

import pytest

from infrastructure.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_logging_returns_bound_logger(self):
        """configure_logging returns a usable logger."""
        result = configure_logging()

        assert hasattr(result, "info")
        assert hasattr(result, "warning")
        assert hasattr(result, "error")

    def test_configure_logging_accepts_overrides(self):
        """log_level and is_production are accepted."""
        assert configure_logging(log_level="DEBUG", is_production=True) is not None
        assert configure_logging(log_level="WARNING", is_production=False) is not None

    def test_configure_logging_suppresses_in_test_env(self):
        """In test environment, root logger level is set high to suppress output."""
        configure_logging()

        assert logging.root.level > logging.CRITICAL

    def test_logging_calls_do_not_raise(self):
        """Loggers stay callable after configuration."""
        logger = configure_logging()
        logger.info("translations_reloaded", locale_count=2)


@pytest.mark.unit
class TestGetModuleLogger:
    """Test suite for get_module_logger function."""

    def test_binds_calling_module(self):
        """The component and module path of the caller are bound."""
        from infrastructure.i18n import engine

        context = engine.logger._context

        assert context["module_path"] == "infrastructure.i18n.engine"
        assert context["component"] == "engine"

    def test_logger_is_usable(self):
        """Bound loggers accept event names with key/value context."""
        logger = get_module_logger()
        logger.warning("mixed_format_skipped", locale="en")
