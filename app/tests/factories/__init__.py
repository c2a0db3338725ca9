"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_flat_store,
    make_i18n_settings,
    make_tree_store,
    write_project,
)

__all__ = [
    "make_flat_store",
    "make_i18n_settings",
    "make_tree_store",
    "write_project",
]
