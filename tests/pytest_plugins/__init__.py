"""Pytest plugins for tubepilot testing."""

from tests.pytest_plugins.markers import (
    pytest_addoption,
    pytest_collection_modifyitems,
    pytest_configure,
)

__all__ = [
    "pytest_addoption",
    "pytest_collection_modifyitems",
    "pytest_configure",
]
