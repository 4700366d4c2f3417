"""Shared pytest fixtures."""

import pytest

from importnorm.project_roots import clear_root_cache


@pytest.fixture(autouse=True)
def fresh_root_cache():
    """Start every test with an empty shared project-root cache."""
    clear_root_cache()
    yield
    clear_root_cache()
