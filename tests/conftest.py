"""
Shared pytest fixtures for the movie topics test suite.

This module provides common fixtures used across test modules:
- Project paths
- A fresh configuration cache per test

Usage:
    Fixtures are automatically discovered by pytest.
    Import them directly in test files - no explicit import needed.
"""

import pytest
from pathlib import Path

from movie_topics.config import clear_config_cache


# ===========================
# Path Fixtures
# ===========================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def configs_dir(project_root: Path) -> Path:
    """Return the YAML configs directory."""
    return project_root / "configs"


# ===========================
# Configuration Fixtures
# ===========================

@pytest.fixture(autouse=True)
def reset_config_cache():
    """Make every test see the on-disk YAML, not a previous test's cache."""
    clear_config_cache()
    yield
    clear_config_cache()
