"""
Cached YAML configuration loader.

Sections are addressed with dotted paths into the YAML tree. The configs
directory defaults to <project_root>/configs and can be moved with the
MOVIE_TOPICS_CONFIG_DIR environment variable.

Usage:
    from movie_topics.config._loader import load_yaml_section

    # Whole file
    config = load_yaml_section("topic_modeling.yaml")

    # Nested section
    model = load_yaml_section("topic_modeling.yaml", "topic_modeling.model")
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR_ENV = "MOVIE_TOPICS_CONFIG_DIR"


def get_configs_dir() -> Path:
    """Directory holding the YAML config files."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).parent.parent.parent / "configs"


@lru_cache(maxsize=32)
def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_yaml_section(config_file: str, section: str | None = None) -> dict[str, Any]:
    """
    Load a (cached) YAML file and return one of its sections.

    Args:
        config_file: Path relative to the configs directory
        section: Dotted key path, e.g. "topic_modeling.selection"

    Returns:
        The section as a dict; {} when the file or any key on the path
        is missing, or the value there is not a mapping
    """
    data: Any = _read_yaml(get_configs_dir() / config_file)

    if section:
        for key in section.split('.'):
            data = data.get(key) if isinstance(data, dict) else None
            if data is None:
                return {}

    return dict(data) if isinstance(data, dict) else {}


def clear_config_cache() -> None:
    """Forget every parsed YAML file. Useful for testing."""
    _read_yaml.cache_clear()
