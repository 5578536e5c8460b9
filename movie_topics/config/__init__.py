"""
Movie Topics Configuration Package.

This module uses Pydantic Settings to:
1. Define the schema for all configuration
2. Load defaults from configs/topic_modeling.yaml
3. Automatically override with environment variables from .env

Usage:
    from movie_topics.config import settings

    # Access paths
    csv_path = settings.paths.default_input_csv

    # Access model settings
    num_topics = settings.topic_modeling.model.num_topics
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from movie_topics.config._loader import clear_config_cache
from movie_topics.config.paths import PathsConfig
from movie_topics.config.topic_modeling import (
    TopicModelingConfig,
    TopicModelingModelConfig,
    TopicModelingPreprocessingConfig,
    TopicModelingSelectionConfig,
    TopicModelingSummaryConfig,
)


class Settings(BaseSettings):
    """
    Main settings class that combines all configuration sections.

    Usage:
        from movie_topics.config import settings

        settings.paths.topics_output_dir
        settings.topic_modeling.selection.k_max
    """
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    topic_modeling: TopicModelingConfig = Field(default_factory=TopicModelingConfig)


# ===========================
# Global Settings Instance
# ===========================

settings = Settings()


# ===========================
# Public API
# ===========================

__all__ = [
    "settings",
    "Settings",
    "clear_config_cache",
    "PathsConfig",
    "TopicModelingConfig",
    "TopicModelingModelConfig",
    "TopicModelingPreprocessingConfig",
    "TopicModelingSelectionConfig",
    "TopicModelingSummaryConfig",
]
