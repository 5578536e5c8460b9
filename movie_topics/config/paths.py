"""Project path configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from movie_topics.config._loader import load_yaml_section


def _get_paths_config() -> dict:
    return load_yaml_section("topic_modeling.yaml", "paths")


class PathsConfig(BaseSettings):
    """
    Project path configuration.
    All paths are computed from project_root.
    """
    model_config = SettingsConfigDict(
        env_prefix='PATHS_',
        case_sensitive=False
    )

    # Project root directory (computed)
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)

    input_filename: str = Field(
        default_factory=lambda: _get_paths_config().get('input_filename', 'movie_plots.csv')
    )

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    @property
    def raw_data_dir(self) -> Path:
        return self.data_dir / "raw"

    @property
    def processed_data_dir(self) -> Path:
        return self.data_dir / "processed"

    @property
    def default_input_csv(self) -> Path:
        """CSV of movie plots read when no --input is given"""
        return self.raw_data_dir / self.input_filename

    @property
    def topics_output_dir(self) -> Path:
        """Parent directory for per-run topic modeling outputs"""
        return self.processed_data_dir / "topics"

    def ensure_directories(self) -> None:
        """Create the data directories if they do not exist."""
        for directory in (self.raw_data_dir, self.topics_output_dir):
            directory.mkdir(parents=True, exist_ok=True)
