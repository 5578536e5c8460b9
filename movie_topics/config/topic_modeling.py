"""Topic modeling configuration."""

from typing import List, Optional, Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from movie_topics.config._loader import load_yaml_section


def _get_config(section: str) -> dict:
    return load_yaml_section("topic_modeling.yaml", f"topic_modeling.{section}")


class TopicModelingPreprocessingConfig(BaseSettings):
    """Text preprocessing and vocabulary settings."""
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_PREP_',
        case_sensitive=False
    )

    id_column: str = Field(
        default_factory=lambda: _get_config('preprocessing').get('id_column', 'Title')
    )
    text_column: str = Field(
        default_factory=lambda: _get_config('preprocessing').get('text_column', 'Plot')
    )
    stopword_language: str = Field(
        default_factory=lambda: _get_config('preprocessing').get('stopword_language', 'english')
    )
    use_nltk_stopwords: bool = Field(
        default_factory=lambda: _get_config('preprocessing').get('use_nltk_stopwords', True)
    )
    extra_stopwords: List[str] = Field(
        default_factory=lambda: _get_config('preprocessing').get('extra_stopwords', [])
    )
    min_token_length: int = Field(
        default_factory=lambda: _get_config('preprocessing').get('min_token_length', 1)
    )
    # Vocabulary filters are off unless set; a term enters the vocabulary
    # as soon as one document contains it.
    no_below: Optional[int] = Field(
        default_factory=lambda: _get_config('preprocessing').get('no_below')
    )
    no_above: Optional[float] = Field(
        default_factory=lambda: _get_config('preprocessing').get('no_above')
    )
    keep_n: Optional[int] = Field(
        default_factory=lambda: _get_config('preprocessing').get('keep_n')
    )


class TopicModelingModelConfig(BaseSettings):
    """LDA model settings."""
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_MODEL_',
        case_sensitive=False
    )

    num_topics: int = Field(
        default_factory=lambda: _get_config('model').get('num_topics', 8)
    )
    passes: int = Field(
        default_factory=lambda: _get_config('model').get('passes', 10)
    )
    iterations: int = Field(
        default_factory=lambda: _get_config('model').get('iterations', 100)
    )
    random_state: int = Field(
        default_factory=lambda: _get_config('model').get('random_state', 42)
    )
    alpha: Union[str, float] = Field(
        default_factory=lambda: _get_config('model').get('alpha', 'symmetric')
    )
    eta: Union[str, float] = Field(
        default_factory=lambda: _get_config('model').get('eta', 'symmetric')
    )


class TopicModelingSelectionConfig(BaseSettings):
    """Topic-count sweep settings."""
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_SELECT_',
        case_sensitive=False
    )

    k_min: int = Field(
        default_factory=lambda: _get_config('selection').get('k_min', 2)
    )
    k_max: int = Field(
        default_factory=lambda: _get_config('selection').get('k_max', 15)
    )
    step: int = Field(
        default_factory=lambda: _get_config('selection').get('step', 1)
    )
    metrics: List[str] = Field(
        default_factory=lambda: _get_config('selection').get(
            'metrics', ['CaoJuan2009', 'Arun2010', 'Deveaud2014']
        )
    )
    max_workers: int = Field(
        default_factory=lambda: _get_config('selection').get('max_workers', 1)
    )


class TopicModelingSummaryConfig(BaseSettings):
    """Summary table settings."""
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_SUMMARY_',
        case_sensitive=False
    )

    top_n: int = Field(
        default_factory=lambda: _get_config('summary').get('top_n', 10)
    )
    word_cloud_min_weight: float = Field(
        default_factory=lambda: _get_config('summary').get('word_cloud_min_weight', 0.0)
    )
    word_cloud_max_words: Optional[int] = Field(
        default_factory=lambda: _get_config('summary').get('word_cloud_max_words', 100)
    )
    projection_components: int = Field(
        default_factory=lambda: _get_config('summary').get('projection_components', 2)
    )


class TopicModelingConfig(BaseSettings):
    """
    Topic modeling configuration.
    Loads from configs/topic_modeling.yaml with environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_',
        env_nested_delimiter='__',
        case_sensitive=False
    )

    preprocessing: TopicModelingPreprocessingConfig = Field(
        default_factory=TopicModelingPreprocessingConfig
    )
    model: TopicModelingModelConfig = Field(
        default_factory=TopicModelingModelConfig
    )
    selection: TopicModelingSelectionConfig = Field(
        default_factory=TopicModelingSelectionConfig
    )
    summary: TopicModelingSummaryConfig = Field(
        default_factory=TopicModelingSummaryConfig
    )
