"""
Topic Modeling Schemas

Pydantic models for topic modeling tables and results.
"""

import math
from typing import Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import PROBABILITY_TOLERANCE


def _check_probability(v: float) -> float:
    """Accept probabilities within float tolerance of [0, 1] and clip them."""
    if not (-PROBABILITY_TOLERANCE <= v <= 1.0 + PROBABILITY_TOLERANCE):
        raise ValueError(f"Probability must be between 0.0 and 1.0, got {v}")
    return min(max(v, 0.0), 1.0)


class TopicTerm(BaseModel):
    """
    One entry of a topic's top-terms list.

    Attributes:
        term: Vocabulary term
        beta: Probability of the term under the topic
    """
    model_config = ConfigDict(frozen=True)

    term: str = Field(..., description="Vocabulary term")
    beta: float = Field(..., description="Topic-term probability")

    @field_validator('beta')
    @classmethod
    def validate_beta(cls, v: float) -> float:
        """Ensure beta is a probability."""
        return _check_probability(v)


class DocumentTopic(BaseModel):
    """
    Dominant topic of a single document.

    Attributes:
        doc_id: Document identifier (e.g. movie title)
        topic_id: Index of the topic with the largest gamma
        probability: Gamma value of that topic
    """
    model_config = ConfigDict(frozen=True)

    doc_id: str
    topic_id: int = Field(..., ge=0, description="Dominant topic ID")
    probability: float = Field(..., description="Gamma of the dominant topic")

    @field_validator('probability')
    @classmethod
    def validate_probability(cls, v: float) -> float:
        return _check_probability(v)


class TopicCountScore(BaseModel):
    """
    Score of one model-selection metric for one candidate topic count.

    A score of None means the fit for that k failed or the metric was
    not finite.
    """
    model_config = ConfigDict(frozen=True)

    metric: str
    k: int
    score: Optional[float] = None


class TopicCountSweep(BaseModel):
    """
    Result of fitting one LDA model per candidate topic count.

    The sweep only reports scores; choosing k from the curves is left
    to whoever reads them.

    Attributes:
        candidates: Candidate topic counts in evaluation order
        metrics: Metric names that were requested
        scores: One entry per (metric, k) pair
        failures: k -> error message for candidates whose fit failed
    """
    candidates: List[int] = Field(default_factory=list)
    metrics: List[str] = Field(default_factory=list)
    scores: List[TopicCountScore] = Field(default_factory=list)
    failures: Dict[int, str] = Field(default_factory=dict)

    def score(self, metric: str, k: int) -> Optional[float]:
        """
        Look up a single score.

        Raises:
            KeyError: If the (metric, k) pair was not evaluated
        """
        for entry in self.scores:
            if entry.metric == metric and entry.k == k:
                return entry.score
        raise KeyError(f"No score for metric={metric!r}, k={k}")

    def succeeded(self) -> List[int]:
        """Candidate topic counts whose fit did not fail."""
        return [k for k in self.candidates if k not in self.failures]

    def to_frame(self, normalize: bool = False) -> pd.DataFrame:
        """
        Convert to a wide table with one row per k and one column per metric.

        Args:
            normalize: Min-max scale each metric to [0, 1] so curves with
                different ranges can share one plot

        Returns:
            DataFrame with a 'k' column followed by the metric columns
        """
        rows = {k: {"k": k} for k in self.candidates}
        for entry in self.scores:
            rows.setdefault(entry.k, {"k": entry.k})[entry.metric] = entry.score

        frame = pd.DataFrame(list(rows.values()), columns=["k", *self.metrics])
        for metric in self.metrics:
            frame[metric] = frame[metric].astype(float)

        if normalize:
            for metric in self.metrics:
                column = frame[metric]
                low, high = column.min(), column.max()
                if pd.isna(low) or math.isclose(low, high):
                    frame[metric] = column.where(column.isna(), 0.0)
                else:
                    frame[metric] = (column - low) / (high - low)

        return frame


class TopicSummary(BaseModel):
    """
    Derived views of a fitted topic model.

    Attributes:
        num_topics: Number of topics in the fit
        top_n: Length cap of each top-terms list
        document_topics: Dominant topic per document, in document order
        top_terms: topic_id -> top terms ordered by descending beta
        term_importance: term -> beta summed over topics listing the term
    """
    num_topics: int = Field(..., ge=1)
    top_n: int = Field(..., ge=1)
    document_topics: List[DocumentTopic] = Field(default_factory=list)
    top_terms: Dict[int, List[TopicTerm]] = Field(default_factory=dict)
    term_importance: Dict[str, float] = Field(default_factory=dict)

    def topic_description(self, topic_id: int, num_words: Optional[int] = None) -> str:
        """
        Get human-readable description of a topic.

        Args:
            topic_id: Topic ID
            num_words: Number of top words to include (default: all)

        Returns:
            String such as "Topic 3: ship, captain, sea"
        """
        words = self.top_terms.get(topic_id, [])
        if num_words is not None:
            words = words[:num_words]
        if not words:
            return f"Topic {topic_id}"
        return f"Topic {topic_id}: " + ", ".join(w.term for w in words)

    def topic_sizes(self) -> Dict[int, int]:
        """Number of documents whose dominant topic is each topic."""
        sizes = {topic_id: 0 for topic_id in range(self.num_topics)}
        for assignment in self.document_topics:
            sizes[assignment.topic_id] += 1
        return sizes
