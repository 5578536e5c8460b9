"""
Topic Model Summaries

Pure functions that turn a fit's gamma and beta matrices into the tables
used for presentation: dominant topic per document, top terms per topic,
aggregate term importance, word-cloud weights, the per-topic gamma
distribution and a PCA projection of the document mixtures.

None of these functions modify their inputs.

Usage:
    from movie_topics.features.topic_modeling.summarizer import TopicSummarizer

    summary = TopicSummarizer(top_n=10).summarize(fit)
    summary.topic_description(0)
    summary.term_importance     # {'ship': 0.061, 'captain': 0.043, ...}
"""

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA

from .constants import DEFAULT_PROJECTION_COMPONENTS, DEFAULT_TOP_N
from .schemas import DocumentTopic, TopicSummary, TopicTerm

if TYPE_CHECKING:
    from .lda_trainer import LDAFit

logger = logging.getLogger(__name__)


def dominant_topics(gamma: np.ndarray) -> np.ndarray:
    """
    Dominant topic of each document.

    Args:
        gamma: (n_documents, k) topic mixtures

    Returns:
        Integer array of topic indices; ties resolve to the lowest index
    """
    gamma = np.asarray(gamma)
    if gamma.ndim != 2 or gamma.shape[1] == 0:
        raise ValueError(f"gamma must be a 2-D matrix with at least one topic, got shape {gamma.shape}")
    return np.argmax(gamma, axis=1)


def top_terms(
    beta: np.ndarray,
    vocabulary: Sequence[str],
    top_n: int = DEFAULT_TOP_N,
) -> Dict[int, List[TopicTerm]]:
    """
    Top terms of every topic.

    Args:
        beta: (k, vocabulary_size) term distributions
        vocabulary: Terms in beta column order
        top_n: Terms to keep per topic

    Returns:
        topic_id -> min(top_n, vocabulary_size) terms ordered by descending
        beta; equal betas keep vocabulary order
    """
    beta = np.asarray(beta)
    if top_n < 1:
        raise ValueError(f"top_n must be positive, got {top_n}")
    if beta.ndim != 2 or beta.shape[1] != len(vocabulary):
        raise ValueError(
            f"beta shape {beta.shape} does not match vocabulary size {len(vocabulary)}"
        )

    table = {}
    for topic_id, row in enumerate(beta):
        order = np.argsort(-row, kind="stable")[:top_n]
        table[topic_id] = [
            TopicTerm(term=vocabulary[term_id], beta=float(row[term_id]))
            for term_id in order
        ]
    return table


def term_importance(table: Mapping[int, Sequence[TopicTerm]]) -> Dict[str, float]:
    """
    Aggregate importance of the terms that made some topic's top list.

    Args:
        table: Output of top_terms()

    Returns:
        term -> sum of its beta over the topics listing it, ordered by
        descending weight then term. Terms outside every top list are
        absent, not zero.
    """
    totals: Dict[str, float] = defaultdict(float)
    for terms in table.values():
        for entry in terms:
            totals[entry.term] += entry.beta

    return dict(sorted(totals.items(), key=lambda item: (-item[1], item[0])))


def word_cloud_weights(
    importance: Mapping[str, float],
    min_weight: float = 0.0,
    max_words: Optional[int] = None,
) -> List[Tuple[str, float]]:
    """
    (term, weight) pairs for a word-cloud renderer.

    Args:
        importance: Output of term_importance()
        min_weight: Drop terms whose weight is below this cutoff
        max_words: Keep at most this many of the heaviest terms

    Returns:
        Pairs ordered by descending weight
    """
    pairs = sorted(
        ((term, weight) for term, weight in importance.items() if weight >= min_weight),
        key=lambda item: (-item[1], item[0]),
    )
    if max_words is not None:
        pairs = pairs[:max_words]
    return pairs


def gamma_distribution(fit: "LDAFit") -> pd.DataFrame:
    """
    Long table of every (document, topic, gamma) triple.

    Used for per-topic histograms of document membership.
    """
    num_docs, num_topics = fit.gamma.shape
    return pd.DataFrame({
        "document": np.repeat(np.asarray(fit.doc_ids, dtype=object), num_topics),
        "topic": np.tile(np.arange(num_topics), num_docs),
        "gamma": fit.gamma.ravel(),
    })


def project_documents(
    fit: "LDAFit",
    n_components: int = DEFAULT_PROJECTION_COMPONENTS,
) -> pd.DataFrame:
    """
    PCA projection of the document topic mixtures.

    Args:
        fit: LDA fit
        n_components: Number of principal components

    Returns:
        DataFrame with document, dominant_topic and PC1..PCn columns

    Raises:
        ValueError: If there are too few documents or topics to project
    """
    num_docs, num_topics = fit.gamma.shape
    if n_components < 1 or n_components > min(num_docs, num_topics):
        raise ValueError(
            f"Cannot project {num_docs} documents x {num_topics} topics "
            f"onto {n_components} components"
        )

    coords = PCA(n_components=n_components, random_state=fit.random_state).fit_transform(fit.gamma)

    frame = pd.DataFrame(coords, columns=[f"PC{i + 1}" for i in range(n_components)])
    frame.insert(0, "dominant_topic", dominant_topics(fit.gamma))
    frame.insert(0, "document", list(fit.doc_ids))
    return frame


def top_terms_frame(table: Mapping[int, Sequence[TopicTerm]]) -> pd.DataFrame:
    """Top-terms table as rows of (topic, rank, term, beta)."""
    rows = [
        {"topic": topic_id, "rank": rank, "term": entry.term, "beta": entry.beta}
        for topic_id, terms in table.items()
        for rank, entry in enumerate(terms, 1)
    ]
    return pd.DataFrame(rows, columns=["topic", "rank", "term", "beta"])


class TopicSummarizer:
    """
    Builds the per-document and per-topic views of a fit.

    Usage:
        summarizer = TopicSummarizer(top_n=10)
        summary = summarizer.summarize(fit)
        summary.document_topics[0].topic_id
    """

    def __init__(self, top_n: int = DEFAULT_TOP_N):
        if top_n < 1:
            raise ValueError(f"top_n must be positive, got {top_n}")
        self.top_n = top_n

    def summarize(self, fit: "LDAFit") -> TopicSummary:
        """
        Summarize a fit.

        Returns:
            TopicSummary with dominant topics, top terms and term importance
        """
        assignments = dominant_topics(fit.gamma)
        document_topics = [
            DocumentTopic(
                doc_id=doc_id,
                topic_id=int(topic_id),
                probability=float(fit.gamma[row, topic_id]),
            )
            for row, (doc_id, topic_id) in enumerate(zip(fit.doc_ids, assignments))
        ]

        table = top_terms(fit.beta, fit.vocabulary, top_n=self.top_n)

        summary = TopicSummary(
            num_topics=fit.num_topics,
            top_n=self.top_n,
            document_topics=document_topics,
            top_terms=table,
            term_importance=term_importance(table),
        )

        logger.info(
            f"Summarized {len(document_topics)} documents over {fit.num_topics} topics; "
            f"{len(summary.term_importance)} distinct top terms"
        )
        return summary
