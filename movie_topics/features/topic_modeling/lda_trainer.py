"""
LDA Model Training Utilities

This module fits Latent Dirichlet Allocation models on a document-term
matrix and returns the two matrices the rest of the pipeline consumes:

- gamma: documents x topics, each row a document's topic mixture
- beta:  topics x terms, each row a topic's term distribution

The numerical routine sits behind the LDABackend protocol. The default
backend uses gensim's variational LdaModel.

Usage:
    from movie_topics.features.topic_modeling.lda_trainer import LDATrainer

    trainer = LDATrainer(random_state=42)
    fit = trainer.fit(dtm, num_topics=8)

    fit.gamma.shape     # (n_documents, 8)
    fit.terms(10)       # top 10 terms per topic
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple

import numpy as np
from gensim.models import LdaModel

from .constants import (
    DEFAULT_ALPHA,
    DEFAULT_ETA,
    DEFAULT_ITERATIONS,
    DEFAULT_PASSES,
    DEFAULT_RANDOM_STATE,
    DEFAULT_TOP_N,
    MIN_NUM_TOPICS,
    PROBABILITY_TOLERANCE,
    RECOMMENDED_MIN_CORPUS_SIZE,
)
from .dtm import DocumentTermMatrix
from .exceptions import InferenceError, InvalidTopicCountError
from .schemas import TopicTerm
from .summarizer import dominant_topics, top_terms

logger = logging.getLogger(__name__)


class LDABackend(Protocol):
    """Numerical LDA routine: fit(dtm, k, seed) -> (gamma, beta)."""

    def fit(
        self,
        dtm: DocumentTermMatrix,
        num_topics: int,
        random_state: int,
    ) -> Tuple[np.ndarray, np.ndarray]:
        ...


class GensimLdaBackend:
    """
    LDA backend built on gensim's online variational Bayes LdaModel.

    Each call creates its own model seeded with random_state, so fits never
    share RNG state and repeated calls with the same inputs are identical.
    """

    def __init__(
        self,
        passes: int = DEFAULT_PASSES,
        iterations: int = DEFAULT_ITERATIONS,
        alpha: str | float = DEFAULT_ALPHA,
        eta: str | float = DEFAULT_ETA,
    ):
        """
        Args:
            passes: Number of training passes through corpus
            iterations: Maximum inference iterations per document
            alpha: Document-topic prior ('symmetric', 'asymmetric', 'auto' or float)
            eta: Topic-word prior ('symmetric', 'auto' or float)
        """
        self.passes = passes
        self.iterations = iterations
        self.alpha = alpha
        self.eta = eta

    def fit(
        self,
        dtm: DocumentTermMatrix,
        num_topics: int,
        random_state: int,
    ) -> Tuple[np.ndarray, np.ndarray]:
        corpus = dtm.to_bow()

        lda_model = LdaModel(
            corpus=corpus,
            id2word=dtm.dictionary,
            num_topics=num_topics,
            random_state=random_state,
            passes=self.passes,
            iterations=self.iterations,
            alpha=self.alpha,
            eta=self.eta,
            dtype=np.float64,
        )

        # Variational posterior over the whole corpus; rows are Dirichlet
        # parameters and normalize to the expected topic mixture.
        gamma, _ = lda_model.inference(corpus)
        gamma = gamma / gamma.sum(axis=1, keepdims=True)

        beta = lda_model.get_topics()
        beta = beta / beta.sum(axis=1, keepdims=True)

        return gamma, beta

    def __repr__(self) -> str:
        return (
            f"GensimLdaBackend(passes={self.passes}, iterations={self.iterations}, "
            f"alpha={self.alpha!r}, eta={self.eta!r})"
        )


@dataclass(frozen=True, eq=False)
class LDAFit:
    """
    Result of a single LDA fit.

    The matrices are read-only; summaries are derived without touching them.

    Attributes:
        gamma: (n_documents, num_topics) topic mixtures, rows sum to 1
        beta: (num_topics, vocabulary_size) term distributions, rows sum to 1
        vocabulary: Terms in beta column order
        doc_ids: Document identifiers in gamma row order
        num_topics: k
        random_state: Seed used for the fit
    """
    gamma: np.ndarray
    beta: np.ndarray
    vocabulary: Tuple[str, ...]
    doc_ids: Tuple[str, ...]
    num_topics: int
    random_state: int

    def __post_init__(self):
        self.gamma.setflags(write=False)
        self.beta.setflags(write=False)

    def terms(self, top_n: int = DEFAULT_TOP_N) -> Dict[int, List[TopicTerm]]:
        """
        Top terms of every topic.

        Args:
            top_n: Terms per topic

        Returns:
            topic_id -> terms ordered by descending beta (ties keep
            vocabulary order)
        """
        return top_terms(self.beta, self.vocabulary, top_n=top_n)

    def dominant_topics(self) -> np.ndarray:
        """Index of the largest gamma in each document row."""
        return dominant_topics(self.gamma)


def validate_num_topics(num_topics: int, vocabulary_size: int) -> None:
    """
    Check that a topic count can be fitted.

    Raises:
        InvalidTopicCountError: If num_topics is not an integer, is below 2,
            or exceeds the vocabulary size
    """
    if isinstance(num_topics, bool) or not isinstance(num_topics, (int, np.integer)):
        raise InvalidTopicCountError(
            f"Number of topics must be an integer, got {num_topics!r}"
        )
    if num_topics < MIN_NUM_TOPICS:
        raise InvalidTopicCountError(
            f"Number of topics must be at least {MIN_NUM_TOPICS}, got {num_topics}"
        )
    if num_topics > vocabulary_size:
        raise InvalidTopicCountError(
            f"Number of topics ({num_topics}) exceeds vocabulary size ({vocabulary_size})"
        )


def _check_distribution(matrix: np.ndarray, shape: Tuple[int, int], name: str) -> None:
    """Raise InferenceError unless matrix is a row-stochastic array of the given shape."""
    if matrix.shape != shape:
        raise InferenceError(f"{name} has shape {matrix.shape}, expected {shape}")
    if not np.all(np.isfinite(matrix)):
        raise InferenceError(f"{name} contains non-finite values; the fit did not converge")
    if np.any(matrix < 0):
        raise InferenceError(f"{name} contains negative probabilities")

    row_sums = matrix.sum(axis=1)
    worst = float(np.max(np.abs(row_sums - 1.0))) if row_sums.size else 0.0
    if worst > PROBABILITY_TOLERANCE:
        raise InferenceError(
            f"{name} rows do not sum to 1 (max deviation {worst:.2e})"
        )


class LDATrainer:
    """
    LDA Inference Engine.

    This class handles:
    1. Validating the topic count against the vocabulary
    2. Running the numerical backend with a fixed seed
    3. Checking gamma/beta are proper probability matrices
    4. Packaging them with the vocabulary and document ids

    Usage:
        trainer = LDATrainer(random_state=42)
        fit = trainer.fit(dtm, num_topics=8)
        for topic_id, terms in fit.terms(10).items():
            print(topic_id, [t.term for t in terms])
    """

    def __init__(
        self,
        backend: Optional[LDABackend] = None,
        random_state: int = DEFAULT_RANDOM_STATE,
    ):
        """
        Initialize LDA trainer.

        Args:
            backend: Numerical LDA routine (default: GensimLdaBackend())
            random_state: Random seed for reproducibility
        """
        self.backend = backend if backend is not None else GensimLdaBackend()
        self.random_state = random_state

        logger.debug(f"Initialized LDATrainer with {self.backend!r}, seed={random_state}")

    def fit(
        self,
        dtm: DocumentTermMatrix,
        num_topics: int,
        random_state: Optional[int] = None,
    ) -> LDAFit:
        """
        Fit one LDA model.

        Args:
            dtm: Document-term matrix
            num_topics: Number of topics k (2 <= k <= vocabulary size)
            random_state: Override the trainer's seed for this fit

        Returns:
            LDAFit with gamma and beta

        Raises:
            InvalidTopicCountError: If k is out of range
            InferenceError: If the backend fails or returns invalid matrices
        """
        validate_num_topics(num_topics, dtm.vocabulary_size)
        num_topics = int(num_topics)
        seed = self.random_state if random_state is None else random_state

        if dtm.num_documents < RECOMMENDED_MIN_CORPUS_SIZE:
            logger.warning(
                f"Corpus size ({dtm.num_documents}) is below recommended minimum "
                f"({RECOMMENDED_MIN_CORPUS_SIZE}). Results may be unreliable."
            )

        logger.info(
            f"Training LDA with {num_topics} topics on {dtm.num_documents} documents "
            f"x {dtm.vocabulary_size} terms (seed={seed})..."
        )

        try:
            gamma, beta = self.backend.fit(dtm, num_topics, seed)
        except InferenceError:
            raise
        except Exception as e:
            raise InferenceError(f"LDA fit with k={num_topics} failed: {e}") from e

        gamma = np.array(gamma, dtype=np.float64)
        beta = np.array(beta, dtype=np.float64)

        _check_distribution(gamma, (dtm.num_documents, num_topics), "gamma")
        _check_distribution(beta, (num_topics, dtm.vocabulary_size), "beta")

        logger.info(f"LDA training complete (k={num_topics})")

        return LDAFit(
            gamma=gamma,
            beta=beta,
            vocabulary=dtm.vocabulary,
            doc_ids=dtm.doc_ids,
            num_topics=num_topics,
            random_state=seed,
        )
