"""
Topic Count Selection Metrics

Scores used to compare LDA fits across candidate topic counts. All of
them are computed from a fit's gamma/beta and the document-term matrix,
so they work for any LDA backend.

- CaoJuan2009: mean cosine similarity between topics (lower is better)
- Arun2010: symmetric KL divergence between the singular values of beta
  and the length-weighted topic mass of gamma (lower is better)
- Deveaud2014: mean divergence between topics (higher is better)
- perplexity: per-word perplexity of the corpus (lower is better)
- u_mass / c_v: gensim topic coherence of the top terms (higher is better)
"""

import itertools
import logging
import math
from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np
from gensim.models import CoherenceModel

from .constants import (
    ARUN_2010,
    C_V,
    CAO_JUAN_2009,
    COHERENCE_TOP_N,
    DEVEAUD_2014,
    PERPLEXITY,
    SUPPORTED_METRICS,
    U_MASS,
)
from .dtm import DocumentTermMatrix

if TYPE_CHECKING:
    from .lda_trainer import LDAFit

logger = logging.getLogger(__name__)

_TINY = np.finfo(np.float64).tiny


def cao_juan_2009(beta: np.ndarray) -> float:
    """Average pairwise cosine similarity of the topic-term rows."""
    num_topics = beta.shape[0]
    unit = beta / np.linalg.norm(beta, axis=1, keepdims=True)
    similarity = unit @ unit.T
    upper = np.triu_indices(num_topics, k=1)
    return float(similarity[upper].sum() / (num_topics * (num_topics - 1) / 2))


def arun_2010(beta: np.ndarray, gamma: np.ndarray, document_lengths: np.ndarray) -> float:
    """
    Symmetric KL divergence between the two topic "mass" vectors.

    cm1 is the singular value spectrum of beta, cm2 the document-length
    weighted sum of gamma scaled by the longest document.
    """
    cm1 = np.maximum(np.linalg.svd(beta, compute_uv=False), _TINY)
    lengths = np.asarray(document_lengths, dtype=np.float64)
    cm2 = np.maximum((lengths @ gamma) / np.max(np.abs(lengths)), _TINY)

    log_ratio = np.log(cm1) - np.log(cm2)
    return float(np.sum(cm1 * log_ratio) - np.sum(cm2 * log_ratio))


def deveaud_2014(beta: np.ndarray) -> float:
    """Sum of pairwise symmetric divergences between topics over k(k-1)."""
    num_topics = beta.shape[0]
    probs = beta + _TINY if np.any(beta == 0) else beta
    log_probs = np.log(probs)

    total = 0.0
    for i, j in itertools.combinations(range(num_topics), 2):
        log_ratio = log_probs[i] - log_probs[j]
        total += 0.5 * np.sum(probs[i] * log_ratio) - 0.5 * np.sum(probs[j] * log_ratio)

    return float(total / (num_topics * (num_topics - 1)))


def perplexity(gamma: np.ndarray, beta: np.ndarray, dtm: DocumentTermMatrix) -> float:
    """exp of the negative mean log-likelihood per token under gamma @ beta."""
    counts = dtm.counts
    rows = np.repeat(np.arange(counts.shape[0]), np.diff(counts.indptr))
    cols = counts.indices

    word_probs = np.einsum("nk,kn->n", gamma[rows], beta[:, cols])
    log_likelihood = np.sum(counts.data * np.log(np.maximum(word_probs, _TINY)))
    return float(np.exp(-log_likelihood / counts.data.sum()))


def coherence(
    fit: "LDAFit",
    dtm: DocumentTermMatrix,
    measure: str,
    texts: Optional[Sequence[Sequence[str]]] = None,
    top_n: int = COHERENCE_TOP_N,
) -> float:
    """gensim CoherenceModel score of each topic's top terms."""
    topics = [[entry.term for entry in terms] for terms in fit.terms(top_n).values()]

    coherence_model = CoherenceModel(
        topics=topics,
        corpus=dtm.to_bow() if measure == U_MASS else None,
        texts=[list(doc) for doc in texts] if texts is not None else None,
        dictionary=dtm.dictionary,
        coherence=measure,
        topn=len(topics[0]),
        processes=1,
    )
    return coherence_model.get_coherence()


def compute_metric(
    name: str,
    fit: "LDAFit",
    dtm: DocumentTermMatrix,
    texts: Optional[Sequence[Sequence[str]]] = None,
) -> Optional[float]:
    """
    Compute one named metric for a fit.

    Args:
        name: One of SUPPORTED_METRICS
        fit: LDA fit
        dtm: Document-term matrix the fit was trained on
        texts: Tokenized documents (required for c_v)

    Returns:
        Metric value, or None if it is not finite

    Raises:
        ValueError: For unknown metric names or c_v without texts
    """
    if name == CAO_JUAN_2009:
        value = cao_juan_2009(fit.beta)
    elif name == ARUN_2010:
        value = arun_2010(fit.beta, fit.gamma, dtm.document_lengths())
    elif name == DEVEAUD_2014:
        value = deveaud_2014(fit.beta)
    elif name == PERPLEXITY:
        value = perplexity(fit.gamma, fit.beta, dtm)
    elif name == U_MASS:
        value = coherence(fit, dtm, U_MASS)
    elif name == C_V:
        if texts is None:
            raise ValueError("The c_v coherence metric requires tokenized texts")
        value = coherence(fit, dtm, C_V, texts=texts)
    else:
        raise ValueError(
            f"Unknown metric '{name}'. Supported metrics: {list(SUPPORTED_METRICS)}"
        )

    if value is None or not math.isfinite(value):
        logger.warning(f"Metric {name} is not finite for k={fit.num_topics}")
        return None
    return float(value)


def validate_metric_names(names: Sequence[str]) -> List[str]:
    """
    Check metric names against SUPPORTED_METRICS.

    Raises:
        ValueError: If the list is empty or contains unknown names
    """
    names = list(names)
    if not names:
        raise ValueError("At least one metric is required")
    unknown = [name for name in names if name not in SUPPORTED_METRICS]
    if unknown:
        raise ValueError(
            f"Unknown metric(s) {unknown}. Supported metrics: {list(SUPPORTED_METRICS)}"
        )
    return names
