"""
Topic Modeling Constants and Configuration

This module defines constants for LDA-based topic modeling
of movie plot summaries.
"""

from typing import FrozenSet, Tuple

# ===========================
# Module Version
# ===========================
TOPIC_MODELING_MODULE_VERSION = "0.1.0"

# ===========================
# Default LDA Parameters
# ===========================
MIN_NUM_TOPICS = 2
"""Smallest topic count for which topics can separate"""

DEFAULT_PASSES = 10
"""Number of training passes through the corpus"""

DEFAULT_ITERATIONS = 100
"""Number of inference iterations per document"""

DEFAULT_RANDOM_STATE = 42
"""Random seed for reproducibility"""

DEFAULT_ALPHA = "symmetric"
"""Document-topic prior"""

DEFAULT_ETA = "symmetric"
"""Topic-word prior"""

PROBABILITY_TOLERANCE = 1e-6
"""Allowed deviation of a gamma or beta row sum from 1.0"""

# ===========================
# Topic Count Selection
# ===========================
DEFAULT_K_MIN = 2
DEFAULT_K_MAX = 15
DEFAULT_K_STEP = 1

CAO_JUAN_2009 = "CaoJuan2009"
"""Mean pairwise cosine similarity between topics (minimize)"""

ARUN_2010 = "Arun2010"
"""Symmetric KL divergence of beta singular values vs topic mass (minimize)"""

DEVEAUD_2014 = "Deveaud2014"
"""Mean pairwise divergence between topics (maximize)"""

PERPLEXITY = "perplexity"
"""Per-word perplexity of the corpus under the fit (minimize)"""

U_MASS = "u_mass"
"""gensim UMass coherence of top terms (maximize)"""

C_V = "c_v"
"""gensim C_V coherence of top terms, needs tokenized texts (maximize)"""

SUPPORTED_METRICS: Tuple[str, ...] = (
    CAO_JUAN_2009,
    ARUN_2010,
    DEVEAUD_2014,
    PERPLEXITY,
    U_MASS,
    C_V,
)

DEFAULT_METRICS: Tuple[str, ...] = (CAO_JUAN_2009, ARUN_2010, DEVEAUD_2014)

METRICS_REQUIRING_TEXTS: FrozenSet[str] = frozenset({C_V})

COHERENCE_TOP_N = 10
"""Top terms per topic used for coherence metrics"""

# ===========================
# Summaries
# ===========================
DEFAULT_TOP_N = 10
"""Terms kept per topic in the top-terms table"""

DEFAULT_PROJECTION_COMPONENTS = 2
"""PCA components for the document scatter"""

# ===========================
# Output Files
# ===========================
TOPIC_COUNT_METRICS_FILENAME = "topic_count_metrics.csv"
DOCUMENT_TOPICS_FILENAME = "document_topics.csv"
GAMMA_DISTRIBUTION_FILENAME = "gamma_distribution.csv"
DOCUMENT_PROJECTION_FILENAME = "document_projection.csv"
TOP_TERMS_FILENAME = "top_terms.csv"
TERM_IMPORTANCE_FILENAME = "term_importance.csv"
RUN_SUMMARY_FILENAME = "run_summary.json"

# ===========================
# Training Recommendations
# ===========================
RECOMMENDED_MIN_CORPUS_SIZE = 50
"""Minimum number of documents recommended for training LDA"""
