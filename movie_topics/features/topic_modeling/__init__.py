"""
Topic Modeling Module

LDA topic modeling of movie plot summaries: build a document-term matrix,
compare candidate topic counts, fit a model and summarize its topics.

Key Components:
- build_document_term_matrix: Vocabulary + sparse count matrix
- TopicCountSelector: Metric curves over candidate topic counts
- LDATrainer: Single LDA fit returning gamma and beta
- TopicSummarizer: Dominant topics, top terms, term importance
- TopicModelingPipeline: All stages end to end

Workflow:
1. Build the document-term matrix:
    ```python
    from movie_topics.preprocessing import Tokenizer, TokenizedCorpus, load_stopwords
    from movie_topics.features.topic_modeling import build_document_term_matrix

    tokenizer = Tokenizer(stopwords=load_stopwords())
    dtm = build_document_term_matrix(TokenizedCorpus(texts, tokenizer), doc_ids=titles)
    ```

2. Inspect candidate topic counts (k is chosen by reading the curves):
    ```python
    from movie_topics.features.topic_modeling import TopicCountSelector

    sweep = TopicCountSelector().evaluate(dtm, candidates=range(2, 16))
    print(sweep.to_frame(normalize=True))
    ```

3. Fit and summarize:
    ```python
    from movie_topics.features.topic_modeling import LDATrainer, TopicSummarizer

    fit = LDATrainer(random_state=42).fit(dtm, num_topics=8)
    summary = TopicSummarizer(top_n=10).summarize(fit)
    print(summary.topic_description(0))
    ```
"""

from .constants import (
    DEFAULT_METRICS,
    DEFAULT_TOP_N,
    SUPPORTED_METRICS,
    TOPIC_MODELING_MODULE_VERSION,
)
from .dtm import DocumentTermMatrix, build_document_term_matrix
from .exceptions import (
    EmptyCorpusError,
    InferenceError,
    InvalidTopicCountError,
    TopicModelingError,
)
from .lda_trainer import (
    GensimLdaBackend,
    LDABackend,
    LDAFit,
    LDATrainer,
    validate_num_topics,
)
from .metrics import compute_metric
from .pipeline import PipelineResult, TopicModelingPipeline
from .schemas import (
    DocumentTopic,
    TopicCountScore,
    TopicCountSweep,
    TopicSummary,
    TopicTerm,
)
from .selector import TopicCountSelector, candidate_topic_counts
from .summarizer import (
    TopicSummarizer,
    dominant_topics,
    gamma_distribution,
    project_documents,
    term_importance,
    top_terms,
    top_terms_frame,
    word_cloud_weights,
)

__all__ = [
    # Main classes
    "TopicModelingPipeline",
    "PipelineResult",
    "LDATrainer",
    "LDAFit",
    "LDABackend",
    "GensimLdaBackend",
    "TopicCountSelector",
    "TopicSummarizer",
    "DocumentTermMatrix",
    # Functions
    "build_document_term_matrix",
    "candidate_topic_counts",
    "compute_metric",
    "validate_num_topics",
    "dominant_topics",
    "top_terms",
    "term_importance",
    "word_cloud_weights",
    "gamma_distribution",
    "project_documents",
    "top_terms_frame",
    # Schemas
    "DocumentTopic",
    "TopicCountScore",
    "TopicCountSweep",
    "TopicSummary",
    "TopicTerm",
    # Errors
    "TopicModelingError",
    "EmptyCorpusError",
    "InferenceError",
    "InvalidTopicCountError",
    # Constants
    "TOPIC_MODELING_MODULE_VERSION",
    "DEFAULT_METRICS",
    "DEFAULT_TOP_N",
    "SUPPORTED_METRICS",
]

__version__ = TOPIC_MODELING_MODULE_VERSION
