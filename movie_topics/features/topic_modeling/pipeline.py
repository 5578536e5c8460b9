"""
Topic Modeling Pipeline

Runs the stages end to end. Each stage takes the previous stage's output
and returns a new value:

    documents -> token lists -> DocumentTermMatrix
              -> (optional) TopicCountSweep
              -> LDAFit -> TopicSummary

Usage:
    from movie_topics.features.topic_modeling import TopicModelingPipeline

    pipeline = TopicModelingPipeline()
    result = pipeline.run("data/raw/movie_plots.csv", num_topics=8, sweep=True)

    print(result.sweep.to_frame())
    for topic_id in range(result.fit.num_topics):
        print(result.summary.topic_description(topic_id))
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from movie_topics.config import TopicModelingConfig, settings
from movie_topics.preprocessing import (
    Document,
    Tokenizer,
    TokenizedCorpus,
    load_documents,
    load_stopwords,
)
from .constants import METRICS_REQUIRING_TEXTS
from .dtm import DocumentTermMatrix, build_document_term_matrix
from .lda_trainer import GensimLdaBackend, LDABackend, LDAFit, LDATrainer
from .schemas import TopicCountSweep, TopicSummary
from .selector import TopicCountSelector, candidate_topic_counts
from .summarizer import TopicSummarizer, word_cloud_weights

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PipelineResult:
    """Outputs of a full pipeline run."""
    documents: Tuple[Document, ...]
    dtm: DocumentTermMatrix
    fit: LDAFit
    summary: TopicSummary
    sweep: Optional[TopicCountSweep] = None


class TopicModelingPipeline:
    """
    End-to-end topic modeling over a corpus of movie plots.

    Defaults come from settings.topic_modeling; pass a TopicModelingConfig
    to override them.
    """

    def __init__(
        self,
        config: Optional[TopicModelingConfig] = None,
        stopwords: Optional[Iterable[str]] = None,
        backend: Optional[LDABackend] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Topic modeling configuration (default: global settings)
            stopwords: Stop-word set; loaded from NLTK plus the configured
                extras when omitted
            backend: LDA backend (default: GensimLdaBackend from config)
        """
        self.config = config if config is not None else settings.topic_modeling
        prep = self.config.preprocessing
        model = self.config.model

        if stopwords is None:
            stopwords = load_stopwords(
                language=prep.stopword_language,
                extra=prep.extra_stopwords,
                use_nltk=prep.use_nltk_stopwords,
            )
        self.tokenizer = Tokenizer(stopwords=stopwords, min_token_length=prep.min_token_length)

        self.backend = backend if backend is not None else GensimLdaBackend(
            passes=model.passes,
            iterations=model.iterations,
            alpha=model.alpha,
            eta=model.eta,
        )
        self.trainer = LDATrainer(backend=self.backend, random_state=model.random_state)
        self.summarizer = TopicSummarizer(top_n=self.config.summary.top_n)

    # ===========================
    # Stages
    # ===========================

    def load(self, path: Path | str) -> List[Document]:
        """Read documents from a CSV using the configured columns."""
        prep = self.config.preprocessing
        return load_documents(path, id_column=prep.id_column, text_column=prep.text_column)

    def tokenize(self, documents: Sequence[Document]) -> TokenizedCorpus:
        """Restartable token stream over the documents."""
        return TokenizedCorpus([doc.text for doc in documents], self.tokenizer)

    def build_matrix(self, documents: Sequence[Document]) -> DocumentTermMatrix:
        """Tokenize documents and build the document-term matrix."""
        prep = self.config.preprocessing
        return build_document_term_matrix(
            self.tokenize(documents),
            doc_ids=[doc.doc_id for doc in documents],
            no_below=prep.no_below,
            no_above=prep.no_above,
            keep_n=prep.keep_n,
        )

    def select_topic_count(
        self,
        dtm: DocumentTermMatrix,
        candidates: Optional[Iterable[int]] = None,
        texts: Optional[Iterable[Sequence[str]]] = None,
    ) -> TopicCountSweep:
        """Score the configured metrics over candidate topic counts."""
        selection = self.config.selection
        if candidates is None:
            candidates = candidate_topic_counts(selection.k_min, selection.k_max, selection.step)

        selector = TopicCountSelector(
            metrics=selection.metrics,
            backend=self.backend,
            random_state=self.config.model.random_state,
            max_workers=selection.max_workers,
        )
        return selector.evaluate(dtm, candidates=candidates, texts=texts)

    def fit(self, dtm: DocumentTermMatrix, num_topics: Optional[int] = None) -> LDAFit:
        """Fit LDA with the given (or configured) number of topics."""
        if num_topics is None:
            num_topics = self.config.model.num_topics
        return self.trainer.fit(dtm, num_topics)

    def summarize(self, fit: LDAFit) -> TopicSummary:
        return self.summarizer.summarize(fit)

    def word_cloud(self, summary: TopicSummary) -> List[Tuple[str, float]]:
        """Word-cloud weights using the configured cutoff and size cap."""
        summary_config = self.config.summary
        return word_cloud_weights(
            summary.term_importance,
            min_weight=summary_config.word_cloud_min_weight,
            max_words=summary_config.word_cloud_max_words,
        )

    # ===========================
    # End to end
    # ===========================

    def run(
        self,
        source: Path | str | Sequence[Document],
        num_topics: Optional[int] = None,
        sweep: bool = False,
        candidates: Optional[Iterable[int]] = None,
    ) -> PipelineResult:
        """
        Run every stage.

        Args:
            source: CSV path or already-loaded documents
            num_topics: k for the final fit (default: configured value)
            sweep: Also evaluate the topic-count metrics
            candidates: Topic counts for the sweep (default: configured range)

        Returns:
            PipelineResult

        Raises:
            EmptyCorpusError: If there are no usable documents
            InvalidTopicCountError: If num_topics is out of range
            InferenceError: If the final fit fails
        """
        if isinstance(source, (str, Path)):
            logger.info(f"Step 1: Loading documents from {source}...")
            documents = self.load(source)
        else:
            logger.info("Step 1: Using provided documents...")
            documents = list(source)

        logger.info("Step 2: Building document-term matrix...")
        dtm = self.build_matrix(documents)

        topic_sweep = None
        if sweep:
            logger.info("Step 3: Evaluating candidate topic counts...")
            needs_texts = METRICS_REQUIRING_TEXTS.intersection(self.config.selection.metrics)
            topic_sweep = self.select_topic_count(
                dtm,
                candidates=candidates,
                texts=self.tokenize(documents) if needs_texts else None,
            )

        logger.info("Step 4: Fitting LDA model...")
        fit = self.fit(dtm, num_topics)

        logger.info("Step 5: Summarizing topics...")
        summary = self.summarize(fit)

        return PipelineResult(
            documents=tuple(documents),
            dtm=dtm,
            fit=fit,
            summary=summary,
            sweep=topic_sweep,
        )
