"""
Topic Count Selection

Fits one LDA model per candidate topic count and scores each fit with the
requested metrics, producing the curves used to pick k by inspection.

Every candidate is fitted with the same seed in its own model, so fits
are independent and may run in a process pool. A candidate whose fit fails
is recorded with no scores; the remaining candidates are still evaluated.

Usage:
    from movie_topics.features.topic_modeling.selector import (
        TopicCountSelector, candidate_topic_counts,
    )

    selector = TopicCountSelector(metrics=["CaoJuan2009", "Deveaud2014"])
    sweep = selector.evaluate(dtm, candidate_topic_counts(2, 15))
    print(sweep.to_frame(normalize=True))
"""

import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from movie_topics.utils.parallel import ParallelProcessor
from .constants import (
    DEFAULT_K_MAX,
    DEFAULT_K_MIN,
    DEFAULT_K_STEP,
    DEFAULT_METRICS,
    DEFAULT_RANDOM_STATE,
    METRICS_REQUIRING_TEXTS,
)
from .dtm import DocumentTermMatrix
from .exceptions import InferenceError
from .lda_trainer import GensimLdaBackend, LDABackend, LDATrainer
from .metrics import compute_metric, validate_metric_names
from .schemas import TopicCountScore, TopicCountSweep

logger = logging.getLogger(__name__)

CandidateTask = Tuple[
    DocumentTermMatrix, int, LDABackend, int, Tuple[str, ...], Optional[List[List[str]]]
]


def candidate_topic_counts(
    k_min: int = DEFAULT_K_MIN,
    k_max: int = DEFAULT_K_MAX,
    step: int = DEFAULT_K_STEP,
) -> List[int]:
    """
    Inclusive range of candidate topic counts.

    Raises:
        ValueError: If step < 1 or k_min > k_max
    """
    if step < 1:
        raise ValueError(f"step must be positive, got {step}")
    if k_min > k_max:
        raise ValueError(f"k_min ({k_min}) is greater than k_max ({k_max})")
    return list(range(k_min, k_max + 1, step))


def _error_record(
    num_topics: int,
    error: Exception,
    start: float,
    metric: Optional[str] = None,
) -> Dict[str, Any]:
    message = str(error) if metric is None else f"{metric}: {error}"
    return {
        'status': 'error',
        'label': f"k={num_topics}",
        'k': num_topics,
        'error': message,
        'error_type': type(error).__name__,
        'elapsed_time': time.time() - start,
    }


def _evaluate_candidate(task: CandidateTask) -> Dict[str, Any]:
    """Fit and score one candidate k (runs in a worker process when parallel)."""
    dtm, num_topics, backend, random_state, metrics, texts = task
    start = time.time()

    try:
        fit = LDATrainer(backend=backend, random_state=random_state).fit(dtm, num_topics)
    except InferenceError as e:
        logger.error(f"Fit for k={num_topics} failed: {e}")
        return _error_record(num_topics, e, start)

    scores = {}
    for metric in metrics:
        try:
            scores[metric] = compute_metric(metric, fit, dtm, texts)
        except Exception as e:
            logger.error(f"Metric {metric} for k={num_topics} failed: {e}")
            return _error_record(num_topics, e, start, metric=metric)

    return {
        'status': 'success',
        'label': f"k={num_topics}",
        'k': num_topics,
        'scores': scores,
        'elapsed_time': time.time() - start,
    }


class TopicCountSelector:
    """
    Evaluates model-selection metrics over a range of topic counts.

    The selector reports scores only; it never picks k.

    Usage:
        selector = TopicCountSelector(
            metrics=["CaoJuan2009", "Arun2010", "Deveaud2014"],
            random_state=42,
            max_workers=4,
        )
        sweep = selector.evaluate(dtm, candidates=range(2, 16))
        sweep.score("Deveaud2014", 6)
    """

    def __init__(
        self,
        metrics: Sequence[str] = DEFAULT_METRICS,
        backend: Optional[LDABackend] = None,
        random_state: int = DEFAULT_RANDOM_STATE,
        max_workers: Optional[int] = 1,
    ):
        """
        Initialize topic count selector.

        Args:
            metrics: Metric names (see constants.SUPPORTED_METRICS)
            backend: LDA backend used for every fit (must be picklable
                when max_workers > 1)
            random_state: Seed shared by all candidate fits
            max_workers: Worker processes (1 = sequential, None = one per CPU)

        Raises:
            ValueError: If metrics is empty or names an unknown metric
        """
        self.metrics: Tuple[str, ...] = tuple(validate_metric_names(metrics))
        self.backend = backend if backend is not None else GensimLdaBackend()
        self.random_state = random_state
        self.max_workers = max_workers

    def evaluate(
        self,
        dtm: DocumentTermMatrix,
        candidates: Optional[Iterable[int]] = None,
        texts: Optional[Iterable[Sequence[str]]] = None,
    ) -> TopicCountSweep:
        """
        Fit and score every candidate topic count.

        Args:
            dtm: Document-term matrix shared (read-only) by all fits
            candidates: Topic counts to try (default: 2..15)
            texts: Tokenized documents, required by text-based coherence

        Returns:
            TopicCountSweep with one score per (metric, k); failed
            candidates have None scores and an entry in failures

        Raises:
            ValueError: If there are no candidates, or a metric needs texts
                and none were given
        """
        if candidates is None:
            candidates = candidate_topic_counts()
        candidates = list(dict.fromkeys(int(k) for k in candidates))
        if not candidates:
            raise ValueError("No candidate topic counts to evaluate")

        needs_texts = METRICS_REQUIRING_TEXTS.intersection(self.metrics)
        if needs_texts and texts is None:
            raise ValueError(f"Metric(s) {sorted(needs_texts)} require tokenized texts")
        token_lists = [list(doc) for doc in texts] if texts is not None else None

        logger.info(
            f"Evaluating {len(candidates)} topic counts "
            f"({candidates[0]}..{candidates[-1]}) with metrics {list(self.metrics)}"
        )

        tasks: List[CandidateTask] = [
            (dtm, k, self.backend, self.random_state, self.metrics, token_lists)
            for k in candidates
        ]
        processor = ParallelProcessor(max_workers=self.max_workers)
        results = processor.process_batch(tasks, _evaluate_candidate)

        scores: List[TopicCountScore] = []
        failures: Dict[int, str] = {}
        for k, result in zip(candidates, results):
            if result.get('status') == 'success':
                candidate_scores = result['scores']
            else:
                failures[k] = result.get('error', 'unknown error')
                candidate_scores = {}

            for metric in self.metrics:
                scores.append(
                    TopicCountScore(metric=metric, k=k, score=candidate_scores.get(metric))
                )

        if failures:
            logger.warning(
                f"{len(failures)}/{len(candidates)} topic counts failed: {sorted(failures)}"
            )

        return TopicCountSweep(
            candidates=candidates,
            metrics=list(self.metrics),
            scores=scores,
            failures=failures,
        )
