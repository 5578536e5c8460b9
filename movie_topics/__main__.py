"""
CLI entry point for the movie plot topic modeling pipeline.

Output layout:
    data/processed/topics/
    └── {YYYYMMDD_HHMMSS}_topics_k{k}/
        ├── run_summary.json            # Corpus/model stats and topic descriptions
        ├── topic_count_metrics.csv     # Metric curves (--sweep only)
        ├── document_topics.csv         # Dominant topic per movie
        ├── gamma_distribution.csv      # (document, topic, gamma) for histograms
        ├── document_projection.csv     # PCA of gamma for scatter plots
        ├── top_terms.csv               # Top terms per topic for bar charts
        └── term_importance.csv         # (term, weight) for word clouds

Usage:
    python -m movie_topics --input data/raw/movie_plots.csv --num-topics 8
    python -m movie_topics --input data/raw/movie_plots.csv --sweep --k-min 2 --k-max 15
    python -m movie_topics --sweep --metrics CaoJuan2009 Deveaud2014 --workers 4
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pandas as pd

from movie_topics.config import TopicModelingConfig, settings
from movie_topics.features.topic_modeling import (
    PipelineResult,
    SUPPORTED_METRICS,
    TopicModelingError,
    TopicModelingPipeline,
    candidate_topic_counts,
    gamma_distribution,
    project_documents,
    top_terms_frame,
)
from movie_topics.features.topic_modeling.constants import (
    DOCUMENT_PROJECTION_FILENAME,
    DOCUMENT_TOPICS_FILENAME,
    GAMMA_DISTRIBUTION_FILENAME,
    RUN_SUMMARY_FILENAME,
    TERM_IMPORTANCE_FILENAME,
    TOP_TERMS_FILENAME,
    TOPIC_COUNT_METRICS_FILENAME,
)

logger = logging.getLogger(__name__)


def _apply_overrides(config: TopicModelingConfig, args: argparse.Namespace) -> TopicModelingConfig:
    """Return a copy of config with CLI flags applied."""
    prep_updates = {
        key: value for key, value in (
            ('id_column', args.id_column),
            ('text_column', args.text_column),
        ) if value is not None
    }
    model_updates = {
        key: value for key, value in (
            ('num_topics', args.num_topics),
            ('random_state', args.seed),
        ) if value is not None
    }
    selection_updates = {
        key: value for key, value in (
            ('k_min', args.k_min),
            ('k_max', args.k_max),
            ('step', args.step),
            ('metrics', args.metrics),
            ('max_workers', args.workers),
        ) if value is not None
    }
    summary_updates = {'top_n': args.top_n} if args.top_n is not None else {}

    return config.model_copy(update={
        'preprocessing': config.preprocessing.model_copy(update=prep_updates),
        'model': config.model.model_copy(update=model_updates),
        'selection': config.selection.model_copy(update=selection_updates),
        'summary': config.summary.model_copy(update=summary_updates),
    })


def write_outputs(
    result: PipelineResult,
    pipeline: TopicModelingPipeline,
    run_dir: Path,
    input_path: Path,
) -> None:
    """Write every output table of a run into run_dir."""
    run_dir.mkdir(parents=True, exist_ok=True)
    summary = result.summary

    if result.sweep is not None:
        result.sweep.to_frame().to_csv(run_dir / TOPIC_COUNT_METRICS_FILENAME, index=False)

    pd.DataFrame([doc.model_dump() for doc in summary.document_topics]).to_csv(
        run_dir / DOCUMENT_TOPICS_FILENAME, index=False
    )
    gamma_distribution(result.fit).to_csv(run_dir / GAMMA_DISTRIBUTION_FILENAME, index=False)
    top_terms_frame(summary.top_terms).to_csv(run_dir / TOP_TERMS_FILENAME, index=False)
    pd.DataFrame(pipeline.word_cloud(summary), columns=["term", "weight"]).to_csv(
        run_dir / TERM_IMPORTANCE_FILENAME, index=False
    )

    n_components = pipeline.config.summary.projection_components
    try:
        project_documents(result.fit, n_components=n_components).to_csv(
            run_dir / DOCUMENT_PROJECTION_FILENAME, index=False
        )
    except ValueError as e:
        logger.warning(f"Skipping document projection: {e}")

    run_summary = {
        'input': str(input_path),
        'timestamp': datetime.now().isoformat(),
        'num_documents': result.dtm.num_documents,
        'vocabulary_size': result.dtm.vocabulary_size,
        'num_topics': result.fit.num_topics,
        'random_state': result.fit.random_state,
        'top_n': summary.top_n,
        'topic_sizes': summary.topic_sizes(),
        'topics': {
            topic_id: summary.topic_description(topic_id)
            for topic_id in range(result.fit.num_topics)
        },
        'sweep_failures': result.sweep.failures if result.sweep is not None else {},
    }
    with open(run_dir / RUN_SUMMARY_FILENAME, 'w', encoding='utf-8') as f:
        json.dump(run_summary, f, indent=2)

    logger.info(f"Saved outputs to {run_dir}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(
        description="Movie plot topic modeling: Tokenize -> DTM -> (Sweep k) -> LDA -> Summaries"
    )
    ap.add_argument('--input', type=str, default=None,
                    help='CSV of movie plots (default: data/raw/<input_filename>)')
    ap.add_argument('--output-dir', type=str, default=None, dest='output_dir',
                    help='Base output directory (default: data/processed/topics)')
    ap.add_argument('--num-topics', type=int, default=None, dest='num_topics',
                    help='Number of topics for the final fit')
    ap.add_argument('--sweep', action='store_true',
                    help='Evaluate topic-count metrics over k_min..k_max before fitting')
    ap.add_argument('--k-min', type=int, default=None, dest='k_min')
    ap.add_argument('--k-max', type=int, default=None, dest='k_max')
    ap.add_argument('--step', type=int, default=None)
    ap.add_argument('--metrics', nargs='+', default=None, choices=SUPPORTED_METRICS,
                    help='Topic-count metrics to compute')
    ap.add_argument('--workers', type=int, default=None,
                    help='Worker processes for the sweep (default: 1)')
    ap.add_argument('--top-n', type=int, default=None, dest='top_n',
                    help='Terms per topic in the top-terms table')
    ap.add_argument('--seed', type=int, default=None, help='Random seed')
    ap.add_argument('--id-column', type=str, default=None, dest='id_column')
    ap.add_argument('--text-column', type=str, default=None, dest='text_column')
    ap.add_argument('--verbose', action='store_true', help='Debug logging')
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = _apply_overrides(settings.topic_modeling, args)
    input_path = Path(args.input) if args.input else settings.paths.default_input_csv
    output_base = Path(args.output_dir) if args.output_dir else settings.paths.topics_output_dir

    try:
        pipeline = TopicModelingPipeline(config=config)
        candidates = None
        if args.sweep:
            candidates = candidate_topic_counts(
                config.selection.k_min, config.selection.k_max, config.selection.step
            )
        result = pipeline.run(input_path, sweep=args.sweep, candidates=candidates)
    except (TopicModelingError, FileNotFoundError, ValueError) as e:
        logger.error(f"Topic modeling failed: {e}")
        return 1

    for topic_id in range(result.fit.num_topics):
        logger.info(result.summary.topic_description(topic_id))

    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = output_base / f"{run_id}_topics_k{result.fit.num_topics}"
    write_outputs(result, pipeline, run_dir, input_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
