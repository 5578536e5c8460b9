"""Unit tests for movie_topics/__main__.py - argument handling and output files."""

import json
from pathlib import Path

import pandas as pd
import pytest

from movie_topics.__main__ import main


@pytest.fixture
def plots_csv(tmp_path: Path, themed_texts) -> Path:
    path = tmp_path / "plots.csv"
    pd.DataFrame({
        "Title": [f"Movie {i}" for i in range(len(themed_texts))],
        "Plot": themed_texts,
    }).to_csv(path, index=False)
    return path


def _single_run_dir(output_dir: Path) -> Path:
    run_dirs = [path for path in output_dir.iterdir() if path.is_dir()]
    assert len(run_dirs) == 1
    return run_dirs[0]


class TestMain:
    def test_fit_writes_outputs(self, plots_csv: Path, tmp_path: Path):
        output_dir = tmp_path / "out"

        exit_code = main([
            "--input", str(plots_csv),
            "--output-dir", str(output_dir),
            "--num-topics", "2",
            "--top-n", "3",
            "--seed", "1",
        ])

        assert exit_code == 0
        run_dir = _single_run_dir(output_dir)
        assert run_dir.name.endswith("_topics_k2")

        for name in (
            "run_summary.json",
            "document_topics.csv",
            "gamma_distribution.csv",
            "document_projection.csv",
            "top_terms.csv",
            "term_importance.csv",
        ):
            assert (run_dir / name).exists(), name
        assert not (run_dir / "topic_count_metrics.csv").exists()

        summary = json.loads((run_dir / "run_summary.json").read_text(encoding="utf-8"))
        assert summary["num_documents"] == 12
        assert summary["num_topics"] == 2
        assert summary["random_state"] == 1
        assert sum(summary["topic_sizes"].values()) == 12

        top_terms = pd.read_csv(run_dir / "top_terms.csv")
        assert top_terms.groupby("topic").size().tolist() == [3, 3]

    def test_sweep_writes_metric_table(self, plots_csv: Path, tmp_path: Path):
        output_dir = tmp_path / "out"

        exit_code = main([
            "--input", str(plots_csv),
            "--output-dir", str(output_dir),
            "--num-topics", "2",
            "--sweep", "--k-min", "2", "--k-max", "3",
            "--metrics", "CaoJuan2009", "perplexity",
        ])

        assert exit_code == 0
        metrics = pd.read_csv(_single_run_dir(output_dir) / "topic_count_metrics.csv")
        assert list(metrics.columns) == ["k", "CaoJuan2009", "perplexity"]
        assert metrics["k"].tolist() == [2, 3]

    def test_missing_input_returns_error(self, tmp_path: Path):
        assert main(["--input", str(tmp_path / "missing.csv"), "--output-dir", str(tmp_path)]) == 1

    def test_wrong_text_column_returns_error(self, plots_csv: Path, tmp_path: Path):
        exit_code = main([
            "--input", str(plots_csv),
            "--output-dir", str(tmp_path / "out"),
            "--text-column", "Synopsis",
        ])
        assert exit_code == 1

    def test_invalid_topic_count_returns_error(self, plots_csv: Path, tmp_path: Path):
        exit_code = main([
            "--input", str(plots_csv),
            "--output-dir", str(tmp_path / "out"),
            "--num-topics", "1",
        ])
        assert exit_code == 1

    def test_unknown_metric_rejected_by_parser(self, plots_csv: Path):
        with pytest.raises(SystemExit):
            main(["--input", str(plots_csv), "--sweep", "--metrics", "Griffiths2004"])
