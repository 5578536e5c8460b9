"""
Unit tests for movie_topics/features/topic_modeling/metrics.py

Closed-form checks use hand-built beta/gamma matrices; coherence runs on
a small real fit.
"""

import math

import numpy as np
import pytest

from movie_topics.features.topic_modeling import LDAFit, LDATrainer, compute_metric
from movie_topics.features.topic_modeling.metrics import (
    arun_2010,
    cao_juan_2009,
    deveaud_2014,
    perplexity,
    validate_metric_names,
)


IDENTICAL_BETA = np.array([
    [0.5, 0.3, 0.2],
    [0.5, 0.3, 0.2],
])
DISJOINT_BETA = np.array([
    [0.5, 0.5, 0.0, 0.0],
    [0.0, 0.0, 0.5, 0.5],
])


class TestCaoJuan2009:
    def test_identical_topics(self):
        assert cao_juan_2009(IDENTICAL_BETA) == pytest.approx(1.0)

    def test_disjoint_topics(self):
        assert cao_juan_2009(DISJOINT_BETA) == pytest.approx(0.0)

    def test_averages_over_pairs(self):
        beta = np.array([
            [1.0, 0.0],
            [1.0, 0.0],
            [0.0, 1.0],
        ])
        # pairs: (0,1)=1, (0,2)=0, (1,2)=0
        assert cao_juan_2009(beta) == pytest.approx(1.0 / 3.0)


class TestDeveaud2014:
    def test_identical_topics(self):
        assert deveaud_2014(IDENTICAL_BETA) == pytest.approx(0.0)

    def test_distinct_topics_score_higher(self):
        close = np.array([
            [0.5, 0.3, 0.2],
            [0.4, 0.3, 0.3],
        ])
        far = np.array([
            [0.8, 0.1, 0.1],
            [0.1, 0.1, 0.8],
        ])
        assert deveaud_2014(far) > deveaud_2014(close) > 0.0

    def test_zero_probabilities_are_finite(self):
        assert math.isfinite(deveaud_2014(DISJOINT_BETA))


class TestArun2010:
    def test_finite_and_non_negative(self, handmade_fit: LDAFit):
        value = arun_2010(handmade_fit.beta, handmade_fit.gamma, np.array([10, 20, 5, 8]))
        assert math.isfinite(value)
        assert value >= 0.0

    def test_symmetric_divergence_is_zero_for_equal_masses(self):
        # beta = I has singular values [1, 1]; equal lengths and uniform
        # gamma give a topic mass of [1, 1] too.
        beta = np.eye(2)
        gamma = np.array([[0.5, 0.5], [0.5, 0.5]])
        assert arun_2010(beta, gamma, np.array([1, 1])) == pytest.approx(0.0)


class TestPerplexity:
    def test_uniform_model_equals_vocabulary_size(self, pet_dtm):
        gamma = np.full((3, 2), 0.5)
        beta = np.full((2, 8), 1.0 / 8)
        assert perplexity(gamma, beta, pet_dtm) == pytest.approx(8.0)

    def test_better_model_has_lower_perplexity(self, pet_dtm, fast_backend):
        fit = LDATrainer(backend=fast_backend).fit(pet_dtm, num_topics=2)
        assert perplexity(fit.gamma, fit.beta, pet_dtm) < 8.0


class TestComputeMetric:
    """Dispatch by metric name."""

    @pytest.mark.parametrize("name", ["CaoJuan2009", "Arun2010", "Deveaud2014", "perplexity", "u_mass"])
    def test_returns_finite_float(self, name, themed_fit, themed_dtm):
        value = compute_metric(name, themed_fit, themed_dtm)
        assert isinstance(value, float)
        assert math.isfinite(value)

    def test_c_v_with_texts(self, themed_fit, themed_dtm, themed_documents, basic_tokenizer):
        texts = [basic_tokenizer.tokenize(doc.text) for doc in themed_documents]
        value = compute_metric("c_v", themed_fit, themed_dtm, texts=texts)
        assert value is None or math.isfinite(value)

    def test_c_v_requires_texts(self, themed_fit, themed_dtm):
        with pytest.raises(ValueError, match="requires tokenized texts"):
            compute_metric("c_v", themed_fit, themed_dtm)

    def test_unknown_metric(self, themed_fit, themed_dtm):
        with pytest.raises(ValueError, match="Unknown metric"):
            compute_metric("Griffiths2004", themed_fit, themed_dtm)

    def test_does_not_modify_fit(self, themed_fit, themed_dtm):
        gamma, beta = themed_fit.gamma.copy(), themed_fit.beta.copy()
        compute_metric("Arun2010", themed_fit, themed_dtm)
        np.testing.assert_array_equal(themed_fit.gamma, gamma)
        np.testing.assert_array_equal(themed_fit.beta, beta)


class TestValidateMetricNames:
    def test_valid_names(self):
        assert validate_metric_names(("CaoJuan2009", "u_mass")) == ["CaoJuan2009", "u_mass"]

    def test_empty(self):
        with pytest.raises(ValueError, match="At least one metric"):
            validate_metric_names([])

    def test_unknown(self):
        with pytest.raises(ValueError, match="Griffiths2004"):
            validate_metric_names(["CaoJuan2009", "Griffiths2004"])
