"""Unit tests for movie_topics/features/topic_modeling/schemas.py."""

import math

import pytest
from pydantic import ValidationError

from movie_topics.features.topic_modeling import (
    DocumentTopic,
    TopicCountScore,
    TopicCountSweep,
    TopicSummary,
    TopicTerm,
)


@pytest.fixture
def sweep() -> TopicCountSweep:
    scores = [
        TopicCountScore(metric="CaoJuan2009", k=2, score=0.30),
        TopicCountScore(metric="CaoJuan2009", k=3, score=0.10),
        TopicCountScore(metric="CaoJuan2009", k=4, score=None),
        TopicCountScore(metric="Deveaud2014", k=2, score=1.5),
        TopicCountScore(metric="Deveaud2014", k=3, score=1.5),
        TopicCountScore(metric="Deveaud2014", k=4, score=None),
    ]
    return TopicCountSweep(
        candidates=[2, 3, 4],
        metrics=["CaoJuan2009", "Deveaud2014"],
        scores=scores,
        failures={4: "did not converge"},
    )


class TestProbabilityFields:
    def test_tolerates_rounding_above_one(self):
        assert TopicTerm(term="ship", beta=1.0 + 1e-9).beta == 1.0

    def test_tolerates_rounding_below_zero(self):
        assert DocumentTopic(doc_id="a", topic_id=0, probability=-1e-9).probability == 0.0

    def test_rejects_out_of_range(self):
        with pytest.raises(ValidationError):
            TopicTerm(term="ship", beta=1.5)

    def test_rejects_negative_topic_id(self):
        with pytest.raises(ValidationError):
            DocumentTopic(doc_id="a", topic_id=-1, probability=0.5)


class TestTopicCountSweep:
    def test_score_lookup(self, sweep: TopicCountSweep):
        assert sweep.score("CaoJuan2009", 3) == pytest.approx(0.10)
        assert sweep.score("Deveaud2014", 4) is None

    def test_score_missing_pair(self, sweep: TopicCountSweep):
        with pytest.raises(KeyError):
            sweep.score("Arun2010", 2)

    def test_succeeded(self, sweep: TopicCountSweep):
        assert sweep.succeeded() == [2, 3]

    def test_to_frame(self, sweep: TopicCountSweep):
        frame = sweep.to_frame()
        assert list(frame.columns) == ["k", "CaoJuan2009", "Deveaud2014"]
        assert frame["k"].tolist() == [2, 3, 4]
        assert frame["CaoJuan2009"].tolist()[:2] == pytest.approx([0.30, 0.10])
        assert math.isnan(frame["CaoJuan2009"].iloc[2])

    def test_to_frame_normalized(self, sweep: TopicCountSweep):
        frame = sweep.to_frame(normalize=True)
        assert frame["CaoJuan2009"].tolist()[:2] == pytest.approx([1.0, 0.0])
        # Constant column collapses to zero, missing stays missing
        assert frame["Deveaud2014"].tolist()[:2] == [0.0, 0.0]
        assert math.isnan(frame["Deveaud2014"].iloc[2])

    def test_to_frame_does_not_change_scores(self, sweep: TopicCountSweep):
        sweep.to_frame(normalize=True)
        assert sweep.score("CaoJuan2009", 2) == pytest.approx(0.30)


class TestTopicSummary:
    @pytest.fixture
    def summary(self) -> TopicSummary:
        return TopicSummary(
            num_topics=3,
            top_n=2,
            document_topics=[
                DocumentTopic(doc_id="a", topic_id=0, probability=0.7),
                DocumentTopic(doc_id="b", topic_id=0, probability=0.6),
                DocumentTopic(doc_id="c", topic_id=2, probability=0.9),
            ],
            top_terms={
                0: [TopicTerm(term="ship", beta=0.4), TopicTerm(term="sea", beta=0.3)],
                1: [],
                2: [TopicTerm(term="chef", beta=0.5), TopicTerm(term="bread", beta=0.2)],
            },
        )

    def test_topic_description(self, summary: TopicSummary):
        assert summary.topic_description(0) == "Topic 0: ship, sea"
        assert summary.topic_description(2, num_words=1) == "Topic 2: chef"

    def test_topic_description_without_terms(self, summary: TopicSummary):
        assert summary.topic_description(1) == "Topic 1"

    def test_topic_sizes_include_empty_topics(self, summary: TopicSummary):
        assert summary.topic_sizes() == {0: 2, 1: 0, 2: 1}
