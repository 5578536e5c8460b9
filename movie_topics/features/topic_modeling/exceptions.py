"""
Topic Modeling Errors

All errors raised by the topic modeling stages derive from
TopicModelingError. They also subclass the matching builtin so callers
that only catch ValueError / RuntimeError keep working.
"""


class TopicModelingError(Exception):
    """Base class for topic modeling failures."""


class EmptyCorpusError(TopicModelingError, ValueError):
    """Raised when there are no documents or the vocabulary is empty."""


class InferenceError(TopicModelingError, RuntimeError):
    """Raised when an LDA fit fails or returns unusable matrices."""


class InvalidTopicCountError(InferenceError, ValueError):
    """Raised when k < 2 or k exceeds the vocabulary size."""
