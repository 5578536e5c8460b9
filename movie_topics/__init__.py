"""Exploratory LDA topic modeling of movie plot summaries."""

__version__ = "0.1.0"
