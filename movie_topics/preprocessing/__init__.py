"""
Input loading and text normalization.

Usage:
    from movie_topics.preprocessing import load_documents, Tokenizer, load_stopwords

    documents = load_documents("data/raw/movie_plots.csv")
    tokenizer = Tokenizer(stopwords=load_stopwords())
    tokens = tokenizer.tokenize(documents[0].text)
"""

from .loader import documents_from_frame, load_documents
from .models import Document
from .tokenizer import Tokenizer, TokenizedCorpus, load_stopwords

__all__ = [
    "Document",
    "documents_from_frame",
    "load_documents",
    "Tokenizer",
    "TokenizedCorpus",
    "load_stopwords",
]
