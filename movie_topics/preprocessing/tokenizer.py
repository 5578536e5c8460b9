"""
Text normalization for topic modeling.

Turns raw plot text into lists of normalized tokens: lowercase, no
punctuation, no digits, single-spaced, stop words removed.

Usage:
    from movie_topics.preprocessing.tokenizer import Tokenizer, TokenizedCorpus, load_stopwords

    tokenizer = Tokenizer(stopwords=load_stopwords())
    tokenizer.tokenize("The cat sat on the mat.")   # ['cat', 'sat', 'mat']

    # Streamed, restartable corpus (one token list per document)
    corpus = TokenizedCorpus(texts, tokenizer)
    for tokens in corpus:
        ...
"""

import logging
import unicodedata
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence

from gensim.parsing.preprocessing import (
    STOPWORDS as GENSIM_STOPWORDS,
    preprocess_string,
    strip_multiple_whitespaces,
    strip_numeric,
    strip_punctuation,
)
from nltk.corpus import stopwords as nltk_stopwords

from .constants import DEFAULT_MIN_TOKEN_LENGTH, DEFAULT_STOPWORD_LANGUAGE

logger = logging.getLogger(__name__)


def normalize_unicode(s: str) -> str:
    """NFKC-normalize so compatibility forms (ellipsis, full-width digits) fold to plain ones."""
    return unicodedata.normalize('NFKC', s)


def strip_unicode_punctuation(s: str) -> str:
    """Replace every Unicode punctuation character (category P*) with a space."""
    return ''.join(' ' if unicodedata.category(ch).startswith('P') else ch for ch in s)


def strip_unicode_digits(s: str) -> str:
    """Remove decimal digits of any script (category Nd)."""
    return ''.join(ch for ch in s if unicodedata.category(ch) != 'Nd')


NORMALIZATION_FILTERS = [
    normalize_unicode,
    str.lower,
    strip_unicode_punctuation,
    strip_punctuation,
    strip_numeric,
    strip_unicode_digits,
    strip_multiple_whitespaces,
]


def load_stopwords(
    language: str = DEFAULT_STOPWORD_LANGUAGE,
    extra: Optional[Iterable[str]] = None,
    use_nltk: bool = True,
) -> FrozenSet[str]:
    """
    Load a stop-word set (NLTK list + caller-supplied words).

    Falls back to gensim's built-in English list when the NLTK corpus
    has not been downloaded.

    Args:
        language: NLTK stopwords language
        extra: Additional stop words
        use_nltk: Use the NLTK list as the base set

    Returns:
        Lowercased stop words
    """
    words = set()

    if use_nltk:
        try:
            words.update(nltk_stopwords.words(language))
        except LookupError:
            logger.warning(
                "NLTK stopwords not downloaded, using gensim's built-in list. "
                "Run: python -m nltk.downloader stopwords"
            )
            words.update(GENSIM_STOPWORDS)

    if extra:
        words.update(word.lower() for word in extra)

    logger.info(f"Loaded {len(words)} stopwords")
    return frozenset(words)


class Tokenizer:
    """
    Normalizes and tokenizes a single document.

    Steps:
    1. Unicode-normalize (NFKC) and lowercase
    2. Remove punctuation and digits of any script
    3. Collapse whitespace and split
    4. Remove stop words and short tokens
    """

    def __init__(
        self,
        stopwords: Optional[Iterable[str]] = None,
        min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
    ):
        """
        Args:
            stopwords: Words to drop after normalization (matched lowercase)
            min_token_length: Drop tokens shorter than this
        """
        self.stopwords: FrozenSet[str] = frozenset(
            word.lower() for word in (stopwords or ())
        )
        self.min_token_length = min_token_length

    def tokenize(self, text: Optional[str]) -> List[str]:
        """
        Normalize text into tokens, preserving their original order.

        Args:
            text: Raw document text (None or blank yields no tokens)

        Returns:
            List of normalized tokens
        """
        if not text or not text.strip():
            return []

        return [
            token
            for token in preprocess_string(text, NORMALIZATION_FILTERS)
            if token not in self.stopwords and len(token) >= self.min_token_length
        ]

    def __call__(self, text: Optional[str]) -> List[str]:
        return self.tokenize(text)


class TokenizedCorpus:
    """
    Lazy corpus of token lists, one per document.

    Texts are tokenized on each pass, so the corpus can be iterated any
    number of times (as gensim expects of streamed corpora).
    """

    def __init__(self, texts: Sequence[str], tokenizer: Tokenizer):
        self.texts = texts
        self.tokenizer = tokenizer

    def __iter__(self) -> Iterator[List[str]]:
        for text in self.texts:
            yield self.tokenizer.tokenize(text)

    def __len__(self) -> int:
        return len(self.texts)
