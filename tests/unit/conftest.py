"""
Lightweight fixtures for unit tests - NO real data dependencies.
All fixtures use synthetic corpora and explicit stop-word sets, so no
NLTK downloads are needed.
"""

from typing import List

import numpy as np
import pytest

from movie_topics.features.topic_modeling import (
    DocumentTermMatrix,
    GensimLdaBackend,
    LDAFit,
    LDATrainer,
    build_document_term_matrix,
)
from movie_topics.preprocessing import Document, Tokenizer


# =============================================================================
# Text Fixtures
# =============================================================================

@pytest.fixture
def pet_texts() -> List[str]:
    """Three short documents with an obvious vocabulary."""
    return [
        "the cat sat on the mat",
        "dogs run in the park",
        "cats and dogs play",
    ]


@pytest.fixture
def pet_stopwords() -> set:
    return {"the", "on", "in", "and"}


@pytest.fixture
def themed_texts() -> List[str]:
    """Two clearly separated themes: space travel and cooking."""
    space = [
        "The astronaut flew the rocket to the distant planet.",
        "A rocket crew lands on a planet near a dying star.",
        "The captain steers the spaceship past the star and the moon.",
        "Astronauts repair the spaceship orbiting the moon.",
        "An alien planet threatens the rocket and its astronaut crew.",
        "The spaceship captain spots an alien star system.",
    ]
    cooking = [
        "The chef bakes bread in the kitchen oven.",
        "A young cook opens a restaurant kitchen with a famous chef.",
        "The chef burns the soup and the bread in the oven.",
        "Restaurant critics taste the cook's soup and pasta.",
        "The kitchen staff prepare pasta sauce for the restaurant.",
        "A cook and a chef compete to bake the best bread.",
    ]
    return space + cooking


@pytest.fixture
def basic_stopwords() -> set:
    return {"the", "a", "an", "and", "in", "on", "to", "of", "its", "with", "for", "s", "near", "past"}


@pytest.fixture
def pet_tokenizer(pet_stopwords: set) -> Tokenizer:
    return Tokenizer(stopwords=pet_stopwords)


@pytest.fixture
def basic_tokenizer(basic_stopwords: set) -> Tokenizer:
    return Tokenizer(stopwords=basic_stopwords)


@pytest.fixture
def themed_documents(themed_texts: List[str]) -> List[Document]:
    return [Document(doc_id=f"movie_{i}", text=text) for i, text in enumerate(themed_texts)]


# =============================================================================
# Matrix Fixtures
# =============================================================================

@pytest.fixture
def pet_dtm(pet_texts: List[str], pet_tokenizer: Tokenizer) -> DocumentTermMatrix:
    return build_document_term_matrix(
        [pet_tokenizer.tokenize(text) for text in pet_texts],
        doc_ids=["mat", "park", "play"],
    )


@pytest.fixture
def themed_dtm(themed_documents: List[Document], basic_tokenizer: Tokenizer) -> DocumentTermMatrix:
    return build_document_term_matrix(
        [basic_tokenizer.tokenize(doc.text) for doc in themed_documents],
        doc_ids=[doc.doc_id for doc in themed_documents],
    )


@pytest.fixture
def fast_backend() -> GensimLdaBackend:
    """gensim backend with enough passes for tiny corpora."""
    return GensimLdaBackend(passes=20, iterations=100)


@pytest.fixture
def themed_fit(themed_dtm: DocumentTermMatrix, fast_backend: GensimLdaBackend) -> LDAFit:
    return LDATrainer(backend=fast_backend, random_state=7).fit(themed_dtm, num_topics=2)


@pytest.fixture
def handmade_fit() -> LDAFit:
    """Deterministic fit with hand-written matrices (no training)."""
    gamma = np.array([
        [0.7, 0.2, 0.1],
        [0.1, 0.1, 0.8],
        [0.4, 0.4, 0.2],   # tie between topics 0 and 1
        [0.2, 0.5, 0.3],
    ])
    beta = np.array([
        [0.4, 0.3, 0.2, 0.1, 0.0],
        [0.1, 0.1, 0.1, 0.3, 0.4],
        [0.25, 0.25, 0.25, 0.25, 0.0],
    ])
    return LDAFit(
        gamma=gamma,
        beta=beta,
        vocabulary=("ship", "sea", "captain", "storm", "island"),
        doc_ids=("a", "b", "c", "d"),
        num_topics=3,
        random_state=0,
    )
