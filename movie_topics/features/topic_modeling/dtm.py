"""
Vocabulary and Document-Term Matrix

Builds a gensim Dictionary over the whole corpus and a sparse
documents x terms count matrix whose columns follow the dictionary ids.

Usage:
    from movie_topics.features.topic_modeling.dtm import build_document_term_matrix

    dtm = build_document_term_matrix(token_lists, doc_ids=titles)
    dtm.shape          # (n_documents, vocabulary_size)
    dtm.vocabulary     # terms in column order
    dtm.row(0)         # {'cat': 1, 'sat': 1, 'mat': 1}
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from gensim import corpora, matutils
from scipy import sparse

from .exceptions import EmptyCorpusError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DocumentTermMatrix:
    """
    Sparse document-term counts plus the vocabulary that indexes them.

    Attributes:
        doc_ids: Document identifiers in row order
        dictionary: gensim Dictionary; term id == column index
        counts: CSR matrix of shape (n_documents, vocabulary_size)
    """
    doc_ids: Tuple[str, ...]
    dictionary: corpora.Dictionary
    counts: sparse.csr_matrix

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        """Terms in column order."""
        return tuple(self.dictionary[term_id] for term_id in range(len(self.dictionary)))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.counts.shape

    @property
    def num_documents(self) -> int:
        return self.counts.shape[0]

    @property
    def vocabulary_size(self) -> int:
        return self.counts.shape[1]

    def document_lengths(self) -> np.ndarray:
        """Total token count of each document."""
        return np.asarray(self.counts.sum(axis=1)).ravel()

    def term_index(self, term: str) -> int:
        """
        Column index of a term.

        Raises:
            KeyError: If the term is not in the vocabulary
        """
        return self.dictionary.token2id[term]

    def row(self, doc_index: int) -> Dict[str, int]:
        """Non-zero counts of one document as term -> count."""
        start, end = self.counts.indptr[doc_index], self.counts.indptr[doc_index + 1]
        return {
            self.dictionary[int(term_id)]: int(count)
            for term_id, count in zip(self.counts.indices[start:end], self.counts.data[start:end])
        }

    def to_bow(self) -> List[List[Tuple[int, int]]]:
        """Bag-of-words corpus in gensim's (term_id, count) format."""
        return [
            [(int(term_id), int(count)) for term_id, count in doc]
            for doc in matutils.Sparse2Corpus(self.counts, documents_columns=False)
        ]

    def to_dense(self) -> np.ndarray:
        return self.counts.toarray()


def build_document_term_matrix(
    token_streams: Iterable[Sequence[str]],
    doc_ids: Optional[Sequence[str]] = None,
    no_below: Optional[int] = None,
    no_above: Optional[float] = None,
    keep_n: Optional[int] = None,
) -> DocumentTermMatrix:
    """
    Build the corpus vocabulary and document-term matrix.

    Every term seen in at least one document enters the vocabulary unless
    one of the optional frequency filters is set.

    Args:
        token_streams: One token sequence per document
        doc_ids: Document identifiers (default: "0", "1", ...)
        no_below: Drop terms found in fewer than this many documents
        no_above: Drop terms found in more than this fraction of documents
        keep_n: Keep at most this many most frequent terms

    Returns:
        DocumentTermMatrix

    Raises:
        EmptyCorpusError: If there are no documents or no vocabulary terms
        ValueError: If doc_ids does not match the number of documents
    """
    documents = [list(tokens) for tokens in token_streams]

    if len(documents) == 0:
        raise EmptyCorpusError("Corpus contains no documents")

    if doc_ids is None:
        doc_ids = [str(i) for i in range(len(documents))]
    elif len(doc_ids) != len(documents):
        raise ValueError(
            f"Got {len(doc_ids)} document ids for {len(documents)} documents"
        )

    logger.info(f"Building vocabulary from {len(documents)} documents...")
    dictionary = corpora.Dictionary(documents)

    if any(value is not None for value in (no_below, no_above, keep_n)):
        dictionary.filter_extremes(
            no_below=no_below if no_below is not None else 1,
            no_above=no_above if no_above is not None else 1.0,
            keep_n=keep_n,
        )
        logger.info(f"Vocabulary size: {len(dictionary)} (after filtering)")
    else:
        logger.info(f"Vocabulary size: {len(dictionary)}")

    if len(dictionary) == 0:
        raise EmptyCorpusError(
            "Vocabulary is empty after normalization and stop-word removal"
        )

    bow_corpus = [dictionary.doc2bow(doc) for doc in documents]

    empty_docs = sum(1 for bow in bow_corpus if not bow)
    if empty_docs:
        logger.warning(f"{empty_docs} document(s) have no vocabulary terms")

    counts = matutils.corpus2csc(
        bow_corpus,
        num_terms=len(dictionary),
        num_docs=len(bow_corpus),
        dtype=np.int64,
    ).T.tocsr()

    return DocumentTermMatrix(
        doc_ids=tuple(str(doc_id) for doc_id in doc_ids),
        dictionary=dictionary,
        counts=counts,
    )
