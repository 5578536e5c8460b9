"""
CSV ingestion for movie plot corpora.

Usage:
    from movie_topics.preprocessing.loader import load_documents

    documents = load_documents("data/raw/movie_plots.csv")
    print(documents[0].doc_id, documents[0].text[:80])
"""

import logging
from pathlib import Path
from typing import List

import pandas as pd

from .constants import DEFAULT_ID_COLUMN, DEFAULT_TEXT_COLUMN
from .models import Document

logger = logging.getLogger(__name__)


def documents_from_frame(
    frame: pd.DataFrame,
    id_column: str = DEFAULT_ID_COLUMN,
    text_column: str = DEFAULT_TEXT_COLUMN,
) -> List[Document]:
    """
    Convert a DataFrame of plots into Document objects.

    Args:
        frame: One row per document
        id_column: Column holding the document identifier. The row index
            is used when the column is absent.
        text_column: Column holding the plot text

    Returns:
        Documents in row order

    Raises:
        ValueError: If the text column is missing
    """
    if text_column not in frame.columns:
        raise ValueError(
            f"Text column '{text_column}' not found. "
            f"Available columns: {list(frame.columns)}"
        )

    if id_column in frame.columns:
        ids = frame[id_column]
    else:
        logger.warning(f"Id column '{id_column}' not found, using row index")
        ids = pd.Series(frame.index, index=frame.index)

    texts = frame[text_column]
    missing = int(texts.isna().sum())
    if missing:
        logger.warning(f"{missing} document(s) have no text and will be empty")

    return [
        Document(doc_id=str(doc_id), text="" if pd.isna(text) else str(text))
        for doc_id, text in zip(ids, texts)
    ]


def load_documents(
    path: Path | str,
    id_column: str = DEFAULT_ID_COLUMN,
    text_column: str = DEFAULT_TEXT_COLUMN,
) -> List[Document]:
    """
    Load documents from a CSV file.

    Args:
        path: CSV file with at least a text column
        id_column: Identifier column name
        text_column: Plot text column name

    Returns:
        Documents in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the text column is missing
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    frame = pd.read_csv(path)
    logger.info(f"Loaded {len(frame)} rows from {path}")

    return documents_from_frame(frame, id_column=id_column, text_column=text_column)
