"""Data model for input documents."""

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """
    A single movie plot.

    Attributes:
        doc_id: Identifier (movie title or row index)
        text: Raw plot text, possibly empty
    """
    model_config = ConfigDict(frozen=True)

    doc_id: str = Field(..., description="Document identifier")
    text: str = Field(default="", description="Raw document text")
