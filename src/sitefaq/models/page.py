from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PageRecord(BaseModel):
    """Structured text extracted from one site document."""

    model_config = ConfigDict(frozen=True)

    url: str  # Site-relative path, e.g. "/index.html"
    title: str
    h1: str = ""
    h2: str = ""
    h3: str = ""
    paragraphs: str = ""
    list_items: str = ""
    body_text: str = ""  # Whitespace-normalised text of <body>


class ScoredPage(PageRecord):
    """A page with its relevance score for a single question."""

    score: int = Field(ge=0)
