"""Relevance ranking of cached pages against a question.

Pure business logic: receives page records, returns scored pages.
No knowledge of AppState, HTTP, or I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sitefaq.models.page import ScoredPage

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sitefaq.config import RankerSettings
    from sitefaq.models.page import PageRecord


@dataclass(frozen=True)
class RankWeights:
    title_bonus: int = 10
    h1_bonus: int = 8
    h2_bonus: int = 5
    min_token_length: int = 2
    max_results: int = 5

    @classmethod
    def from_settings(cls, settings: RankerSettings) -> RankWeights:
        return cls(
            title_bonus=settings.title_bonus,
            h1_bonus=settings.h1_bonus,
            h2_bonus=settings.h2_bonus,
            min_token_length=settings.min_token_length,
            max_results=settings.max_results,
        )


def tokenize(question: str) -> list[str]:
    """Split on whitespace and lower-case."""
    return question.lower().split()


def _haystack(page: PageRecord) -> str:
    # Paragraph and list text are already part of body_text
    return " ".join([page.title, page.h1, page.h2, page.h3, page.body_text]).lower()


def score_page(page: PageRecord, tokens: Iterable[str], weights: RankWeights) -> int:
    """Score one page: occurrence counts plus heading bonuses per token."""
    haystack = _haystack(page)
    title = page.title.lower()
    h1 = page.h1.lower()
    h2 = page.h2.lower()

    score = 0
    for token in tokens:
        if len(token) <= weights.min_token_length:
            continue

        # Tokens are user input: match literally, never as a pattern
        score += len(re.findall(re.escape(token), haystack))

        if token in title:
            score += weights.title_bonus
        if token in h1:
            score += weights.h1_bonus
        if token in h2:
            score += weights.h2_bonus
    return score


def rank(
    question: str,
    pages: Iterable[PageRecord],
    weights: RankWeights | None = None,
) -> list[ScoredPage]:
    """Return the best-matching pages, highest score first.

    Only pages with a positive score are returned, at most
    ``weights.max_results`` of them. Equal scores keep their input order
    (``sorted`` is stable).
    """
    weights = weights or RankWeights()
    tokens = tokenize(question)

    scored = [
        ScoredPage(**page.model_dump(), score=score_page(page, tokens, weights))
        for page in pages
    ]
    ranked = sorted(scored, key=lambda p: -p.score)
    return [p for p in ranked if p.score > 0][: weights.max_results]
