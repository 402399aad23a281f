"""Question classification.

Pure business logic: decides whether a question should be answered from the
site's own pages or handed to the language model without context.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class QuestionKind(StrEnum):
    GENERAL = "general"
    SITE_SPECIFIC = "site-specific"


def classify(
    question: str,
    *,
    site_keywords: Iterable[str],
    short_question_length: int = 15,
) -> QuestionKind:
    """Classify a question with a keyword and length heuristic.

    Rules, first match wins:
      1. Contains any site keyword (case-insensitive substring) → site-specific
      2. Shorter than ``short_question_length`` characters     → general
      3. Otherwise                                              → site-specific
    """
    lowered = question.lower()
    if any(keyword.lower() in lowered for keyword in site_keywords):
        return QuestionKind.SITE_SPECIFIC

    # Short messages are almost always greetings or small talk
    if len(question) < short_question_length:
        return QuestionKind.GENERAL

    return QuestionKind.SITE_SPECIFIC
