"""Request handler for POST /api/faq-search.

Receives AppState, classifies the question, and either answers it directly
or refreshes the site cache, ranks pages, and answers from them. Returns a
plain dict; server.py handles the HTTP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from sitefaq.classifier import QuestionKind, classify
from sitefaq.errors import ErrorCode, SiteFaqError
from sitefaq.models.api import FaqSearchInput, FaqSearchOutput
from sitefaq.ranker import RankWeights, rank

if TYPE_CHECKING:
    from sitefaq.state import AppState


async def handle(payload: Any, state: AppState) -> dict:
    """Handle one FAQ search request body."""
    try:
        validated = FaqSearchInput.model_validate(payload)
    except ValidationError as exc:
        raise SiteFaqError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
        ) from exc

    log = structlog.get_logger().bind(handler="faq_search")
    settings = state.settings

    kind = classify(
        validated.question,
        site_keywords=settings.classifier.site_keywords,
        short_question_length=settings.classifier.short_question_length,
    )
    log.info("question_classified", kind=kind, question_length=len(validated.question))

    if kind is QuestionKind.GENERAL:
        answer = await state.composer.answer(validated.question)
        output = FaqSearchOutput(answer=answer, type=kind.value)
        return output.model_dump(mode="json", exclude_none=True)

    await state.site_cache.ensure_fresh()
    ranked = rank(
        validated.question,
        state.site_cache.pages,
        RankWeights.from_settings(settings.ranker),
    )
    log.info("pages_ranked", matches=len(ranked), top_score=ranked[0].score if ranked else 0)

    answer = await state.composer.answer(validated.question, ranked)
    output = FaqSearchOutput(
        answer=answer,
        type=kind.value,
        sources=[page.url for page in ranked[: settings.ranker.max_sources]],
    )
    return output.model_dump(mode="json", exclude_none=True)
