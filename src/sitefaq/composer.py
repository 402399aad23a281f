"""Answer composition.

Builds the prompts for a question (with or without site context), asks the
completion client, and falls back to a static answer when that fails. The
composer is a boundary: ``answer`` always returns a string.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sitefaq.errors import CompletionError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sitefaq.config import RankerSettings, SiteSettings
    from sitefaq.models.page import ScoredPage
    from sitefaq.protocols import CompletionClientProtocol

log = structlog.get_logger()

CONTEXT_DIVIDER = "\n\n---\n\n"

_SYSTEM_PROMPT = """شما دستیار هوشمند سایت "{company}" هستید.
شخصیت: دوستانه، حرفه‌ای و کمک‌کننده
زبان: فارسی روان و رسمی-صمیمی

وظایف شما:
1. پاسخ به سوالات کاربران به صورت دقیق و مفید
2. معرفی محصولات و خدمات شرکت در صورت نیاز
3. راهنمایی کاربران برای استفاده از سایت"""

_CONTEXT_PROMPT = """بر اساس اطلاعات زیر از سایت، به این سوال پاسخ دهید:

سوال: {question}

اطلاعات سایت:
{context}

لطفا پاسخی دقیق و مرتبط با محتوای سایت ارائه دهید."""

_FALLBACK_WITH_CONTEXT = """بر اساس اطلاعات سایت:

{title}
{excerpt}...

برای اطلاعات بیشتر به صفحه {url} مراجعه کنید."""

_FALLBACK_NO_CONTEXT = (
    "متأسفانه در حال حاضر امکان پاسخگویی نیست. لطفا با شماره {phone} تماس بگیرید."
)


class AnswerComposer:
    def __init__(
        self,
        client: CompletionClientProtocol,
        site: SiteSettings,
        ranker: RankerSettings,
    ) -> None:
        self._client = client
        self._site = site
        self._context_chars = ranker.context_chars
        self._excerpt_chars = ranker.fallback_excerpt_chars

    def system_prompt(self) -> str:
        return _SYSTEM_PROMPT.format(company=self._site.company_name)

    def user_prompt(self, question: str, pages: Sequence[ScoredPage] | None = None) -> str:
        """The bare question, or the question wrapped in site context."""
        if not pages:
            return question
        context = CONTEXT_DIVIDER.join(
            f"📄 {page.title}:\n{page.body_text[: self._context_chars]}" for page in pages
        )
        return _CONTEXT_PROMPT.format(question=question, context=context)

    def fallback_answer(self, pages: Sequence[ScoredPage] | None = None) -> str:
        if pages:
            top = pages[0]
            return _FALLBACK_WITH_CONTEXT.format(
                title=top.title,
                excerpt=top.body_text[: self._excerpt_chars],
                url=top.url,
            )
        return _FALLBACK_NO_CONTEXT.format(phone=self._site.fallback_phone)

    async def answer(self, question: str, pages: Sequence[ScoredPage] | None = None) -> str:
        """Answer a question, optionally grounded in ranked pages. Never raises."""
        messages = [
            {"role": "system", "content": self.system_prompt()},
            {"role": "user", "content": self.user_prompt(question, pages)},
        ]
        try:
            return await self._client.complete(messages)
        except CompletionError as exc:
            log.error(
                "completion_failed",
                code=exc.code,
                param=exc.param,
                status_code=exc.status_code,
                message=exc.message,
            )
        except Exception:
            log.error("completion_unexpected_error", exc_info=True)
        return self.fallback_answer(pages)
