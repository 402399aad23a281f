"""In-memory site page cache with age-based refresh.

One ``SiteCache`` lives in ``AppState`` for the whole process. A refresh
builds a fresh tuple of pages and swaps it in with a single assignment, so a
request that reads ``pages`` mid-refresh sees either the old or the new
snapshot, never a mix. Concurrent refreshes are not serialised: two requests
may both re-extract, which costs some file reads but is otherwise harmless.

Extraction failures never cross the SiteCache boundary. A document that
fails is logged with ``exc_info=True`` and left out of the new snapshot.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sitefaq.models.page import PageRecord
    from sitefaq.protocols import ExtractorProtocol

log = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SiteCache:
    """Most recent extraction of every configured document."""

    def __init__(
        self,
        extractor: ExtractorProtocol,
        documents: Sequence[str],
        *,
        refresh_interval: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._extractor = extractor
        self._documents = tuple(documents)
        self._refresh_interval = refresh_interval
        self._clock = clock
        self._pages: tuple[PageRecord, ...] = ()
        self._last_refreshed_at: datetime | None = None

    @property
    def pages(self) -> tuple[PageRecord, ...]:
        return self._pages

    @property
    def last_refreshed_at(self) -> datetime | None:
        return self._last_refreshed_at

    def needs_refresh(self, now: datetime | None = None) -> bool:
        """True if the cache is empty, never refreshed, or older than the interval."""
        if not self._pages or self._last_refreshed_at is None:
            return True
        now = now or self._clock()
        return now - self._last_refreshed_at > self._refresh_interval

    async def ensure_fresh(self) -> None:
        """Re-extract all documents if a refresh is due; otherwise no-op."""
        now = self._clock()
        if not self.needs_refresh(now):
            return

        log.info("cache_refresh_started", documents=len(self._documents))
        pages: list[PageRecord] = []
        for document in self._documents:
            try:
                page = await self._extractor.extract(document)
            except Exception:
                log.warning("crawl_document_failed", document=document, exc_info=True)
                continue
            pages.append(page)
            log.info("crawl_document_complete", document=document)

        self._pages = tuple(pages)
        self._last_refreshed_at = now
        log.info(
            "cache_refresh_complete",
            pages=len(pages),
            failed=len(self._documents) - len(pages),
        )
