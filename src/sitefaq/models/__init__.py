from __future__ import annotations

from sitefaq.models.api import FaqSearchInput, FaqSearchOutput
from sitefaq.models.page import PageRecord, ScoredPage

__all__ = [
    # pages
    "PageRecord",
    "ScoredPage",
    # api
    "FaqSearchInput",
    "FaqSearchOutput",
]
