"""Protocol interfaces for swappable components.

The site cache and the answer composer reference these protocols, not the
concrete implementations, so tests can use lightweight in-memory fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from sitefaq.models.page import PageRecord


class ExtractorProtocol(Protocol):
    """Interface for turning one configured document into a page record."""

    async def extract(self, document: str) -> PageRecord: ...


class CompletionClientProtocol(Protocol):
    """Interface for the language-model completion call."""

    async def complete(self, messages: list[dict[str, Any]]) -> str: ...
