"""HTML page extraction.

Turns one local HTML document into a ``PageRecord``. Script and style
elements are dropped before any text is read, so their content never reaches
the ranker.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path

import structlog
from bs4 import BeautifulSoup

from sitefaq.models.page import PageRecord

log = structlog.get_logger()

_WHITESPACE_RE = re.compile(r"\s+")


def _joined_text(soup: BeautifulSoup, tag: str) -> str:
    return " ".join(el.get_text() for el in soup.find_all(tag))


def extract_page(html: str, url: str, *, default_title: str = "") -> PageRecord:
    """Parse HTML markup into a ``PageRecord``.

    ``default_title`` is used when the document has no (or an empty) <title>.
    """
    soup = BeautifulSoup(html, "html.parser")
    for el in soup(["script", "style"]):
        el.decompose()

    title = "".join(el.get_text() for el in soup.find_all("title"))
    body = soup.body
    if body is None:
        # Fragment without <body>: head content must not leak into the text
        for el in soup(["title", "head"]):
            el.decompose()
        body = soup

    return PageRecord(
        url=url,
        title=title or default_title,
        h1=_joined_text(soup, "h1"),
        h2=_joined_text(soup, "h2"),
        h3=_joined_text(soup, "h3"),
        paragraphs=_joined_text(soup, "p"),
        list_items=_joined_text(soup, "li"),
        body_text=_WHITESPACE_RE.sub(" ", body.get_text()).strip(),
    )


class FileExtractor:
    """Reads documents from the site root and extracts them.

    Implements ``ExtractorProtocol``. Errors (missing file, bad encoding)
    propagate to the caller; the site cache decides what to do with them.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    async def extract(self, document: str) -> PageRecord:
        path = self._root / document
        html = await asyncio.to_thread(path.read_text, encoding="utf-8")
        page = extract_page(html, f"/{document}", default_title=document)
        log.debug("document_extracted", document=document, body_length=len(page.body_text))
        return page
