"""Shared test fixtures for the sitefaq test suite."""

from __future__ import annotations

import pytest

from sitefaq.models.page import PageRecord


class FakeExtractor:
    """In-memory ExtractorProtocol implementation.

    Documents listed in ``missing`` raise FileNotFoundError. Every call is
    recorded in ``calls``.
    """

    def __init__(
        self,
        pages: dict[str, PageRecord],
        missing: frozenset[str] = frozenset(),
    ) -> None:
        self.pages = pages
        self.missing = missing
        self.calls: list[str] = []

    async def extract(self, document: str) -> PageRecord:
        self.calls.append(document)
        if document in self.missing:
            raise FileNotFoundError(document)
        return self.pages[document]


@pytest.fixture()
def sample_pages() -> list[PageRecord]:
    """A few pages resembling a small company site."""
    return [
        PageRecord(
            url="/index.html",
            title="شرکت نوآوران دیجیتال",
            h1="به سایت ما خوش آمدید",
            h2="خدمات ما",
            body_text="به سایت ما خوش آمدید خدمات ما طراحی وب و پشتیبانی",
        ),
        PageRecord(
            url="/products.html",
            title="محصولات ما",
            h1="محصولات",
            h2="قیمت‌ها",
            body_text="محصولات ما شامل نرم‌افزار حسابداری است. قیمت محصول پایه ۲ میلیون",
        ),
        PageRecord(
            url="/about.html",
            title="درباره ما",
            h1="تاریخچه",
            body_text="شرکت در سال ۱۳۹۰ تاسیس شد",
        ),
        PageRecord(
            url="/contact.html",
            title="تماس با ما",
            h1="تماس",
            body_text="آدرس: تهران، خیابان آزادی. تلفن ۰۲۱-۱۲۳۴۵۶۷۸",
        ),
    ]


@pytest.fixture()
def fake_extractor(sample_pages: list[PageRecord]) -> FakeExtractor:
    return FakeExtractor({page.url.lstrip("/"): page for page in sample_pages})
