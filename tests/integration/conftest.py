"""Integration test fixtures.

Provides a fully wired AppState over a temporary site directory with real
HTML files, the real file extractor, and an httpx client whose completion
calls are mocked with respx in each test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from sitefaq.config import CompletionSettings, Settings, SiteSettings
from sitefaq.server import build_state

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from sitefaq.state import AppState

SITE_FILES = {
    "index.html": """\
<html><head><title>شرکت نوآوران دیجیتال</title></head>
<body><h1>به سایت ما خوش آمدید</h1><h2>خدمات ما</h2>
<p>طراحی وب، پشتیبانی و مشاوره</p></body></html>
""",
    "products.html": """\
<html><head><title>محصولات ما</title><script>var x = "محصول";</script></head>
<body><h1>محصولات</h1><h2>قیمت‌ها</h2>
<ul><li>نرم‌افزار حسابداری - قیمت ۲ میلیون</li><li>نرم‌افزار انبارداری</li></ul>
</body></html>
""",
    "about.html": """\
<html><head><title>درباره ما</title></head>
<body><h1>تاریخچه</h1><p>شرکت در سال ۱۳۹۰ تاسیس شد.</p></body></html>
""",
    "contact.html": """\
<html><head><title>تماس با ما</title></head>
<body><h1>تماس</h1><p>آدرس: تهران. تلفن ۰۲۱-۱۲۳۴۵۶۷۸</p></body></html>
""",
    "faq.html": "<html><body><h1>FAQ</h1></body></html>",
}


@pytest.fixture()
def site_root(tmp_path: Path) -> Path:
    for name, html in SITE_FILES.items():
        (tmp_path / name).write_text(html, encoding="utf-8")
    return tmp_path


@pytest.fixture()
def settings(site_root: Path) -> Settings:
    return Settings(
        site=SiteSettings(root=str(site_root)),
        completion=CompletionSettings(api_key="sk-test", model="gpt-4o-mini"),
    )


@pytest.fixture()
async def app_state(settings: Settings) -> AsyncGenerator[AppState, None]:
    """Full AppState wired the same way the server lifespan wires it."""
    async with httpx.AsyncClient() as client:
        yield build_state(settings, client)
