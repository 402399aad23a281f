"""Application state container.

AppState is created once at server startup (inside the Starlette lifespan)
and handed to every request handler. The site cache it holds starts empty
and is filled by the first site-specific question.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitefaq.cache import SiteCache
    from sitefaq.composer import AnswerComposer
    from sitefaq.config import Settings


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every request handler."""

    settings: Settings
    site_cache: SiteCache
    composer: AnswerComposer
