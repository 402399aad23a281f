"""HTTP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the Starlette lifespan context manager
- Register the API route, CORS, and static file serving
- Start uvicorn
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

import sitefaq.handlers.faq_search as h_faq_search
from sitefaq import __version__
from sitefaq.cache import SiteCache
from sitefaq.completion import CompletionClient, build_http_client
from sitefaq.composer import AnswerComposer
from sitefaq.config import Settings
from sitefaq.errors import SiteFaqError
from sitefaq.extractor import FileExtractor
from sitefaq.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    import httpx
    from starlette.requests import Request

log = structlog.get_logger()

APOLOGY_MESSAGE = "متأسفانه مشکلی پیش آمد. لطفاً دوباره تلاش کنید."


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


def build_state(settings: Settings, http_client: httpx.AsyncClient) -> AppState:
    """Wire the site cache, completion client, and composer."""
    site_root = Path(settings.site.root).expanduser()
    site_cache = SiteCache(
        FileExtractor(site_root),
        settings.site.documents,
        refresh_interval=timedelta(seconds=settings.cache.refresh_interval_seconds),
    )
    completion = CompletionClient(http_client, settings.completion)
    composer = AnswerComposer(completion, settings.site, settings.ranker)
    return AppState(
        settings=settings,
        site_cache=site_cache,
        composer=composer,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _apology() -> JSONResponse:
    return JSONResponse({"success": False, "answer": APOLOGY_MESSAGE}, status_code=500)


async def faq_search(request: Request) -> JSONResponse:
    state: AppState = request.app.state.app_state
    try:
        payload = await request.json()
        result = await h_faq_search.handle(payload, state)
    except SiteFaqError as exc:
        log.warning(
            "faq_search_rejected",
            code=exc.code,
            message=exc.message,
        )
        return _apology()
    except Exception:
        log.error("faq_search_failed", exc_info=True)
        return _apology()
    return JSONResponse(result)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None, state: AppState | None = None) -> Starlette:
    """Build the Starlette application.

    When ``state`` is given it is used as-is and no lifespan resources are
    created; otherwise the lifespan builds AppState from ``settings``.
    """
    settings = settings or (state.settings if state is not None else Settings())

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        if state is not None:
            app.state.app_state = state
            yield
            return

        http_client = build_http_client(settings.completion)
        app.state.app_state = build_state(settings, http_client)
        if not settings.completion.api_key:
            log.warning("completion_api_key_missing")
        log.info(
            "server_started",
            version=__version__,
            site_root=settings.site.root,
            documents=len(settings.site.documents),
        )
        try:
            yield
        finally:
            await http_client.aclose()
            log.info("server_stopping")

    routes = [
        Route("/api/faq-search", faq_search, methods=["POST"]),
        Mount("/", app=StaticFiles(directory=settings.site.root, html=True), name="site"),
    ]
    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=settings.server.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    ]

    app = Starlette(routes=routes, middleware=middleware, lifespan=lifespan)
    if state is not None:
        # ASGI test transports do not run the lifespan
        app.state.app_state = state
    return app


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    _setup_logging(settings)

    base_url = f"http://localhost:{settings.server.port}"
    log.info(
        "server_starting",
        version=__version__,
        host=settings.server.host,
        port=settings.server.port,
        website=f"{base_url}/index.html",
        assistant=f"{base_url}/faq.html",
    )

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )


if __name__ == "__main__":
    main()
