"""FastAPI entrypoint serving server-rendered search result pages.

The pages carry a small script that redirects to the interactive frontend, so
browsers that do run JavaScript but followed a plain link end up there.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError
from starlette.concurrency import run_in_threadpool

from search_render.config import WebConfig
from search_render.errors import RenderError, SearchError
from search_render.obs.logging import configure_logging
from search_render.query.identity import canonical_query
from search_render.query.status import JobStatusProvider, ResultDirectoryStatusProvider
from search_render.render import SearchService, SearchView
from search_render.results.pagination import pagination_base_url

logger = logging.getLogger(__name__)

_TEMPLATES_DIR = Path(__file__).parent / "templates"


def _relative_url(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


def _client_address(request: Request) -> str:
    if request.client is None:
        return ""
    return f"{request.client.host}:{request.client.port}"


async def _search_params(request: Request) -> tuple[str | None, str | None]:
    query = request.query_params.get("q")
    page = request.query_params.get("page")
    if request.method == "POST":
        form = await request.form()
        form_query = form.get("q")
        form_page = form.get("page")
        if isinstance(form_query, str):
            query = form_query
        if isinstance(form_page, str):
            page = form_page
    return query, page


def _create_templates() -> Jinja2Templates:
    # Missing view-model keys must fail the request instead of rendering blank.
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=True,
        undefined=StrictUndefined,
    )
    return Jinja2Templates(env=env)


def create_app(
    config: WebConfig | None = None,
    status_provider: JobStatusProvider | None = None,
) -> FastAPI:
    config = config or WebConfig.from_env()
    provider = status_provider or ResultDirectoryStatusProvider(config.query_results_path)
    service = SearchService(config, provider)
    templates = _create_templates()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        configure_logging(config.log_level)
        yield

    app = FastAPI(title="Server-rendered Search", version=config.version, lifespan=lifespan)
    app.state.config = config
    app.state.search_service = service

    @app.exception_handler(SearchError)
    async def _search_error(request: Request, exc: SearchError) -> PlainTextResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return PlainTextResponse(str(exc), status_code=exc.status_code)

    def _render(request: Request, view: SearchView) -> HTMLResponse:
        query = str(view.context["q"])
        context: dict[str, Any] = {
            **view.context,
            "search_path": request.url.path,
            "interactive_url": f"{config.interactive_path}?{canonical_query(query)}",
            "refresh_seconds": config.placeholder_refresh_seconds,
        }
        try:
            return templates.TemplateResponse(request, view.template, context)
        except TemplateError as exc:
            raise RenderError(str(exc)) from exc

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": config.version,
            "results_path": str(config.query_results_path),
        }

    @app.api_route("/search", methods=["GET", "POST"], response_class=HTMLResponse)
    async def search(request: Request) -> Response:
        query, raw_page = await _search_params(request)
        view = await run_in_threadpool(
            service.search,
            query,
            raw_page,
            client_address=_client_address(request),
            base_url=pagination_base_url(_relative_url(request), query or ""),
        )
        return _render(request, view)

    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("SEARCH_PORT", "28080")))
