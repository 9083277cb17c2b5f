"""Composes identity, job status, storage and snippets into view models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup

from search_render.config import WebConfig
from search_render.errors import EmptyQueryError
from search_render.query.identity import canonical_query, query_identity
from search_render.query.status import JobStatusGate, JobStatusProvider
from search_render.results.loader import ResultPageLoader, parse_page_number
from search_render.results.pagination import build_pagination
from search_render.results.snippets import SnippetAssembler
from search_render.types import HalfRenderedResult

logger = logging.getLogger(__name__)

PLACEHOLDER_TEMPLATE = "placeholder.html"
RESULTS_TEMPLATE = "results.html"


@dataclass(slots=True)
class SearchView:
    """Template name plus the context it is rendered with."""

    template: str
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def is_placeholder(self) -> bool:
        return self.template == PLACEHOLDER_TEMPLATE


class ResultPageRenderer:
    def __init__(self, version: str) -> None:
        self.version = version

    def placeholder(self, query: str) -> SearchView:
        return SearchView(PLACEHOLDER_TEMPLATE, {"q": query, "version": self.version})

    def results(
        self,
        query: str,
        results: list[HalfRenderedResult],
        packages: list[str],
        pagination: Markup,
    ) -> SearchView:
        return SearchView(
            RESULTS_TEMPLATE,
            {
                "results": results,
                "packages": packages,
                "pagination": pagination,
                "q": query,
                "version": self.version,
            },
        )


class SearchService:
    """Request pipeline for the server-rendered search page.

    Input validation happens before the job status is consulted, and storage
    is only touched once the provider reports the query as completed.
    """

    def __init__(
        self,
        config: WebConfig,
        status_provider: JobStatusProvider,
        *,
        loader: ResultPageLoader | None = None,
        assembler: SnippetAssembler | None = None,
    ) -> None:
        self.config = config
        self.gate = JobStatusGate(status_provider)
        self.loader = loader or ResultPageLoader(config.query_results_path)
        self.assembler = assembler or SnippetAssembler()
        self.renderer = ResultPageRenderer(config.version)

    def search(
        self,
        query: str | None,
        raw_page: str | None,
        *,
        client_address: str,
        base_url: str,
    ) -> SearchView:
        if not query:
            raise EmptyQueryError()
        page = parse_page_number(raw_page)

        canonical = canonical_query(query)
        identity = query_identity(query)
        status = self.gate.check(identity, client_address, canonical)
        if not status.completed:
            return self.renderer.placeholder(query)

        logger.info("[%s] server-rendering page %d", identity, page)
        loaded = self.loader.load(identity, page)
        return self.renderer.results(
            query,
            self.assembler.assemble_all(loaded.results),
            loaded.packages,
            build_pagination(page, status.total_pages, base_url),
        )
