"""Bounded pagination links for the server-rendered result pages.

NB: client-side pagination mirrors ``page_window`` exactly. The thresholds
below must change on both sides or not at all.
"""

from __future__ import annotations

from markupsafe import Markup
from starlette.datastructures import URL, QueryParams

WINDOW_RADIUS = 5
WINDOW_SIZE = 10


def strip_page_param(url: str) -> str:
    return str(URL(url).remove_query_params("page"))


def pagination_base_url(url: str, query: str) -> str:
    """Base URL for page links: no ``page`` parameter, always a ``q`` one.

    POSTed forms carry ``q`` in the body only, so it is added to the URL here.
    """

    base = URL(strip_page_param(url))
    if "q" not in QueryParams(base.query):
        base = base.include_query_params(q=query)
    return str(base)


def page_window(current_page: int, total_pages: int) -> tuple[int, int]:
    """Return the half-open range ``[start, end)`` of page links to show."""

    start = current_page - WINDOW_RADIUS
    if current_page > 0 and start < 1:
        start = 1
    if current_page == 0 and start < 0:
        start = 0

    end = total_pages
    if current_page >= WINDOW_RADIUS and current_page + WINDOW_RADIUS < end:
        end = current_page + WINDOW_RADIUS
    if current_page < WINDOW_RADIUS and end > WINDOW_SIZE:
        end = WINDOW_SIZE
    return start, end


def page_url(base_url: str, page: int) -> str:
    return str(URL(base_url).include_query_params(page=page))


def _link(base_url: str, page: int, label: int, *, bold: bool | None = None) -> Markup:
    href = page_url(base_url, page)
    if bold is None:
        return Markup('<a href="%s">%s</a> ') % (href, label)
    style = "font-weight: bold" if bold else ""
    return Markup('<a style="%s" href="%s">%s</a> ') % (style, href, label)


def build_pagination(current_page: int, total_pages: int, base_url: str) -> Markup:
    """Render the pagination control as one trusted HTML fragment.

    ``current_page < total_pages`` is expected but not checked; the page was
    already loaded successfully by the time this runs.
    """

    parts = [Markup("<strong>Pages:</strong> ")]
    if current_page > 0:
        parts.append(_link(base_url, 0, 1))
        parts.append(Markup("<span>&lt;</span> "))

    start, end = page_window(current_page, total_pages)
    for page in range(start, end):
        parts.append(_link(base_url, page, page + 1, bold=page == current_page))

    if current_page < total_pages - 1:
        parts.append(Markup("<span>&gt;</span> "))

    if end < total_pages:
        parts.append(Markup("… "))
        parts.append(_link(base_url, total_pages - 1, total_pages).rstrip())

    return Markup("").join(parts)
