"""Turns stored result records into highlighted context snippets."""

from __future__ import annotations

from markupsafe import Markup, escape

from search_render.types import HalfRenderedResult, ResultRecord

PACKAGE_SEPARATOR = "_"
_LINE_BREAK = Markup("<br>")


def split_path(path: str) -> tuple[str, str]:
    """Split ``pkg_1.0/src/x.c`` into ``("pkg", "_1.0/src/x.c")``.

    Paths without a separator yield an empty package name and the full path.
    """

    index = path.find(PACKAGE_SEPARATOR)
    if index < 0:
        return "", path
    return path[:index], path[index:]


def expand_leading_tabs(line: str) -> str:
    """Replace every leading tab with four spaces; inner tabs are kept."""

    stripped = line.lstrip("\t")
    return "    " * (len(line) - len(stripped)) + stripped


def maybe_append_context(context: list[Markup], line: str) -> list[Markup]:
    """Append ``line`` escaped and tab-expanded, unless it is blank."""

    if line.strip():
        context.append(escape(expand_leading_tabs(line)))
    return context


class SnippetAssembler:
    """Builds one ``HalfRenderedResult`` per stored match.

    Raw text is escaped exactly once here; the joined fragment is ``Markup``
    and must not be escaped again by the template.
    """

    def assemble(self, record: ResultRecord) -> HalfRenderedResult:
        context: list[Markup] = []
        maybe_append_context(context, record.ctxp2)
        maybe_append_context(context, record.ctxp1)
        context.append(Markup("<strong>%s</strong>") % record.context)
        maybe_append_context(context, record.ctxn1)
        maybe_append_context(context, record.ctxn2)

        source_package, relative_path = split_path(record.path)
        return HalfRenderedResult(
            path=record.path,
            line=record.line,
            path_rank=record.path_rank,
            ranking=record.ranking,
            source_package=source_package,
            relative_path=relative_path,
            context=_LINE_BREAK.join(context),
        )

    def assemble_all(self, records: list[ResultRecord]) -> list[HalfRenderedResult]:
        return [self.assemble(record) for record in records]
