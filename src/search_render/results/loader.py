"""Reads finalized result pages and package lists from per-query storage."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from search_render.errors import InvalidPageError, StorageDecodeError, StorageReadError
from search_render.types import LoadedPage, PackageList, ResultRecord

logger = logging.getLogger(__name__)

_RESULTS_ADAPTER = TypeAdapter(list[ResultRecord])


def parse_page_number(raw: str | None) -> int:
    """Parse the ``page`` parameter; absent or empty means page 0."""

    if raw is None or raw == "":
        return 0
    # int() also accepts whitespace, "1_000" and non-ASCII digits.
    if not raw.isascii() or raw.strip() != raw or "_" in raw:
        raise InvalidPageError(raw)
    try:
        page = int(raw, 10)
    except ValueError as exc:
        raise InvalidPageError(raw) from exc
    if page < 0:
        raise InvalidPageError(raw)
    return page


class ResultPageLoader:
    """Loads ``page_<N>.json`` and ``packages.json`` below one root directory.

    Everything read here was finalized before the query was reported complete,
    so any failure is a storage inconsistency and is raised, never retried.
    """

    def __init__(self, results_root: str | Path) -> None:
        self.results_root = Path(results_root)

    def query_dir(self, identity: str) -> Path:
        return self.results_root / identity

    def load_results(self, identity: str, page: int) -> list[ResultRecord]:
        path = self.query_dir(identity) / f"page_{page}.json"
        raw = self._read(path, "results")
        try:
            return _RESULTS_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            logger.error("[%s] corrupt results file %s", identity, path)
            raise StorageDecodeError(f"Could not parse results from disk: {exc}") from exc

    def load_packages(self, identity: str) -> list[str]:
        path = self.query_dir(identity) / "packages.json"
        raw = self._read(path, "packages")
        try:
            return PackageList.model_validate_json(raw).packages
        except ValidationError as exc:
            logger.error("[%s] corrupt packages file %s", identity, path)
            raise StorageDecodeError(f"Could not parse packages from disk: {exc}") from exc

    def load(self, identity: str, page: int) -> LoadedPage:
        return LoadedPage(
            identity=identity,
            page=page,
            results=self.load_results(identity, page),
            packages=self.load_packages(identity),
        )

    @staticmethod
    def _read(path: Path, kind: str) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            logger.error("could not open %s file %s: %s", kind, path, exc)
            raise StorageReadError(f"Could not open {kind} file on disk: {exc}") from exc
