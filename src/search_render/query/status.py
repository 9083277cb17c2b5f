"""Job status providers and the gate that decides placeholder vs. results."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from search_render.types import JobStatus

logger = logging.getLogger(__name__)

StartCallback = Callable[[str, str, str], None]

_PAGE_FILE = re.compile(r"^page_(\d+)\.json$")


class JobStatusProvider(Protocol):
    """Minimal contract of the component running the actual searches."""

    def ensure_started(self, identity: str, client_address: str, canonical_query: str) -> None:
        """Start a search for identity unless one is running or done. Idempotent."""

    def is_completed(self, identity: str) -> bool:
        """Whether the first result page and the package list are on disk."""

    def total_pages(self, identity: str) -> int:
        """Number of result pages known so far."""


@dataclass(slots=True)
class _JobState:
    client_address: str
    canonical_query: str
    completed: bool = False
    result_pages: int = 0


class InMemoryJobStatusProvider:
    """Process-local job table keyed by query identity.

    ``on_start`` is called once per identity, outside the lock, and is where a
    search backend gets hooked in. The backend reports back through
    ``mark_completed``.
    """

    def __init__(self, on_start: StartCallback | None = None) -> None:
        self._jobs: dict[str, _JobState] = {}
        self._lock = threading.Lock()
        self._on_start = on_start

    def ensure_started(self, identity: str, client_address: str, canonical_query: str) -> None:
        with self._lock:
            if identity in self._jobs:
                return
            self._jobs[identity] = _JobState(
                client_address=client_address, canonical_query=canonical_query
            )
        if self._on_start is not None:
            self._on_start(identity, client_address, canonical_query)

    def mark_completed(self, identity: str, result_pages: int) -> None:
        if result_pages < 0:
            raise ValueError("result_pages must be non-negative")
        with self._lock:
            state = self._jobs.get(identity)
            if state is None:
                raise KeyError(f"Unknown query: {identity}")
            state.completed = True
            state.result_pages = result_pages

    def forget(self, identity: str) -> None:
        with self._lock:
            self._jobs.pop(identity, None)

    def is_completed(self, identity: str) -> bool:
        with self._lock:
            state = self._jobs.get(identity)
            return state is not None and state.completed

    def total_pages(self, identity: str) -> int:
        with self._lock:
            state = self._jobs.get(identity)
            return state.result_pages if state is not None else 0


class ResultDirectoryStatusProvider:
    """Derives job status from the result directory a backend writes.

    A query counts as completed once ``packages.json`` exists in its
    directory; the page count is the number of ``page_<N>.json`` files.
    """

    def __init__(self, results_root: str | Path, on_start: StartCallback | None = None) -> None:
        self.results_root = Path(results_root)
        self._on_start = on_start
        self._started: set[str] = set()
        self._lock = threading.Lock()

    def ensure_started(self, identity: str, client_address: str, canonical_query: str) -> None:
        # Without a callback there is nothing to start, so nothing is tracked.
        if self._on_start is None:
            return
        if self.is_completed(identity):
            with self._lock:
                self._started.discard(identity)
            return
        with self._lock:
            if identity in self._started:
                return
            self._started.add(identity)
        self._on_start(identity, client_address, canonical_query)

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._started)

    def is_completed(self, identity: str) -> bool:
        return (self.results_root / identity / "packages.json").is_file()

    def total_pages(self, identity: str) -> int:
        directory = self.results_root / identity
        if not directory.is_dir():
            return 0
        return sum(1 for entry in directory.iterdir() if _PAGE_FILE.match(entry.name))


class JobStatusGate:
    """Ensures a search job exists and snapshots its status for one request."""

    def __init__(self, provider: JobStatusProvider) -> None:
        self.provider = provider

    def check(self, identity: str, client_address: str, canonical_query: str) -> JobStatus:
        logger.info("getquery(%r, %r, %r)", identity, client_address, canonical_query)
        self.provider.ensure_started(identity, client_address, canonical_query)
        if not self.provider.is_completed(identity):
            return JobStatus(identity=identity, completed=False)
        return JobStatus(
            identity=identity,
            completed=True,
            total_pages=self.provider.total_pages(identity),
        )
