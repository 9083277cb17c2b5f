"""Failure taxonomy for the server-rendered search handler."""

from __future__ import annotations


class SearchError(Exception):
    """Base error; every subclass maps to one HTTP status code."""

    status_code: int = 500


class ClientInputError(SearchError):
    """The request itself is unusable. Never retried."""

    status_code = 400


class EmptyQueryError(ClientInputError):
    status_code = 404

    def __init__(self) -> None:
        super().__init__("Empty query")


class InvalidPageError(ClientInputError):
    status_code = 400

    def __init__(self, raw: str) -> None:
        super().__init__("Invalid page parameter")
        self.raw = raw


class StorageConsistencyError(SearchError):
    """A completed query has missing or corrupt files on disk."""

    status_code = 500


class StorageReadError(StorageConsistencyError):
    pass


class StorageDecodeError(StorageConsistencyError):
    pass


class RenderError(SearchError):
    """Template execution failed, which means the view model and template disagree."""

    status_code = 500
