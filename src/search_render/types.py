"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass

from markupsafe import Markup
from pydantic import BaseModel, ConfigDict, Field


class ResultRecord(BaseModel):
    """One match as written to ``page_<N>.json`` by the search backend."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    path: str = Field(alias="Path")
    line: int = Field(alias="Line")
    path_rank: float = Field(default=0.0, alias="PathRank")
    ranking: float = Field(default=0.0, alias="Ranking")
    context: str = Field(default="", alias="Context")
    ctxp2: str = Field(default="", alias="Ctxp2")
    ctxp1: str = Field(default="", alias="Ctxp1")
    ctxn1: str = Field(default="", alias="Ctxn1")
    ctxn2: str = Field(default="", alias="Ctxn2")


class PackageList(BaseModel):
    """Package names for the whole result set, as stored in ``packages.json``."""

    model_config = ConfigDict(populate_by_name=True)

    packages: list[str] = Field(default_factory=list, alias="Packages")


@dataclass(slots=True, frozen=True)
class JobStatus:
    """Completion state of a query, read once per request."""

    identity: str
    completed: bool
    total_pages: int = 0


@dataclass(slots=True)
class LoadedPage:
    """Records of one page plus the package list of the query."""

    identity: str
    page: int
    results: list[ResultRecord]
    packages: list[str]


@dataclass(slots=True)
class HalfRenderedResult:
    """Per-result view record handed to the results template."""

    path: str
    line: int
    path_rank: float
    ranking: float
    source_package: str
    relative_path: str
    context: Markup
