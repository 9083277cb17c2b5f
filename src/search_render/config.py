"""Configuration models for the server-rendered search pages."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from search_render import __version__


class WebConfig(BaseModel):
    """Configures result storage location and template parameters."""

    query_results_path: Path = Field(default=Path("/var/lib/search/queryresults"))
    version: str = Field(default=__version__, min_length=1)
    interactive_path: str = Field(default="/instant", min_length=1)
    placeholder_refresh_seconds: int = Field(default=2, ge=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls) -> "WebConfig":
        values: dict[str, str] = {}
        for field_name, env_name in (
            ("query_results_path", "SEARCH_QUERY_RESULTS_PATH"),
            ("version", "SEARCH_VERSION"),
            ("interactive_path", "SEARCH_INTERACTIVE_PATH"),
            ("placeholder_refresh_seconds", "SEARCH_PLACEHOLDER_REFRESH"),
            ("log_level", "SEARCH_LOG_LEVEL"),
        ):
            value = os.getenv(env_name)
            if value:
                values[field_name] = value
        return cls.model_validate(values)
