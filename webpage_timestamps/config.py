"""Extraction configuration.

Defaults live in DEFAULT_CONFIG; load_config() layers .env / environment
overrides on top (WEBPAGE_TIMESTAMPS_* variables).
"""

import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "WEBPAGE_TIMESTAMPS_"

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; Webpage-Timestamps/1.0)"


class ExtractorConfig(BaseModel):
    """Per-call extraction settings.

    Only enable_heuristics affects extraction itself; the rest is handed to
    the fetcher untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    timeout: int = Field(default=10000, ge=0)  # milliseconds
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="userAgent")
    follow_redirects: bool = Field(default=True, alias="followRedirects")
    max_redirects: int = Field(default=5, ge=0, alias="maxRedirects")
    enable_heuristics: bool = Field(default=True, alias="enableHeuristics")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000


DEFAULT_CONFIG = ExtractorConfig()

# Env var suffix -> config field
ENV_FIELDS = {
    "TIMEOUT": "timeout",
    "USER_AGENT": "user_agent",
    "FOLLOW_REDIRECTS": "follow_redirects",
    "MAX_REDIRECTS": "max_redirects",
    "ENABLE_HEURISTICS": "enable_heuristics",
}


def load_config(overrides: Optional[dict[str, Any]] = None) -> ExtractorConfig:
    """Build a config from .env / environment, then explicit overrides.

    Overrides with a None value are ignored so CLI options can be passed
    straight through. Raises pydantic.ValidationError on bad values.
    """
    load_dotenv(find_dotenv(usecwd=True))

    values: dict[str, Any] = DEFAULT_CONFIG.model_dump()

    for suffix, field in ENV_FIELDS.items():
        raw = os.environ.get(ENV_PREFIX + suffix)
        if raw is not None and raw != "":
            values[field] = raw

    for field, value in (overrides or {}).items():
        if value is not None:
            values[field] = value

    return ExtractorConfig.model_validate(values)
