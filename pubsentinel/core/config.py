"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

import structlog

log = structlog.get_logger("pubsentinel.config")

DEFAULT_PUB_URL = "https://pub.dev/api/packages"
DEFAULT_HTTP_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Settings for a single pubsentinel run.

    Reads from environment variables:
        PUBSENTINEL_PUB_URL      — pub package API base URL (default: pub.dev)
        PUBSENTINEL_HTTP_TIMEOUT — per-request timeout in seconds (default: 10)
    """

    pub_url: str = DEFAULT_PUB_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls) -> Settings:
        pub_url = os.environ.get("PUBSENTINEL_PUB_URL", "").strip().rstrip("/")
        return cls(
            pub_url=pub_url or DEFAULT_PUB_URL,
            http_timeout=_parse_timeout(os.environ.get("PUBSENTINEL_HTTP_TIMEOUT")),
        )


def _parse_timeout(value: str | None) -> float:
    if value is None or not value.strip():
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        log.warning("config.invalid_timeout", value=value, default=DEFAULT_HTTP_TIMEOUT)
        return DEFAULT_HTTP_TIMEOUT
    if timeout <= 0:
        log.warning("config.invalid_timeout", value=value, default=DEFAULT_HTTP_TIMEOUT)
        return DEFAULT_HTTP_TIMEOUT
    return timeout
