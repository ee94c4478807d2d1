"""Async pub.dev API client — latest published version lookup."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from pubsentinel.core.config import DEFAULT_HTTP_TIMEOUT, DEFAULT_PUB_URL

log = structlog.get_logger("pubsentinel.engine")


class PubClient:
    """Thin async wrapper around the pub package API.

    Every lookup is a single GET with no retries.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_PUB_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> PubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def get_latest_package_version(self, name: str) -> str:
        """Return the latest published version of *name*, or ``""``.

        Unknown packages, HTTP errors, timeouts and malformed bodies all
        yield ``""``; this method never raises for a failed lookup.
        """
        url = f"{self._base_url}/{name}"
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as exc:
            log.debug("pub.fetch_failed", package=name, status=exc.response.status_code)
            return ""
        except httpx.HTTPError as exc:
            log.warning("pub.fetch_failed", package=name, error=str(exc))
            return ""
        except ValueError:
            log.warning("pub.invalid_body", package=name)
            return ""

        version = self._extract_latest(body)
        if not version:
            log.warning("pub.missing_latest", package=name)
        return version

    # ── internal ───────────────────────────────────────────────────────────

    @staticmethod
    def _extract_latest(body: Any) -> str:
        """Pull ``latest.version`` out of a package listing body."""
        if not isinstance(body, dict):
            return ""
        latest = body.get("latest")
        if not isinstance(latest, dict):
            return ""
        version = latest.get("version")
        return version if isinstance(version, str) else ""
