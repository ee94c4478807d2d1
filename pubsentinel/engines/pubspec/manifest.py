"""Read and update a workspace's pubspec.yaml."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

import structlog
import yaml

from pubsentinel.exceptions import ManifestNotFoundError, ManifestUpdateError

log = structlog.get_logger("pubsentinel.engine")

PUBSPEC_FILENAME = "pubspec.yaml"


class Pubspec:
    """The pubspec.yaml at the root of a Dart/Flutter workspace."""

    def __init__(self, workspace: Path) -> None:
        self._workspace = workspace

    @property
    def path(self) -> Path:
        return self._workspace / PUBSPEC_FILENAME

    async def get_pubspec(self) -> dict[str, Any] | None:
        """Parse the pubspec, or return None if it is missing or unusable."""
        return await asyncio.to_thread(self.load)

    async def update_pubspec_dependency(
        self,
        *,
        name: str,
        latest_version: str,
        current_version: str,
    ) -> bool:
        """Rewrite ``name: current_version`` to ``name: latest_version``.

        Returns True if the file changed.  Raises
        :class:`ManifestNotFoundError` if there is no pubspec and
        :class:`ManifestUpdateError` if it cannot be read or written.
        """
        return await asyncio.to_thread(
            self.update_dependency, name, latest_version, current_version
        )

    # ── sync implementations ─────────────────────────────────────────────

    def load(self) -> dict[str, Any] | None:
        path = self.path
        if not path.is_file():
            log.info("pubspec.not_found", path=str(path))
            return None
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as exc:
            log.warning("pubspec.read_failed", path=str(path), error=str(exc))
            return None
        except yaml.YAMLError as exc:
            log.warning("pubspec.invalid_yaml", path=str(path), error=str(exc))
            return None

        if not isinstance(data, dict):
            log.warning("pubspec.not_a_mapping", path=str(path))
            return None
        return data

    def update_dependency(self, name: str, latest_version: str, current_version: str) -> bool:
        path = self.path
        if not path.is_file():
            raise ManifestNotFoundError(str(path))
        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestUpdateError(f"cannot read {path}: {exc}") from exc

        updated = replace_constraint(content, name, current_version, latest_version)
        if updated is None:
            log.warning(
                "pubspec.dependency_not_found",
                path=str(path),
                package=name,
                constraint=current_version,
            )
            return False

        try:
            path.write_bytes(updated.encode("utf-8"))
        except OSError as exc:
            raise ManifestUpdateError(f"cannot write {path}: {exc}") from exc

        log.info(
            "pubspec.updated",
            path=str(path),
            package=name,
            old=current_version,
            new=latest_version,
        )
        return True


def replace_constraint(content: str, name: str, current: str, latest: str) -> str | None:
    """Swap the first ``name: current`` entry in *content* for ``name: latest``.

    Quoting around the constraint, any trailing comment and the line ending
    are preserved.
    Returns None when no entry matches.
    """
    pattern = re.compile(
        rf"^(?P<prefix>[ \t]*{re.escape(name)}:[ \t]*)"
        rf"(?P<quote>['\"]?){re.escape(current)}(?P=quote)"
        r"(?P<suffix>[ \t]*(?:#[^\r\n]*)?)(?=\r?$)",
        re.MULTILINE,
    )

    def _swap(m: re.Match[str]) -> str:
        quote = m.group("quote")
        return f"{m.group('prefix')}{quote}{latest}{quote}{m.group('suffix')}"

    updated, count = pattern.subn(_swap, content, count=1)
    return updated if count else None
