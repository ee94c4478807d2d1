"""UpgradeAdvisor — warn about watched packages pinned below their latest release."""

from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

import structlog

from pubsentinel.engines.upgrade_advisor.constraints import (
    FALLBACK_MIN_VERSION,
    min_version,
    satisfies,
)
from pubsentinel.engines.upgrade_advisor.models import (
    UPDATE_ACTION,
    UPDATE_LABEL,
    ActionKind,
    Advisory,
    RemediationAction,
    WatchedPackage,
)
from pubsentinel.engines.upgrade_advisor.registry import DEPENDENCIES, DEV_DEPENDENCIES

log = structlog.get_logger("pubsentinel.engine")

# Declared constraints that are always satisfied or cannot be judged.
_UNCHECKED_CONSTRAINTS = frozenset({"latest", "any"})


class VersionSource(Protocol):
    async def get_latest_package_version(self, name: str) -> str: ...


class Manifest(Protocol):
    async def get_pubspec(self) -> dict[str, Any] | None: ...

    async def update_pubspec_dependency(
        self, *, name: str, latest_version: str, current_version: str
    ) -> Any: ...


class Prompter(Protocol):
    async def show_warning(self, message: str, *labels: str) -> str | None: ...


async def resolve_versions(
    source: VersionSource,
    table: Sequence[WatchedPackage],
) -> list[WatchedPackage]:
    """Fill in ``required_version`` for every entry, fetching concurrently.

    A failed lookup leaves that entry's version empty; the others still
    resolve.  Table order is preserved.
    """
    results = await asyncio.gather(
        *(source.get_latest_package_version(pkg.name) for pkg in table),
        return_exceptions=True,
    )

    resolved: list[WatchedPackage] = []
    for pkg, result in zip(table, results, strict=True):
        if isinstance(result, BaseException):
            log.warning("advisor.version_lookup_failed", package=pkg.name, error=str(result))
            version = ""
        else:
            version = result or ""
        resolved.append(dataclasses.replace(pkg, required_version=version))
    return resolved


class UpgradeAdvisor:
    """Compare pubspec constraints against the latest watched-package releases.

    Each advisory is presented through the *prompter* in its own task; the
    check loop never waits for the user.  Call :meth:`drain` to wait until
    every presented advisory has been resolved.
    """

    def __init__(
        self,
        version_source: VersionSource,
        manifest: Manifest,
        prompter: Prompter,
        open_external: Callable[[str], Any],
        *,
        dependencies: Sequence[WatchedPackage] = DEPENDENCIES,
        dev_dependencies: Sequence[WatchedPackage] = DEV_DEPENDENCIES,
    ) -> None:
        self._version_source = version_source
        self._manifest = manifest
        self._prompter = prompter
        self._open_external = open_external
        self._dependencies = dependencies
        self._dev_dependencies = dev_dependencies
        self._pending: set[asyncio.Task[None]] = set()

    async def analyze(self) -> list[Advisory]:
        """Run one full check of runtime and dev dependencies.

        Returns the advisories that were presented.
        """
        dependencies, dev_dependencies, pubspec = await asyncio.gather(
            resolve_versions(self._version_source, self._dependencies),
            resolve_versions(self._version_source, self._dev_dependencies),
            self._manifest.get_pubspec(),
        )
        pubspec = pubspec or {}
        pubspec_dependencies = pubspec.get("dependencies") or {}
        pubspec_dev_dependencies = pubspec.get("dev_dependencies") or {}

        advisories = self.check_for_upgrades(dependencies, pubspec_dependencies)
        advisories += self.check_for_upgrades(dev_dependencies, pubspec_dev_dependencies)
        log.info(
            "advisor.analyzed",
            checked=len(dependencies) + len(dev_dependencies),
            advisories=len(advisories),
        )
        return advisories

    def check_for_upgrades(
        self,
        table: Sequence[WatchedPackage],
        pubspec_dependencies: Mapping[str, Any],
    ) -> list[Advisory]:
        """Present an advisory for every outdated entry of *table*.

        Must be called from a running event loop.
        """
        if not isinstance(pubspec_dependencies, Mapping):
            return []

        advisories: list[Advisory] = []
        for pkg in table:
            if not pkg.required_version:
                continue
            if pkg.name not in pubspec_dependencies:
                continue
            declared = pubspec_dependencies.get(pkg.name, "latest")
            if not isinstance(declared, str) or declared in _UNCHECKED_CONSTRAINTS:
                continue

            minimum = min_version(declared) or FALLBACK_MIN_VERSION
            if satisfies(minimum, pkg.required_version):
                continue

            advisory = Advisory(
                package_name=pkg.name,
                required_version=pkg.required_version,
                declared_constraint=declared,
                offered_labels=tuple(action.label for action in pkg.actions) + (UPDATE_LABEL,),
            )
            log.info(
                "advisor.advisory",
                package=pkg.name,
                declared=declared,
                min_version=minimum,
                required=pkg.required_version,
            )
            self._present(pkg, advisory)
            advisories.append(advisory)
        return advisories

    async def drain(self) -> None:
        """Wait for every presented advisory to be resolved.

        The first resolution failure (e.g. a pubspec update error) is raised.
        """
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # ── internal ─────────────────────────────────────────────────────────

    def _present(self, pkg: WatchedPackage, advisory: Advisory) -> None:
        task = asyncio.create_task(
            self._resolve(pkg, advisory), name=f"advisory-{pkg.name}"
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _resolve(self, pkg: WatchedPackage, advisory: Advisory) -> None:
        choice = await self._prompter.show_warning(advisory.message, *advisory.offered_labels)
        action = self._lookup(pkg, choice)
        if action is None:
            log.debug("advisor.dismissed", package=pkg.name)
            return

        log.info("advisor.action", package=pkg.name, action=action.label, kind=action.kind.value)
        if action.kind is ActionKind.UPDATE:
            await self._manifest.update_pubspec_dependency(
                name=pkg.name,
                latest_version=f"^{advisory.required_version}",
                current_version=advisory.declared_constraint,
            )
        elif action.kind is ActionKind.OPEN_URL and action.url:
            self._open_external(action.url)

    @staticmethod
    def _lookup(pkg: WatchedPackage, label: str | None) -> RemediationAction | None:
        if label is None:
            return None
        if label == UPDATE_LABEL:
            return UPDATE_ACTION
        return pkg.find_action(label)
