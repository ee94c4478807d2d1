"""Packages with known migration guides, watched on every run."""

from __future__ import annotations

from pubsentinel.engines.upgrade_advisor.models import (
    ActionKind,
    RemediationAction,
    WatchedPackage,
)

BLOC_MIGRATION_GUIDE_URL = "https://bloclibrary.dev/#/migration"
EQUATABLE_MIGRATION_GUIDE_URL = (
    "https://github.com/felangel/equatable/blob/master/doc/migration_guides/migration-0.6.0.md"
)

OPEN_BLOC_MIGRATION_GUIDE = RemediationAction(
    label="Open Migration Guide",
    kind=ActionKind.OPEN_URL,
    url=BLOC_MIGRATION_GUIDE_URL,
)
OPEN_EQUATABLE_MIGRATION_GUIDE = RemediationAction(
    label="Open Migration Guide",
    kind=ActionKind.OPEN_URL,
    url=EQUATABLE_MIGRATION_GUIDE_URL,
)

# Checked against pubspec ``dependencies``.
DEPENDENCIES: tuple[WatchedPackage, ...] = (
    WatchedPackage("angular_bloc", (OPEN_BLOC_MIGRATION_GUIDE,)),
    WatchedPackage("bloc", (OPEN_BLOC_MIGRATION_GUIDE,)),
    WatchedPackage("bloc_concurrency", (OPEN_BLOC_MIGRATION_GUIDE,)),
    WatchedPackage("equatable", (OPEN_EQUATABLE_MIGRATION_GUIDE,)),
    WatchedPackage("flutter_bloc", (OPEN_BLOC_MIGRATION_GUIDE,)),
    WatchedPackage("hydrated_bloc", (OPEN_BLOC_MIGRATION_GUIDE,)),
    WatchedPackage("replay_bloc", (OPEN_BLOC_MIGRATION_GUIDE,)),
    WatchedPackage("sealed_flutter_bloc", (OPEN_BLOC_MIGRATION_GUIDE,)),
)

# Checked against pubspec ``dev_dependencies``.
DEV_DEPENDENCIES: tuple[WatchedPackage, ...] = (
    WatchedPackage("bloc_test", (OPEN_BLOC_MIGRATION_GUIDE,)),
)
