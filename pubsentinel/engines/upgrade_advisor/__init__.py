"""Upgrade advisor engine — flag watched packages declared below their latest release."""

from pubsentinel.engines.upgrade_advisor.advisor import UpgradeAdvisor, resolve_versions
from pubsentinel.engines.upgrade_advisor.models import (
    ActionKind,
    Advisory,
    RemediationAction,
    WatchedPackage,
)
from pubsentinel.engines.upgrade_advisor.registry import DEPENDENCIES, DEV_DEPENDENCIES

__all__ = [
    "DEPENDENCIES",
    "DEV_DEPENDENCIES",
    "ActionKind",
    "Advisory",
    "RemediationAction",
    "UpgradeAdvisor",
    "WatchedPackage",
    "resolve_versions",
]
