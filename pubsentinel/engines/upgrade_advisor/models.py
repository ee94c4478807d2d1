"""Data models for the upgrade advisor engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

UPDATE_LABEL = "Update"


class ActionKind(enum.Enum):
    """What a remediation action does when the user picks it."""

    OPEN_URL = "open_url"
    UPDATE = "update"


@dataclass(frozen=True)
class RemediationAction:
    """A button offered alongside an advisory."""

    label: str
    kind: ActionKind
    url: str | None = None


@dataclass(frozen=True)
class WatchedPackage:
    """A package with a known migration guide.

    ``required_version`` is empty in the static tables and filled in with the
    latest published version before a check runs.
    """

    name: str
    actions: tuple[RemediationAction, ...] = ()
    required_version: str = ""

    def find_action(self, label: str | None) -> RemediationAction | None:
        for action in self.actions:
            if action.label == label:
                return action
        return None


@dataclass(frozen=True)
class Advisory:
    """An outdated-dependency warning shown to the user."""

    package_name: str
    required_version: str
    declared_constraint: str
    offered_labels: tuple[str, ...] = field(default=(UPDATE_LABEL,))

    @property
    def message(self) -> str:
        return (
            f"This workspace contains an outdated version of {self.package_name}. "
            f"Please update to {self.required_version}."
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "package_name": self.package_name,
            "required_version": self.required_version,
            "declared_constraint": self.declared_constraint,
            "offered_labels": list(self.offered_labels),
            "message": self.message,
        }


UPDATE_ACTION = RemediationAction(label=UPDATE_LABEL, kind=ActionKind.UPDATE)
