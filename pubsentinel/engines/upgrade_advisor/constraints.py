"""Semantic version range helpers for pubspec constraints.

Understands the range syntax found in pubspec files (``^1.2.3``,
``>=7.0.0 <9.0.0``) plus the npm-style forms that share it: ``~``, partial
versions, ``x``/``*`` wildcards, hyphen ranges and ``||``.  The ``any`` and
``latest`` sentinels are handled by the caller, not here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import semver

FALLBACK_MIN_VERSION = "0.0.0"

_OPERATOR_SPACE_RE = re.compile(r"(\^|~>?|>=|<=|>|<|=)\s+")
_HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_COMPARATOR_RE = re.compile(r"^(\^|~>?|>=|<=|>|<|=)?v?(.+)$")
_PARTIAL_RE = re.compile(
    r"^(\d+|[xX*])"
    r"(?:\.(\d+|[xX*]))?"
    r"(?:\.(\d+|[xX*]))?"
    r"(?:-([0-9A-Za-z.-]+))?"  # prerelease
    r"(?:\+[0-9A-Za-z.-]+)?$"  # build metadata, ignored
)
_FULL_RE = re.compile(r"^v?=?(\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?)(?:\+[0-9A-Za-z.-]+)?$")


class InvalidConstraint(ValueError):
    """Raised when a constraint expression cannot be parsed."""


@dataclass(frozen=True)
class _Partial:
    major: int | None
    minor: int | None
    patch: int | None
    pre: str | None = None


@dataclass(frozen=True)
class _Bound:
    version: semver.Version
    text: str
    inclusive: bool = True


_ZERO = _Bound(semver.Version.parse(FALLBACK_MIN_VERSION), FALLBACK_MIN_VERSION)


def min_version(constraint: str) -> str | None:
    """Return the lowest version satisfying *constraint*, or None.

    None means the expression could not be parsed or no version satisfies
    it; callers fall back to :data:`FALLBACK_MIN_VERSION`.
    """
    try:
        alternatives = [_min_of_alternative(part) for part in constraint.split("||")]
    except InvalidConstraint:
        return None

    candidates = [bound for bound in alternatives if bound is not None]
    if not candidates:
        return None
    return min(candidates, key=lambda bound: bound.version).text


def satisfies(version: str, required_version: str) -> bool:
    """Whether *version* satisfies the exact-version range *required_version*.

    Build metadata is ignored on both sides.  Invalid input never satisfies.
    """
    left = _FULL_RE.match(version.strip())
    right = _FULL_RE.match(required_version.strip())
    if left is None or right is None:
        return False
    try:
        return semver.Version.parse(left.group(1)) == semver.Version.parse(right.group(1))
    except ValueError:
        return False


# ── internal ──────────────────────────────────────────────────────────────


def _min_of_alternative(expr: str) -> _Bound | None:
    """Lowest version matching a single ``||`` alternative, None if unsatisfiable."""
    expr = _OPERATOR_SPACE_RE.sub(r"\1", expr.strip())

    lowers: list[_Bound] = []
    uppers: list[_Bound] = []

    hyphen = _HYPHEN_RE.match(expr)
    if hyphen:
        low = _parse_partial(hyphen.group(1))
        high = _parse_partial(hyphen.group(2))
        if low.major is not None:
            lowers.append(_floor(low))
        upper = _upper_for_lte(high)
        if upper is not None:
            uppers.append(upper)
    else:
        for token in expr.split():
            lower, upper, satisfiable = _comparator_bounds(token)
            if not satisfiable:
                return None
            if lower is not None:
                lowers.append(lower)
            if upper is not None:
                uppers.append(upper)

    candidate = max(lowers, key=lambda bound: bound.version) if lowers else _ZERO
    for upper in uppers:
        if candidate.version > upper.version:
            return None
        if candidate.version == upper.version and not upper.inclusive:
            return None
    return candidate


def _comparator_bounds(token: str) -> tuple[_Bound | None, _Bound | None, bool]:
    """Return ``(lower, upper, satisfiable)`` for one comparator token."""
    m = _COMPARATOR_RE.match(token)
    if not m:
        raise InvalidConstraint(token)
    op = m.group(1) or "="
    partial = _parse_partial(m.group(2))

    if op == ">":
        if partial.major is None:
            return None, None, False
        return _above(partial), None, True

    if op == "<":
        if partial.major is None:
            return None, None, False
        return None, _bound(_floor_text(partial), inclusive=False), True

    if op == "<=":
        return None, _upper_for_lte(partial), True

    lower = _floor(partial) if partial.major is not None else None

    if op == ">=":
        return lower, None, True
    if op == "^":
        return lower, _caret_ceiling(partial), True
    if op in ("~", "~>"):
        return lower, _tilde_ceiling(partial), True
    # "=" or bare version
    return lower, _upper_for_lte(partial), True


def _parse_partial(text: str) -> _Partial:
    m = _PARTIAL_RE.match(text)
    if not m:
        raise InvalidConstraint(text)

    parts: list[int | None] = []
    for raw in m.group(1, 2, 3):
        # A wildcard swallows every component after it.
        if raw is None or raw in ("x", "X", "*") or (parts and parts[-1] is None):
            parts.append(None)
        else:
            parts.append(int(raw))
    major, minor, patch = parts
    pre = m.group(4) if patch is not None else None
    return _Partial(major, minor, patch, pre)


def _floor_text(partial: _Partial) -> str:
    text = f"{partial.major or 0}.{partial.minor or 0}.{partial.patch or 0}"
    if partial.pre:
        text += f"-{partial.pre}"
    return text


def _bound(text: str, *, inclusive: bool = True) -> _Bound:
    try:
        version = semver.Version.parse(text)
    except ValueError as exc:
        raise InvalidConstraint(text) from exc
    return _Bound(version, text, inclusive)


def _floor(partial: _Partial) -> _Bound:
    return _bound(_floor_text(partial))


def _above(partial: _Partial) -> _Bound:
    """Lowest version strictly greater than *partial*."""
    if partial.major is None:
        raise InvalidConstraint(">*")
    if partial.minor is None:
        return _bound(f"{partial.major + 1}.0.0")
    if partial.patch is None:
        return _bound(f"{partial.major}.{partial.minor + 1}.0")
    if partial.pre:
        # Appending a numeric identifier gives the next prerelease up.
        return _bound(f"{_floor_text(partial)}.0")
    return _bound(f"{partial.major}.{partial.minor}.{partial.patch + 1}")


def _upper_for_lte(partial: _Partial) -> _Bound | None:
    """Upper bound of ``<=partial`` (also the ceiling of a bare partial)."""
    if partial.major is None:
        return None
    if partial.minor is None:
        return _bound(f"{partial.major + 1}.0.0", inclusive=False)
    if partial.patch is None:
        return _bound(f"{partial.major}.{partial.minor + 1}.0", inclusive=False)
    return _floor(partial)


def _caret_ceiling(partial: _Partial) -> _Bound | None:
    if partial.major is None:
        return None
    if partial.major > 0 or partial.minor is None:
        return _bound(f"{partial.major + 1}.0.0", inclusive=False)
    if partial.minor > 0 or partial.patch is None:
        return _bound(f"0.{partial.minor + 1}.0", inclusive=False)
    return _bound(f"0.0.{partial.patch + 1}", inclusive=False)


def _tilde_ceiling(partial: _Partial) -> _Bound | None:
    if partial.major is None:
        return None
    if partial.minor is None:
        return _bound(f"{partial.major + 1}.0.0", inclusive=False)
    return _bound(f"{partial.major}.{partial.minor + 1}.0", inclusive=False)
