"""Tests for semantic version range helpers."""

from __future__ import annotations

import pytest

from pubsentinel.engines.upgrade_advisor.constraints import (
    FALLBACK_MIN_VERSION,
    min_version,
    satisfies,
)

# ── min_version ──────────────────────────────────────────────────────────


class TestMinVersion:
    @pytest.mark.parametrize(
        ("constraint", "expected"),
        [
            ("^7.2.0", "7.2.0"),
            ("^8.0.0", "8.0.0"),
            ("8.0.0", "8.0.0"),
            ("=8.0.0", "8.0.0"),
            (">=7.0.0 <9.0.0", "7.0.0"),
            (">= 7.0.0 < 9.0.0", "7.0.0"),
            ("~1.2.3", "1.2.3"),
            ("<9.0.0", "0.0.0"),
            ("<=9.0.0", "0.0.0"),
            ("*", "0.0.0"),
            ("", "0.0.0"),
        ],
    )
    def test_simple_ranges(self, constraint, expected):
        assert min_version(constraint) == expected

    def test_build_metadata_ignored(self):
        assert min_version("^1.0.0+1") == "1.0.0"

    def test_partial_versions(self):
        assert min_version("1") == "1.0.0"
        assert min_version("1.2") == "1.2.0"
        assert min_version("^1") == "1.0.0"
        assert min_version("1.x") == "1.0.0"

    def test_exclusive_lower_bound(self):
        assert min_version(">1.2.3") == "1.2.4"
        assert min_version(">1.2") == "1.3.0"
        assert min_version(">1") == "2.0.0"

    def test_exclusive_lower_bound_prerelease(self):
        assert min_version(">1.0.0-dev.1") == "1.0.0-dev.1.0"

    def test_prerelease_kept(self):
        assert min_version("^8.0.0-dev.3") == "8.0.0-dev.3"

    def test_dart_style_prerelease_range(self):
        assert min_version("^1.0.0-nullsafety.0") == "1.0.0-nullsafety.0"
        assert min_version(">=2.0.0-nullsafety.4 <3.0.0") == "2.0.0-nullsafety.4"

    def test_numeric_prerelease_sorts_below_release(self):
        assert min_version(">=1.0.0-1 <1.0.0") == "1.0.0-1"
        assert min_version(">=1.0.0 <1.0.0-1") is None

    def test_prerelease_identifiers_order_by_semver_rules(self):
        # "alpha" and "a" are different tags; numeric identifiers compare numerically.
        assert min_version(">=1.0.0-a >=1.0.0-alpha") == "1.0.0-alpha"
        assert min_version(">=1.0.0-rc.2 >=1.0.0-rc.10") == "1.0.0-rc.10"

    def test_hyphen_range(self):
        assert min_version("1.2.3 - 2.0.0") == "1.2.3"

    def test_union_picks_lowest(self):
        assert min_version("^2.0.0 || ^1.4.0") == "1.4.0"

    def test_union_skips_unsatisfiable_alternative(self):
        assert min_version(">=9.0.0 <8.0.0 || ^3.0.0") == "3.0.0"

    def test_highest_lower_bound_wins(self):
        assert min_version(">=1.0.0 >=2.0.0") == "2.0.0"

    def test_unsatisfiable_returns_none(self):
        assert min_version(">=9.0.0 <8.0.0") is None
        assert min_version(">=8.0.0 <8.0.0") is None
        assert min_version("<0.0.0") is None
        assert min_version(">*") is None

    def test_unparsable_returns_none(self):
        assert min_version("not-a-version") is None
        assert min_version("^abc") is None
        assert min_version("latest") is None

    def test_fallback_constant(self):
        assert FALLBACK_MIN_VERSION == "0.0.0"


# ── satisfies ────────────────────────────────────────────────────────────


class TestSatisfies:
    def test_equal_versions(self):
        assert satisfies("8.0.0", "8.0.0")

    def test_lower_version_does_not_satisfy(self):
        assert not satisfies("7.2.0", "8.0.0")

    def test_higher_version_does_not_satisfy(self):
        # Exact-version range: anything but the same version misses.
        assert not satisfies("9.0.0", "8.0.0")

    def test_build_metadata_ignored(self):
        assert satisfies("1.0.0", "1.0.0+2")
        assert satisfies("1.0.0+1", "1.0.0")

    def test_prerelease_must_match(self):
        assert satisfies("8.0.0-dev.3", "8.0.0-dev.3")
        assert not satisfies("8.0.0", "8.0.0-dev.3")

    def test_dart_style_prerelease(self):
        assert satisfies("0.6.0-nullsafety.0", "0.6.0-nullsafety.0")
        assert not satisfies("0.6.0-nullsafety.0", "0.6.0-nullsafety.1")

    def test_prerelease_identifiers_are_not_normalised(self):
        assert not satisfies("1.0.0-alpha", "1.0.0-a")
        assert not satisfies("1.0.0-preview.1", "1.0.0-rc.1")
        assert not satisfies("1.0.0-1", "1.0.0")

    def test_invalid_input(self):
        assert not satisfies("garbage", "8.0.0")
        assert not satisfies("8.0.0", "")
        assert not satisfies("8.0", "8.0.0")
