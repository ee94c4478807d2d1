"""Pubspec manifest access — read dependencies, rewrite constraints."""

from pubsentinel.engines.pubspec.manifest import PUBSPEC_FILENAME, Pubspec

__all__ = ["PUBSPEC_FILENAME", "Pubspec"]
