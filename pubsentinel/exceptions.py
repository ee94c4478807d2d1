"""Custom exceptions for pubsentinel."""


class PubsentinelError(Exception):
    """Base exception for all pubsentinel errors."""


class ManifestNotFoundError(PubsentinelError):
    """Raised when the workspace has no pubspec.yaml."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"pubspec.yaml not found: {path}")


class ManifestUpdateError(PubsentinelError):
    """Raised when a dependency constraint cannot be written back to the pubspec."""
