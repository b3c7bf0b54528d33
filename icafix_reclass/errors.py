"""
Exceptions raised by the reclassification pipeline.

Every error here is fatal to a run: nothing is retried, and nothing is
written once one is raised.
"""

from typing import List, Optional, Sequence


class ReclassError(Exception):
    """Base class for all reclassification errors."""
    pass


class MalformedClassificationError(ReclassError, ValueError):
    """Raised when a classification list contains a token that is not a component index."""

    def __init__(self, token: str, position: int, source: Optional[str] = None):
        self.token = token
        self.position = position
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(
            f"Malformed component index {token!r} at token {position}{where}: "
            f"expected a positive integer"
        )


class ClassificationConsistencyError(ReclassError):
    """Raised once, after a full scan, when any consistency check failed."""

    def __init__(self, failures: Sequence, message: str = "Sanity checks on input files failed"):
        self.failures: List = list(failures)
        super().__init__(f"{message} ({len(self.failures)} failure(s))")


class ArtifactWriteError(ReclassError):
    """Raised when an output artifact cannot be staged or published."""
    pass


class ComponentCountError(ReclassError):
    """Raised when the number of ICA components cannot be determined."""
    pass


class ConfigError(ReclassError):
    """Raised when run configuration is missing or invalid."""

    def __init__(self, problems: Sequence[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems))


class ClassificationReadError(ReclassError):
    """Raised when a classification list exists but cannot be read or decoded."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read classification list {path}: {reason}")
