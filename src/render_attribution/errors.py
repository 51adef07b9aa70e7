"""Exception hierarchy for render attribution.

All failures in this package are contract failures: the inputs are already
in memory, so nothing here is transient or worth retrying.  Each error carries
the key of the node it concerns when the caller knows it.
"""

from __future__ import annotations

from collections.abc import Hashable

__all__ = [
    "AttributionError",
    "ClassificationPreconditionError",
    "MalformedSnapshotError",
]


class AttributionError(Exception):
    """Base class for every error raised while attributing renders."""

    def __init__(self, message: str, node_key: Hashable | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.node_key = node_key

    def with_node_key(self, node_key: Hashable) -> AttributionError:
        """Return this error tagged with ``node_key`` (first tag wins)."""
        if self.node_key is None:
            self.node_key = node_key
        return self

    def __str__(self) -> str:
        if self.node_key is None:
            return self.message
        return f"{self.message} (node {self.node_key!r})"

    # Errors are recorded in change logs, so they compare by value.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributionError):
            return NotImplemented
        return (type(self), self.message, self.node_key) == (
            type(other),
            other.message,
            other.node_key,
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.node_key))


class ClassificationPreconditionError(AttributionError):
    """A pair violates an assumption the classifier relies on.

    Raised when ``previous`` and ``next`` have different kinds (a type swap
    the upstream tree diff should have reported as unmount + mount), or when
    a node identity appears twice in one tree.
    """


class MalformedSnapshotError(AttributionError):
    """A snapshot lacks a required field or carries an invalid value.

    Indicates a breach of the host's input contract.  Reported, never
    recovered.
    """
