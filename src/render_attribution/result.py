"""Verdict, LogEntry and ChangeLog: the output contract of a commit walk.

This module provides the per-node verdict returned by the classifier and the
ordered per-commit change log returned by the walker.  None of these types
hold a reference to an input snapshot: the host may recycle its snapshots as
soon as a walk returns.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterator
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from render_attribution.errors import AttributionError

__all__ = ["ChangeLog", "LogEntry", "ReasonTag", "Verdict"]


class ReasonTag(StrEnum):
    """Why a node is reported as rendered.

    Members are listed in priority order for the attributable causes
    (props > state > ref > context).
    """

    PROPS_CHANGED = auto()
    STATE_CHANGED = auto()
    REF_CHANGED = auto()
    CONTEXT_CHANGED = auto()
    PARENT_RENDERED = auto()
    STRUCTURAL_IDENTITY_CHANGED = auto()


@dataclass(frozen=True, slots=True)
class Verdict:
    """Classification of one node for one commit.

    Attributes:
        rendered: True when the node is reported as having rendered.
        reason:   Primary attribution, or None for mounts and non-renders.
        causes:   Every attributable cause that held, in priority order.
                  ``reason`` is ``causes[0]`` whenever ``causes`` is non-empty.
    """

    rendered: bool
    reason: ReasonTag | None = None
    causes: tuple[ReasonTag, ...] = ()

    @classmethod
    def mount(cls) -> Verdict:
        return cls(rendered=True)

    @classmethod
    def bailout(cls) -> Verdict:
        return cls(rendered=False)

    @property
    def is_mount(self) -> bool:
        """A rendered verdict without a reason is a mount."""
        return self.rendered and self.reason is None


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One row of the change log.

    Attributes:
        node_key: The host-supplied stable identity of the node.
        verdict:  The reported verdict, or None when classification failed.
        error:    The error raised for this node when classification failed.
    """

    node_key: Hashable
    verdict: Verdict | None
    error: AttributionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class ChangeLog:
    """Ordered result of walking one commit.

    Attributes:
        entries: One entry per visited node, in document (pre-)order.
        computation_time_ms: Wall-clock duration of the walk in milliseconds.
    """

    entries: tuple[LogEntry, ...]
    computation_time_ms: float

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    @property
    def errors(self) -> list[LogEntry]:
        """Entries whose classification failed, in document order."""
        return [entry for entry in self.entries if entry.error is not None]

    def verdict_for(self, node_key: Hashable) -> Verdict | None:
        """Return the verdict recorded for ``node_key``.

        Raises:
            KeyError: If the node was not visited by this walk.
        """
        for entry in self.entries:
            if entry.node_key == node_key:
                return entry.verdict
        raise KeyError(node_key)

    def rendered_keys(self) -> list[Hashable]:
        """Keys of every node reported as rendered, in document order."""
        return [
            entry.node_key
            for entry in self.entries
            if entry.verdict is not None and entry.verdict.rendered
        ]

    def reason_counts(self) -> Counter[ReasonTag | None]:
        """Count rendered nodes per primary reason (None counts mounts)."""
        return Counter(
            entry.verdict.reason
            for entry in self.entries
            if entry.verdict is not None and entry.verdict.rendered
        )

    def as_records(self) -> list[dict[str, Any]]:
        """Return the entries as plain dicts with string reason tags.

        The visualizer consumes these; filtering structural nodes and turning
        tags into human text is left to it.
        """
        records: list[dict[str, Any]] = []
        for entry in self.entries:
            verdict = entry.verdict
            records.append(
                {
                    "key": entry.node_key,
                    "rendered": None if verdict is None else verdict.rendered,
                    "reason": None
                    if verdict is None or verdict.reason is None
                    else str(verdict.reason),
                    "causes": []
                    if verdict is None
                    else [str(cause) for cause in verdict.causes],
                    "error": None if entry.error is None else str(entry.error),
                }
            )
        return records
