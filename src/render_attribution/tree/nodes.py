"""NodeKind StrEnum and the snapshot dataclasses consumed by the classifier.

Provides the foundational data types for one commit: the immutable
``NodeSnapshot`` taken from a host work-node, the ``NodePair`` handed to the
classifier, and the ``TreeNode`` positions of the "next" tree handed to the
walker.  Snapshot field values (props, state, ref, context values) are
opaque: they are only ever compared by identity, never copied or inspected.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any, Final

__all__ = [
    "ATTRIBUTABLE_KINDS",
    "MISSING",
    "PERFORMED_WORK",
    "ContextDependency",
    "NodeKind",
    "NodePair",
    "NodeSnapshot",
    "TreeNode",
]

# Bit the host sets on a work-node it visited during the render phase.
PERFORMED_WORK: Final[int] = 0b1


class _Missing:
    """Marker type for a snapshot field the host did not supply."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final[Any] = _Missing()


class NodeKind(StrEnum):
    """Tag identifying what a work-node represents.

    Two families matter to classification:
    - attributable kinds: user-authored components whose re-render is worth
      reporting (see ``ATTRIBUTABLE_KINDS``).
    - structural kinds: everything else; rendering is inferred purely from
      shallow identity comparison.
    """

    CLASS_COMPONENT = auto()
    FUNCTION_COMPONENT = auto()
    CONTEXT_CONSUMER = auto()
    MEMO_COMPONENT = auto()
    SIMPLE_MEMO_COMPONENT = auto()
    FORWARD_REF = auto()

    HOST_ROOT = auto()
    HOST_COMPONENT = auto()
    HOST_TEXT = auto()
    FRAGMENT = auto()
    PORTAL = auto()
    CONTEXT_PROVIDER = auto()
    SUSPENSE = auto()
    PROFILER = auto()
    MODE = auto()

    @property
    def is_attributable(self) -> bool:
        return self in ATTRIBUTABLE_KINDS


ATTRIBUTABLE_KINDS: Final[frozenset[NodeKind]] = frozenset(
    {
        NodeKind.CLASS_COMPONENT,
        NodeKind.FUNCTION_COMPONENT,
        NodeKind.CONTEXT_CONSUMER,
        NodeKind.MEMO_COMPONENT,
        NodeKind.SIMPLE_MEMO_COMPONENT,
        NodeKind.FORWARD_REF,
    }
)


@dataclass(frozen=True, slots=True)
class ContextDependency:
    """One context subscription read by a node during its last render.

    Attributes:
        context:        The opaque context object subscribed to.  Matched
                        across snapshots by identity.
        memoized_value: The context value the node observed when it read it.
    """

    context: Any
    memoized_value: Any


@dataclass(frozen=True, slots=True)
class NodeSnapshot:
    """Immutable record of one work-node at one point in the tree's lifecycle.

    Attributes:
        kind:                 Which kind of node this is (see NodeKind).
        flags:                Host bitmask.  Only the "performed work" bit is
                              consulted; all other bits are ignored.
        memoized_props:       Props the node rendered with.  ``MISSING`` when the
                              host did not supply them.
        memoized_state:       State the node rendered with.
        ref:                  The node's ref object.
        context_dependencies: Context subscriptions in read order, or None when
                              the node subscribes to no context.
    """

    kind: NodeKind
    flags: int = 0
    memoized_props: Any = MISSING
    memoized_state: Any = None
    ref: Any = None
    context_dependencies: Sequence[ContextDependency] | None = None


@dataclass(frozen=True, slots=True)
class NodePair:
    """A next snapshot paired with its previous counterpart.

    ``previous`` is None when the node was mounted by this commit.
    """

    next: NodeSnapshot
    previous: NodeSnapshot | None = None

    @property
    def is_mount(self) -> bool:
        return self.previous is None


@dataclass(slots=True)
class TreeNode:
    """One position of the "next" tree as handed to the commit walker.

    Attributes:
        key:      Stable node identity supplied by the host.  Used to look up
                  the previous snapshot; never derived from tree position.
        snapshot: The node's snapshot after the commit.
        children: Child positions in document order.  Must use
                  field(default_factory=list) so instances never share a list.
    """

    key: Hashable
    snapshot: NodeSnapshot
    children: list[TreeNode] = field(default_factory=list)
