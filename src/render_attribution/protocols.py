"""WorkNode Protocol: the shape of a "next" tree node the walker accepts.

Hosts can hand their own node objects to ``CommitWalker.walk`` without
converting them to ``TreeNode`` first: any object exposing ``key``,
``snapshot`` and ``children`` satisfies this protocol structurally.

Example::

    from render_attribution.protocols import WorkNode

    class HostFiberView:
        def __init__(self, fiber_id, snapshot, children):
            self.key = fiber_id
            self.snapshot = snapshot
            self.children = children

    assert isinstance(HostFiberView(1, snap, []), WorkNode)  # structural
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from render_attribution.tree.nodes import NodeSnapshot


@runtime_checkable
class WorkNode(Protocol):
    """Structural protocol for one position of the "next" tree.

    - ``key`` is the host's stable node identity (hashable, unique per tree).
    - ``snapshot`` is the node's ``NodeSnapshot`` after the commit.
    - ``children`` lists child nodes in document order.
    """

    key: Hashable
    snapshot: NodeSnapshot
    children: Sequence[WorkNode]
