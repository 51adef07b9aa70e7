"""Deterministic commit generators for performance benchmarks.

All generators produce fixed, reproducible trees. No random values.
Three tiers: ~100, ~1,000 and ~10,000 nodes.  Each tier provides a "quiet"
commit (nearly every node bails out) and a "busy" commit (the root's state
changes, so every descendant is attributed).

Trees alternate component and host nodes with a fan-out of 10 so the walk
exercises both classification strategies at every level.
"""

from __future__ import annotations

from typing import Any

import pytest

from render_attribution.tree.nodes import (
    PERFORMED_WORK,
    NodeKind,
    NodeSnapshot,
    TreeNode,
)

Commit = tuple[TreeNode, dict[str, NodeSnapshot]]


def _generate_commit(depth: int, *, busy: bool) -> Commit:
    """Generate a fan-out-10 tree of the given depth and its previous index."""
    previous: dict[str, NodeSnapshot] = {}
    shared_props: dict[str, dict[str, Any]] = {}

    def make(key: str, level: int) -> TreeNode:
        kind = (
            NodeKind.FUNCTION_COMPONENT if level % 2 == 0 else NodeKind.HOST_COMPONENT
        )
        props = shared_props.setdefault(key, {"key": key})
        previous[key] = NodeSnapshot(kind, flags=0, memoized_props=props)
        state = 1 if busy and key == "n" else None
        node = TreeNode(
            key=key,
            snapshot=NodeSnapshot(
                kind, flags=PERFORMED_WORK, memoized_props=props, memoized_state=state
            ),
        )
        if level < depth:
            node.children = [make(f"{key}.{i}", level + 1) for i in range(10)]
        return node

    return make("n", 0), previous


@pytest.fixture
def commit_100_quiet() -> Commit:
    """111-node commit where every component bails out."""
    return _generate_commit(2, busy=False)


@pytest.fixture
def commit_100_busy() -> Commit:
    """111-node commit where the root re-renders."""
    return _generate_commit(2, busy=True)


@pytest.fixture
def commit_1k_quiet() -> Commit:
    """1,111-node commit where every component bails out."""
    return _generate_commit(3, busy=False)


@pytest.fixture
def commit_1k_busy() -> Commit:
    """1,111-node commit where the root re-renders."""
    return _generate_commit(3, busy=True)


@pytest.fixture
def commit_10k_quiet() -> Commit:
    """11,111-node commit where every component bails out."""
    return _generate_commit(4, busy=False)


@pytest.fixture
def commit_10k_busy() -> Commit:
    """11,111-node commit where the root re-renders."""
    return _generate_commit(4, busy=True)
