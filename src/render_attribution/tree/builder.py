"""TreeBuilder: converts a JSON-like commit description into TreeNode trees.

Host adapters commonly export a commit as nested plain mappings.  TreeBuilder
turns one such description into ``TreeNode``/``NodeSnapshot`` objects, and
``index_tree`` turns a tree into the identity-keyed index of previous
snapshots the walker expects.

Description format (every field except ``key`` and ``kind`` is optional)::

    {
        "key": "app",                 # stable node identity
        "kind": "function_component", # a NodeKind value
        "flags": 1,
        "props": {...},               # stored by reference, never copied
        "state": ...,
        "ref": ...,
        "contexts": [(ThemeContext, "dark")],  # (context, observed value)
        "children": [ ...descriptions... ],
    }

An absent ``props`` field becomes ``MISSING`` rather than None so that the
classifier can tell "host sent nothing" from "host sent null".
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from typing import Any

from render_attribution.errors import MalformedSnapshotError
from render_attribution.tree.nodes import (
    MISSING,
    ContextDependency,
    NodeKind,
    NodeSnapshot,
    TreeNode,
)

__all__ = ["TreeBuilder", "index_tree"]

_FIELDS = frozenset(
    {"key", "kind", "flags", "props", "state", "ref", "contexts", "children"}
)


@dataclass
class TreeBuilder:
    """Converts a nested commit description into a ``TreeNode`` tree.

    The builder is stateless; one instance may build any number of trees.

    Example::

        builder = TreeBuilder()
        root = builder.build(
            {"key": "root", "kind": "host_root", "children": [
                {"key": "app", "kind": "function_component", "flags": 1, "props": {}},
            ]}
        )
    """

    def build(self, description: Mapping[str, Any]) -> TreeNode:
        """Build the tree rooted at ``description``.

        Traversal uses an explicit stack so arbitrarily deep descriptions do
        not hit the interpreter's recursion limit.

        Raises:
            MalformedSnapshotError: If any description is not a mapping, lacks
                ``key`` or ``kind``, names an unknown kind or field, or has
                malformed ``contexts``/``children``.
        """
        root = self._build_node(description)
        stack: list[tuple[TreeNode, Mapping[str, Any]]] = [(root, description)]
        while stack:
            node, desc = stack.pop()
            children = desc.get("children", ())
            if not isinstance(children, (list, tuple)):
                msg = f"children must be a list, got {type(children).__name__}"
                raise MalformedSnapshotError(msg, node_key=node.key)
            for child_desc in children:
                child = self._build_node(child_desc)
                node.children.append(child)
                stack.append((child, child_desc))
        return root

    def snapshot(self, description: Mapping[str, Any]) -> NodeSnapshot:
        """Build a single ``NodeSnapshot``; ``key`` and ``children`` are ignored."""
        return self._build_snapshot(description, description.get("key"))

    def _build_node(self, description: Any) -> TreeNode:
        if not isinstance(description, Mapping):
            msg = (
                "node description must be a mapping, "
                f"got {type(description).__name__}"
            )
            raise MalformedSnapshotError(msg)
        if "key" not in description:
            raise MalformedSnapshotError("node description has no key")
        key = description["key"]
        if not isinstance(key, Hashable):
            msg = f"node key must be hashable, got {type(key).__name__}"
            raise MalformedSnapshotError(msg)
        return TreeNode(key=key, snapshot=self._build_snapshot(description, key))

    def _build_snapshot(
        self, description: Mapping[str, Any], key: Any
    ) -> NodeSnapshot:
        unknown = set(description) - _FIELDS
        if unknown:
            msg = f"unknown snapshot fields: {sorted(unknown)}"
            raise MalformedSnapshotError(msg, node_key=key)

        try:
            kind = NodeKind(description["kind"])
        except KeyError:
            raise MalformedSnapshotError("snapshot has no kind", node_key=key) from None
        except ValueError:
            msg = f"unknown node kind {description['kind']!r}"
            raise MalformedSnapshotError(msg, node_key=key) from None

        return NodeSnapshot(
            kind=kind,
            flags=description.get("flags", 0),
            memoized_props=description.get("props", MISSING),
            memoized_state=description.get("state"),
            ref=description.get("ref"),
            context_dependencies=self._build_contexts(
                description.get("contexts"), key
            ),
        )

    @staticmethod
    def _build_contexts(
        contexts: Any, key: Any
    ) -> tuple[ContextDependency, ...] | None:
        if contexts is None:
            return None
        if not isinstance(contexts, (list, tuple)):
            msg = f"contexts must be a list, got {type(contexts).__name__}"
            raise MalformedSnapshotError(msg, node_key=key)
        dependencies: list[ContextDependency] = []
        for item in contexts:
            if isinstance(item, ContextDependency):
                dependencies.append(item)
                continue
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                msg = f"context entry must be a (context, value) pair, got {item!r}"
                raise MalformedSnapshotError(msg, node_key=key)
            context, value = item
            dependencies.append(
                ContextDependency(context=context, memoized_value=value)
            )
        return tuple(dependencies)


def index_tree(root: TreeNode) -> dict[Hashable, NodeSnapshot]:
    """Map every node key in the tree rooted at ``root`` to its snapshot.

    Use this on the tree as it was before a commit to produce the
    previous-snapshot index consumed by ``CommitWalker.walk``.

    Raises:
        MalformedSnapshotError: If a key appears more than once.
    """
    index: dict[Hashable, NodeSnapshot] = {}
    stack = [root]
    while stack:
        node = stack.pop()
        if node.key in index:
            raise MalformedSnapshotError("duplicate node key", node_key=node.key)
        index[node.key] = node.snapshot
        stack.extend(node.children)
    return index
