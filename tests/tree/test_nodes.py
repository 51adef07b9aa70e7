"""Tests for NodeKind StrEnum and the snapshot dataclasses.

Verifies:
- NodeKind values are lower-cased member names (StrEnum property)
- The attributable family is exactly the six component kinds
- NodeSnapshot/NodePair are frozen and slotted; TreeNode children are independent
- MISSING is a distinct, stable sentinel
"""

from __future__ import annotations

import copy
import pickle
from dataclasses import FrozenInstanceError

import pytest

from render_attribution.tree.nodes import (
    ATTRIBUTABLE_KINDS,
    MISSING,
    PERFORMED_WORK,
    ContextDependency,
    NodeKind,
    NodePair,
    NodeSnapshot,
    TreeNode,
)


class TestNodeKind:
    def test_members_are_str_instances(self) -> None:
        for member in NodeKind:
            assert isinstance(member, str), f"{member!r} is not a str instance"

    def test_values_are_lowercased(self) -> None:
        assert NodeKind.CLASS_COMPONENT == "class_component"
        assert NodeKind.SIMPLE_MEMO_COMPONENT == "simple_memo_component"
        assert NodeKind.HOST_COMPONENT == "host_component"

    def test_attributable_family(self) -> None:
        assert ATTRIBUTABLE_KINDS == {
            NodeKind.CLASS_COMPONENT,
            NodeKind.FUNCTION_COMPONENT,
            NodeKind.CONTEXT_CONSUMER,
            NodeKind.MEMO_COMPONENT,
            NodeKind.SIMPLE_MEMO_COMPONENT,
            NodeKind.FORWARD_REF,
        }

    def test_is_attributable_property(self) -> None:
        assert NodeKind.FORWARD_REF.is_attributable
        assert not NodeKind.FRAGMENT.is_attributable
        assert not NodeKind.HOST_TEXT.is_attributable

    def test_structural_kinds_exist(self) -> None:
        structural = set(NodeKind) - ATTRIBUTABLE_KINDS
        assert NodeKind.HOST_ROOT in structural
        assert NodeKind.PORTAL in structural
        assert len(structural) == len(NodeKind) - 6


class TestMissing:
    def test_repr(self) -> None:
        assert repr(MISSING) == "MISSING"

    def test_is_not_none(self) -> None:
        assert MISSING is not None

    def test_survives_copy_and_pickle(self) -> None:
        assert copy.deepcopy(MISSING) is MISSING
        assert pickle.loads(pickle.dumps(MISSING)) is MISSING


class TestNodeSnapshot:
    def test_defaults(self) -> None:
        snapshot = NodeSnapshot(NodeKind.HOST_COMPONENT)
        assert snapshot.flags == 0
        assert snapshot.memoized_props is MISSING
        assert snapshot.memoized_state is None
        assert snapshot.ref is None
        assert snapshot.context_dependencies is None

    def test_values_are_stored_by_reference(self) -> None:
        props = {"a": 1}
        snapshot = NodeSnapshot(NodeKind.FUNCTION_COMPONENT, memoized_props=props)
        assert snapshot.memoized_props is props

    def test_is_frozen(self) -> None:
        snapshot = NodeSnapshot(NodeKind.FUNCTION_COMPONENT, flags=PERFORMED_WORK)
        with pytest.raises(FrozenInstanceError):
            snapshot.flags = 0  # type: ignore[misc]

    def test_uses_slots(self) -> None:
        assert hasattr(NodeSnapshot, "__slots__")

    def test_context_dependency_fields(self) -> None:
        context = object()
        dep = ContextDependency(context=context, memoized_value="dark")
        assert dep.context is context
        assert dep.memoized_value == "dark"


class TestNodePair:
    def test_mount(self) -> None:
        pair = NodePair(next=NodeSnapshot(NodeKind.HOST_TEXT))
        assert pair.previous is None
        assert pair.is_mount

    def test_update(self) -> None:
        snapshot = NodeSnapshot(NodeKind.HOST_TEXT)
        pair = NodePair(next=snapshot, previous=snapshot)
        assert not pair.is_mount

    def test_is_frozen(self) -> None:
        pair = NodePair(next=NodeSnapshot(NodeKind.HOST_TEXT))
        with pytest.raises(FrozenInstanceError):
            pair.previous = pair.next  # type: ignore[misc]


class TestTreeNode:
    def test_default_children_is_empty_list(self) -> None:
        node = TreeNode(key="a", snapshot=NodeSnapshot(NodeKind.HOST_ROOT))
        assert node.children == []

    def test_children_lists_are_independent_per_instance(self) -> None:
        snapshot = NodeSnapshot(NodeKind.HOST_COMPONENT)
        node_a = TreeNode(key="a", snapshot=snapshot)
        node_b = TreeNode(key="b", snapshot=snapshot)
        node_a.children.append(TreeNode(key="c", snapshot=snapshot))
        assert node_b.children == []
        assert node_a.children is not node_b.children

    def test_cannot_add_arbitrary_attributes(self) -> None:
        node = TreeNode(key="a", snapshot=NodeSnapshot(NodeKind.HOST_ROOT))
        with pytest.raises(AttributeError):
            node.undefined_attribute = "should fail"  # type: ignore[attr-defined]


class TestWorkNodeProtocol:
    def test_tree_node_satisfies_protocol(self) -> None:
        from render_attribution.protocols import WorkNode

        node = TreeNode(key="a", snapshot=NodeSnapshot(NodeKind.HOST_ROOT))
        assert isinstance(node, WorkNode)

    def test_plain_object_does_not(self) -> None:
        from render_attribution.protocols import WorkNode

        assert not isinstance(object(), WorkNode)
