"""Tree subpackage for snapshot data types and tree construction.

Re-exports the public API for the tree module:
- NodeKind: StrEnum of work-node kinds; ATTRIBUTABLE_KINDS marks user components
- NodeSnapshot / ContextDependency: immutable per-node records
- NodePair: a next snapshot with its previous counterpart (None on mount)
- TreeNode: one position of the "next" tree handed to the walker
- TreeBuilder / index_tree: build trees and previous-snapshot indexes from dicts
"""

from render_attribution.tree.builder import TreeBuilder, index_tree
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

__all__ = [
    "ATTRIBUTABLE_KINDS",
    "MISSING",
    "PERFORMED_WORK",
    "ContextDependency",
    "NodeKind",
    "NodePair",
    "NodeSnapshot",
    "TreeBuilder",
    "TreeNode",
    "index_tree",
]
