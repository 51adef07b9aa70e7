"""Public API functions for render-attribution.

This module provides the three user-facing functions: classify, did_render,
and walk.  Each call creates a fresh NodeClassifier (or CommitWalker) so no
state can carry over from one call, or one commit, to the next.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING

from render_attribution.algorithm.classifier import NodeClassifier
from render_attribution.algorithm.config import AttributionConfig
from render_attribution.walker import CommitWalker

if TYPE_CHECKING:
    from render_attribution.protocols import WorkNode
    from render_attribution.result import ChangeLog, Verdict
    from render_attribution.tree.nodes import NodePair, NodeSnapshot

__all__ = ["classify", "did_render", "walk"]


def classify(pair: NodePair, config: AttributionConfig | None = None) -> Verdict:
    """Return the render verdict for one (previous, next) snapshot pair.

    Args:
        pair:   The node's previous snapshot (None on mount) and next snapshot.
        config: Classification settings.  Defaults to ``AttributionConfig()``.

    Returns:
        A ``Verdict`` with ``rendered``, the primary ``reason`` and all ``causes``.

    Raises:
        ClassificationPreconditionError: If the two snapshots have different kinds.
        MalformedSnapshotError: If an attributable snapshot is missing required
            fields or carries invalid flags.
    """
    return NodeClassifier(config=config).classify(pair)


def did_render(pair: NodePair, config: AttributionConfig | None = None) -> bool:
    """Return True if the node in ``pair`` rendered during the commit.

    Equivalent to ``classify(pair, config).rendered``.
    """
    return classify(pair, config=config).rendered


def walk(
    root: WorkNode,
    previous_index: Mapping[Hashable, NodeSnapshot],
    config: AttributionConfig | None = None,
) -> ChangeLog:
    """Attribute a render verdict to every node of one commit.

    Creates a fresh ``CommitWalker`` per call, so the ancestor-rendered state
    of one commit can never leak into another.

    Args:
        root:           Root of the tree after the commit.
        previous_index: Previous snapshot of every node present before the
                        commit, keyed by stable node identity.
        config:         Walk settings.  Defaults to ``AttributionConfig()``.

    Returns:
        A ``ChangeLog`` with one entry per node in document (pre-)order.
    """
    return CommitWalker(config=config).walk(root, previous_index)
