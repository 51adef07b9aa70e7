"""CommitWalker: applies the NodeClassifier across one commit's tree.

This is the wiring layer between the per-node classifier and the public API.
It pairs every node of the "next" tree with its previous snapshot, classifies
it, carries the ancestor-rendered flag down the tree, and returns an ordered
``ChangeLog``.

Architecture:
- Traversal is document (pre-)order over an explicit stack of
  ``(node, ancestor_rendered)`` frames.  The carried flag lives only in the
  frames of one ``walk()`` call, so consecutive commits never share it.
- Pairing is by the host-supplied node ``key``, never by position.  A key
  missing from the previous index means the node was mounted by this commit.
- A node whose own verdict is "not rendered" but which sits below a rendered
  node is reported as ``PARENT_RENDERED``.  Its children still see the flag:
  once set, it holds for the rest of the subtree.
- Entries are collected locally and the ``ChangeLog`` is built only after the
  whole tree has been visited.  With ``isolate_errors=False`` the first error
  propagates and no log is returned at all.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING

from render_attribution.algorithm.classifier import NodeClassifier
from render_attribution.algorithm.config import AttributionConfig
from render_attribution.errors import (
    AttributionError,
    ClassificationPreconditionError,
)
from render_attribution.result import ChangeLog, LogEntry, ReasonTag, Verdict
from render_attribution.tree.nodes import NodePair

if TYPE_CHECKING:
    from render_attribution.protocols import WorkNode
    from render_attribution.tree.nodes import NodeSnapshot

__all__ = ["CommitWalker"]

logger = logging.getLogger(__name__)

_PARENT_RENDERED = Verdict(rendered=True, reason=ReasonTag.PARENT_RENDERED)


class CommitWalker:
    """Walks one commit and attributes a render verdict to every node.

    The walker holds only its config and classifier, both immutable; calling
    ``walk()`` twice with the same inputs always produces equal entries.

    Example::

        from render_attribution.walker import CommitWalker
        from render_attribution.tree import TreeBuilder, index_tree

        builder = TreeBuilder()
        previous_index = index_tree(builder.build(before_description))
        log = CommitWalker().walk(builder.build(after_description), previous_index)
        for entry in log:
            print(entry.node_key, entry.verdict)
    """

    def __init__(
        self,
        config: AttributionConfig | None = None,
        classifier: NodeClassifier | None = None,
    ) -> None:
        """Initialise the walker.

        Args:
            config:     Walk and classification settings.  Defaults to
                ``AttributionConfig()``.
            classifier: Classifier to apply per node.  Defaults to a
                ``NodeClassifier`` built from ``config``.
        """
        self._config: AttributionConfig = (
            config if config is not None else AttributionConfig()
        )
        self._classifier = (
            classifier if classifier is not None else NodeClassifier(self._config)
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def walk(
        self,
        root: WorkNode,
        previous_index: Mapping[Hashable, NodeSnapshot],
    ) -> ChangeLog:
        """Classify every node of the tree rooted at ``root``.

        Args:
            root:           Root of the tree after the commit.
            previous_index: Snapshot of every node present before the commit,
                keyed by stable node identity.

        Returns:
            A ``ChangeLog`` with one entry per node, in document order.

        Raises:
            AttributionError: Only when ``isolate_errors`` is False, for the
                first node that fails to classify.
            ClassificationPreconditionError: If a node key appears twice in the
                tree.  Duplicate identities make pairing meaningless, so this
                aborts the walk regardless of ``isolate_errors``.
        """
        t0 = time.perf_counter()

        entries: list[LogEntry] = []
        seen: set[Hashable] = set()
        propagate = self._config.propagate_parent_rendered

        stack: list[tuple[WorkNode, bool]] = [(root, False)]
        while stack:
            node, ancestor_rendered = stack.pop()
            key = node.key
            if key in seen:
                raise ClassificationPreconditionError(
                    "node key appears more than once in the tree", node_key=key
                )
            seen.add(key)

            verdict, error = self._classify_node(node, previous_index)
            if error is not None:
                entries.append(LogEntry(node_key=key, verdict=None, error=error))
                child_flag = ancestor_rendered
            elif verdict.rendered:
                entries.append(LogEntry(node_key=key, verdict=verdict))
                child_flag = True
            elif ancestor_rendered and propagate:
                entries.append(LogEntry(node_key=key, verdict=_PARENT_RENDERED))
                child_flag = True
            else:
                entries.append(LogEntry(node_key=key, verdict=verdict))
                child_flag = ancestor_rendered

            # Reversed so the first child is popped (visited) first.
            for child in reversed(node.children):
                stack.append((child, child_flag))

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        change_log = ChangeLog(entries=tuple(entries), computation_time_ms=elapsed_ms)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "walked commit: %d nodes, %d rendered, %d errors in %.3f ms",
                len(entries),
                len(change_log.rendered_keys()),
                len(change_log.errors),
                elapsed_ms,
            )
        return change_log

    # ------------------------------------------------------------------
    # Per-node classification
    # ------------------------------------------------------------------

    def _classify_node(
        self,
        node: WorkNode,
        previous_index: Mapping[Hashable, NodeSnapshot],
    ) -> tuple[Verdict, None] | tuple[None, AttributionError]:
        """Classify one node, isolating its error when so configured."""
        pair = NodePair(next=node.snapshot, previous=previous_index.get(node.key))
        try:
            return self._classifier.classify(pair), None
        except AttributionError as exc:
            exc.with_node_key(node.key)
            if not self._config.isolate_errors:
                raise
            logger.warning("could not classify node %r: %s", node.key, exc.message)
            # The traceback frames hold the pair and the previous index.
            return None, exc.with_traceback(None)
