"""NodeClassifier: per-node render/bailout decision with cause attribution.

Decides, for one (previous, next) snapshot pair, whether the node actually
rendered during the commit and why.

Architecture:
- Mount:         ``previous`` absent -> rendered, no reason.  Nothing else is read.
- Attributable:  Two-stage predicate.  The host's "performed work" bit is sound
                 for negatives but not for positives, so it is read FIRST:
                 bit clear -> not rendered, no comparison at all.  Bit set ->
                 confirm against props, state, ref and context by identity; no
                 change means the host bailed out and the bit was a false
                 positive.
- Structural:    The bit is never read.  Rendered iff props, state or ref
                 changed by identity.

Kind dispatch is a fixed two-way split over ``ATTRIBUTABLE_KINDS``; the kind
set is closed, so there is no per-kind strategy registry.

The classifier holds only its immutable config.  It never mutates or retains
the snapshots it is given.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from render_attribution.algorithm.config import AttributionConfig
from render_attribution.errors import (
    ClassificationPreconditionError,
    MalformedSnapshotError,
)
from render_attribution.result import ReasonTag, Verdict
from render_attribution.tree.nodes import ATTRIBUTABLE_KINDS, MISSING

if TYPE_CHECKING:
    from render_attribution.tree.nodes import NodePair, NodeSnapshot

__all__ = ["NodeClassifier"]


class NodeClassifier:
    """Stateless render classifier for snapshot pairs.

    Example::

        from render_attribution.algorithm import NodeClassifier
        from render_attribution.tree import NodeKind, NodePair, NodeSnapshot

        props = {"title": "a"}
        kind = NodeKind.FUNCTION_COMPONENT
        before = NodeSnapshot(kind, flags=0, memoized_props=props)
        after = NodeSnapshot(kind, flags=1, memoized_props={"title": "b"})
        NodeClassifier().classify(NodePair(next=after, previous=before))
        # Verdict(rendered=True, reason=ReasonTag.PROPS_CHANGED, ...)
    """

    def __init__(self, config: AttributionConfig | None = None) -> None:
        self._config = config if config is not None else AttributionConfig()

    @property
    def config(self) -> AttributionConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(self, pair: NodePair) -> Verdict:
        """Return the render verdict for one snapshot pair.

        Args:
            pair: The node's previous snapshot (None on mount) and next snapshot.

        Returns:
            A ``Verdict``.  Mounts are rendered with no reason; attributable
            renders carry the highest-priority cause; structural renders carry
            ``STRUCTURAL_IDENTITY_CHANGED``.

        Raises:
            ClassificationPreconditionError: If the pair's kinds differ.
            MalformedSnapshotError: If an attributable snapshot has invalid
                flags or no memoized props.
        """
        previous = pair.previous
        if previous is None:
            return Verdict.mount()

        current = pair.next
        if previous.kind != current.kind:
            msg = (
                f"kind changed from {previous.kind!s} to {current.kind!s}; "
                "type swaps must be reported as unmount + mount"
            )
            raise ClassificationPreconditionError(msg)

        if current.kind in ATTRIBUTABLE_KINDS:
            return self._classify_attributable(previous, current)
        return self._classify_structural(previous, current)

    def did_perform_work(self, snapshot: NodeSnapshot) -> bool:
        """Return True when the configured "performed work" bit is set."""
        flags = snapshot.flags
        if isinstance(flags, bool) or not isinstance(flags, int) or flags < 0:
            msg = f"flags must be a non-negative int, got {flags!r}"
            raise MalformedSnapshotError(msg)
        return bool(flags & self._config.performed_work_mask)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _classify_attributable(
        self, previous: NodeSnapshot, current: NodeSnapshot
    ) -> Verdict:
        if not self.did_perform_work(current):
            return Verdict.bailout()

        if previous.memoized_props is MISSING or current.memoized_props is MISSING:
            msg = f"{current.kind!s} snapshot has no memoized props"
            raise MalformedSnapshotError(msg)

        causes = self._attributable_causes(previous, current)
        if not causes:
            # Flag set but nothing changed: the host bailed out.
            return Verdict.bailout()
        return Verdict(rendered=True, reason=causes[0], causes=causes)

    def _classify_structural(
        self, previous: NodeSnapshot, current: NodeSnapshot
    ) -> Verdict:
        if (
            previous.memoized_props is not current.memoized_props
            or previous.memoized_state is not current.memoized_state
            or previous.ref is not current.ref
        ):
            tag = ReasonTag.STRUCTURAL_IDENTITY_CHANGED
            return Verdict(rendered=True, reason=tag, causes=(tag,))
        return Verdict.bailout()

    # ------------------------------------------------------------------
    # Cause detection
    # ------------------------------------------------------------------

    def _attributable_causes(
        self, previous: NodeSnapshot, current: NodeSnapshot
    ) -> tuple[ReasonTag, ...]:
        """Return every cause that held, in priority order."""
        causes: list[ReasonTag] = []
        if previous.memoized_props is not current.memoized_props:
            causes.append(ReasonTag.PROPS_CHANGED)
        if previous.memoized_state is not current.memoized_state:
            causes.append(ReasonTag.STATE_CHANGED)
        if previous.ref is not current.ref:
            causes.append(ReasonTag.REF_CHANGED)
        if self._config.compare_context and self._context_changed(previous, current):
            causes.append(ReasonTag.CONTEXT_CHANGED)
        return tuple(causes)

    @staticmethod
    def _context_changed(previous: NodeSnapshot, current: NodeSnapshot) -> bool:
        """Return True if any context the node subscribes to changed value.

        Each dependency on ``current`` is matched to the dependency on the same
        context object in ``previous``.  A subscription with no previous
        counterpart counts as a change: the node has never observed the value.
        """
        dependencies = current.context_dependencies
        if not dependencies:
            return False

        observed = {
            id(dep.context): dep.memoized_value
            for dep in previous.context_dependencies or ()
        }
        for dep in dependencies:
            key = id(dep.context)
            if key not in observed:
                return True
            if observed[key] is not dep.memoized_value:
                return True
        return False
