"""AttributionConfig: immutable settings for classification and commit walks.

AttributionConfig is a frozen (immutable) dataclass.  One instance may be
shared by any number of classifiers and walkers; it holds no per-commit state.
"""

from __future__ import annotations

from dataclasses import dataclass

from render_attribution.tree.nodes import PERFORMED_WORK

__all__ = ["AttributionConfig"]


@dataclass(frozen=True, slots=True)
class AttributionConfig:
    """Immutable configuration for the classifier and the commit walker.

    Attributes:
        performed_work_mask: Bit(s) of ``NodeSnapshot.flags`` that mean "the host
            performed work on this node".  Any overlapping bit counts as set.
            Must be a positive int.  Defaults to ``PERFORMED_WORK``.
        compare_context: When True, a subscribed context whose value changed
            counts as a render cause.  When False, context subscriptions are
            never consulted and ``ContextChanged`` is never reported.
        isolate_errors: When True, a classification error is recorded against
            the faulty node and the walk continues.  When False, the first
            error aborts the whole commit's walk.
        propagate_parent_rendered: When True, descendants of a rendered node
            that did not render on their own are reported as
            ``ParentRendered``.  When False, each node's own verdict is reported.
    """

    performed_work_mask: int = PERFORMED_WORK
    compare_context: bool = True
    isolate_errors: bool = True
    propagate_parent_rendered: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.performed_work_mask, bool) or not isinstance(
            self.performed_work_mask, int
        ):
            msg = (
                "performed_work_mask must be an int, "
                f"got {type(self.performed_work_mask).__name__}"
            )
            raise TypeError(msg)
        if self.performed_work_mask <= 0:
            msg = f"performed_work_mask must be > 0, got {self.performed_work_mask}"
            raise ValueError(msg)
