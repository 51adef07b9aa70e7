"""Render attribution - which UI-tree nodes re-rendered in a commit, and why."""

from __future__ import annotations

import logging

from render_attribution.algorithm.classifier import NodeClassifier
from render_attribution.algorithm.config import AttributionConfig
from render_attribution.api import classify, did_render, walk
from render_attribution.errors import (
    AttributionError,
    ClassificationPreconditionError,
    MalformedSnapshotError,
)
from render_attribution.result import ChangeLog, LogEntry, ReasonTag, Verdict
from render_attribution.tree.nodes import (
    ContextDependency,
    NodeKind,
    NodePair,
    NodeSnapshot,
    TreeNode,
)
from render_attribution.walker import CommitWalker

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "AttributionConfig",
    "AttributionError",
    "ChangeLog",
    "ClassificationPreconditionError",
    "CommitWalker",
    "ContextDependency",
    "LogEntry",
    "MalformedSnapshotError",
    "NodeClassifier",
    "NodeKind",
    "NodePair",
    "NodeSnapshot",
    "ReasonTag",
    "TreeNode",
    "Verdict",
    "classify",
    "did_render",
    "walk",
]
