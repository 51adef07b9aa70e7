"""algorithm subpackage — public API for per-node render classification.

Provides the classifier and its configuration.  Import from this module (not
from sub-modules directly) to stay on the stable public interface.

Example::

    from render_attribution.algorithm import AttributionConfig, NodeClassifier

    classifier = NodeClassifier(AttributionConfig(compare_context=False))
    verdict = classifier.classify(pair)
"""

from __future__ import annotations

from render_attribution.algorithm.classifier import NodeClassifier
from render_attribution.algorithm.config import AttributionConfig

__all__ = ["AttributionConfig", "NodeClassifier"]
