"""Tests for AttributionConfig frozen dataclass.

Covers:
- Default values
- Immutability (FrozenInstanceError on assignment)
- Validation of performed_work_mask (type and range)
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from render_attribution.algorithm.config import AttributionConfig
from render_attribution.tree.nodes import PERFORMED_WORK


class TestAttributionConfigDefaults:
    def test_default_mask(self) -> None:
        assert AttributionConfig().performed_work_mask == PERFORMED_WORK == 1

    def test_default_compare_context(self) -> None:
        assert AttributionConfig().compare_context is True

    def test_default_isolate_errors(self) -> None:
        assert AttributionConfig().isolate_errors is True

    def test_default_propagate_parent_rendered(self) -> None:
        assert AttributionConfig().propagate_parent_rendered is True

    def test_equal_configs_compare_equal(self) -> None:
        assert AttributionConfig() == AttributionConfig()


class TestAttributionConfigImmutability:
    def test_cannot_set_mask(self) -> None:
        config = AttributionConfig()
        with pytest.raises(FrozenInstanceError):
            config.performed_work_mask = 2  # type: ignore[misc]

    def test_is_hashable(self) -> None:
        assert hash(AttributionConfig()) == hash(AttributionConfig())


class TestAttributionConfigValidation:
    @pytest.mark.parametrize("mask", [0, -1])
    def test_non_positive_mask_rejected(self, mask: int) -> None:
        with pytest.raises(ValueError, match="performed_work_mask"):
            AttributionConfig(performed_work_mask=mask)

    @pytest.mark.parametrize("mask", [1.0, "1", True, None])
    def test_non_int_mask_rejected(self, mask: object) -> None:
        with pytest.raises(TypeError, match="performed_work_mask"):
            AttributionConfig(performed_work_mask=mask)  # type: ignore[arg-type]

    def test_multi_bit_mask_accepted(self) -> None:
        assert AttributionConfig(performed_work_mask=0b101).performed_work_mask == 5
