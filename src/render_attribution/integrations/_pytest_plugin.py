"""pytest plugin for render-attribution.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Any

import pytest

from render_attribution import AttributionConfig, ReasonTag, Verdict, walk

# Expected value meaning "mounted by this commit" (rendered, no reason).
MOUNTED = None
# Expected value meaning "did not render".
NOT_RENDERED = False


def _describe(verdict: Verdict | None) -> str:
    if verdict is None:
        return "<error>"
    if not verdict.rendered:
        return "not rendered"
    if verdict.reason is None:
        return "mounted"
    return str(verdict.reason)


def _parse_expected(expected: Any) -> ReasonTag | bool | None:
    """Normalise one expected value; raise ValueError for an unknown tag."""
    if expected is NOT_RENDERED or expected is MOUNTED:
        return expected
    return ReasonTag(expected)


def _show_expected(expected: ReasonTag | bool | None) -> str:
    if expected is NOT_RENDERED:
        return "not rendered"
    if expected is MOUNTED:
        return "mounted"
    return str(expected)


def _expected_matches(
    expected: ReasonTag | bool | None, verdict: Verdict | None
) -> bool:
    if verdict is None:
        return False
    if expected is NOT_RENDERED:
        return not verdict.rendered
    if expected is MOUNTED:
        return verdict.is_mount
    return verdict.rendered and verdict.reason == expected


@pytest.fixture(scope="session")
def assert_render_attribution() -> Any:
    """Fixture that returns a callable commit-attribution asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to walk() which creates a fresh CommitWalker per call).

    Usage in tests::

        def test_memo_bailout(assert_render_attribution):
            assert_render_attribution(
                next_root,
                previous_index,
                {"app": "state_changed", "list": "parent_rendered", "footer": False},
            )

    Expected values: a ``ReasonTag`` (or its string value) for a rendered node,
    ``False`` for a node that did not render, ``None`` for a mount.  Nodes not
    listed are not checked.

    Returns:
        A callable ``_assert(root, previous_index, expected, config=None) -> ChangeLog``
        that raises ``AssertionError`` listing every mismatching node.
    """

    def _assert(
        root: Any,
        previous_index: Mapping[Hashable, Any],
        expected: Mapping[Hashable, Any],
        config: AttributionConfig | None = None,
    ) -> Any:
        """Walk the commit and compare attributions against ``expected``.

        Raises:
            AssertionError: When any listed node is missing from the walk, failed
                to classify, or was attributed differently than expected.
        """
        mismatches: list[str] = []
        wanted: dict[Hashable, ReasonTag | bool | None] = {}
        for key, raw in expected.items():
            try:
                wanted[key] = _parse_expected(raw)
            except ValueError:
                mismatches.append(f"  {key!r}: unknown expected reason {raw!r}")

        change_log = walk(root, previous_index, config=config)
        actual = {entry.node_key: entry.verdict for entry in change_log.entries}

        for key, want in wanted.items():
            if key not in actual:
                mismatches.append(f"  {key!r}: not visited by the walk")
                continue
            got = actual[key]
            if not _expected_matches(want, got):
                shown = _show_expected(want)
                mismatches.append(
                    f"  {key!r}: expected {shown}, got {_describe(got)}"
                )

        if mismatches:
            errors = [f"  {e.node_key!r}: {e.error}" for e in change_log.errors]
            raise AssertionError(
                "render attribution mismatch:\n"
                + "\n".join(mismatches)
                + ("\nclassification errors:\n" + "\n".join(errors) if errors else "")
            )
        return change_log

    return _assert
