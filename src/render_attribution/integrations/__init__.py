"""Integrations subpackage for render-attribution.

Contains integration adapters for external frameworks:
- pytest plugin (auto-discovered via the pytest11 entry point), exposing the
  ``assert_render_attribution`` fixture.
"""

from __future__ import annotations

__all__: list[str] = []
