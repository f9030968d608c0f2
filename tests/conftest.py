"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Helpers for running the full rewrite on a snippet.
- Trace isolation between tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'scrap_rewrite' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from scrap_rewrite.config import RuntimeConfig  # noqa: E402
from scrap_rewrite.core.engine import ScriptEngine  # noqa: E402
from scrap_rewrite.core.tracer import reset_tracer  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_tracer():
  """Gives each test a fresh global trace log."""
  reset_tracer()
  yield
  reset_tracer()


@pytest.fixture
def rewrite():
  """
  Returns a callable that rewrites a snippet and returns the emitted code.

  Accepts RuntimeConfig keyword overrides, e.g. `rewrite(code, context_name="ctx")`.
  """

  def _run(code: str, **overrides) -> str:
    result = ScriptEngine(RuntimeConfig(**overrides)).transform(code)
    assert result.success, result.errors
    return result.code

  return _run
