"""
scrap-rewrite Package.

A source-to-source rewriter that turns ordinary, synchronous-looking sprite
scripts into cooperative code a stepped host runtime can pause, throttle and
resume: calls are awaited and receive the runtime context, loops yield once
per iteration, observed property writes go through setters, and `catch`
blocks rethrow host interrupts.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import scrap_rewrite as sr
    print(sr.transform("while (true) { move(10); }"))
    # while (true) {
    #     await self.delay();
    #     await move(self, 10);
    # }

Declared Variables
^^^^^^^^^^^^^^^^^^

.. code-block:: python

    sr.variables("interface V { score: number; name: string | void }")
    # [("score", ["number"]), ("name", ["string", "void"])]

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from scrap_rewrite import RuntimeConfig, ScriptEngine

    engine = ScriptEngine(RuntimeConfig(context_name="ctx"))
    res = engine.transform("step();")

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import List, Optional, Tuple

from scrap_rewrite.config import RuntimeConfig
from scrap_rewrite.core.conversion_result import ConversionResult
from scrap_rewrite.core.engine import ScriptEngine
from scrap_rewrite.core.script.errors import ScriptSyntaxError
from scrap_rewrite.core.script.nodes import Module
from scrap_rewrite.core.variables import render_interface
from scrap_rewrite.utils.identifiers import escape_identifier, is_identifier

__version__ = "0.1.0"


class TransformFailed(ValueError):
  """Raised by the package-level helpers when an operation fails."""


def _raise_for(result: ConversionResult) -> None:
  if not result.success:
    raise TransformFailed("\n".join(result.errors) or "Operation failed")


def parse(code: str, config: Optional[RuntimeConfig] = None) -> Module:
  """
  Parses script source into a syntax tree.

  Args:
      code (str): The source code to parse.
      config (RuntimeConfig, optional): Engine configuration.

  Returns:
      Module: The parsed tree.

  Raises:
      TransformFailed: If the source cannot be parsed.
  """
  try:
    return ScriptEngine(config).parse_module(code)
  except (ScriptSyntaxError, RecursionError) as e:
    raise TransformFailed(f"Parse Error: {e}") from e


def transform(code: str, config: Optional[RuntimeConfig] = None) -> str:
  """
  Rewrites script source for cooperative execution.

  This is a high-level convenience wrapper around the `ScriptEngine`.

  Args:
      code (str): The source code to rewrite.
      config (RuntimeConfig, optional): Names to inject. Defaults match the host runtime.

  Returns:
      str: The rewritten, type-stripped source code.

  Raises:
      TransformFailed: If parsing or printing fails.
  """
  result = ScriptEngine(config).transform(code)
  _raise_for(result)
  return result.code


def variables(code: str, config: Optional[RuntimeConfig] = None) -> List[Tuple[str, List[str]]]:
  """
  Lists the variables declared by the top-level interfaces of `code`.

  Args:
      code (str): The source code to inspect.
      config (RuntimeConfig, optional): Engine configuration.

  Returns:
      List[Tuple[str, List[str]]]: `(name, type tags)` pairs in source order.

  Raises:
      TransformFailed: If the source cannot be parsed.
  """
  result = ScriptEngine(config).variables(code)
  _raise_for(result)
  return [(name, list(tags)) for name, tags in result.variables]


__all__ = [
  "ConversionResult",
  "RuntimeConfig",
  "ScriptEngine",
  "TransformFailed",
  "escape_identifier",
  "is_identifier",
  "parse",
  "render_interface",
  "transform",
  "variables",
  "__version__",
]
