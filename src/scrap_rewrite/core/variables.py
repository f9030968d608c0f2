"""
Declared Variable Schema.

Reads the variable schema a script declares through its top-level
interfaces, without running the rewrite, and renders a schema back into an
interface declaration.

`render_interface` is the inverse of `extract_variables`: rendering a list of
`(name, tags)` pairs and extracting it again yields the same list.
"""

import json
from typing import List, Sequence, Tuple

from scrap_rewrite.core.rewriter.interfaces import declared_variables
from scrap_rewrite.core.script.nodes import InterfaceDeclaration, Module

Variable = Tuple[str, List[str]]


def extract_variables(module: Module) -> List[Variable]:
  """
  Collects `(name, tags)` for every property of every top-level interface.

  Document order and property order are preserved. Nested interfaces
  (inside blocks or functions) are ignored.

  Args:
      module (Module): Parsed script.

  Returns:
      List[Variable]: The declared variables.
  """
  variables: List[Variable] = []
  for stmt in module.body:
    if isinstance(stmt, InterfaceDeclaration):
      variables.extend(declared_variables(stmt))
  return variables


def render_interface(name: str, variables: Sequence[Variable]) -> str:
  """
  Renders declared variables as an interface declaration.

  Property names are JSON-quoted, so any text survives; tags are joined as a
  union.

  Args:
      name (str): Interface name (must already be a valid identifier).
      variables (Sequence[Variable]): `(name, tags)` pairs.

  Returns:
      str: Source text such as `interface S {\\n\\t"score": number;\\n}\\n`.
  """
  if not variables:
    return f"interface {name} {{}}\n"
  lines = "".join(f"\t{json.dumps(var)}: {' | '.join(tags) or 'any'};\n" for var, tags in variables)
  return f"interface {name} {{\n{lines}}}\n"
