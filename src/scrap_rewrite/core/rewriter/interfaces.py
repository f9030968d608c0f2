"""
Interface Rewriting Logic.

Interfaces describe the variables a sprite declares. Each one is replaced by
a block of (non-awaited) declaration calls, one per property signature and
in declaration order:

    interface S { score: number; name: string }

becomes

    {
        self.declareVariable("score", "number");
        self.declareVariable("name", "string");
    }

Tags come from the Type Mapper; an unannotated property declares `"any"`.
"""

from typing import Iterator, Optional, Tuple, List

from scrap_rewrite.core.rewriter.base import BaseRewriter
from scrap_rewrite.core.rewriter.types import map_type
from scrap_rewrite.core.script.nodes import (
  BlockStatement,
  ExpressionStatement,
  Identifier,
  InterfaceDeclaration,
  PropertySignature,
  StringLiteral,
)
from scrap_rewrite.core.tracer import get_tracer


def signature_name(member: PropertySignature) -> Optional[str]:
  """
  Reads the declared name of a property signature.

  Args:
      member (PropertySignature): The signature.

  Returns:
      Optional[str]: The name for identifier and string keys, computed
      or not (`[k]` declares `k`), else None.
  """
  key = member.key
  if isinstance(key, StringLiteral):
    return key.value
  if isinstance(key, Identifier):
    return key.name
  return None


def declared_variables(node: InterfaceDeclaration) -> Iterator[Tuple[str, List[str]]]:
  """
  Yields `(name, tags)` for every property signature of an interface.

  Members that are not property signatures, or whose key has no static name,
  are skipped and recorded in the trace log.
  """
  for member in node.body:
    name = signature_name(member) if isinstance(member, PropertySignature) else None
    if name is None:
      get_tracer().log_inspection(node.id.name, "skipped", f"unsupported member {type(member).__name__}")
      continue
    yield name, map_type(member.type_annotation)


class InterfaceMixin(BaseRewriter):
  """
  Mixin for visiting InterfaceDeclaration nodes.
  """

  def leave_InterfaceDeclaration(self, original_node: InterfaceDeclaration, updated_node: InterfaceDeclaration):
    statements = []
    for name, tags in declared_variables(updated_node):
      arguments = [StringLiteral(value=name), *(StringLiteral(value=t) for t in tags)]
      call = self._context_call(self.config.declare_method, arguments, awaited=False)
      statements.append(ExpressionStatement(expression=call))
    result = BlockStatement(body=statements)
    self._record("interface", original_node, result)
    return result
