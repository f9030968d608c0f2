"""
Type Annotation Stripper.

Removes every type-level construct from a (typically already rewritten) tree
so that it prints as plain script:

- parameter, variable, catch-binding and return type annotations;
- optional `?` parameter markers;
- `as` assertions and `!` non-null assertions, replaced by their operand;
- `type` aliases and any interface declarations still present.
"""

import dataclasses

from scrap_rewrite.core.rewriter.base import REMOVE, BaseTransformer
from scrap_rewrite.core.script.nodes import ScriptNode


class TypeStripper(BaseTransformer):
  """
  Post-order transformer that drops type annotations.
  """

  def strip(self, node: ScriptNode) -> ScriptNode:
    """
    Strips a tree.

    Args:
        node (ScriptNode): Root of the tree, usually a `Module`.

    Returns:
        ScriptNode: The stripped tree.
    """
    return self.transform(node)

  def leave_Parameter(self, original_node, updated_node):
    if updated_node.type_annotation is None and not updated_node.optional:
      return updated_node
    return dataclasses.replace(updated_node, type_annotation=None, optional=False)

  def leave_VariableDeclarator(self, original_node, updated_node):
    return _without(updated_node, "type_annotation")

  def leave_CatchClause(self, original_node, updated_node):
    return _without(updated_node, "type_annotation")

  def leave_FunctionDeclaration(self, original_node, updated_node):
    return _without(updated_node, "return_type")

  def leave_FunctionExpression(self, original_node, updated_node):
    return _without(updated_node, "return_type")

  def leave_ArrowFunctionExpression(self, original_node, updated_node):
    return _without(updated_node, "return_type")

  def leave_AsExpression(self, original_node, updated_node):
    return updated_node.expression

  def leave_NonNullExpression(self, original_node, updated_node):
    return updated_node.expression

  def leave_TypeAliasDeclaration(self, original_node, updated_node):
    return REMOVE

  def leave_InterfaceDeclaration(self, original_node, updated_node):
    return REMOVE


def _without(node, field_name: str):
  if getattr(node, field_name) is None:
    return node
  return dataclasses.replace(node, **{field_name: None})


def strip_types(node: ScriptNode) -> ScriptNode:
  """Convenience wrapper around `TypeStripper().strip`."""
  return TypeStripper().strip(node)
