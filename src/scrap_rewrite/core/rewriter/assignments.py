"""
Assignment Rewriting Logic.

Property writes that the host runtime must observe are routed through
setter operations instead of plain stores:

    obj.variables.score = v   ->  await obj.setVariable("score", v)
    obj.effects.ghost = v     ->  await obj.setEffect("ghost", v)
    obj.x = v                 ->  await obj.setX("x", v)
    obj.direction = v         ->  await obj.pointInDirection("direction", v)

Compound operators are expanded against the full target first, so
`obj.variables.score += 5` sets `obj.variables.score + 5`. Any other target,
including computed keys that are not string literals, is left unchanged.
"""

from typing import Dict, Optional, Tuple

from scrap_rewrite.core.rewriter.base import BaseRewriter
from scrap_rewrite.core.rewriter.members import get_property, is_property
from scrap_rewrite.core.script.nodes import (
  AssignmentExpression,
  BinaryExpression,
  Expression,
  MemberExpression,
  StringLiteral,
)

COMPOUND_OPERATORS: Dict[str, str] = {
  "+=": "+",
  "-=": "-",
  "*=": "*",
  "/=": "/",
  "%=": "%",
  "**=": "**",
  "<<=": "<<",
  ">>=": ">>",
  ">>>=": ">>>",
  "&=": "&",
  "|=": "|",
  "^=": "^",
  "&&=": "&&",
  "||=": "||",
  "??=": "??",
}

# Container property on the intermediate object -> setter on its owner.
CONTAINER_SETTERS: Dict[str, str] = {
  "variables": "setVariable",
  "effects": "setEffect",
}

# Property on the target object -> setter on that object.
SETTERS: Dict[str, str] = {
  "x": "setX",
  "y": "setY",
  "draggable": "setDraggable",
  "volume": "setVolume",
  "direction": "pointInDirection",
}


class AssignmentMixin(BaseRewriter):
  """
  Mixin for visiting AssignmentExpression nodes.
  """

  def leave_AssignmentExpression(self, original_node: AssignmentExpression, updated_node: AssignmentExpression):
    """
    Replaces recognised member assignments with awaited setter calls.

    Args:
        original_node (AssignmentExpression): The assignment before child rewrites.
        updated_node (AssignmentExpression): The assignment after child rewrites.

    Returns:
        Expression: An awaited setter call, or `updated_node` unchanged.
    """
    target = updated_node.left
    if not isinstance(target, MemberExpression):
      return updated_node

    name = get_property(target)
    if name is None:
      self._skip("assignment", original_node, "target key is not static")
      return updated_node

    resolved = self._resolve_setter(target, name)
    if resolved is None:
      return updated_node

    receiver, setter = resolved
    value = self._effective_value(updated_node)
    result = self._method_call(receiver, setter, [StringLiteral(value=name), value])
    self._record("assignment", original_node, result)
    return result

  def _resolve_setter(self, target: MemberExpression, name: str) -> Optional[Tuple[Expression, str]]:
    """Returns `(receiver, setter)` for a recognised target, else None."""
    container = target.object
    if isinstance(container, MemberExpression):
      for prop, setter in CONTAINER_SETTERS.items():
        if is_property(container, prop):
          return container.object, setter

    if name in SETTERS:
      return target.object, SETTERS[name]
    return None

  @staticmethod
  def _effective_value(node: AssignmentExpression) -> Expression:
    if node.operator == "=":
      return node.right
    return BinaryExpression(operator=COMPOUND_OPERATORS[node.operator], left=node.left, right=node.right)
