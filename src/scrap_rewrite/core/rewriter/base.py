"""
Base Transformer and Rewriter Implementation.

This module provides the two foundations of tree rewriting:

1.  **BaseTransformer**: A generic post-order walker over the dataclass syntax
    tree. Children are transformed first; a parent whose children changed is
    rebuilt with `dataclasses.replace`, so untouched subtrees keep their
    identity. After the children, `leave_<NodeClass>(original_node,
    updated_node)` is dispatched when defined, and its return value replaces
    the node.
2.  **BaseRewriter**: The base class for the cooperative rewrite mixins. It
    holds the runtime configuration, builds references to the runtime context
    value, and records rewrites in the trace log.

A `leave_` hook may return `REMOVE` to delete a node. Inside a list the item
is dropped; in a single statement slot it becomes an empty statement, and in
any other slot the field is cleared to None.
"""

import dataclasses
from typing import Any, List, Optional

from scrap_rewrite.config import RuntimeConfig
from scrap_rewrite.core.script.emitter import ScriptEmitter
from scrap_rewrite.core.script.errors import EmitError
from scrap_rewrite.core.script.nodes import (
  AwaitExpression,
  CallExpression,
  EmptyStatement,
  Expression,
  ExpressionStatement,
  Identifier,
  MemberExpression,
  ScriptNode,
  Statement,
)
from scrap_rewrite.core.tracer import get_tracer


class _RemovalSentinel:
  def __repr__(self) -> str:
    return "REMOVE"


REMOVE = _RemovalSentinel()


class BaseTransformer:
  """
  Post-order transformer over `ScriptNode` dataclasses.
  """

  def transform(self, node: ScriptNode) -> Any:
    """
    Transforms `node` and all of its descendants.

    Args:
        node (ScriptNode): Root of the subtree.

    Returns:
        Any: The replacement node, or `REMOVE`.
    """
    changes = {}
    for f in dataclasses.fields(node):
      value = getattr(node, f.name)
      if isinstance(value, ScriptNode):
        new_value = self._transform_slot(value)
      elif isinstance(value, list):
        new_value = self._transform_list(value)
      else:
        continue
      if new_value is not value:
        changes[f.name] = new_value

    updated = dataclasses.replace(node, **changes) if changes else node
    hook = getattr(self, f"leave_{type(node).__name__}", None)
    if hook is None:
      return updated
    return hook(node, updated)

  def _transform_slot(self, value: ScriptNode) -> Optional[ScriptNode]:
    result = self.transform(value)
    if result is REMOVE:
      return EmptyStatement() if isinstance(value, Statement) else None
    return result

  def _transform_list(self, values: List[Any]) -> List[Any]:
    out = []
    changed = False
    for item in values:
      if not isinstance(item, ScriptNode):
        out.append(item)
        continue
      result = self.transform(item)
      if result is REMOVE:
        changed = True
        continue
      changed = changed or result is not item
      out.append(result)
    return out if changed else values


class BaseRewriter(BaseTransformer):
  """
  The base class for the cooperative rewrite rules.

  Provides the shared helpers used by the specific Mixins (LoopMixin,
  CallMixin, AssignmentMixin, ...).
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Initializes the rewriter.

    Args:
        config: The runtime configuration object. Defaults are used when omitted.
    """
    self.config = config or RuntimeConfig()
    self._emitter = ScriptEmitter()

  def _context(self) -> Identifier:
    """Returns a fresh reference to the runtime context value."""
    return Identifier(self.config.context_name)

  def _context_call(self, method: str, arguments: List[Expression], awaited: bool = True) -> Expression:
    """
    Builds `context.method(arguments...)`, awaited unless `awaited` is False.

    Args:
        method: Operation name on the runtime context.
        arguments: Call arguments.
        awaited: Wrap the call in an await expression.

    Returns:
        Expression: The call (or awaited call).
    """
    return self._method_call(self._context(), method, arguments, awaited)

  @staticmethod
  def _method_call(receiver: Expression, method: str, arguments: List[Expression], awaited: bool = True) -> Expression:
    call = CallExpression(callee=MemberExpression(object=receiver, property=Identifier(method)), arguments=arguments)
    return AwaitExpression(argument=call) if awaited else call

  def _delay_statement(self) -> ExpressionStatement:
    return ExpressionStatement(expression=self._context_call(self.config.delay_method, []))

  def _snippet(self, node: ScriptNode) -> str:
    try:
      return self._emitter.emit(node)
    except EmitError:
      return type(node).__name__

  def _record(self, rule: str, before: ScriptNode, after: ScriptNode) -> None:
    get_tracer().log_mutation(rule, self._snippet(before), self._snippet(after))

  def _skip(self, rule: str, node: ScriptNode, reason: str) -> None:
    get_tracer().log_inspection(self._snippet(node), "skipped", f"{rule}: {reason}")
