"""
Loop Rewriting Logic.

Every loop body gets a cooperative yield as its first statement, so the host
scheduler regains control once per iteration:

    while (cond) step();

becomes

    while (cond) {
        await self.delay();
        step();
    }

A non-block body is wrapped in a block first.
"""

import dataclasses

from scrap_rewrite.core.rewriter.base import BaseRewriter
from scrap_rewrite.core.script.nodes import BlockStatement, Statement


class LoopMixin(BaseRewriter):
  """
  Mixin for visiting loop statements (for, for-in, for-of, while, do-while).
  """

  def _yield_in_body(self, original_node: Statement, updated_node: Statement) -> Statement:
    body = updated_node.body
    statements = list(body.body) if isinstance(body, BlockStatement) else [body]
    new_body = BlockStatement(body=[self._delay_statement(), *statements])
    result = dataclasses.replace(updated_node, body=new_body)
    self._record("loop_yield", original_node, result)
    return result

  def leave_ForStatement(self, original_node, updated_node):
    return self._yield_in_body(original_node, updated_node)

  def leave_ForInStatement(self, original_node, updated_node):
    return self._yield_in_body(original_node, updated_node)

  def leave_ForOfStatement(self, original_node, updated_node):
    return self._yield_in_body(original_node, updated_node)

  def leave_WhileStatement(self, original_node, updated_node):
    return self._yield_in_body(original_node, updated_node)

  def leave_DoWhileStatement(self, original_node, updated_node):
    return self._yield_in_body(original_node, updated_node)
