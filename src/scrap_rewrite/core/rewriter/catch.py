"""
Catch Clause Rewriting Logic.

Host interrupts are raised as instances of a sentinel error from inside
awaited operations. To keep user `try/catch` blocks from swallowing them,
every catch body starts with a guard that rethrows the sentinel:

    catch (e) { handle(e); }

becomes

    catch (e) {
        if (e instanceof Scrap.StopError) throw e;
        handle(e);
    }

A clause without a binding is given one. Destructuring bindings cannot be
tested and are left unchanged.
"""

import dataclasses

from scrap_rewrite.core.rewriter.base import BaseRewriter
from scrap_rewrite.core.script.nodes import (
  BinaryExpression,
  BlockStatement,
  CatchClause,
  Expression,
  Identifier,
  IfStatement,
  MemberExpression,
  ThrowStatement,
)


class CatchMixin(BaseRewriter):
  """
  Mixin for visiting CatchClause nodes.
  """

  def _sentinel(self) -> Expression:
    head, *rest = self.config.interrupt_error.split(".")
    expr: Expression = Identifier(head)
    for part in rest:
      expr = MemberExpression(object=expr, property=Identifier(part))
    return expr

  def leave_CatchClause(self, original_node: CatchClause, updated_node: CatchClause) -> CatchClause:
    param = updated_node.param
    if param is None:
      param = Identifier(self.config.error_binding)
    elif not isinstance(param, Identifier):
      self._skip("catch_guard", original_node.body, "destructured catch binding")
      return updated_node

    guard = IfStatement(
      test=BinaryExpression(operator="instanceof", left=Identifier(param.name), right=self._sentinel()),
      consequent=ThrowStatement(argument=Identifier(param.name)),
    )
    body = BlockStatement(body=[guard, *updated_node.body.body])
    result = dataclasses.replace(updated_node, param=param, body=body)
    self._record("catch_guard", original_node.body, result.body)
    return result
