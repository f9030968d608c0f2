"""
Function Rewriting Logic.

Every function form becomes `async`, whether or not its body suspends, since
any call inside it is turned into an `await`.
"""

import dataclasses

from scrap_rewrite.core.rewriter.base import BaseRewriter


class FunctionMixin(BaseRewriter):
  """
  Mixin for function declarations, function expressions and arrow functions.
  """

  def _make_async(self, original_node, updated_node):
    if updated_node.is_async:
      return updated_node
    result = dataclasses.replace(updated_node, is_async=True)
    self._record("async_function", original_node, result)
    return result

  def leave_FunctionDeclaration(self, original_node, updated_node):
    return self._make_async(original_node, updated_node)

  def leave_FunctionExpression(self, original_node, updated_node):
    return self._make_async(original_node, updated_node)

  def leave_ArrowFunctionExpression(self, original_node, updated_node):
    return self._make_async(original_node, updated_node)
