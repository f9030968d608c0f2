"""
Call Rewriting Logic.

Turns every call into a suspension point and threads the runtime context
through it:

    f(a, b)     ->  await f(self, a, b)
    String(x)   ->  await String(x)

Callees listed in `RuntimeConfig.pure_builtins` are awaited but receive no
context argument. `new` expressions are not calls and are left alone.
"""

import dataclasses

from scrap_rewrite.core.rewriter.base import BaseRewriter
from scrap_rewrite.core.script.nodes import AwaitExpression, CallExpression, Identifier, MemberExpression


class CallMixin(BaseRewriter):
  """
  Mixin for visiting CallExpression nodes.
  """

  def _wants_context(self, callee) -> bool:
    if isinstance(callee, Identifier):
      return callee.name not in self.config.pure_builtins
    if isinstance(callee, MemberExpression):
      return self.config.inject_context_into_method_calls
    return True

  def leave_CallExpression(self, original_node: CallExpression, updated_node: CallExpression) -> AwaitExpression:
    """
    Awaits the call and prepends the context argument.

    Args:
        original_node (CallExpression): The call before its children were rewritten.
        updated_node (CallExpression): The call after child rewrites.

    Returns:
        AwaitExpression: The awaited call.
    """
    call = updated_node
    if self._wants_context(call.callee):
      call = dataclasses.replace(call, arguments=[self._context(), *call.arguments])
    result = AwaitExpression(argument=call)
    self._record("call", original_node, result)
    return result
