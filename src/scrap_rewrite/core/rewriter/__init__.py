"""
Rewriter Package.

This package provides the `CooperativeRewriter` class, composed of several
mixins that each handle one rewrite rule:
- Interfaces: variable declarations.
- Loops: per-iteration cooperative yields.
- Functions: async marking.
- Calls: awaiting and context injection.
- Assignments: setter routing for observed properties.
- Catch: interrupt rethrow guards.
"""

from scrap_rewrite.core.rewriter.assignments import AssignmentMixin
from scrap_rewrite.core.rewriter.base import BaseRewriter
from scrap_rewrite.core.rewriter.calls import CallMixin
from scrap_rewrite.core.rewriter.catch import CatchMixin
from scrap_rewrite.core.rewriter.functions import FunctionMixin
from scrap_rewrite.core.rewriter.interfaces import InterfaceMixin
from scrap_rewrite.core.rewriter.loops import LoopMixin


class CooperativeRewriter(
  InterfaceMixin,
  LoopMixin,
  FunctionMixin,
  CallMixin,
  AssignmentMixin,
  CatchMixin,
  BaseRewriter,
):
  """
  The main tree transformer for scrap-rewrite.

  Inherits functionality from the rule Mixins and the base post-order
  transformer. This class is the entry point for the ScriptEngine.
  """

  pass
