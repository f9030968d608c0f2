"""
Orchestration Engine for Script Rewriting.

This module provides the `ScriptEngine`, the primary driver for the rewrite
process. It sequences the collaborators around the rewrite rules:

1.  **Parsing**: Source text is tokenized and parsed into a `Module`.
2.  **Rewriting**: The `CooperativeRewriter` applies the rules (interface
    declarations, loop yields, async functions, awaited calls, setter
    routing, catch guards) in a single post-order pass.
3.  **Stripping**: The `TypeStripper` removes all type-level syntax.
4.  **Emission**: The `ScriptEmitter` prints the final tree.

A second path (`variables`) parses and reads the declared variable schema
without rewriting.

Every operation returns a `ConversionResult`. Failures from any collaborator
are caught at this boundary and reported as `success=False` with a single
error message; nothing is partially returned.
"""

import logging
from typing import Optional

from scrap_rewrite.config import RuntimeConfig
from scrap_rewrite.core.conversion_result import ConversionResult
from scrap_rewrite.core.rewriter import CooperativeRewriter
from scrap_rewrite.core.script.emitter import ScriptEmitter
from scrap_rewrite.core.script.errors import EmitError, ScriptSyntaxError
from scrap_rewrite.core.script.nodes import Module
from scrap_rewrite.core.script.parser import ScriptParser
from scrap_rewrite.core.script.stripper import TypeStripper
from scrap_rewrite.core.tracer import get_tracer, reset_tracer
from scrap_rewrite.core.variables import extract_variables

logger = logging.getLogger(__name__)

# Failures a collaborator may raise on input it cannot handle.
COLLABORATOR_ERRORS = (ScriptSyntaxError, EmitError, RecursionError)


class ScriptEngine:
  """
  Runs parse / transform / variables over script source text.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Initializes the engine.

    Args:
        config: Runtime configuration. Defaults are used when omitted.
    """
    self.config = config or RuntimeConfig()

  def parse_module(self, code: str) -> Module:
    """
    Parses source text.

    Args:
        code (str): Script source.

    Returns:
        Module: The syntax tree.

    Raises:
        ScriptSyntaxError: If the source is outside the supported grammar.
    """
    return ScriptParser(code).parse()

  def rewrite(self, tree: Module) -> Module:
    """Applies the rewrite rules to an already parsed tree."""
    return CooperativeRewriter(self.config).transform(tree)

  def to_source(self, tree: Module) -> str:
    """
    Strips types and prints the tree.

    Raises:
        EmitError: If the tree contains a node the emitter cannot print.
    """
    return ScriptEmitter().emit(TypeStripper().strip(tree))

  def parse(self, code: str) -> ConversionResult:
    """
    Parses `code` and returns its serialized tree.

    Args:
        code (str): Script source.

    Returns:
        ConversionResult: `tree` holds the serialized module on success.
    """
    reset_tracer()
    tracer = get_tracer()
    tracer.start_phase("Parse", "Source -> Tree")
    try:
      tree = self.parse_module(code)
    except COLLABORATOR_ERRORS as e:
      return self._failure("Parse Error", e)
    tracer.end_phase()
    return ConversionResult(tree=tree.to_dict(), trace_events=tracer.export())

  def transform(self, code: str) -> ConversionResult:
    """
    Rewrites `code` for cooperative execution.

    Args:
        code (str): Script source.

    Returns:
        ConversionResult: `code` holds the rewritten script on success.
    """
    reset_tracer()
    tracer = get_tracer()
    tracer.start_phase("Rewrite Pipeline", f"context={self.config.context_name}")

    tracer.start_phase("Parse", "Source -> Tree")
    try:
      tree = self.parse_module(code)
    except COLLABORATOR_ERRORS as e:
      return self._failure("Parse Error", e)
    tracer.end_phase()
    logger.debug("Parsed %d top-level statements", len(tree.body))

    tracer.start_phase("Rewrite Engine", "Post-order traversal")
    try:
      tree = self.rewrite(tree)
    except RecursionError as e:
      return self._failure("Rewrite Error", e)
    tracer.end_phase()

    tracer.start_phase("Emit", "Strip types -> Source")
    try:
      output = self.to_source(tree)
    except COLLABORATOR_ERRORS as e:
      return self._failure("Emit Error", e)
    tracer.end_phase()
    logger.debug("Emitted %d characters", len(output))

    tracer.end_phase()
    return ConversionResult(code=output, trace_events=tracer.export())

  def variables(self, code: str) -> ConversionResult:
    """
    Reads the variables declared by the top-level interfaces of `code`.

    Args:
        code (str): Script source.

    Returns:
        ConversionResult: `variables` holds `(name, tags)` pairs on success.
    """
    reset_tracer()
    tracer = get_tracer()
    tracer.start_phase("Variables", "Source -> Schema")
    try:
      tree = self.parse_module(code)
    except COLLABORATOR_ERRORS as e:
      return self._failure("Parse Error", e)
    found = extract_variables(tree)
    tracer.end_phase()
    logger.debug("Found %d declared variables", len(found))
    return ConversionResult(variables=found, trace_events=tracer.export())

  @staticmethod
  def _failure(stage: str, error: Exception) -> ConversionResult:
    logger.debug("%s: %s", stage, error)
    tracer = get_tracer()
    tracer.log_warning(f"{stage}: {error}")
    tracer.close_phases()
    return ConversionResult(
      errors=[f"{stage}: {error}"],
      success=False,
      trace_events=tracer.export(),
    )
