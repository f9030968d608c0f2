"""
Data structures representing the output of the rewrite pipeline.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the generated code (or parsed tree / declared variables, depending on the
operation), any errors encountered, and the execution trace logs.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of one engine operation.
  """

  code: str = Field(default="", description="The generated source code.")
  variables: List[Tuple[str, List[str]]] = Field(
    default_factory=list, description="Declared (name, type tags) pairs, in source order."
  )
  tree: Optional[Dict[str, Any]] = Field(default=None, description="Serialized syntax tree for `parse`.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the pipeline completed without fatal failures.",
  )
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
