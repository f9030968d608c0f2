"""
CLI Command Handlers Facade.

This module re-exports handlers from `scrap_rewrite.cli.handlers` so the
dispatcher (and tests) have a single import point.
"""

from scrap_rewrite.cli.handlers.transform import (
  handle_transform,
  _transform_single_file,
  _print_batch_summary,
)
from scrap_rewrite.cli.handlers.inspection import (
  handle_parse,
  handle_schema,
  handle_variables,
)
