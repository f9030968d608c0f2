"""
Transform Command Handler.

This module implements the logic for the `scrap-rewrite transform` command.
It orchestrates:
1. Configuration loading (pyproject overrides plus CLI flags).
2. Rewriting via the Engine, for a single file or a directory tree.
3. Output writing and trace logging.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from rich.table import Table

from scrap_rewrite.config import RuntimeConfig
from scrap_rewrite.core.conversion_result import ConversionResult
from scrap_rewrite.core.engine import ScriptEngine
from scrap_rewrite.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

SCRIPT_SUFFIXES = (".ts", ".js")


def handle_transform(
  input_path: Path,
  output_path: Optional[Path],
  context_name: Optional[str] = None,
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'transform' command execution.

  Args:
      input_path: Path to the script file or directory to rewrite.
      output_path: Where rewritten code should be saved. Required for directories.
      context_name: Override for the runtime context identifier.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      context_name=context_name,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {e}")
    return 1

  engine = ScriptEngine(config)

  if input_path.is_file():
    result = _transform_single_file(input_path, output_path, engine, json_trace_path)
    return 0 if result.success else 1

  if not output_path:
    log_error("Directory transform requires --out destination directory.")
    return 1

  sources = sorted(p for p in input_path.rglob("*") if p.suffix in SCRIPT_SUFFIXES and p.is_file())
  if not sources:
    log_warning(f"No script files found in {input_path}")
    return 0

  log_info(f"Processing {len(sources)} files from {input_path}...")
  batch_results: Dict[str, ConversionResult] = {}
  for src_file in sources:
    rel_path = src_file.relative_to(input_path)
    batch_trace = (output_path / rel_path).with_suffix(".trace.json") if json_trace_path else None
    batch_results[str(rel_path)] = _transform_single_file(src_file, output_path / rel_path, engine, batch_trace)

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def _transform_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: ScriptEngine,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Helper to execute the rewrite on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path. Prints to stdout when None.
      engine: Configured engine.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    code = input_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.transform(code)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {e}")

  if not result.success:
    log_error(f"Failed to transform {input_path}: {'; '.join(result.errors)}")
    return result

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.code, encoding="utf-8")
    log_success(f"Rewrote: [path]{input_path}[/path] -> [path]{output_path}[/path]")
  else:
    print(result.code, end="")

  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of rewrite results to the console.

  Args:
      results: Dictionary mapping filenames to results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if r.success)
  failures = total - successes

  if failures == 0:
    log_success(f"Batch Complete: {successes}/{total} files rewritten.")
    return

  table = Table(title="Rewrite Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success:
      continue
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(filename, "❌ Failed", issues)

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} Failed.")
