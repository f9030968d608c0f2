"""
Inspection Command Handlers.

Implements the read-only commands:
- `variables`: list the variables declared by a script's interfaces.
- `parse`: dump the parsed syntax tree as JSON.
- `schema`: re-render the declared variables as an interface declaration.
"""

import json
from pathlib import Path
from typing import Optional

from rich.table import Table

from scrap_rewrite.core.conversion_result import ConversionResult
from scrap_rewrite.core.engine import ScriptEngine
from scrap_rewrite.core.variables import render_interface
from scrap_rewrite.utils.console import console, log_error, log_warning
from scrap_rewrite.utils.identifiers import escape_identifier, is_identifier


def _read(path: Path) -> Optional[str]:
  if not path.is_file():
    log_error(f"Input not found: {path}")
    return None
  try:
    return path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {path}: {e}")
    return None


def _report(path: Path, result: ConversionResult) -> bool:
  if result.success:
    return True
  log_error(f"Failed to read {path}: {'; '.join(result.errors)}")
  return False


def handle_variables(input_path: Path, as_json: bool = False) -> int:
  """
  Handles the 'variables' command.

  Args:
      input_path: Script file to inspect.
      as_json: Print a JSON list of `[name, tags]` pairs instead of a table.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  code = _read(input_path)
  if code is None:
    return 1

  result = ScriptEngine().variables(code)
  if not _report(input_path, result):
    return 1

  if as_json:
    print(json.dumps([[name, tags] for name, tags in result.variables]))
    return 0

  if not result.variables:
    log_warning(f"No variables declared in {input_path}")
    return 0

  table = Table(title=f"Variables: {input_path.name}")
  table.add_column("Name", style="cyan")
  table.add_column("Types", style="green")
  for name, tags in result.variables:
    table.add_row(name, " | ".join(tags))
  console.print(table)
  return 0


def handle_parse(input_path: Path) -> int:
  """
  Handles the 'parse' command: prints the syntax tree as JSON.

  Args:
      input_path: Script file to parse.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  code = _read(input_path)
  if code is None:
    return 1

  result = ScriptEngine().parse(code)
  if not _report(input_path, result):
    return 1

  print(json.dumps(result.tree, indent=2))
  return 0


def handle_schema(input_path: Path, name: str) -> int:
  """
  Handles the 'schema' command: re-renders declared variables as an interface.

  Args:
      input_path: Script file to inspect.
      name: Name of the rendered interface. Sprite names such as "My Sprite"
          are escaped into identifiers.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  escaped = escape_identifier(name)
  if not is_identifier(escaped):
    log_error(f"Not a valid interface name: {name!r}")
    return 1
  if escaped != name:
    log_warning(f"Interface name {name!r} escaped to {escaped!r}")

  code = _read(input_path)
  if code is None:
    return 1

  result = ScriptEngine().variables(code)
  if not _report(input_path, result):
    return 1

  print(render_interface(escaped, result.variables), end="")
  return 0
