"""
Main Entry Point for scrap-rewrite CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `scrap_rewrite.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from scrap_rewrite.cli import commands
from scrap_rewrite import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="scrap-rewrite: Cooperative Script Rewriter")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: TRANSFORM ---
  cmd_tr = subparsers.add_parser("transform", help="Rewrite a script file or directory")
  cmd_tr.add_argument("path", type=Path, help="Input script file or directory")
  cmd_tr.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_tr.add_argument("--context", default=None, help="Runtime context identifier (default: from toml, else 'self')")
  cmd_tr.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (phases, rewrites) to a JSON file."
  )

  # --- Command: VARIABLES ---
  cmd_vars = subparsers.add_parser("variables", help="List variables declared by top-level interfaces")
  cmd_vars.add_argument("path", type=Path, help="Input script file")
  cmd_vars.add_argument("--json", action="store_true", help="Print JSON instead of a table")

  # --- Command: PARSE ---
  cmd_parse = subparsers.add_parser("parse", help="Dump the syntax tree as JSON")
  cmd_parse.add_argument("path", type=Path, help="Input script file")

  # --- Command: SCHEMA ---
  cmd_schema = subparsers.add_parser("schema", help="Re-render declared variables as an interface")
  cmd_schema.add_argument("path", type=Path, help="Input script file")
  cmd_schema.add_argument("--name", required=True, help="Name of the rendered interface")

  args = parser.parse_args(argv)

  if args.command == "transform":
    return commands.handle_transform(args.path, args.out, args.context, args.json_trace)

  elif args.command == "variables":
    return commands.handle_variables(args.path, args.json)

  elif args.command == "parse":
    return commands.handle_parse(args.path)

  elif args.command == "schema":
    return commands.handle_schema(args.path, args.name)

  return 0


if __name__ == "__main__":
  sys.exit(main())
