"""
CLI Command Handlers.

Each module implements one family of subcommands; `scrap_rewrite.cli.commands`
re-exports them for the dispatcher.
"""
