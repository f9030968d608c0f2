"""
Script Syntax Tree and Collaborators.

This package provides a pure Python representation of the supported script
subset, together with the lexer, recursive-descent parser, type stripper and
emitter that surround the rewrite rules.
"""
