"""
Core Package.

Contains the backend rewrite logic:
- Script Engine
- Rewriter and Mixins
- Script syntax tree, parser, stripper and emitter
- Trace logging
"""
