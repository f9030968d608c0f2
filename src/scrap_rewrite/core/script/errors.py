"""
Script Collaborator Errors.

Failures raised by the lexer, parser and emitter. The rewrite engine itself
never raises these; they surface from the collaborators around it and are
collapsed into an opaque failure by `ScriptEngine`.
"""


class ScriptSyntaxError(SyntaxError):
  """
  Raised when source text falls outside the supported script grammar.

  Attributes:
      line (int): 1-based line of the offending token.
      col (int): 1-based column of the offending token.
  """

  def __init__(self, message: str, line: int = 0, col: int = 0):
    super().__init__(f"{message} (line {line}, col {col})")
    self.line = line
    self.col = col


class EmitError(ValueError):
  """Raised when the emitter meets a node it cannot print."""
