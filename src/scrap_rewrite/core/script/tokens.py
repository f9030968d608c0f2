"""
Script Tokenizer Definition.

Provides the token kinds, keyword tables and the regex-based `ScriptLexer`
that decomposes script source text into a stream of typed `Token` objects.

Whitespace and comments are consumed by the lexer and never emitted; instead,
each token records whether a line break preceded it so the parser can apply
automatic semicolon insertion and the restricted productions (`return`,
`throw`, postfix `++`/`--`).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Generator, List, Tuple

from scrap_rewrite.core.script.errors import ScriptSyntaxError


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  IDENTIFIER = "IDENTIFIER"
  NUMBER = "NUMBER"
  STRING = "STRING"
  TEMPLATE = "TEMPLATE"
  PUNCTUATOR = "PUNCTUATOR"
  EOF = "EOF"


# Words that can never be used as a binding or reference name.
RESERVED_WORDS = frozenset(
  {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
  }
)

# Type keywords recognised inside annotations.
KEYWORD_TYPES = frozenset(
  {
    "any",
    "bigint",
    "boolean",
    "never",
    "null",
    "number",
    "object",
    "string",
    "symbol",
    "undefined",
    "unknown",
    "void",
  }
)

ASSIGNMENT_OPERATORS = frozenset(
  {
    "=",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "**=",
    "<<=",
    ">>=",
    ">>>=",
    "&=",
    "|=",
    "^=",
    "&&=",
    "||=",
    "??=",
  }
)

# Longest first so the alternation prefers `>>>=` over `>>`.
_PUNCTUATORS = [
  ">>>=",
  "...",
  "===",
  "!==",
  "**=",
  "<<=",
  ">>=",
  ">>>",
  "&&=",
  "||=",
  "??=",
  "=>",
  "==",
  "!=",
  "<=",
  ">=",
  "&&",
  "||",
  "??",
  "++",
  "--",
  "+=",
  "-=",
  "*=",
  "/=",
  "%=",
  "&=",
  "|=",
  "^=",
  "**",
  "<<",
  ">>",
]


@dataclass
class Token:
  """
  Represents a lexical unit.

  Attributes:
      kind (TokenKind): The type of token.
      text (str): The raw source text.
      line (int): Line number in source (1-based).
      col (int): Column number in source (1-based).
      newline_before (bool): True if a line terminator precedes the token.
  """

  kind: TokenKind
  text: str
  line: int
  col: int
  newline_before: bool = False


class ScriptLexer:
  """
  Regex-based Lexer for the script subset.
  """

  # Order determines priority. `?.` must not swallow `a?.5:b`.
  PATTERNS: List[Tuple[str, str]] = [
    ("WHITESPACE", r"[ \t\r\f\v\u00a0\ufeff]+"),
    ("NEWLINE", r"\n"),
    ("LINE_COMMENT", r"//[^\n]*"),
    ("BLOCK_COMMENT", r"/\*[\s\S]*?\*/"),
    ("OPEN_COMMENT", r"/\*"),
    (
      TokenKind.NUMBER.value,
      r"(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|(?:\d[\d_]*\.?[\d_]*|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?)n?",
    ),
    (TokenKind.STRING.value, r"\"(?:[^\"\\\n]|\\[\s\S])*\"|'(?:[^'\\\n]|\\[\s\S])*'"),
    (TokenKind.IDENTIFIER.value, r"[A-Za-z_$\u0080-\uffff][\w$\u0080-\uffff]*"),
    ("OPTIONAL_CHAIN", r"\?\.(?!\d)"),
    (TokenKind.PUNCTUATOR.value, "|".join(re.escape(p) for p in _PUNCTUATORS) + r"|[{}()\[\];,<>+\-*/%&|^!~?:=.@#]"),
    ("BACKTICK", r"`"),
    ("MISMATCH", r"."),
  ]

  _REGEX = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in PATTERNS))

  def __init__(self, text: str):
    self.text = text

  def tokenize(self) -> Generator[Token, None, None]:
    """
    Tokenizes the source text.

    Yields:
        Token: Token objects, terminated by a single EOF token.

    Raises:
        ScriptSyntaxError: On unterminated comments/templates or illegal characters.
    """
    text = self.text
    pos = 0
    line = 1
    line_start = 0
    newline_before = False

    while pos < len(text):
      mo = self._REGEX.match(text, pos)
      kind = mo.lastgroup
      value = mo.group()
      col = pos - line_start + 1

      if kind == "BACKTICK":
        end = _scan_template(text, pos)
        if end < 0:
          raise ScriptSyntaxError("Unterminated template literal", line, col)
        value = text[pos:end]
        yield Token(TokenKind.TEMPLATE, value, line, col, newline_before)
        newline_before = False
      elif kind == "OPEN_COMMENT":
        raise ScriptSyntaxError("Unterminated comment", line, col)
      elif kind == "MISMATCH":
        raise ScriptSyntaxError(f"Unexpected character {value!r}", line, col)
      elif kind in ("WHITESPACE", "LINE_COMMENT"):
        pass
      elif kind in ("NEWLINE", "BLOCK_COMMENT"):
        if "\n" in value:
          newline_before = True
      elif kind == "OPTIONAL_CHAIN":
        yield Token(TokenKind.PUNCTUATOR, value, line, col, newline_before)
        newline_before = False
      else:
        yield Token(TokenKind(kind), value, line, col, newline_before)
        newline_before = False

      newlines = value.count("\n")
      if newlines:
        line += newlines
        line_start = pos + value.rfind("\n") + 1
      pos += len(value)

    yield Token(TokenKind.EOF, "", line, pos - line_start + 1, newline_before)


def _scan_template(text: str, start: int) -> int:
  """
  Finds the end of a template literal beginning at `start` (a backtick).

  Substitutions may nest braces, strings and further templates.

  Returns:
      int: Index one past the closing backtick, or -1 if unterminated.
  """
  pos = start + 1
  while pos < len(text):
    ch = text[pos]
    if ch == "\\":
      pos += 2
    elif ch == "`":
      return pos + 1
    elif text.startswith("${", pos):
      pos = _scan_substitution(text, pos + 2)
      if pos < 0:
        return -1
    else:
      pos += 1
  return -1


def _scan_substitution(text: str, pos: int) -> int:
  depth = 1
  while pos < len(text):
    ch = text[pos]
    if ch in "\"'":
      mo = re.compile(r"%s(?:[^%s\\\n]|\\[\s\S])*%s" % (ch, ch, ch)).match(text, pos)
      if not mo:
        return -1
      pos = mo.end()
      continue
    if ch == "`":
      pos = _scan_template(text, pos)
      if pos < 0:
        return -1
      continue
    if ch == "{":
      depth += 1
    elif ch == "}":
      depth -= 1
      if depth == 0:
        return pos + 1
    pos += 1
  return -1


_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")


def _unescape(mo: "re.Match[str]") -> str:
  seq = mo.group(1)
  if seq.startswith("u{"):
    return chr(int(seq[2:-1], 16))
  if seq[0] in "ux" and len(seq) > 1:
    return chr(int(seq[1:], 16))
  if seq in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
    return ""
  return _ESCAPES.get(seq, seq)


_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def _join_surrogates(text: str) -> str:
  """Combines escaped UTF-16 surrogate pairs (`\\ud83d\\ude00`) into one code point."""
  if not _SURROGATE_RE.search(text):
    return text
  return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def decode_string(raw: str) -> str:
  """
  Decodes a quoted string literal into its runtime value.

  Args:
      raw (str): The literal including its quotes (e.g. `'a\\n'`).

  Returns:
      str: The cooked string value.
  """
  return _join_surrogates(_ESCAPE_RE.sub(_unescape, raw[1:-1]))


def decode_template_chunk(raw: str) -> str:
  """Decodes one literal chunk of a template (no surrounding quotes)."""
  return _join_surrogates(_ESCAPE_RE.sub(_unescape, raw))


def split_template(raw: str) -> Tuple[List[str], List[str]]:
  """
  Splits a template literal into raw text chunks and substitution sources.

  Args:
      raw (str): The template including its backticks.

  Returns:
      Tuple[List[str], List[str]]: `(quasis, expressions)` where quasis has
      one more element than expressions.
  """
  quasis: List[str] = []
  expressions: List[str] = []
  body_end = len(raw) - 1
  pos = 1
  chunk_start = 1
  while pos < body_end:
    if raw[pos] == "\\":
      pos += 2
    elif raw.startswith("${", pos):
      quasis.append(raw[chunk_start:pos])
      end = _scan_substitution(raw, pos + 2)
      expressions.append(raw[pos + 2 : end - 1])
      pos = end
      chunk_start = end
    else:
      pos += 1
  quasis.append(raw[chunk_start:body_end])
  return quasis, expressions
