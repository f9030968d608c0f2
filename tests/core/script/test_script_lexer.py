"""
Tests for the Script Lexer.

Verifies:
1.  Token kinds and longest-match punctuators.
2.  Line-break tracking through whitespace and comments.
3.  Template literal scanning (nested substitutions).
4.  String decoding (escapes, continuations, surrogate pairs).
5.  Errors for unterminated constructs and illegal characters.
"""

import pytest

from scrap_rewrite.core.script.errors import ScriptSyntaxError
from scrap_rewrite.core.script.tokens import (
  ScriptLexer,
  TokenKind,
  decode_string,
  split_template,
)


def lex(code: str):
  return list(ScriptLexer(code).tokenize())


def texts(code: str):
  return [t.text for t in lex(code)]


def test_simple_declaration_kinds():
  tokens = lex("let x = 1;")
  assert [t.kind for t in tokens] == [
    TokenKind.IDENTIFIER,
    TokenKind.IDENTIFIER,
    TokenKind.PUNCTUATOR,
    TokenKind.NUMBER,
    TokenKind.PUNCTUATOR,
    TokenKind.EOF,
  ]
  assert [t.text for t in tokens] == ["let", "x", "=", "1", ";", ""]


def test_longest_punctuator_wins():
  assert texts("a >>>= b") == ["a", ">>>=", "b", ""]
  assert texts("a ?? b") == ["a", "??", "b", ""]
  assert texts("a ** b") == ["a", "**", "b", ""]


def test_optional_chain_vs_conditional_number():
  assert texts("a?.b") == ["a", "?.", "b", ""]
  assert texts("a?.5:b") == ["a", "?", ".5", ":", "b", ""]


@pytest.mark.parametrize("literal", ["0x1F", "0b101", "0o17", "1_000", "1.5e-3", "10n", ".25"])
def test_numeric_literals(literal):
  tokens = lex(literal)
  assert tokens[0].kind == TokenKind.NUMBER
  assert tokens[0].text == literal


def test_positions_are_one_based():
  tokens = lex("a\n  b")
  assert (tokens[0].line, tokens[0].col) == (1, 1)
  assert (tokens[1].line, tokens[1].col) == (2, 3)


@pytest.mark.parametrize(
  "code, expected",
  [
    ("a\nb", True),
    ("a // note\nb", True),
    ("a /* inline */ b", False),
    ("a /*\n*/ b", True),
    ("a b", False),
  ],
)
def test_newline_before_tracking(code, expected):
  tokens = lex(code)
  assert tokens[0].newline_before is False
  assert tokens[1].newline_before is expected


def test_comments_are_dropped():
  assert texts("a /* x */ + // y\n b") == ["a", "+", "b", ""]


def test_template_is_single_token():
  tokens = lex("`a${ {b: 1}.b }c` + d")
  assert tokens[0].kind == TokenKind.TEMPLATE
  assert tokens[0].text == "`a${ {b: 1}.b }c`"
  assert tokens[1].text == "+"


def test_split_template():
  assert split_template("`a${b}c${d}`") == (["a", "c", ""], ["b", "d"])
  assert split_template("`${ `${x}` }`") == (["", ""], [" `${x}` "])


@pytest.mark.parametrize(
  "raw, value",
  [
    ("'a\\nb'", "a\nb"),
    ('"\\u0041\\x42"', "AB"),
    ('"\\u{1F600}"', "\U0001f600"),
    ('"\\ud83d\\ude00"', "\U0001f600"),
    ("'a\\\nb'", "ab"),
    ("'it\\'s'", "it's"),
    ('"\\q"', "q"),
  ],
)
def test_decode_string(raw, value):
  assert decode_string(raw) == value


@pytest.mark.parametrize(
  "code, message",
  [
    ("a /* open", "Unterminated comment"),
    ("`abc", "Unterminated template"),
    ("a \\ b", "Unexpected character"),
    ("'abc", "Unexpected character"),
  ],
)
def test_lexer_errors(code, message):
  with pytest.raises(ScriptSyntaxError, match=message):
    lex(code)


def test_error_carries_location():
  with pytest.raises(ScriptSyntaxError) as exc:
    lex("a\n  \\")
  assert exc.value.line == 2
  assert exc.value.col == 3
