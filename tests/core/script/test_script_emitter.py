"""
Tests for the Script Emitter.

Verifies:
1.  Canonical source survives a parse -> emit cycle unchanged.
2.  Parentheses are synthesized for rebuilt trees (precedence, `await` on
    member access, ambiguous statement starts, `??` mixing).
3.  Unknown nodes raise EmitError.
"""

from dataclasses import dataclass

import pytest

from scrap_rewrite.core.script.emitter import ScriptEmitter, emit_script, quote_string
from scrap_rewrite.core.script.errors import EmitError
from scrap_rewrite.core.script.nodes import (
  ArrowFunctionExpression,
  AwaitExpression,
  BinaryExpression,
  CallExpression,
  Expression,
  ExpressionStatement,
  Identifier,
  IfStatement,
  MemberExpression,
  Module,
  NumericLiteral,
  ObjectExpression,
  Property,
  StringLiteral,
  UnaryExpression,
  WhileStatement,
)
from scrap_rewrite.core.script.parser import parse_script


def ident(name: str) -> Identifier:
  return Identifier(name)


def emit(node) -> str:
  return ScriptEmitter().emit(node)


@pytest.mark.parametrize(
  "code",
  [
    "let x = 1;\n",
    "if (a) {\n    b();\n} else c();\n",
    "if (a) b(); else c();\n",
    "if (a) if (b) c(); else d(); else e();\n",
    "(a + b) * c;\n",
    "`a${b}c`;\n",
    "interface S {\n    score: number;\n    name?: string;\n}\n",
    "let f: (() => void) | null;\n",
    "switch (x) {\n    case 1:\n        a();\n        break;\n    default:\n        b();\n}\n",
    "try {\n    a();\n} catch (e) {\n    b();\n} finally {\n    c();\n}\n",
    "for (let i = 0; i < 10; i++) {}\n",
    "for (;;) {}\n",
    "do {\n    a();\n} while (b);\n",
    "new Foo(1);\n",
    "const g = async (x, ...rest) => x;\n",
    "outer: while (a) {\n    break outer;\n}\n",
    "a?.b?.(c);\n",
    "let s = 'single';\n",
  ],
)
def test_canonical_round_trip(code):
  assert emit_script(parse_script(code)) == code


def test_empty_module():
  assert emit_script(parse_script("")) == ""


def test_binary_left_associativity_needs_right_parens():
  node = BinaryExpression("-", ident("a"), BinaryExpression("-", ident("b"), ident("c")))
  assert emit(node) == "a - (b - c)"
  node = BinaryExpression("-", BinaryExpression("-", ident("a"), ident("b")), ident("c"))
  assert emit(node) == "a - b - c"


def test_lower_precedence_operand_is_wrapped():
  node = BinaryExpression("*", BinaryExpression("+", ident("a"), ident("b")), ident("c"))
  assert emit(node) == "(a + b) * c"


def test_nullish_mixing_is_parenthesized():
  node = BinaryExpression("??", BinaryExpression("||", ident("a"), ident("b")), ident("c"))
  assert emit(node) == "(a || b) ?? c"


def test_member_of_await_is_parenthesized():
  awaited = AwaitExpression(CallExpression(ident("f"), [ident("self")]))
  assert emit(MemberExpression(awaited, ident("x"))) == "(await f(self)).x"


def test_await_as_binary_operand_is_bare():
  awaited = AwaitExpression(CallExpression(ident("f"), []))
  assert emit(BinaryExpression("+", ident("a"), awaited)) == "a + await f()"


def test_numeric_member_object():
  assert emit(MemberExpression(NumericLiteral("1"), ident("toString"))) == "(1).toString"


def test_nested_negation_is_spaced():
  assert emit(UnaryExpression("-", UnaryExpression("-", ident("x")))) == "- -x"
  assert emit(UnaryExpression("typeof", ident("x"))) == "typeof x"


def test_object_statement_is_wrapped():
  obj = ObjectExpression([Property(ident("a"), NumericLiteral("1"))])
  assert emit(ExpressionStatement(obj)) == "({ a: 1 });"


def test_arrow_returning_object_is_wrapped():
  obj = ObjectExpression([Property(ident("a"), NumericLiteral("1"))])
  assert emit(ArrowFunctionExpression(params=[], body=obj)) == "() => ({ a: 1 })"


def test_synthesized_strings_are_json_quoted():
  assert emit(StringLiteral("a\"b")) == '"a\\"b"'
  assert quote_string("é\n") == '"é\\n"'


def test_unknown_node_raises():
  @dataclass
  class Mystery(Expression):
    pass

  with pytest.raises(EmitError):
    emit(ExpressionStatement(Mystery()))


def _call(name: str) -> ExpressionStatement:
  return ExpressionStatement(CallExpression(ident(name), []))


def test_else_less_inner_if_is_braced():
  node = IfStatement(ident("a"), IfStatement(ident("b"), _call("c")), _call("d"))
  assert emit_script(Module(body=[node])) == "if (a) {\n    if (b) c();\n} else d();\n"


def test_loop_ending_in_else_less_if_is_braced():
  inner = WhileStatement(ident("x"), IfStatement(ident("b"), _call("c")))
  node = IfStatement(ident("a"), inner, _call("d"))
  assert emit_script(Module(body=[node])) == "if (a) {\n    while (x) if (b) c();\n} else d();\n"
