"""
Tests for Interface Rewriting.

Verifies:
1.  Interfaces become a block of non-awaited declareVariable calls.
2.  Type tags follow the Type Mapper (unions flattened, missing -> any).
3.  Members without a static name are skipped.
4.  The declared calls agree with the Variable Extractor.
"""

import pytest

from scrap_rewrite.config import RuntimeConfig
from scrap_rewrite.core.rewriter import CooperativeRewriter
from scrap_rewrite.core.script.nodes import BlockStatement
from scrap_rewrite.core.script.parser import parse_script
from scrap_rewrite.core.variables import extract_variables


def test_basic_interface(rewrite):
  expected = '{\n    self.declareVariable("score", "number");\n    self.declareVariable("name", "string");\n}\n'
  assert rewrite("interface S { score: number; name: string }") == expected


def test_unannotated_and_union_members(rewrite):
  expected = (
    "{\n"
    '    self.declareVariable("a", "any");\n'
    '    self.declareVariable("my var", "number", "array");\n'
    "}\n"
  )
  assert rewrite("interface S { a; 'my var': number | string[] }") == expected


def test_named_types(rewrite):
  expected = '{\n    self.declareVariable("c", "Costume", "void");\n}\n'
  assert rewrite("interface S { c: Costume | void }") == expected


def test_unnamed_members_are_skipped(rewrite):
  code = "interface S { m(): void; [k: string]: number; 1: number; x: boolean }"
  assert rewrite(code) == '{\n    self.declareVariable("x", "boolean");\n}\n'


def test_computed_identifier_key_is_declared(rewrite):
  code = "interface S { [k]: number; ['n']: string; [1 + 2]: boolean }"
  expected = '{\n    self.declareVariable("k", "number");\n    self.declareVariable("n", "string");\n}\n'
  assert rewrite(code) == expected


def test_empty_interface(rewrite):
  assert rewrite("interface E {}") == "{}\n"


def test_custom_declare_method(rewrite):
  expected = '{\n    ctx.define("a", "number");\n}\n'
  assert rewrite("interface S { a: number }", context_name="ctx", declare_method="define") == expected


def _declared(module):
  found = []
  for stmt in module.body:
    if not isinstance(stmt, BlockStatement):
      continue
    for call_stmt in stmt.body:
      args = [a.value for a in call_stmt.expression.arguments]
      found.append((args[0], args[1:]))
  return found


@pytest.mark.parametrize(
  "code",
  [
    "interface A { a: number; b: string | boolean }\ninterface B { 'c d': Costume[] }",
    "interface A { x; y: (number | void) | any }",
  ],
)
def test_declarations_match_extractor(code):
  module = parse_script(code)
  rewritten = CooperativeRewriter(RuntimeConfig()).transform(module)
  assert _declared(rewritten) == extract_variables(module)
