"""
Tests for the Script Parser.

Verifies:
1.  Statements: declarations, loops, labels, try/catch, switch.
2.  Automatic semicolon insertion and restricted productions.
3.  Expressions: precedence, arrows, optional chaining, templates.
4.  Type annotations and interface members.
5.  Rejection of constructs outside the supported subset.
"""

import pytest

from scrap_rewrite.core.script.errors import ScriptSyntaxError
from scrap_rewrite.core.script.nodes import (
  ArrayPattern,
  ArrayType,
  ArrowFunctionExpression,
  AsExpression,
  BinaryExpression,
  BreakStatement,
  CallExpression,
  ExpressionStatement,
  ForInStatement,
  ForOfStatement,
  ForStatement,
  Identifier,
  IndexSignature,
  InterfaceDeclaration,
  KeywordType,
  LabeledStatement,
  MemberExpression,
  MethodSignature,
  NewExpression,
  NonNullExpression,
  NumericLiteral,
  ObjectExpression,
  ObjectPattern,
  ParenthesizedExpression,
  ParenthesizedType,
  PatternProperty,
  PropertySignature,
  ReturnStatement,
  StringLiteral,
  SwitchStatement,
  TemplateLiteral,
  TryStatement,
  TypeReference,
  UnionType,
  VariableDeclaration,
)
from scrap_rewrite.core.script.parser import ScriptParser, parse_script


def first(code: str):
  return parse_script(code).body[0]


def expr(code: str):
  return ScriptParser(code).parse_expression()


def type_of(code: str):
  return ScriptParser(code).parse_type()


def test_variable_declaration():
  decl = first("let x: number = 1, y;")
  assert isinstance(decl, VariableDeclaration)
  assert decl.kind == "let"
  assert len(decl.declarations) == 2
  assert decl.declarations[0].type_annotation == KeywordType(kind="number")
  assert decl.declarations[0].init == NumericLiteral(raw="1")
  assert decl.declarations[1].init is None


def test_destructuring_declaration():
  decl = first("const {a, b: [c]} = obj;")
  pattern = decl.declarations[0].id
  assert isinstance(pattern, ObjectPattern)
  assert pattern.properties[0].shorthand
  assert isinstance(pattern.properties[1], PatternProperty)
  assert isinstance(pattern.properties[1].value, ArrayPattern)


def test_asi_on_newline():
  body = parse_script("a = 1\nb = 2").body
  assert len(body) == 2
  assert all(isinstance(s, ExpressionStatement) for s in body)


def test_missing_semicolon_same_line_fails():
  with pytest.raises(ScriptSyntaxError):
    parse_script("a = 1 b = 2")


def test_return_is_restricted():
  fn = first("function f() { return\n1 }")
  assert fn.body.body[0] == ReturnStatement()
  assert isinstance(fn.body.body[1], ExpressionStatement)


def test_binary_precedence():
  node = expr("a + b * c")
  assert node.operator == "+"
  assert isinstance(node.right, BinaryExpression)
  assert node.right.operator == "*"


def test_exponent_is_right_associative():
  node = expr("a ** b ** c")
  assert node.left == Identifier("a")
  assert node.right.operator == "**"


def test_parenthesized_expression_is_not_arrow():
  node = expr("(a + b) * c")
  assert isinstance(node, BinaryExpression)
  assert isinstance(node.left, ParenthesizedExpression)


def test_arrow_with_typed_and_default_params():
  decl = first("const f = (a: number, b = 2) => a + b;")
  arrow = decl.declarations[0].init
  assert isinstance(arrow, ArrowFunctionExpression)
  assert len(arrow.params) == 2
  assert arrow.params[0].type_annotation == KeywordType(kind="number")
  assert arrow.params[1].default == NumericLiteral(raw="2")
  assert isinstance(arrow.body, BinaryExpression)


def test_arrow_forms():
  single = expr("x => x")
  assert isinstance(single, ArrowFunctionExpression)
  assert single.params[0].pattern == Identifier("x")

  asynchronous = expr("async () => {}")
  assert asynchronous.is_async


def test_optional_call_chain():
  node = expr("a?.b?.(c)")
  assert isinstance(node, CallExpression)
  assert node.optional
  assert isinstance(node.callee, MemberExpression)
  assert node.callee.optional


def test_non_null_and_as():
  member = expr("a!.b")
  assert isinstance(member.object, NonNullExpression)
  cast = expr("x as number")
  assert isinstance(cast, AsExpression)
  assert cast.type_annotation == KeywordType(kind="number")


def test_computed_member():
  node = expr("a['x']")
  assert node.computed
  assert node.property == StringLiteral(value="x", raw="'x'")


def test_template_literal():
  node = expr("`a${b + 1}c`")
  assert isinstance(node, TemplateLiteral)
  assert node.quasis == ["a", "c"]
  assert isinstance(node.expressions[0], BinaryExpression)


def test_object_literal_statement():
  stmt = first("({ a, b: 1, [c]: 2, ...d });")
  obj = stmt.expression.expression
  assert isinstance(obj, ObjectExpression)
  assert len(obj.properties) == 4
  assert obj.properties[2].computed


def test_for_variants():
  assert isinstance(first("for (let i = 0; i < 10; i++) {}"), ForStatement)
  assert isinstance(first("for (const k in obj) {}"), ForInStatement)
  for_of = first("for (const v of list) x();")
  assert isinstance(for_of, ForOfStatement)
  assert isinstance(for_of.body, ExpressionStatement)


def test_empty_for_head():
  loop = first("for (;;) {}")
  assert loop.init is None and loop.test is None and loop.update is None


def test_labeled_break():
  stmt = first("outer: for (;;) { break outer; }")
  assert isinstance(stmt, LabeledStatement)
  assert stmt.body.body.body[0] == BreakStatement(label=Identifier("outer"))


def test_catch_bindings():
  bare = first("try { a(); } catch { b(); }")
  assert isinstance(bare, TryStatement)
  assert bare.handler.param is None

  destructured = first("try {} catch ({ message }) {}")
  assert isinstance(destructured.handler.param, ObjectPattern)

  typed = first("try {} catch (e: unknown) {}")
  assert typed.handler.type_annotation == KeywordType(kind="unknown")


def test_switch():
  stmt = first("switch (x) { case 1: a(); break; default: b(); }")
  assert isinstance(stmt, SwitchStatement)
  assert len(stmt.cases) == 2
  assert stmt.cases[1].test is None
  assert len(stmt.cases[0].consequent) == 2


def test_interface_members():
  iface = first("interface S extends Base { readonly a: number; 'b'?: string; [k: string]: any; m(x: number): void }")
  assert isinstance(iface, InterfaceDeclaration)
  assert iface.extends[0].name == Identifier("Base")
  kinds = [type(m) for m in iface.body]
  assert kinds == [PropertySignature, PropertySignature, IndexSignature, MethodSignature]
  assert iface.body[0].readonly
  assert iface.body[1].optional
  assert iface.body[1].key.value == "b"


def test_interface_members_newline_separated():
  iface = first("interface S {\n  a: number\n  b\n}")
  assert [m.key.name for m in iface.body] == ["a", "b"]
  assert iface.body[1].type_annotation is None


def test_array_of_parenthesized_union():
  node = type_of("(number | string)[]")
  assert isinstance(node, ArrayType)
  assert isinstance(node.element_type, ParenthesizedType)
  assert isinstance(node.element_type.type_annotation, UnionType)


def test_nested_generic_closes_double_angle():
  decl = first("let x: Array<Array<number>> = [];")
  outer = decl.declarations[0].type_annotation
  assert isinstance(outer, TypeReference)
  inner = outer.type_arguments[0]
  assert inner.name == Identifier("Array")
  assert inner.type_arguments == [KeywordType(kind="number")]


def test_call_type_arguments_are_dropped():
  node = expr("f<number>(1)")
  assert isinstance(node, CallExpression)
  assert node.callee == Identifier("f")
  assert node.arguments == [NumericLiteral("1")]


def test_member_call_with_nested_type_arguments():
  node = expr("obj.get<Array<Costume>>(x)")
  assert isinstance(node, CallExpression)
  assert isinstance(node.callee, MemberExpression)
  assert node.arguments == [Identifier("x")]


def test_new_with_type_arguments():
  node = expr("new Map<string, number>()")
  assert isinstance(node, NewExpression)
  assert node.callee == Identifier("Map")
  assert node.arguments == []


@pytest.mark.parametrize("code, operator", [("a < b > c", ">"), ("a < b", "<"), ("a < b >> c", "<")])
def test_less_than_without_call_stays_a_comparison(code, operator):
  node = expr(code)
  assert isinstance(node, BinaryExpression)
  assert node.operator == operator


def test_restored_shift_after_failed_type_arguments():
  node = expr("a < b >> c")
  assert node.right.operator == ">>"


def test_qualified_type_name():
  node = type_of("Scrap.Costume")
  assert node.name.left == Identifier("Scrap")
  assert node.name.right == Identifier("Costume")


def test_error_location():
  with pytest.raises(ScriptSyntaxError) as exc:
    parse_script("let x = ;\n")
  assert (exc.value.line, exc.value.col) == (1, 9)
  assert str(exc.value).endswith("(line 1, col 9)")
  assert str(exc.value).count("(line") == 1


@pytest.mark.parametrize(
  "code",
  [
    "class A {}",
    "import x from 'y';",
    "function* g() {}",
    "f({ m() {} });",
    "tag`x`;",
    "{ a(",
    "try {}",
  ],
)
def test_unsupported_or_malformed(code):
  with pytest.raises(ScriptSyntaxError):
    parse_script(code)
