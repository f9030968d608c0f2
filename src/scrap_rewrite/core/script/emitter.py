"""
Script Emitter Logic.

This module provides the `ScriptEmitter`, which renders a script syntax tree
back into source text.

Formatting is canonical rather than source-preserving: 4-space indentation,
one statement per line, explicit `;` terminators. Parsed literals keep their
original spelling; synthesized strings are printed in double quotes.
Parentheses are derived from an operator-precedence table, so rewritten
trees such as a member access on an awaited call print correctly
(`(await f(self)).x`).
"""

import json
from typing import List, Optional, Tuple

from scrap_rewrite.core.script.errors import EmitError
from scrap_rewrite.core.script.nodes import (
  AssignmentExpression,
  AsExpression,
  BinaryExpression,
  BlockStatement,
  CallExpression,
  ConditionalExpression,
  Expression,
  ForInStatement,
  ForOfStatement,
  ForStatement,
  FunctionExpression,
  FunctionType,
  Identifier,
  IfStatement,
  IntersectionType,
  LabeledStatement,
  MemberExpression,
  Module,
  NewExpression,
  NonNullExpression,
  NumericLiteral,
  ObjectExpression,
  ObjectPattern,
  Parameter,
  PatternProperty,
  Property,
  ScriptNode,
  SequenceExpression,
  Statement,
  TypeNode,
  UnionType,
  UpdateExpression,
  VariableDeclaration,
  WhileStatement,
)
from scrap_rewrite.core.script.parser import BINARY_PRECEDENCE

PREC_LOWEST = 0
PREC_SEQUENCE = 1
PREC_ASSIGN = 2
PREC_CONDITIONAL = 3
PREC_RELATIONAL = BINARY_PRECEDENCE["instanceof"] + 3
PREC_UNARY = 15
PREC_POSTFIX = 16
PREC_NEW_NO_ARGS = 17
PREC_CALL = 18
PREC_PRIMARY = 20

_LOGICAL = frozenset({"||", "&&"})


def _binary_prec(op: str) -> int:
  return BINARY_PRECEDENCE[op] + 3


def quote_string(value: str) -> str:
  """Renders a Python string as a double-quoted script string literal."""
  return json.dumps(value, ensure_ascii=False)


class ScriptEmitter:
  """
  Renders syntax tree nodes as script source text.
  """

  def __init__(self, indent: str = "    "):
    """
    Initialize the emitter.

    Args:
        indent (str): Text used for one level of indentation.
    """
    self.indent = indent
    self._depth = 0

  def emit(self, node: ScriptNode) -> str:
    """
    Renders a module, statement, expression or type annotation.

    Args:
        node (ScriptNode): The tree (or subtree) to print.

    Returns:
        str: Source text. Modules end with a trailing newline.

    Raises:
        EmitError: If the tree contains a node the emitter cannot print.
    """
    self._depth = 0
    if isinstance(node, Module):
      lines = [self._stmt(s) for s in node.body]
      return "\n".join(lines) + "\n" if lines else ""
    if isinstance(node, Statement):
      return self._stmt(node)
    if isinstance(node, TypeNode):
      return self._type(node)
    return self._expr(node)

  # --- Dispatch ---

  def _dispatch(self, prefix: str, node: ScriptNode):
    method = getattr(self, f"_{prefix}_{type(node).__name__}", None)
    if method is None:
      raise EmitError(f"Cannot emit {type(node).__name__} as {prefix}")
    return method(node)

  def _stmt(self, node: Statement) -> str:
    return self._dispatch("stmt", node)

  def _type(self, node: TypeNode) -> str:
    return self._dispatch("type", node)

  def _expr(self, node: ScriptNode, min_prec: int = PREC_LOWEST) -> str:
    text, prec = self._dispatch("expr", node)
    if prec < min_prec:
      return f"({text})"
    return text

  def _pad(self) -> str:
    return self.indent * self._depth

  # --- Statements ---

  def _block(self, body: List[Statement]) -> str:
    if not body:
      return "{}"
    self._depth += 1
    lines = [self._pad() + self._stmt(s) for s in body]
    self._depth -= 1
    return "{\n" + "\n".join(lines) + "\n" + self._pad() + "}"

  def _stmt_BlockStatement(self, node) -> str:
    return self._block(node.body)

  def _stmt_EmptyStatement(self, node) -> str:
    return ";"

  def _stmt_ExpressionStatement(self, node) -> str:
    text = self._expr(node.expression)
    if _starts_ambiguously(node.expression):
      text = f"({text})"
    return text + ";"

  def _stmt_VariableDeclaration(self, node) -> str:
    return self._declaration(node) + ";"

  def _declaration(self, node: VariableDeclaration) -> str:
    parts = []
    for decl in node.declarations:
      text = self._expr(decl.id)
      if decl.type_annotation is not None:
        text += ": " + self._type(decl.type_annotation)
      if decl.init is not None:
        text += " = " + self._expr(decl.init, PREC_ASSIGN)
      parts.append(text)
    return f"{node.kind} " + ", ".join(parts)

  def _stmt_FunctionDeclaration(self, node) -> str:
    return self._function(node.id, node.params, node.body, node.is_async, node.return_type)

  def _function(self, name, params, body, is_async, return_type) -> str:
    head = "async function" if is_async else "function"
    if name is not None:
      head += " " + name.name
    head += self._params(params)
    if return_type is not None:
      head += ": " + self._type(return_type)
    return head + " " + self._block(body.body)

  def _params(self, params: List[Parameter]) -> str:
    return "(" + ", ".join(self._param(p) for p in params) + ")"

  def _param(self, param: Parameter) -> str:
    text = ("..." if param.rest else "") + self._expr(param.pattern)
    if param.optional:
      text += "?"
    if param.type_annotation is not None:
      text += ": " + self._type(param.type_annotation)
    if param.default is not None:
      text += " = " + self._expr(param.default, PREC_ASSIGN)
    return text

  def _stmt_InterfaceDeclaration(self, node) -> str:
    head = "interface " + node.id.name
    if node.extends:
      head += " extends " + ", ".join(self._type(t) for t in node.extends)
    return head + " " + self._members(node.body, multiline=True)

  def _stmt_TypeAliasDeclaration(self, node) -> str:
    return f"type {node.id.name} = {self._type(node.type_annotation)};"

  def _stmt_IfStatement(self, node) -> str:
    consequent = node.consequent
    if node.alternate is not None and _ends_with_open_if(consequent):
      # A trailing else-less `if` would capture the `else`.
      consequent = BlockStatement(body=[consequent])
    text = f"if ({self._expr(node.test)}) {self._stmt(consequent)}"
    if node.alternate is not None:
      text += " else " + self._stmt(node.alternate)
    return text

  def _for_left(self, left) -> str:
    if isinstance(left, VariableDeclaration):
      return self._declaration(left)
    return self._expr(left, PREC_POSTFIX)

  def _stmt_ForStatement(self, node) -> str:
    init = ""
    if isinstance(node.init, VariableDeclaration):
      init = self._declaration(node.init)
    elif node.init is not None:
      init = self._expr(node.init)
    head = init + ";"
    if node.test is not None:
      head += " " + self._expr(node.test)
    head += ";"
    if node.update is not None:
      head += " " + self._expr(node.update)
    return f"for ({head}) {self._stmt(node.body)}"

  def _stmt_ForInStatement(self, node) -> str:
    return f"for ({self._for_left(node.left)} in {self._expr(node.right)}) {self._stmt(node.body)}"

  def _stmt_ForOfStatement(self, node) -> str:
    keyword = "for await" if node.is_await else "for"
    right = self._expr(node.right, PREC_ASSIGN)
    return f"{keyword} ({self._for_left(node.left)} of {right}) {self._stmt(node.body)}"

  def _stmt_WhileStatement(self, node) -> str:
    return f"while ({self._expr(node.test)}) {self._stmt(node.body)}"

  def _stmt_DoWhileStatement(self, node) -> str:
    return f"do {self._stmt(node.body)} while ({self._expr(node.test)});"

  def _stmt_ReturnStatement(self, node) -> str:
    if node.argument is None:
      return "return;"
    return f"return {self._expr(node.argument)};"

  def _stmt_BreakStatement(self, node) -> str:
    return f"break {node.label.name};" if node.label else "break;"

  def _stmt_ContinueStatement(self, node) -> str:
    return f"continue {node.label.name};" if node.label else "continue;"

  def _stmt_LabeledStatement(self, node) -> str:
    return f"{node.label.name}: {self._stmt(node.body)}"

  def _stmt_ThrowStatement(self, node) -> str:
    return f"throw {self._expr(node.argument)};"

  def _stmt_TryStatement(self, node) -> str:
    text = "try " + self._block(node.block.body)
    handler = node.handler
    if handler is not None:
      text += " catch "
      if handler.param is not None:
        binding = self._expr(handler.param)
        if handler.type_annotation is not None:
          binding += ": " + self._type(handler.type_annotation)
        text += f"({binding}) "
      text += self._block(handler.body.body)
    if node.finalizer is not None:
      text += " finally " + self._block(node.finalizer.body)
    return text

  def _stmt_SwitchStatement(self, node) -> str:
    if not node.cases:
      return f"switch ({self._expr(node.discriminant)}) {{}}"
    lines = []
    self._depth += 1
    for case in node.cases:
      head = "default:" if case.test is None else f"case {self._expr(case.test)}:"
      lines.append(self._pad() + head)
      self._depth += 1
      lines.extend(self._pad() + self._stmt(s) for s in case.consequent)
      self._depth -= 1
    self._depth -= 1
    body = "\n".join(lines)
    return f"switch ({self._expr(node.discriminant)}) {{\n{body}\n{self._pad()}}}"

  # --- Expressions ---
  # Each returns `(text, precedence)`.

  def _expr_Identifier(self, node) -> Tuple[str, int]:
    return node.name, PREC_PRIMARY

  def _expr_PrivateName(self, node) -> Tuple[str, int]:
    return "#" + node.name, PREC_PRIMARY

  def _expr_ThisExpression(self, node) -> Tuple[str, int]:
    return "this", PREC_PRIMARY

  def _expr_StringLiteral(self, node) -> Tuple[str, int]:
    return (node.raw if node.raw is not None else quote_string(node.value)), PREC_PRIMARY

  def _expr_NumericLiteral(self, node) -> Tuple[str, int]:
    return node.raw, PREC_PRIMARY

  def _expr_BooleanLiteral(self, node) -> Tuple[str, int]:
    return ("true" if node.value else "false"), PREC_PRIMARY

  def _expr_NullLiteral(self, node) -> Tuple[str, int]:
    return "null", PREC_PRIMARY

  def _expr_TemplateLiteral(self, node) -> Tuple[str, int]:
    parts = [node.quasis[0]]
    for expr, quasi in zip(node.expressions, node.quasis[1:]):
      parts.append("${" + self._expr(expr) + "}")
      parts.append(quasi)
    return "`" + "".join(parts) + "`", PREC_PRIMARY

  def _expr_SpreadElement(self, node) -> Tuple[str, int]:
    return "..." + self._expr(node.argument, PREC_ASSIGN), PREC_ASSIGN

  def _expr_ArrayExpression(self, node) -> Tuple[str, int]:
    items = ["" if e is None else self._expr(e, PREC_ASSIGN) for e in node.elements]
    text = ", ".join(items)
    if node.elements and node.elements[-1] is None:
      text += ","
    return f"[{text}]", PREC_PRIMARY

  def _property_key(self, key: Expression, computed: bool) -> str:
    if computed:
      return "[" + self._expr(key, PREC_ASSIGN) + "]"
    return self._expr(key)

  def _expr_ObjectExpression(self, node) -> Tuple[str, int]:
    if not node.properties:
      return "{}", PREC_PRIMARY
    items = []
    for prop in node.properties:
      if not isinstance(prop, (Property, PatternProperty)):
        items.append(self._expr(prop))
      elif prop.shorthand:
        items.append(self._expr(prop.value))
      else:
        items.append(self._property_key(prop.key, prop.computed) + ": " + self._expr(prop.value, PREC_ASSIGN))
    return "{ " + ", ".join(items) + " }", PREC_PRIMARY

  def _expr_FunctionExpression(self, node) -> Tuple[str, int]:
    return self._function(node.id, node.params, node.body, node.is_async, node.return_type), PREC_PRIMARY

  def _expr_ArrowFunctionExpression(self, node) -> Tuple[str, int]:
    head = ("async " if node.is_async else "") + self._params(node.params)
    if node.return_type is not None:
      head += ": " + self._type(node.return_type)
    if isinstance(node.body, BlockStatement):
      body = self._block(node.body.body)
    else:
      body = self._expr(node.body, PREC_ASSIGN)
      if _starts_ambiguously(node.body):
        body = f"({body})"
    return f"{head} => {body}", PREC_ASSIGN

  def _arguments(self, arguments: List[Expression]) -> str:
    return "(" + ", ".join(self._expr(a, PREC_ASSIGN) for a in arguments) + ")"

  def _callee(self, node: Expression) -> str:
    if isinstance(node, NumericLiteral):
      return f"({node.raw})"
    return self._expr(node, PREC_CALL)

  def _expr_CallExpression(self, node) -> Tuple[str, int]:
    dot = "?." if node.optional else ""
    return self._callee(node.callee) + dot + self._arguments(node.arguments), PREC_CALL

  def _expr_NewExpression(self, node) -> Tuple[str, int]:
    if _contains_call(node.callee):
      callee = f"({self._expr(node.callee)})"
    else:
      callee = self._expr(node.callee, PREC_CALL)
    if node.arguments is None:
      return f"new {callee}", PREC_NEW_NO_ARGS
    return f"new {callee}{self._arguments(node.arguments)}", PREC_CALL

  def _expr_MemberExpression(self, node) -> Tuple[str, int]:
    obj = self._callee(node.object)
    if node.computed:
      access = ("?.[" if node.optional else "[") + self._expr(node.property) + "]"
    else:
      access = ("?." if node.optional else ".") + self._expr(node.property)
    return obj + access, PREC_CALL

  def _expr_UnaryExpression(self, node) -> Tuple[str, int]:
    arg = self._expr(node.argument, PREC_UNARY)
    if node.operator.isalpha():
      return f"{node.operator} {arg}", PREC_UNARY
    if node.operator in "+-" and arg[:1] in ("+", "-"):
      return f"{node.operator} {arg}", PREC_UNARY
    return node.operator + arg, PREC_UNARY

  def _expr_UpdateExpression(self, node) -> Tuple[str, int]:
    if node.prefix:
      return node.operator + self._expr(node.argument, PREC_POSTFIX), PREC_UNARY
    return self._expr(node.argument, PREC_NEW_NO_ARGS) + node.operator, PREC_POSTFIX

  def _operand(self, parent_op: str, child: Expression, min_prec: int) -> str:
    if isinstance(child, BinaryExpression):
      mixes = (parent_op == "??" and child.operator in _LOGICAL) or (parent_op in _LOGICAL and child.operator == "??")
      if mixes:
        return f"({self._expr(child)})"
    return self._expr(child, min_prec)

  def _expr_BinaryExpression(self, node) -> Tuple[str, int]:
    prec = _binary_prec(node.operator)
    if node.operator == "**":
      left = self._operand(node.operator, node.left, PREC_POSTFIX)
      right = self._operand(node.operator, node.right, prec)
    else:
      left = self._operand(node.operator, node.left, prec)
      right = self._operand(node.operator, node.right, prec + 1)
    return f"{left} {node.operator} {right}", prec

  def _expr_ConditionalExpression(self, node) -> Tuple[str, int]:
    test = self._expr(node.test, PREC_CONDITIONAL + 1)
    consequent = self._expr(node.consequent, PREC_ASSIGN)
    alternate = self._expr(node.alternate, PREC_ASSIGN)
    return f"{test} ? {consequent} : {alternate}", PREC_CONDITIONAL

  def _expr_AssignmentExpression(self, node) -> Tuple[str, int]:
    left = self._expr(node.left, PREC_POSTFIX)
    return f"{left} {node.operator} {self._expr(node.right, PREC_ASSIGN)}", PREC_ASSIGN

  def _expr_SequenceExpression(self, node) -> Tuple[str, int]:
    return ", ".join(self._expr(e, PREC_ASSIGN) for e in node.expressions), PREC_SEQUENCE

  def _expr_AwaitExpression(self, node) -> Tuple[str, int]:
    return "await " + self._expr(node.argument, PREC_UNARY), PREC_UNARY

  def _expr_ParenthesizedExpression(self, node) -> Tuple[str, int]:
    return f"({self._expr(node.expression)})", PREC_PRIMARY

  def _expr_AsExpression(self, node) -> Tuple[str, int]:
    return f"{self._expr(node.expression, PREC_RELATIONAL)} as {self._type(node.type_annotation)}", PREC_RELATIONAL

  def _expr_NonNullExpression(self, node) -> Tuple[str, int]:
    return self._callee(node.expression) + "!", PREC_CALL

  # Patterns share the expression dispatch since they occupy binding positions.

  def _expr_AssignmentPattern(self, node) -> Tuple[str, int]:
    return f"{self._expr(node.left)} = {self._expr(node.right, PREC_ASSIGN)}", PREC_ASSIGN

  def _expr_RestElement(self, node) -> Tuple[str, int]:
    return "..." + self._expr(node.argument), PREC_PRIMARY

  def _expr_ObjectPattern(self, node) -> Tuple[str, int]:
    if not node.properties:
      return "{}", PREC_PRIMARY
    items = []
    for prop in node.properties:
      if not isinstance(prop, (Property, PatternProperty)):
        items.append(self._expr(prop))
      elif prop.shorthand:
        items.append(self._expr(prop.value))
      else:
        items.append(self._property_key(prop.key, prop.computed) + ": " + self._expr(prop.value))
    return "{ " + ", ".join(items) + " }", PREC_PRIMARY

  def _expr_ArrayPattern(self, node) -> Tuple[str, int]:
    items = ["" if e is None else self._expr(e) for e in node.elements]
    text = ", ".join(items)
    if node.elements and node.elements[-1] is None:
      text += ","
    return f"[{text}]", PREC_PRIMARY

  # --- Types ---

  def _type_KeywordType(self, node) -> str:
    return node.kind

  def _type_TypeReference(self, node) -> str:
    text = self._entity_name(node.name)
    if node.type_arguments:
      text += "<" + ", ".join(self._type(t) for t in node.type_arguments) + ">"
    return text

  def _entity_name(self, name) -> str:
    if isinstance(name, Identifier):
      return name.name
    return f"{self._entity_name(name.left)}.{name.right.name}"

  def _type_ArrayType(self, node) -> str:
    element = self._type(node.element_type)
    if isinstance(node.element_type, (UnionType, IntersectionType, FunctionType)):
      element = f"({element})"
    return element + "[]"

  def _type_UnionType(self, node) -> str:
    parts = []
    for t in node.types:
      text = self._type(t)
      parts.append(f"({text})" if isinstance(t, FunctionType) else text)
    return " | ".join(parts)

  def _type_IntersectionType(self, node) -> str:
    parts = []
    for t in node.types:
      text = self._type(t)
      parts.append(f"({text})" if isinstance(t, (UnionType, FunctionType)) else text)
    return " & ".join(parts)

  def _type_ParenthesizedType(self, node) -> str:
    return f"({self._type(node.type_annotation)})"

  def _type_LiteralType(self, node) -> str:
    return self._expr(node.literal)

  def _type_TupleType(self, node) -> str:
    return "[" + ", ".join(self._type(t) for t in node.element_types) + "]"

  def _type_FunctionType(self, node) -> str:
    return f"{self._params(node.params)} => {self._type(node.return_type)}"

  def _type_TypeLiteral(self, node) -> str:
    return self._members(node.members, multiline=False)

  # --- Interface Members ---

  def _members(self, members, multiline: bool) -> str:
    if not members:
      return "{}"
    if not multiline:
      return "{ " + " ".join(self._dispatch("member", m) + ";" for m in members) + " }"
    self._depth += 1
    lines = [self._pad() + self._dispatch("member", m) + ";" for m in members]
    self._depth -= 1
    return "{\n" + "\n".join(lines) + "\n" + self._pad() + "}"

  def _member_PropertySignature(self, node) -> str:
    text = ("readonly " if node.readonly else "") + self._property_key(node.key, node.computed)
    if node.optional:
      text += "?"
    if node.type_annotation is not None:
      text += ": " + self._type(node.type_annotation)
    return text

  def _member_MethodSignature(self, node) -> str:
    text = self._property_key(node.key, node.computed)
    if node.optional:
      text += "?"
    text += self._params(node.params)
    if node.return_type is not None:
      text += ": " + self._type(node.return_type)
    return text

  def _member_IndexSignature(self, node) -> str:
    text = ("readonly " if node.readonly else "") + "[" + self._param(node.parameter) + "]"
    if node.type_annotation is not None:
      text += ": " + self._type(node.type_annotation)
    return text


def _leftmost(expr: Expression) -> Expression:
  while True:
    if isinstance(expr, CallExpression):
      expr = expr.callee
    elif isinstance(expr, MemberExpression):
      expr = expr.object
    elif isinstance(expr, (BinaryExpression, AssignmentExpression)):
      expr = expr.left
    elif isinstance(expr, ConditionalExpression):
      expr = expr.test
    elif isinstance(expr, SequenceExpression) and expr.expressions:
      expr = expr.expressions[0]
    elif isinstance(expr, UpdateExpression) and not expr.prefix:
      expr = expr.argument
    elif isinstance(expr, (AsExpression, NonNullExpression)):
      expr = expr.expression
    else:
      return expr


def _ends_with_open_if(stmt: Statement) -> bool:
  while True:
    if isinstance(stmt, IfStatement):
      if stmt.alternate is None:
        return True
      stmt = stmt.alternate
    elif isinstance(stmt, (ForStatement, ForInStatement, ForOfStatement, WhileStatement, LabeledStatement)):
      stmt = stmt.body
    else:
      return False


def _starts_ambiguously(expr: Expression) -> bool:
  """True when printing `expr` first on a line would read as a block or declaration."""
  return isinstance(_leftmost(expr), (ObjectExpression, ObjectPattern, FunctionExpression))


def _contains_call(expr: Optional[Expression]) -> bool:
  while isinstance(expr, MemberExpression):
    expr = expr.object
  return isinstance(expr, CallExpression)


def emit_script(node: ScriptNode) -> str:
  """
  Convenience wrapper around `ScriptEmitter().emit`.

  Args:
      node (ScriptNode): Tree to print.

  Returns:
      str: The rendered source text.
  """
  return ScriptEmitter().emit(node)
