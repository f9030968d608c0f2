"""
Script Syntax Tree Nodes.

This module defines the data structures for representing script source code.
Nodes are plain dataclasses grouped under four marker bases:

- `Statement`: anything that can appear in a statement list.
- `Expression`: value-producing nodes (and assignment targets).
- `Pattern`: destructuring binding forms.
- `TypeNode`: type annotations, kept until the stripper removes them.

Child nodes are stored directly in dataclass fields (either a node, a list of
nodes, or None), which is what the generic traversal in
`scrap_rewrite.core.rewriter.base` relies on.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union


@dataclass
class ScriptNode:
  """Base class for all script syntax tree nodes."""

  def to_dict(self) -> Dict[str, Any]:
    """
    Serializes the node (recursively) into JSON-compatible primitives.

    Returns:
        Dict[str, Any]: Mapping with a `type` key naming the node class.
    """
    data: Dict[str, Any] = {"type": type(self).__name__}
    for f in fields(self):
      data[f.name] = _serialize(getattr(self, f.name))
    return data


def _serialize(value: Any) -> Any:
  if isinstance(value, ScriptNode):
    return value.to_dict()
  if isinstance(value, list):
    return [_serialize(v) for v in value]
  return value


@dataclass
class Statement(ScriptNode):
  """Marker base for statements and declarations."""


@dataclass
class Expression(ScriptNode):
  """Marker base for expressions."""


@dataclass
class Pattern(ScriptNode):
  """Marker base for destructuring patterns."""


@dataclass
class TypeNode(ScriptNode):
  """Marker base for type annotations."""


# --- Module ---


@dataclass
class Module(ScriptNode):
  """Top-level container. Statement order is significant."""

  body: List[Statement] = field(default_factory=list)


# --- Expressions ---


@dataclass
class Identifier(Expression):
  name: str


@dataclass
class PrivateName(Expression):
  """A `#name` member key. Never resolves to a static property name."""

  name: str


@dataclass
class ThisExpression(Expression):
  pass


@dataclass
class StringLiteral(Expression):
  """
  A quoted string.

  Attributes:
      value (str): The cooked value.
      raw (Optional[str]): Source spelling including quotes; None when synthesized.
  """

  value: str
  raw: Optional[str] = None


@dataclass
class NumericLiteral(Expression):
  raw: str


@dataclass
class BooleanLiteral(Expression):
  value: bool


@dataclass
class NullLiteral(Expression):
  pass


@dataclass
class TemplateLiteral(Expression):
  """
  A backtick template. `quasis` holds the raw text chunks and always has
  exactly one more element than `expressions`.
  """

  quasis: List[str] = field(default_factory=list)
  expressions: List[Expression] = field(default_factory=list)


@dataclass
class SpreadElement(Expression):
  argument: Expression


@dataclass
class ArrayExpression(Expression):
  """Array literal. Holes are stored as None."""

  elements: List[Optional[Expression]] = field(default_factory=list)


@dataclass
class Property(ScriptNode):
  key: Expression
  value: Expression
  computed: bool = False
  shorthand: bool = False


@dataclass
class ObjectExpression(Expression):
  properties: List[Union[Property, SpreadElement]] = field(default_factory=list)


@dataclass
class Parameter(ScriptNode):
  """
  A function parameter.

  Attributes:
      pattern: The binding (identifier or destructuring pattern).
      type_annotation: Declared type, if any.
      optional: True for `name?: T`.
      default: Default value expression, if any.
      rest: True for `...name`.
  """

  pattern: Union[Expression, Pattern]
  type_annotation: Optional[TypeNode] = None
  optional: bool = False
  default: Optional[Expression] = None
  rest: bool = False


@dataclass
class BlockStatement(Statement):
  body: List[Statement] = field(default_factory=list)


@dataclass
class FunctionExpression(Expression):
  id: Optional[Identifier]
  params: List[Parameter]
  body: BlockStatement
  is_async: bool = False
  return_type: Optional[TypeNode] = None


@dataclass
class ArrowFunctionExpression(Expression):
  params: List[Parameter]
  body: Union[BlockStatement, Expression]
  is_async: bool = False
  return_type: Optional[TypeNode] = None


@dataclass
class CallExpression(Expression):
  callee: Expression
  arguments: List[Expression] = field(default_factory=list)
  optional: bool = False


@dataclass
class NewExpression(Expression):
  """`new callee(args)`. `arguments` is None for the paren-less form."""

  callee: Expression
  arguments: Optional[List[Expression]] = None


@dataclass
class MemberExpression(Expression):
  """
  Property access.

  Attributes:
      object: The receiver expression.
      property: Identifier/PrivateName when static, any expression when computed.
      computed: True for `obj[expr]`.
      optional: True for `obj?.prop`.
  """

  object: Expression
  property: Expression
  computed: bool = False
  optional: bool = False


@dataclass
class UnaryExpression(Expression):
  operator: str
  argument: Expression


@dataclass
class UpdateExpression(Expression):
  operator: str
  argument: Expression
  prefix: bool = False


@dataclass
class BinaryExpression(Expression):
  """Binary and logical operators (`+`, `&&`, `??`, `instanceof`, ...)."""

  operator: str
  left: Expression
  right: Expression


@dataclass
class ConditionalExpression(Expression):
  test: Expression
  consequent: Expression
  alternate: Expression


@dataclass
class AssignmentExpression(Expression):
  operator: str
  left: Union[Expression, Pattern]
  right: Expression


@dataclass
class SequenceExpression(Expression):
  expressions: List[Expression] = field(default_factory=list)


@dataclass
class AwaitExpression(Expression):
  argument: Expression


@dataclass
class ParenthesizedExpression(Expression):
  expression: Expression


@dataclass
class AsExpression(Expression):
  expression: Expression
  type_annotation: TypeNode


@dataclass
class NonNullExpression(Expression):
  expression: Expression


# --- Patterns ---


@dataclass
class AssignmentPattern(Pattern):
  left: Union[Expression, Pattern]
  right: Expression


@dataclass
class RestElement(Pattern):
  argument: Union[Expression, Pattern]


@dataclass
class PatternProperty(ScriptNode):
  key: Expression
  value: Union[Expression, Pattern]
  computed: bool = False
  shorthand: bool = False


@dataclass
class ObjectPattern(Pattern):
  properties: List[Union[PatternProperty, RestElement]] = field(default_factory=list)


@dataclass
class ArrayPattern(Pattern):
  elements: List[Optional[Union[Expression, Pattern]]] = field(default_factory=list)


# --- Types ---


@dataclass
class KeywordType(TypeNode):
  """Primitive keyword type such as `number` or `void`."""

  kind: str


@dataclass
class QualifiedName(ScriptNode):
  left: Union[Identifier, "QualifiedName"]
  right: Identifier


@dataclass
class TypeReference(TypeNode):
  name: Union[Identifier, QualifiedName]
  type_arguments: List[TypeNode] = field(default_factory=list)


@dataclass
class ArrayType(TypeNode):
  element_type: TypeNode


@dataclass
class UnionType(TypeNode):
  types: List[TypeNode] = field(default_factory=list)


@dataclass
class IntersectionType(TypeNode):
  types: List[TypeNode] = field(default_factory=list)


@dataclass
class ParenthesizedType(TypeNode):
  type_annotation: TypeNode


@dataclass
class LiteralType(TypeNode):
  literal: Expression


@dataclass
class TupleType(TypeNode):
  element_types: List[TypeNode] = field(default_factory=list)


@dataclass
class FunctionType(TypeNode):
  params: List[Parameter]
  return_type: TypeNode


# --- Interface members ---


@dataclass
class PropertySignature(ScriptNode):
  key: Expression
  type_annotation: Optional[TypeNode] = None
  computed: bool = False
  optional: bool = False
  readonly: bool = False


@dataclass
class MethodSignature(ScriptNode):
  key: Expression
  params: List[Parameter] = field(default_factory=list)
  return_type: Optional[TypeNode] = None
  computed: bool = False
  optional: bool = False


@dataclass
class IndexSignature(ScriptNode):
  parameter: Parameter
  type_annotation: Optional[TypeNode] = None
  readonly: bool = False


InterfaceMember = Union[PropertySignature, MethodSignature, IndexSignature]


@dataclass
class TypeLiteral(TypeNode):
  members: List[InterfaceMember] = field(default_factory=list)


# --- Statements ---


@dataclass
class EmptyStatement(Statement):
  pass


@dataclass
class ExpressionStatement(Statement):
  expression: Expression


@dataclass
class VariableDeclarator(ScriptNode):
  id: Union[Expression, Pattern]
  type_annotation: Optional[TypeNode] = None
  init: Optional[Expression] = None


@dataclass
class VariableDeclaration(Statement):
  kind: str
  declarations: List[VariableDeclarator] = field(default_factory=list)


@dataclass
class FunctionDeclaration(Statement):
  id: Identifier
  params: List[Parameter]
  body: BlockStatement
  is_async: bool = False
  return_type: Optional[TypeNode] = None


@dataclass
class InterfaceDeclaration(Statement):
  id: Identifier
  body: List[InterfaceMember] = field(default_factory=list)
  extends: List[TypeReference] = field(default_factory=list)


@dataclass
class TypeAliasDeclaration(Statement):
  id: Identifier
  type_annotation: TypeNode


@dataclass
class IfStatement(Statement):
  test: Expression
  consequent: Statement
  alternate: Optional[Statement] = None


@dataclass
class ForStatement(Statement):
  init: Optional[Union[VariableDeclaration, Expression]]
  test: Optional[Expression]
  update: Optional[Expression]
  body: Statement


@dataclass
class ForInStatement(Statement):
  left: Union[VariableDeclaration, Expression, Pattern]
  right: Expression
  body: Statement


@dataclass
class ForOfStatement(Statement):
  left: Union[VariableDeclaration, Expression, Pattern]
  right: Expression
  body: Statement
  is_await: bool = False


@dataclass
class WhileStatement(Statement):
  test: Expression
  body: Statement


@dataclass
class DoWhileStatement(Statement):
  body: Statement
  test: Expression


@dataclass
class ReturnStatement(Statement):
  argument: Optional[Expression] = None


@dataclass
class BreakStatement(Statement):
  label: Optional[Identifier] = None


@dataclass
class ContinueStatement(Statement):
  label: Optional[Identifier] = None


@dataclass
class LabeledStatement(Statement):
  label: Identifier
  body: Statement


@dataclass
class ThrowStatement(Statement):
  argument: Expression


@dataclass
class CatchClause(ScriptNode):
  """
  The `catch` part of a try statement.

  Attributes:
      param: Bound name or destructuring pattern; None for `catch { }`.
      body: Handler block.
      type_annotation: Declared type of the binding (`catch (e: unknown)`).
  """

  param: Optional[Union[Identifier, Pattern]]
  body: BlockStatement
  type_annotation: Optional[TypeNode] = None


@dataclass
class TryStatement(Statement):
  block: BlockStatement
  handler: Optional[CatchClause] = None
  finalizer: Optional[BlockStatement] = None


@dataclass
class SwitchCase(ScriptNode):
  """A `case test:` clause; `test` is None for `default:`."""

  test: Optional[Expression]
  consequent: List[Statement] = field(default_factory=list)


@dataclass
class SwitchStatement(Statement):
  discriminant: Expression
  cases: List[SwitchCase] = field(default_factory=list)
