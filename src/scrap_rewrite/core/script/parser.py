"""
Script Recursive Descent Parser.

This module parses script source text into the syntax tree defined in
`nodes.py`. It covers the statement, expression and type-annotation subset
that the rewrite engine understands, applies automatic semicolon insertion,
and is tolerant of "early" errors: no scope, duplicate-declaration or
`await`-context checks are performed.

Constructs outside the subset (classes, modules, generators, regex literals,
tagged templates) raise `ScriptSyntaxError`. Type arguments on calls and `new`
expressions (`f<T>(x)`) are parsed and dropped.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Union

from scrap_rewrite.core.script.errors import ScriptSyntaxError
from scrap_rewrite.core.script.nodes import (
  ArrayExpression,
  ArrayPattern,
  ArrayType,
  ArrowFunctionExpression,
  AsExpression,
  AssignmentExpression,
  AssignmentPattern,
  AwaitExpression,
  BinaryExpression,
  BlockStatement,
  BooleanLiteral,
  BreakStatement,
  CallExpression,
  CatchClause,
  ConditionalExpression,
  ContinueStatement,
  DoWhileStatement,
  EmptyStatement,
  Expression,
  ExpressionStatement,
  ForInStatement,
  ForOfStatement,
  ForStatement,
  FunctionDeclaration,
  FunctionExpression,
  FunctionType,
  Identifier,
  IfStatement,
  IndexSignature,
  InterfaceDeclaration,
  InterfaceMember,
  IntersectionType,
  KeywordType,
  LabeledStatement,
  LiteralType,
  MemberExpression,
  MethodSignature,
  Module,
  NewExpression,
  NonNullExpression,
  NullLiteral,
  NumericLiteral,
  ObjectExpression,
  ObjectPattern,
  Parameter,
  ParenthesizedExpression,
  ParenthesizedType,
  Pattern,
  PatternProperty,
  PrivateName,
  Property,
  PropertySignature,
  QualifiedName,
  RestElement,
  ReturnStatement,
  SequenceExpression,
  SpreadElement,
  Statement,
  StringLiteral,
  SwitchCase,
  SwitchStatement,
  TemplateLiteral,
  ThisExpression,
  ThrowStatement,
  TryStatement,
  TupleType,
  TypeAliasDeclaration,
  TypeLiteral,
  TypeNode,
  TypeReference,
  UnaryExpression,
  UnionType,
  UpdateExpression,
  VariableDeclaration,
  VariableDeclarator,
  WhileStatement,
)
from scrap_rewrite.core.script.tokens import (
  ASSIGNMENT_OPERATORS,
  KEYWORD_TYPES,
  RESERVED_WORDS,
  ScriptLexer,
  Token,
  TokenKind,
  decode_string,
  split_template,
)

# Binary operator precedence (higher binds tighter).
BINARY_PRECEDENCE = {
  "??": 1,
  "||": 1,
  "&&": 2,
  "|": 3,
  "^": 4,
  "&": 5,
  "==": 6,
  "!=": 6,
  "===": 6,
  "!==": 6,
  "<": 7,
  ">": 7,
  "<=": 7,
  ">=": 7,
  "instanceof": 7,
  "in": 7,
  "<<": 8,
  ">>": 8,
  ">>>": 8,
  "+": 9,
  "-": 9,
  "*": 10,
  "/": 10,
  "%": 10,
  "**": 11,
}

_AS_PRECEDENCE = 7

_UNARY_OPERATORS = frozenset({"!", "~", "+", "-"})
_UNARY_KEYWORDS = frozenset({"typeof", "void", "delete"})
_DECLARATION_KEYWORDS = frozenset({"var", "let", "const"})


class ScriptParser:
  """
  Recursive descent parser producing a `Module`.
  """

  def __init__(self, text: str):
    """
    Initialize the parser.

    Args:
        text (str): The raw script source.

    Raises:
        ScriptSyntaxError: If the text cannot be tokenized.
    """
    self.tokens: List[Token] = list(ScriptLexer(text).tokenize())
    self.pos = 0
    self._no_in = False

  def parse(self) -> Module:
    """
    Parses the whole source as a module.

    Returns:
        Module: The syntax tree.

    Raises:
        ScriptSyntaxError: If the source is outside the supported grammar.
    """
    body: List[Statement] = []
    while not self._at_eof():
      body.append(self.parse_statement())
    return Module(body=body)

  # --- Token Helpers ---

  def peek(self, offset: int = 0) -> Token:
    idx = self.pos + offset
    if idx >= len(self.tokens):
      return self.tokens[-1]
    return self.tokens[idx]

  def consume(self) -> Token:
    token = self.peek()
    if token.kind != TokenKind.EOF:
      self.pos += 1
    return token

  def at(self, text: str, offset: int = 0) -> bool:
    tk = self.peek(offset)
    return tk.text == text and tk.kind in (TokenKind.PUNCTUATOR, TokenKind.IDENTIFIER)

  def eat(self, text: str) -> bool:
    if self.at(text):
      self.pos += 1
      return True
    return False

  def expect(self, text: str) -> Token:
    if not self.at(text):
      raise self.error(f"Expected '{text}'")
    return self.consume()

  def error(self, message: str, token: Optional[Token] = None) -> ScriptSyntaxError:
    tk = token or self.peek()
    found = tk.text if tk.kind != TokenKind.EOF else "end of input"
    return ScriptSyntaxError(f"{message}, got '{found}'", tk.line, tk.col)

  def _at_eof(self) -> bool:
    return self.peek().kind == TokenKind.EOF

  def _at_identifier(self, offset: int = 0) -> bool:
    tk = self.peek(offset)
    return tk.kind == TokenKind.IDENTIFIER and tk.text not in RESERVED_WORDS

  def _consume_semicolon(self) -> None:
    if self.eat(";"):
      return
    tk = self.peek()
    if tk.kind == TokenKind.EOF or tk.newline_before or self.at("}"):
      return
    raise self.error("Expected ';'")

  def _split_angle(self) -> None:
    """Splits a leading `>` off `>>`/`>>=`-style tokens inside type arguments."""
    tk = self.peek()
    if tk.kind == TokenKind.PUNCTUATOR and tk.text.startswith(">") and len(tk.text) > 1:
      head = Token(tk.kind, ">", tk.line, tk.col, tk.newline_before)
      tail = Token(tk.kind, tk.text[1:], tk.line, tk.col + 1, False)
      self.tokens[self.pos : self.pos + 1] = [head, tail]

  @contextmanager
  def _allow_in(self, allowed: bool = True) -> Iterator[None]:
    saved = self._no_in
    self._no_in = not allowed
    try:
      yield
    finally:
      self._no_in = saved

  # --- Statements ---

  def parse_statement(self) -> Statement:
    tk = self.peek()

    if tk.kind == TokenKind.PUNCTUATOR:
      if tk.text == "{":
        return self.parse_block()
      if tk.text == ";":
        self.consume()
        return EmptyStatement()

    if tk.kind == TokenKind.IDENTIFIER:
      word = tk.text
      if word in _DECLARATION_KEYWORDS:
        decl = self.parse_variable_declaration()
        self._consume_semicolon()
        return decl
      if word == "function":
        return self.parse_function_declaration()
      if word == "async" and self.at("function", 1) and not self.peek(1).newline_before:
        self.consume()
        return self.parse_function_declaration(is_async=True)
      if word == "interface" and self._at_identifier(1) and not self.peek(1).newline_before:
        return self.parse_interface()
      if word == "type" and self._at_identifier(1) and self.at("=", 2):
        return self.parse_type_alias()
      if word == "if":
        return self.parse_if()
      if word == "for":
        return self.parse_for()
      if word == "while":
        self.consume()
        test = self._parse_paren_expression()
        return WhileStatement(test=test, body=self.parse_statement())
      if word == "do":
        return self.parse_do_while()
      if word == "return":
        return self.parse_return()
      if word in ("break", "continue"):
        return self.parse_jump()
      if word == "throw":
        return self.parse_throw()
      if word == "try":
        return self.parse_try()
      if word == "switch":
        return self.parse_switch()
      if word in ("class", "import", "export", "with", "debugger", "enum"):
        raise self.error("Unsupported statement")
      if self._at_identifier() and self.at(":", 1):
        label = Identifier(self.consume().text)
        self.consume()
        return LabeledStatement(label=label, body=self.parse_statement())

    expr = self.parse_expression()
    self._consume_semicolon()
    return ExpressionStatement(expression=expr)

  def parse_block(self) -> BlockStatement:
    self.expect("{")
    body: List[Statement] = []
    while not self.at("}"):
      if self._at_eof():
        raise self.error("Expected '}'")
      body.append(self.parse_statement())
    self.consume()
    return BlockStatement(body=body)

  def parse_variable_declaration(self) -> VariableDeclaration:
    kind = self.consume().text
    declarations: List[VariableDeclarator] = []
    while True:
      target = self.parse_binding_target()
      self.eat("!")
      type_ann = self.parse_type() if self.eat(":") else None
      init = self.parse_assignment() if self.eat("=") else None
      declarations.append(VariableDeclarator(id=target, type_annotation=type_ann, init=init))
      if not self.eat(","):
        break
    return VariableDeclaration(kind=kind, declarations=declarations)

  def parse_function_declaration(self, is_async: bool = False) -> FunctionDeclaration:
    self.expect("function")
    if self.at("*"):
      raise self.error("Generator functions are not supported")
    if not self._at_identifier():
      raise self.error("Expected function name")
    name = Identifier(self.consume().text)
    params = self.parse_parameters()
    return_type = self.parse_type() if self.eat(":") else None
    body = self._parse_function_body()
    return FunctionDeclaration(id=name, params=params, body=body, is_async=is_async, return_type=return_type)

  def _parse_function_body(self) -> BlockStatement:
    with self._allow_in():
      return self.parse_block()

  def parse_interface(self) -> InterfaceDeclaration:
    self.expect("interface")
    name = Identifier(self.consume().text)
    extends: List[TypeReference] = []
    if self.eat("extends"):
      while True:
        extends.append(self._parse_type_reference())
        if not self.eat(","):
          break
    return InterfaceDeclaration(id=name, body=self.parse_type_members(), extends=extends)

  def parse_type_alias(self) -> TypeAliasDeclaration:
    self.expect("type")
    name = Identifier(self.consume().text)
    self.expect("=")
    type_ann = self.parse_type()
    self._consume_semicolon()
    return TypeAliasDeclaration(id=name, type_annotation=type_ann)

  def parse_if(self) -> IfStatement:
    self.expect("if")
    test = self._parse_paren_expression()
    consequent = self.parse_statement()
    alternate = self.parse_statement() if self.eat("else") else None
    return IfStatement(test=test, consequent=consequent, alternate=alternate)

  def parse_for(self) -> Statement:
    self.expect("for")
    is_await = self.eat("await")
    self.expect("(")

    init: Optional[Union[VariableDeclaration, Expression]] = None
    if not self.at(";"):
      with self._allow_in(False):
        if self.peek().text in _DECLARATION_KEYWORDS and self.peek().kind == TokenKind.IDENTIFIER:
          init = self.parse_variable_declaration()
        else:
          init = self.parse_expression()

      if self.at("of") or self.at("in"):
        if isinstance(init, VariableDeclaration) and len(init.declarations) != 1:
          raise self.error("Invalid left-hand side in for-loop")
        is_of = self.consume().text == "of"
        right = self.parse_assignment() if is_of else self.parse_expression()
        self.expect(")")
        body = self.parse_statement()
        if is_of:
          return ForOfStatement(left=init, right=right, body=body, is_await=is_await)
        return ForInStatement(left=init, right=right, body=body)

    self.expect(";")
    test = None if self.at(";") else self.parse_expression()
    self.expect(";")
    update = None if self.at(")") else self.parse_expression()
    self.expect(")")
    return ForStatement(init=init, test=test, update=update, body=self.parse_statement())

  def parse_do_while(self) -> DoWhileStatement:
    self.expect("do")
    body = self.parse_statement()
    self.expect("while")
    test = self._parse_paren_expression()
    self.eat(";")
    return DoWhileStatement(body=body, test=test)

  def parse_return(self) -> ReturnStatement:
    self.expect("return")
    tk = self.peek()
    if self.at(";") or self.at("}") or tk.kind == TokenKind.EOF or tk.newline_before:
      self.eat(";")
      return ReturnStatement()
    argument = self.parse_expression()
    self._consume_semicolon()
    return ReturnStatement(argument=argument)

  def parse_jump(self) -> Statement:
    word = self.consume().text
    label = None
    if self._at_identifier() and not self.peek().newline_before:
      label = Identifier(self.consume().text)
    self._consume_semicolon()
    if word == "break":
      return BreakStatement(label=label)
    return ContinueStatement(label=label)

  def parse_throw(self) -> ThrowStatement:
    self.expect("throw")
    if self.peek().newline_before:
      raise self.error("Illegal newline after throw")
    argument = self.parse_expression()
    self._consume_semicolon()
    return ThrowStatement(argument=argument)

  def parse_try(self) -> TryStatement:
    self.expect("try")
    block = self.parse_block()
    handler = None
    finalizer = None

    if self.eat("catch"):
      param = None
      type_ann = None
      if self.eat("("):
        param = self.parse_binding_target()
        type_ann = self.parse_type() if self.eat(":") else None
        self.expect(")")
      handler = CatchClause(param=param, body=self.parse_block(), type_annotation=type_ann)

    if self.eat("finally"):
      finalizer = self.parse_block()

    if handler is None and finalizer is None:
      raise self.error("Missing catch or finally after try")
    return TryStatement(block=block, handler=handler, finalizer=finalizer)

  def parse_switch(self) -> SwitchStatement:
    self.expect("switch")
    discriminant = self._parse_paren_expression()
    self.expect("{")
    cases: List[SwitchCase] = []
    while not self.eat("}"):
      if self.eat("case"):
        test: Optional[Expression] = self.parse_expression()
      elif self.eat("default"):
        test = None
      else:
        raise self.error("Expected 'case' or 'default'")
      self.expect(":")
      consequent: List[Statement] = []
      while not (self.at("case") or self.at("default") or self.at("}")):
        if self._at_eof():
          raise self.error("Expected '}'")
        consequent.append(self.parse_statement())
      cases.append(SwitchCase(test=test, consequent=consequent))
    return SwitchStatement(discriminant=discriminant, cases=cases)

  def _parse_paren_expression(self) -> Expression:
    self.expect("(")
    with self._allow_in():
      expr = self.parse_expression()
    self.expect(")")
    return expr

  # --- Bindings ---

  def parse_binding_target(self) -> Union[Expression, Pattern]:
    if self.at("["):
      return self._parse_array_pattern()
    if self.at("{"):
      return self._parse_object_pattern()
    if not self._at_identifier():
      raise self.error("Expected binding name")
    return Identifier(self.consume().text)

  def _parse_binding_element(self) -> Union[Expression, Pattern]:
    target = self.parse_binding_target()
    if self.eat("="):
      return AssignmentPattern(left=target, right=self.parse_assignment())
    return target

  def _parse_array_pattern(self) -> ArrayPattern:
    self.expect("[")
    elements: List[Optional[Union[Expression, Pattern]]] = []
    while not self.eat("]"):
      if self.at(","):
        self.consume()
        elements.append(None)
        continue
      if self.eat("..."):
        elements.append(RestElement(argument=self.parse_binding_target()))
      else:
        elements.append(self._parse_binding_element())
      if not self.at("]"):
        self.expect(",")
    return ArrayPattern(elements=elements)

  def _parse_object_pattern(self) -> ObjectPattern:
    self.expect("{")
    properties: List[Union[PatternProperty, RestElement]] = []
    while not self.eat("}"):
      if self.eat("..."):
        properties.append(RestElement(argument=self.parse_binding_target()))
      else:
        key, computed = self._parse_property_key()
        if self.eat(":"):
          properties.append(PatternProperty(key=key, value=self._parse_binding_element(), computed=computed))
        else:
          if computed or not isinstance(key, Identifier) or key.name in RESERVED_WORDS:
            raise self.error("Expected ':' in object pattern")
          value: Union[Expression, Pattern] = Identifier(key.name)
          if self.eat("="):
            value = AssignmentPattern(left=value, right=self.parse_assignment())
          properties.append(PatternProperty(key=key, value=value, shorthand=True))
      if not self.at("}"):
        self.expect(",")
    return ObjectPattern(properties=properties)

  def parse_parameters(self) -> List[Parameter]:
    self.expect("(")
    params: List[Parameter] = []
    with self._allow_in():
      while not self.eat(")"):
        rest = self.eat("...")
        pattern = self.parse_binding_target()
        optional = self.eat("?")
        type_ann = self.parse_type() if self.eat(":") else None
        default = self.parse_assignment() if self.eat("=") else None
        params.append(
          Parameter(pattern=pattern, type_annotation=type_ann, optional=optional, default=default, rest=rest)
        )
        if not self.at(")"):
          self.expect(",")
    return params

  def _parse_property_key(self):
    """Parses an object/interface key. Returns `(key, computed)`."""
    tk = self.peek()
    if self.eat("["):
      with self._allow_in():
        key = self.parse_assignment()
      self.expect("]")
      return key, True
    if tk.kind == TokenKind.STRING:
      self.consume()
      return StringLiteral(value=decode_string(tk.text), raw=tk.text), False
    if tk.kind == TokenKind.NUMBER:
      self.consume()
      return NumericLiteral(raw=tk.text), False
    if tk.kind == TokenKind.IDENTIFIER:
      self.consume()
      return Identifier(tk.text), False
    raise self.error("Expected property name")

  # --- Expressions ---

  def parse_expression(self) -> Expression:
    expr = self.parse_assignment()
    if not self.at(","):
      return expr
    expressions = [expr]
    while self.eat(","):
      expressions.append(self.parse_assignment())
    return SequenceExpression(expressions=expressions)

  def parse_assignment(self) -> Expression:
    arrow = self._try_arrow_function()
    if arrow is not None:
      return arrow

    left = self.parse_conditional()
    tk = self.peek()
    if tk.kind == TokenKind.PUNCTUATOR and tk.text in ASSIGNMENT_OPERATORS:
      self.consume()
      if tk.text != "=" and isinstance(left, (ObjectExpression, ArrayExpression)):
        raise self.error("Invalid compound assignment target", tk)
      return AssignmentExpression(operator=tk.text, left=left, right=self.parse_assignment())
    return left

  def _try_arrow_function(self) -> Optional[ArrowFunctionExpression]:
    start = self.pos
    is_async = False

    if self.at("async") and not self.peek(1).newline_before:
      if self.at("(", 1) or (self._at_identifier(1) and self.at("=>", 2)):
        is_async = True
        self.consume()

    if self._at_identifier() and self.at("=>", 1) and not self.peek(1).newline_before:
      param = Parameter(pattern=Identifier(self.consume().text))
      self.consume()
      return ArrowFunctionExpression(params=[param], body=self._parse_arrow_body(), is_async=is_async)

    if self.at("("):
      try:
        params = self.parse_parameters()
        return_type = self.parse_type() if self.eat(":") else None
      except ScriptSyntaxError:
        self.pos = start
        return None
      if self.at("=>") and not self.peek().newline_before:
        self.consume()
        return ArrowFunctionExpression(
          params=params, body=self._parse_arrow_body(), is_async=is_async, return_type=return_type
        )

    self.pos = start
    return None

  def _parse_arrow_body(self) -> Union[BlockStatement, Expression]:
    if self.at("{"):
      return self._parse_function_body()
    return self.parse_assignment()

  def parse_conditional(self) -> Expression:
    test = self.parse_binary(0)
    if not self.eat("?"):
      return test
    with self._allow_in():
      consequent = self.parse_assignment()
    self.expect(":")
    alternate = self.parse_assignment()
    return ConditionalExpression(test=test, consequent=consequent, alternate=alternate)

  def _binary_operator(self) -> Optional[str]:
    tk = self.peek()
    if tk.kind == TokenKind.PUNCTUATOR and tk.text in BINARY_PRECEDENCE:
      return tk.text
    if tk.kind == TokenKind.IDENTIFIER and tk.text in ("instanceof", "in"):
      if tk.text == "in" and self._no_in:
        return None
      return tk.text
    return None

  def parse_binary(self, min_prec: int) -> Expression:
    left = self.parse_unary()
    while True:
      tk = self.peek()
      if tk.kind == TokenKind.IDENTIFIER and tk.text == "as" and not tk.newline_before:
        if _AS_PRECEDENCE < min_prec:
          break
        self.consume()
        left = AsExpression(expression=left, type_annotation=self.parse_type())
        continue

      op = self._binary_operator()
      if op is None:
        break
      prec = BINARY_PRECEDENCE[op]
      if prec < min_prec:
        break
      self.consume()
      right = self.parse_binary(prec if op == "**" else prec + 1)
      left = BinaryExpression(operator=op, left=left, right=right)
    return left

  def parse_unary(self) -> Expression:
    tk = self.peek()
    if tk.kind == TokenKind.PUNCTUATOR and tk.text in _UNARY_OPERATORS:
      self.consume()
      return UnaryExpression(operator=tk.text, argument=self.parse_unary())
    if tk.kind == TokenKind.IDENTIFIER and tk.text in _UNARY_KEYWORDS:
      self.consume()
      return UnaryExpression(operator=tk.text, argument=self.parse_unary())
    if tk.kind == TokenKind.PUNCTUATOR and tk.text in ("++", "--"):
      self.consume()
      return UpdateExpression(operator=tk.text, argument=self.parse_unary(), prefix=True)
    if tk.kind == TokenKind.IDENTIFIER and tk.text == "await":
      self.consume()
      return AwaitExpression(argument=self.parse_unary())
    return self.parse_postfix()

  def parse_postfix(self) -> Expression:
    expr = self.parse_call_member()
    tk = self.peek()
    if tk.kind == TokenKind.PUNCTUATOR and tk.text in ("++", "--") and not tk.newline_before:
      self.consume()
      return UpdateExpression(operator=tk.text, argument=expr, prefix=False)
    return expr

  def parse_call_member(self) -> Expression:
    if self.at("new"):
      expr = self.parse_new()
    else:
      expr = self.parse_primary()

    while True:
      tk = self.peek()
      if self.at("."):
        self.consume()
        expr = MemberExpression(object=expr, property=self._parse_member_name())
      elif self.at("?."):
        self.consume()
        if self.at("("):
          expr = CallExpression(callee=expr, arguments=self.parse_arguments(), optional=True)
        elif self.eat("["):
          expr = MemberExpression(object=expr, property=self._parse_computed_key(), computed=True, optional=True)
        else:
          expr = MemberExpression(object=expr, property=self._parse_member_name(), optional=True)
      elif self.at("["):
        self.consume()
        expr = MemberExpression(object=expr, property=self._parse_computed_key(), computed=True)
      elif self.at("(") or self._try_type_arguments():
        expr = CallExpression(callee=expr, arguments=self.parse_arguments())
      elif self.at("!") and not tk.newline_before:
        self.consume()
        expr = NonNullExpression(expression=expr)
      elif tk.kind == TokenKind.TEMPLATE and not tk.newline_before:
        raise self.error("Tagged templates are not supported")
      else:
        return expr

  def parse_new(self) -> Expression:
    self.expect("new")
    if self.at("new"):
      callee = self.parse_new()
    else:
      callee = self.parse_primary()
    while True:
      if self.eat("."):
        callee = MemberExpression(object=callee, property=self._parse_member_name())
      elif self.eat("["):
        callee = MemberExpression(object=callee, property=self._parse_computed_key(), computed=True)
      else:
        break
    self._try_type_arguments()
    arguments = self.parse_arguments() if self.at("(") else None
    return NewExpression(callee=callee, arguments=arguments)

  def _try_type_arguments(self) -> bool:
    """
    Skips a `<T, ...>` list when an argument list follows it.

    Otherwise the position and any split `>>` tokens are restored so `<`
    is read as a comparison.

    Returns:
        bool: True if type arguments were consumed and `(` is next.
    """
    if not self.at("<"):
      return False
    start = self.pos
    saved = list(self.tokens)
    try:
      self.consume()
      while True:
        self.parse_type()
        if not self.eat(","):
          break
      self._split_angle()
      self.expect(">")
      if self.at("("):
        return True
    except ScriptSyntaxError:
      pass
    self.pos = start
    self.tokens = saved
    return False

  def _parse_member_name(self) -> Expression:
    if self.eat("#"):
      return PrivateName(self._expect_name())
    return Identifier(self._expect_name())

  def _expect_name(self) -> str:
    tk = self.peek()
    if tk.kind != TokenKind.IDENTIFIER:
      raise self.error("Expected property name")
    return self.consume().text

  def _parse_computed_key(self) -> Expression:
    with self._allow_in():
      key = self.parse_expression()
    self.expect("]")
    return key

  def parse_arguments(self) -> List[Expression]:
    self.expect("(")
    arguments: List[Expression] = []
    with self._allow_in():
      while not self.eat(")"):
        if self.eat("..."):
          arguments.append(SpreadElement(argument=self.parse_assignment()))
        else:
          arguments.append(self.parse_assignment())
        if not self.at(")"):
          self.expect(",")
    return arguments

  def parse_primary(self) -> Expression:
    tk = self.peek()

    if tk.kind == TokenKind.NUMBER:
      self.consume()
      return NumericLiteral(raw=tk.text)
    if tk.kind == TokenKind.STRING:
      self.consume()
      return StringLiteral(value=decode_string(tk.text), raw=tk.text)
    if tk.kind == TokenKind.TEMPLATE:
      self.consume()
      return self._parse_template(tk)

    if tk.kind == TokenKind.IDENTIFIER:
      word = tk.text
      if word == "function":
        return self._parse_function_expression()
      if word == "async" and self.at("function", 1) and not self.peek(1).newline_before:
        self.consume()
        return self._parse_function_expression(is_async=True)
      if word == "this":
        self.consume()
        return ThisExpression()
      if word in ("true", "false"):
        self.consume()
        return BooleanLiteral(value=word == "true")
      if word == "null":
        self.consume()
        return NullLiteral()
      if word in RESERVED_WORDS:
        raise self.error("Unexpected keyword")
      self.consume()
      return Identifier(word)

    if tk.kind == TokenKind.PUNCTUATOR:
      if tk.text == "(":
        self.consume()
        with self._allow_in():
          expr = self.parse_expression()
        self.expect(")")
        return ParenthesizedExpression(expression=expr)
      if tk.text == "[":
        return self._parse_array_literal()
      if tk.text == "{":
        return self._parse_object_literal()

    raise self.error("Unexpected token")

  def _parse_function_expression(self, is_async: bool = False) -> FunctionExpression:
    self.expect("function")
    if self.at("*"):
      raise self.error("Generator functions are not supported")
    name = Identifier(self.consume().text) if self._at_identifier() else None
    params = self.parse_parameters()
    return_type = self.parse_type() if self.eat(":") else None
    body = self._parse_function_body()
    return FunctionExpression(id=name, params=params, body=body, is_async=is_async, return_type=return_type)

  def _parse_template(self, token: Token) -> TemplateLiteral:
    quasis, sources = split_template(token.text)
    expressions: List[Expression] = []
    for source in sources:
      sub = ScriptParser(source)
      expressions.append(sub.parse_expression())
      if not sub._at_eof():
        raise self.error("Invalid template substitution", token)
    return TemplateLiteral(quasis=quasis, expressions=expressions)

  def _parse_array_literal(self) -> ArrayExpression:
    self.expect("[")
    elements: List[Optional[Expression]] = []
    with self._allow_in():
      while not self.eat("]"):
        if self.at(","):
          self.consume()
          elements.append(None)
          continue
        if self.eat("..."):
          elements.append(SpreadElement(argument=self.parse_assignment()))
        else:
          elements.append(self.parse_assignment())
        if not self.at("]"):
          self.expect(",")
    return ArrayExpression(elements=elements)

  def _parse_object_literal(self) -> ObjectExpression:
    self.expect("{")
    properties: List[Union[Property, SpreadElement]] = []
    with self._allow_in():
      while not self.eat("}"):
        if self.eat("..."):
          properties.append(SpreadElement(argument=self.parse_assignment()))
        else:
          key, computed = self._parse_property_key()
          if self.eat(":"):
            properties.append(Property(key=key, value=self.parse_assignment(), computed=computed))
          elif self.at("("):
            raise self.error("Method shorthand is not supported")
          else:
            if computed or not isinstance(key, Identifier) or key.name in RESERVED_WORDS:
              raise self.error("Expected ':' in object literal")
            properties.append(Property(key=key, value=Identifier(key.name), shorthand=True))
        if not self.at("}"):
          self.expect(",")
    return ObjectExpression(properties=properties)

  # --- Types ---

  def parse_type(self) -> TypeNode:
    self.eat("|")
    first = self._parse_intersection_type()
    if not self.at("|"):
      return first
    types = [first]
    while self.eat("|"):
      types.append(self._parse_intersection_type())
    return UnionType(types=types)

  def _parse_intersection_type(self) -> TypeNode:
    first = self._parse_array_type()
    if not self.at("&"):
      return first
    types = [first]
    while self.eat("&"):
      types.append(self._parse_array_type())
    return IntersectionType(types=types)

  def _parse_array_type(self) -> TypeNode:
    node = self._parse_primary_type()
    while self.at("[") and self.at("]", 1) and not self.peek().newline_before:
      self.consume()
      self.consume()
      node = ArrayType(element_type=node)
    return node

  def _parse_primary_type(self) -> TypeNode:
    tk = self.peek()

    if self.at("("):
      fn_type = self._try_function_type()
      if fn_type is not None:
        return fn_type
      self.consume()
      inner = self.parse_type()
      self.expect(")")
      return ParenthesizedType(type_annotation=inner)
    if self.at("{"):
      return TypeLiteral(members=self.parse_type_members())
    if self.eat("["):
      elements: List[TypeNode] = []
      while not self.eat("]"):
        elements.append(self.parse_type())
        if not self.at("]"):
          self.expect(",")
      return TupleType(element_types=elements)
    if tk.kind == TokenKind.STRING:
      self.consume()
      return LiteralType(literal=StringLiteral(value=decode_string(tk.text), raw=tk.text))
    if tk.kind == TokenKind.NUMBER:
      self.consume()
      return LiteralType(literal=NumericLiteral(raw=tk.text))
    if self.at("-") and self.peek(1).kind == TokenKind.NUMBER:
      self.consume()
      return LiteralType(literal=UnaryExpression(operator="-", argument=NumericLiteral(raw=self.consume().text)))
    if tk.kind == TokenKind.IDENTIFIER:
      if tk.text in ("true", "false"):
        self.consume()
        return LiteralType(literal=BooleanLiteral(value=tk.text == "true"))
      if tk.text in KEYWORD_TYPES and not self.at(".", 1):
        self.consume()
        return KeywordType(kind=tk.text)
      if tk.text not in RESERVED_WORDS:
        return self._parse_type_reference()
    raise self.error("Expected type")

  def _parse_type_reference(self) -> TypeReference:
    if not self._at_identifier():
      raise self.error("Expected type name")
    name: Union[Identifier, QualifiedName] = Identifier(self.consume().text)
    while self.eat("."):
      name = QualifiedName(left=name, right=Identifier(self._expect_name()))
    arguments: List[TypeNode] = []
    if self.at("<") and not self.peek().newline_before:
      self.consume()
      while True:
        arguments.append(self.parse_type())
        if not self.eat(","):
          break
      self._split_angle()
      self.expect(">")
    return TypeReference(name=name, type_arguments=arguments)

  def _try_function_type(self) -> Optional[FunctionType]:
    start = self.pos
    try:
      params = self.parse_parameters()
    except ScriptSyntaxError:
      self.pos = start
      return None
    if not self.eat("=>"):
      self.pos = start
      return None
    return FunctionType(params=params, return_type=self.parse_type())

  def parse_type_members(self) -> List[InterfaceMember]:
    self.expect("{")
    members: List[InterfaceMember] = []
    while not self.eat("}"):
      if self._at_eof():
        raise self.error("Expected '}'")
      members.append(self._parse_type_member())
      if self.eat(";") or self.eat(","):
        continue
      if not self.at("}") and not self.peek().newline_before:
        raise self.error("Expected ';'")
    return members

  def _parse_type_member(self) -> InterfaceMember:
    readonly = False
    if self.at("readonly"):
      nxt = self.peek(1)
      if nxt.kind in (TokenKind.IDENTIFIER, TokenKind.STRING, TokenKind.NUMBER) or self.at("[", 1):
        self.consume()
        readonly = True

    if self.at("[") and self._at_identifier(1) and self.at(":", 2):
      self.consume()
      name = Identifier(self.consume().text)
      self.consume()
      key_type = self.parse_type()
      self.expect("]")
      value_type = self.parse_type() if self.eat(":") else None
      return IndexSignature(
        parameter=Parameter(pattern=name, type_annotation=key_type), type_annotation=value_type, readonly=readonly
      )

    key, computed = self._parse_property_key()
    optional = self.eat("?")
    if self.at("("):
      params = self.parse_parameters()
      return_type = self.parse_type() if self.eat(":") else None
      return MethodSignature(key=key, params=params, return_type=return_type, computed=computed, optional=optional)

    type_ann = self.parse_type() if self.eat(":") else None
    return PropertySignature(key=key, type_annotation=type_ann, computed=computed, optional=optional, readonly=readonly)


def parse_script(code: str) -> Module:
  """
  Convenience wrapper: parses `code` into a `Module`.

  Args:
      code (str): Script source text.

  Returns:
      Module: The syntax tree.

  Raises:
      ScriptSyntaxError: If the source cannot be parsed.
  """
  return ScriptParser(code).parse()
