"""
Tests for Call Rewriting.

Verifies:
1.  Every call is awaited and receives the context value first.
2.  Pure builtins (`String`, `Number`) are awaited without context.
3.  Method calls follow `inject_context_into_method_calls`.
4.  Nested and chained calls are rewritten inside-out.
5.  `new` expressions are untouched.
"""

import pytest


@pytest.mark.parametrize(
  "code, expected",
  [
    ("foo(1, 2);", "await foo(self, 1, 2);\n"),
    ("foo();", "await foo(self);\n"),
    ("String(x);", "await String(x);\n"),
    ("Number(x);", "await Number(x);\n"),
    ("f(...args);", "await f(self, ...args);\n"),
    ("obj.move(10);", "await obj.move(self, 10);\n"),
    ("a(b());", "await a(self, await b(self));\n"),
    ("a.b().c();", "await (await a.b(self)).c(self);\n"),
    ("(g || h)(1);", "await (g || h)(self, 1);\n"),
    ("new Foo(1);", "new Foo(1);\n"),
    ("f<number>(1);", "await f(self, 1);\n"),
    ("obj.get<Costume>(x);", "await obj.get(self, x);\n"),
    ("new Map<string, number>();", "new Map();\n"),
    ("a < b > c;", "a < b > c;\n"),
    ("let n = Number(s) + 1;", "let n = await Number(s) + 1;\n"),
  ],
)
def test_call_rewrite(rewrite, code, expected):
  assert rewrite(code) == expected


def test_call_inside_function(rewrite):
  assert rewrite("function f() { foo(1, 2); }") == "async function f() {\n    await foo(self, 1, 2);\n}\n"


def test_custom_context_name(rewrite):
  assert rewrite("f();", context_name="ctx") == "await f(ctx);\n"


def test_method_calls_without_context(rewrite):
  assert rewrite("obj.move(10);", inject_context_into_method_calls=False) == "await obj.move(10);\n"
  # Bare callees still receive it.
  assert rewrite("move(10);", inject_context_into_method_calls=False) == "await move(self, 10);\n"


def test_custom_pure_builtins(rewrite):
  assert rewrite("Math(x); String(x);", pure_builtins=["Math"]) == "await Math(x);\nawait String(self, x);\n"


def test_template_substitution_calls(rewrite):
  assert rewrite("say(`hi ${name()}`);") == "await say(self, `hi ${await name(self)}`);\n"


def test_rewrite_is_not_idempotent(rewrite):
  once = rewrite("f();")
  assert rewrite(once) == "await await f(self, self);\n"
