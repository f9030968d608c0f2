"""
Tests for identifier escaping and validation.
"""

import pytest
from hypothesis import given, strategies as st

from scrap_rewrite.utils.identifiers import escape_identifier, is_dotted_identifier, is_identifier


@pytest.mark.parametrize(
  "text, expected",
  [
    ("ok_name", "ok_name"),
    ("my sprite", "my$32$sprite"),
    ("1abc", "$49$abc"),
    ("été", "$233$t$233$"),
    ("class", "$class$"),
    ("Scrap", "$Scrap$"),
    ("a-b", "a$45$b"),
  ],
)
def test_escape_identifier(text, expected):
  assert escape_identifier(text) == expected


@pytest.mark.parametrize(
  "value, expected",
  [
    ("self", True),
    ("$x", True),
    ("_", True),
    ("été", True),
    ("a1", True),
    ("class", False),
    ("await", False),
    ("", False),
    ("1a", False),
    ("a-b", False),
    ("a.b", False),
  ],
)
def test_is_identifier(value, expected):
  assert is_identifier(value) is expected


@pytest.mark.parametrize(
  "value, expected",
  [
    ("Scrap.StopError", True),
    ("Color.RED", True),
    ("host", True),
    ("a..b", False),
    ("class.X", False),
    ("a.1", False),
  ],
)
def test_is_dotted_identifier(value, expected):
  assert is_dotted_identifier(value) is expected


@given(st.text(min_size=1))
def test_escaped_text_is_always_an_identifier(text):
  assert is_identifier(escape_identifier(text))


@given(st.from_regex(r"[a-zA-Z_][a-zA-Z0-9_]{0,10}", fullmatch=True))
def test_plain_names_escape_to_themselves_unless_reserved(name):
  escaped = escape_identifier(name)
  assert escaped == name or escaped == f"${name}$"
