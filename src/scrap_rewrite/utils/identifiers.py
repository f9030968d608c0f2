"""
Identifier Validation and Escaping.

Helpers for turning arbitrary user text (sprite names, variable names typed
into the editor) into identifiers that are safe to emit into script source,
and for validating names supplied through configuration.
"""

import re

# Words that may not be used as generated identifiers: the script keywords
# plus the globals the host runtime installs.
RESERVED = frozenset(
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
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
    "enum",
    "implements",
    "interface",
    "let",
    "package",
    "private",
    "protected",
    "public",
    "static",
    "await",
    "null",
    "true",
    "false",
    "arguments",
    "Scrap",
    "Color",
    "$",
  }
)

_BAD_CHARS = re.compile(r"(^[^a-zA-Z_])|([^a-zA-Z_0-9])")

_JOINERS = ("\u200c", "\u200d")


def escape_identifier(text: str) -> str:
  """
  Maps arbitrary text onto a valid, non-reserved identifier.

  Every character outside `[a-zA-Z_0-9]` (and a leading digit) is replaced by
  `$<code point>$`. A result that collides with a reserved word is wrapped
  as `$word$`.

  Args:
      text (str): Raw user text, e.g. `"my sprite"`.

  Returns:
      str: The escaped identifier, e.g. `"my$32$sprite"`.
  """
  result = _BAD_CHARS.sub(lambda mo: f"${ord(mo.group(0))}$", text)
  if result in RESERVED:
    return f"${result}$"
  return result


def is_identifier(value: str) -> bool:
  """
  Checks whether `value` can be used verbatim as a script identifier.

  Args:
      value (str): Candidate name.

  Returns:
      bool: True if non-empty, not reserved and made of identifier characters.
  """
  if value in RESERVED:
    return False
  return _is_name(value)


def _is_name(value: str) -> bool:
  if not value:
    return False
  head, tail = value[0], value[1:]
  if head not in "$_" and not head.isidentifier():
    return False
  return all(ch == "$" or ch in _JOINERS or ("_" + ch).isidentifier() for ch in tail)


def is_dotted_identifier(value: str) -> bool:
  """
  Checks a dotted reference such as `Scrap.StopError`.

  Every segment must be identifier-shaped. Host globals (`Scrap`, `Color`)
  are accepted as the root even though they are reserved for generated names.
  """
  parts = value.split(".")
  if not all(_is_name(p) for p in parts):
    return False
  return parts[0] not in RESERVED or parts[0] in ("Scrap", "Color", "$")
