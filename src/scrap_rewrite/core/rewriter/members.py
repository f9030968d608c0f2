"""
Member Key Reader.

Resolves the static name of a property access so that `obj.foo` and
`obj["foo"]` are treated alike, while dynamic keys (`obj[k]`) and private
names (`obj.#foo`) never resolve.
"""

from typing import Optional

from scrap_rewrite.core.script.nodes import Identifier, MemberExpression, StringLiteral


def get_property(node: MemberExpression) -> Optional[str]:
  """
  Extracts the accessed property name.

  Args:
      node (MemberExpression): The access expression.

  Returns:
      Optional[str]: The static name, or None for dynamic/private keys.
  """
  prop = node.property
  if node.computed:
    return prop.value if isinstance(prop, StringLiteral) else None
  if isinstance(prop, Identifier):
    return prop.name
  return None


def is_property(node: MemberExpression, name: str) -> bool:
  """Checks whether `node` statically accesses the property `name`."""
  return get_property(node) == name
