"""
Type Tag Mapper.

Maps a type-annotation node to the ordered list of primitive type tags the
host runtime understands (`number`, `boolean`, `string`, `void`, `array`,
`any`, or the name of a referenced type). The mapping is total: every shape
yields at least one tag.
"""

from typing import List, Optional

from scrap_rewrite.core.script.nodes import (
  ArrayType,
  Identifier,
  KeywordType,
  ParenthesizedType,
  TypeNode,
  TypeReference,
  UnionType,
)

ANY = "any"

KEYWORD_TAGS = {
  "number": "number",
  "boolean": "boolean",
  "string": "string",
  "void": "void",
}


def map_type(node: Optional[TypeNode]) -> List[str]:
  """
  Maps a type annotation to its tags.

  Unions are flattened left-to-right without de-duplication, parenthesized
  types map to their inner type, and a missing annotation maps to `["any"]`.

  Args:
      node (Optional[TypeNode]): The annotation, or None when absent.

  Returns:
      List[str]: Non-empty ordered list of tags.
  """
  if isinstance(node, KeywordType):
    return [KEYWORD_TAGS.get(node.kind, ANY)]
  if isinstance(node, ArrayType):
    return ["array"]
  if isinstance(node, ParenthesizedType):
    return map_type(node.type_annotation)
  if isinstance(node, UnionType):
    tags: List[str] = []
    for member in node.types:
      tags.extend(map_type(member))
    return tags or [ANY]
  if isinstance(node, TypeReference) and isinstance(node.name, Identifier):
    return [node.name.name]
  return [ANY]
