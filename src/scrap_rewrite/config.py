"""
Runtime Configuration Store.

Holds the names the rewrite injects into scripts (runtime context value,
interrupt sentinel, synthetic catch binding, host operation names) and loads
project overrides from `pyproject.toml` under `[tool.scrap_rewrite]`.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from scrap_rewrite.utils.identifiers import is_dotted_identifier, is_identifier

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the rewrite engine.
  """

  context_name: str = Field("self", description="Identifier of the runtime context value injected into calls.")
  interrupt_error: str = Field(
    "Scrap.StopError", description="Dotted reference to the sentinel interrupt error rethrown by catch guards."
  )
  error_binding: str = Field("__error__", description="Binding synthesized for `catch` clauses without one.")
  pure_builtins: List[str] = Field(
    default_factory=lambda: ["String", "Number"],
    description="Bare callee names that are awaited but receive no context argument.",
  )
  inject_context_into_method_calls: bool = Field(
    True, description="If False, calls through a member access (`obj.f()`) do not receive the context argument."
  )
  delay_method: str = Field("delay", description="Context operation awaited at the top of every loop iteration.")
  declare_method: str = Field("declareVariable", description="Context operation that declares interface variables.")

  @field_validator("context_name", "error_binding", "delay_method", "declare_method")
  @classmethod
  def validate_identifier(cls, v: str) -> str:
    """
    Ensures injected names are usable as plain identifiers.

    Args:
        v (str): The configured name.

    Returns:
        str: The name, stripped of surrounding whitespace.

    Raises:
        ValueError: If the name is empty, reserved or not identifier-shaped.
    """
    v_clean = v.strip()
    if not is_identifier(v_clean):
      raise ValueError(f"Not a valid identifier: '{v}'")
    return v_clean

  @field_validator("interrupt_error")
  @classmethod
  def validate_reference(cls, v: str) -> str:
    """
    Ensures the sentinel is a dotted reference like `Scrap.StopError`.

    Raises:
        ValueError: If any segment is not identifier-shaped.
    """
    v_clean = v.strip()
    if not is_dotted_identifier(v_clean):
      raise ValueError(f"Not a valid dotted reference: '{v}'")
    return v_clean

  @classmethod
  def load(
    cls,
    context_name: Optional[str] = None,
    interrupt_error: Optional[str] = None,
    error_binding: Optional[str] = None,
    pure_builtins: Optional[List[str]] = None,
    inject_context_into_method_calls: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        context_name (Optional[str]): Override for the runtime context identifier.
        interrupt_error (Optional[str]): Override for the interrupt sentinel.
        error_binding (Optional[str]): Override for the synthesized catch binding.
        pure_builtins (Optional[List[str]]): Override for context-free callees.
        inject_context_into_method_calls (Optional[bool]): Override for method call injection.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    known = set(cls.model_fields)
    values: Dict[str, Any] = {k: v for k, v in toml_config.items() if k in known}

    overrides = {
      "context_name": context_name,
      "interrupt_error": interrupt_error,
      "error_binding": error_binding,
      "pure_builtins": pure_builtins,
      "inject_context_into_method_calls": inject_context_into_method_calls,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory definition was found in.
  """
  current = start_path.resolve()
  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None
      tool_section = data.get("tool", {})
      return tool_section.get("scrap_rewrite", {}), parent

  return {}, None
