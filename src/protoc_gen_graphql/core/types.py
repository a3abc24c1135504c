"""
Protobuf kind -> GraphQL type mapping.
"""

from __future__ import annotations

from typing import Optional

from .defs import Kind
from .utils import is_id_name


SCALARS = frozenset({"Int", "Float", "String", "Boolean", "ID"})

_KIND_TO_SCALAR = {
    Kind.INT32: "Int",
    Kind.INT64: "Int",
    Kind.UINT32: "Int",
    Kind.UINT64: "Int",
    Kind.SINT32: "Int",
    Kind.SINT64: "Int",
    Kind.FIXED32: "Int",
    Kind.FIXED64: "Int",
    Kind.SFIXED32: "Int",
    Kind.SFIXED64: "Int",
    Kind.FLOAT: "Float",
    Kind.DOUBLE: "Float",
    Kind.BOOL: "Boolean",
    Kind.STRING: "String",
    Kind.BYTES: "String",  # base64 encoded
    Kind.ENUM: "String",
}


def decorate(base: str, is_repeated: bool, is_required: bool) -> str:
    """
    Apply list and non-null decorations to a base type name.

    Examples:
        decorate("Int", False, True) -> "Int!"
        decorate("Product", True, True) -> "[Product]!"
    """
    type_str = f"[{base}]" if is_repeated else base
    return f"{type_str}!" if is_required else type_str


def scalar_for_kind(kind: Kind, field_name: Optional[str] = None) -> str:
    """
    Get the GraphQL scalar for a field kind.

    String fields with identifier-shaped names map to ID. Unknown kinds
    (and MESSAGE/GROUP, which the builder resolves by name) fall back to
    String.
    """
    if kind == Kind.STRING and field_name is not None and is_id_name(field_name):
        return "ID"
    return _KIND_TO_SCALAR.get(kind, "String")


def map_kind(
    kind: Kind,
    is_repeated: bool,
    is_required: bool,
    *,
    field_name: Optional[str] = None,
) -> str:
    """
    Map a field kind to a decorated GraphQL type string.

    Args:
        kind: Field kind
        is_repeated: Wrap in a list
        is_required: Append non-null marker
        field_name: Original field name, used for the ID heuristic

    Returns:
        GraphQL type string, e.g. "String", "[Int]!", "ID!"
    """
    return decorate(scalar_for_kind(kind, field_name), is_repeated, is_required)


def is_scalar(type_name: str) -> bool:
    """Check if a type name is a built-in GraphQL scalar."""
    return type_name in SCALARS


def base_type_name(type_str: str) -> str:
    """
    Strip list and non-null decorations from a type string.

    Examples:
        "[Product!]!" -> "Product"
        "ID!" -> "ID"
    """
    type_str = type_str.strip()
    while type_str.endswith("!") or (type_str.startswith("[") and type_str.endswith("]")):
        if type_str.endswith("!"):
            type_str = type_str[:-1]
        else:
            type_str = type_str[1:-1]
        type_str = type_str.strip()
    return type_str


def validate_type(type_str: str) -> Optional[str]:
    """
    Check that a decorated type string is well formed.

    Returns:
        Error message, or None if valid
    """
    if not type_str:
        return "type name cannot be empty"
    if type_str.count("[") != type_str.count("]"):
        return f"unbalanced list brackets in '{type_str}'"
    base = base_type_name(type_str)
    if not base:
        return f"missing base type in '{type_str}'"
    if not (base[0].isalpha() or base[0] == "_") or not base.replace("_", "").isalnum():
        return f"invalid type name '{base}'"
    return None
