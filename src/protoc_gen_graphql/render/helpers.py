"""
Helper functions exposed to schema templates.

Every helper is registered both as a Jinja2 global and as a filter, so
templates can write `{{ pascal(name) }}` or `{{ name | pascal }}`.

String helpers:
    pascal, camel, snake, lower_first   case conversion
    trim                                strip surrounding whitespace
    trim_prefix, trim_suffix            remove a prefix/suffix if present
    has_prefix, has_suffix              prefix/suffix tests
    gql_string                          quote a value as a GraphQL string

Schema helpers:
    lookup(schema, name)                type, input or enum by name
    has_field_with_suffix(type, suffix) any field name ending in suffix
    id_field_name(type)                 key field, else first id-shaped field
    is_id_name(name)                    `id`, `*_id`, `*Id`

SDL helpers (used by the default template):
    description(comment, indent)        block string description, or ""
    field_comment(field)                comment plus computed-from note
    arguments(field)                    "(input: XInput!)" or ""
    type_directives(type)               " @key(fields: ...)" or ""
    field_directives(field)             " @external", " @requires(...)"
    federation_imports(schema)          directives to import via @link
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional, Union

from ..core.schema import Enum, Field, Input, Schema, Type
from ..core.utils import (
    is_id_name,
    lower_first,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
)


# =============================================================================
# String helpers
# =============================================================================


def trim(value: str) -> str:
    return value.strip()


def trim_prefix(value: str, prefix: str) -> str:
    return value[len(prefix):] if prefix and value.startswith(prefix) else value


def trim_suffix(value: str, suffix: str) -> str:
    return value[: -len(suffix)] if suffix and value.endswith(suffix) else value


def has_prefix(value: str, prefix: str) -> bool:
    return value.startswith(prefix)


def has_suffix(value: str, suffix: str) -> bool:
    return value.endswith(suffix)


def gql_string(value: Any) -> str:
    """Quote a value as a GraphQL string literal."""
    return json.dumps(str(value), ensure_ascii=False)


# =============================================================================
# Schema helpers
# =============================================================================


def lookup(schema: Schema, name: str) -> Optional[Union[Type, Input, Enum]]:
    return schema.lookup(name)


def has_field_with_suffix(gql_type: Union[Type, Input], suffix: str) -> bool:
    return any(f.name.endswith(suffix) for f in gql_type.fields)


def id_field_name(gql_type: Union[Type, Input]) -> str:
    """Name of the field identifying a type: the key field, else the first id-shaped one."""
    key_fields = getattr(gql_type, "key_fields", "")
    if key_fields:
        return key_fields
    for f in gql_type.fields:
        if is_id_name(f.name):
            return f.name
    return ""


# =============================================================================
# SDL helpers
# =============================================================================


def description(comment: str, indent: str = "") -> str:
    """
    Render a comment as an SDL block string description.

    Returns an empty string for empty comments, otherwise the block string
    followed by a newline, ready to prefix a definition line.
    """
    if not comment:
        return ""
    text = comment.strip().replace('"""', '\\"""')
    return f'{indent}"""\n{indent}{text}\n{indent}"""\n'


def field_comment(gql_field: Field) -> str:
    if not gql_field.computed_from:
        return gql_field.comment
    note = f"Computed from: {gql_field.computed_from}"
    return f"{gql_field.comment} ({note})" if gql_field.comment else note


def arguments(gql_field: Field) -> str:
    if not gql_field.inputs:
        return ""
    return "(" + ", ".join(f"input: {i.name}!" for i in gql_field.inputs) + ")"


def type_directives(gql_type: Type) -> str:
    if gql_type.is_federated_entity and gql_type.key_fields:
        return f" @key(fields: {gql_string(gql_type.key_fields)})"
    return ""


def field_directives(gql_field: Field) -> str:
    directives = []
    if gql_field.is_external:
        directives.append("@external")
    if gql_field.requires:
        directives.append(f"@requires(fields: {gql_string(gql_field.requires)})")
    return "".join(f" {d}" for d in directives)


def federation_imports(schema: Schema) -> list[str]:
    """Federation directives used by the schema, in a fixed order."""
    fields = [f for t in schema.types for f in t.fields]
    imports = []
    if schema.entities:
        imports.append("@key")
    if any(f.is_external for f in fields):
        imports.append("@external")
    if any(f.requires for f in fields):
        imports.append("@requires")
    return imports


HELPERS: dict[str, Callable[..., Any]] = {
    "pascal": to_pascal_case,
    "camel": to_camel_case,
    "snake": to_snake_case,
    "lower_first": lower_first,
    "trim": trim,
    "trim_prefix": trim_prefix,
    "trim_suffix": trim_suffix,
    "has_prefix": has_prefix,
    "has_suffix": has_suffix,
    "gql_string": gql_string,
    "lookup": lookup,
    "has_field_with_suffix": has_field_with_suffix,
    "id_field_name": id_field_name,
    "is_id_name": is_id_name,
    "description": description,
    "field_comment": field_comment,
    "arguments": arguments,
    "type_directives": type_directives,
    "field_directives": field_directives,
    "federation_imports": federation_imports,
}
