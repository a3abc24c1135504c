"""
Utility functions for protoc-gen-graphql.

Includes:
- Case conversion (snake_case <-> camelCase <-> PascalCase)
- Comment cleaning
- GraphQL identifier sanitization
"""

from __future__ import annotations

import re


# =============================================================================
# Case conversion utilities
# =============================================================================

# Pre-compiled regex patterns for better performance
_ACRONYM_BOUNDARY_PATTERN = re.compile(r'([A-Z]+)([A-Z][a-z])')
_CAMEL_BOUNDARY_PATTERN = re.compile(r'([a-z0-9])([A-Z])')
_SNAKE_TO_CAMEL_PATTERN = re.compile(r'_+([a-zA-Z0-9])')
_SEPARATOR_PATTERN = re.compile(r'[\s\-.]+')
_INVALID_NAME_CHARS = re.compile(r'[^A-Za-z0-9_]')


def lower_first(name: str) -> str:
    """
    Lowercase the first character, leave the rest unchanged.

    Examples:
        GetProduct -> getProduct
        HTTPStatus -> hTTPStatus
    """
    return name[0].lower() + name[1:] if name else name


def upper_first(name: str) -> str:
    """Uppercase the first character, leave the rest unchanged."""
    return name[0].upper() + name[1:] if name else name


def to_snake_case(name: str) -> str:
    """
    Convert camelCase or PascalCase to snake_case.

    Examples:
        productId -> product_id
        GetProductRequest -> get_product_request
        HTTPResponse -> http_response
        getHTTPResponseCode -> get_http_response_code
        order2Item -> order2_item
    """
    result = _SEPARATOR_PATTERN.sub('_', name.strip())
    # Handle consecutive uppercase (HTTPResponse -> HTTP_Response)
    result = _ACRONYM_BOUNDARY_PATTERN.sub(r'\1_\2', result)
    # Handle lowercase/digit followed by uppercase
    result = _CAMEL_BOUNDARY_PATTERN.sub(r'\1_\2', result)
    return result.lower()


def to_camel_case(name: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        product_id -> productId
        created_at -> createdAt
        ProductId -> productId
    """
    def replace_underscore(match):
        return match.group(1).upper()

    camel = _SNAKE_TO_CAMEL_PATTERN.sub(replace_underscore, _SEPARATOR_PATTERN.sub('_', name.strip()).strip('_'))
    return lower_first(camel)


def to_pascal_case(name: str) -> str:
    """
    Convert snake_case or camelCase to PascalCase.

    Examples:
        product_id -> ProductId
        orderItem -> OrderItem
    """
    return upper_first(to_camel_case(name))


# =============================================================================
# Comments
# =============================================================================

# One leading delimiter token, only when followed by whitespace or end of line
_COMMENT_DELIMITER_PATTERN = re.compile(r"^(?://+|/\*+|\*+/|\*|#)(?=\s|$)")


def clean_comment(comment: str) -> str:
    """
    Clean a source comment into single-spaced prose.

    Strips one comment delimiter token (`//`, `/*`, `*`, `#`) and the
    surrounding whitespace from every line, drops empty lines, and joins
    the continuation lines with single spaces. Text such as `#1` or
    `*emphasis*` is kept.

    Example:
        " Product returned by\\n // the catalog.\\n" -> "Product returned by the catalog."
    """
    if not comment:
        return ""

    parts = []
    for line in comment.splitlines():
        line = _COMMENT_DELIMITER_PATTERN.sub("", line.strip(), count=1).strip()
        if line.endswith("*/"):
            line = line[:-2].rstrip()
        if line:
            parts.append(line)
    return " ".join(parts)


# =============================================================================
# GraphQL names
# =============================================================================


def sanitize_type_name(name: str) -> str:
    """
    Make a name usable as a GraphQL type name.

    Uppercases the first character and removes characters outside
    [A-Za-z0-9_].
    """
    name = _INVALID_NAME_CHARS.sub('', upper_first(name))
    if name and name[0].isdigit():
        name = f"_{name}"
    return name


def sanitize_field_name(name: str) -> str:
    """
    Make a proto field name usable as a GraphQL field name (camelCase).

    Examples:
        product_id -> productId
        Price -> price
    """
    name = _INVALID_NAME_CHARS.sub('', to_camel_case(name))
    if name and name[0].isdigit():
        name = f"_{name}"
    return name


def is_key_name(name: str) -> bool:
    """
    Check whether a field name follows the foreign/primary key pattern.

    True for snake_case names ending in `_id` and camelCase names ending in `Id`.
    """
    return (name.endswith("_id") and len(name) > 3) or (name.endswith("Id") and len(name) > 2)


def is_id_name(name: str) -> bool:
    """Check whether a field name is identifier-shaped (`id`, `*_id`, `*Id`)."""
    return name.lower() == "id" or is_key_name(name)
