"""
Custom descriptor options, looked up by extension field number.

protoc hands plugins the options of a message or field as `MessageOptions` /
`FieldOptions`. Extensions the plugin was not compiled against (such as
`metadata.v1.entity`) are kept by the protobuf runtime as unknown fields,
so they are read through `UnknownFieldSet` instead of a generated
extension module.

Usage:
    options = OptionSet(field_proto.options)
    options.get_bool(KEY_OPTION)      # True / False / None when absent
"""

from __future__ import annotations

from typing import Any, Optional

from google.protobuf.message import Message
from google.protobuf.unknown_fields import UnknownFieldSet

from .errors import OptionDecodeError


# =============================================================================
# Extension numbers (metadata/v1/metadata.proto)
# =============================================================================

# MessageOptions
ENTITY_OPTION = 50001

# FieldOptions
KEY_OPTION = 50001
EXTERNAL_OPTION = 50002
REQUIRES_OPTION = 50003
COMPUTED_FROM_OPTION = 50004


WIRE_VARINT = 0
WIRE_LENGTH_DELIMITED = 2


class OptionSet:
    """
    Unknown extension fields of a parsed options message.

    Lookups return None when the option is absent and raise
    OptionDecodeError when it is present with an unexpected wire type.
    """

    def __init__(self, options: Optional[Message] = None):
        self.options = options
        self._fields: Optional[dict[int, list[tuple[int, Any]]]] = None

    @classmethod
    def empty(cls) -> "OptionSet":
        return cls()

    def __bool__(self) -> bool:
        return bool(self._unknown_fields())

    def __repr__(self) -> str:
        return f"OptionSet({sorted(self._unknown_fields())})"

    def _unknown_fields(self) -> dict[int, list[tuple[int, Any]]]:
        if self._fields is None:
            self._fields = {}
            if self.options is not None:
                for unknown in UnknownFieldSet(self.options):
                    self._fields.setdefault(unknown.field_number, []).append(
                        (unknown.wire_type, unknown.data)
                    )
        return self._fields

    def _last(self, number: int) -> Optional[tuple[int, Any]]:
        values = self._unknown_fields().get(number)
        if not values:
            return None
        # Last occurrence wins for singular fields
        return values[-1]

    def has(self, number: int) -> bool:
        """Check whether an option with this number is present."""
        return self._last(number) is not None

    def get_bool(self, number: int) -> Optional[bool]:
        """Get a bool option value."""
        entry = self._last(number)
        if entry is None:
            return None
        wire_type, value = entry
        if wire_type != WIRE_VARINT:
            raise OptionDecodeError(f"expected varint, got wire type {wire_type}", number)
        return bool(value)

    def get_string(self, number: int) -> Optional[str]:
        """Get a string option value."""
        entry = self._last(number)
        if entry is None:
            return None
        wire_type, value = entry
        if wire_type != WIRE_LENGTH_DELIMITED:
            raise OptionDecodeError(f"expected string, got wire type {wire_type}", number)
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise OptionDecodeError(f"invalid utf-8: {e}", number) from e
