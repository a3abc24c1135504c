"""
Core dataclass definitions for descriptor input.

A minimal, protobuf-independent view of services, methods, messages,
fields and enums. The loader builds these from protoc descriptors; the
schema builder only ever reads them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from .options import OptionSet


class Kind(enum.Enum):
    """Field kinds, numbered as in FieldDescriptorProto.Type."""
    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18
    UNKNOWN = 0

    @classmethod
    def from_proto(cls, value: int) -> "Kind":
        """Map a FieldDescriptorProto.Type number, UNKNOWN for anything else."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class EnumValueDesc:
    """A single enum value."""
    name: str
    number: int
    comment: str = ""


@dataclass
class EnumDesc:
    """An enum type."""
    name: str
    full_name: str
    values: list[EnumValueDesc] = field(default_factory=list)
    comment: str = ""


@dataclass
class FieldDesc:
    """
    A message field.

    `has_presence` is True when the field tracks explicit presence (proto3
    `optional`, proto2 optional, message-typed, oneof members); such fields
    are nullable in GraphQL.
    """
    name: str
    number: int
    kind: Kind
    is_repeated: bool = False
    has_presence: bool = False
    message: Optional["MessageDesc"] = field(default=None, repr=False, compare=False)
    enum: Optional[EnumDesc] = field(default=None, repr=False, compare=False)
    options: OptionSet = field(default_factory=OptionSet.empty, repr=False, compare=False)
    comment: str = ""

    @property
    def is_required(self) -> bool:
        return not self.has_presence


@dataclass
class MessageDesc:
    """A message type."""
    name: str
    full_name: str
    fields: list[FieldDesc] = field(default_factory=list)
    options: OptionSet = field(default_factory=OptionSet.empty, repr=False, compare=False)
    comment: str = ""


@dataclass
class MethodDesc:
    """An RPC method."""
    name: str
    input: Optional[MessageDesc] = field(default=None, repr=False)
    output: Optional[MessageDesc] = field(default=None, repr=False)
    comment: str = ""


@dataclass
class ServiceDesc:
    """An RPC service."""
    name: str
    full_name: str
    methods: list[Optional[MethodDesc]] = field(default_factory=list)
    comment: str = ""
    source: str = ""  # proto file path


@dataclass
class DescriptorSet:
    """Services to generate schemas for, in file then declaration order."""
    services: list[Optional[ServiceDesc]] = field(default_factory=list)
    files_to_generate: list[str] = field(default_factory=list)
