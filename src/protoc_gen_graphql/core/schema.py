"""
GraphQL schema model.

This is the data contract between the schema builder and the templates:
templates read these objects and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class Input:
    """GraphQL input type, derived from a request message."""
    name: str
    fields: list["Field"] = field(default_factory=list)
    comment: str = ""


@dataclass
class Field:
    """Field of a GraphQL object or input type."""
    name: str
    type: str  # decorated, e.g. "ID!", "[Product]"
    comment: str = ""
    inputs: list[Input] = field(default_factory=list)  # method arguments
    is_required: bool = False
    is_key: bool = False
    is_external: bool = False
    requires: Optional[str] = None  # @requires(fields: ...)
    computed_from: Optional[str] = None


@dataclass
class Type:
    """GraphQL object type."""
    name: str
    fields: list[Field] = field(default_factory=list)
    comment: str = ""
    is_federated_entity: bool = False
    key_fields: str = ""  # single key only

    def get_field(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass
class EnumOption:
    """Value of a GraphQL enum."""
    name: str
    comment: str = ""


@dataclass
class Enum:
    """GraphQL enum type."""
    name: str
    options: list[EnumOption] = field(default_factory=list)
    comment: str = ""


@dataclass
class Schema:
    """GraphQL schema for one service."""
    service_name: str
    root_query: Type = field(default_factory=lambda: Type(name="Query"))
    root_mutation: Type = field(default_factory=lambda: Type(name="Mutation"))
    types: list[Type] = field(default_factory=list)
    inputs: list[Input] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)
    source: str = ""
    comment: str = ""

    @property
    def has_queries(self) -> bool:
        return bool(self.root_query.fields)

    @property
    def has_mutations(self) -> bool:
        return bool(self.root_mutation.fields)

    @property
    def entities(self) -> list[Type]:
        return [t for t in self.types if t.is_federated_entity]

    def find_type(self, name: str) -> Optional[Type]:
        for t in self.types:
            if t.name == name:
                return t
        return None

    def find_input(self, name: str) -> Optional[Input]:
        for i in self.inputs:
            if i.name == name:
                return i
        return None

    def find_enum(self, name: str) -> Optional[Enum]:
        for e in self.enums:
            if e.name == name:
                return e
        return None

    def lookup(self, name: str) -> Optional[Union[Type, Input, Enum]]:
        """Find a type, input or enum by name (in that order)."""
        return self.find_type(name) or self.find_input(name) or self.find_enum(name)
