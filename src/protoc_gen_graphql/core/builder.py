"""
Schema builder - walks service descriptors into GraphQL schema models.

For each service, methods become fields on Query or Mutation; request
messages become input types, response messages become object types, and
every message or enum reachable from them is registered exactly once.

Usage:
    from protoc_gen_graphql.core.builder import SchemaBuilder

    builder = SchemaBuilder()
    schemas = builder.build_all(descriptor_set)   # {"product.v1.ProductService": Schema}
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from .defs import DescriptorSet, EnumDesc, FieldDesc, Kind, MessageDesc, MethodDesc, ServiceDesc
from .federation import (
    computed_from,
    is_external,
    requires_fields,
    resolve_entity,
    resolve_key,
)
from .schema import Enum, EnumOption, Field, Input, Schema, Type
from .types import decorate, scalar_for_kind
from .utils import clean_comment, lower_first, sanitize_field_name, sanitize_type_name

logger = logging.getLogger(__name__)


QUERY_PREFIXES = ("get", "list", "search")

OperationType = Literal["Query", "Mutation"]


def classify_method(name: str) -> OperationType:
    """
    Classify an RPC method as a query or a mutation.

    Methods starting with get/list/search (case-insensitive) are queries,
    everything else is a mutation.
    """
    return "Query" if name.lower().startswith(QUERY_PREFIXES) else "Mutation"


def input_name(message_name: str) -> str:
    """
    Name of the input type derived from a request message.

    Examples:
        GetProductRequest -> GetProductInput
        ProductFilter -> ProductFilterInput
    """
    base = message_name[: -len("Request")] if message_name.endswith("Request") else message_name
    return f"{sanitize_type_name(base)}Input"


class SchemaBuilder:
    """
    Builds one Schema per service.

    Registries are per schema: a message or enum seen again by name
    returns the entry registered first, without re-walking its fields.
    Registration happens before descending into fields, so cyclic message
    graphs terminate.

    Example:
        builder = SchemaBuilder()
        schema = builder.build(service)
        builder.schemas["product.v1.ProductService"] is schema
    """

    def __init__(self):
        self.schemas: dict[str, Schema] = {}
        self._schema: Optional[Schema] = None
        self._types: dict[str, Type] = {}
        self._inputs: dict[str, Input] = {}
        self._enums: dict[str, Enum] = {}

    def build_all(self, descriptor_set: DescriptorSet) -> dict[str, Schema]:
        """Build schemas for every service in the descriptor set."""
        for service in descriptor_set.services:
            self.build(service)
        return self.schemas

    def build(self, service: Optional[ServiceDesc]) -> Optional[Schema]:
        """
        Build the schema for a single service.

        Returns:
            The Schema, or None if the service is missing
        """
        if service is None:
            logger.debug("Skipping missing service descriptor")
            return None

        schema = Schema(
            service_name=service.full_name,
            source=service.source,
            comment=clean_comment(service.comment),
        )
        self._schema = schema
        self._types = {}
        self._inputs = {}
        self._enums = {}

        for method in service.methods:
            if method is None:
                logger.debug(f"Skipping missing method in {service.full_name}")
                continue
            self._add_method(method)

        self._schema = None
        self.schemas[service.full_name] = schema
        logger.debug(
            f"Built schema for {service.full_name}: "
            f"{len(schema.types)} types, {len(schema.inputs)} inputs, {len(schema.enums)} enums"
        )
        return schema

    # =========================================================================
    # Methods
    # =========================================================================

    def _add_method(self, method: MethodDesc) -> None:
        """Add a root Query/Mutation field for an RPC method."""
        if method.output is None:
            logger.debug(f"Skipping method {method.name}: missing output message")
            return

        output = self._resolve_type(method.output)

        arguments: list[Input] = []
        if method.input is not None and method.input.fields:
            arguments.append(self._resolve_input(method.input))

        root_field = Field(
            name=lower_first(method.name),
            type=output.name,
            comment=clean_comment(method.comment),
            inputs=arguments,
        )

        if classify_method(method.name) == "Query":
            self._schema.root_query.fields.append(root_field)
        else:
            self._schema.root_mutation.fields.append(root_field)

    # =========================================================================
    # Output types
    # =========================================================================

    def _resolve_type(self, message: MessageDesc) -> Type:
        """Get or register the object type for a message."""
        name = sanitize_type_name(message.name)
        existing = self._types.get(name)
        if existing is not None:
            return existing

        gql_type = Type(name=name, comment=clean_comment(message.comment))
        self._types[name] = gql_type
        self._schema.types.append(gql_type)

        key_field: Optional[Field] = None
        for field_desc in message.fields:
            if field_desc is None:
                continue
            gql_field = self._output_field(field_desc)
            if gql_field is None:
                continue
            gql_field.is_key = bool(resolve_key(field_desc))
            if gql_field.is_key and key_field is None:
                key_field = gql_field
            gql_type.fields.append(gql_field)

        entity = resolve_entity(message, has_key=key_field is not None)
        if entity and key_field is not None:
            gql_type.is_federated_entity = True
            gql_type.key_fields = key_field.name
        elif entity:
            logger.warning(f"Entity {name} has no key field; @key directive omitted")

        return gql_type

    def _output_field(self, field_desc: FieldDesc) -> Optional[Field]:
        """Build an object type field."""
        if field_desc.kind in (Kind.MESSAGE, Kind.GROUP):
            if field_desc.message is None:
                logger.debug(f"Skipping field {field_desc.name}: missing message type")
                return None
            base = self._resolve_type(field_desc.message).name
        else:
            base = self._scalar_or_enum(field_desc)

        return Field(
            name=sanitize_field_name(field_desc.name),
            type=decorate(base, field_desc.is_repeated, field_desc.is_required),
            comment=clean_comment(field_desc.comment),
            is_required=field_desc.is_required,
            is_external=is_external(field_desc),
            requires=requires_fields(field_desc),
            computed_from=computed_from(field_desc),
        )

    # =========================================================================
    # Input types
    # =========================================================================

    def _resolve_input(self, message: MessageDesc) -> Input:
        """Get or register the input type for a message."""
        name = input_name(message.name)
        existing = self._inputs.get(name)
        if existing is not None:
            return existing

        gql_input = Input(name=name, comment=clean_comment(message.comment))
        self._inputs[name] = gql_input
        self._schema.inputs.append(gql_input)

        for field_desc in message.fields:
            if field_desc is None:
                continue
            gql_field = self._input_field(field_desc)
            if gql_field is not None:
                gql_input.fields.append(gql_field)

        return gql_input

    def _input_field(self, field_desc: FieldDesc) -> Optional[Field]:
        """Build an input type field; nested messages become nested inputs."""
        if field_desc.kind in (Kind.MESSAGE, Kind.GROUP):
            if field_desc.message is None:
                logger.debug(f"Skipping input field {field_desc.name}: missing message type")
                return None
            base = self._resolve_input(field_desc.message).name
        else:
            base = self._scalar_or_enum(field_desc)

        return Field(
            name=sanitize_field_name(field_desc.name),
            type=decorate(base, field_desc.is_repeated, field_desc.is_required),
            comment=clean_comment(field_desc.comment),
            is_required=field_desc.is_required,
        )

    # =========================================================================
    # Scalars and enums
    # =========================================================================

    def _scalar_or_enum(self, field_desc: FieldDesc) -> str:
        if field_desc.kind == Kind.ENUM and field_desc.enum is not None:
            return self._resolve_enum(field_desc.enum).name
        return scalar_for_kind(field_desc.kind, field_desc.name)

    def _resolve_enum(self, enum_desc: EnumDesc) -> Enum:
        """Get or register a GraphQL enum."""
        name = sanitize_type_name(enum_desc.name)
        existing = self._enums.get(name)
        if existing is not None:
            return existing

        gql_enum = Enum(
            name=name,
            options=[
                EnumOption(name=value.name, comment=f"Value: {value.number}")
                for value in enum_desc.values
            ],
            comment=clean_comment(enum_desc.comment),
        )
        self._enums[name] = gql_enum
        self._schema.enums.append(gql_enum)
        return gql_enum
