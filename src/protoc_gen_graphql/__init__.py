"""
protoc-gen-graphql - federated GraphQL schemas from protobuf services.

Converts service/message descriptors into one GraphQL SDL file per
service, with Apollo Federation `@key` directives inferred from
`(metadata.v1.entity)` / `(metadata.v1.key)` options or field names.

Usage:
    from protoc_gen_graphql import Generator, load_file_descriptor_set, read_descriptor_set

    descriptor_set = load_file_descriptor_set(read_descriptor_set("descriptors.binpb"))
    result = Generator().generate(descriptor_set)
    result.write("schemas/")
"""

from __future__ import annotations

__version__ = "0.1.0"

from .core import (
    DescriptorSet,
    Enum,
    EnumOption,
    Field,
    Input,
    Kind,
    ProtocGenGraphQLError,
    RenderError,
    Resolution,
    Schema,
    SchemaBuilder,
    TemplateLoadError,
    Type,
    load_file_descriptor_set,
    load_request,
    read_descriptor_set,
)
from .generator import GeneratedFile, GenerationResult, Generator
from .render import TemplateRenderer

__all__ = [
    # Descriptors
    "DescriptorSet",
    "Kind",
    "load_request",
    "load_file_descriptor_set",
    "read_descriptor_set",
    # Schema model
    "Schema",
    "Type",
    "Field",
    "Input",
    "Enum",
    "EnumOption",
    "SchemaBuilder",
    "Resolution",
    # Rendering
    "TemplateRenderer",
    "Generator",
    "GeneratedFile",
    "GenerationResult",
    # Errors
    "ProtocGenGraphQLError",
    "TemplateLoadError",
    "RenderError",
]
