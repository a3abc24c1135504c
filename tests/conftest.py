"""Shared descriptor fixtures."""

from __future__ import annotations

import logging
from typing import Optional

import pytest
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.compiler import plugin_pb2

from protoc_gen_graphql.core.loader import load_file_descriptor_set

FDP = descriptor_pb2.FieldDescriptorProto


def _metadata_file(key_type: int) -> descriptor_pb2.FileDescriptorProto:
    """
    metadata/v1/metadata.proto:

        extend google.protobuf.MessageOptions { bool entity = 50001; }
        extend google.protobuf.FieldOptions {
          bool key = 50001; bool external = 50002;
          string requires = 50003; string computed_from = 50004;
        }
    """
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="metadata/v1/metadata.proto",
        package="metadata.v1",
        syntax="proto3",
        dependency=[descriptor_pb2.DESCRIPTOR.name],
    )
    extensions = [
        ("entity", 50001, FDP.TYPE_BOOL, ".google.protobuf.MessageOptions"),
        ("key", 50001, key_type, ".google.protobuf.FieldOptions"),
        ("external", 50002, FDP.TYPE_BOOL, ".google.protobuf.FieldOptions"),
        ("requires", 50003, FDP.TYPE_STRING, ".google.protobuf.FieldOptions"),
        ("computed_from", 50004, FDP.TYPE_STRING, ".google.protobuf.FieldOptions"),
    ]
    for name, number, field_type, extendee in extensions:
        file_proto.extension.add(
            name=name,
            number=number,
            type=field_type,
            label=FDP.LABEL_OPTIONAL,
            extendee=extendee,
        )
    return file_proto


class MetadataOptions:
    """
    Builds options messages carrying `metadata.v1` extensions.

    The extensions live in a private descriptor pool; the result is parsed
    back into plain descriptor_pb2 options, where they are unknown fields,
    exactly as protoc hands them to the plugin.
    """

    def __init__(self, key_type: int = FDP.TYPE_BOOL):
        self.pool = descriptor_pool.DescriptorPool()
        descriptor_file = descriptor_pb2.FileDescriptorProto()
        descriptor_pb2.DESCRIPTOR.CopyToProto(descriptor_file)
        self.pool.Add(descriptor_file)
        self.pool.Add(_metadata_file(key_type))

    def _serialize(self, options_type: str, values: dict) -> bytes:
        options_class = message_factory.GetMessageClass(
            self.pool.FindMessageTypeByName(f"google.protobuf.{options_type}")
        )
        options = options_class()
        for name, value in values.items():
            options.Extensions[self.pool.FindExtensionByName(f"metadata.v1.{name}")] = value
        return options.SerializeToString()

    def field(self, **values) -> descriptor_pb2.FieldOptions:
        return descriptor_pb2.FieldOptions.FromString(self._serialize("FieldOptions", values))

    def message(self, **values) -> descriptor_pb2.MessageOptions:
        return descriptor_pb2.MessageOptions.FromString(self._serialize("MessageOptions", values))


def _field(
    name: str,
    number: int,
    field_type: int,
    *,
    type_name: str = "",
    repeated: bool = False,
    optional: bool = False,
    options: Optional[descriptor_pb2.FieldOptions] = None,
) -> descriptor_pb2.FieldDescriptorProto:
    field = FDP(
        name=name,
        number=number,
        type=field_type,
        label=FDP.LABEL_REPEATED if repeated else FDP.LABEL_OPTIONAL,
    )
    if type_name:
        field.type_name = type_name
    if optional:
        field.proto3_optional = True
    if options is not None:
        field.options.CopyFrom(options)
    return field


def _product_file() -> descriptor_pb2.FileDescriptorProto:
    """
    product/v1/product.proto:

        service ProductService {
          rpc GetProduct(GetProductRequest) returns (GetProductResponse);
        }
        message Product { string product_id = 1; optional string name = 2; optional double price = 3; }
        message GetProductRequest { string product_id = 1; }
        message GetProductResponse { Product product = 1; }
    """
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="product/v1/product.proto",
        package="product.v1",
        syntax="proto3",
    )

    product = file_proto.message_type.add(name="Product")
    product.field.extend([
        _field("product_id", 1, FDP.TYPE_STRING),
        _field("name", 2, FDP.TYPE_STRING, optional=True),
        _field("price", 3, FDP.TYPE_DOUBLE, optional=True),
    ])

    request = file_proto.message_type.add(name="GetProductRequest")
    request.field.append(_field("product_id", 1, FDP.TYPE_STRING))

    response = file_proto.message_type.add(name="GetProductResponse")
    response.field.append(_field("product", 1, FDP.TYPE_MESSAGE, type_name=".product.v1.Product"))

    service = file_proto.service.add(name="ProductService")
    service.method.add(
        name="GetProduct",
        input_type=".product.v1.GetProductRequest",
        output_type=".product.v1.GetProductResponse",
    )
    return file_proto


@pytest.fixture(autouse=True)
def reset_package_logger(monkeypatch, tmp_path):
    """Undo configure_logging() and keep config lookups away from the repo root."""
    monkeypatch.chdir(tmp_path)
    package_logger = logging.getLogger("protoc_gen_graphql")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    for handler in package_logger.handlers[:]:
        if handler not in handlers:
            package_logger.removeHandler(handler)
    package_logger.setLevel(level)


@pytest.fixture
def metadata() -> MetadataOptions:
    """Options with `metadata.v1` extensions as declared by the real proto."""
    return MetadataOptions()


@pytest.fixture
def string_key_metadata() -> MetadataOptions:
    """Options whose `key` extension is (wrongly) declared as a string."""
    return MetadataOptions(key_type=FDP.TYPE_STRING)


@pytest.fixture
def proto_field():
    """Factory for FieldDescriptorProto entries."""
    return _field


@pytest.fixture
def product_file() -> descriptor_pb2.FileDescriptorProto:
    return _product_file()


@pytest.fixture
def product_file_set(product_file) -> descriptor_pb2.FileDescriptorSet:
    return descriptor_pb2.FileDescriptorSet(file=[product_file])


@pytest.fixture
def product_descriptor_set(product_file_set):
    return load_file_descriptor_set(product_file_set)


@pytest.fixture
def product_request(product_file) -> plugin_pb2.CodeGeneratorRequest:
    return plugin_pb2.CodeGeneratorRequest(
        file_to_generate=[product_file.name],
        proto_file=[product_file],
    )


@pytest.fixture
def product_sdl() -> str:
    """SDL expected from the embedded template for the product file."""
    return '''# Code generated by protoc-gen-graphql. DO NOT EDIT.
# source: product/v1/product.proto
# service: product.v1.ProductService

extend schema @link(url: "https://specs.apollo.dev/federation/v2.3", import: ["@key"])

type Query {
  getProduct(input: GetProductInput!): GetProductResponse
}

type GetProductResponse {
  product: Product
}

type Product @key(fields: "productId") {
  productId: ID!
  name: String
  price: Float
}

input GetProductInput {
  productId: ID!
}
'''
