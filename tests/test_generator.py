"""End-to-end generation tests."""

from __future__ import annotations

import pytest
from google.protobuf import descriptor_pb2
from protoc_gen_graphql import DescriptorSet, Generator
from protoc_gen_graphql.core.loader import load_file_descriptor_set
from protoc_gen_graphql.generator import GeneratedFile, GenerationResult, output_name

FDP = descriptor_pb2.FieldDescriptorProto


def test_product_service_end_to_end(product_descriptor_set, product_sdl) -> None:
    result = Generator().generate(product_descriptor_set)

    assert result.success
    assert result.files == [GeneratedFile(name="product.v1.ProductService.graphql", content=product_sdl)]


def test_generation_is_deterministic(product_descriptor_set) -> None:
    generator = Generator()

    assert generator.generate(product_descriptor_set) == generator.generate(product_descriptor_set)
    assert Generator().generate(product_descriptor_set) == generator.generate(product_descriptor_set)


@pytest.fixture
def two_service_file(proto_field, product_file) -> descriptor_pb2.FileDescriptorProto:
    """product_file plus an OrderService whose Order embeds the shared Product."""
    order = product_file.message_type.add(name="Order")
    order.field.extend([
        proto_field("order_id", 1, FDP.TYPE_STRING),
        proto_field("product", 2, FDP.TYPE_MESSAGE, type_name=".product.v1.Product"),
    ])
    product_file.service.add(name="OrderService").method.add(
        name="CreateOrder",
        input_type=".product.v1.Order",
        output_type=".product.v1.Order",
    )
    return product_file


def test_one_file_per_service(two_service_file) -> None:
    result = Generator().generate(load_file_descriptor_set(descriptor_pb2.FileDescriptorSet(file=[two_service_file])))

    assert [f.name for f in result.files] == [
        "product.v1.ProductService.graphql",
        "product.v1.OrderService.graphql",
    ]
    order_sdl = result.files[1].content
    assert "type Mutation {\n  createOrder(input: OrderInput!): Order\n}" in order_sdl
    assert 'type Order @key(fields: "orderId")' in order_sdl
    assert 'type Product @key(fields: "productId")' in order_sdl


def test_output_independent_of_service_order(two_service_file) -> None:
    descriptor_set = load_file_descriptor_set(descriptor_pb2.FileDescriptorSet(file=[two_service_file]))
    reversed_set = DescriptorSet(
        services=list(reversed(descriptor_set.services)),
        files_to_generate=descriptor_set.files_to_generate,
    )
    generator = Generator()

    forward = generator.generate(descriptor_set)
    backward = generator.generate(reversed_set)

    assert [f.name for f in backward.files] == [f.name for f in reversed(forward.files)]
    assert {f.name: f.content for f in backward.files} == {f.name: f.content for f in forward.files}


def test_render_failure_skips_service(tmp_path, product_descriptor_set) -> None:
    template = tmp_path / "broken.graphql.j2"
    template.write_text("{{ schema.missing }}")

    result = Generator(str(template)).generate(product_descriptor_set)

    assert not result.success
    assert result.files == []
    assert "product.v1.ProductService" in result.error_messages()[0]


def test_build_without_rendering(product_descriptor_set) -> None:
    schemas = Generator().build(product_descriptor_set)

    assert list(schemas) == ["product.v1.ProductService"]
    assert [e.name for e in schemas["product.v1.ProductService"].entities] == ["Product"]


def test_write_files(tmp_path) -> None:
    result = GenerationResult(files=[GeneratedFile(name=output_name("a.v1.AService"), content="type Query {}\n")])

    paths = result.write(tmp_path / "out")

    assert paths == [tmp_path / "out" / "a.v1.AService.graphql"]
    assert paths[0].read_text() == "type Query {}\n"
