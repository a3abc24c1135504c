"""Template helper tests."""

from __future__ import annotations

from protoc_gen_graphql.core.schema import Field, Input, Schema, Type
from protoc_gen_graphql.render.helpers import (
    HELPERS,
    arguments,
    description,
    federation_imports,
    field_comment,
    field_directives,
    gql_string,
    has_field_with_suffix,
    has_prefix,
    has_suffix,
    id_field_name,
    lookup,
    trim,
    trim_prefix,
    trim_suffix,
    type_directives,
)
from protoc_gen_graphql.render.renderer import create_environment


def test_string_helpers() -> None:
    assert trim("  Product \n") == "Product"
    assert trim_prefix("GetProduct", "Get") == "Product"
    assert trim_prefix("Product", "Get") == "Product"
    assert trim_suffix("GetProductRequest", "Request") == "GetProduct"
    assert trim_suffix("Request", "") == "Request"
    assert has_prefix("ListOrders", "List")
    assert has_suffix("order_id", "_id")
    assert not has_suffix("order", "_id")


def test_gql_string_escapes() -> None:
    assert gql_string("productId") == '"productId"'
    assert gql_string('say "hi"') == '"say \\"hi\\""'


def test_schema_lookup() -> None:
    schema = Schema(
        service_name="s",
        types=[Type(name="Product")],
        inputs=[Input(name="GetProductInput")],
    )

    assert lookup(schema, "Product") is schema.types[0]
    assert lookup(schema, "GetProductInput") is schema.inputs[0]
    assert lookup(schema, "Missing") is None


def test_id_field_helpers() -> None:
    keyed = Type(name="Product", fields=[Field(name="sku", type="String")], key_fields="sku")
    plain = Type(name="Review", fields=[Field(name="body", type="String"), Field(name="reviewId", type="ID")])
    anonymous = Input(name="NoteInput", fields=[Field(name="body", type="String")])

    assert id_field_name(keyed) == "sku"
    assert id_field_name(plain) == "reviewId"
    assert id_field_name(anonymous) == ""
    assert has_field_with_suffix(plain, "Id")
    assert not has_field_with_suffix(anonymous, "Id")


def test_description_block() -> None:
    assert description("") == ""
    assert description("Product.", "  ") == '  """\n  Product.\n  """\n'
    assert description('Has """ quotes') == '"""\nHas \\""" quotes\n"""\n'


def test_field_comment_includes_computed_from() -> None:
    assert field_comment(Field(name="a", type="Int", comment="Total.")) == "Total."
    assert field_comment(Field(name="a", type="Int", computed_from="price")) == "Computed from: price"


def test_directive_helpers() -> None:
    entity = Type(name="Product", is_federated_entity=True, key_fields="productId")
    keyless = Type(name="Product", is_federated_entity=True)
    field = Field(name="eta", type="Int", is_external=True, requires="weight")

    assert type_directives(entity) == ' @key(fields: "productId")'
    assert type_directives(keyless) == ""
    assert type_directives(Type(name="Note")) == ""
    assert field_directives(field) == ' @external @requires(fields: "weight")'
    assert field_directives(Field(name="a", type="Int")) == ""


def test_arguments() -> None:
    assert arguments(Field(name="listAll", type="X")) == ""
    assert arguments(Field(name="get", type="X", inputs=[Input(name="GetInput")])) == "(input: GetInput!)"


def test_federation_imports() -> None:
    schema = Schema(service_name="s")
    assert federation_imports(schema) == []

    schema.types.append(Type(name="Note", fields=[Field(name="eta", type="Int", requires="weight")]))
    assert federation_imports(schema) == ["@requires"]


def test_helpers_registered_as_globals_and_filters() -> None:
    env = create_environment()

    for name in ("pascal", "camel", "snake", "trim_prefix", "gql_string", "lookup"):
        assert name in HELPERS
        assert env.globals[name] is HELPERS[name]
        assert env.filters[name] is HELPERS[name]

    template = env.from_string("{{ 'product_id' | camel }} {{ pascal('order_item') }} {{ 'GetProductRequest' | trim_suffix('Request') }}")
    assert template.render() == "productId OrderItem GetProduct"
