"""
Schema validator - checks a built schema model for dangling references.

Performs validation:
- Every field type is well formed
- Object fields reference scalars, enums or registered types
- Input fields reference scalars, enums or registered inputs
- Type, input and enum names do not collide
- Federated entities carry their key field

The validator does not check GraphQL syntax; it catches model
inconsistencies before they reach a template.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .schema import Field, Schema
from .types import base_type_name, is_scalar, validate_type


@dataclass
class SchemaIssue:
    """Single validation issue."""
    type_name: Optional[str]
    field: Optional[str]
    message: str

    def __str__(self) -> str:
        parts = []
        if self.type_name:
            parts.append(self.type_name)
        if self.field:
            parts.append(self.field)
        location = ".".join(parts) if parts else "schema"
        return f"[{location}] {self.message}"


@dataclass
class ValidationResult:
    """Result of validating one schema."""
    service_name: str
    issues: list[SchemaIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues

    def messages(self) -> list[str]:
        return [str(i) for i in self.issues]


class SchemaValidator:
    """
    Validates a Schema model.

    Usage:
        result = SchemaValidator().validate(schema)
        for message in result.messages():
            logger.warning(message)
    """

    def __init__(self):
        self.issues: list[SchemaIssue] = []

    def validate(self, schema: Schema) -> ValidationResult:
        self.issues = []

        type_names = {t.name for t in schema.types}
        input_names = {i.name for i in schema.inputs}
        enum_names = {e.name for e in schema.enums}

        self._validate_names(schema)

        for root in (schema.root_query, schema.root_mutation):
            for root_field in root.fields:
                self._validate_reference(root.name, root_field, type_names)
                for argument in root_field.inputs:
                    if argument.name not in input_names:
                        self._add_issue(
                            f"Argument input '{argument.name}' is not registered",
                            root.name,
                            root_field.name,
                        )

        for gql_type in schema.types:
            for type_field in gql_type.fields:
                self._validate_reference(gql_type.name, type_field, type_names | enum_names)
            if gql_type.is_federated_entity and gql_type.get_field(gql_type.key_fields) is None:
                self._add_issue(
                    f"Key field '{gql_type.key_fields}' not in fields",
                    gql_type.name,
                )

        for gql_input in schema.inputs:
            for input_field in gql_input.fields:
                self._validate_reference(gql_input.name, input_field, input_names | enum_names)

        return ValidationResult(service_name=schema.service_name, issues=self.issues)

    def _add_issue(self, message: str, type_name: Optional[str] = None, field: Optional[str] = None):
        self.issues.append(SchemaIssue(type_name=type_name, field=field, message=message))

    def _validate_names(self, schema: Schema):
        """Names share one namespace in GraphQL."""
        seen: dict[str, str] = {}
        entries = (
            [(t.name, "type") for t in schema.types]
            + [(i.name, "input") for i in schema.inputs]
            + [(e.name, "enum") for e in schema.enums]
        )
        for name, kind in entries:
            if name in ("Query", "Mutation"):
                self._add_issue(f"{kind} name '{name}' clashes with a root operation type", name)
            elif name in seen:
                self._add_issue(f"{kind} name '{name}' already used by a {seen[name]}", name)
            else:
                seen[name] = kind

    def _validate_reference(self, owner: str, gql_field: Field, known: set[str]):
        error = validate_type(gql_field.type)
        if error:
            self._add_issue(error, owner, gql_field.name)
            return
        base = base_type_name(gql_field.type)
        if not is_scalar(base) and base not in known:
            self._add_issue(f"Unknown type '{base}'", owner, gql_field.name)


def validate_schema(schema: Schema) -> ValidationResult:
    """Convenience function to validate a schema."""
    return SchemaValidator().validate(schema)
