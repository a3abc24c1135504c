"""
Core module - descriptor model, schema model, and schema building.
"""

from __future__ import annotations

from .defs import (
    DescriptorSet,
    EnumDesc,
    EnumValueDesc,
    FieldDesc,
    Kind,
    MessageDesc,
    MethodDesc,
    ServiceDesc,
)
from .errors import (
    ConfigError,
    DescriptorError,
    OptionDecodeError,
    ProtocGenGraphQLError,
    RenderError,
    TemplateLoadError,
)
from .options import (
    COMPUTED_FROM_OPTION,
    ENTITY_OPTION,
    EXTERNAL_OPTION,
    KEY_OPTION,
    REQUIRES_OPTION,
    OptionSet,
)
from .schema import Enum, EnumOption, Field, Input, Schema, Type
from .types import decorate, is_scalar, map_kind, validate_type
from .federation import Resolution, resolve_entity, resolve_key
from .builder import SchemaBuilder, classify_method, input_name
from .validator import SchemaValidator, ValidationResult, validate_schema
from .loader import (
    DescriptorLoader,
    load_file_descriptor_set,
    load_request,
    read_descriptor_set,
)
from .utils import (
    clean_comment,
    is_id_name,
    is_key_name,
    lower_first,
    to_camel_case,
    to_pascal_case,
    to_snake_case,
)

__all__ = [
    # Descriptor model
    "DescriptorSet",
    "ServiceDesc",
    "MethodDesc",
    "MessageDesc",
    "FieldDesc",
    "EnumDesc",
    "EnumValueDesc",
    "Kind",
    # Errors
    "ProtocGenGraphQLError",
    "OptionDecodeError",
    "DescriptorError",
    "ConfigError",
    "TemplateLoadError",
    "RenderError",
    # Options
    "OptionSet",
    "ENTITY_OPTION",
    "KEY_OPTION",
    "EXTERNAL_OPTION",
    "REQUIRES_OPTION",
    "COMPUTED_FROM_OPTION",
    # Schema model
    "Schema",
    "Type",
    "Field",
    "Input",
    "Enum",
    "EnumOption",
    # Types
    "map_kind",
    "decorate",
    "is_scalar",
    "validate_type",
    # Federation
    "Resolution",
    "resolve_entity",
    "resolve_key",
    # Builder
    "SchemaBuilder",
    "classify_method",
    "input_name",
    # Validator
    "SchemaValidator",
    "ValidationResult",
    "validate_schema",
    # Loader
    "DescriptorLoader",
    "load_request",
    "load_file_descriptor_set",
    "read_descriptor_set",
    # Utils
    "to_snake_case",
    "to_camel_case",
    "to_pascal_case",
    "lower_first",
    "clean_comment",
    "is_id_name",
    "is_key_name",
]
