"""
Descriptor loader - converts protoc descriptors into the core descriptor model.

Accepts either a CodeGeneratorRequest (protoc plugin mode) or a
FileDescriptorSet (`protoc --descriptor_set_out=... --include_source_info`).

Usage:
    from protoc_gen_graphql.core.loader import load_request

    descriptor_set = load_request(request)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

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
from .errors import DescriptorError
from .options import OptionSet

logger = logging.getLogger(__name__)

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

# Field numbers used in SourceCodeInfo location paths
_FILE_MESSAGE_TYPE = 4
_FILE_ENUM_TYPE = 5
_FILE_SERVICE = 6
_MESSAGE_FIELD = 2
_MESSAGE_NESTED_TYPE = 3
_MESSAGE_ENUM_TYPE = 4
_ENUM_VALUE = 2
_SERVICE_METHOD = 2


def _options(proto) -> OptionSet:
    """Options of a descriptor proto, unknown extensions included."""
    if not proto.HasField("options"):
        return OptionSet.empty()
    return OptionSet(proto.options)


def _qualify(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


class _FileLoader:
    """Loads the messages, enums and services of a single file."""

    def __init__(self, file_proto: descriptor_pb2.FileDescriptorProto, loader: "DescriptorLoader"):
        self.file = file_proto
        self.loader = loader
        self.comments: dict[tuple[int, ...], str] = {}
        for location in file_proto.source_code_info.location:
            comment = location.leading_comments or location.trailing_comments
            if comment:
                self.comments[tuple(location.path)] = comment
        self._pending: list[tuple[MessageDesc, descriptor_pb2.DescriptorProto, tuple[int, ...]]] = []

    @property
    def explicit_presence_default(self) -> bool:
        # proto2 and editions track presence for singular fields by default
        return self.file.syntax != "proto3"

    def register_types(self) -> None:
        """Pass 1: index every message and enum by fully-qualified name."""
        package = self.file.package
        for i, enum_proto in enumerate(self.file.enum_type):
            self._register_enum(enum_proto, package, (_FILE_ENUM_TYPE, i))
        for i, message_proto in enumerate(self.file.message_type):
            self._register_message(message_proto, package, (_FILE_MESSAGE_TYPE, i))

    def _register_enum(self, enum_proto, prefix: str, path: tuple[int, ...]) -> None:
        full_name = _qualify(prefix, enum_proto.name)
        self.loader.enums[f".{full_name}"] = EnumDesc(
            name=enum_proto.name,
            full_name=full_name,
            values=[
                EnumValueDesc(
                    name=value.name,
                    number=value.number,
                    comment=self.comments.get(path + (_ENUM_VALUE, j), ""),
                )
                for j, value in enumerate(enum_proto.value)
            ],
            comment=self.comments.get(path, ""),
        )

    def _register_message(self, message_proto, prefix: str, path: tuple[int, ...]) -> None:
        full_name = _qualify(prefix, message_proto.name)
        message = MessageDesc(
            name=message_proto.name,
            full_name=full_name,
            options=_options(message_proto),
            comment=self.comments.get(path, ""),
        )
        self.loader.messages[f".{full_name}"] = message
        self._pending.append((message, message_proto, path))

        for k, nested_enum in enumerate(message_proto.enum_type):
            self._register_enum(nested_enum, full_name, path + (_MESSAGE_ENUM_TYPE, k))
        for k, nested in enumerate(message_proto.nested_type):
            self._register_message(nested, full_name, path + (_MESSAGE_NESTED_TYPE, k))

    def link_fields(self) -> None:
        """Pass 2: build fields, resolving message and enum references."""
        for message, message_proto, path in self._pending:
            message.fields = [
                self._field(field_proto, message, path + (_MESSAGE_FIELD, j))
                for j, field_proto in enumerate(message_proto.field)
            ]

    def _field(self, field_proto, owner: MessageDesc, path: tuple[int, ...]) -> FieldDesc:
        kind = Kind.from_proto(field_proto.type)
        if kind == Kind.UNKNOWN:
            logger.warning(f"Unknown kind {field_proto.type} for {owner.full_name}.{field_proto.name}")

        is_repeated = field_proto.label == FieldDescriptorProto.LABEL_REPEATED
        field = FieldDesc(
            name=field_proto.name,
            number=field_proto.number,
            kind=kind,
            is_repeated=is_repeated,
            has_presence=self._has_presence(field_proto, kind, is_repeated),
            options=_options(field_proto),
            comment=self.comments.get(path, ""),
        )

        if kind in (Kind.MESSAGE, Kind.GROUP):
            field.message = self.loader.messages.get(field_proto.type_name)
            if field.message is None:
                logger.warning(f"Unresolved message type {field_proto.type_name} for {owner.full_name}.{field.name}")
        elif kind == Kind.ENUM:
            field.enum = self.loader.enums.get(field_proto.type_name)
            if field.enum is None:
                logger.warning(f"Unresolved enum type {field_proto.type_name} for {owner.full_name}.{field.name}")
        return field

    def _has_presence(self, field_proto, kind: Kind, is_repeated: bool) -> bool:
        if is_repeated:
            return False
        if field_proto.proto3_optional:
            return True
        if kind in (Kind.MESSAGE, Kind.GROUP):
            return True
        if field_proto.HasField("oneof_index"):
            return True
        if field_proto.label == FieldDescriptorProto.LABEL_REQUIRED:
            return False
        return self.explicit_presence_default

    def services(self) -> list[ServiceDesc]:
        package = self.file.package
        services = []
        for i, service_proto in enumerate(self.file.service):
            path = (_FILE_SERVICE, i)
            services.append(ServiceDesc(
                name=service_proto.name,
                full_name=_qualify(package, service_proto.name),
                methods=[
                    self._method(method_proto, path + (_SERVICE_METHOD, j))
                    for j, method_proto in enumerate(service_proto.method)
                ],
                comment=self.comments.get(path, ""),
                source=self.file.name,
            ))
        return services

    def _method(self, method_proto, path: tuple[int, ...]) -> MethodDesc:
        method = MethodDesc(
            name=method_proto.name,
            input=self.loader.messages.get(method_proto.input_type),
            output=self.loader.messages.get(method_proto.output_type),
            comment=self.comments.get(path, ""),
        )
        if method.input is None:
            logger.warning(f"Unresolved input type {method_proto.input_type} for method {method.name}")
        if method.output is None:
            logger.warning(f"Unresolved output type {method_proto.output_type} for method {method.name}")
        return method


class DescriptorLoader:
    """
    Builds a DescriptorSet from file descriptors.

    All files (including dependencies) are indexed so that cross-file
    references resolve; services are only taken from files to generate.
    """

    def __init__(self):
        self.messages: dict[str, MessageDesc] = {}
        self.enums: dict[str, EnumDesc] = {}

    def load(
        self,
        files: Iterable[descriptor_pb2.FileDescriptorProto],
        files_to_generate: Optional[Iterable[str]] = None,
    ) -> DescriptorSet:
        """
        Args:
            files: File descriptors, dependencies included
            files_to_generate: Names of files whose services are generated
                (default: all files)
        """
        files = list(files)
        loaders = [_FileLoader(f, self) for f in files]
        for file_loader in loaders:
            file_loader.register_types()
        for file_loader in loaders:
            file_loader.link_fields()

        if files_to_generate is None:
            generate = [f.name for f in files]
        else:
            generate = list(files_to_generate)
            known = {f.name for f in files}
            for name in generate:
                if name not in known:
                    raise DescriptorError(f"File to generate '{name}' not found in descriptor set")

        services: list[Optional[ServiceDesc]] = []
        for file_loader in loaders:
            if file_loader.file.name in generate:
                services.extend(file_loader.services())

        return DescriptorSet(services=services, files_to_generate=generate)


def load_request(request: plugin_pb2.CodeGeneratorRequest) -> DescriptorSet:
    """Load the descriptor set of a protoc plugin request."""
    return DescriptorLoader().load(request.proto_file, request.file_to_generate)


def load_file_descriptor_set(
    descriptor_set: descriptor_pb2.FileDescriptorSet,
    files_to_generate: Optional[Iterable[str]] = None,
) -> DescriptorSet:
    """Load a FileDescriptorSet."""
    return DescriptorLoader().load(descriptor_set.file, files_to_generate)


def read_descriptor_set(path: Path | str) -> descriptor_pb2.FileDescriptorSet:
    """
    Read a serialized FileDescriptorSet from disk.

    Raises:
        DescriptorError: If the file is missing or not a descriptor set
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DescriptorError(f"Could not read descriptor set {path}: {e}") from e

    descriptor_set = descriptor_pb2.FileDescriptorSet()
    try:
        descriptor_set.ParseFromString(data)
    except DecodeError as e:
        raise DescriptorError(f"Invalid descriptor set {path}: {e}") from e
    return descriptor_set
