"""
Custom exceptions for the protoc-gen-graphql generator.
"""

from __future__ import annotations

from typing import Optional


class ProtocGenGraphQLError(Exception):
    """Base exception for all generator errors."""
    pass


class OptionDecodeError(ProtocGenGraphQLError):
    """Raised when serialized descriptor options cannot be decoded."""

    def __init__(self, message: str, number: Optional[int] = None):
        self.number = number
        super().__init__(f"Unreadable option{f' {number}' if number is not None else ''}: {message}")


class DescriptorError(ProtocGenGraphQLError):
    """Raised when a descriptor set cannot be loaded."""
    pass


class ConfigError(ProtocGenGraphQLError):
    """Raised when generator configuration is invalid."""
    pass


class TemplateLoadError(ProtocGenGraphQLError):
    """Raised when no usable schema template can be loaded."""

    def __init__(self, template_name: str, message: str):
        self.template_name = template_name
        super().__init__(f"Failed to load template '{template_name}': {message}")


class RenderError(ProtocGenGraphQLError):
    """Raised when rendering the schema of a service fails."""

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"Rendering schema for service '{service}' failed: {message}")
