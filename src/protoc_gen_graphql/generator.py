"""
Generator - one invocation from descriptor set to schema files.

Usage:
    from protoc_gen_graphql import Generator

    generator = Generator(template_path="custom.graphql.j2")
    result = generator.generate(descriptor_set)
    for f in result.files:
        print(f.name)       # product.v1.ProductService.graphql
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .core.builder import SchemaBuilder
from .core.defs import DescriptorSet
from .core.errors import RenderError
from .core.schema import Schema
from .core.validator import SchemaValidator
from .render.renderer import TemplateRenderer

logger = logging.getLogger(__name__)


SCHEMA_EXTENSION = ".graphql"


def output_name(service_name: str) -> str:
    """File name of the schema generated for a fully-qualified service name."""
    return f"{service_name}{SCHEMA_EXTENSION}"


@dataclass
class GeneratedFile:
    """A generated schema file."""
    name: str
    content: str


@dataclass
class GenerationResult:
    """Result of one generation pass."""
    files: list[GeneratedFile] = field(default_factory=list)
    errors: list[RenderError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def error_messages(self) -> list[str]:
        """Get all error messages as strings."""
        return [str(e) for e in self.errors]

    def write(self, output_dir: Path | str) -> list[Path]:
        """Write generated files into a directory, returning their paths."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        paths = []
        for generated in self.files:
            path = output_dir / generated.name
            path.write_text(generated.content, encoding="utf-8")
            paths.append(path)
        return paths


class Generator:
    """
    Builds and renders one GraphQL schema per service.

    The template is loaded once, when the generator is created; a failing
    embedded template raises TemplateLoadError here. Schemas are built
    fresh on every generate() call.
    """

    def __init__(self, template_path: Optional[str] = None):
        self.renderer = TemplateRenderer(template_path)

    def build(self, descriptor_set: DescriptorSet) -> dict[str, Schema]:
        """Build schema models without rendering them."""
        return SchemaBuilder().build_all(descriptor_set)

    def generate(self, descriptor_set: DescriptorSet) -> GenerationResult:
        """
        Generate schema files for every service in the descriptor set.

        A service whose template execution fails produces no file; its
        error is recorded in the result and the remaining services are
        still rendered.
        """
        result = GenerationResult()
        validator = SchemaValidator()

        for service_name, schema in self.build(descriptor_set).items():
            for message in validator.validate(schema).messages():
                logger.warning(f"{service_name}: {message}")

            try:
                content = self.renderer.render(schema)
            except RenderError as e:
                logger.error(str(e))
                result.errors.append(e)
                continue

            result.files.append(GeneratedFile(name=output_name(service_name), content=content))
            logger.debug(f"Generated {output_name(service_name)}")

        return result
