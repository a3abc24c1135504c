"""
Jinja2 template rendering for GraphQL schemas.

Template resolution:
1. Custom template path, if configured and readable and parseable
2. Embedded default template (`templates/graphql-service-schema.graphql.j2`)

A broken custom template is logged and replaced by the default; a broken
default template is fatal.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from jinja2 import (
    Environment,
    PackageLoader,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from ..core.errors import RenderError, TemplateLoadError
from ..core.schema import Schema
from .helpers import HELPERS

logger = logging.getLogger(__name__)


DEFAULT_TEMPLATE = "graphql-service-schema.graphql.j2"


def create_environment() -> Environment:
    """Create the Jinja2 environment with the helper functions registered."""
    env = Environment(
        loader=PackageLoader("protoc_gen_graphql.render", "templates"),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.globals.update(HELPERS)
    env.filters.update(HELPERS)
    return env


def default_template_source() -> str:
    """
    Source of the embedded default template.

    Raises:
        TemplateLoadError: If the template is missing from the package
    """
    env = create_environment()
    try:
        source, _, _ = env.loader.get_source(env, DEFAULT_TEMPLATE)
    except (TemplateNotFound, OSError) as e:
        raise TemplateLoadError(DEFAULT_TEMPLATE, str(e)) from e
    return source


class TemplateRenderer:
    """
    Renders Schema models to SDL through a Jinja2 template.

    The template receives the schema as `schema` and the helpers listed in
    `protoc_gen_graphql.render.helpers`. Rendering has no side effects, so
    one renderer can be reused across services.

    Usage:
        renderer = TemplateRenderer(template_path="templates/custom.graphql.j2")
        sdl = renderer.render(schema)
    """

    def __init__(self, template_path: Optional[str] = None):
        self.env = create_environment()
        self.template_path = template_path
        self.is_custom = False
        self.template, self.template_name = self._load(template_path)

    def _load(self, template_path: Optional[str]) -> tuple[Template, str]:
        if template_path:
            template = self._load_custom(Path(template_path))
            if template is not None:
                logger.info(f"Using custom template from path: {template_path}")
                self.is_custom = True
                return template, Path(template_path).name

        try:
            template = self.env.get_template(DEFAULT_TEMPLATE)
        except TemplateSyntaxError as e:
            raise TemplateLoadError(DEFAULT_TEMPLATE, f"line {e.lineno}: {e.message}") from e
        except (TemplateNotFound, OSError) as e:
            raise TemplateLoadError(DEFAULT_TEMPLATE, str(e)) from e

        logger.info("Using embedded template")
        return template, DEFAULT_TEMPLATE

    def _load_custom(self, path: Path) -> Optional[Template]:
        """Load a custom template, or None (with a warning) if unusable."""
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read template from {path}: {e}, falling back to embedded template")
            return None

        try:
            return self.env.from_string(source)
        except TemplateSyntaxError as e:
            logger.warning(
                f"Failed to parse template from file {path}: line {e.lineno}: {e.message}, "
                "falling back to embedded template"
            )
            return None

    def render(self, schema: Schema) -> str:
        """
        Render a schema.

        Raises:
            RenderError: If template execution fails
        """
        try:
            return self.template.render(schema=schema)
        except TemplateError as e:
            raise RenderError(schema.service_name, f"{self.template_name}: {e}") from e
        except Exception as e:
            raise RenderError(schema.service_name, f"{self.template_name}: {type(e).__name__}: {e}") from e
