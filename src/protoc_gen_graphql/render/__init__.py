"""
Render module - Jinja2 templates and template helpers.
"""

from __future__ import annotations

from .helpers import HELPERS
from .renderer import DEFAULT_TEMPLATE, TemplateRenderer, create_environment, default_template_source

__all__ = [
    "HELPERS",
    "DEFAULT_TEMPLATE",
    "TemplateRenderer",
    "create_environment",
    "default_template_source",
]
