"""
protoc-gen-graphql CLI - protoc plugin and command line tools.
"""

from __future__ import annotations

from .main import main, app

__all__ = ["main", "app"]
