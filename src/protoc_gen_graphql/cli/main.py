#!/usr/bin/env python3
"""
protoc-gen-graphql CLI - Main entry point.

Usage:
    protoc --graphql_out=. --graphql_opt=template_path=custom.graphql.j2 foo.proto
                                               # protoc plugin (no arguments)
    protoc-gen-graphql generate -d descriptors.binpb -o schemas/
                                               # from a FileDescriptorSet
    protoc-gen-graphql template > custom.graphql.j2
                                               # dump the embedded template
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError

from .. import __version__
from ..core.errors import DescriptorError, ProtocGenGraphQLError
from ..core.loader import load_file_descriptor_set, load_request, read_descriptor_set
from ..generator import Generator
from ..render.renderer import default_template_source
from .config import parse_parameter, resolve_config

logger = logging.getLogger(__name__)

LOG_PREFIX = "protoc-gen-graphql: "


def configure_logging(level: str = "INFO") -> None:
    """Send package logs to stderr; stdout carries the plugin response."""
    package_logger = logging.getLogger("protoc_gen_graphql")
    package_logger.setLevel(level)
    if not any(getattr(h, "_protoc_gen_graphql", False) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(f"{LOG_PREFIX}%(message)s"))
        handler._protoc_gen_graphql = True
        package_logger.addHandler(handler)


# =============================================================================
# protoc plugin
# =============================================================================


def run_plugin(request_bytes: bytes) -> plugin_pb2.CodeGeneratorResponse:
    """
    Handle one serialized CodeGeneratorRequest.

    Failures are reported through the response `error` field, which makes
    protoc print the message and exit non-zero.

    Raises:
        DescriptorError: If the request cannot be decoded
    """
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(request_bytes)
    except DecodeError as e:
        raise DescriptorError(f"Invalid CodeGeneratorRequest: {e}") from e

    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    try:
        params = parse_parameter(request.parameter)
        config = resolve_config(
            params.get("config"),
            template_path=params.get("template_path"),
            log_level=params.get("log_level"),
        )
        configure_logging(config.log_level)
        result = Generator(config.template_path).generate(load_request(request))
    except ProtocGenGraphQLError as e:
        logger.error(str(e))
        response.error = str(e)
        return response

    for generated in result.files:
        response.file.add(name=generated.name, content=generated.content)
    if not result.success:
        response.error = "\n".join(result.error_messages())
    return response


def cmd_plugin(args: argparse.Namespace) -> int:
    """Run as a protoc plugin: request on stdin, response on stdout."""
    configure_logging()
    logger.debug("Starting protoc-gen-graphql...")

    try:
        response = run_plugin(sys.stdin.buffer.read())
    except DescriptorError as e:
        print(f"{LOG_PREFIX}{e}", file=sys.stderr)
        return 1

    sys.stdout.buffer.write(response.SerializeToString())
    sys.stdout.flush()
    return 0


# =============================================================================
# Commands
# =============================================================================


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate schemas from a FileDescriptorSet."""
    try:
        config = resolve_config(
            args.config,
            template_path=args.template,
            output_dir=args.out,
            log_level=args.log_level,
        )
        configure_logging(config.log_level)

        descriptor_set = load_file_descriptor_set(
            read_descriptor_set(args.descriptor_set),
            args.file or None,
        )
        result = Generator(config.template_path).generate(descriptor_set)
    except ProtocGenGraphQLError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not result.success:
        for message in result.error_messages():
            print(f"Error: {message}", file=sys.stderr)
        return 1

    for path in result.write(config.output_dir):
        print(f"Generated {path}")
    return 0


def cmd_template(args: argparse.Namespace) -> int:
    """Print or save the embedded default template."""
    try:
        source = default_template_source()
    except ProtocGenGraphQLError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        path = Path(args.output)
        if path.exists() and not args.force:
            print(f"Error: {path} already exists. Use --force to overwrite.", file=sys.stderr)
            return 1
        path.write_text(source, encoding="utf-8")
        print(f"Created {path}")
    else:
        sys.stdout.write(source)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="protoc-gen-graphql",
        description="Generate federated GraphQL schemas from protobuf services. "
                    "Without a command, runs as a protoc plugin.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # plugin
    subparsers.add_parser("plugin", help="Run as protoc plugin (default)")

    # generate
    generate_parser = subparsers.add_parser("generate", help="Generate schemas from a descriptor set")
    generate_parser.add_argument("--descriptor-set", "-d", required=True, help="Serialized FileDescriptorSet")
    generate_parser.add_argument("--out", "-o", help="Output directory")
    generate_parser.add_argument("--template", "-t", help="Custom template path")
    generate_parser.add_argument("--config", "-c", help="Config file (default: protoc-gen-graphql.yaml if present)")
    generate_parser.add_argument("--file", "-f", action="append", help="Only generate services of this proto file (repeatable)")
    generate_parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)")

    # template
    template_parser = subparsers.add_parser("template", help="Print the embedded default template")
    template_parser.add_argument("--output", "-o", help="Write to file instead of stdout")
    template_parser.add_argument("--force", action="store_true", help="Overwrite existing file")

    return parser


def app(args: Optional[List[str]] = None) -> int:
    """Main CLI application."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    commands = {
        "plugin": cmd_plugin,
        "generate": cmd_generate,
        "template": cmd_template,
    }

    handler = commands.get(parsed.command or "plugin")
    return handler(parsed)


def main() -> None:
    """Entry point for CLI."""
    sys.exit(app())


if __name__ == "__main__":
    main()
