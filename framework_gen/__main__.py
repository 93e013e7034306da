"""Command-line entry point.

Usage::

    python -m framework_gen serve --port 4000
    python -m framework_gen generate --base-url https://example.com --env qa
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from framework_gen.config import Config
from framework_gen.scaffolder import FrameworkGenerator, GenerationError, GenerationRequest
from framework_gen.utils import (
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framework_gen",
        description="Playwright framework generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m framework_gen serve\n"
            "  python -m framework_gen generate --base-url https://example.com \\\n"
            "      --username demo --password demo --env qa\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Interface to bind (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Port to listen on (default: 4000)")
    serve.add_argument("--output", "-o", help="Directory generated projects are written to")

    generate = sub.add_parser("generate", help="Generate a project once and exit")
    generate.add_argument("--base-url", required=True, help="Base URL of the site under test")
    generate.add_argument("--username", help="Login username")
    generate.add_argument("--password", help="Login password")
    generate.add_argument("--env", default="dev", help="Fallback environment (default: dev)")
    generate.add_argument("--output", "-o", help="Directory to write the project to")

    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    """Overlay command-line options on the environment configuration."""
    overrides: dict[str, Any] = {}
    if getattr(args, "output", None):
        overrides["output_dir"] = Path(args.output)
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None) is not None:
        overrides["port"] = args.port

    base = Config.from_env()
    return Config(**{**base.model_dump(), **overrides})


def _serve(config: Config) -> int:
    import uvicorn

    from framework_gen.server import create_app

    console.print(f"API running on http://{config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port)
    return 0


def _generate(args: argparse.Namespace, config: Config) -> int:
    fields: dict[str, Any] = {"baseUrl": args.base_url, "env": args.env}
    if args.username is not None:
        fields["username"] = args.username
    if args.password is not None:
        fields["password"] = args.password
    request = GenerationRequest(**fields)

    try:
        result = asyncio.run(
            FrameworkGenerator().generate(request, config.resolved_output_dir)
        )
    except GenerationError as exc:
        print_error(f"Generation failed: {exc}")
        return 1

    print_summary_table(
        {path: "written" for path in result.files},
        title=f"Generated files ({format_duration(result.elapsed)})",
    )
    if not result.flags.login:
        print_warning("No credentials supplied: login page and test skipped.")
    print_success(f"Framework generated at {result.path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m framework_gen``."""
    args = build_parser().parse_args(argv)

    try:
        config = _config_from_args(args)
    except (ValidationError, ValueError) as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    if args.command == "serve":
        return _serve(config)
    return _generate(args, config)


if __name__ == "__main__":
    sys.exit(main())
