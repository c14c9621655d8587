"""Entry point: python -m routegen

Reads controller metadata and a generator config, writes the routes file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import anyio
import jinja2

from .codegen import RouteGenerator
from .loader import load_config, load_metadata
from .options import GenerationOptions


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routegen",
        description="Generate a routes file for express, koa or hapi from controller metadata",
    )
    parser.add_argument("--metadata", "-m", type=Path, required=True,
                        help="Controller metadata JSON file")
    parser.add_argument("--config", "-c", type=Path, required=True,
                        help="Generator config JSON file (routesDir, middleware, ...)")
    parser.add_argument("--template", "-t",
                        help="Custom template file, overrides the middleware default")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log generation details")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config)
        if args.template:
            config["middlewareTemplate"] = args.template
        options = GenerationOptions.from_dict(config)
        generator = RouteGenerator(load_metadata(args.metadata), options)
        written = anyio.run(generator.generate_custom_routes)
    except (ValueError, OSError, jinja2.TemplateError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output_path = Path(options.routes_dir) / options.file_name
    if written:
        print(f"Generated {output_path}")
    else:
        print(f"{output_path} is up to date")
    return 0


if __name__ == "__main__":
    sys.exit(main())
