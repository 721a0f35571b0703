#!/usr/bin/env python3
"""
Dynamic REST API - command line entry point

Usage:
    dynamic-rest-api serve                       # Run the API server
    dynamic-rest-api serve --port 8080 --reload  # Custom port, autoreload
    dynamic-rest-api render schema.json          # Preview one generated object
    dynamic-rest-api render schema.json -n 3     # Preview a list of three
"""

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console

from app.core.config import settings
from app.core.exceptions import InvalidSchemaDefinitionError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="dynamic-rest-api",
        description="Dynamic REST API - configurable mock endpoints with generated JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dynamic-rest-api serve                         Start the server
  dynamic-rest-api render user.json              Generate one object from a schema
  dynamic-rest-api render user.json -n 5         Generate a list of five
  dynamic-rest-api render user.json --seed 42    Reproducible output
""",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", type=str, default=settings.SERVER_HOST)
    serve.add_argument("--port", type=int, default=settings.SERVER_PORT)
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    render = subparsers.add_parser("render", help="Generate data from a schema file")
    render.add_argument("schema", type=Path, help="JSON file holding the schema definition")
    render.add_argument("-n", "--count", type=int, default=None, help="Generate a list of N items")
    render.add_argument("--seed", type=int, default=None, help="Seed the value generator")

    return parser


def render_schema(schema_path: Path, count=None, seed=None):
    """Parse a schema file and generate one object, or a list when count is given"""
    from app.modules.mock_engine import directives, template

    if seed is not None:
        directives.seed(seed)

    schema = template.parse_template(schema_path.read_text(encoding="utf-8"))
    if count is None:
        return template.generate(schema)
    return template.generate_many(schema, count)


def main():
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args()
    console = Console()

    if args.command == "serve":
        import uvicorn
        uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)

    elif args.command == "render":
        if not args.schema.exists():
            console.print(f"[red]✗ Schema file not found: {args.schema}[/red]")
            sys.exit(1)
        try:
            generated = render_schema(args.schema, count=args.count, seed=args.seed)
        except InvalidSchemaDefinitionError as e:
            console.print(f"[red]✗ {e.message}[/red]")
            sys.exit(1)
        console.print_json(json.dumps(generated))

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
