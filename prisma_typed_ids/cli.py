"""
Command-line interface for identifier typing.

Runs the rewrite on a declarations file, shows how the schema's models are
classified, or serves the Prisma generator protocol.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen import (
    ConfigError,
    GeneratorConfig,
    GeneratorError,
    ModelRegistry,
    SchemaError,
    __version__,
    convert_datamodel,
    load_config,
    rewrite_declarations,
    rewrite_declarations_file,
)
from .codegen.core.config import get_config_manager
from .codegen.core.naming import name_token
from .generator_handler import serve
from .logging_config import get_logger, setup_logging
from .utils import JSONLoaderError, load_json, read_declarations

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="prisma-typed-ids",
        description="Give generated Prisma client ids per-model nominal types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  prisma-typed-ids rewrite node_modules/.prisma/client/index.d.ts --schema dmmf.json
  prisma-typed-ids rewrite index.d.ts --schema dmmf.json --strict --dry-run
  prisma-typed-ids models --schema dmmf.json
  prisma-typed-ids serve
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    rewrite = subparsers.add_parser(
        "rewrite", help="Rewrite a declarations file in place"
    )
    rewrite.add_argument(
        "declarations", nargs="?", help="Generated declarations file (e.g. index.d.ts)"
    )
    _add_schema_args(rewrite)
    rewrite.add_argument("--config", help="Configuration file path (JSON)")

    strictness = rewrite.add_mutually_exclusive_group()
    strictness.add_argument(
        "--strict",
        action="store_const",
        const="strict",
        dest="id_strictness",
        help="Require explicit construction of ids (plain strings rejected)",
    )
    strictness.add_argument(
        "--lenient",
        action="store_const",
        const="lenient",
        dest="id_strictness",
        help="Keep plain strings assignable to ids (default)",
    )
    rewrite.add_argument(
        "--narrow",
        action="store_true",
        help="Skip create/update inputs and their without-relation variants",
    )
    rewrite.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rewritten declarations instead of writing them",
    )
    rewrite.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )
    rewrite.set_defaults(func=_handle_rewrite)

    models = subparsers.add_parser(
        "models", help="Show which models get nominal id types"
    )
    _add_schema_args(models)
    models.set_defaults(func=_handle_models)

    serve_parser = subparsers.add_parser(
        "serve", help="Run as a Prisma generator (JSON-RPC over stdio)"
    )
    serve_parser.set_defaults(func=_handle_serve)

    return parser


def _add_schema_args(parser: argparse.ArgumentParser):
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--schema", metavar="FILE", help="DMMF JSON file")
    source.add_argument("--schema-url", metavar="URL", help="URL serving DMMF JSON")


def _load_models(args: argparse.Namespace):
    try:
        _, document = load_json(file_path=args.schema, url=args.schema_url)
        return convert_datamodel(document)
    except (JSONLoaderError, FileNotFoundError, SchemaError) as e:
        raise CLIError(f"Failed to load schema: {e}") from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from a config file and CLI arguments."""
    overrides: dict[str, Any] = {}

    if args.declarations:
        overrides["output"] = args.declarations
    if args.id_strictness:
        overrides["id_strictness"] = args.id_strictness
    if args.narrow:
        overrides["extended"] = False

    try:
        config = load_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    return config


def _handle_rewrite(args: argparse.Namespace) -> int:
    config = _build_config(args)
    models = _load_models(args)

    if not config.output:
        console.print("[yellow]No declarations file given; nothing to do[/yellow]")
        return 0

    if args.dry_run:
        source = read_declarations(config.output, config.encoding)
        result = rewrite_declarations(models, source, config)
        if not result.success:
            raise CLIError(result.error_message)
        console.print(Syntax(result.code, "typescript", theme="monokai"))
    else:
        result = rewrite_declarations_file(models, config)
        console.print(
            f"[green]✓[/green] Rewrote [cyan]{Path(config.output)}[/cyan] "
            f"({result.metadata.get('retyped_fields', 0)} field(s) retyped)"
        )

    if args.verbose and result.metadata:
        _print_metadata(result.metadata)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")

    return 0


def _print_metadata(metadata: dict[str, Any]):
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in metadata.items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}: {v}" for k, v in value.items()) or "-"
        elif isinstance(value, list):
            value = ", ".join(str(v) for v in value) or "-"
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(table)


def _handle_models(args: argparse.Namespace) -> int:
    registry = ModelRegistry(_load_models(args))

    table = Table(title="📋 Models", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Model", style="bold green", no_wrap=True)
    table.add_column("Nominal type", style="cyan")
    table.add_column("Id field")
    table.add_column("Foreign keys", style="blue")
    table.add_column("Status", style="dim")

    for model in registry.models:
        nominal = registry.nominal_type_name(model.name)
        id_field = registry.resolve_identifier_field(model.name)
        keys = ", ".join(
            f"{key.column} → {registry.nominal_type_name(key.target)}"
            for key in registry.foreign_key_targets(model.name)
        )
        status = registry.skip_reason(model.name) or f"token: {name_token(model.name)}"
        table.add_row(
            model.name,
            nominal or "[dim]none[/dim]",
            id_field.name if id_field else "-",
            keys or "-",
            status,
        )

    console.print()
    console.print(table)
    console.print(
        Panel(
            "[bold]Rewrite:[/bold] prisma-typed-ids rewrite [dim]index.d.ts[/dim] "
            "--schema [cyan]dmmf.json[/cyan]",
            title="💡 Next",
            border_style="blue",
        )
    )
    return 0


def _handle_serve(args: argparse.Namespace) -> int:
    # Responses go to stderr; logs share it as non-JSON lines
    return serve()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``prisma-typed-ids`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = args.log_level
    if args.command == "serve" and level == "WARNING":
        level = "INFO"
    setup_logging(level)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except ConfigError as e:
        console.print(f"[red]✗ Configuration error:[/red] {e}")
        return 1
    except GeneratorError as e:
        console.print(f"[red]✗ Code generation failed:[/red] {e}")
        return 1
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        console.print(f"[red]✗ I/O error:[/red] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
