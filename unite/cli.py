"""unite CLI: generate tagged unions from declaration files.

Usage:
    unite compile <file> [--output <path>] [--import <module>]... [--format python|json]
    unite expand <file>
    unite check <file>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from unite.core.config import get_config
from unite.core.types import UniteSyntaxError

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unite",
        description="unite: compose existing types into a tagged union",
    )
    parser.add_argument("--version", action="version", version="unite 0.1.0")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- compile ---
    compile_parser = subparsers.add_parser("compile", help="Generate a Python module")
    compile_parser.add_argument("source", type=str, help="Path to the union declaration")
    compile_parser.add_argument(
        "--output", "-o", type=str, default=None, help="Output path (default: <name>.py)"
    )
    compile_parser.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=[],
        metavar="MODULE",
        help="Module whose names are star-imported into the generated module (repeatable)",
    )
    compile_parser.add_argument(
        "--format",
        choices=("python", "json"),
        default="python",
        help="Emit Python source or the generated declarations as JSON",
    )

    # --- expand ---
    expand_parser = subparsers.add_parser("expand", help="Print the generated code")
    expand_parser.add_argument("source", type=str, help="Path to the union declaration")

    # --- check ---
    check_parser = subparsers.add_parser("check", help="Parse a declaration and report errors")
    check_parser.add_argument("source", type=str, help="Path to the union declaration")

    return parser


def _error(message: str) -> None:
    err_console.print(f"Error: {message}", markup=False, highlight=False, soft_wrap=True)


def _read_source(path: Path) -> str | None:
    if not path.exists():
        _error(f"file not found: {path}")
        return None
    if not path.is_file():
        _error(f"not a file: {path}")
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _error(f"cannot read {path}: {e}")
        return None


def cmd_compile(args: argparse.Namespace) -> int:
    """Write the generated module (or its JSON description) to disk."""
    from unite.compiler.emitter import render
    from unite.compiler.generator import generate
    from unite.compiler.serializer import serialize_to_json
    from unite.dsl.parser import parse

    source_path = Path(args.source)
    source = _read_source(source_path)
    if source is None:
        return 1

    spec = parse(source)
    declarations = generate(spec)

    if args.format == "json":
        output = serialize_to_json(declarations) + "\n"
        default_name = f"{spec.name}.json"
    else:
        preamble = tuple(f"from {module} import *  # noqa: F401,F403" for module in args.imports)
        output = render(declarations, preamble=preamble, source_name=source_path.name)
        default_name = f"{spec.name.lower()}.py"

    output_path = Path(args.output or source_path.with_name(default_name))
    output_path.write_text(output, encoding="utf-8")
    logger.info("Wrote %s", output_path)

    console.print(
        f"Compiled union '{spec.name}': {len(declarations.type_decl.cases)} cases, "
        f"{len(declarations.methods)} methods, {len(declarations.conversions)} conversions",
        markup=False,
        soft_wrap=True,
    )
    console.print(f"  Written to: {output_path}", markup=False, soft_wrap=True)
    return 0


def cmd_expand(args: argparse.Namespace) -> int:
    """Print the generated source with syntax highlighting."""
    from unite.macro import expand

    source_path = Path(args.source)
    source = _read_source(source_path)
    if source is None:
        return 1

    code = expand(source, source_name=source_path.name)
    console.print(Syntax(code, "python", line_numbers=False))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Parse only; report the variant count."""
    from unite.dsl.parser import parse

    source_path = Path(args.source)
    source = _read_source(source_path)
    if source is None:
        return 1

    spec = parse(source)
    console.print(
        f"{source_path}: ok, union '{spec.name}' with {len(spec.variants)} variants",
        markup=False,
        soft_wrap=True,
    )
    return 0


def configure_logging(verbose: bool = False) -> None:
    """Install the rich log handler.

    Raises:
        ValueError: If the configured log level is not a logging level name.
    """
    level = logging.DEBUG if verbose else get_config().log_level
    if isinstance(level, str) and not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"invalid log level {level!r} (set via UNITE_LOG_LEVEL)")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        configure_logging(args.verbose)
    except ValueError as e:
        _error(str(e))
        return 1

    dispatch = {
        "compile": cmd_compile,
        "expand": cmd_expand,
        "check": cmd_check,
    }

    try:
        return dispatch[args.command](args)
    except UniteSyntaxError as e:
        err_console.print(e.format(args.source), markup=False, highlight=False, soft_wrap=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
