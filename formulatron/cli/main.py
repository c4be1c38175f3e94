"""
Command-line interface for the formula calculator.

Usage:
    python -m formulatron list
    python -m formulatron show GROUP FORM [--json]
    python -m formulatron units [KIND]
    python -m formulatron solve GROUP FORM --set VAR=VALUE [--unit VAR=UNIT] [--json]
    python -m formulatron serve [--host 127.0.0.1] [--port 8000]
"""

import argparse
import logging
import sys
from typing import Optional

from formulatron import __version__
from formulatron.cli.readable_output import print_catalog, print_formula
from formulatron.config import EngineSettings, ServerSettings
from formulatron.errors import FormulaNotFound, UnitNotFound
from formulatron.logging_config import setup_logging
from formulatron.physics.units import UNIT_KINDS, factor_of, units_of_kind, base_unit_of
from formulatron.session import Calculator


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    server_defaults = ServerSettings()
    parser = argparse.ArgumentParser(
        prog="formulatron",
        description="Formulatron - an astronomy formula calculator. Set any variable "
                    "of a formula and the others are recalculated.",
    )
    parser.add_argument("--version", action="version", version=f"formulatron {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list command
    subparsers.add_parser(
        "list",
        help="List formula groups and formulas",
    )

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Show a formula's variables with their default values",
    )
    show_parser.add_argument("group", help="Group id, e.g. stellar-relations")
    show_parser.add_argument("form", help="Formula id, e.g. distance-modulus")
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the formula as JSON",
    )

    # units command
    units_parser = subparsers.add_parser(
        "units",
        help="List quantity kinds and their units",
    )
    units_parser.add_argument(
        "kind",
        nargs="?",
        default=None,
        help="Only list units of this kind",
    )

    # solve command
    solve_parser = subparsers.add_parser(
        "solve",
        help="Set variables of a formula and print the recalculated result",
    )
    solve_parser.add_argument("group", help="Group id")
    solve_parser.add_argument("form", help="Formula id")
    solve_parser.add_argument(
        "--set", "-s",
        dest="assignments",
        action="append",
        default=[],
        metavar="VAR=VALUE",
        help="Value to enter for a variable, in its display unit (repeatable)",
    )
    solve_parser.add_argument(
        "--unit", "-u",
        dest="units",
        action="append",
        default=[],
        metavar="VAR=UNIT",
        help="Display unit for a variable (repeatable)",
    )
    solve_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the FastAPI web server",
    )
    serve_parser.add_argument(
        "--host",
        default=server_defaults.host,
        help=f"Host to bind to (default: {server_defaults.host})",
    )
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=server_defaults.port,
        help=f"Port to listen on (default: {server_defaults.port})",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    return parser


def _parse_pairs(pairs: list[str], what: str) -> dict[str, str]:
    """Split VAR=VALUE arguments, keeping their order."""
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip() or not value.strip():
            raise ValueError(f"Expected VAR={what}, got {pair!r}")
        result[key.strip()] = value.strip()
    return result


def cmd_list(args: argparse.Namespace) -> int:
    """List the catalog."""
    calculator = Calculator(settings=EngineSettings.from_env())
    print_catalog(calculator.catalog)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Show one formula."""
    try:
        calculator = Calculator(settings=EngineSettings.from_env())
        form = calculator.form(args.group, args.form)
    except FormulaNotFound as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(form.model_dump_json(indent=2))
    else:
        print_formula(form)
    return 0


def cmd_units(args: argparse.Namespace) -> int:
    """List units, optionally for one kind."""
    kinds = [args.kind] if args.kind else list(UNIT_KINDS)
    try:
        for kind in kinds:
            print(f"{kind} (base: {base_unit_of(kind)})")
            for unit in units_of_kind(kind):
                print(f"  {unit:<30} {factor_of(unit):.6g}")
    except UnitNotFound as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    """Enter values into a formula and print the recalculated variables."""
    try:
        assignments = {
            var: float(value)
            for var, value in _parse_pairs(args.assignments, "VALUE").items()
        }
        units = _parse_pairs(args.units, "UNIT")

        calculator = Calculator(settings=EngineSettings.from_env())
        form = calculator.solve(args.group, args.form, assignments, units)

        if args.json:
            print(form.model_dump_json(indent=2))
        else:
            print_formula(form)
        return 0

    except (FormulaNotFound, UnitNotFound) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI web server."""
    try:
        import uvicorn
    except ImportError as e:
        print(f"Error: Missing dependency: {e}", file=sys.stderr)
        print("Install with: pip install uvicorn fastapi", file=sys.stderr)
        return 1

    settings = ServerSettings(host=args.host, port=args.port, reload=args.reload)
    print(f"\nStarting Formulatron API", file=sys.stderr)
    print(f"API: http://{settings.host}:{settings.port}/", file=sys.stderr)
    print(f"Docs: http://{settings.host}:{settings.port}/docs", file=sys.stderr)
    print("\nPress Ctrl+C to stop\n", file=sys.stderr)

    uvicorn.run(
        "formulatron.api.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
    return 0


def cli(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "list": cmd_list,
        "show": cmd_show,
        "units": cmd_units,
        "solve": cmd_solve,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())
