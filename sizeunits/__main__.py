"""
CLI interface for size parsing and conversion.

Usage:
    python -m sizeunits parse "50.84 MB"
    python -m sizeunits convert "10000" --bits --unit-type decimal
    python -m sizeunits convert "3211776" --bits --exact --precision 6
    python -m sizeunits units --narrow
"""

import sys
import argparse

from .errors import SizeError
from .sizes import BitSize, ByteSize
from .units import Unit, UnitType, size_conf


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point, returns the exit status."""
    parser = argparse.ArgumentParser(
        description="Parse and convert bit and byte sizes", prog="python -m sizeunits"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse
    parse_parser = subparsers.add_parser("parse", help="Print the exact magnitude of a size")
    _add_size_arguments(parse_parser)

    # convert
    convert_parser = subparsers.add_parser("convert", help="Print a size in a human-readable unit")
    _add_size_arguments(convert_parser)
    convert_parser.add_argument(
        "--unit-type", choices=[t.value for t in UnitType], default=UnitType.BOTH.value,
        help="Unit family for the appropriate unit (default: both)",
    )
    convert_parser.add_argument("--unit", help="Express the size in this unit, e.g. MiB or Kb")
    convert_parser.add_argument("--precision", type=int, help="Number of fractional digits")
    convert_parser.add_argument(
        "--exact", action="store_true", help="Use the largest unit that reconstructs the size exactly"
    )

    # units
    units_parser = subparsers.add_parser("units", help="List the unit table")
    units_parser.add_argument("--narrow", action="store_true", help="List units available in narrow mode")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if getattr(args, "ignore_case", False) and args.bits:
        parser.error("--ignore-case applies to byte sizes only")
    if getattr(args, "precision", None) is not None and args.precision < 0:
        parser.error("--precision must be non-negative")

    try:
        if args.command == "parse":
            print(_parse_size(args).as_int())
        elif args.command == "convert":
            print(_convert(args))
        elif args.command == "units":
            _print_units(args.narrow)
    except SizeError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


def _add_size_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("text", help="Size text, e.g. '123KiB' or '50.84 MB'")
    parser.add_argument("--bits", action="store_true", help="Treat the size as bits (default: bytes)")
    parser.add_argument(
        "--ignore-case", action="store_true", help="Treat 'b' as bytes too (byte sizes only)"
    )


def _parse_size(args: argparse.Namespace) -> BitSize | ByteSize:
    if args.bits:
        return BitSize.parse(args.text)
    return ByteSize.parse(args.text, ignore_case=args.ignore_case)


def _convert(args: argparse.Namespace) -> str:
    size = _parse_size(args)
    precision = "" if args.precision is None else f".{args.precision}"

    if args.exact:
        return format(size, f"#{precision}")

    if args.unit:
        adjusted = size.get_adjusted_unit(Unit.parse(args.unit, prefer_byte=not args.bits))
    else:
        adjusted = size.get_appropriate_unit(UnitType(args.unit_type))
    return format(adjusted, precision)


def _print_units(narrow: bool) -> None:
    wide = size_conf.wide
    size_conf.wide = not narrow
    try:
        for unit in Unit.available():
            print(f"{unit.value:<4} {unit.as_bits():>28} bits")
    finally:
        size_conf.wide = wide


if __name__ == "__main__":
    sys.exit(main())
