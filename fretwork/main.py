"""Command-line report of the touch points on an instrument's strings.

Prints one line per touch point with its position, pitch and frequency.
"""

import logging
import sys
from argparse import ArgumentParser
from typing import List, Optional

from fretwork.base import MatchException
from fretwork.family import FAMILY_LOOKUP, GUITAR
from fretwork.strings import OpenString, StringFactory
from fretwork.touch import HarmonicNode, TouchKind, TouchPoint


def describe(point: TouchPoint) -> str:
    """Format one touch point as a report line."""
    head = (
        f"{point.kind.label:<4} {point.distance:8.5f} "
        f"{str(point.pitch):<10} {point.frequency:10.3f} Hz"
    )
    if point.kind == TouchKind.Fret or point.kind == TouchKind.Stop:
        return f"{head}  fret {point.fret_number:g}"
    elif point.kind == TouchKind.Node:
        assert isinstance(point, HarmonicNode)
        return (
            f"{head}  {point.node}/{point.order} on fret {point.root.fret}"
            f" (at fret {point.equivalent_fret_number:g})"
        )
    else:
        raise MatchException(point.kind)


def report(string: OpenString, show_nodes: bool) -> List[str]:
    lines = [f"# {string.family.name} string {string.tuning} ({len(string)} points)"]
    for point in string:
        if show_nodes or point.kind != TouchKind.Node:
            lines.append(describe(point))
    return lines


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser."""
    parser = ArgumentParser(description="List the touch points of a string")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument(
        "--family", choices=sorted(FAMILY_LOOKUP), default=GUITAR.name
    )
    parser.add_argument(
        "--tuning", help="comma separated note names, lowest string first"
    )
    parser.add_argument("--count", type=int, help="frets or semitone stops")
    parser.add_argument("--harmonic-order", type=int)
    parser.add_argument("--string", type=int, help="only report this string index")
    parser.add_argument("--no-nodes", dest="nodes", action="store_false")
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point: parse arguments, build the instrument, print it.

    Returns:
        0 on success, 2 if the instrument configuration was rejected.
    """
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    factory = StringFactory(FAMILY_LOOKUP[args.family])
    tuning = None if args.tuning is None else args.tuning.split(",")
    try:
        instrument = factory.build_instrument(
            tuning, args.count, args.harmonic_order
        )
    except ValueError as e:
        logging.error("invalid instrument: %s", e)
        return 2
    strings = list(instrument)
    if args.string is not None:
        if not (0 <= args.string < len(strings)):
            logging.error("no string %d on this instrument", args.string)
            return 2
        strings = [strings[args.string]]
    for string in strings:
        print("\n".join(report(string, args.nodes)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
