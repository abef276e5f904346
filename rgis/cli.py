"""Command-line options of the viewer."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

DEFAULT_MSAA = "4"

_MSAA_HELP = (
    "Multi-Sample Anti-Aliasing sample count. Setting the sample count higher will "
    "result in smoother edges, but it will also increase the cost to render those "
    "edges. The range should generally be somewhere between 1 (no multi sampling, "
    "but cheap) to 8 (crisp but expensive)."
)


@dataclass(frozen=True)
class Values:
    """Parsed command-line values."""

    msaa_sample_count: int


def _u32(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid digit found in string: {text!r}") from None
    if not 0 <= value <= 0xFFFFFFFF:
        raise argparse.ArgumentTypeError(f"{value} is not in 0..=4294967295")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rgis", description="Geospatial data viewer")
    parser.add_argument(
        "--msaa-sample-count",
        dest="msaa_sample_count",
        type=_u32,
        default=DEFAULT_MSAA,
        metavar="MSAA SAMPLE COUNT",
        help=_MSAA_HELP,
    )
    return parser


def run(argv: Optional[Sequence[str]] = None) -> Values:
    """Parse command-line arguments; exits on invalid input."""
    namespace = _parser().parse_args(argv)
    return Values(msaa_sample_count=namespace.msaa_sample_count)