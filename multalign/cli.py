"""
Command line parsing and logging setup for multalign.

The parser takes one structure file per alignment row plus a JSON block
description, and options for residue translation and output. __main__.py
runs the command.
"""

import argparse
import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def setup_logging(verbose: int = 0) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
    """
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:  # verbose >= 2
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # Set level specifically for our package
    logging.getLogger("multalign").setLevel(level)


def validate_file_path(input_path: str) -> Path:
    """Validate file_path and readability"""
    file_path = Path(input_path)
    checks = [
        (lambda: file_path.exists(), "Path does not exist"),
        (lambda: file_path.is_file(), "Not a valid file"),
        (lambda: os.access(file_path, os.R_OK), "No read permission"),
        (lambda: file_path.stat().st_size > 0, "File is empty"),
    ]
    for condition, error_message in checks:
        if not condition():
            raise argparse.ArgumentTypeError(f"File Validation Error: {error_message}")
    return file_path


def get_version() -> str:
    """Get version from package metadata"""
    try:
        return version("multalign")
    except PackageNotFoundError:
        return "0.0.1"  # Fallback for development


def build_parser() -> argparse.ArgumentParser:
    """Assemble command-line argument processing"""
    parser = argparse.ArgumentParser(
        prog="multalign",
        description="Render a multiple structure alignment as a sequence alignment",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=get_version(),
        help="View multalign version number",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (-v for INFO, -vv for DEBUG/trace)",
    )

    # Input arguments
    parser.add_argument(
        "structures",
        nargs="+",
        type=validate_file_path,
        help="Structure files, one per alignment row",
    )
    parser.add_argument(
        "-b",
        "--blocks",
        required=True,
        type=validate_file_path,
        help="JSON block description indexing the structures' residue arrays",
    )
    parser.add_argument(
        "-c",
        "--chain",
        action="append",
        dest="chains",
        help="Chain to use per structure, in structure order (default: all chains)",
    )

    # Translation options
    parser.add_argument(
        "--strict-codes",
        action="store_true",
        help="Fail on residues without a one-letter code instead of using a placeholder",
    )
    parser.add_argument(
        "--placeholder",
        default="X",
        help="One-letter placeholder for unknown residues (default: X)",
    )

    # Output options
    parser.add_argument(
        "--width",
        type=int,
        default=60,
        help="Line width of the printed alignment (default: 60)",
    )
    parser.add_argument(
        "--fasta",
        type=Path,
        help="Write the sequence alignment to this FASTA file",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        help="Write the per-column alignment table to this CSV file",
    )
    parser.add_argument(
        "--column",
        type=int,
        action="append",
        dest="columns",
        help="Report the block and aligned residues at a sequence alignment column",
    )
    return parser


def arg_parser(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line arguments"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.chains is not None and len(args.chains) != len(args.structures):
        parser.error(
            f"--chain given {len(args.chains)} times for {len(args.structures)} structures"
        )
    if len(args.placeholder) != 1:
        parser.error("--placeholder must be a single character")
    if args.width <= 0:
        parser.error(f"--width must be positive, got {args.width}")
    return args
